from __future__ import annotations

from typing import Sequence

from .channel_lists import frame_subroutine_name

SET_TARGET_INSTRUCTION = "servo"


def generate_frame_subroutine(channels: Sequence[int]) -> str:
    """
    Subroutine applying one needed-channel list, then delaying.

    The call site pushes: duration, value for channels[0], ..., value for
    channels[n-1]. The set-target instruction pops the top value, so the
    channels are applied last-pushed first, and the remaining duration feeds
    the delay.
    """
    script = f"sub {frame_subroutine_name(channels)}\n"
    for i in range(len(channels) - 1, -1, -1):
        script += f"  {int(channels[i])} {SET_TARGET_INSTRUCTION}\n"
    script += "  delay\n"
    script += "  return\n"
    return script
