from __future__ import annotations

import logging
from typing import Dict, Iterable, Iterator, List, Optional, Sequence, Tuple

from .channel_lists import ChannelListRegistry, frame_subroutine_name
from .frame_models import Frame

logger = logging.getLogger(__name__)

INDENT = "  "


def comment_text(text: str) -> str:
    return str(text).replace("\r", " ").replace("\n", " ")


def needed_channels_for_frames(
    frames: Iterable[Frame],
    enabled_channels: Sequence[int],
) -> Iterator[Tuple[List[int], List[int]]]:
    channels = [int(ch) for ch in enabled_channels]
    last_targets: Optional[Dict[int, int]] = None

    for frame in frames:
        needed: List[int] = []
        changed: List[int] = []
        for ch in channels:
            value = frame.target(ch)
            if last_targets is None or value != last_targets[ch]:
                needed.append(ch)
                changed.append(value)

        last_targets = {ch: frame.target(ch) for ch in channels}
        yield needed, changed


def _frame_line(
    frame: Frame,
    needed: List[int],
    changed: List[int],
    targets_per_line: Optional[int],
) -> str:
    line = f"{INDENT}{int(frame.duration_ms)} "
    if not needed:
        line += "delay"
    else:
        on_this_line = 0
        for value in changed:
            # wrap before a value only; the call never starts a line
            if targets_per_line is not None and on_this_line == targets_per_line:
                line += "\n" + INDENT
                on_this_line = 0
            on_this_line += 1
            line += f"{value} "
        line += frame_subroutine_name(needed)
    return line + f" # {comment_text(frame.name)}\n"


def _zip_frames(
    frames: Iterable[Frame],
    enabled_channels: Sequence[int],
) -> Iterator[Tuple[Frame, Tuple[List[int], List[int]]]]:
    frame_list = list(frames)
    return zip(frame_list, needed_channels_for_frames(frame_list, enabled_channels))


def generate_frame_script(
    frames: Iterable[Frame],
    enabled_channels: Sequence[int],
    registry: ChannelListRegistry,
    *,
    targets_per_line: Optional[int] = None,
) -> str:
    if targets_per_line is not None and int(targets_per_line) < 1:
        targets_per_line = None

    lines: List[str] = []
    for frame, (needed, changed) in _zip_frames(frames, enabled_channels):
        if changed and registry.register(needed):
            logger.debug("frame %r needs new subroutine %s", frame.name, frame_subroutine_name(needed))
        lines.append(_frame_line(frame, needed, changed, targets_per_line))
    return "".join(lines)
