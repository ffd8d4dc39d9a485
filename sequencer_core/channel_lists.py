from __future__ import annotations

import logging
from typing import Iterable, Iterator, List, Optional, Sequence, Tuple

logger = logging.getLogger(__name__)

ChannelList = Tuple[int, ...]


def frame_subroutine_name(channels: Sequence[int]) -> str:
    """
    Name of the subroutine that applies exactly these channels, e.g. frame_0_3_4.

    Order is kept as given: [4, 3] and [3, 4] expect their values on the
    stack in different orders and so get different names.
    """
    if len(channels) == 0:
        raise ValueError("frame_subroutine_name: channels must be non-empty")
    return "frame_" + "_".join(str(int(ch)) for ch in channels)


def same_channel_list(a: Sequence[int], b: Sequence[int]) -> bool:
    if len(a) != len(b):
        return False
    for x, y in zip(a, b):
        if int(x) != int(y):
            return False
    return True


class ChannelListRegistry:
    """
    Distinct needed-channel lists in first-seen order.

    Not thread-safe; give each compilation its own registry and merge()
    them when assembling a program.
    """

    def __init__(self, lists: Optional[Iterable[Sequence[int]]] = None) -> None:
        self._lists: List[ChannelList] = []
        for channels in lists or []:
            self.register(channels)

    @property
    def lists(self) -> List[ChannelList]:
        return list(self._lists)

    def find(self, channels: Sequence[int]) -> Optional[int]:
        for i, existing in enumerate(self._lists):
            if same_channel_list(existing, channels):
                return i
        return None

    def register(self, channels: Sequence[int]) -> bool:
        if self.find(channels) is not None:
            return False
        entry = tuple(int(ch) for ch in channels)
        self._lists.append(entry)
        logger.debug("registered channel list %s", frame_subroutine_name(entry) if entry else "<empty>")
        return True

    def merge(self, other: "ChannelListRegistry") -> int:
        added = 0
        for channels in other:
            if self.register(channels):
                added += 1
        return added

    def subroutine_names(self) -> List[str]:
        return [frame_subroutine_name(channels) for channels in self._lists]

    def __len__(self) -> int:
        return len(self._lists)

    def __iter__(self) -> Iterator[ChannelList]:
        return iter(list(self._lists))

    def __contains__(self, channels: object) -> bool:
        if not isinstance(channels, (list, tuple)):
            return False
        return self.find(channels) is not None
