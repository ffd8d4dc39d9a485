from __future__ import annotations

from dataclasses import dataclass, field
from typing import Iterable, List, Tuple

from .math_utils import coerce_u16


DEFAULT_CLIPBOARD_DURATION_MS = 500
MAX_FRAME_NAME_LEN = 80


@dataclass
class Frame:
    """
    A named snapshot of per-channel targets held for duration_ms.

    targets is never edited in place; set_all_targets swaps in a new tuple.
    Reads past the end of targets (or before index 0) return 0.
    """
    name: str = ""
    duration_ms: int = 0
    targets: Tuple[int, ...] = ()

    def __post_init__(self) -> None:
        self.targets = tuple(int(v) for v in self.targets)

    def target(self, channel: int) -> int:
        if 0 <= channel < len(self.targets):
            return self.targets[channel]
        return 0

    def set_all_targets(self, values: Iterable[int]) -> None:
        self.targets = tuple(int(v) for v in values)

    def targets_as_text(self) -> str:
        return " ".join(str(v) for v in self.targets)

    def parse_targets_from_text(self, text: str, channel_count: int) -> None:
        values = [0] * max(0, int(channel_count))
        for i, token in enumerate((text or "").split()[: len(values)]):
            values[i] = coerce_u16(token, 0)
        self.set_all_targets(values)


@dataclass
class Sequence:
    name: str = ""
    frames: List[Frame] = field(default_factory=list)
