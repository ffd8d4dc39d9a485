from __future__ import annotations

from typing import Any, List, Mapping, Optional, Tuple

from .frame_models import MAX_FRAME_NAME_LEN, Frame, Sequence
from .math_utils import U16_MAX


def _is_u16_int(v: Any) -> bool:
    return isinstance(v, int) and not isinstance(v, bool) and 0 <= v <= U16_MAX


def normalize_and_validate_frame(
    raw: Any,
    *,
    index: int = 0,
    channel_count: Optional[int] = None,
    label: str = "frame",
) -> Tuple[bool, Optional[Frame], str]:
    if not isinstance(raw, Mapping):
        return False, None, f"{label} must be an object"

    name = str(raw.get("name", "") or "").strip() or f"Frame {index + 1}"
    name = name[:MAX_FRAME_NAME_LEN]

    duration_ms = raw.get("duration_ms", None)
    if not _is_u16_int(duration_ms):
        return False, None, f"{label}.duration_ms must be an integer in 0..{U16_MAX}"

    frame = Frame(name=name, duration_ms=duration_ms)
    targets_raw = raw.get("targets", [])
    if isinstance(targets_raw, str):
        count = channel_count if channel_count is not None else len(targets_raw.split())
        frame.parse_targets_from_text(targets_raw, count)
        return True, frame, "ok"

    if not isinstance(targets_raw, list):
        return False, None, f"{label}.targets must be an array or a space-separated string"
    if channel_count is not None and len(targets_raw) > channel_count:
        return False, None, f"{label}.targets has more than {channel_count} values"

    for k, value in enumerate(targets_raw):
        if not _is_u16_int(value):
            return False, None, f"{label}.targets[{k}] must be an integer in 0..{U16_MAX}"
    frame.set_all_targets(targets_raw)
    return True, frame, "ok"


def normalize_and_validate_sequence(
    raw: Mapping[str, Any],
    *,
    channel_count: Optional[int] = None,
) -> Tuple[bool, Optional[Sequence], str]:
    if not isinstance(raw, Mapping):
        return False, None, "sequence must be an object"

    name = str(raw.get("name", "") or "").strip()
    if not name:
        return False, None, "name is required"

    frames_raw = raw.get("frames", [])
    if not isinstance(frames_raw, list):
        return False, None, "frames must be an array"

    frames: List[Frame] = []
    for i, frame_raw in enumerate(frames_raw):
        ok, frame, msg = normalize_and_validate_frame(
            frame_raw,
            index=i,
            channel_count=channel_count,
            label=f"frames[{i}]",
        )
        if not ok or frame is None:
            return False, None, msg
        frames.append(frame)

    return True, Sequence(name=name, frames=frames), "ok"
