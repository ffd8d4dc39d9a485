from __future__ import annotations

from typing import Iterable, List, Optional

from sequencer_core import DEFAULT_CLIPBOARD_DURATION_MS, MAX_FRAME_NAME_LEN, Frame, coerce_u16


def _clean_name(name: str) -> str:
    return str(name).replace("\t", " ").replace("\r", " ").replace("\n", " ")


def frame_to_clipboard_line(frame: Frame) -> str:
    fields = [_clean_name(frame.name), str(int(frame.duration_ms))]
    fields.extend(str(v) for v in frame.targets)
    if not frame.targets:
        # a lone empty target field keeps the line at three fields
        fields.append("")
    return "\t".join(fields)


def frames_to_clipboard_text(frames: Iterable[Frame]) -> str:
    return "".join(frame_to_clipboard_line(frame) + "\n" for frame in frames)


def frame_from_clipboard_line(line: str, channel_count: Optional[int] = None) -> Optional[Frame]:
    fields = line.split("\t")
    if len(fields) < 3:
        return None

    frame = Frame(
        name=fields[0][:MAX_FRAME_NAME_LEN],
        duration_ms=coerce_u16(fields[1], DEFAULT_CLIPBOARD_DURATION_MS),
    )
    target_fields = fields[2:]
    if target_fields == [""]:
        target_fields = []
    if channel_count is not None:
        target_fields = target_fields[: max(0, int(channel_count))]
    frame.set_all_targets(coerce_u16(f, 0) for f in target_fields)
    return frame


def frames_from_clipboard_text(text: str, channel_count: Optional[int] = None) -> List[Frame]:
    frames: List[Frame] = []
    for line in (text or "").split("\n"):
        if line.endswith("\r"):
            line = line[:-1]
        frame = frame_from_clipboard_line(line, channel_count)
        if frame is not None:
            frames.append(frame)
    return frames
