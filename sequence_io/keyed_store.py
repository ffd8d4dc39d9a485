from __future__ import annotations

import functools
import json
import logging
from pathlib import Path
from typing import Any, Dict, List, Mapping

from sequencer_core import Frame, Sequence, parse_u16

logger = logging.getLogger(__name__)

SEQUENCES_KEY = "sequences"
FRAMES_KEY = "frames"


def frame_key_compare(x: str, y: str) -> int:
    """
    Numeric order for frame keys ("0002" before "0010").

    Keys that do not parse compare as equal to everything; sorted() keeps
    them in a stable but otherwise undefined position.
    """
    try:
        return parse_u16(x) - parse_u16(y)
    except (TypeError, ValueError):
        return 0


def sorted_frame_keys(keys: Any) -> List[str]:
    return sorted((str(k) for k in keys), key=functools.cmp_to_key(frame_key_compare))


def _read_tree(path: Path) -> Dict[str, Any]:
    if not path.exists():
        return {}
    try:
        raw = json.loads(path.read_text())
    except (OSError, ValueError) as e:
        logger.warning("could not read sequence store %s: %s", path, e)
        return {}
    if not isinstance(raw, dict):
        logger.warning("sequence store %s is not an object; ignoring it", path)
        return {}
    return raw


def _frame_from_node(key: str, node: Mapping[str, Any], channel_count: int) -> Frame:
    frame = Frame()

    name = node.get("name", None)
    frame.name = name if isinstance(name, str) else f"Frame {key}"

    duration = node.get("duration", None)
    if isinstance(duration, int) and not isinstance(duration, bool):
        frame.duration_ms = duration & 0xFFFF
    else:
        logger.warning("frame %s has no integer duration; using 0", key)

    targets = node.get("targets", "")
    frame.parse_targets_from_text(targets if isinstance(targets, str) else "", channel_count)
    return frame


def read_sequences(path: Path, channel_count: int) -> List[Sequence]:
    tree = _read_tree(path)
    sequences_node = tree.get(SEQUENCES_KEY, None)
    if not isinstance(sequences_node, dict):
        return []

    sequences: List[Sequence] = []
    for seq_key, seq_node in sequences_node.items():
        if not isinstance(seq_node, dict):
            continue

        name = seq_node.get("name", None)
        sequence = Sequence(name=name if isinstance(name, str) else f"Sequence {seq_key}")

        frames_node = seq_node.get(FRAMES_KEY, {})
        if not isinstance(frames_node, dict):
            frames_node = {}

        for frame_key in sorted_frame_keys(frames_node.keys()):
            frame_node = frames_node.get(frame_key, None)
            if not isinstance(frame_node, dict):
                continue
            sequence.frames.append(_frame_from_node(frame_key, frame_node, channel_count))

        sequences.append(sequence)

    logger.debug("read %d sequences from %s", len(sequences), path)
    return sequences


def save_sequences(path: Path, sequences: List[Sequence]) -> None:
    tree = _read_tree(path)

    sequences_node: Dict[str, Any] = {}
    for seq_index, sequence in enumerate(sequences):
        frames_node: Dict[str, Any] = {}
        for frame_index, frame in enumerate(sequence.frames):
            frames_node[f"{frame_index:04d}"] = {
                "name": frame.name,
                "duration": int(frame.duration_ms),
                "targets": frame.targets_as_text(),
            }
        sequences_node[f"{seq_index:02d}"] = {"name": sequence.name, FRAMES_KEY: frames_node}

    tree[SEQUENCES_KEY] = sequences_node
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(json.dumps(tree, indent=2))
