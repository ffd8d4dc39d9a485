from __future__ import annotations

from pathlib import Path
from typing import Optional, Tuple

import numpy as np

from sequencer_core import Frame, Sequence, U16_MAX


def save_sequence_npz(path: str | Path, sequence: Sequence, channel_count: int) -> None:
    """
    Write one sequence as a dense (frames x channels) uint16 archive.

    Channels the frame does not carry are stored as 0, matching Frame.target().
    """
    if channel_count < 1:
        raise ValueError("channel_count must be >= 1")

    n = len(sequence.frames)
    targets = np.zeros((n, channel_count), dtype=np.uint16)
    for i, frame in enumerate(sequence.frames):
        targets[i, :] = [frame.target(ch) for ch in range(channel_count)]

    np.savez(
        Path(path),
        sequence_name=np.array(sequence.name, dtype=np.str_),
        frame_names=np.array([f.name for f in sequence.frames], dtype=np.str_).reshape(-1),
        durations=np.array([int(f.duration_ms) for f in sequence.frames], dtype=np.uint16).reshape(-1),
        targets=targets,
    )


def load_sequence_npz(path: str | Path) -> Tuple[Optional[Sequence], str]:
    """
    Returns (sequence, error_message). If ok, error_message == "ok".
    Checks:
      - arrays exist
      - frame_names, durations and targets agree on the frame count
      - targets is 2D
      - durations and targets in 0..65535
    """
    p = Path(path)

    if not p.exists():
        return None, f"Sequence file not found: {p}"

    try:
        with np.load(p, allow_pickle=False) as z:
            for key in ("sequence_name", "frame_names", "durations", "targets"):
                if key not in z:
                    return None, "NPZ must contain arrays: sequence_name, frame_names, durations, targets"

            name = str(z["sequence_name"])
            frame_names = np.asarray(z["frame_names"]).reshape(-1)
            durations = np.asarray(z["durations"]).reshape(-1)
            targets = np.asarray(z["targets"])
    except Exception as e:
        return None, f"Failed to read NPZ: {e}"

    n = int(frame_names.shape[0])
    if durations.shape[0] != n:
        return None, "frame_names and durations must have the same length"

    if targets.ndim != 2:
        if targets.size == 0 and n == 0:
            targets = targets.reshape(0, 0)
        else:
            return None, "targets must be a 2D array (frames x channels)"
    if targets.shape[0] != n:
        return None, "targets must have one row per frame"

    try:
        durations_i = durations.astype(np.int64, copy=False)
        targets_i = targets.astype(np.int64, copy=False)
        if np.any(durations_i < 0) or np.any(durations_i > U16_MAX):
            return None, f"durations must be in 0..{U16_MAX}"
        if np.any(targets_i < 0) or np.any(targets_i > U16_MAX):
            return None, f"targets must be in 0..{U16_MAX}"
    except Exception as e:
        return None, f"Failed checking duration/target bounds: {e}"

    frames = [
        Frame(
            name=str(frame_names[i]),
            duration_ms=int(durations_i[i]),
            targets=tuple(int(v) for v in targets_i[i].tolist()),
        )
        for i in range(n)
    ]
    return Sequence(name=name, frames=frames), "ok"
