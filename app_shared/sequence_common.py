from __future__ import annotations

import json
from pathlib import Path
from typing import Any, Dict, List


def read_json_file(path: Path) -> Dict[str, Any]:
    return json.loads(path.read_text())


def file_exists(path: Path) -> bool:
    try:
        return path.exists()
    except Exception:
        return False


def summarize_sequence(sequence: Any) -> Dict[str, Any]:
    return {
        "name": sequence.name,
        "num_frames": len(sequence.frames),
        "duration_ms": sum(int(f.duration_ms) for f in sequence.frames),
    }


def summarize_compiled(compiled: Any) -> Dict[str, Any]:
    return {
        "sequence_name": compiled.sequence_name,
        "num_frames": int(compiled.frame_count),
        "num_subroutines": len(compiled.subroutine_names),
        "subroutines": list(compiled.subroutine_names),
        "script_lines": len(compiled.script.splitlines()),
    }


def frames_to_json(sequence: Any) -> List[Dict[str, Any]]:
    return [
        {"name": f.name, "duration_ms": int(f.duration_ms), "targets": list(f.targets)}
        for f in sequence.frames
    ]
