from __future__ import annotations

import logging
import threading
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Dict, List, Optional, Tuple

from flask import Flask, jsonify, request

from app_shared.sequence_common import (
    file_exists,
    frames_to_json,
    read_json_file,
    summarize_compiled,
    summarize_sequence,
)
from sequence_io import frames_from_clipboard_text, frames_to_clipboard_text, read_sequences, save_sequences
from sequencer_core import (
    ChannelConfigView,
    Sequence,
    build_channel_config_view,
    compile_sequence,
    generate_subroutine_list,
    normalize_and_validate_frame,
    normalize_and_validate_sequence,
)

logger = logging.getLogger(__name__)

BASE_DIR = Path(__file__).resolve().parent
CONFIG_DIR = BASE_DIR / "config"
CONFIG_FILE = CONFIG_DIR / "config_file.json"
SEQUENCES_FILE = CONFIG_DIR / "sequences.json"


@dataclass
class SequencerConfig:
    servo_count: int
    enabled_channels: List[int]
    channel_names: Dict[int, str]
    targets_per_line: Optional[int]


class SequencerState:
    def __init__(self) -> None:
        self.config: Optional[SequencerConfig] = None
        self.sequences: List[Sequence] = []
        self._lock = threading.Lock()

    def load_config_from_disk(self, config_file: Optional[Path] = None) -> Tuple[bool, str]:
        path = config_file or CONFIG_FILE
        with self._lock:
            if not file_exists(path):
                return False, f"Missing {path}"
            try:
                cfg = read_json_file(path)
                if int(cfg.get("version", 0)) != 1:
                    return False, "config_file.json version must be 1"

                view: ChannelConfigView = build_channel_config_view(cfg)
                tpl_raw = cfg.get("targets_per_line", None)
                tpl = int(tpl_raw) if tpl_raw is not None else None
                self.config = SequencerConfig(
                    servo_count=view.servo_count,
                    enabled_channels=list(view.enabled_channels),
                    channel_names=dict(view.channel_names),
                    targets_per_line=tpl if tpl is not None and tpl >= 1 else None,
                )
                logger.info("loaded config: %d channels, enabled %s", view.servo_count, view.enabled_channels)
                return True, "ok"
            except Exception as e:
                return False, str(e)

    def load_sequences_from_disk(self, sequences_file: Optional[Path] = None) -> Tuple[bool, str]:
        with self._lock:
            if self.config is None:
                return False, "Config not loaded"
            self.sequences = read_sequences(sequences_file or SEQUENCES_FILE, self.config.servo_count)
            return True, "ok"

    def save_sequences_to_disk(self, sequences_file: Optional[Path] = None) -> Tuple[bool, str]:
        with self._lock:
            try:
                save_sequences(sequences_file or SEQUENCES_FILE, self.sequences)
            except OSError as e:
                return False, f"failed to save sequences: {e}"
            return True, "ok"

    def _sequence_at(self, index: int) -> Optional[Sequence]:
        if 0 <= index < len(self.sequences):
            return self.sequences[index]
        return None

    def list_sequences(self) -> List[Dict[str, Any]]:
        with self._lock:
            return [dict(summarize_sequence(s), index=i) for i, s in enumerate(self.sequences)]

    def get_sequence(self, index: int) -> Tuple[bool, Dict[str, Any], str]:
        with self._lock:
            seq = self._sequence_at(index)
            if seq is None:
                return False, {}, "sequence not found"
            return True, {"name": seq.name, "frames": frames_to_json(seq)}, "ok"

    def add_sequence(self, raw: Dict[str, Any]) -> Tuple[bool, Dict[str, Any], str]:
        with self._lock:
            if self.config is None:
                return False, {}, "Config not loaded"
            channel_count = self.config.servo_count

        ok, seq, msg = normalize_and_validate_sequence(raw, channel_count=channel_count)
        if not ok or seq is None:
            return False, {}, msg

        with self._lock:
            self.sequences.append(seq)
            return True, dict(summarize_sequence(seq), index=len(self.sequences) - 1), "ok"

    def delete_sequence(self, index: int) -> Tuple[bool, str]:
        with self._lock:
            if self._sequence_at(index) is None:
                return False, "sequence not found"
            del self.sequences[index]
            return True, "ok"

    def append_frame(self, index: int, raw: Dict[str, Any]) -> Tuple[bool, Dict[str, Any], str]:
        with self._lock:
            if self.config is None:
                return False, {}, "Config not loaded"
            seq = self._sequence_at(index)
            if seq is None:
                return False, {}, "sequence not found"

            ok, frame, msg = normalize_and_validate_frame(
                raw,
                index=len(seq.frames),
                channel_count=self.config.servo_count,
            )
            if not ok or frame is None:
                return False, {}, msg
            seq.frames.append(frame)
            return True, summarize_sequence(seq), "ok"

    def import_clipboard(self, index: int, text: str) -> Tuple[bool, Dict[str, Any], str]:
        with self._lock:
            if self.config is None:
                return False, {}, "Config not loaded"
            seq = self._sequence_at(index)
            if seq is None:
                return False, {}, "sequence not found"

            frames = frames_from_clipboard_text(text, channel_count=self.config.servo_count)
            seq.frames.extend(frames)
            return True, dict(summarize_sequence(seq), imported=len(frames)), "ok"

    def export_clipboard(self, index: int) -> Tuple[bool, str, str]:
        with self._lock:
            seq = self._sequence_at(index)
            if seq is None:
                return False, "", "sequence not found"
            return True, frames_to_clipboard_text(seq.frames), "ok"

    def looped_script(self, index: int) -> Tuple[bool, Dict[str, Any], str]:
        with self._lock:
            if self.config is None:
                return False, {}, "Config not loaded"
            seq = self._sequence_at(index)
            if seq is None:
                return False, {}, "sequence not found"

            compiled = compile_sequence(
                seq,
                self.config.enabled_channels,
                targets_per_line=self.config.targets_per_line,
            )
            return True, {"script": compiled.script, "summary": summarize_compiled(compiled)}, "ok"

    def subroutine_listing(self) -> Tuple[bool, Dict[str, Any], str]:
        with self._lock:
            if self.config is None:
                return False, {}, "Config not loaded"
            script = generate_subroutine_list(
                self.sequences,
                self.config.enabled_channels,
                targets_per_line=self.config.targets_per_line,
            )
            return True, {"script": script, "num_sequences": len(self.sequences)}, "ok"

    def status(self) -> Dict[str, Any]:
        with self._lock:
            return {
                "config_loaded": self.config is not None,
                "servo_count": self.config.servo_count if self.config is not None else None,
                "enabled_channels": list(self.config.enabled_channels) if self.config is not None else [],
                "sequence_count": len(self.sequences),
            }


app = Flask(__name__)
state = SequencerState()


def _error(msg: str, code: int = 400):
    return jsonify({"ok": False, "error": msg}), code


def _code_for(msg: str) -> int:
    return 404 if msg == "sequence not found" else 400


@app.get("/api/status")
def api_status():
    return jsonify(state.status())


@app.post("/api/load_config")
def api_load_config():
    ok, msg = state.load_config_from_disk()
    code = 200 if ok else 400
    return jsonify({"ok": ok, "message": msg, "status": state.status()}), code


@app.post("/api/load_sequences")
def api_load_sequences():
    ok, msg = state.load_sequences_from_disk()
    code = 200 if ok else 400
    return jsonify({"ok": ok, "message": msg, "status": state.status()}), code


@app.post("/api/save_sequences")
def api_save_sequences():
    ok, msg = state.save_sequences_to_disk()
    code = 200 if ok else 500
    return jsonify({"ok": ok, "message": msg}), code


@app.get("/api/sequences")
def api_sequences_get():
    return jsonify({"ok": True, "sequences": state.list_sequences()})


@app.post("/api/sequences")
def api_sequences_post():
    data = request.get_json(force=True)
    if not isinstance(data, dict):
        return _error("request body must be a JSON object")
    ok, summary, msg = state.add_sequence(data)
    if not ok:
        return _error(msg)
    return jsonify({"ok": True, "sequence": summary})


@app.get("/api/sequences/<int:index>")
def api_sequence_get(index: int):
    ok, payload, msg = state.get_sequence(index)
    if not ok:
        return _error(msg, _code_for(msg))
    return jsonify({"ok": True, "sequence": payload})


@app.delete("/api/sequences/<int:index>")
def api_sequence_delete(index: int):
    ok, msg = state.delete_sequence(index)
    if not ok:
        return _error(msg, _code_for(msg))
    return jsonify({"ok": True})


@app.post("/api/sequences/<int:index>/frames")
def api_sequence_frames_post(index: int):
    data = request.get_json(force=True)
    if not isinstance(data, dict):
        return _error("request body must be a JSON object")
    ok, summary, msg = state.append_frame(index, data)
    if not ok:
        return _error(msg, _code_for(msg))
    return jsonify({"ok": True, "sequence": summary})


@app.get("/api/sequences/<int:index>/clipboard")
def api_sequence_clipboard_get(index: int):
    ok, text, msg = state.export_clipboard(index)
    if not ok:
        return _error(msg, _code_for(msg))
    return jsonify({"ok": True, "text": text})


@app.post("/api/sequences/<int:index>/clipboard")
def api_sequence_clipboard_post(index: int):
    data = request.get_json(force=True)
    if not isinstance(data, dict) or not isinstance(data.get("text", None), str):
        return _error("request body must be a JSON object with a 'text' string")
    ok, summary, msg = state.import_clipboard(index, data["text"])
    if not ok:
        return _error(msg, _code_for(msg))
    return jsonify({"ok": True, "sequence": summary})


@app.get("/api/sequences/<int:index>/script")
def api_sequence_script(index: int):
    ok, payload, msg = state.looped_script(index)
    if not ok:
        return _error(msg, _code_for(msg))
    return jsonify(dict(payload, ok=True))


@app.get("/api/script/subroutines")
def api_script_subroutines():
    ok, payload, msg = state.subroutine_listing()
    if not ok:
        return _error(msg)
    return jsonify(dict(payload, ok=True))


if __name__ == "__main__":
    logging.basicConfig(level=logging.INFO, format="%(asctime)s %(levelname)s %(name)s: %(message)s")
    app.run(host="0.0.0.0", port=5003, debug=True)
