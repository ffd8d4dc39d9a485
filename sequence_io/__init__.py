from .clipboard_text import (
    frame_from_clipboard_line,
    frame_to_clipboard_line,
    frames_from_clipboard_text,
    frames_to_clipboard_text,
)
from .keyed_store import frame_key_compare, read_sequences, save_sequences, sorted_frame_keys
from .npz_store import load_sequence_npz, save_sequence_npz

__all__ = [
    "frame_from_clipboard_line",
    "frame_key_compare",
    "frame_to_clipboard_line",
    "frames_from_clipboard_text",
    "frames_to_clipboard_text",
    "load_sequence_npz",
    "read_sequences",
    "save_sequence_npz",
    "save_sequences",
    "sorted_frame_keys",
]
