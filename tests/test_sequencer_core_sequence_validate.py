from __future__ import annotations

import unittest

from sequencer_core import normalize_and_validate_frame, normalize_and_validate_sequence


class SequenceValidateTests(unittest.TestCase):
    def test_valid_sequence_builds(self) -> None:
        ok, seq, msg = normalize_and_validate_sequence(
            {
                "name": "Wave",
                "frames": [
                    {"name": "Home", "duration_ms": 500, "targets": [6000, 6000]},
                    {"duration_ms": 300, "targets": "6000 4800"},
                ],
            },
            channel_count=2,
        )
        self.assertTrue(ok)
        self.assertEqual(msg, "ok")
        assert seq is not None
        self.assertEqual(seq.name, "Wave")
        self.assertEqual(len(seq.frames), 2)
        self.assertEqual(seq.frames[1].name, "Frame 2")
        self.assertEqual(seq.frames[1].targets, (6000, 4800))

    def test_empty_frames_allowed(self) -> None:
        ok, seq, _msg = normalize_and_validate_sequence({"name": "Nothing yet"})
        self.assertTrue(ok)
        assert seq is not None
        self.assertEqual(seq.frames, [])

    def test_rejects_missing_name(self) -> None:
        ok, seq, msg = normalize_and_validate_sequence({"frames": []})
        self.assertFalse(ok)
        self.assertIsNone(seq)
        self.assertIn("name", msg)

    def test_rejects_out_of_range_target(self) -> None:
        ok, seq, msg = normalize_and_validate_sequence(
            {"name": "bad", "frames": [{"duration_ms": 10, "targets": [1, 70000]}]}
        )
        self.assertFalse(ok)
        self.assertIsNone(seq)
        self.assertIn("frames[0].targets[1]", msg)

    def test_rejects_too_many_targets(self) -> None:
        ok, _frame, msg = normalize_and_validate_frame({"duration_ms": 10, "targets": [1, 2, 3]}, channel_count=2)
        self.assertFalse(ok)
        self.assertIn("more than 2", msg)

    def test_rejects_bad_duration(self) -> None:
        for duration in (None, -1, 65536, "soon", True):
            ok, frame, msg = normalize_and_validate_frame({"duration_ms": duration, "targets": []})
            self.assertFalse(ok, duration)
            self.assertIsNone(frame)
            self.assertIn("duration_ms", msg)

    def test_rejects_non_integer_json_numbers(self) -> None:
        for value in (1.9, 12.0, "12"):
            ok, frame, msg = normalize_and_validate_frame({"duration_ms": 10, "targets": [value]})
            self.assertFalse(ok, value)
            self.assertIsNone(frame)
            self.assertIn("targets[0]", msg)

            ok, frame, msg = normalize_and_validate_frame({"duration_ms": value, "targets": []})
            self.assertFalse(ok, value)
            self.assertIn("duration_ms", msg)

    def test_text_targets_parse_leniently(self) -> None:
        ok, frame, _msg = normalize_and_validate_frame(
            {"name": "x" * 100, "duration_ms": 20, "targets": "1 oops 3"},
            channel_count=4,
        )
        self.assertTrue(ok)
        assert frame is not None
        self.assertEqual(frame.targets, (1, 0, 3, 0))
        self.assertEqual(len(frame.name), 80)


if __name__ == "__main__":
    unittest.main()
