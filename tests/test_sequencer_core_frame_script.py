from __future__ import annotations

import unittest

from sequencer_core import ChannelListRegistry, Frame, generate_frame_script, needed_channels_for_frames


class FrameScriptTests(unittest.TestCase):
    def test_two_frame_scenario(self) -> None:
        frames = [
            Frame(name="A", duration_ms=500, targets=(1000, 2000)),
            Frame(name="B", duration_ms=300, targets=(1000, 2500)),
        ]
        reg = ChannelListRegistry()
        body = generate_frame_script(frames, [0, 1], reg)
        self.assertEqual(body, "  500 1000 2000 frame_0_1 # A\n  300 2500 frame_1 # B\n")
        self.assertEqual(reg.lists, [(0, 1), (1,)])

    def test_first_frame_emits_every_enabled_channel(self) -> None:
        reg = ChannelListRegistry([[1]])
        body = generate_frame_script([Frame(name="only", duration_ms=20, targets=(0, 0, 0))], [0, 1, 2], reg)
        self.assertEqual(body, "  20 0 0 0 frame_0_1_2 # only\n")
        self.assertNotIn("delay", body)
        self.assertEqual(reg.lists, [(1,), (0, 1, 2)])

    def test_unchanged_frame_emits_delay(self) -> None:
        frames = [
            Frame(name="a", duration_ms=100, targets=(5, 6)),
            Frame(name="b", duration_ms=250, targets=(5, 6)),
        ]
        reg = ChannelListRegistry()
        lines = generate_frame_script(frames, [0, 1], reg).splitlines()
        self.assertEqual(lines[1], "  250 delay # b")
        self.assertEqual(len(reg), 1)

    def test_only_channel_two_changes(self) -> None:
        frames = [
            Frame(name="a", duration_ms=100, targets=(1, 2, 3, 4)),
            Frame(name="b", duration_ms=100, targets=(1, 2, 9, 4)),
        ]
        reg = ChannelListRegistry()
        lines = generate_frame_script(frames, [0, 1, 2, 3], reg).splitlines()
        self.assertEqual(lines[1], "  100 9 frame_2 # b")

    def test_disabled_channels_are_never_emitted(self) -> None:
        frames = [
            Frame(name="a", duration_ms=10, targets=(1, 2, 3)),
            Frame(name="b", duration_ms=10, targets=(1, 7, 4)),
        ]
        reg = ChannelListRegistry()
        lines = generate_frame_script(frames, [0, 2], reg).splitlines()
        self.assertEqual(lines, ["  10 1 3 frame_0_2 # a", "  10 4 frame_2 # b"])

    def test_short_target_array_reads_as_zero(self) -> None:
        frames = [
            Frame(name="a", duration_ms=10, targets=(1, 2, 3)),
            Frame(name="b", duration_ms=10, targets=(1,)),
        ]
        reg = ChannelListRegistry()
        lines = generate_frame_script(frames, [0, 1, 2], reg).splitlines()
        self.assertEqual(lines[1], "  10 0 0 frame_1_2 # b")

    def test_same_change_set_registers_once(self) -> None:
        frames = [
            Frame(name="f0", duration_ms=10, targets=(0, 0, 0, 0, 0, 0)),
            Frame(name="f1", duration_ms=10, targets=(0, 0, 1, 0, 0, 1)),
            Frame(name="f2", duration_ms=10, targets=(0, 0, 2, 0, 0, 2)),
        ]
        reg = ChannelListRegistry()
        generate_frame_script(frames, [0, 1, 2, 3, 4, 5], reg)
        self.assertEqual(reg.lists, [(0, 1, 2, 3, 4, 5), (2, 5)])

    def test_enabled_order_decides_list_order(self) -> None:
        frames = [
            Frame(name="f0", duration_ms=10, targets=(0, 0, 0, 0, 0, 0)),
            Frame(name="f1", duration_ms=10, targets=(0, 0, 1, 0, 0, 1)),
        ]
        forward = ChannelListRegistry()
        generate_frame_script(frames, [2, 5], forward)
        generate_frame_script(frames, [5, 2], forward)
        self.assertEqual(forward.lists, [(2, 5), (5, 2)])

    def test_empty_sequence_gives_empty_body(self) -> None:
        reg = ChannelListRegistry()
        self.assertEqual(generate_frame_script([], [0, 1], reg), "")
        self.assertEqual(len(reg), 0)

    def test_no_enabled_channels_only_delays(self) -> None:
        reg = ChannelListRegistry()
        body = generate_frame_script([Frame(name="x", duration_ms=40, targets=(1,))], [], reg)
        self.assertEqual(body, "  40 delay # x\n")
        self.assertEqual(len(reg), 0)

    def test_frame_name_newlines_stay_in_comment(self) -> None:
        reg = ChannelListRegistry()
        body = generate_frame_script([Frame(name="two\nlines", duration_ms=1, targets=(3,))], [0], reg)
        self.assertEqual(body, "  1 3 frame_0 # two lines\n")

    def test_wrapping_never_leaves_call_alone(self) -> None:
        reg = ChannelListRegistry()
        frames = [Frame(name="F", duration_ms=10, targets=(1, 2, 3))]
        body = generate_frame_script(frames, [0, 1, 2], reg, targets_per_line=2)
        self.assertEqual(body, "  10 1 2 \n  3 frame_0_1_2 # F\n")

        reg = ChannelListRegistry()
        frames = [Frame(name="G", duration_ms=10, targets=(1, 2))]
        body = generate_frame_script(frames, [0, 1], reg, targets_per_line=2)
        self.assertEqual(body, "  10 1 2 frame_0_1 # G\n")

    def test_needed_channels_snapshot_is_not_aliased(self) -> None:
        a = Frame(name="a", duration_ms=10, targets=(1, 2))
        b = Frame(name="b", duration_ms=10, targets=(1, 2))
        steps = needed_channels_for_frames([a, b], [0, 1])
        first = next(steps)
        a.set_all_targets([9, 9])
        second = next(steps)
        self.assertEqual(first, ([0, 1], [1, 2]))
        self.assertEqual(second, ([], []))


if __name__ == "__main__":
    unittest.main()
