import math
import unittest

import numpy as np

from rubik_anim.animation import Phase, TurnAnimator, ease_in_out_cubic
from rubik_anim.config import EngineConfig
from rubik_anim.geometry import QUARTER_TURN, ROTATION_SEQUENCE, Face


def _animator(**overrides):
    params = {"rotation_duration": 1.0, "rotation_pause": 1.0, "sequence_pause": 1.0}
    params.update(overrides)
    commits = []
    return TurnAnimator(EngineConfig(**params), on_commit=commits.append), commits


class TestEasing(unittest.TestCase):
    def test_boundaries(self):
        self.assertEqual(ease_in_out_cubic(0.0), 0.0)
        self.assertEqual(ease_in_out_cubic(1.0), 1.0)
        self.assertEqual(ease_in_out_cubic(0.5), 0.5)
        self.assertEqual(ease_in_out_cubic(-2.0), 0.0)
        self.assertEqual(ease_in_out_cubic(3.0), 1.0)

    def test_monotonic(self):
        values = [ease_in_out_cubic(t) for t in np.linspace(0.0, 1.0, 1001)]
        self.assertTrue(all(b >= a for a, b in zip(values[:-1], values[1:])))


class TestTurnAnimator(unittest.TestCase):
    def test_starts_idle_then_rotates_first_face(self):
        anim, _ = _animator()
        self.assertEqual(anim.phase, Phase.IDLE)
        self.assertIsNone(anim.state.current_face)

        events = anim.advance(0.0)
        self.assertEqual([e.kind for e in events], ["start"])
        self.assertEqual(anim.phase, Phase.ROTATING)
        self.assertEqual(anim.active_face, Face.RIGHT)
        self.assertEqual(anim.live_angle(), 0.0)

    def test_start_delay_holds_idle(self):
        anim, _ = _animator(start_delay=1.0)
        anim.advance(0.5)
        self.assertEqual(anim.phase, Phase.IDLE)
        anim.advance(0.5)
        self.assertEqual(anim.phase, Phase.ROTATING)

    def test_mid_turn_angle_is_eased(self):
        anim, commits = _animator()
        anim.advance(0.5)
        self.assertAlmostEqual(anim.state.progress, 0.5)
        self.assertAlmostEqual(anim.live_angle(), QUARTER_TURN / 2)
        anim.advance(0.25)
        self.assertAlmostEqual(anim.live_angle(), QUARTER_TURN * ease_in_out_cubic(0.75))
        self.assertEqual(commits, [])

    def test_commit_advances_sequence_index(self):
        anim, commits = _animator()
        events = anim.advance(1.0)
        self.assertEqual(commits, [Face.RIGHT])
        self.assertEqual([e.kind for e in events], ["start", "commit"])
        self.assertEqual(anim.phase, Phase.ROTATION_PAUSE)
        self.assertEqual(anim.state.sequence_index, 1)
        self.assertIsNone(anim.active_face)
        self.assertEqual(anim.live_angle(), 0.0)

    def test_commit_ends_the_advance(self):
        anim, commits = _animator()
        events = anim.advance(1.5)
        self.assertEqual(commits, [Face.RIGHT])
        self.assertEqual(events[-1].kind, "commit")
        self.assertEqual(anim.phase, Phase.ROTATION_PAUSE)
        self.assertEqual(anim.state.elapsed, 0.0)

    def test_large_delta_commits_at_most_one_turn(self):
        for overshoot in (False, True):
            anim, commits = _animator(overshoot=overshoot)
            anim.advance(3600.0)
            self.assertEqual(commits, [Face.RIGHT], msg=f"overshoot={overshoot}")
            self.assertEqual(anim.phase, Phase.ROTATION_PAUSE)

            events = anim.advance(3600.0)
            self.assertEqual([e.kind for e in events], ["start"])
            self.assertEqual(anim.active_face, Face.FRONT)
            self.assertEqual(anim.live_angle(), 0.0)

            anim.advance(3600.0)
            self.assertEqual(commits, [Face.RIGHT, Face.FRONT])

    def test_pause_then_next_face(self):
        anim, commits = _animator()
        anim.advance(1.0)
        anim.advance(1.0)
        state = anim.state
        self.assertEqual(state.phase, Phase.ROTATING)
        self.assertEqual(state.current_face, Face.FRONT)
        self.assertEqual(state.sequence_index, 1)
        self.assertEqual(state.progress, 0.0)
        self.assertEqual(commits, [Face.RIGHT])

    def test_full_cycle_enters_sequence_pause(self):
        anim, commits = _animator()
        anim.advance(1.0)
        for _ in range(5):
            anim.advance(1.0)  # pause
            anim.advance(1.0)  # turn
        self.assertEqual(commits, list(ROTATION_SEQUENCE))
        self.assertEqual(anim.state.sequence_index, 0)
        self.assertEqual(anim.phase, Phase.ROTATION_PAUSE)

        events = anim.advance(1.0)
        self.assertEqual([e.kind for e in events], ["sequence_pause"])
        self.assertEqual(anim.phase, Phase.SEQUENCE_PAUSE)

        anim.advance(0.5)
        self.assertEqual(anim.phase, Phase.SEQUENCE_PAUSE)
        anim.advance(0.5)
        self.assertEqual(anim.phase, Phase.ROTATING)
        self.assertEqual(anim.active_face, Face.RIGHT)
        self.assertEqual(anim.state.sequence_index, 0)
        self.assertEqual(len(commits), 6)

    def test_overshoot_sub_phases(self):
        anim, commits = _animator(overshoot=True, overshoot_duration=0.5, overshoot_degrees=3.0)
        delta = math.radians(3.0)

        anim.advance(1.0)
        self.assertEqual(anim.phase, Phase.OVERSHOOT)
        self.assertAlmostEqual(anim.live_angle(), QUARTER_TURN)
        self.assertEqual(commits, [])

        anim.advance(0.25)
        self.assertAlmostEqual(anim.live_angle(), QUARTER_TURN + delta * 0.5)

        anim.advance(0.25)
        self.assertEqual(anim.phase, Phase.OVERSHOOT_RETURN)
        self.assertAlmostEqual(anim.live_angle(), QUARTER_TURN + delta)
        self.assertEqual(anim.active_face, Face.RIGHT)

        anim.advance(0.25)
        self.assertAlmostEqual(anim.live_angle(), QUARTER_TURN + delta * 0.5)

        anim.advance(0.25)
        self.assertEqual(commits, [Face.RIGHT])
        self.assertEqual(anim.phase, Phase.ROTATION_PAUSE)

    def test_negative_delta_is_clamped(self):
        anim, _ = _animator()
        anim.advance(0.4)
        before = anim.state
        self.assertEqual(anim.advance(-3.0), [])
        self.assertEqual(anim.state, before)

    def test_turn_progress_independent_of_slicing(self):
        whole, _ = _animator(rotation_duration=0.85)
        sliced, _ = _animator(rotation_duration=0.85)
        whole.advance(0.6)
        for _ in range(6):
            sliced.advance(0.1)
        self.assertEqual(whole.phase, sliced.phase)
        self.assertAlmostEqual(whole.state.progress, sliced.state.progress, places=9)
        self.assertAlmostEqual(whole.live_angle(), sliced.live_angle(), places=9)


if __name__ == "__main__":
    unittest.main()
