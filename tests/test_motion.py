"""Tests for the motion controller (drag, throw, friction, bounce)."""

import unittest

from asciipet.model.motion import MotionController

WINDOW = (50, 40)
SCREEN = (1000, 800)


def free_step(ctrl, pos):
    return ctrl.step(pressed=False, pointer=(0, 0), window_pos=pos, window_size=WINDOW, screen_size=SCREEN)


class TestFreeFlight(unittest.TestCase):

    def setUp(self):
        self.ctrl = MotionController()

    def test_inertia_then_friction(self):
        self.ctrl.state.velocity_x = 10.0
        step = free_step(self.ctrl, (100, 100))
        self.assertEqual(step.position, (110, 100))
        self.assertTrue(step.moved)
        self.assertAlmostEqual(self.ctrl.state.velocity_x, 9.5)
        self.assertEqual(self.ctrl.state.velocity_y, 0.0)

    def test_friction_compounds(self):
        self.ctrl.state.velocity_x = 10.0
        pos = (100, 100)
        for _ in range(3):
            pos = free_step(self.ctrl, pos).position
        self.assertAlmostEqual(self.ctrl.state.velocity_x, 10.0 * 0.95 ** 3)
        # 100 + 10 + int(9.5) + int(9.025)
        self.assertEqual(pos, (128, 100))

    def test_truncates_toward_zero(self):
        self.ctrl.state.velocity_x = -2.7
        self.ctrl.state.velocity_y = 1.9
        step = free_step(self.ctrl, (100, 100))
        self.assertEqual(step.position, (98, 101))

    def test_left_wall_bounce(self):
        self.ctrl.state.velocity_x = -5.0
        step = free_step(self.ctrl, (0, 100))
        self.assertEqual(step.position, (0, 100))
        # Friction first (-4.75), then reversed with 40 % loss
        self.assertAlmostEqual(self.ctrl.state.velocity_x, 2.85)
        self.assertGreater(self.ctrl.state.velocity_x, 0)

    def test_right_wall_bounce(self):
        self.ctrl.state.velocity_x = 20.0
        step = free_step(self.ctrl, (940, 100))
        self.assertEqual(step.position, (SCREEN[0] - WINDOW[0], 100))
        self.assertAlmostEqual(self.ctrl.state.velocity_x, -11.4)

    def test_top_and_bottom_walls(self):
        self.ctrl.state.velocity_y = -8.0
        self.assertEqual(free_step(self.ctrl, (100, 3)).position, (100, 0))
        self.assertGreater(self.ctrl.state.velocity_y, 0)

        self.ctrl.state.velocity_y = 30.0
        self.assertEqual(free_step(self.ctrl, (100, 750)).position, (100, SCREEN[1] - WINDOW[1]))
        self.assertLess(self.ctrl.state.velocity_y, 0)

    def test_corner_bounces_both_axes(self):
        self.ctrl.state.velocity_x = -10.0
        self.ctrl.state.velocity_y = -10.0
        step = free_step(self.ctrl, (2, 2))
        self.assertEqual(step.position, (0, 0))
        self.assertAlmostEqual(self.ctrl.state.velocity_x, 5.7)
        self.assertAlmostEqual(self.ctrl.state.velocity_y, 5.7)

    def test_snap_to_rest(self):
        self.ctrl.state.velocity_x = 0.05
        self.ctrl.state.velocity_y = 0.05
        step = free_step(self.ctrl, (100, 100))
        self.assertEqual(self.ctrl.state.velocity, (0.0, 0.0))
        self.assertEqual(step.position, (100, 100))
        self.assertFalse(step.moved)
        self.assertTrue(self.ctrl.is_idle)

    def test_one_axis_above_threshold_keeps_moving(self):
        self.ctrl.state.velocity_x = 0.05
        self.ctrl.state.velocity_y = 0.5
        free_step(self.ctrl, (100, 100))
        self.assertAlmostEqual(self.ctrl.state.velocity_x, 0.0475)
        self.assertAlmostEqual(self.ctrl.state.velocity_y, 0.475)

    def test_comes_to_rest_eventually(self):
        self.ctrl.state.velocity_x = 25.0
        self.ctrl.state.velocity_y = -13.0
        pos = (500, 400)
        for _ in range(500):
            pos = free_step(self.ctrl, pos).position
            self.assertTrue(0 <= pos[0] <= SCREEN[0] - WINDOW[0])
            self.assertTrue(0 <= pos[1] <= SCREEN[1] - WINDOW[1])
        self.assertEqual(self.ctrl.state.velocity, (0.0, 0.0))
        self.assertFalse(self.ctrl.is_moving)

    def test_last_window_pos_is_final_position(self):
        self.ctrl.state.velocity_x = -5.0
        free_step(self.ctrl, (1, 100))
        self.assertEqual(self.ctrl.state.last_window_pos, (0, 100))


class TestDragging(unittest.TestCase):

    def setUp(self):
        self.ctrl = MotionController()

    def press(self, pointer, pos):
        return self.ctrl.step(pressed=True, pointer=pointer, window_pos=pos, window_size=WINDOW, screen_size=SCREEN)

    def test_press_records_anchor_without_moving(self):
        step = self.press((10, 12), (100, 100))
        self.assertTrue(self.ctrl.state.is_dragging)
        self.assertEqual(self.ctrl.state.drag_anchor, (10, 12))
        self.assertEqual(step.position, (100, 100))
        self.assertFalse(step.moved)
        self.assertTrue(self.ctrl.is_moving)

    def test_window_follows_pointer(self):
        self.press((10, 10), (100, 100))
        step = self.press((15, 12), (100, 100))
        self.assertEqual(step.position, (105, 102))
        self.assertEqual(self.ctrl.state.velocity, (5.0, 2.0))

    def test_velocity_is_last_flick(self):
        self.press((10, 10), (100, 100))
        pos = self.press((30, 10), (100, 100)).position   # +20
        pos = self.press((13, 10), pos).position          # +3
        self.assertEqual(pos, (123, 100))
        self.assertEqual(self.ctrl.state.velocity, (3.0, 0.0))

    def test_release_throws(self):
        self.press((10, 10), (100, 100))
        pos = self.press((15, 12), (100, 100)).position
        step = free_step(self.ctrl, pos)
        self.assertFalse(self.ctrl.state.is_dragging)
        self.assertEqual(step.position, (110, 104))
        self.assertAlmostEqual(self.ctrl.state.velocity_x, 4.75)
        self.assertAlmostEqual(self.ctrl.state.velocity_y, 1.9)

    def test_release_without_motion_rests(self):
        self.press((10, 10), (100, 100))
        self.press((10, 10), (100, 100))
        step = free_step(self.ctrl, (100, 100))
        self.assertFalse(step.moved)
        self.assertFalse(self.ctrl.is_moving)

    def test_drag_ignores_screen_edges(self):
        self.press((10, 10), (5, 5))
        step = self.press((0, 0), (5, 5))
        self.assertEqual(step.position, (-5, -5))

    def test_reset(self):
        self.press((1, 1), (0, 0))
        self.ctrl.reset()
        self.assertFalse(self.ctrl.state.is_dragging)
        self.assertEqual(self.ctrl.state.velocity, (0.0, 0.0))


if __name__ == '__main__':
    unittest.main()
