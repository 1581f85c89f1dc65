import math
import unittest
from dataclasses import replace
from datetime import datetime, timezone

import numpy as np

from orrery.core.config import TIME_CFG
from orrery.core.kepler import date_to_julian_date
from orrery.core.timekeeping import (
    ClockState,
    FrameTimer,
    SimulationClock,
    TimeControl,
    format_speed,
    multiplier_to_slider,
    slider_to_multiplier,
)

J2000_MOMENT = datetime(2000, 1, 1, 12, 0, tzinfo=timezone.utc)


class TestSimulationClock(unittest.TestCase):

    def setUp(self):
        self.clock = SimulationClock(J2000_MOMENT)

    def test_accumulation_forward_then_reverse(self):
        self.assertEqual(self.clock.accumulated_seconds, 0.0)
        self.clock.set_rate_multiplier(2)
        for _ in range(5):
            self.clock.advance(1.0)
        self.assertEqual(self.clock.accumulated_seconds, 10.0)
        self.clock.set_rate_multiplier(-1)
        for _ in range(3):
            self.clock.advance(1.0)
        self.assertEqual(self.clock.accumulated_seconds, 7.0)

    def test_pause_freezes_time(self):
        self.clock.advance(3.0)
        self.clock.set_rate_multiplier(0)
        for dt in (0.016, 1.0, 100.0, 0.0):
            self.clock.advance(dt)
        self.assertEqual(self.clock.accumulated_seconds, 3.0)

    def test_state_follows_multiplier_sign(self):
        self.assertIs(self.clock.state, ClockState.RUNNING_FORWARD)
        self.clock.set_rate_multiplier(0.0)
        self.assertIs(self.clock.state, ClockState.PAUSED)
        self.assertTrue(self.clock.paused)
        self.clock.set_rate_multiplier(-250.0)
        self.assertIs(self.clock.state, ClockState.RUNNING_REVERSE)

    def test_rate_takes_effect_on_next_advance(self):
        self.clock.advance(1.0)
        self.clock.set_rate_multiplier(4.0)
        self.assertEqual(self.clock.accumulated_seconds, 1.0)
        self.assertEqual(self.clock.advance(0.5), 2.0)
        self.assertEqual(self.clock.accumulated_seconds, 3.0)

    def test_no_bound_on_multiplier(self):
        self.clock.set_rate_multiplier(1e6)
        self.clock.advance(1.0)
        self.assertEqual(self.clock.accumulated_seconds, 1e6)

    def test_non_finite_rate_keeps_last_value(self):
        self.clock.set_rate_multiplier(3.0)
        self.clock.set_rate_multiplier(float("nan"))
        self.clock.set_rate_multiplier(float("inf"))
        self.assertEqual(self.clock.rate_multiplier, 3.0)

    def test_non_finite_delta_is_ignored(self):
        self.clock.advance(2.0)
        self.assertEqual(self.clock.advance(float("nan")), 0.0)
        self.clock.advance(float("-inf"))
        self.assertEqual(self.clock.accumulated_seconds, 2.0)

    def test_overflowing_step_is_dropped(self):
        self.clock.set_rate_multiplier(1e308)
        self.clock.advance(1e308)
        self.assertEqual(self.clock.accumulated_seconds, 0.0)
        self.assertTrue(math.isfinite(self.clock.julian_date))

    def test_julian_date_from_epoch(self):
        clock = SimulationClock(J2000_MOMENT, days_per_second=0.5)
        self.assertEqual(clock.julian_date, 2451545.0)
        clock.advance(4.0)
        self.assertEqual(clock.julian_date, 2451547.0)

    def test_default_epoch_is_now(self):
        clock = SimulationClock()
        now_jd = date_to_julian_date(datetime.now(timezone.utc))
        self.assertLess(abs(clock.epoch_jd - now_jd), 1e-3)

    def test_rejects_non_finite_epoch(self):
        with self.assertRaises(ValueError):
            SimulationClock(float("nan"))
        with self.assertRaises(ValueError):
            SimulationClock(np.datetime64("NaT"))


class TestSliderMapping(unittest.TestCase):

    def test_endpoints(self):
        self.assertAlmostEqual(slider_to_multiplier(0, 0.01, 500.0), 0.01)
        self.assertAlmostEqual(slider_to_multiplier(100, 0.01, 500.0), 500.0)

    def test_monotonic(self):
        values = [slider_to_multiplier(s) for s in range(0, 101)]
        for lower, higher in zip(values, values[1:]):
            self.assertLess(lower, higher)

    def test_clamped_outside_range(self):
        self.assertAlmostEqual(slider_to_multiplier(-20), TIME_CFG.min_speed)
        self.assertAlmostEqual(slider_to_multiplier(250), TIME_CFG.max_speed)

    def test_unit_minimum_matches_power_of_ten_curve(self):
        for s in (0, 25, 50, 75, 100):
            expected = 10 ** ((s / 100) * math.log10(500.0))
            self.assertAlmostEqual(slider_to_multiplier(s, 1.0, 500.0), expected, places=9)

    def test_inverse(self):
        for s in range(0, 101):
            self.assertEqual(multiplier_to_slider(slider_to_multiplier(s)), s)
        self.assertEqual(multiplier_to_slider(-TIME_CFG.max_speed), 100)
        self.assertEqual(multiplier_to_slider(1e9), 100)

    def test_invalid_bounds(self):
        with self.assertRaises(ValueError):
            slider_to_multiplier(50, 0.0, 10.0)
        with self.assertRaises(ValueError):
            slider_to_multiplier(50, 10.0, 1.0)
        with self.assertRaises(ValueError):
            slider_to_multiplier(50, slider_min=100.0, slider_max=100.0)

    def test_offset_track(self):
        self.assertAlmostEqual(slider_to_multiplier(10, 1.0, 100.0, slider_min=10, slider_max=20), 1.0)
        self.assertAlmostEqual(slider_to_multiplier(15, 1.0, 100.0, slider_min=10, slider_max=20), 10.0)
        self.assertAlmostEqual(slider_to_multiplier(20, 1.0, 100.0, slider_min=10, slider_max=20), 100.0)
        self.assertEqual(multiplier_to_slider(10.0, 1.0, 100.0, slider_min=10, slider_max=20), 15)
        self.assertEqual(multiplier_to_slider(0.5, 1.0, 100.0, slider_min=10, slider_max=20), 10)


class TestTimeControl(unittest.TestCase):

    def setUp(self):
        self.clock = SimulationClock(J2000_MOMENT)
        self.control = TimeControl(self.clock)

    def test_default_speed_applied(self):
        self.assertEqual(self.clock.rate_multiplier, TIME_CFG.default_speed)

    def test_pause_resume_restores_speed(self):
        self.control.set_preset(20.0)
        self.assertTrue(self.control.toggle_pause())
        self.assertEqual(self.clock.rate_multiplier, 0.0)
        self.assertFalse(self.control.toggle_pause())
        self.assertEqual(self.clock.rate_multiplier, 20.0)

    def test_reverse_keeps_magnitude(self):
        self.control.set_preset(5.0)
        self.control.toggle_reverse()
        self.assertEqual(self.clock.rate_multiplier, -5.0)
        self.control.toggle_pause()
        self.control.toggle_pause()
        self.assertEqual(self.clock.rate_multiplier, -5.0)
        self.control.toggle_reverse()
        self.assertEqual(self.clock.rate_multiplier, 5.0)

    def test_speed_changes_while_paused_stay_paused(self):
        self.control.toggle_pause()
        self.control.set_preset(100.0)
        self.assertEqual(self.clock.rate_multiplier, 0.0)
        self.assertEqual(self.control.scale, 100.0)

    def test_slider_and_presets_clamp(self):
        self.assertAlmostEqual(self.control.set_slider(100), TIME_CFG.max_speed)
        self.assertEqual(self.control.slider_position, 100)
        self.assertEqual(self.control.set_preset(10_000.0), TIME_CFG.max_speed)
        self.assertEqual(self.control.set_preset(-5.0), 5.0)
        self.assertEqual(self.control.set_preset(float("nan")), 5.0)

    def test_non_finite_slider_keeps_speed(self):
        self.control.set_preset(20.0)
        self.assertEqual(self.control.set_slider(float("nan")), 20.0)
        self.assertEqual(self.control.set_slider(float("inf")), 20.0)
        self.assertEqual(self.control.scale, 20.0)
        self.assertEqual(self.clock.rate_multiplier, 20.0)

    def test_slider_respects_track_offset(self):
        cfg = replace(TIME_CFG, min_speed=1.0, max_speed=100.0, slider_min=50.0, slider_max=150.0)
        control = TimeControl(SimulationClock(J2000_MOMENT), cfg)
        self.assertAlmostEqual(control.set_slider(100.0), 10.0)
        self.assertEqual(control.slider_position, 100)
        self.assertAlmostEqual(control.set_slider(0.0), 1.0)
        self.assertEqual(control.slider_position, 50)

    def test_fast_forward(self):
        self.control.set_preset(20.0)
        self.assertEqual(self.control.fast_forward(), 100.0)
        self.assertEqual(self.control.fast_forward(), TIME_CFG.max_speed)

    def test_step_speed(self):
        self.control.set_preset(3.0)
        self.assertAlmostEqual(self.control.speed_up(), 4.5)
        self.assertAlmostEqual(self.control.slow_down(), 3.0)

    def test_preset_highlight(self):
        self.control.set_preset(5.0)
        self.assertTrue(self.control.is_preset_active(5.0))
        self.assertFalse(self.control.is_preset_active(1.0))
        self.control.toggle_pause()
        self.assertFalse(self.control.is_preset_active(5.0))

    def test_display_label(self):
        self.control.set_preset(0.25)
        self.assertEqual(self.control.display_label(), "1/4×")
        self.control.set_preset(20.0)
        self.control.toggle_reverse()
        self.assertEqual(self.control.display_label(), "-20×")
        self.control.toggle_pause()
        self.assertEqual(self.control.display_label(), "0×")

    def test_format_speed(self):
        self.assertEqual(format_speed(5.0), "5.0×")
        self.assertEqual(format_speed(1.0), "1.0×")
        self.assertEqual(format_speed(0.1), "1/10×")
        self.assertEqual(format_speed(500.0), "500×")

    def test_custom_config(self):
        cfg = replace(TIME_CFG, default_speed=2.0, max_speed=50.0)
        control = TimeControl(SimulationClock(J2000_MOMENT), cfg)
        self.assertEqual(control.clock.rate_multiplier, 2.0)
        self.assertEqual(control.fast_forward(), 10.0)
        self.assertEqual(control.fast_forward(), 50.0)

    def test_drives_clock(self):
        self.control.set_preset(2.0)
        self.clock.advance(1.5)
        self.control.toggle_reverse()
        self.clock.advance(0.5)
        self.assertEqual(self.clock.accumulated_seconds, 2.0)


class TestFrameTimer(unittest.TestCase):

    def test_tick_is_non_negative(self):
        timer = FrameTimer()
        self.assertGreaterEqual(timer.tick(), 0.0)
        self.assertGreaterEqual(timer.tick(), 0.0)


if __name__ == "__main__":
    unittest.main()
