import unittest

import numpy as np

from orrery.core.kepler import compute_planet_state
from orrery.core.model import PlanetState
from orrery.core.telemetry import build_telemetry_rows, format_julian_date, format_position

J2000 = 2451545.0


class TestTelemetry(unittest.TestCase):

    def test_rows_for_earth(self):
        state = compute_planet_state("earth", J2000)
        rows = dict(build_telemetry_rows("earth", state))
        self.assertEqual(rows["Planet"], "Earth")
        self.assertEqual(rows["Semi-major Axis"], "1.0000 AU")
        self.assertEqual(rows["Eccentricity"], "0.016711")
        self.assertEqual(rows["Distance (now)"], f"{state.distance:.4f} AU")
        self.assertTrue(rows["Heliocentric Position (AU)"].startswith("X "))
        self.assertNotIn("Solver", rows)

    def test_rows_include_planet_facts(self):
        earth = dict(build_telemetry_rows("earth", compute_planet_state("earth", J2000)))
        self.assertEqual(earth["Distance from Sun"], "149.6 million km")
        self.assertEqual(earth["Year Length"], "365.25 days")
        self.assertEqual(earth["Moons"], "1")

        saturn = dict(build_telemetry_rows("saturn", compute_planet_state("saturn", J2000)))
        self.assertEqual(saturn["Distance from Sun"], "1,434.0 million km")
        self.assertEqual(saturn["Year Length"], "10,759 days")
        self.assertEqual(saturn["Moons"], "146")

    def test_degraded_solver_is_flagged(self):
        state = PlanetState("mars", J2000, np.array([1.0, 0.0, 0.0]), converged=False)
        rows = dict(build_telemetry_rows("mars", state))
        self.assertEqual(rows["Solver"], "degraded")

    def test_unknown_planet_has_no_rows(self):
        self.assertEqual(build_telemetry_rows("pluto", PlanetState("pluto", J2000)), [])

    def test_format_position(self):
        state = PlanetState("earth", J2000, np.array([0.1234, -0.5, 0.0]))
        self.assertEqual(format_position(state), "X 0.123 · Y -0.500 · Z 0.000")

    def test_format_julian_date(self):
        self.assertEqual(format_julian_date(J2000), "2000-01-01 12:00 UTC")
        self.assertEqual(format_julian_date(float("nan")), "JD --")
        self.assertTrue(format_julian_date(1e10).startswith("JD "))


if __name__ == "__main__":
    unittest.main()
