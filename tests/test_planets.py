import dataclasses
import unittest

from orrery.data.planets import (
    ORBITAL_ELEMENTS,
    PLANET_IDS,
    PLANET_INFO,
    get_elements,
    get_info,
)


class TestElementTable(unittest.TestCase):

    def test_eight_planets_in_order_from_sun(self):
        self.assertEqual(
            PLANET_IDS,
            ("mercury", "venus", "earth", "mars", "jupiter", "saturn", "uranus", "neptune"),
        )
        semi_major_axes = [ORBITAL_ELEMENTS[planet].a for planet in PLANET_IDS]
        self.assertEqual(semi_major_axes, sorted(semi_major_axes))

    def test_bound_orbits(self):
        for planet in PLANET_IDS:
            elements = get_elements(planet)
            self.assertGreaterEqual(elements.e, 0.0)
            self.assertLess(elements.e, 1.0)
            self.assertGreater(elements.a, 0.0)

    def test_unknown_lookup_is_none(self):
        self.assertIsNone(get_elements("pluto"))
        self.assertIsNone(get_elements(""))
        self.assertIsNone(get_elements(None))
        self.assertIsNone(get_info("ceres"))

    def test_lookup_normalizes_identifier(self):
        self.assertIs(get_elements(" Saturn "), ORBITAL_ELEMENTS["saturn"])

    def test_elements_are_immutable(self):
        with self.assertRaises(dataclasses.FrozenInstanceError):
            ORBITAL_ELEMENTS["earth"].e = 0.5

    def test_reference_values(self):
        earth = get_elements("earth")
        self.assertAlmostEqual(earth.a, 1.00000261)
        self.assertAlmostEqual(earth.e, 0.01671123)
        self.assertAlmostEqual(earth.L_rate, 35999.37244981)


class TestPlanetInfo(unittest.TestCase):

    def test_every_planet_has_info(self):
        self.assertEqual(set(PLANET_INFO), set(PLANET_IDS))
        for planet in PLANET_IDS:
            info = get_info(planet)
            self.assertEqual(info.key, planet)
            self.assertEqual(len(info.color), 3)
            self.assertTrue(all(0 <= channel <= 255 for channel in info.color))


if __name__ == "__main__":
    unittest.main()
