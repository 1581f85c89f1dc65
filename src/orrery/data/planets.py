"""Orbital element table and display metadata for the eight planets.

Elements are the JPL "Keplerian Elements for Approximate Positions of the
Major Planets" (valid 1800 AD - 2050 AD), referred to J2000.0 with linear
rates per Julian century.
"""
from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

from orrery.core.model import OrbitalElements


ORBITAL_ELEMENTS: dict[str, OrbitalElements] = {
    "mercury": OrbitalElements(
        a=0.38709927, e=0.20563593, i=7.00497902, L=252.25032350,
        long_peri=77.45779628, long_node=48.33076593,
        a_rate=0.00000037, e_rate=0.00001906, i_rate=-0.00594749, L_rate=149472.67411175,
        long_peri_rate=0.16047689, long_node_rate=-0.12534081,
    ),
    "venus": OrbitalElements(
        a=0.72333566, e=0.00677672, i=3.39467605, L=181.97909950,
        long_peri=131.60246718, long_node=76.67984255,
        a_rate=0.00000390, e_rate=-0.00004107, i_rate=-0.00078890, L_rate=58517.81538729,
        long_peri_rate=0.00268329, long_node_rate=-0.27769418,
    ),
    "earth": OrbitalElements(
        a=1.00000261, e=0.01671123, i=-0.00001531, L=100.46457166,
        long_peri=102.93768193, long_node=0.0,
        a_rate=0.00000562, e_rate=-0.00004392, i_rate=-0.01294668, L_rate=35999.37244981,
        long_peri_rate=0.32327364, long_node_rate=0.0,
    ),
    "mars": OrbitalElements(
        a=1.52371034, e=0.09339410, i=1.84969142, L=-4.55343205,
        long_peri=-23.94362959, long_node=49.55953891,
        a_rate=0.00001847, e_rate=0.00007882, i_rate=-0.00813131, L_rate=19140.30268499,
        long_peri_rate=0.44441088, long_node_rate=-0.29257343,
    ),
    "jupiter": OrbitalElements(
        a=5.20288700, e=0.04838624, i=1.30439695, L=34.39644051,
        long_peri=14.72847983, long_node=100.47390909,
        a_rate=-0.00011607, e_rate=-0.00013253, i_rate=-0.00183714, L_rate=3034.74612775,
        long_peri_rate=0.21252668, long_node_rate=0.20469106,
    ),
    "saturn": OrbitalElements(
        a=9.53667594, e=0.05386179, i=2.48599187, L=49.95424423,
        long_peri=92.59887831, long_node=113.66242448,
        a_rate=-0.00125060, e_rate=-0.00050991, i_rate=0.00193609, L_rate=1222.49362201,
        long_peri_rate=-0.41897216, long_node_rate=-0.28867794,
    ),
    "uranus": OrbitalElements(
        a=19.18916464, e=0.04725744, i=0.77263783, L=313.23810451,
        long_peri=170.95427630, long_node=74.01692503,
        a_rate=-0.00196176, e_rate=-0.00004397, i_rate=-0.00242939, L_rate=428.48202785,
        long_peri_rate=0.40805281, long_node_rate=0.04240589,
    ),
    "neptune": OrbitalElements(
        a=30.06992276, e=0.00859048, i=1.77004347, L=-55.12002969,
        long_peri=44.96476227, long_node=131.78422574,
        a_rate=0.00026291, e_rate=0.00005105, i_rate=0.00035372, L_rate=218.45945325,
        long_peri_rate=-0.32241464, long_node_rate=-0.00508664,
    ),
}

PLANET_IDS: tuple[str, ...] = tuple(ORBITAL_ELEMENTS)


@dataclass(frozen=True)
class PlanetInfo:
    key: str
    name: str
    color: tuple[int, int, int]
    diameter_km: float
    distance_from_sun_mkm: float
    year_length_days: float
    moons: int


PLANET_INFO_DEFINITIONS: tuple[PlanetInfo, ...] = (
    PlanetInfo("mercury", "Mercury", (165, 165, 165), 4_879, 57.9, 88, 0),
    PlanetInfo("venus", "Venus", (231, 205, 186), 12_104, 108.2, 225, 0),
    PlanetInfo("earth", "Earth", (107, 147, 214), 12_742, 149.6, 365.25, 1),
    PlanetInfo("mars", "Mars", (226, 123, 88), 6_779, 227.9, 687, 2),
    PlanetInfo("jupiter", "Jupiter", (201, 169, 122), 139_820, 778.5, 4_333, 95),
    PlanetInfo("saturn", "Saturn", (233, 226, 209), 116_460, 1_434, 10_759, 146),
    PlanetInfo("uranus", "Uranus", (200, 231, 252), 50_724, 2_871, 30_687, 28),
    PlanetInfo("neptune", "Neptune", (91, 118, 229), 49_244, 4_495, 60_190, 16),
)

PLANET_INFO: dict[str, PlanetInfo] = {info.key: info for info in PLANET_INFO_DEFINITIONS}


def _normalize_id(planet_id: str) -> str:
    return planet_id.strip().lower()


def get_elements(planet_id: str) -> Optional[OrbitalElements]:
    """Return the element set for ``planet_id`` or ``None`` if it is unknown."""

    if not isinstance(planet_id, str):
        return None
    return ORBITAL_ELEMENTS.get(_normalize_id(planet_id))


def get_info(planet_id: str) -> Optional[PlanetInfo]:
    if not isinstance(planet_id, str):
        return None
    return PLANET_INFO.get(_normalize_id(planet_id))


__all__ = [
    "ORBITAL_ELEMENTS",
    "PLANET_IDS",
    "PLANET_INFO",
    "PLANET_INFO_DEFINITIONS",
    "PlanetInfo",
    "get_elements",
    "get_info",
]
