"""Keplerian orrery: planet positions from J2000.0 elements and a time-warp clock."""

from .core.kepler import (
    KeplerConvergenceError,
    OrreryError,
    UnknownPlanetError,
    compute_all_positions,
    compute_heliocentric_position,
    compute_planet_state,
    date_to_julian_date,
    julian_date_to_datetime,
    sample_orbit_path,
    solve_kepler,
)
from .core.model import OrbitalElements, PlanetState
from .core.timekeeping import (
    ClockState,
    SimulationClock,
    TimeControl,
    multiplier_to_slider,
    slider_to_multiplier,
)
from .data.planets import PLANET_IDS, get_elements

__version__ = "0.1.0"

__all__ = [
    "ClockState",
    "KeplerConvergenceError",
    "OrbitalElements",
    "OrreryError",
    "PLANET_IDS",
    "PlanetState",
    "SimulationClock",
    "TimeControl",
    "UnknownPlanetError",
    "compute_all_positions",
    "compute_heliocentric_position",
    "compute_planet_state",
    "date_to_julian_date",
    "get_elements",
    "julian_date_to_datetime",
    "multiplier_to_slider",
    "sample_orbit_path",
    "slider_to_multiplier",
    "solve_kepler",
]
