"""Text rows for the orbital data panel."""
from __future__ import annotations

import math

from orrery.data.planets import get_elements, get_info

from .kepler import julian_date_to_datetime
from .model import PlanetState


def format_julian_date(julian_date: float) -> str:
    """Calendar date for the HUD, falling back to the raw JD out of range."""

    if not math.isfinite(julian_date):
        return "JD --"
    try:
        moment = julian_date_to_datetime(julian_date)
    except (OverflowError, ValueError):
        return f"JD {julian_date:,.2f}"
    return moment.strftime("%Y-%m-%d %H:%M UTC")


def format_position(state: PlanetState) -> str:
    x, y, z = state.position
    return f"X {x:.3f} · Y {y:.3f} · Z {z:.3f}"


def build_telemetry_rows(planet_id: str, state: PlanetState) -> list[tuple[str, str]]:
    """Label/value rows for ``planet_id``; empty for unknown planets."""

    elements = get_elements(planet_id)
    if elements is None:
        return []
    info = get_info(planet_id)
    rows = [
        ("Planet", info.name if info is not None else planet_id.title()),
        ("Semi-major Axis", f"{elements.a:.4f} AU"),
        ("Eccentricity", f"{elements.e:.6f}"),
        ("Inclination", f"{elements.i:.4f}°"),
        ("Distance (now)", f"{state.distance:.4f} AU"),
        ("Heliocentric Position (AU)", format_position(state)),
    ]
    if info is not None:
        rows += [
            ("Distance from Sun", f"{info.distance_from_sun_mkm:,.1f} million km"),
            ("Year Length", f"{info.year_length_days:,g} days"),
            ("Moons", str(info.moons)),
        ]
    if not state.converged:
        rows.append(("Solver", "degraded"))
    return rows


__all__ = ["build_telemetry_rows", "format_julian_date", "format_position"]
