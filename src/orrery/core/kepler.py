"""Heliocentric planet positions from Keplerian elements.

Positions follow the usual low-precision ephemeris recipe: linear element
rates per Julian century, Newton-Raphson on Kepler's equation, then the
classical rotation from the orbital plane into ecliptic coordinates.

Everything on the per-frame path is fail-soft. An unknown planet resolves to
the zero vector and a Kepler solve that hits the iteration cap returns its
best estimate. Pass ``strict=True`` to get exceptions instead.
"""
from __future__ import annotations

import logging
import math
from datetime import date, datetime, timedelta, timezone
from typing import Iterable, Mapping, Optional, Union

import numpy as np

from orrery.data.planets import PLANET_IDS, get_elements

from .config import ORBIT_CFG, RENDER_CFG, OrbitCfg, RenderCfg
from .model import CurrentElements, KeplerSolution, OrbitalElements, PlanetState

logger = logging.getLogger(__name__)

TWO_PI = 2.0 * math.pi

DateLike = Union[datetime, date, np.datetime64, float, int]


class OrreryError(Exception):
    """Base class for errors raised by the orrery core."""


class UnknownPlanetError(OrreryError):
    def __init__(self, planet_id: object) -> None:
        super().__init__(f"Unknown planet identifier: {planet_id!r}")
        self.planet_id = planet_id


class KeplerConvergenceError(OrreryError):
    def __init__(self, solution: KeplerSolution, mean_anomaly: float, eccentricity: float) -> None:
        super().__init__(
            f"Kepler's equation did not converge after {solution.iterations} iterations "
            f"(M={mean_anomaly:.6g}, e={eccentricity:.6g}, residual={solution.residual:.3e})"
        )
        self.solution = solution


def julian_centuries(julian_date: float, cfg: OrbitCfg = ORBIT_CFG) -> float:
    """Julian centuries elapsed since J2000.0."""

    return (julian_date - cfg.j2000_jd) / cfg.days_per_century


def normalize_angle(angle: float) -> float:
    """Wrap ``angle`` (radians) into ``(-pi, pi]``."""

    if not math.isfinite(angle):
        return math.nan
    wrapped = math.fmod(angle, TWO_PI)
    if wrapped > math.pi:
        wrapped -= TWO_PI
    elif wrapped <= -math.pi:
        wrapped += TWO_PI
    return wrapped


def clamp_eccentricity(e: float, cfg: OrbitCfg = ORBIT_CFG) -> float:
    if not math.isfinite(e):
        return 0.0
    return max(0.0, min(cfg.max_eccentricity, e))


def elements_at(
    elements: OrbitalElements,
    julian_date: float,
    cfg: OrbitCfg = ORBIT_CFG,
) -> CurrentElements:
    """Extrapolate ``elements`` linearly to ``julian_date``.

    Angles of the result are converted to radians. The eccentricity is
    clamped into ``[0, cfg.max_eccentricity]`` so the result always
    describes an ellipse.
    """

    T = julian_centuries(julian_date, cfg)
    e = elements.e + elements.e_rate * T
    clamped = clamp_eccentricity(e, cfg)
    if clamped != e:
        logger.warning("Eccentricity %.6g out of range at JD %.3f, clamped to %.6g", e, julian_date, clamped)
    return CurrentElements(
        a=elements.a + elements.a_rate * T,
        e=clamped,
        inclination=math.radians(elements.i + elements.i_rate * T),
        mean_longitude=math.radians(elements.L + elements.L_rate * T),
        long_peri=math.radians(elements.long_peri + elements.long_peri_rate * T),
        long_node=math.radians(elements.long_node + elements.long_node_rate * T),
    )


def solve_kepler(
    mean_anomaly: float,
    eccentricity: float,
    tolerance: float = ORBIT_CFG.kepler_tolerance,
    max_iterations: int = ORBIT_CFG.kepler_max_iterations,
) -> KeplerSolution:
    """Solve ``M = E - e sin(E)`` for the eccentric anomaly ``E``.

    Newton-Raphson seeded with ``E0 = M``. Stops once the correction drops
    below ``tolerance`` or after ``max_iterations`` steps; in the latter case
    the last iterate is returned with ``converged=False``.
    """

    if not 0.0 <= eccentricity < 1.0:
        raise ValueError(f"eccentricity must lie in [0, 1), got {eccentricity!r}")
    if max_iterations < 1:
        raise ValueError("max_iterations must be at least 1")

    E = mean_anomaly
    converged = False
    iterations = 0
    for iterations in range(1, max_iterations + 1):
        delta = (E - eccentricity * math.sin(E) - mean_anomaly) / (1.0 - eccentricity * math.cos(E))
        E -= delta
        if abs(delta) < tolerance:
            converged = True
            break

    residual = mean_anomaly - (E - eccentricity * math.sin(E))
    return KeplerSolution(
        eccentric_anomaly=E,
        iterations=iterations,
        converged=converged,
        residual=residual,
    )


def solve_kepler_strict(
    mean_anomaly: float,
    eccentricity: float,
    tolerance: float = ORBIT_CFG.kepler_tolerance,
    max_iterations: int = ORBIT_CFG.kepler_max_iterations,
) -> float:
    """Like :func:`solve_kepler` but raise instead of returning a best guess."""

    solution = solve_kepler(mean_anomaly, eccentricity, tolerance, max_iterations)
    if not solution.converged:
        raise KeplerConvergenceError(solution, mean_anomaly, eccentricity)
    return solution.eccentric_anomaly


def true_anomaly(eccentric_anomaly: float, eccentricity: float) -> float:
    half = 0.5 * eccentric_anomaly
    return 2.0 * math.atan2(
        math.sqrt(1.0 + eccentricity) * math.sin(half),
        math.sqrt(1.0 - eccentricity) * math.cos(half),
    )


def orbital_plane_position(a: float, e: float, eccentric_anomaly: float) -> tuple[float, float]:
    """Position in the orbital plane with perihelion on the +x axis."""

    x_prime = a * (math.cos(eccentric_anomaly) - e)
    y_prime = a * math.sqrt(1.0 - e * e) * math.sin(eccentric_anomaly)
    return x_prime, y_prime


def rotation_matrix(arg_perihelion: float, inclination: float, long_node: float) -> np.ndarray:
    """3x2 matrix taking orbital-plane ``(x', y')`` to ecliptic ``(x, y, z)``."""

    cos_w, sin_w = math.cos(arg_perihelion), math.sin(arg_perihelion)
    cos_o, sin_o = math.cos(long_node), math.sin(long_node)
    cos_i, sin_i = math.cos(inclination), math.sin(inclination)
    return np.array(
        [
            [cos_w * cos_o - sin_w * sin_o * cos_i, -sin_w * cos_o - cos_w * sin_o * cos_i],
            [cos_w * sin_o + sin_w * cos_o * cos_i, -sin_w * sin_o + cos_w * cos_o * cos_i],
            [sin_w * sin_i, cos_w * sin_i],
        ],
        dtype=float,
    )


def rotate_to_ecliptic(
    x_prime: float,
    y_prime: float,
    arg_perihelion: float,
    inclination: float,
    long_node: float,
) -> np.ndarray:
    return rotation_matrix(arg_perihelion, inclination, long_node) @ np.array([x_prime, y_prime], dtype=float)


def _reject_non_finite(state: PlanetState, what: str, strict: bool) -> PlanetState:
    if strict:
        raise ValueError(f"{what} for {state.planet_id} at JD {state.julian_date!r} is not finite")
    logger.warning("Non-finite %s for %s at JD %r, returning origin", what, state.planet_id, state.julian_date)
    state.position = np.zeros(3, dtype=float)
    state.converged = False
    state.iterations = 0
    return state


def compute_planet_state(
    planet_id: str,
    julian_date: float,
    *,
    cfg: OrbitCfg = ORBIT_CFG,
    strict: bool = False,
) -> PlanetState:
    """Resolve the heliocentric state of ``planet_id`` at ``julian_date``."""

    state = PlanetState(planet_id=planet_id, julian_date=julian_date)
    elements = get_elements(planet_id)
    if elements is None:
        if strict:
            raise UnknownPlanetError(planet_id)
        logger.debug("Skipping unknown planet %r", planet_id)
        return state
    if not math.isfinite(julian_date):
        return _reject_non_finite(state, "Julian date", strict)

    current = elements_at(elements, julian_date, cfg)
    M = normalize_angle(current.mean_anomaly)
    # Far enough from J2000 the linear rates overflow.
    if not (math.isfinite(M) and math.isfinite(current.a)):
        return _reject_non_finite(state, "extrapolated elements", strict)
    solution = solve_kepler(M, current.e, cfg.kepler_tolerance, cfg.kepler_max_iterations)
    if not solution.converged:
        if strict:
            raise KeplerConvergenceError(solution, M, current.e)
        logger.warning(
            "Kepler solve for %s at JD %.3f stopped after %d iterations (residual %.3e)",
            planet_id,
            julian_date,
            solution.iterations,
            solution.residual,
        )

    x_prime, y_prime = orbital_plane_position(current.a, current.e, solution.eccentric_anomaly)
    position = rotate_to_ecliptic(
        x_prime,
        y_prime,
        current.arg_perihelion,
        current.inclination,
        current.long_node,
    )
    if not np.isfinite(position).all():
        return _reject_non_finite(state, "position", strict)
    state.position = position
    state.converged = solution.converged
    state.iterations = solution.iterations
    return state


def compute_heliocentric_position(
    planet_id: str,
    julian_date: float,
    *,
    cfg: OrbitCfg = ORBIT_CFG,
    strict: bool = False,
) -> np.ndarray:
    """Heliocentric ecliptic ``(x, y, z)`` of ``planet_id`` in AU.

    Unknown planets give the zero vector unless ``strict`` is set.
    """

    return compute_planet_state(planet_id, julian_date, cfg=cfg, strict=strict).position


def compute_all_positions(
    julian_date: float,
    planet_ids: Iterable[str] = PLANET_IDS,
    *,
    cfg: OrbitCfg = ORBIT_CFG,
) -> dict[str, PlanetState]:
    return {
        planet_id: compute_planet_state(planet_id, julian_date, cfg=cfg)
        for planet_id in planet_ids
    }


def scene_positions(
    states: Mapping[str, PlanetState],
    scene_scale: Optional[float] = None,
    vertical_squash: Optional[float] = None,
    *,
    render_cfg: RenderCfg = RENDER_CFG,
) -> dict[str, np.ndarray]:
    """Remap ecliptic AU to y-up scene coordinates ``(x, z, y)``.

    Scale and squash default to ``render_cfg.scene_scale`` and
    ``render_cfg.scene_vertical_squash``.
    """

    if scene_scale is None:
        scene_scale = render_cfg.scene_scale
    if vertical_squash is None:
        vertical_squash = render_cfg.scene_vertical_squash
    positions: dict[str, np.ndarray] = {}
    for planet_id, state in states.items():
        x, y, z = state.position
        positions[planet_id] = np.array(
            [x * scene_scale, z * scene_scale * vertical_squash, y * scene_scale],
            dtype=float,
        )
    return positions


def sample_orbit_path(
    planet_id: str,
    julian_date: float,
    samples: int = 256,
    *,
    cfg: OrbitCfg = ORBIT_CFG,
) -> np.ndarray:
    """Points on the osculating ellipse of ``planet_id`` at ``julian_date``.

    Returns an array of shape ``(samples + 1, 3)`` in AU whose first and last
    rows coincide. Unknown planets give an empty ``(0, 3)`` array.
    """

    elements = get_elements(planet_id)
    if elements is None or not math.isfinite(julian_date) or samples < 2:
        return np.zeros((0, 3), dtype=float)

    current = elements_at(elements, julian_date, cfg)
    E = np.linspace(0.0, TWO_PI, samples + 1)
    plane = np.vstack(
        (
            current.a * (np.cos(E) - current.e),
            current.a * math.sqrt(1.0 - current.e**2) * np.sin(E),
        )
    )
    matrix = rotation_matrix(current.arg_perihelion, current.inclination, current.long_node)
    return (matrix @ plane).T


def date_to_julian_date(timestamp: DateLike, cfg: OrbitCfg = ORBIT_CFG) -> float:
    """Julian date for ``timestamp``.

    Accepts ``datetime`` (naive values are taken as UTC), ``date``,
    ``numpy.datetime64`` or Unix seconds. ``NaT`` gives NaN.
    """

    if isinstance(timestamp, np.datetime64):
        if np.isnat(timestamp):
            return math.nan
        unix_ms = timestamp.astype("datetime64[us]").astype(np.int64) / 1000.0
    elif isinstance(timestamp, datetime):
        if timestamp.tzinfo is None:
            timestamp = timestamp.replace(tzinfo=timezone.utc)
        unix_ms = timestamp.timestamp() * 1000.0
    elif isinstance(timestamp, date):
        unix_ms = datetime(timestamp.year, timestamp.month, timestamp.day, tzinfo=timezone.utc).timestamp() * 1000.0
    else:
        unix_ms = float(timestamp) * 1000.0
    return float(unix_ms) / cfg.ms_per_day + cfg.unix_epoch_jd


def julian_date_to_datetime(julian_date: float, cfg: OrbitCfg = ORBIT_CFG) -> datetime:
    """Inverse of :func:`date_to_julian_date`, returned as an aware UTC datetime."""

    unix_ms = (julian_date - cfg.unix_epoch_jd) * cfg.ms_per_day
    return datetime(1970, 1, 1, tzinfo=timezone.utc) + timedelta(milliseconds=unix_ms)


__all__ = [
    "DateLike",
    "KeplerConvergenceError",
    "OrreryError",
    "UnknownPlanetError",
    "clamp_eccentricity",
    "compute_all_positions",
    "compute_heliocentric_position",
    "compute_planet_state",
    "date_to_julian_date",
    "elements_at",
    "julian_centuries",
    "julian_date_to_datetime",
    "normalize_angle",
    "orbital_plane_position",
    "rotate_to_ecliptic",
    "rotation_matrix",
    "sample_orbit_path",
    "scene_positions",
    "solve_kepler",
    "solve_kepler_strict",
    "true_anomaly",
]
