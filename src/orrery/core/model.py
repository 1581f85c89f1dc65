"""Data models for orbital elements and resolved planet state."""
from __future__ import annotations

from dataclasses import dataclass, field

import numpy as np


@dataclass(frozen=True)
class OrbitalElements:
    """J2000.0 osculating elements with linear rates per Julian century.

    Distances are in AU, angles in degrees.
    """

    a: float
    e: float
    i: float
    L: float
    long_peri: float
    long_node: float
    a_rate: float
    e_rate: float
    i_rate: float
    L_rate: float
    long_peri_rate: float
    long_node_rate: float


@dataclass(frozen=True)
class CurrentElements:
    """Elements extrapolated to a given date. Angles are in radians."""

    a: float
    e: float
    inclination: float
    mean_longitude: float
    long_peri: float
    long_node: float

    @property
    def arg_perihelion(self) -> float:
        return self.long_peri - self.long_node

    @property
    def mean_anomaly(self) -> float:
        return self.mean_longitude - self.long_peri


@dataclass(frozen=True)
class KeplerSolution:
    eccentric_anomaly: float
    iterations: int
    converged: bool
    residual: float


@dataclass
class PlanetState:
    """Position of one planet for a single frame."""

    planet_id: str
    julian_date: float
    position: np.ndarray = field(
        default_factory=lambda: np.zeros(3, dtype=float)
    )
    converged: bool = True
    iterations: int = 0

    @property
    def distance(self) -> float:
        return float(np.linalg.norm(self.position))

    @property
    def known(self) -> bool:
        return bool(np.any(self.position))


__all__ = ["CurrentElements", "KeplerSolution", "OrbitalElements", "PlanetState"]
