"""Orbital mechanics core: element extrapolation, Kepler solver and clock."""
