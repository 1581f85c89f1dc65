"""Static reference data for the planets."""
