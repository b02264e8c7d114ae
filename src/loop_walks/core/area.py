"""Coarse grid keys for caching generated routes per area."""

import math

# 0.01 degree is roughly 1.1 km of latitude
GRID_DECIMALS = 2


def _round_to_grid(value: float) -> float:
    scale = 10 ** GRID_DECIMALS
    return math.floor(value * scale + 0.5) / scale


def _format(value: float) -> str:
    text = repr(value)
    return text[:-2] if text.endswith(".0") else text


def area_hash(lat: float, lng: float) -> str:
    """Key for the ~1 km grid cell containing (lat, lng), e.g. '48.86,2.35'."""
    return f"{_format(_round_to_grid(lat))},{_format(_round_to_grid(lng))}"
