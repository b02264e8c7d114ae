"""Synthesize walkable loop routes from OpenStreetMap path segments."""

from .config import SynthesisSettings
from .core.area import area_hash
from .core.assembler import synthesize_routes
from .models import Coordinate, GeneratedRoute, MapSegment

__all__ = [
    "Coordinate",
    "GeneratedRoute",
    "MapSegment",
    "SynthesisSettings",
    "area_hash",
    "synthesize_routes",
]
