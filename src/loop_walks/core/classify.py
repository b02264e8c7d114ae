"""Terrain classification of OSM ways from their tags."""

from ..models import TerrainType

GREEN_LEISURE_VALUES = frozenset({"park", "garden"})
NATURE_HIGHWAY_VALUES = frozenset({"path", "track"})
SOFT_SURFACE_VALUES = frozenset({"grass", "earth", "ground"})
URBAN_HIGHWAY_VALUES = frozenset({"pedestrian", "living_street"})


def classify_terrain(tags: dict[str, str]) -> TerrainType:
    """Map a way's tags to 'nature', 'urban' or 'mixed'.

    Rules are checked in order and the first match wins, so a pedestrian
    street inside a park is still 'nature'.
    """
    highway = tags.get("highway")

    if tags.get("leisure") in GREEN_LEISURE_VALUES or "natural" in tags:
        return "nature"
    if highway in NATURE_HIGHWAY_VALUES:
        return "nature"
    if highway == "footway" and tags.get("surface") in SOFT_SURFACE_VALUES:
        return "nature"
    if highway in URBAN_HIGHWAY_VALUES:
        return "urban"
    return "mixed"
