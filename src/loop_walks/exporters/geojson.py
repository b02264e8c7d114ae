"""GeoJSON export of generated routes."""

import json

from ..models import GeneratedRoute


def route_to_geojson(route: GeneratedRoute) -> dict:
    """GeoJSON Feature with the route path as a LineString of [lon, lat] positions."""
    return {
        "type": "Feature",
        "geometry": {
            "type": "LineString",
            "coordinates": [[pt.lon, pt.lat] for pt in route.path],
        },
        "properties": {
            "name": route.name,
            "description": route.description,
            "duration_minutes": route.duration_minutes,
            "distance_meters": route.distance_meters,
            "difficulty": route.difficulty,
            "terrain_type": route.terrain_type,
            "center": [route.center_lng, route.center_lat],
        },
    }


def export_geojson(route: GeneratedRoute, output_path: str) -> None:
    """Write the route as a GeoJSON file."""
    with open(output_path, "w") as f:
        json.dump(route_to_geojson(route), f, indent=2)
