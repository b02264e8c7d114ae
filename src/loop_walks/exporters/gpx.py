"""GPX export of generated routes for phones and GPS devices."""

import gpxpy
import gpxpy.gpx

from ..models import GeneratedRoute


def route_to_gpx(route: GeneratedRoute) -> str:
    """Build a GPX 1.1 document with the route as a single track."""
    gpx = gpxpy.gpx.GPX()
    gpx.name = route.name
    gpx.description = route.description

    track = gpxpy.gpx.GPXTrack(name=route.name, description=route.description)
    track.type = route.terrain_type
    segment = gpxpy.gpx.GPXTrackSegment()
    for pt in route.path:
        segment.points.append(gpxpy.gpx.GPXTrackPoint(latitude=pt.lat, longitude=pt.lon))
    track.segments.append(segment)
    gpx.tracks.append(track)

    return gpx.to_xml(version="1.1")


def export_gpx(route: GeneratedRoute, output_path: str) -> None:
    """Write the route as a GPX file."""
    with open(output_path, "w") as f:
        f.write(route_to_gpx(route))
