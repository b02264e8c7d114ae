"""Session state for the loop-walks MCP server.

Holds the synthesis settings and the store of generated routes, keyed by the
area hash of the location they were generated for.
"""

import uuid
from datetime import datetime, timedelta, timezone
from typing import Literal, Optional

from pydantic import BaseModel, Field

from loop_walks.config import SynthesisSettings
from loop_walks.models import GeneratedRoute


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


class StoredRoute(BaseModel):
    id: str = Field(default_factory=lambda: uuid.uuid4().hex)
    area_hash: str
    source: Literal["osm"] = "osm"
    generated_at: datetime = Field(default_factory=_utcnow)
    activity_count: int = Field(default=0, ge=0)
    route: GeneratedRoute

    def as_listing(self) -> dict:
        r = self.route
        return {
            "id": self.id,
            "name": r.name,
            "description": r.description,
            "duration_minutes": r.duration_minutes,
            "distance_meters": r.distance_meters,
            "difficulty": r.difficulty,
            "terrain_type": r.terrain_type,
            "center_lat": r.center_lat,
            "center_lng": r.center_lng,
            "source": self.source,
        }


class RouteStore(BaseModel):
    routes: dict[str, StoredRoute] = Field(default_factory=dict)

    def lookup(self, area_hash: str) -> list[StoredRoute]:
        return [r for r in self.routes.values() if r.area_hash == area_hash]

    def store(
        self, area_hash: str, routes: list[GeneratedRoute], now: Optional[datetime] = None,
    ) -> list[StoredRoute]:
        """Add freshly generated routes under area_hash and return them with ids."""
        generated_at = now or _utcnow()
        stored = []
        for route in routes:
            entry = StoredRoute(area_hash=area_hash, generated_at=generated_at, route=route)
            self.routes[entry.id] = entry
            stored.append(entry)
        return stored

    def get(self, route_id: str) -> Optional[StoredRoute]:
        return self.routes.get(route_id)

    def record_activity(self, route_id: str) -> StoredRoute:
        entry = self.routes.get(route_id)
        if entry is None:
            raise ValueError(f"Unknown route id {route_id!r}.")
        entry.activity_count += 1
        return entry

    def purge_inactive(self, max_age_days: int, now: Optional[datetime] = None) -> dict[str, int]:
        """Drop generated routes older than max_age_days that nobody has used.

        Returns counts of deleted routes and of old routes kept for activity.
        """
        cutoff = (now or _utcnow()) - timedelta(days=max_age_days)
        old = [r for r in self.routes.values() if r.generated_at < cutoff]
        deleted = 0
        for entry in old:
            if entry.activity_count == 0:
                del self.routes[entry.id]
                deleted += 1
        return {"deleted": deleted, "kept": len(old) - deleted}

    def clear(self) -> None:
        self.routes.clear()

    def summary(self) -> dict:
        areas = {r.area_hash for r in self.routes.values()}
        return {
            "routes": len(self.routes),
            "areas": len(areas),
            "with_activity": sum(1 for r in self.routes.values() if r.activity_count > 0),
        }


class SessionState(BaseModel):
    settings: SynthesisSettings = Field(default_factory=SynthesisSettings)
    store: RouteStore = Field(default_factory=RouteStore)
    last_area_hash: Optional[str] = None

    def summary(self) -> dict:
        s = self.settings
        return {
            "settings": {
                "target_durations_min": list(s.target_durations_min),
                "walk_speed_kmh": s.walk_speed_kmh,
                "connection_radius_m": s.connection_radius_m,
                "search_radius_m": s.search_radius_m,
                "retention_days": s.retention_days,
            },
            "store": self.store.summary(),
            "last_area_hash": self.last_area_hash,
        }


# Global session state, one per MCP server process
state = SessionState()
