"""Pydantic domain models for map segments and generated walking routes."""

from typing import Literal

from pydantic import BaseModel, ConfigDict, Field, field_validator

TerrainType = Literal["urban", "nature", "mixed"]
Difficulty = Literal["easy", "moderate", "difficult"]


class Coordinate(BaseModel):
    model_config = ConfigDict(frozen=True)

    lat: float = Field(ge=-90, le=90)
    lon: float = Field(ge=-180, le=180)


class MapSegment(BaseModel):
    """A single OSM way: an ordered polyline plus its free-form tags.

    Segments with a single point are accepted here so that upstream data can
    be passed through unfiltered; the synthesis engine skips them.
    """
    id: int
    points: list[Coordinate] = Field(min_length=1)
    tags: dict[str, str] = Field(default_factory=dict)

    @field_validator("tags", mode="before")
    @classmethod
    def stringify_tag_values(cls, v):
        if v is None:
            return {}
        return {str(k): str(val) for k, val in v.items()}

    @property
    def start(self) -> Coordinate:
        return self.points[0]

    @property
    def end(self) -> Coordinate:
        return self.points[-1]

    @property
    def name(self) -> str:
        return self.tags.get("name", "")


class GeneratedRoute(BaseModel):
    model_config = ConfigDict(frozen=True)

    name: str
    description: str
    duration_minutes: int = Field(ge=0)
    distance_meters: int = Field(ge=0)
    difficulty: Difficulty
    terrain_type: TerrainType
    path: list[Coordinate] = Field(min_length=2)
    center_lat: float = Field(ge=-90, le=90)
    center_lng: float = Field(ge=-180, le=180)
