"""Tunable constants for route synthesis and the settings model that carries them."""

import math

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator

# Durations (minutes) a route is synthesized for, in order.
TARGET_DURATIONS_MIN = (15, 30, 45, 60, 75)
# Average dog-walking pace.
WALK_SPEED_KMH = 4.5
# Two segment endpoints closer than this can be chained together.
CONNECTION_RADIUS_M = 200.0
# A path whose ends are closer than this is already a loop.
LOOP_CLOSURE_TOLERANCE_M = 100.0
# Route distance is capped at this multiple of the target distance.
OVERSHOOT_CAP = 1.3
# Candidates shorter than this fraction of the target duration are dropped.
MIN_DURATION_FRACTION = 0.5
# Difficulty thresholds: below EASY_MAX_M is easy, below MODERATE_MAX_M moderate.
EASY_MAX_M = 2000
MODERATE_MAX_M = 4000
# Default Overpass search radius around the user.
SEARCH_RADIUS_M = 3000
# Largest Overpass search radius accepted.
MAX_SEARCH_RADIUS_M = 20_000
# Generated routes with no activity are purged after this many days.
RETENTION_DAYS = 30


class SynthesisSettings(BaseModel):
    model_config = ConfigDict(validate_assignment=True)

    target_durations_min: tuple[int, ...] = TARGET_DURATIONS_MIN
    walk_speed_kmh: float = Field(default=WALK_SPEED_KMH, gt=0)
    connection_radius_m: float = Field(default=CONNECTION_RADIUS_M, gt=0)
    loop_tolerance_m: float = Field(default=LOOP_CLOSURE_TOLERANCE_M, gt=0)
    overshoot_cap: float = Field(default=OVERSHOOT_CAP, ge=1.0)
    min_duration_fraction: float = Field(default=MIN_DURATION_FRACTION, ge=0, le=1)
    easy_max_m: int = Field(default=EASY_MAX_M, gt=0)
    moderate_max_m: int = Field(default=MODERATE_MAX_M, gt=0)
    search_radius_m: int = Field(default=SEARCH_RADIUS_M, gt=0, le=MAX_SEARCH_RADIUS_M)
    retention_days: int = Field(default=RETENTION_DAYS, gt=0)

    @field_validator("target_durations_min")
    @classmethod
    def durations_must_be_positive(cls, v: tuple[int, ...]) -> tuple[int, ...]:
        for minutes in v:
            if minutes <= 0:
                raise ValueError(f"Target duration must be positive, got {minutes}")
        return v

    @model_validator(mode="after")
    def check_difficulty_thresholds(self) -> "SynthesisSettings":
        if self.moderate_max_m <= self.easy_max_m:
            raise ValueError(
                f"moderate_max_m ({self.moderate_max_m}) must be greater than "
                f"easy_max_m ({self.easy_max_m})"
            )
        return self

    @property
    def walk_speed_mps(self) -> float:
        return self.walk_speed_kmh / 3.6


def is_valid_search_radius(radius_m: float) -> bool:
    return math.isfinite(radius_m) and 0 < radius_m <= MAX_SEARCH_RADIUS_M
