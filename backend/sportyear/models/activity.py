"""
Activity domain model.

Activities are produced by the adapters in sportyear.services.analytics.adapter
and are treated as read-only by every pipeline function.
"""
import math
from dataclasses import dataclass
from datetime import datetime
from enum import Enum
from typing import Any, Dict, FrozenSet, Optional

from sportyear.core.exceptions import InvalidInputError


class ActivityType(str, Enum):
    """Sport kinds reported by Strava."""
    RUN = "Run"
    RIDE = "Ride"
    SWIM = "Swim"
    VIRTUAL_RIDE = "VirtualRide"
    VIRTUAL_RUN = "VirtualRun"
    WALK = "Walk"
    HIKE = "Hike"
    ALPINE_SKI = "AlpineSki"
    BACKCOUNTRY_SKI = "BackcountrySki"
    CANOEING = "Canoeing"
    CROSSFIT = "Crossfit"
    EBIKE_RIDE = "EBikeRide"
    ELLIPTICAL = "Elliptical"
    ICE_SKATE = "IceSkate"
    INLINE_SKATE = "InlineSkate"
    KAYAKING = "Kayaking"
    KITESURF = "Kitesurf"
    NORDIC_SKI = "NordicSki"
    ROCK_CLIMBING = "RockClimbing"
    ROLLER_SKI = "RollerSki"
    ROWING = "Rowing"
    SNOWBOARD = "Snowboard"
    SNOWSHOE = "Snowshoe"
    STAIR_STEPPER = "StairStepper"
    STAND_UP_PADDLING = "StandUpPaddling"
    SURFING = "Surfing"
    WEIGHT_TRAINING = "WeightTraining"
    WINDSURF = "Windsurf"
    WORKOUT = "Workout"
    YOGA = "Yoga"


class SportFamily(str, Enum):
    """Groups of related activity types aggregated together for highlights."""
    RUNNING = "running"
    CYCLING = "cycling"
    SWIMMING = "swimming"


SPORT_FAMILY_TYPES: Dict[SportFamily, FrozenSet[ActivityType]] = {
    SportFamily.RUNNING: frozenset({ActivityType.RUN}),
    SportFamily.CYCLING: frozenset({ActivityType.RIDE, ActivityType.VIRTUAL_RIDE}),
    SportFamily.SWIMMING: frozenset({ActivityType.SWIM}),
}

# Sport -> virtual activity type excluded by the per-sport virtual toggles
VIRTUAL_ACTIVITY_TYPES: Dict[SportFamily, ActivityType] = {
    SportFamily.CYCLING: ActivityType.VIRTUAL_RIDE,
    SportFamily.RUNNING: ActivityType.VIRTUAL_RUN,
}

# Strava workout_type values
WORKOUT_TYPE_RACE = 1


def parse_activity_date(value: Any) -> datetime:
    """
    Parse an activity start time.

    Accepts datetime instances and ISO-8601 strings (a trailing "Z" is
    accepted). The wall clock of the value is kept and any offset is
    dropped, so every activity date is naive and mutually comparable.

    Raises:
        InvalidInputError: If the value cannot be parsed
    """
    if isinstance(value, datetime):
        return value.replace(tzinfo=None)
    if isinstance(value, str) and value.strip():
        raw = value.strip()
        if raw.endswith("Z"):
            raw = raw[:-1] + "+00:00"
        try:
            return datetime.fromisoformat(raw).replace(tzinfo=None)
        except ValueError:
            pass
    raise InvalidInputError(f"Unparseable activity date: {value!r}", field="date", value=value)


@dataclass(frozen=True)
class Activity:
    """
    Normalized activity record.

    All pipeline functions work with this format. Optional metrics that the
    source did not provide are None and mean "not applicable".
    """
    id: str
    name: str
    type: ActivityType
    date: datetime
    distance_km: float
    duration_minutes: float
    moving_time_minutes: float
    elevation_gain_meters: float
    average_speed_kmh: float = 0.0
    max_speed_kmh: float = 0.0
    average_heart_rate: Optional[float] = None
    max_heart_rate: Optional[float] = None
    suffer_score: Optional[float] = None
    calories: Optional[float] = None
    kilojoules: Optional[float] = None
    polyline: Optional[str] = None
    workout_type: Optional[int] = None  # For runs: 0=default, 1=race, 2=long run, 3=workout
    kudos_count: Optional[int] = None

    def __post_init__(self):
        try:
            activity_type = ActivityType(self.type)
        except ValueError:
            raise InvalidInputError(
                f"Unknown activity type: {self.type!r}", field="type", value=self.type
            ) from None
        object.__setattr__(self, "type", activity_type)
        object.__setattr__(self, "id", str(self.id))
        object.__setattr__(self, "date", parse_activity_date(self.date))

        distance = self.distance_km
        is_number = isinstance(distance, (int, float)) and not isinstance(distance, bool)
        if not is_number or not math.isfinite(distance) or distance < 0:
            raise InvalidInputError(
                f"Invalid distance for activity {self.id}: {distance!r}",
                field="distance_km",
                value=distance,
            )

    @property
    def is_race(self) -> bool:
        """Strava race flag (meaningful for runs)."""
        return self.type == ActivityType.RUN and self.workout_type == WORKOUT_TYPE_RACE

    @property
    def pace_min_per_km(self) -> Optional[float]:
        """Moving pace in minutes per km, None without distance."""
        if self.distance_km <= 0:
            return None
        return self.moving_time_minutes / self.distance_km

    def to_dict(self) -> dict:
        """Convert to the camelCase record shape used by the cache and API."""
        return {
            "id": self.id,
            "name": self.name,
            "type": self.type.value,
            "date": self.date.isoformat(),
            "distanceKm": self.distance_km,
            "durationMinutes": self.duration_minutes,
            "movingTimeMinutes": self.moving_time_minutes,
            "elevationGainMeters": self.elevation_gain_meters,
            "averageSpeedKmh": self.average_speed_kmh,
            "maxSpeedKmh": self.max_speed_kmh,
            "averageHeartRate": self.average_heart_rate,
            "maxHeartRate": self.max_heart_rate,
            "sufferScore": self.suffer_score,
            "calories": self.calories,
            "kilojoules": self.kilojoules,
            "polyline": self.polyline,
            "workoutType": self.workout_type,
            "kudosCount": self.kudos_count,
        }


def sport_family_of(activity_type: ActivityType) -> Optional[SportFamily]:
    """Return the sport family an activity type belongs to, if any."""
    for family, types in SPORT_FAMILY_TYPES.items():
        if activity_type in types:
            return family
    return None
