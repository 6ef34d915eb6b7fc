"""
Highlight models.

Display-ready projections of notable activities. Composite events keep
references to their constituent activities, never copies.
"""
from dataclasses import dataclass, field
from datetime import date, datetime
from enum import Enum
from typing import List, Optional, Set

from sportyear.models.activity import Activity, SportFamily
from sportyear.models.settings import DistanceFilter


class HighlightType(str, Enum):
    CUSTOM_HIGHLIGHT = "custom-highlight"
    TRIATHLON = "triathlon"


class TriathlonType(str, Enum):
    FULL = "full"
    MOUNTAIN = "mountain"


class TriathlonDistance(str, Enum):
    """Distance category derived from the leg distances."""
    FULL = "full"
    HALF = "half"
    OLYMPIC = "olympic"
    SPRINT = "sprint"
    OTHER = "other"


@dataclass(frozen=True)
class TriathlonLegs:
    swim: Activity
    bike: Activity
    run: Activity

    def as_list(self) -> List[Activity]:
        return [self.swim, self.bike, self.run]


@dataclass
class Triathlon:
    """Same-day swim -> bike -> run composite event."""
    date: date
    activities: TriathlonLegs
    total_distance: float
    total_elevation: float
    total_time: float  # minutes, first leg start to end of last leg
    type: TriathlonType
    distance_category: TriathlonDistance = TriathlonDistance.OTHER

    @property
    def activity_ids(self) -> List[str]:
        return [a.id for a in self.activities.as_list()]


@dataclass
class RaceHighlight:
    """Highlight entry for a notable single activity or composite event."""
    id: str
    name: str
    date: datetime
    type: HighlightType
    distance: float
    elevation: float
    duration: float  # minutes
    badge: str
    activities: Optional[List[Activity]] = None
    is_race: bool = False
    triathlon_type: Optional[TriathlonType] = None

    def to_dict(self) -> dict:
        return {
            "id": self.id,
            "name": self.name,
            "date": self.date.isoformat(),
            "type": self.type.value,
            "distance": self.distance,
            "elevation": self.elevation,
            "duration": self.duration,
            "badge": self.badge,
            "activities": [a.to_dict() for a in self.activities] if self.activities else None,
            "isRace": self.is_race,
            "triathlonType": self.triathlon_type.value if self.triathlon_type else None,
        }


@dataclass
class RaceDetectionResult:
    highlights: List[RaceHighlight] = field(default_factory=list)
    excluded_activity_ids: Set[str] = field(default_factory=set)


@dataclass
class DistanceRecord:
    """Best effort for one standard distance."""
    distance: str  # display name, e.g. "Marathon", "500m"
    activity: Activity
    filter: DistanceFilter
    pace: Optional[float] = None  # min/km for running, min/100m for swimming
    speed: Optional[float] = None  # km/h for cycling

    def to_dict(self) -> dict:
        return {
            "distance": self.distance,
            "activity": self.activity.to_dict(),
            "pace": self.pace,
            "speed": self.speed,
        }


@dataclass
class SportHighlights:
    """Per-sport-family totals and records."""
    sport: SportFamily
    total_distance: float
    total_time: float  # minutes
    total_elevation: float
    activity_count: int
    longest_activity: Activity
    biggest_climb: Optional[Activity] = None
    distance_records: List[DistanceRecord] = field(default_factory=list)
    average_pace: Optional[float] = None
    average_speed: Optional[float] = None

    def to_dict(self) -> dict:
        return {
            "sport": self.sport.value,
            "totalDistance": self.total_distance,
            "totalTime": self.total_time,
            "totalElevation": self.total_elevation,
            "activityCount": self.activity_count,
            "longestActivity": self.longest_activity.to_dict(),
            "biggestClimb": self.biggest_climb.to_dict() if self.biggest_climb else None,
            "distanceRecords": [r.to_dict() for r in self.distance_records],
            "averagePace": self.average_pace,
            "averageSpeed": self.average_speed,
        }
