"""
Year statistics models.

Computed fresh on every call from the activity list:
- Monthly / per-type / day-of-week breakdowns
- Hour x day heatmap
- Top-level records (references into the input list, not copies)
"""
from dataclasses import dataclass, field
from typing import Dict, List, Optional

from sportyear.models.activity import Activity, ActivityType


@dataclass
class MonthlyStats:
    month: int  # 0-11
    month_name: str
    distance_km: float = 0.0
    elevation_meters: float = 0.0
    time_hours: float = 0.0
    activity_count: int = 0

    def to_dict(self) -> dict:
        return {
            "month": self.month,
            "monthName": self.month_name,
            "distanceKm": self.distance_km,
            "elevationMeters": self.elevation_meters,
            "timeHours": self.time_hours,
            "activityCount": self.activity_count,
        }


@dataclass
class TypeStats:
    count: int = 0
    distance_km: float = 0.0
    elevation_meters: float = 0.0
    time_hours: float = 0.0

    def to_dict(self) -> dict:
        return {
            "count": self.count,
            "distanceKm": self.distance_km,
            "elevationMeters": self.elevation_meters,
            "timeHours": self.time_hours,
        }


@dataclass
class DayOfWeekStats:
    day_of_week: int  # 0-6 (Sunday-Saturday)
    day_name: str
    distance_km: float = 0.0
    time_hours: float = 0.0
    activity_count: int = 0

    @property
    def average_distance(self) -> float:
        return self.distance_km / self.activity_count if self.activity_count else 0.0

    @property
    def average_time(self) -> float:
        return self.time_hours / self.activity_count if self.activity_count else 0.0

    def to_dict(self) -> dict:
        return {
            "dayOfWeek": self.day_of_week,
            "dayName": self.day_name,
            "distanceKm": self.distance_km,
            "timeHours": self.time_hours,
            "activityCount": self.activity_count,
            "averageDistance": self.average_distance,
            "averageTime": self.average_time,
        }


@dataclass
class HourDayHeatmapCell:
    day: int  # 0-6 (Sunday-Saturday)
    hour: int  # 0-23
    activity_count: int = 0
    distance_km: float = 0.0
    time_hours: float = 0.0
    activities: List[Activity] = field(default_factory=list)

    @property
    def key(self) -> str:
        return heatmap_key(self.day, self.hour)

    def to_dict(self) -> dict:
        return {
            "day": self.day,
            "hour": self.hour,
            "activityCount": self.activity_count,
            "distanceKm": self.distance_km,
            "timeHours": self.time_hours,
            "activityIds": [a.id for a in self.activities],
        }


@dataclass
class MostActiveDay:
    day_name: str
    activity_count: int
    distance_km: float
    time_hours: float

    def to_dict(self) -> dict:
        return {
            "dayName": self.day_name,
            "activityCount": self.activity_count,
            "distanceKm": self.distance_km,
            "timeHours": self.time_hours,
        }


@dataclass
class PreferredTrainingTime:
    time_block: str
    start_hour: int
    end_hour: int
    activity_count: int

    def to_dict(self) -> dict:
        return {
            "timeBlock": self.time_block,
            "startHour": self.start_hour,
            "endHour": self.end_hour,
            "activityCount": self.activity_count,
        }


@dataclass
class YearStats:
    """Year-level statistical rollup."""
    year: int
    total_distance_km: float = 0.0
    total_elevation_meters: float = 0.0
    total_time_hours: float = 0.0
    activity_count: int = 0
    total_kudos: int = 0
    by_month: List[MonthlyStats] = field(default_factory=list)
    by_type: Dict[ActivityType, TypeStats] = field(default_factory=dict)
    by_day_of_week: List[DayOfWeekStats] = field(default_factory=list)
    hour_day_heatmap: Dict[str, HourDayHeatmapCell] = field(default_factory=dict)
    most_active_day: Optional[MostActiveDay] = None
    preferred_training_time: Optional[PreferredTrainingTime] = None
    longest_activity: Optional[Activity] = None
    highest_elevation: Optional[Activity] = None

    def to_dict(self) -> dict:
        """Convert to dictionary for the presentation layer."""
        return {
            "year": self.year,
            "totalDistanceKm": self.total_distance_km,
            "totalElevationMeters": self.total_elevation_meters,
            "totalTimeHours": self.total_time_hours,
            "activityCount": self.activity_count,
            "totalKudos": self.total_kudos,
            "byMonth": [m.to_dict() for m in self.by_month],
            "byType": {t.value: s.to_dict() for t, s in self.by_type.items()},
            "byDayOfWeek": [d.to_dict() for d in self.by_day_of_week],
            "hourDayHeatmap": {k: c.to_dict() for k, c in self.hour_day_heatmap.items()},
            "mostActiveDay": self.most_active_day.to_dict() if self.most_active_day else None,
            "preferredTrainingTime": (
                self.preferred_training_time.to_dict() if self.preferred_training_time else None
            ),
            "longestActivity": self.longest_activity.to_dict() if self.longest_activity else None,
            "highestElevation": self.highest_elevation.to_dict() if self.highest_elevation else None,
        }


def heatmap_key(day: int, hour: int) -> str:
    """Composite heatmap key, e.g. "0-7" for Sunday 07:00."""
    return f"{day}-{hour}"
