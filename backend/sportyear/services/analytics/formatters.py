"""
Display formatters shared by the dashboard views.
"""
import math
from datetime import datetime
from typing import Optional, Union

from sportyear.models.activity import ActivityType

PACE_TYPES = {ActivityType.RUN.value, ActivityType.SWIM.value}


def format_distance(meters: float) -> str:
    """Kilometres with 2 decimals below 10 km, 1 decimal above."""
    km = meters / 1000
    return f"{km:.2f}" if km < 10 else f"{km:.1f}"


def format_distance_with_unit(meters: float) -> str:
    return f"{format_distance(meters)} km"


def format_duration(seconds: float) -> str:
    """
    Format a duration.

    Examples:
        3725 -> "1h 2m", 125 -> "2m 5s", 42 -> "42s"
    """
    seconds = int(seconds)
    hours = seconds // 3600
    minutes = (seconds % 3600) // 60
    secs = seconds % 60

    if hours > 0:
        return f"{hours}h {minutes}m"
    if minutes > 0:
        return f"{minutes}m {secs}s"
    return f"{secs}s"


def format_pace(meters_per_second: float, activity_type: Union[ActivityType, str]) -> str:
    """
    Format a speed for an activity type.

    Runs and swims get a pace in min/km, everything else km/h.
    """
    type_value = activity_type.value if isinstance(activity_type, ActivityType) else activity_type
    if type_value in PACE_TYPES:
        if meters_per_second <= 0:
            return "--:-- /km"
        seconds_per_km = 1000 / meters_per_second
        minutes = int(seconds_per_km // 60)
        seconds = int(seconds_per_km % 60)
        return f"{minutes}:{seconds:02d} /km"
    return f"{meters_per_second * 3.6:.1f} km/h"


def format_pace_minutes(minutes_per_unit: Optional[float]) -> str:
    """Decimal minutes as m:ss (5.5 -> "5:30"), used for record paces."""
    if minutes_per_unit is None or not math.isfinite(minutes_per_unit) or minutes_per_unit <= 0:
        return "--:--"
    total_seconds = int(round(minutes_per_unit * 60))
    return f"{total_seconds // 60}:{total_seconds % 60:02d}"


def format_elevation(meters: float) -> str:
    return f"{round(meters)} m"


def format_heart_rate(bpm: Optional[float] = None) -> str:
    return f"{round(bpm)} bpm" if bpm else "N/A"


def format_date(value: datetime) -> str:
    """e.g. "Mar 5, 2024"."""
    return f"{value.strftime('%b')} {value.day}, {value.year}"


def format_time(value: datetime) -> str:
    """e.g. "07:05 AM"."""
    return value.strftime("%I:%M %p")
