"""
Year Statistics Aggregator.

Builds the year-level rollup shown on the year-in-review dashboard.
All time sums use moving time.
"""
from typing import Dict, List, Optional, Sequence, Tuple

from sportyear.core.logging import get_logger
from sportyear.models.activity import Activity, ActivityType
from sportyear.models.stats import (
    DayOfWeekStats,
    HourDayHeatmapCell,
    MonthlyStats,
    MostActiveDay,
    PreferredTrainingTime,
    TypeStats,
    YearStats,
    heatmap_key,
)

logger = get_logger(__name__)

MONTH_NAMES = [
    "January", "February", "March", "April", "May", "June",
    "July", "August", "September", "October", "November", "December",
]

# Sunday first, matching day_of_week 0-6
DAY_NAMES = ["Sunday", "Monday", "Tuesday", "Wednesday", "Thursday", "Friday", "Saturday"]

# Fixed 4-hour blocks: (label, start_hour, end_hour exclusive)
TRAINING_TIME_BLOCKS: List[Tuple[str, int, int]] = [
    ("Night", 0, 4),
    ("Early Morning", 4, 8),
    ("Morning", 8, 12),
    ("Afternoon", 12, 16),
    ("Evening", 16, 20),
    ("Late Evening", 20, 24),
]


def day_of_week(activity: Activity) -> int:
    """Weekday index with Sunday = 0."""
    return (activity.date.weekday() + 1) % 7


def _hours(activity: Activity) -> float:
    return (activity.moving_time_minutes or 0) / 60


# ========================================
# Breakdowns
# ========================================

def aggregate_by_month(activities: Sequence[Activity]) -> List[MonthlyStats]:
    """All 12 months, empty months zero-filled."""
    months = [MonthlyStats(month=i, month_name=name) for i, name in enumerate(MONTH_NAMES)]
    for activity in activities:
        stats = months[activity.date.month - 1]
        stats.distance_km += activity.distance_km
        stats.elevation_meters += activity.elevation_gain_meters or 0
        stats.time_hours += _hours(activity)
        stats.activity_count += 1
    return months


def aggregate_by_type(activities: Sequence[Activity]) -> Dict[ActivityType, TypeStats]:
    """Only types that occur are present."""
    by_type: Dict[ActivityType, TypeStats] = {}
    for activity in activities:
        stats = by_type.setdefault(activity.type, TypeStats())
        stats.count += 1
        stats.distance_km += activity.distance_km
        stats.elevation_meters += activity.elevation_gain_meters or 0
        stats.time_hours += _hours(activity)
    return by_type


def aggregate_by_day_of_week(activities: Sequence[Activity]) -> List[DayOfWeekStats]:
    days = [DayOfWeekStats(day_of_week=i, day_name=name) for i, name in enumerate(DAY_NAMES)]
    for activity in activities:
        stats = days[day_of_week(activity)]
        stats.distance_km += activity.distance_km
        stats.time_hours += _hours(activity)
        stats.activity_count += 1
    return days


def aggregate_hour_day_heatmap(activities: Sequence[Activity]) -> Dict[str, HourDayHeatmapCell]:
    """
    Build the 7x24 heatmap.

    Every cell is present, keyed "day-hour" (e.g. "1-7" is Monday 07:00),
    so per-hour counts can be read without checking for missing keys.
    """
    heatmap = {
        heatmap_key(day, hour): HourDayHeatmapCell(day=day, hour=hour)
        for day in range(7)
        for hour in range(24)
    }
    for activity in activities:
        cell = heatmap[heatmap_key(day_of_week(activity), activity.date.hour)]
        cell.activity_count += 1
        cell.distance_km += activity.distance_km
        cell.time_hours += _hours(activity)
        cell.activities.append(activity)
    return heatmap


# ========================================
# Records
# ========================================

def find_most_active_day(by_day_of_week: Sequence[DayOfWeekStats]) -> Optional[MostActiveDay]:
    """Weekday with the highest distance, earliest day on ties."""
    active = [d for d in by_day_of_week if d.activity_count > 0]
    if not active:
        return None
    best = max(active, key=lambda d: (d.distance_km, -d.day_of_week))
    return MostActiveDay(
        day_name=best.day_name,
        activity_count=best.activity_count,
        distance_km=best.distance_km,
        time_hours=best.time_hours,
    )


def find_preferred_training_time(
    heatmap: Dict[str, HourDayHeatmapCell],
) -> Optional[PreferredTrainingTime]:
    """Training block with the most activity starts, earliest block on ties."""
    counts_by_hour = [0] * 24
    for cell in heatmap.values():
        counts_by_hour[cell.hour] += cell.activity_count

    best: Optional[PreferredTrainingTime] = None
    for label, start, end in TRAINING_TIME_BLOCKS:
        count = sum(counts_by_hour[start:end])
        if count > 0 and (best is None or count > best.activity_count):
            best = PreferredTrainingTime(
                time_block=label, start_hour=start, end_hour=end, activity_count=count
            )
    return best


def _first_max(activities: Sequence[Activity], key) -> Optional[Activity]:
    """First activity with a strictly positive maximum value, or None."""
    best: Optional[Activity] = None
    best_value = 0
    for activity in activities:
        value = key(activity) or 0
        if value > best_value:
            best, best_value = activity, value
    return best


# ========================================
# Public API
# ========================================

def calculate_year_stats(activities: Sequence[Activity], year: int) -> YearStats:
    """
    Calculate the year-level statistics.

    Args:
        activities: Activities to aggregate (typically stats-filtered);
            activities outside the year are ignored
        year: Calendar year

    Returns:
        YearStats. For an empty year all totals are zero, every month,
        weekday and heatmap cell is present, and the optional records are None.
    """
    year_activities = [a for a in activities if a.date.year == year]

    by_day_of_week = aggregate_by_day_of_week(year_activities)
    heatmap = aggregate_hour_day_heatmap(year_activities)

    stats = YearStats(
        year=year,
        total_distance_km=sum(a.distance_km for a in year_activities),
        total_elevation_meters=sum(a.elevation_gain_meters or 0 for a in year_activities),
        total_time_hours=sum(_hours(a) for a in year_activities),
        activity_count=len(year_activities),
        total_kudos=sum(a.kudos_count or 0 for a in year_activities),
        by_month=aggregate_by_month(year_activities),
        by_type=aggregate_by_type(year_activities),
        by_day_of_week=by_day_of_week,
        hour_day_heatmap=heatmap,
        most_active_day=find_most_active_day(by_day_of_week),
        preferred_training_time=find_preferred_training_time(heatmap),
        longest_activity=_first_max(year_activities, lambda a: a.distance_km),
        highest_elevation=_first_max(year_activities, lambda a: a.elevation_gain_meters),
    )

    logger.debug(
        "Calculated year stats",
        year=year,
        input_count=len(activities),
        activity_count=stats.activity_count,
        total_distance_km=round(stats.total_distance_km, 2),
    )
    return stats


# Name used by the dashboard code paths
aggregate_year_stats = calculate_year_stats
