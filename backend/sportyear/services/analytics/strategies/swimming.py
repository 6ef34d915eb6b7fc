"""
Swimming Strategy - Highlight calculation for swimming activities.

Pace is expressed per 100m. Short distances are named in meters.
"""
from typing import Dict

from sportyear.models.activity import SportFamily
from sportyear.models.settings import DistanceFilter, DistanceOperator
from sportyear.services.analytics.strategies.base import (
    SportHighlightStrategy,
    format_distance_value,
)


class SwimmingStrategy(SportHighlightStrategy):
    """Strategy for swimming highlights."""

    family = SportFamily.SWIMMING
    default_distances = [
        DistanceFilter(operator=DistanceOperator.EQ, value=0.1),
        DistanceFilter(operator=DistanceOperator.EQ, value=0.5),
        DistanceFilter(operator=DistanceOperator.EQ, value=1),
        DistanceFilter(operator=DistanceOperator.EQ, value=2),
        DistanceFilter(operator=DistanceOperator.EQ, value=5),
    ]

    def record_name(self, distance_filter: DistanceFilter) -> str:
        value_km = distance_filter.value_km
        if value_km < 1:
            return f"{round(value_km * 1000)}m"
        return f"{format_distance_value(value_km)}km"

    def effort_metrics(self, distance_km: float, moving_time_minutes: float) -> Dict[str, float]:
        # Minutes per 100m
        return {"pace": moving_time_minutes / distance_km / 10}
