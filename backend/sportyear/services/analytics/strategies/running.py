"""
Running Strategy - Highlight calculation for running activities.

Records are ranked by pace (min/km). Road race distances get their
well-known names.
"""
from typing import Dict

from sportyear.models.activity import SportFamily
from sportyear.models.settings import DistanceFilter, DistanceOperator
from sportyear.services.analytics.strategies.base import (
    SportHighlightStrategy,
    format_distance_value,
)

HALF_MARATHON_KM = 21.0975
MARATHON_KM = 42.195

# Window around the official distance still named after the race
NAMED_DISTANCE_WINDOW_KM = 0.3


class RunningStrategy(SportHighlightStrategy):
    """Strategy for running highlights."""

    family = SportFamily.RUNNING
    default_distances = [
        DistanceFilter(operator=DistanceOperator.EQ, value=5),
        DistanceFilter(operator=DistanceOperator.APPROX, value=10),
        DistanceFilter(operator=DistanceOperator.APPROX, value=15),
        DistanceFilter(operator=DistanceOperator.APPROX, value=21.1),
        DistanceFilter(operator=DistanceOperator.APPROX, value=42.2),
    ]

    def record_name(self, distance_filter: DistanceFilter) -> str:
        value_km = distance_filter.value_km
        if abs(value_km - HALF_MARATHON_KM) <= NAMED_DISTANCE_WINDOW_KM:
            return "Half Marathon"
        if abs(value_km - MARATHON_KM) <= NAMED_DISTANCE_WINDOW_KM:
            return "Marathon"
        return f"{format_distance_value(distance_filter.value)}{distance_filter.unit.value}"

    def effort_metrics(self, distance_km: float, moving_time_minutes: float) -> Dict[str, float]:
        return {"pace": moving_time_minutes / distance_km}
