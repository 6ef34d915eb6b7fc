"""
Cycling Strategy - Highlight calculation for cycling activities.

Ride and VirtualRide are merged into one family. Records are ranked by
average speed (km/h).
"""
from typing import Dict

from sportyear.models.activity import SportFamily
from sportyear.models.settings import DistanceFilter, DistanceOperator
from sportyear.services.analytics.strategies.base import (
    SportHighlightStrategy,
    format_distance_value,
)


class CyclingStrategy(SportHighlightStrategy):
    """Strategy for cycling highlights."""

    family = SportFamily.CYCLING
    default_distances = [
        DistanceFilter(operator=DistanceOperator.APPROX, value=50),
        DistanceFilter(operator=DistanceOperator.APPROX, value=100),
        DistanceFilter(operator=DistanceOperator.APPROX, value=150),
        DistanceFilter(operator=DistanceOperator.APPROX, value=200),
    ]

    def record_name(self, distance_filter: DistanceFilter) -> str:
        return f"{format_distance_value(distance_filter.value)}{distance_filter.unit.value}"

    def effort_metrics(self, distance_km: float, moving_time_minutes: float) -> Dict[str, float]:
        return {"speed": distance_km / moving_time_minutes * 60}
