"""
Base Strategy - Abstract interface for sport-family highlight calculations.
"""
from abc import ABC, abstractmethod
from typing import Dict, FrozenSet, Iterable, List, Optional, Sequence, Set

from sportyear.models.activity import SPORT_FAMILY_TYPES, Activity, ActivityType, SportFamily
from sportyear.models.highlights import DistanceRecord, SportHighlights
from sportyear.models.settings import ActivityTypeFilter, DistanceFilter


class SportHighlightStrategy(ABC):
    """
    Abstract base class for per-sport-family highlight calculation.

    Subclasses provide the family-specific pieces:
    - default standard distances
    - record display names
    - pace or speed math
    """

    family: SportFamily
    default_distances: List[DistanceFilter] = []

    @property
    def activity_types(self) -> FrozenSet[ActivityType]:
        return SPORT_FAMILY_TYPES[self.family]

    @abstractmethod
    def record_name(self, distance_filter: DistanceFilter) -> str:
        """
        Display name for a standard distance.

        Args:
            distance_filter: Configured or default distance filter

        Returns:
            Name such as "Marathon", "500m" or "100km"
        """
        pass

    @abstractmethod
    def effort_metrics(self, distance_km: float, moving_time_minutes: float) -> Dict[str, float]:
        """
        Pace or speed for an effort.

        Returns:
            Dict with a "pace" or "speed" key
        """
        pass

    # ========================================
    # Shared Helper Methods
    # ========================================

    def members(
        self,
        activities: Iterable[Activity],
        include_types: Optional[Iterable[ActivityType]] = None,
    ) -> List[Activity]:
        """Activities of this family, optionally restricted to some raw types."""
        allowed = set(self.activity_types)
        if include_types:
            allowed &= {ActivityType(t) for t in include_types}
        return [a for a in activities if a.type in allowed]

    def standard_distances(
        self,
        activity_filters: Optional[Iterable[ActivityTypeFilter]],
    ) -> List[DistanceFilter]:
        """
        Distance filters configured for this family, deduplicated.

        Falls back to the family defaults when nothing is configured.
        """
        configured: Dict[tuple, DistanceFilter] = {}
        for activity_filter in activity_filters or ():
            if activity_filter.activity_type not in self.activity_types:
                continue
            for distance_filter in activity_filter.distance_filters:
                configured.setdefault(distance_filter.dedupe_key(), distance_filter)

        distances = list(configured.values()) or list(self.default_distances)
        return sorted(distances, key=lambda f: f.value_km)

    def best_for_distance(
        self,
        candidates: Sequence[Activity],
        distance_filter: DistanceFilter,
    ) -> Optional[DistanceRecord]:
        """
        Find the fastest matching effort for one standard distance.

        Args:
            candidates: Activities eligible for records
            distance_filter: Target distance and operator

        Returns:
            DistanceRecord or None if nothing matches
        """
        matching = [
            a for a in candidates
            if a.distance_km > 0
            and a.moving_time_minutes > 0
            and distance_filter.matches(a.distance_km)
        ]
        if not matching:
            return None

        best = min(matching, key=lambda a: (a.moving_time_minutes / a.distance_km, a.date, a.id))
        return DistanceRecord(
            distance=self.record_name(distance_filter),
            activity=best,
            filter=distance_filter,
            **self.effort_metrics(best.distance_km, best.moving_time_minutes),
        )

    def compute(
        self,
        members: Sequence[Activity],
        eligible: Sequence[Activity],
        activity_filters: Optional[Iterable[ActivityTypeFilter]] = None,
        excluded_activity_ids: Optional[Set[str]] = None,
    ) -> Optional[SportHighlights]:
        """
        Compute the family highlights.

        Args:
            members: All family activities, used for totals
            eligible: Members not excluded from highlights by title pattern
            activity_filters: Custom filters holding standard distances
            excluded_activity_ids: Ids already shown as race highlights,
                skipped for distance records only

        Returns:
            SportHighlights, or None when no member is eligible
        """
        if not members or not eligible:
            return None

        excluded = excluded_activity_ids or set()

        total_distance = sum(a.distance_km for a in members)
        total_time = sum(a.moving_time_minutes or 0 for a in members)
        total_elevation = sum(a.elevation_gain_meters or 0 for a in members)

        longest = max(eligible, key=lambda a: a.distance_km)
        climbers = [a for a in eligible if (a.elevation_gain_meters or 0) > 0]
        biggest_climb = max(climbers, key=lambda a: a.elevation_gain_meters) if climbers else None

        record_candidates = [a for a in eligible if a.id not in excluded]
        records = []
        for distance_filter in self.standard_distances(activity_filters):
            record = self.best_for_distance(record_candidates, distance_filter)
            if record is not None:
                records.append(record)

        averages: Dict[str, float] = {}
        if total_distance > 0 and total_time > 0:
            averages = self.effort_metrics(total_distance, total_time)

        return SportHighlights(
            sport=self.family,
            total_distance=total_distance,
            total_time=total_time,
            total_elevation=total_elevation,
            activity_count=len(members),
            longest_activity=longest,
            biggest_climb=biggest_climb,
            distance_records=records,
            average_pace=averages.get("pace"),
            average_speed=averages.get("speed"),
        )


def format_distance_value(value: float) -> str:
    """Compact number for record names (50.0 -> "50", 21.1 -> "21.1")."""
    return f"{round(value, 2):g}"
