"""
Sport Highlight Aggregator.

Per sport family (running, cycling, swimming) computes totals, the longest
activity, the biggest climb and standard-distance records.

Totals always cover every member of the family. Only the record-style
fields honor highlight exclusion.
"""
from typing import Dict, Iterable, List, Optional, Sequence, Set

from sportyear.core.logging import get_logger
from sportyear.models.activity import Activity, ActivityType, SportFamily
from sportyear.models.highlights import SportHighlights
from sportyear.models.settings import ActivityTypeFilter, FilterTarget, TitleIgnorePattern
from sportyear.services.analytics.filters import is_title_ignored
from sportyear.services.analytics.strategies import (
    CyclingStrategy,
    RunningStrategy,
    SportHighlightStrategy,
    SwimmingStrategy,
)

logger = get_logger(__name__)


# Strategy registry, in display order
STRATEGIES: Dict[SportFamily, SportHighlightStrategy] = {
    SportFamily.RUNNING: RunningStrategy(),
    SportFamily.CYCLING: CyclingStrategy(),
    SportFamily.SWIMMING: SwimmingStrategy(),
}


def get_strategy(family: SportFamily) -> SportHighlightStrategy:
    """Get the highlight strategy for a sport family."""
    return STRATEGIES[SportFamily(family)]


def calculate_sport_highlights(
    activities: Sequence[Activity],
    activity_filters: Optional[Iterable[ActivityTypeFilter]] = None,
    excluded_activity_ids: Optional[Set[str]] = None,
    title_ignore_patterns: Optional[Iterable[TitleIgnorePattern]] = None,
    include_in_highlights: Optional[Iterable[ActivityType]] = None,
) -> Dict[str, SportHighlights]:
    """
    Calculate highlights for each sport family.

    Args:
        activities: Activities to aggregate (typically the stats-filtered list)
        activity_filters: Custom filters whose distance filters define the
            standard distances per family
        excluded_activity_ids: Ids already claimed by race highlights; they
            still count for totals and longest/biggest
        title_ignore_patterns: Patterns; those active for highlights remove
            an activity from longest/biggest/records only
        include_in_highlights: When non-empty, only these raw types take part

    Returns:
        Dict keyed by family value ("running", "cycling", "swimming"); a
        family with no members or no highlight-eligible member is omitted
    """
    activity_filters = list(activity_filters or [])
    patterns = list(title_ignore_patterns or [])
    include_types = list(include_in_highlights or [])

    result: Dict[str, SportHighlights] = {}

    for family, strategy in STRATEGIES.items():
        members = strategy.members(activities, include_types)
        eligible: List[Activity] = [
            a for a in members
            if not is_title_ignored(a, patterns, FilterTarget.HIGHLIGHTS)
        ]

        highlights = strategy.compute(
            members,
            eligible,
            activity_filters=activity_filters,
            excluded_activity_ids=excluded_activity_ids,
        )
        if highlights is None:
            continue

        result[family.value] = highlights

    logger.debug(
        "Calculated sport highlights",
        input_count=len(activities),
        sports=list(result.keys()),
        record_counts={k: len(v.distance_records) for k, v in result.items()},
    )
    return result
