"""
Activity Filter Engine.

Applies user exclusion rules for a consumption target (stats or highlights)
and evaluates custom highlight filters.
"""
from typing import Iterable, List, Optional, Sequence, Union

from sportyear.core.logging import get_logger
from sportyear.models.activity import VIRTUAL_ACTIVITY_TYPES, Activity, ActivityType
from sportyear.models.settings import (
    ActivityTypeFilter,
    DistanceFilter,
    FilterTarget,
    RaceDetectionConfig,
    TitleIgnorePattern,
    YearInReviewSettings,
)

logger = get_logger(__name__)


def filter_activities(
    activities: Sequence[Activity],
    settings: YearInReviewSettings,
    target: Union[FilterTarget, str] = FilterTarget.HIGHLIGHTS,
) -> List[Activity]:
    """
    Filter activities for statistics or highlights.

    An activity is kept only if it passes all three rules:
    1. its type is not in excluded_activity_types (both targets)
    2. it is not a virtual activity of a sport whose virtual toggle is set for the target
    3. no title pattern active for the target matches its name

    Args:
        activities: Activities to filter (not mutated)
        settings: Year-in-review settings holding the rules
        target: Consumption target, 'highlights' by default

    Returns:
        New list with the kept activities in input order
    """
    target = FilterTarget(target)
    excluded_types = set(settings.excluded_activity_types)
    excluded_virtual_types = {
        virtual_type
        for sport, virtual_type in VIRTUAL_ACTIVITY_TYPES.items()
        if settings.exclude_virtual_per_sport.for_sport(sport.value).for_target(target)
    }
    active_patterns = [p for p in settings.title_ignore_patterns if p.excludes(target)]

    kept = [
        activity
        for activity in activities
        if activity.type not in excluded_types
        and activity.type not in excluded_virtual_types
        and not any(p.matches(activity.name) for p in active_patterns)
    ]

    logger.debug(
        "Filtered activities",
        target=target.value,
        input_count=len(activities),
        kept_count=len(kept),
    )
    return kept


def is_title_ignored(
    activity: Activity,
    patterns: Optional[Iterable[TitleIgnorePattern]],
    target: Union[FilterTarget, str] = FilterTarget.HIGHLIGHTS,
) -> bool:
    """Check whether a title pattern active for the target matches the activity name."""
    if not patterns:
        return False
    return any(p.excludes(target) and p.matches(activity.name) for p in patterns)


def matches_distance_filter(distance_km: float, distance_filter: DistanceFilter) -> bool:
    """Check a distance against one filter (unit conversion and tolerance included)."""
    return distance_filter.matches(distance_km)


def find_activity_filter(
    activity_filters: Optional[Iterable[ActivityTypeFilter]],
    activity_type: ActivityType,
) -> Optional[ActivityTypeFilter]:
    """Return the first custom filter configured for an activity type."""
    for activity_filter in activity_filters or ():
        if activity_filter.activity_type == activity_type:
            return activity_filter
    return None


def matches_custom_filters(
    activity: Activity,
    settings: Union[YearInReviewSettings, RaceDetectionConfig],
) -> bool:
    """
    Check whether an activity matches the custom filter for its type.

    The distance axis passes when no distance filters are configured or any
    of them matches; the title axis passes when no title patterns are
    configured or any of them is contained in the name. Both must pass.

    Args:
        activity: Activity to check
        settings: Any settings object carrying activity_filters

    Returns:
        False when no filter exists for the activity type
    """
    activity_filter = find_activity_filter(settings.activity_filters, activity.type)
    if activity_filter is None:
        return False

    distance_ok = not activity_filter.distance_filters or any(
        matches_distance_filter(activity.distance_km, f) for f in activity_filter.distance_filters
    )
    if not distance_ok:
        return False

    name = activity.name.lower()
    return not activity_filter.title_patterns or any(
        pattern.lower() in name for pattern in activity_filter.title_patterns
    )
