"""
Race/Highlight Detector.

Finds notable events in an activity list:
- Triathlons assembled from same-day swim -> bike -> run activities
- Single activities flagged as races or matching a custom highlight filter
"""
import re
from collections import defaultdict
from datetime import date
from typing import Dict, List, Optional, Sequence, Set

from sportyear.core.logging import get_logger
from sportyear.models.activity import Activity, ActivityType
from sportyear.models.highlights import (
    HighlightType,
    RaceDetectionResult,
    RaceHighlight,
    Triathlon,
    TriathlonDistance,
    TriathlonLegs,
    TriathlonType,
)
from sportyear.models.settings import FilterTarget, RaceDetectionConfig
from sportyear.services.analytics.filters import is_title_ignored, matches_custom_filters

logger = get_logger(__name__)

# Total elevation above which a triathlon is classified as mountain
MOUNTAIN_TRIATHLON_ELEVATION_M = 1000

BIKE_TYPES = frozenset({ActivityType.RIDE, ActivityType.VIRTUAL_RIDE})

# Minimum (swim, bike, run) km per distance category, longest first
TRIATHLON_DISTANCE_THRESHOLDS = [
    (TriathlonDistance.FULL, (3.0, 160, 35)),
    (TriathlonDistance.HALF, (1.5, 80, 18)),
    (TriathlonDistance.OLYMPIC, (1.0, 35, 8)),
    (TriathlonDistance.SPRINT, (0.5, 15, 4)),
]

TRIATHLON_BADGES = {
    TriathlonDistance.FULL: ("🏆 Full Distance Triathlon", "Full Distance Triathlon"),
    TriathlonDistance.HALF: ("🥈 Half Distance Triathlon", "Half Distance Triathlon"),
    TriathlonDistance.OLYMPIC: ("🥉 Olympic Triathlon", "Olympic Triathlon"),
    TriathlonDistance.SPRINT: ("⚡ Sprint Triathlon", "Sprint Triathlon"),
    TriathlonDistance.OTHER: ("🏊🚴🏃 Triathlon", "Triathlon"),
}
MOUNTAIN_BADGE = "⛰️ Mountain Triathlon"

_TRIATHLON_KEYWORDS = re.compile(r"triathlon|ironman|70\.3|t100|challenge", re.IGNORECASE)
_GENERIC_SPORT_NAME = re.compile(
    r"^(swim|bike|run|ride|morning|afternoon|evening|lunch)\s*(swim|bike|run|ride)?$",
    re.IGNORECASE,
)
_LEADING_SPORT_WORD = re.compile(r"^(swim|bike|run|ride|cycling|running|swimming)\s+", re.IGNORECASE)
_TRAILING_SPORT_WORD = re.compile(r"\s+(swim|bike|run|ride|cycling|running|swimming)$", re.IGNORECASE)
_TRAILING_SEPARATORS = re.compile(r"\s*[-:]+\s*$")
_TYPE_KEYWORDS = re.compile(
    r"triathlon|ironman|70\.3|t100|challenge|sprint|olympic|full|half", re.IGNORECASE
)


def _chronological(activities: Sequence[Activity]) -> List[Activity]:
    return sorted(activities, key=lambda a: (a.date, a.id))


def _group_by_day(activities: Sequence[Activity]) -> Dict[date, List[Activity]]:
    grouped: Dict[date, List[Activity]] = defaultdict(list)
    for activity in activities:
        grouped[activity.date.date()].append(activity)
    return grouped


def _classify_distance(swim_km: float, bike_km: float, run_km: float) -> TriathlonDistance:
    for category, (min_swim, min_bike, min_run) in TRIATHLON_DISTANCE_THRESHOLDS:
        if swim_km >= min_swim and bike_km >= min_bike and run_km >= min_run:
            return category
    return TriathlonDistance.OTHER


def _find_triples(day_activities: Sequence[Activity]) -> List[TriathlonLegs]:
    """Chain swim -> bike -> run with strictly increasing start times, legs used once."""
    ordered = _chronological(day_activities)
    swims = [a for a in ordered if a.type == ActivityType.SWIM]
    bikes = [a for a in ordered if a.type in BIKE_TYPES]
    runs = [a for a in ordered if a.type == ActivityType.RUN]

    used: Set[str] = set()
    triples: List[TriathlonLegs] = []

    for swim in swims:
        bike = next((b for b in bikes if b.id not in used and b.date > swim.date), None)
        if bike is None:
            continue
        run = next((r for r in runs if r.id not in used and r.date > bike.date), None)
        if run is None:
            continue
        used.update({swim.id, bike.id, run.id})
        triples.append(TriathlonLegs(swim=swim, bike=bike, run=run))

    return triples


def _build_triathlon(day: date, legs: TriathlonLegs) -> Triathlon:
    swim, bike, run = legs.swim, legs.bike, legs.run
    total_distance = swim.distance_km + bike.distance_km + run.distance_km
    total_elevation = (
        (swim.elevation_gain_meters or 0)
        + (bike.elevation_gain_meters or 0)
        + (run.elevation_gain_meters or 0)
    )
    # Elapsed from the swim start to the end of the run, transitions included
    total_time = (run.date - swim.date).total_seconds() / 60 + (run.moving_time_minutes or 0)
    triathlon_type = (
        TriathlonType.MOUNTAIN
        if total_elevation > MOUNTAIN_TRIATHLON_ELEVATION_M
        else TriathlonType.FULL
    )

    return Triathlon(
        date=day,
        activities=legs,
        total_distance=total_distance,
        total_elevation=total_elevation,
        total_time=total_time,
        type=triathlon_type,
        distance_category=_classify_distance(swim.distance_km, bike.distance_km, run.distance_km),
    )


def detect_triathlons(activities: Sequence[Activity]) -> List[Triathlon]:
    """
    Detect triathlons (swim + bike + run on the same calendar day).

    Within a day, legs must start in swim -> bike -> run order. The earliest
    swim gets first pick, and an activity is never a leg of two triathlons.
    Days missing a discipline produce nothing.

    Args:
        activities: Activities to scan

    Returns:
        Detected triathlons, newest first
    """
    triathlons: List[Triathlon] = []

    for day, day_activities in _group_by_day(activities).items():
        for legs in _find_triples(day_activities):
            triathlons.append(_build_triathlon(day, legs))

    triathlons.sort(key=lambda t: (t.date, t.activities.swim.date), reverse=True)

    logger.debug("Detected triathlons", input_count=len(activities), triathlon_count=len(triathlons))
    return triathlons


def _triathlon_display_name(triathlon: Triathlon) -> str:
    legs = triathlon.activities.as_list()
    _, type_name = TRIATHLON_BADGES[triathlon.distance_category]

    best_name: Optional[str] = next((a.name for a in legs if _TRIATHLON_KEYWORDS.search(a.name)), None)
    if best_name is None:
        best_name = next(
            (a.name for a in legs if not _GENERIC_SPORT_NAME.match(a.name.strip())),
            legs[0].name,
        )

    best_name = _LEADING_SPORT_WORD.sub("", best_name)
    best_name = _TRAILING_SPORT_WORD.sub("", best_name)
    best_name = _TRAILING_SEPARATORS.sub("", best_name).strip()

    if best_name and _TYPE_KEYWORDS.search(best_name):
        return best_name
    return type_name


def _triathlon_highlight(triathlon: Triathlon) -> RaceHighlight:
    if triathlon.type == TriathlonType.MOUNTAIN:
        badge = MOUNTAIN_BADGE
    else:
        badge, _ = TRIATHLON_BADGES[triathlon.distance_category]

    return RaceHighlight(
        id=f"tri-{triathlon.date.isoformat()}-{triathlon.activities.swim.id}",
        name=_triathlon_display_name(triathlon),
        date=triathlon.activities.swim.date,
        type=HighlightType.TRIATHLON,
        distance=triathlon.total_distance,
        elevation=triathlon.total_elevation,
        duration=triathlon.total_time,
        badge=badge,
        activities=triathlon.activities.as_list(),
        is_race=True,
        triathlon_type=triathlon.type,
    )


def _activity_highlight(activity: Activity) -> RaceHighlight:
    if activity.is_race:
        badge = f"🏆 {activity.type.value} Race"
    else:
        badge = f"⭐ {activity.type.value} Highlight"

    return RaceHighlight(
        id=activity.id,
        name=activity.name,
        date=activity.date,
        type=HighlightType.CUSTOM_HIGHLIGHT,
        distance=activity.distance_km,
        elevation=activity.elevation_gain_meters or 0,
        duration=activity.moving_time_minutes,
        badge=badge,
        is_race=activity.is_race,
    )


def detect_race_highlights_with_excluded(
    activities: Sequence[Activity],
    config: Optional[RaceDetectionConfig] = None,
) -> RaceDetectionResult:
    """
    Detect race highlights and collect the ids they consume.

    The excluded id set comes from the same pass that builds the highlight
    list, so both always agree.

    Args:
        activities: Activities to scan (unfiltered)
        config: Title ignore patterns and custom activity filters

    Returns:
        RaceDetectionResult with highlights (newest first) and excluded ids
    """
    config = config or RaceDetectionConfig()

    candidates = [
        a for a in activities
        if not is_title_ignored(a, config.title_ignore_patterns, FilterTarget.HIGHLIGHTS)
    ]

    highlights: List[RaceHighlight] = []
    consumed: Set[str] = set()

    if config.enable_triathlon_highlights:
        for triathlon in detect_triathlons(candidates):
            highlights.append(_triathlon_highlight(triathlon))
            consumed.update(triathlon.activity_ids)

    for activity in _chronological(candidates):
        if activity.id in consumed:
            continue
        if activity.is_race or matches_custom_filters(activity, config):
            highlights.append(_activity_highlight(activity))
            consumed.add(activity.id)

    highlights.sort(key=lambda h: (h.date, h.id), reverse=True)

    logger.debug(
        "Detected race highlights",
        input_count=len(activities),
        highlight_count=len(highlights),
        excluded_count=len(consumed),
    )
    return RaceDetectionResult(highlights=highlights, excluded_activity_ids=consumed)


def detect_race_highlights(
    activities: Sequence[Activity],
    config: Optional[RaceDetectionConfig] = None,
) -> List[RaceHighlight]:
    """Detect race highlights (triathlons, races, custom filter matches)."""
    return detect_race_highlights_with_excluded(activities, config).highlights
