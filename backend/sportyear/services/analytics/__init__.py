"""
Analytics module - Activity processing for the year-in-review dashboard.

This module provides:
- Data adapters for normalizing raw activity payloads
- The activity filter engine
- Race, triathlon and custom highlight detection
- Per-sport highlight strategies and the year statistics aggregator
- An id-indexed activity cache and the orchestrating service
"""
from sportyear.services.analytics.filters import (
    filter_activities,
    is_title_ignored,
    matches_custom_filters,
    matches_distance_filter,
)
from sportyear.services.analytics.race_detection import (
    detect_race_highlights,
    detect_race_highlights_with_excluded,
    detect_triathlons,
)
from sportyear.services.analytics.sport_highlights import calculate_sport_highlights
from sportyear.services.analytics.aggregations import aggregate_year_stats, calculate_year_stats
from sportyear.services.analytics.adapter import (
    RawDataAdapter,
    RecordAdapter,
    StravaAdapter,
    get_adapter,
)
from sportyear.services.analytics.store import ActivityCache
from sportyear.services.analytics.calculator import ActivityAnalyticsService, EnrichedActivityData

__all__ = [
    # Filter engine
    "filter_activities",
    "is_title_ignored",
    "matches_custom_filters",
    "matches_distance_filter",
    # Highlight detection
    "detect_race_highlights",
    "detect_race_highlights_with_excluded",
    "detect_triathlons",
    # Aggregation
    "calculate_sport_highlights",
    "calculate_year_stats",
    "aggregate_year_stats",
    # Adapters
    "RawDataAdapter",
    "RecordAdapter",
    "StravaAdapter",
    "get_adapter",
    # Cache
    "ActivityCache",
    # Service
    "ActivityAnalyticsService",
    "EnrichedActivityData",
]
