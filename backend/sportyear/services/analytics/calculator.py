"""
Activity Analytics Service - Main engine for the year-in-review data.

Orchestrates:
- Data adaptation from raw payloads
- Filtering for statistics
- Race/highlight detection
- Sport highlight and year statistics aggregation
"""
from dataclasses import dataclass, field
from typing import Any, Dict, Iterable, List, Optional, Sequence, Set, Union

from sportyear.core.logging import PipelineDebugLogger, get_logger
from sportyear.models.activity import Activity
from sportyear.models.highlights import RaceHighlight, SportHighlights, Triathlon
from sportyear.models.settings import FilterTarget, RaceDetectionConfig, YearInReviewSettings
from sportyear.models.stats import YearStats
from sportyear.services.analytics import aggregations, filters, race_detection
from sportyear.services.analytics.adapter import get_adapter
from sportyear.services.analytics.sport_highlights import calculate_sport_highlights

logger = get_logger(__name__)


@dataclass
class EnrichedActivityData:
    """Everything the dashboard needs, computed in one pass."""
    activities_for_stats: List[Activity]
    highlights: List[RaceHighlight]
    sport_highlights: Dict[str, SportHighlights]
    excluded_activity_ids: Set[str] = field(default_factory=set)
    year_stats: Optional[YearStats] = None

    def to_dict(self) -> dict:
        return {
            "activitiesForStats": [a.to_dict() for a in self.activities_for_stats],
            "highlights": [h.to_dict() for h in self.highlights],
            "sportHighlights": {k: v.to_dict() for k, v in self.sport_highlights.items()},
            "excludedActivityIds": sorted(self.excluded_activity_ids),
            "yearStats": self.year_stats.to_dict() if self.year_stats else None,
        }


class ActivityAnalyticsService:
    """
    Main analytics engine.

    Usage:
        service = ActivityAnalyticsService()
        activities = service.normalize(raw_payloads, source="strava")
        data = service.get_enriched_activities(
            activities, settings, include_year_stats=True, year=2024
        )
    """

    def __init__(self, debug_enabled: Optional[bool] = None):
        self.debug_logger = PipelineDebugLogger(logger, enabled=debug_enabled)

    def normalize(
        self,
        raw_items: Iterable[Dict[str, Any]],
        source: str = "strava",
    ) -> List[Activity]:
        """Normalize raw payloads using the adapter for the source."""
        raw_items = list(raw_items)
        with self.debug_logger.track_step("normalize", input_count=len(raw_items)) as step:
            activities = get_adapter(source).normalize_many(raw_items)
            step.set_output(len(activities), source=source)
        return activities

    def get_enriched_activities(
        self,
        activities: Sequence[Activity],
        settings: YearInReviewSettings,
        include_year_stats: bool = False,
        year: Optional[int] = None,
    ) -> EnrichedActivityData:
        """
        Compute all derived dashboard data.

        Args:
            activities: All fetched activities (unfiltered)
            settings: Year-in-review settings
            include_year_stats: Whether to compute year statistics
            year: Year for the statistics (required with include_year_stats)

        Returns:
            EnrichedActivityData
        """
        logger.info(
            "Computing enriched activity data",
            activity_count=len(activities),
            year=year,
            include_year_stats=include_year_stats,
        )

        # Step 1: Filter for statistics
        with self.debug_logger.track_step("filter_stats", input_count=len(activities)) as step:
            activities_for_stats = filters.filter_activities(
                activities, settings, FilterTarget.STATS
            )
            include_in_stats = set(settings.activity_type_settings.include_in_stats)
            if include_in_stats:
                activities_for_stats = [
                    a for a in activities_for_stats if a.type in include_in_stats
                ]
            step.set_output(len(activities_for_stats))

        # Step 2: Detect highlights on the raw list; excluded ids come from the same pass
        with self.debug_logger.track_step("detect_highlights", input_count=len(activities)) as step:
            detection = race_detection.detect_race_highlights_with_excluded(
                activities, settings.race_detection_config()
            )
            step.set_output(
                len(detection.highlights),
                excluded_count=len(detection.excluded_activity_ids),
            )

        # Step 3: Sport highlights over the stats list
        with self.debug_logger.track_step(
            "sport_highlights", input_count=len(activities_for_stats)
        ) as step:
            sport_highlights = calculate_sport_highlights(
                activities_for_stats,
                activity_filters=settings.activity_filters,
                excluded_activity_ids=detection.excluded_activity_ids,
                title_ignore_patterns=settings.title_ignore_patterns,
                include_in_highlights=settings.activity_type_settings.include_in_highlights,
            )
            step.set_output(len(sport_highlights))

        # Step 4: Year statistics (optional)
        year_stats: Optional[YearStats] = None
        if include_year_stats and year is not None:
            with self.debug_logger.track_step(
                "year_stats", input_count=len(activities_for_stats)
            ) as step:
                year_stats = aggregations.calculate_year_stats(activities_for_stats, year)
                step.set_output(year_stats.activity_count)

        logger.info(
            "Computed enriched activity data",
            stats_count=len(activities_for_stats),
            highlight_count=len(detection.highlights),
            sports=list(sport_highlights.keys()),
        )

        return EnrichedActivityData(
            activities_for_stats=activities_for_stats,
            highlights=detection.highlights,
            sport_highlights=sport_highlights,
            excluded_activity_ids=detection.excluded_activity_ids,
            year_stats=year_stats,
        )

    # ========================================
    # Single-step wrappers
    # ========================================

    def get_triathlons(self, activities: Sequence[Activity]) -> List[Triathlon]:
        return race_detection.detect_triathlons(activities)

    def get_race_highlights(
        self,
        activities: Sequence[Activity],
        config: Optional[RaceDetectionConfig] = None,
    ) -> List[RaceHighlight]:
        return race_detection.detect_race_highlights(activities, config)

    def filter_activities(
        self,
        activities: Sequence[Activity],
        settings: YearInReviewSettings,
        target: Union[FilterTarget, str] = FilterTarget.HIGHLIGHTS,
    ) -> List[Activity]:
        return filters.filter_activities(activities, settings, target)

    def calculate_year_stats(self, activities: Sequence[Activity], year: int) -> YearStats:
        return aggregations.calculate_year_stats(activities, year)
