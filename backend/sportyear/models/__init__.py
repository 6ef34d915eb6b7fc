from sportyear.models.activity import (
    Activity,
    ActivityType,
    SportFamily,
    SPORT_FAMILY_TYPES,
    VIRTUAL_ACTIVITY_TYPES,
)
from sportyear.models.highlights import (
    DistanceRecord,
    HighlightType,
    RaceDetectionResult,
    RaceHighlight,
    SportHighlights,
    Triathlon,
    TriathlonDistance,
    TriathlonLegs,
    TriathlonType,
)
from sportyear.models.settings import (
    ActivityTypeFilter,
    ActivityTypeSettings,
    DistanceFilter,
    DistanceOperator,
    DistanceUnit,
    FilterTarget,
    RaceDetectionConfig,
    SpecialOptions,
    TargetToggle,
    TitleIgnorePattern,
    VirtualExclusion,
    YearInReviewSettings,
)
from sportyear.models.stats import (
    DayOfWeekStats,
    HourDayHeatmapCell,
    MonthlyStats,
    MostActiveDay,
    PreferredTrainingTime,
    TypeStats,
    YearStats,
)

__all__ = [
    "Activity",
    "ActivityType",
    "SportFamily",
    "SPORT_FAMILY_TYPES",
    "VIRTUAL_ACTIVITY_TYPES",
    "DistanceRecord",
    "HighlightType",
    "RaceDetectionResult",
    "RaceHighlight",
    "SportHighlights",
    "Triathlon",
    "TriathlonDistance",
    "TriathlonLegs",
    "TriathlonType",
    "ActivityTypeFilter",
    "ActivityTypeSettings",
    "DistanceFilter",
    "DistanceOperator",
    "DistanceUnit",
    "FilterTarget",
    "RaceDetectionConfig",
    "SpecialOptions",
    "TargetToggle",
    "TitleIgnorePattern",
    "VirtualExclusion",
    "YearInReviewSettings",
    "DayOfWeekStats",
    "HourDayHeatmapCell",
    "MonthlyStats",
    "MostActiveDay",
    "PreferredTrainingTime",
    "TypeStats",
    "YearStats",
]
