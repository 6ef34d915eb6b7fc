"""
Year-in-review settings value objects.

These mirror the persisted dashboard settings. They accept both snake_case
field names and the camelCase keys used by the settings provider, and are
immutable once built. Every pipeline function receives them explicitly.
"""
from enum import Enum
from typing import List

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

from sportyear.models.activity import ActivityType

# Miles per kilometre
MILES_PER_KM = 0.621371

# Tolerances for the approximate distance operators
EQ_TOLERANCE_RATIO = 0.10
APPROX_TOLERANCE_RATIO = 0.05
EXACT_TOLERANCE_KM = 0.1


class FilterTarget(str, Enum):
    """Consumption context a filter rule applies to."""
    STATS = "stats"
    HIGHLIGHTS = "highlights"


class DistanceOperator(str, Enum):
    """Comparison modes for a configured target distance."""
    GT = "gt"
    GTE = "gte"
    LT = "lt"
    LTE = "lte"
    EQ = "eq"  # legacy approximate match, ±10%
    APPROX = "±"  # best match, ±5%
    EXACT = "="  # ±0.1 km


class DistanceUnit(str, Enum):
    KM = "km"
    MI = "mi"


class _SettingsModel(BaseModel):
    model_config = ConfigDict(
        frozen=True,
        populate_by_name=True,
        alias_generator=to_camel,
    )


class TitleIgnorePattern(_SettingsModel):
    """Title blocklist entry with independent per-target flags."""
    pattern: str
    exclude_from_highlights: bool = True
    exclude_from_stats: bool = False

    def excludes(self, target: FilterTarget) -> bool:
        """Whether this pattern is active for the given target."""
        if FilterTarget(target) == FilterTarget.HIGHLIGHTS:
            return self.exclude_from_highlights
        return self.exclude_from_stats

    def matches(self, name: str) -> bool:
        """Case-insensitive substring match against an activity name."""
        return self.pattern.lower() in (name or "").lower()


class DistanceFilter(_SettingsModel):
    """A target distance with its comparison operator."""
    operator: DistanceOperator
    value: float = Field(..., ge=0)
    unit: DistanceUnit = DistanceUnit.KM

    @property
    def value_km(self) -> float:
        """Target distance converted to kilometres."""
        if self.unit == DistanceUnit.MI:
            return self.value / MILES_PER_KM
        return self.value

    def matches(self, distance_km: float) -> bool:
        """
        Check whether a distance satisfies this filter.

        Args:
            distance_km: Activity distance in km

        Returns:
            True if the distance matches the operator and target
        """
        target = self.value_km
        operator = self.operator

        if operator == DistanceOperator.GT:
            return distance_km > target
        if operator == DistanceOperator.GTE:
            return distance_km >= target
        if operator == DistanceOperator.LT:
            return distance_km < target
        if operator == DistanceOperator.LTE:
            return distance_km <= target
        if operator == DistanceOperator.EQ:
            return abs(distance_km - target) <= target * EQ_TOLERANCE_RATIO
        if operator == DistanceOperator.APPROX:
            return abs(distance_km - target) <= target * APPROX_TOLERANCE_RATIO
        if operator == DistanceOperator.EXACT:
            return abs(distance_km - target) <= EXACT_TOLERANCE_KM
        raise AssertionError(f"Unhandled distance operator: {operator!r}")

    def dedupe_key(self) -> tuple:
        return (self.operator, self.value, self.unit)


class ActivityTypeFilter(_SettingsModel):
    """Custom highlight rule for one activity type."""
    activity_type: ActivityType
    distance_filters: List[DistanceFilter] = Field(default_factory=list)
    title_patterns: List[str] = Field(default_factory=list)


class TargetToggle(_SettingsModel):
    highlights: bool = False
    stats: bool = False

    def for_target(self, target: FilterTarget) -> bool:
        if FilterTarget(target) == FilterTarget.HIGHLIGHTS:
            return self.highlights
        return self.stats


class VirtualExclusion(_SettingsModel):
    """Per-sport toggles excluding virtual activities."""
    cycling: TargetToggle = Field(default_factory=TargetToggle)
    running: TargetToggle = Field(default_factory=TargetToggle)
    swimming: TargetToggle = Field(default_factory=TargetToggle)

    def for_sport(self, sport: str) -> TargetToggle:
        return getattr(self, sport)


class ActivityTypeSettings(_SettingsModel):
    order: List[ActivityType] = Field(default_factory=list)
    include_in_stats: List[ActivityType] = Field(default_factory=list)
    include_in_highlights: List[ActivityType] = Field(default_factory=list)


class SpecialOptions(_SettingsModel):
    enable_triathlon_highlights: bool = True


class RaceDetectionConfig(_SettingsModel):
    """Configuration consumed by the race/highlight detector."""
    title_ignore_patterns: List[TitleIgnorePattern] = Field(default_factory=list)
    activity_filters: List[ActivityTypeFilter] = Field(default_factory=list)
    enable_triathlon_highlights: bool = True


class YearInReviewSettings(_SettingsModel):
    """User-configurable filtering and inclusion rules."""
    excluded_activity_types: List[ActivityType] = Field(default_factory=list)
    exclude_virtual_per_sport: VirtualExclusion = Field(default_factory=VirtualExclusion)
    title_ignore_patterns: List[TitleIgnorePattern] = Field(default_factory=list)
    activity_filters: List[ActivityTypeFilter] = Field(default_factory=list)
    activity_type_settings: ActivityTypeSettings = Field(default_factory=ActivityTypeSettings)
    special_options: SpecialOptions = Field(default_factory=SpecialOptions)

    def race_detection_config(self) -> RaceDetectionConfig:
        return RaceDetectionConfig(
            title_ignore_patterns=self.title_ignore_patterns,
            activity_filters=self.activity_filters,
            enable_triathlon_highlights=self.special_options.enable_triathlon_highlights,
        )
