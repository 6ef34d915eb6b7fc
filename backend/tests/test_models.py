"""Tests for domain models and settings value objects."""

import math
from datetime import datetime, timezone

import pytest
from pydantic import ValidationError

from sportyear.core.exceptions import InvalidInputError
from sportyear.models.activity import ActivityType, parse_activity_date, sport_family_of
from sportyear.models.activity import SportFamily
from sportyear.models.settings import DistanceFilter, TitleIgnorePattern, YearInReviewSettings


class TestActivity:
    """Test Activity validation."""

    @pytest.mark.parametrize("distance", [-1.0, math.nan, math.inf])
    def test_invalid_distance(self, make_activity, distance: float) -> None:
        with pytest.raises(InvalidInputError) as exc_info:
            make_activity(distance_km=distance)
        assert exc_info.value.field == "distance_km"

    def test_unknown_type(self, make_activity) -> None:
        with pytest.raises(InvalidInputError):
            make_activity(type="Teleport")

    def test_coerces_id_type_and_date(self, make_activity) -> None:
        activity = make_activity(id=99, type="Swim", date="2024-02-03T06:30:00Z")
        assert activity.id == "99"
        assert activity.type is ActivityType.SWIM
        assert activity.date == datetime(2024, 2, 3, 6, 30)

    @pytest.mark.parametrize(
        "value",
        [
            "2024-02-03T06:30:00Z",
            "2024-02-03T06:30:00+02:00",
            datetime(2024, 2, 3, 6, 30, tzinfo=timezone.utc),
        ],
    )
    def test_dates_are_naive_wall_clock(self, value) -> None:
        parsed = parse_activity_date(value)
        assert parsed.tzinfo is None
        assert (parsed.hour, parsed.minute) == (6, 30)

    @pytest.mark.parametrize("distance", ["10", None, True])
    def test_non_numeric_distance(self, make_activity, distance) -> None:
        with pytest.raises(InvalidInputError) as exc_info:
            make_activity(distance_km=distance)
        assert exc_info.value.field == "distance_km"

    def test_unparseable_date(self) -> None:
        with pytest.raises(InvalidInputError):
            parse_activity_date("yesterday")

    def test_is_immutable(self, make_activity) -> None:
        activity = make_activity()
        with pytest.raises(AttributeError):
            activity.distance_km = 99

    def test_race_flag_only_for_runs(self, make_activity) -> None:
        assert make_activity(type="Run", workout_type=1).is_race is True
        assert make_activity(type="Run", workout_type=2).is_race is False
        assert make_activity(type="Ride", workout_type=1).is_race is False

    def test_pace(self, make_activity) -> None:
        assert make_activity(distance_km=10, moving_time_minutes=50).pace_min_per_km == 5
        assert make_activity(distance_km=0).pace_min_per_km is None

    def test_sport_family_of(self) -> None:
        assert sport_family_of(ActivityType.VIRTUAL_RIDE) == SportFamily.CYCLING
        assert sport_family_of(ActivityType.YOGA) is None


class TestSettings:
    """Test settings parsing."""

    def test_camel_case_payload(self) -> None:
        settings = YearInReviewSettings.model_validate(
            {
                "excludedActivityTypes": ["Yoga"],
                "titleIgnorePatterns": [{"pattern": "commute", "excludeFromStats": True}],
                "activityFilters": [
                    {
                        "activityType": "Run",
                        "distanceFilters": [{"operator": "±", "value": 10, "unit": "km"}],
                    }
                ],
                "specialOptions": {"enableTriathlonHighlights": False},
            }
        )
        assert settings.excluded_activity_types == [ActivityType.YOGA]
        assert settings.title_ignore_patterns[0].exclude_from_highlights is True
        assert settings.title_ignore_patterns[0].exclude_from_stats is True
        assert settings.race_detection_config().enable_triathlon_highlights is False

    def test_settings_are_frozen(self) -> None:
        pattern = TitleIgnorePattern(pattern="x")
        with pytest.raises(ValidationError):
            pattern.pattern = "y"

    def test_unknown_unit_rejected(self) -> None:
        with pytest.raises(ValidationError):
            DistanceFilter(operator="gt", value=1, unit="yards")
