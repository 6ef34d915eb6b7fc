"""Tests for ActivityAnalyticsService."""

from datetime import datetime

import pytest

from sportyear.models.settings import YearInReviewSettings
from sportyear.services.analytics.calculator import ActivityAnalyticsService, EnrichedActivityData


@pytest.fixture
def service() -> ActivityAnalyticsService:
    return ActivityAnalyticsService(debug_enabled=True)


@pytest.fixture
def season(make_activity):
    day = datetime(2024, 7, 14)
    return [
        make_activity(id="s1", type="Swim", distance_km=0.75, date=day.replace(hour=8)),
        make_activity(id="b1", type="Ride", distance_km=20, date=day.replace(hour=8, minute=30)),
        make_activity(id="r1", type="Run", distance_km=5, date=day.replace(hour=9, minute=30)),
        make_activity(id="r2", type="Run", distance_km=21.2, moving_time_minutes=100,
                      name="Half Marathon", workout_type=1, date=datetime(2024, 4, 7, 9)),
        make_activity(id="r3", type="Run", distance_km=30, moving_time_minutes=180,
                      name="Long run (test)", date=datetime(2024, 5, 5, 9)),
        make_activity(id="y1", type="Yoga", distance_km=0, date=datetime(2024, 5, 6, 18)),
        make_activity(id="v1", type="VirtualRide", distance_km=40, date=datetime(2024, 2, 2, 19)),
    ]


@pytest.fixture
def settings() -> YearInReviewSettings:
    return YearInReviewSettings(
        excluded_activity_types=["Yoga"],
        title_ignore_patterns=[
            {"pattern": "test", "excludeFromHighlights": True, "excludeFromStats": False}
        ],
        activity_type_settings={"includeInHighlights": ["Run", "Ride", "Swim"]},
    )


class TestGetEnrichedActivities:
    """Test the full enrichment pass."""

    def test_stats_list_excludes_types(self, service, season, settings) -> None:
        data = service.get_enriched_activities(season, settings)

        ids = {a.id for a in data.activities_for_stats}
        assert "y1" not in ids
        assert "r3" in ids
        assert isinstance(data, EnrichedActivityData)

    def test_highlights_and_excluded_ids_agree(self, service, season, settings) -> None:
        data = service.get_enriched_activities(season, settings)

        assert {h.type.value for h in data.highlights} == {"triathlon", "custom-highlight"}
        assert data.excluded_activity_ids == {"s1", "b1", "r1", "r2"}

    def test_sport_highlights_use_stats_list(self, service, season, settings) -> None:
        data = service.get_enriched_activities(season, settings)
        running = data.sport_highlights["running"]

        # The title-ignored long run still counts for totals
        assert running.total_distance == pytest.approx(56.2)
        assert running.longest_activity.id == "r2"
        # VirtualRide is not in include_in_highlights
        assert data.sport_highlights["cycling"].activity_count == 1

    def test_include_in_stats_restricts_types(self, service, season) -> None:
        settings = YearInReviewSettings(activity_type_settings={"includeInStats": ["Run"]})
        data = service.get_enriched_activities(season, settings)
        assert {a.type.value for a in data.activities_for_stats} == {"Run"}

    def test_year_stats_only_when_requested(self, service, season, settings) -> None:
        assert service.get_enriched_activities(season, settings).year_stats is None

        data = service.get_enriched_activities(
            season, settings, include_year_stats=True, year=2024
        )
        assert data.year_stats.activity_count == 6

    def test_to_dict(self, service, season, settings) -> None:
        payload = service.get_enriched_activities(season, settings).to_dict()
        assert payload["excludedActivityIds"] == ["b1", "r1", "r2", "s1"]
        assert "running" in payload["sportHighlights"]


class TestWrappers:
    """Test single-step wrappers."""

    def test_get_triathlons(self, service, season) -> None:
        assert len(service.get_triathlons(season)) == 1

    def test_get_race_highlights(self, service, season) -> None:
        ids = [h.id for h in service.get_race_highlights(season)]
        assert "r2" in ids

    def test_filter_activities(self, service, season, settings) -> None:
        kept = service.filter_activities(season, settings, "highlights")
        assert {a.id for a in kept}.isdisjoint({"y1", "r3"})

    def test_calculate_year_stats(self, service, season) -> None:
        assert service.calculate_year_stats(season, 2023).activity_count == 0

    def test_normalize(self, service) -> None:
        raw = [
            {
                "id": 1,
                "name": "Evening Ride",
                "type": "Ride",
                "start_date_local": "2024-06-01T18:00:00Z",
                "distance": 30000,
                "moving_time": 3600,
            }
        ]
        activities = service.normalize(raw, source="strava")
        assert activities[0].distance_km == pytest.approx(30)


class TestStepTracking:
    """Failures inside a step propagate."""

    def test_invalid_settings_type_propagates(self, service, season) -> None:
        with pytest.raises(AttributeError):
            service.get_enriched_activities(season, settings=None)
