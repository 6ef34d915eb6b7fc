"""Tests for race, triathlon and custom highlight detection."""

from datetime import date, datetime

import pytest

from sportyear.models.highlights import HighlightType, TriathlonDistance, TriathlonType
from sportyear.models.settings import (
    ActivityTypeFilter,
    DistanceFilter,
    RaceDetectionConfig,
    TitleIgnorePattern,
)
from sportyear.services.analytics.race_detection import (
    detect_race_highlights,
    detect_race_highlights_with_excluded,
    detect_triathlons,
)


@pytest.fixture
def sprint_day(make_activity):
    """Same-day swim, ride and run in order."""
    return [
        make_activity(
            id="s1", type="Swim", name="1/8 Triathlon - Swim", distance_km=0.4,
            date=datetime(2024, 7, 14, 8, 0), moving_time_minutes=10, elevation_gain_meters=0,
        ),
        make_activity(
            id="b1", type="Ride", name="Bike", distance_km=10.0,
            date=datetime(2024, 7, 14, 8, 15), moving_time_minutes=20, elevation_gain_meters=120,
        ),
        make_activity(
            id="r1", type="Run", name="Run", distance_km=2.5,
            date=datetime(2024, 7, 14, 8, 40), moving_time_minutes=12, elevation_gain_meters=15,
        ),
    ]


# ---------------------------------------------------------------------------
# detect_triathlons
# ---------------------------------------------------------------------------


class TestDetectTriathlons:
    """Test same-day swim -> bike -> run assembly."""

    def test_single_triathlon(self, sprint_day) -> None:
        triathlons = detect_triathlons(sprint_day)

        assert len(triathlons) == 1
        triathlon = triathlons[0]
        assert triathlon.total_distance == pytest.approx(12.9)
        assert triathlon.total_elevation == pytest.approx(135)
        assert triathlon.type == TriathlonType.FULL
        assert triathlon.date == date(2024, 7, 14)
        assert triathlon.activity_ids == ["s1", "b1", "r1"]

    def test_legs_keep_their_own_metrics(self, sprint_day) -> None:
        triathlon = detect_triathlons(sprint_day)[0]
        assert triathlon.activities.swim.distance_km == 0.4
        assert triathlon.activities.bike.elevation_gain_meters == 120

    def test_total_time_spans_swim_start_to_run_end(self, sprint_day) -> None:
        triathlon = detect_triathlons(sprint_day)[0]
        # 40 minutes from swim start to run start, plus the 12 minute run
        assert triathlon.total_time == pytest.approx(52)

    def test_mountain_when_elevation_above_threshold(self, make_activity) -> None:
        activities = [
            make_activity(type="Swim", distance_km=1.5, date=datetime(2024, 8, 1, 7),
                          elevation_gain_meters=0),
            make_activity(type="Ride", distance_km=80, date=datetime(2024, 8, 1, 8),
                          elevation_gain_meters=1300),
            make_activity(type="Run", distance_km=20, date=datetime(2024, 8, 1, 12),
                          elevation_gain_meters=250),
        ]
        triathlon = detect_triathlons(activities)[0]
        assert triathlon.total_elevation == pytest.approx(1550)
        assert triathlon.type == TriathlonType.MOUNTAIN
        assert triathlon.distance_category == TriathlonDistance.HALF

    def test_exactly_threshold_is_not_mountain(self, make_activity) -> None:
        activities = [
            make_activity(type="Swim", date=datetime(2024, 8, 1, 7), elevation_gain_meters=0),
            make_activity(type="Ride", date=datetime(2024, 8, 1, 8), elevation_gain_meters=1000),
            make_activity(type="Run", date=datetime(2024, 8, 1, 9), elevation_gain_meters=0),
        ]
        assert detect_triathlons(activities)[0].type == TriathlonType.FULL

    def test_virtual_ride_counts_as_bike_leg(self, make_activity) -> None:
        activities = [
            make_activity(type="Swim", date=datetime(2024, 3, 2, 6)),
            make_activity(type="VirtualRide", date=datetime(2024, 3, 2, 7)),
            make_activity(type="Run", date=datetime(2024, 3, 2, 8)),
        ]
        assert len(detect_triathlons(activities)) == 1

    def test_out_of_order_legs_produce_nothing(self, make_activity) -> None:
        activities = [
            make_activity(type="Run", date=datetime(2024, 7, 14, 7)),
            make_activity(type="Ride", date=datetime(2024, 7, 14, 8)),
            make_activity(type="Swim", date=datetime(2024, 7, 14, 9)),
        ]
        assert detect_triathlons(activities) == []

    def test_missing_discipline_produces_nothing(self, make_activity) -> None:
        activities = [
            make_activity(type="Swim", date=datetime(2024, 7, 14, 7)),
            make_activity(type="Run", date=datetime(2024, 7, 14, 9)),
        ]
        assert detect_triathlons(activities) == []

    def test_legs_on_different_days_produce_nothing(self, make_activity) -> None:
        activities = [
            make_activity(type="Swim", date=datetime(2024, 7, 14, 22)),
            make_activity(type="Ride", date=datetime(2024, 7, 15, 7)),
            make_activity(type="Run", date=datetime(2024, 7, 15, 9)),
        ]
        assert detect_triathlons(activities) == []

    def test_input_order_does_not_matter(self, sprint_day) -> None:
        reversed_day = list(reversed(sprint_day))
        assert detect_triathlons(reversed_day)[0].activity_ids == ["s1", "b1", "r1"]

    def test_no_activity_used_in_two_triathlons(self, make_activity) -> None:
        day = datetime(2024, 9, 1)
        activities = [
            make_activity(id="s1", type="Swim", date=day.replace(hour=6)),
            make_activity(id="s2", type="Swim", date=day.replace(hour=7)),
            make_activity(id="b1", type="Ride", date=day.replace(hour=8)),
            make_activity(id="r1", type="Run", date=day.replace(hour=9)),
            make_activity(id="b2", type="Ride", date=day.replace(hour=10)),
            make_activity(id="r2", type="Run", date=day.replace(hour=11)),
        ]
        triathlons = detect_triathlons(activities)

        all_ids = [i for t in triathlons for i in t.activity_ids]
        assert len(all_ids) == len(set(all_ids))
        assert len(triathlons) == 2

    def test_sorted_newest_first(self, make_activity) -> None:
        activities = []
        for day in (datetime(2024, 5, 1), datetime(2024, 9, 1)):
            activities += [
                make_activity(type="Swim", date=day.replace(hour=7)),
                make_activity(type="Ride", date=day.replace(hour=8)),
                make_activity(type="Run", date=day.replace(hour=9)),
            ]
        triathlons = detect_triathlons(activities)
        assert [t.date for t in triathlons] == [date(2024, 9, 1), date(2024, 5, 1)]


# ---------------------------------------------------------------------------
# detect_race_highlights
# ---------------------------------------------------------------------------


class TestDetectRaceHighlights:
    """Test the unified highlight list."""

    def test_triathlon_highlight(self, sprint_day) -> None:
        highlights = detect_race_highlights(sprint_day)

        assert len(highlights) == 1
        highlight = highlights[0]
        assert highlight.type == HighlightType.TRIATHLON
        assert highlight.distance == pytest.approx(12.9)
        assert highlight.name == "1/8 Triathlon"
        assert highlight.is_race is True
        assert [a.id for a in highlight.activities] == ["s1", "b1", "r1"]

    def test_triathlon_legs_are_not_single_highlights(self, sprint_day) -> None:
        config = RaceDetectionConfig(
            activity_filters=[
                ActivityTypeFilter(
                    activity_type="Run",
                    distance_filters=[DistanceFilter(operator="gt", value=1)],
                )
            ]
        )
        highlights = detect_race_highlights(sprint_day, config)
        assert [h.type for h in highlights] == [HighlightType.TRIATHLON]

    def test_triathlon_detection_can_be_disabled(self, sprint_day) -> None:
        config = RaceDetectionConfig(enable_triathlon_highlights=False)
        assert detect_race_highlights(sprint_day, config) == []

    def test_race_flag_on_run(self, make_activity) -> None:
        race = make_activity(id="10", type="Run", workout_type=1, name="City 10K")
        ride = make_activity(id="11", type="Ride", workout_type=1)
        highlights = detect_race_highlights([race, ride])

        assert [h.id for h in highlights] == ["10"]
        assert highlights[0].type == HighlightType.CUSTOM_HIGHLIGHT
        assert highlights[0].is_race is True

    def test_custom_filter_match(self, make_activity) -> None:
        marathon = make_activity(id="m", type="Run", distance_km=42.3, name="Marathon")
        easy = make_activity(id="e", type="Run", distance_km=8)
        config = RaceDetectionConfig(
            activity_filters=[
                ActivityTypeFilter(
                    activity_type="Run",
                    distance_filters=[DistanceFilter(operator="±", value=42.2)],
                )
            ]
        )
        highlights = detect_race_highlights([marathon, easy], config)
        assert [h.id for h in highlights] == ["m"]
        assert highlights[0].is_race is False

    def test_title_ignored_activities_are_skipped(self, make_activity) -> None:
        race = make_activity(type="Run", workout_type=1, name="Virtual race (test)")
        config = RaceDetectionConfig(
            title_ignore_patterns=[TitleIgnorePattern(pattern="test")]
        )
        assert detect_race_highlights([race], config) == []

    def test_newest_first(self, make_activity) -> None:
        older = make_activity(id="a", workout_type=1, date=datetime(2024, 4, 1, 9))
        newer = make_activity(id="b", workout_type=1, date=datetime(2024, 10, 1, 9))
        assert [h.id for h in detect_race_highlights([older, newer])] == ["b", "a"]


class TestDetectRaceHighlightsWithExcluded:
    """The excluded ids must agree with the highlight list."""

    def test_excluded_ids_match_highlights(self, sprint_day, make_activity) -> None:
        race = make_activity(id="race", workout_type=1, date=datetime(2024, 5, 5, 9))
        plain = make_activity(id="plain", date=datetime(2024, 5, 6, 9))
        result = detect_race_highlights_with_excluded(sprint_day + [race, plain])

        highlighted_ids = set()
        for highlight in result.highlights:
            if highlight.activities:
                highlighted_ids.update(a.id for a in highlight.activities)
            else:
                highlighted_ids.add(highlight.id)

        assert result.excluded_activity_ids == highlighted_ids
        assert result.excluded_activity_ids == {"s1", "b1", "r1", "race"}

    def test_same_highlights_as_plain_detection(self, sprint_day) -> None:
        result = detect_race_highlights_with_excluded(sprint_day)
        plain = detect_race_highlights(sprint_day)
        assert [h.id for h in result.highlights] == [h.id for h in plain]

    def test_empty_input(self) -> None:
        result = detect_race_highlights_with_excluded([])
        assert result.highlights == []
        assert result.excluded_activity_ids == set()
