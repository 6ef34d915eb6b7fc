"""
Data Source Adapters - Normalize raw activity payloads into Activity.

Supported sources:
- Strava API (summary activity payloads)
- Cached records (camelCase records written by Activity.to_dict)
"""
from abc import ABC, abstractmethod
from typing import Any, Dict, Iterable, List, Optional

from sportyear.core.exceptions import InvalidInputError
from sportyear.core.logging import get_logger
from sportyear.models.activity import Activity, ActivityType, parse_activity_date

logger = get_logger(__name__)


class RawDataAdapter(ABC):
    """Abstract base class for data source adapters."""

    source_name: str = "unknown"
    required_fields: tuple = ()

    @abstractmethod
    def normalize(self, raw_data: Dict[str, Any]) -> Activity:
        """
        Normalize raw data to an Activity.

        Args:
            raw_data: Raw payload from the source

        Returns:
            Activity

        Raises:
            InvalidInputError: If a required field is missing or invalid
        """
        pass

    def normalize_many(self, raw_items: Iterable[Dict[str, Any]]) -> List[Activity]:
        """Normalize a batch, preserving order."""
        return [self.normalize(item) for item in raw_items]

    def _require(self, raw_data: Dict[str, Any]) -> None:
        for field_name in self.required_fields:
            if raw_data.get(field_name) is None:
                raise InvalidInputError(
                    f"{self.source_name} payload is missing '{field_name}'",
                    field=field_name,
                    value=raw_data.get("id"),
                )

    def _map_activity_type(self, raw_type: Any) -> ActivityType:
        """Map a source type name to ActivityType, Workout when unknown."""
        try:
            return ActivityType(raw_type)
        except ValueError:
            logger.warning(
                "Unknown activity type, mapping to Workout",
                source=self.source_name,
                raw_type=raw_type,
            )
            return ActivityType.WORKOUT


class StravaAdapter(RawDataAdapter):
    """
    Adapter for Strava summary activities.

    Strava reports SI units (meters, seconds, m/s). The start time is taken
    from start_date_local so that calendar days follow the athlete's clock.
    """

    source_name = "strava"
    required_fields = ("id", "type", "distance", "moving_time")

    def normalize(self, raw_data: Dict[str, Any]) -> Activity:
        """Normalize Strava activity data."""
        if raw_data.get("type") is None and raw_data.get("sport_type") is not None:
            raw_data = {**raw_data, "type": raw_data["sport_type"]}
        self._require(raw_data)

        activity = Activity(
            id=str(raw_data["id"]),
            name=raw_data.get("name") or "",
            type=self._map_activity_type(raw_data["type"]),
            date=self._extract_start(raw_data),
            distance_km=self._number(raw_data, "distance") / 1000,
            duration_minutes=(raw_data.get("elapsed_time") or raw_data["moving_time"]) / 60,
            moving_time_minutes=raw_data["moving_time"] / 60,
            elevation_gain_meters=raw_data.get("total_elevation_gain") or 0,
            average_speed_kmh=(raw_data.get("average_speed") or 0) * 3.6,
            max_speed_kmh=(raw_data.get("max_speed") or 0) * 3.6,
            average_heart_rate=raw_data.get("average_heartrate"),
            max_heart_rate=raw_data.get("max_heartrate"),
            suffer_score=raw_data.get("suffer_score"),
            calories=raw_data.get("calories"),
            kilojoules=raw_data.get("kilojoules"),
            polyline=(raw_data.get("map") or {}).get("summary_polyline"),
            workout_type=raw_data.get("workout_type"),
            kudos_count=raw_data.get("kudos_count"),
        )

        logger.debug(
            "Normalized Strava activity",
            activity_id=activity.id,
            activity_type=activity.type.value,
            distance_km=round(activity.distance_km, 2),
        )
        return activity

    def _extract_start(self, raw_data: Dict[str, Any]):
        # start_date_local carries a bogus Z; the parser keeps its wall clock
        local = raw_data.get("start_date_local")
        if local is not None:
            return parse_activity_date(local)
        if raw_data.get("start_date") is None:
            raise InvalidInputError(
                "strava payload is missing 'start_date'", field="start_date", value=raw_data.get("id")
            )
        return parse_activity_date(raw_data["start_date"])

    @staticmethod
    def _number(raw_data: Dict[str, Any], key: str) -> float:
        value = raw_data[key]
        if not isinstance(value, (int, float)) or isinstance(value, bool):
            raise InvalidInputError(f"Non-numeric '{key}': {value!r}", field=key, value=value)
        return float(value)


class RecordAdapter(RawDataAdapter):
    """
    Adapter for already-normalized camelCase records.

    This is the cache format produced by Activity.to_dict(), so cached
    activities round-trip through it.
    """

    source_name = "record"
    required_fields = ("id", "type", "date", "distanceKm")

    def normalize(self, raw_data: Dict[str, Any]) -> Activity:
        """Normalize a cached activity record."""
        self._require(raw_data)

        moving_time = raw_data.get("movingTimeMinutes")
        duration = raw_data.get("durationMinutes")

        return Activity(
            id=str(raw_data["id"]),
            name=raw_data.get("name") or "",
            type=self._map_activity_type(raw_data["type"]),
            date=parse_activity_date(raw_data["date"]),
            distance_km=raw_data["distanceKm"],
            duration_minutes=duration if duration is not None else (moving_time or 0),
            moving_time_minutes=moving_time if moving_time is not None else (duration or 0),
            elevation_gain_meters=raw_data.get("elevationGainMeters") or 0,
            average_speed_kmh=raw_data.get("averageSpeedKmh") or 0,
            max_speed_kmh=raw_data.get("maxSpeedKmh") or 0,
            average_heart_rate=raw_data.get("averageHeartRate"),
            max_heart_rate=raw_data.get("maxHeartRate"),
            suffer_score=raw_data.get("sufferScore"),
            calories=raw_data.get("calories"),
            kilojoules=raw_data.get("kilojoules"),
            polyline=raw_data.get("polyline"),
            workout_type=raw_data.get("workoutType"),
            kudos_count=raw_data.get("kudosCount"),
        )


# Adapter registry
_ADAPTERS = {
    "strava": StravaAdapter,
    "record": RecordAdapter,
}


def get_adapter(source: Optional[str]) -> RawDataAdapter:
    """
    Get the appropriate adapter for a data source.

    Args:
        source: Data source name (strava, record)

    Returns:
        Adapter instance; unknown sources fall back to RecordAdapter
    """
    adapter_class = _ADAPTERS.get((source or "").lower())

    if not adapter_class:
        logger.warning("Unknown data source, falling back to record", source=source)
        adapter_class = RecordAdapter

    return adapter_class()
