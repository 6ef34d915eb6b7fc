"""Shared test fixtures.

Activity factories used across the analytics tests.
"""

from datetime import datetime
from itertools import count
from typing import Any, Callable

import pytest

from sportyear.models.activity import Activity

_ids = count(1)


def build_activity(**overrides: Any) -> Activity:
    """Build an Activity with sensible defaults.

    Args:
        **overrides: Any Activity field.

    Returns:
        Activity with a unique id unless one is given.
    """
    moving = overrides.pop("moving_time_minutes", 30.0)
    fields = {
        "id": str(next(_ids)),
        "name": "Morning Run",
        "type": "Run",
        "date": datetime(2024, 6, 3, 7, 0),
        "distance_km": 5.0,
        "duration_minutes": moving,
        "moving_time_minutes": moving,
        "elevation_gain_meters": 0.0,
    }
    fields.update(overrides)
    return Activity(**fields)


@pytest.fixture
def make_activity() -> Callable[..., Activity]:
    """Factory fixture for Activity instances."""
    return build_activity
