"""
Services module - Application business logic layer.

Modules:
- analytics: activity filtering, highlight detection and year statistics
"""
from sportyear.services.analytics import ActivityAnalyticsService, EnrichedActivityData

__all__ = [
    "ActivityAnalyticsService",
    "EnrichedActivityData",
]
