"""
Sport-family highlight strategies.

Each strategy implements record naming and pace/speed math for one
sport family.
"""
from sportyear.services.analytics.strategies.base import SportHighlightStrategy
from sportyear.services.analytics.strategies.cycling import CyclingStrategy
from sportyear.services.analytics.strategies.running import RunningStrategy
from sportyear.services.analytics.strategies.swimming import SwimmingStrategy

__all__ = [
    "SportHighlightStrategy",
    "CyclingStrategy",
    "RunningStrategy",
    "SwimmingStrategy",
]
