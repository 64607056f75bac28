"""Mini README: Analytics derived from ledger snapshots.

Exports the colour assignor and the analytics engine. Both are pure, so
callers may invoke them as often as they render.
"""

from .colors import color_for
from .engine import AnalyticsRecord, ItemAnalytics, budget_share, compute_analytics

__all__ = [
    "AnalyticsRecord",
    "ItemAnalytics",
    "budget_share",
    "color_for",
    "compute_analytics",
]
