"""Freshness API."""

from web.api.freshness.views import get_analytics_snapshot, get_dashboard_snapshot, summarize

__all__ = [
    "summarize",
    "get_dashboard_snapshot",
    "get_analytics_snapshot",
]
