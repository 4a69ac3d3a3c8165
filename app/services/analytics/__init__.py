"""Analytics services."""

from app.services.analytics.service import AnalyticsService, share

__all__ = ["AnalyticsService", "share"]
