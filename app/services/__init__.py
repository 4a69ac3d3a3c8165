"""Services package - service class exports."""

from app.services.analytics.service import AnalyticsService
from app.services.cache.service import CacheService
from app.services.dashboard.service import DashboardService

__all__ = [
    "AnalyticsService",
    "CacheService",
    "DashboardService",
]
