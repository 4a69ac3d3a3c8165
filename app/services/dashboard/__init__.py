"""Dashboard services."""

from app.services.dashboard.service import DashboardService, change_pct

__all__ = ["DashboardService", "change_pct"]
