"""Freshness API response schemas."""

from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field

from web.api.analytics.schemas import (
    CustomerStatsResponse,
    MonthlyRevenueResponse,
    PaymentMethodsResponse,
    TopProductsResponse,
)
from web.api.dashboard.schemas import (
    DashboardProductsResponse,
    OrdersByCategoryResponse,
    PaymentSharesResponse,
    SalesChartResponse,
    StatsResponse,
    SystemStatusResponse,
)


class DataTimestamp(BaseModel):
    """When one query's data was computed."""

    model_config = ConfigDict(populate_by_name=True)

    time: datetime
    from_cache: bool = Field(alias="fromCache")


class FreshnessSummary(BaseModel):
    """Combined freshness of every query shown on a screen."""

    model_config = ConfigDict(populate_by_name=True)

    last_updated: datetime | None = Field(alias="lastUpdated")
    age_seconds: float | None = Field(alias="ageSeconds")
    any_from_cache: bool = Field(alias="anyFromCache")
    ttl_minutes: int = Field(alias="ttlMinutes")
    sources: dict[str, DataTimestamp] = Field(alias="dataTimestamps")


class DashboardSnapshot(BaseModel):
    """All dashboard widgets with their combined freshness."""

    stats: StatsResponse
    sales_chart: SalesChartResponse
    top_products: DashboardProductsResponse
    system_status: SystemStatusResponse
    orders_by_category: OrdersByCategoryResponse
    payment_methods: PaymentSharesResponse
    freshness: FreshnessSummary


class AnalyticsSnapshot(BaseModel):
    """All analytics reports with their combined freshness."""

    monthly_revenue: MonthlyRevenueResponse
    top_products: TopProductsResponse
    customer_stats: CustomerStatsResponse
    payment_methods: PaymentMethodsResponse
    freshness: FreshnessSummary
