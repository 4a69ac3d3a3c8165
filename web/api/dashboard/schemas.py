"""Dashboard API response schemas."""

from pydantic import BaseModel

from web.api.schemas import CachedResponse


class StatsData(BaseModel):
    """Today's headline numbers."""

    daily_sales: float
    daily_orders: int
    sales_growth: float
    active_customers: int
    new_customers: int
    subtotal: float
    delivery_fees: float
    average_delivery_time: int
    delivery_time_change: int
    last_hour_orders: int


class StatusCounts(BaseModel):
    pending: int
    preparing: int
    ready: int
    completed: int


class HourlySales(BaseModel):
    """Sales in one hour of today."""

    name: str
    total: float
    subtotal: float
    delivery_fees: float
    orders: int
    average: int
    status: StatusCounts


class SalesSummary(BaseModel):
    total_orders: int
    total_revenue: float
    average_ticket: int
    peak_hour: str
    status: StatusCounts


class SalesChartData(BaseModel):
    """Hourly sales chart."""

    hourly: list[HourlySales]
    summary: SalesSummary


class DashboardProductItem(BaseModel):
    """Best seller of today."""

    product_id: str
    name: str
    quantity: int
    revenue: float


class SystemStatusItem(BaseModel):
    name: str
    status: str


class CategoryShareItem(BaseModel):
    """Orders and revenue share of a category."""

    name: str
    value: int
    total: float
    percentage: int


class PaymentShareItem(BaseModel):
    """Orders and revenue share of a payment method."""

    name: str
    value: int
    total: float
    percentage: int
    subtotal: float
    delivery_fees: float


StatsResponse = CachedResponse[StatsData]
SalesChartResponse = CachedResponse[SalesChartData]
DashboardProductsResponse = CachedResponse[list[DashboardProductItem]]
SystemStatusResponse = CachedResponse[list[SystemStatusItem]]
OrdersByCategoryResponse = CachedResponse[list[CategoryShareItem]]
PaymentSharesResponse = CachedResponse[list[PaymentShareItem]]
