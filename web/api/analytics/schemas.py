"""Analytics API response schemas."""

from datetime import datetime

from pydantic import BaseModel

from web.api.schemas import CachedResponse


class RevenuePoint(BaseModel):
    """Revenue of one month."""

    name: str
    date: str
    total: float


class TopProductItem(BaseModel):
    """Product ranked by revenue."""

    product_id: str
    name: str
    quantity: int
    revenue: float


class CustomerItem(BaseModel):
    """Customer ranked by completed orders."""

    customer_id: str
    customer_name: str | None
    order_count: int
    total_spent: float
    last_order: datetime


class CustomerSummary(BaseModel):
    total_customers: int
    new_customers: int
    returning_customers: int
    retention_rate: int


class CustomerStats(BaseModel):
    """Top customers and retention figures."""

    top_customers: list[CustomerItem]
    stats: CustomerSummary


class PaymentMethodItem(BaseModel):
    """Share of a payment method."""

    name: str
    value: int
    total: float
    percentage: int
    count: int


MonthlyRevenueResponse = CachedResponse[list[RevenuePoint]]
TopProductsResponse = CachedResponse[list[TopProductItem]]
CustomerStatsResponse = CachedResponse[CustomerStats]
PaymentMethodsResponse = CachedResponse[list[PaymentMethodItem]]
