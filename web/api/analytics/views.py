"""Analytics API views - thin layer over services."""

from app.container import container
from web.api.errors import validate_limit, validate_months, validate_period, validate_store_id

from .schemas import (
    CustomerStatsResponse,
    MonthlyRevenueResponse,
    PaymentMethodsResponse,
    TopProductsResponse,
)


def get_monthly_revenue(store_id: str, months: int = 6, refresh: bool = False) -> MonthlyRevenueResponse:
    """Get completed revenue per month."""
    validate_store_id(store_id)
    validate_months(months)
    result = container.analytics.monthly_revenue(store_id, months, refresh=refresh)
    return MonthlyRevenueResponse(data=result.data, timestamp=result.timestamp, from_cache=result.from_cache)


def get_top_products(
    store_id: str, limit: int = 10, period: str = "month", refresh: bool = False
) -> TopProductsResponse:
    """Get best selling products in a period."""
    validate_store_id(store_id)
    validate_limit(limit)
    validate_period(period)
    result = container.analytics.top_products(store_id, limit, period, refresh=refresh)
    return TopProductsResponse(data=result.data, timestamp=result.timestamp, from_cache=result.from_cache)


def get_customer_stats(store_id: str, limit: int = 10, refresh: bool = False) -> CustomerStatsResponse:
    """Get top customers and retention."""
    validate_store_id(store_id)
    validate_limit(limit)
    result = container.analytics.customer_stats(store_id, limit, refresh=refresh)
    return CustomerStatsResponse(data=result.data, timestamp=result.timestamp, from_cache=result.from_cache)


def get_payment_method_stats(store_id: str, period: str = "month", refresh: bool = False) -> PaymentMethodsResponse:
    """Get payment method breakdown in a period."""
    validate_store_id(store_id)
    validate_period(period)
    result = container.analytics.payment_method_stats(store_id, period, refresh=refresh)
    return PaymentMethodsResponse(data=result.data, timestamp=result.timestamp, from_cache=result.from_cache)
