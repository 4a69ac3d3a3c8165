"""Dashboard API views - thin layer over services."""

from app.container import container
from web.api.errors import validate_store_id

from .schemas import (
    DashboardProductsResponse,
    OrdersByCategoryResponse,
    PaymentSharesResponse,
    SalesChartResponse,
    StatsResponse,
    SystemStatusResponse,
)


def get_stats(store_id: str, refresh: bool = False) -> StatsResponse:
    """Get today's headline numbers."""
    validate_store_id(store_id)
    result = container.dashboard.stats(store_id, refresh=refresh)
    return StatsResponse(data=result.data, timestamp=result.timestamp, from_cache=result.from_cache)


def get_sales_chart(store_id: str, refresh: bool = False) -> SalesChartResponse:
    """Get today's hourly sales."""
    validate_store_id(store_id)
    result = container.dashboard.sales_chart(store_id, refresh=refresh)
    return SalesChartResponse(data=result.data, timestamp=result.timestamp, from_cache=result.from_cache)


def get_top_products(store_id: str, refresh: bool = False) -> DashboardProductsResponse:
    """Get today's best sellers."""
    validate_store_id(store_id)
    result = container.dashboard.top_products(store_id, refresh=refresh)
    return DashboardProductsResponse(data=result.data, timestamp=result.timestamp, from_cache=result.from_cache)


def get_system_status(store_id: str, refresh: bool = False) -> SystemStatusResponse:
    """Get status of backing services."""
    validate_store_id(store_id)
    result = container.dashboard.system_status(store_id, refresh=refresh)
    return SystemStatusResponse(data=result.data, timestamp=result.timestamp, from_cache=result.from_cache)


def get_orders_by_category(store_id: str, refresh: bool = False) -> OrdersByCategoryResponse:
    """Get today's category breakdown."""
    validate_store_id(store_id)
    result = container.dashboard.orders_by_category(store_id, refresh=refresh)
    return OrdersByCategoryResponse(data=result.data, timestamp=result.timestamp, from_cache=result.from_cache)


def get_payment_methods(store_id: str, refresh: bool = False) -> PaymentSharesResponse:
    """Get today's payment method breakdown."""
    validate_store_id(store_id)
    result = container.dashboard.payment_methods(store_id, refresh=refresh)
    return PaymentSharesResponse(data=result.data, timestamp=result.timestamp, from_cache=result.from_cache)
