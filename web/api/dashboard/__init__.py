"""Dashboard API."""

from web.api.dashboard.views import (
    get_orders_by_category,
    get_payment_methods,
    get_sales_chart,
    get_stats,
    get_system_status,
    get_top_products,
)

__all__ = [
    "get_stats",
    "get_sales_chart",
    "get_top_products",
    "get_system_status",
    "get_orders_by_category",
    "get_payment_methods",
]
