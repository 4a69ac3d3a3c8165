"""Analytics API."""

from web.api.analytics.views import (
    get_customer_stats,
    get_monthly_revenue,
    get_payment_method_stats,
    get_top_products,
)

__all__ = [
    "get_monthly_revenue",
    "get_top_products",
    "get_customer_stats",
    "get_payment_method_stats",
]
