"""Orders domain models - catalog, orders and items."""

from app.models.orders.catalog import CATALOG_INDEXES, CATEGORY_DDL, PRODUCT_DDL
from app.models.orders.entities import Category, Order, OrderItem, Product
from app.models.orders.order import (
    ORDER_DDL,
    ORDER_INDEXES,
    ORDER_ITEM_DDL,
    ORDER_STATUSES,
    PAYMENT_METHOD_NAMES,
)

__all__ = [
    "CATEGORY_DDL",
    "PRODUCT_DDL",
    "CATALOG_INDEXES",
    "ORDER_DDL",
    "ORDER_ITEM_DDL",
    "ORDER_INDEXES",
    "ORDER_STATUSES",
    "PAYMENT_METHOD_NAMES",
    "Category",
    "Product",
    "Order",
    "OrderItem",
]
