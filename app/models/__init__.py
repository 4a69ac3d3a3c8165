"""Models package - DDL and entities for all domains."""

from app.models.common import (
    CACHE_DDL,
    BaseEntity,
    CachedResult,
    CacheEntry,
    CacheKey,
    InvalidCacheKeyError,
)
from app.models.orders import (
    CATALOG_INDEXES,
    CATEGORY_DDL,
    ORDER_DDL,
    ORDER_INDEXES,
    ORDER_ITEM_DDL,
    PRODUCT_DDL,
    Category,
    Order,
    OrderItem,
    Product,
)

ALL_DDL = [
    # Orders
    CATEGORY_DDL,
    PRODUCT_DDL,
    ORDER_DDL,
    ORDER_ITEM_DDL,
    # Common
    CACHE_DDL,
]

ALL_INDEXES = [
    *CATALOG_INDEXES,
    *ORDER_INDEXES,
]

__all__ = [
    # Common
    "BaseEntity",
    "CACHE_DDL",
    "CacheKey",
    "CacheEntry",
    "CachedResult",
    "InvalidCacheKeyError",
    # Orders
    "CATEGORY_DDL",
    "PRODUCT_DDL",
    "ORDER_DDL",
    "ORDER_ITEM_DDL",
    "Category",
    "Product",
    "Order",
    "OrderItem",
    # All DDL
    "ALL_DDL",
    "ALL_INDEXES",
]
