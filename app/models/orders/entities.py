"""Orders domain entities."""

from dataclasses import dataclass, field
from datetime import datetime

from app.models.common import BaseEntity


@dataclass
class Category(BaseEntity):
    id: str
    store_id: str
    name: str


@dataclass
class Product(BaseEntity):
    id: str
    store_id: str
    category_id: str | None
    name: str
    price: float


@dataclass
class OrderItem(BaseEntity):
    """A product line in an order."""

    product_id: str
    name: str
    quantity: int
    price: float
    additionals_total: float = 0.0


@dataclass
class Order(BaseEntity):
    """Customer order, as far as analytics read it."""

    id: str
    store_id: str
    status: str
    created_at: datetime
    payment_method: str | None = None
    customer_id: str | None = None
    customer_name: str | None = None
    subtotal: float = 0.0
    delivery_fee: float = 0.0
    total: float = 0.0
    delivery_time: float | None = None
    items: list[OrderItem] = field(default_factory=list)
