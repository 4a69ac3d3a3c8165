"""Orders repositories."""

from app.repositories.orders.order import OrderRepository

__all__ = ["OrderRepository"]
