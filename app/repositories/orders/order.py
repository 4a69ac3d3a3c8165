"""Order repository - aggregations over orders, items and catalog.

All time bounds are aware datetimes, half-open ``[start, end)``.
"""

from datetime import datetime

from loguru import logger

from app.models.orders import Category, Order, Product
from app.repositories.base import BaseRepository
from app.repositories.db import from_db_time, to_db_time


class OrderRepository(BaseRepository):
    """Repository for order data access."""

    # --- writes (seeding) ---

    CATEGORY_COLUMNS = ("id", "store_id", "name")
    PRODUCT_COLUMNS = ("id", "store_id", "category_id", "name", "price")
    ORDER_COLUMNS = (
        "id",
        "store_id",
        "customer_id",
        "customer_name",
        "status",
        "payment_method",
        "subtotal",
        "delivery_fee",
        "total",
        "delivery_time",
        "created_at",
    )
    ITEM_COLUMNS = ("product_id", "name", "quantity", "price", "additionals_total")

    def _insert(self, table: str, columns: tuple[str, ...], values: list) -> None:
        placeholders = ", ".join("?" for _ in columns)
        values = [to_db_time(v) if isinstance(v, datetime) else v for v in values]
        self.execute(f"INSERT INTO {table} ({', '.join(columns)}) VALUES ({placeholders})", values)

    def add_category(self, category: Category) -> None:
        self._insert("category", self.CATEGORY_COLUMNS, category.row(self.CATEGORY_COLUMNS))

    def add_product(self, product: Product) -> None:
        self._insert("product", self.PRODUCT_COLUMNS, product.row(self.PRODUCT_COLUMNS))

    def add_order(self, order: Order) -> None:
        """Insert an order with its items."""
        self._insert("orders", self.ORDER_COLUMNS, order.row(self.ORDER_COLUMNS))
        for item in order.items:
            self._insert("order_item", ("order_id", *self.ITEM_COLUMNS), [order.id, *item.row(self.ITEM_COLUMNS)])

    # --- revenue ---

    def revenue_totals(self, store_id: str, start: datetime, end: datetime) -> dict:
        """Sums over completed orders in a window."""
        row = self.fetchone(
            """
            SELECT COUNT(*), COALESCE(SUM(total), 0), COALESCE(SUM(subtotal), 0), COALESCE(SUM(delivery_fee), 0)
            FROM orders
            WHERE store_id = ? AND status = 'completed' AND created_at >= ? AND created_at < ?
            """,
            [store_id, to_db_time(start), to_db_time(end)],
        )
        return {
            "orders": int(row[0]),
            "total": float(row[1]),
            "subtotal": float(row[2]),
            "delivery_fees": float(row[3]),
        }

    def count_orders(self, store_id: str, start: datetime, end: datetime | None = None) -> int:
        """Orders of any status created in a window (open-ended without ``end``)."""
        if end is None:
            row = self.fetchone(
                "SELECT COUNT(*) FROM orders WHERE store_id = ? AND created_at >= ?",
                [store_id, to_db_time(start)],
            )
        else:
            row = self.fetchone(
                "SELECT COUNT(*) FROM orders WHERE store_id = ? AND created_at >= ? AND created_at < ?",
                [store_id, to_db_time(start), to_db_time(end)],
            )
        return int(row[0])

    def order_rows(self, store_id: str, start: datetime, end: datetime, statuses: tuple[str, ...]) -> list[dict]:
        """Raw orders of the given statuses in a window."""
        placeholders = ", ".join("?" for _ in statuses)
        rows = self.fetchall(
            f"""
            SELECT created_at, status, total, subtotal, delivery_fee
            FROM orders
            WHERE store_id = ? AND created_at >= ? AND created_at < ? AND status IN ({placeholders})
            ORDER BY created_at
            """,
            [store_id, to_db_time(start), to_db_time(end), *statuses],
        )
        return [
            {
                "created_at": from_db_time(r[0]),
                "status": r[1],
                "total": float(r[2]),
                "subtotal": float(r[3]),
                "delivery_fee": float(r[4]),
            }
            for r in rows
        ]

    def average_delivery_time(self, store_id: str, start: datetime, end: datetime) -> float:
        """Mean delivery time (minutes) of completed orders, 0 without data."""
        row = self.fetchone(
            """
            SELECT AVG(delivery_time) FROM orders
            WHERE store_id = ? AND status = 'completed' AND delivery_time IS NOT NULL
              AND created_at >= ? AND created_at < ?
            """,
            [store_id, to_db_time(start), to_db_time(end)],
        )
        return float(row[0]) if row and row[0] is not None else 0.0

    # --- customers ---

    def active_customers(self, store_id: str, start: datetime, end: datetime) -> int:
        row = self.fetchone(
            """
            SELECT COUNT(DISTINCT customer_id) FROM orders
            WHERE store_id = ? AND customer_id IS NOT NULL AND created_at >= ? AND created_at < ?
            """,
            [store_id, to_db_time(start), to_db_time(end)],
        )
        return int(row[0])

    def new_customers(self, store_id: str, since: datetime) -> int:
        """Customers whose first order of any status is at or after ``since``."""
        row = self.fetchone(
            """
            SELECT COUNT(*) FROM (
                SELECT customer_id, MIN(created_at) AS first_order
                FROM orders
                WHERE store_id = ? AND customer_id IS NOT NULL
                GROUP BY customer_id
            ) WHERE first_order >= ?
            """,
            [store_id, to_db_time(since)],
        )
        return int(row[0])

    def total_customers(self, store_id: str) -> int:
        """Distinct customers with at least one completed order."""
        row = self.fetchone(
            """
            SELECT COUNT(DISTINCT customer_id) FROM orders
            WHERE store_id = ? AND status = 'completed' AND customer_id IS NOT NULL
            """,
            [store_id],
        )
        return int(row[0])

    def returning_customers(self, store_id: str) -> int:
        """Customers with more than one order of any status."""
        row = self.fetchone(
            """
            SELECT COUNT(*) FROM (
                SELECT customer_id FROM orders
                WHERE store_id = ? AND customer_id IS NOT NULL
                GROUP BY customer_id
                HAVING COUNT(*) > 1
            )
            """,
            [store_id],
        )
        return int(row[0])

    def top_customers(self, store_id: str, limit: int) -> list[dict]:
        """Customers ranked by number of completed orders."""
        rows = self.fetchall(
            f"""
            SELECT customer_id, any_value(customer_name), COUNT(*), SUM(total), MAX(created_at)
            FROM orders
            WHERE store_id = ? AND status = 'completed' AND customer_id IS NOT NULL
            GROUP BY customer_id
            ORDER BY COUNT(*) DESC, SUM(total) DESC, customer_id
            LIMIT {int(limit)}
            """,
            [store_id],
        )
        return [
            {
                "customer_id": r[0],
                "customer_name": r[1],
                "order_count": int(r[2]),
                "total_spent": float(r[3]),
                "last_order": from_db_time(r[4]).isoformat(),
            }
            for r in rows
        ]

    # --- products and categories ---

    def top_products(
        self,
        store_id: str,
        start: datetime,
        end: datetime,
        limit: int,
        include_additionals: bool = False,
    ) -> list[dict]:
        """Products of completed orders ranked by revenue."""
        unit_price = "oi.price + oi.additionals_total" if include_additionals else "oi.price"
        rows = self.fetchall(
            f"""
            SELECT oi.product_id, any_value(oi.name), SUM(oi.quantity), SUM(({unit_price}) * oi.quantity) AS revenue
            FROM orders o
            JOIN order_item oi ON oi.order_id = o.id
            WHERE o.store_id = ? AND o.status = 'completed' AND o.created_at >= ? AND o.created_at < ?
            GROUP BY oi.product_id
            ORDER BY revenue DESC, oi.product_id
            LIMIT {int(limit)}
            """,
            [store_id, to_db_time(start), to_db_time(end)],
        )
        result = [
            {"product_id": r[0], "name": r[1], "quantity": int(r[2]), "revenue": round(float(r[3]), 2)} for r in rows
        ]
        logger.debug("top_products({}): {} products", store_id, len(result))
        return result

    def orders_by_category(self, store_id: str, start: datetime, end: datetime) -> list[dict]:
        """Completed orders and item revenue per catalog category."""
        rows = self.fetchall(
            """
            SELECT c.id, any_value(c.name), COUNT(DISTINCT o.id), SUM(oi.price * oi.quantity) AS category_total
            FROM orders o
            JOIN order_item oi ON oi.order_id = o.id
            JOIN product p ON p.id = oi.product_id AND p.store_id = o.store_id
            JOIN category c ON c.id = p.category_id AND c.store_id = o.store_id
            WHERE o.store_id = ? AND o.status = 'completed' AND o.created_at >= ? AND o.created_at < ?
            GROUP BY c.id
            ORDER BY category_total DESC, c.id
            """,
            [store_id, to_db_time(start), to_db_time(end)],
        )
        return [{"category_id": r[0], "name": r[1], "count": int(r[2]), "total": float(r[3])} for r in rows]

    def payment_methods(self, store_id: str, start: datetime, end: datetime) -> list[dict]:
        """Completed orders grouped by payment method."""
        rows = self.fetchall(
            """
            SELECT payment_method, COUNT(*), SUM(total) AS method_total, SUM(subtotal), SUM(delivery_fee)
            FROM orders
            WHERE store_id = ? AND status = 'completed' AND created_at >= ? AND created_at < ?
            GROUP BY payment_method
            ORDER BY method_total DESC, payment_method
            """,
            [store_id, to_db_time(start), to_db_time(end)],
        )
        return [
            {
                "method": r[0],
                "count": int(r[1]),
                "total": float(r[2]),
                "subtotal": float(r[3]),
                "delivery_fees": float(r[4]),
            }
            for r in rows
        ]
