"""Demo data - catalog and order history for a store."""

import random
from datetime import datetime, timedelta
from zoneinfo import ZoneInfo

import duckdb
import polars as pl
from loguru import logger

from app.models.common import utcnow
from app.models.orders import ORDER_STATUSES, PAYMENT_METHOD_NAMES
from app.repositories.db import to_db_time
from app.services.cache import CacheService
from app.services.periods import day_bounds
from settings import TIMEZONE

CATALOG = {
    "Burgers": [("X-Burger", 25.0), ("X-Bacon", 29.0), ("X-Salad", 24.0), ("X-Egg", 26.0)],
    "Pizzas": [("Margherita", 45.0), ("Pepperoni", 52.0), ("Four Cheese", 55.0)],
    "Drinks": [("Soda", 7.0), ("Orange Juice", 9.0), ("Water", 4.0)],
    "Desserts": [("Brownie", 12.0), ("Acai Bowl", 18.0)],
}

CUSTOMERS = [
    "Ana Souza", "Bruno Lima", "Carla Dias", "Diego Rocha", "Elisa Melo",
    "Fabio Reis", "Gabriela Nunes", "Heitor Pires", "Isabela Castro", "Joao Alves",
    "Karina Lopes", "Lucas Moura", "Marina Costa", "Nicolas Prado", "Olivia Ramos",
]

PAYMENT_METHODS = list(PAYMENT_METHOD_NAMES)[:5]
DELIVERY_FEES = [0.0, 5.0, 8.0]

# Patterns cleared after new orders land in a store
INVALIDATED_PATTERNS = ("dashboard.*", "analytics.*")

ORDER_SCHEMA = {
    "id": pl.Utf8,
    "store_id": pl.Utf8,
    "customer_id": pl.Utf8,
    "customer_name": pl.Utf8,
    "status": pl.Utf8,
    "payment_method": pl.Utf8,
    "subtotal": pl.Float64,
    "delivery_fee": pl.Float64,
    "total": pl.Float64,
    "delivery_time": pl.Float64,
    "created_at": pl.Datetime("us"),
}

ITEM_SCHEMA = {
    "order_id": pl.Utf8,
    "product_id": pl.Utf8,
    "name": pl.Utf8,
    "quantity": pl.Int32,
    "price": pl.Float64,
    "additionals_total": pl.Float64,
}


def build_catalog(store_id: str) -> tuple[list[dict], list[dict]]:
    """Category and product rows with ids derived from the store."""
    categories, products = [], []
    for i, (category, items) in enumerate(CATALOG.items()):
        category_id = f"{store_id}-cat-{i}"
        categories.append({"id": category_id, "store_id": store_id, "name": category})
        for j, (name, price) in enumerate(items):
            products.append(
                {
                    "id": f"{store_id}-prod-{i}-{j}",
                    "store_id": store_id,
                    "category_id": category_id,
                    "name": name,
                    "price": price,
                }
            )
    return categories, products


def build_orders(
    store_id: str,
    products: list[dict],
    days: int,
    orders_per_day: int,
    now: datetime,
    tz: ZoneInfo,
    rng: random.Random,
) -> tuple[list[dict], list[dict]]:
    """Order and item rows spread over the last ``days`` days up to ``now``."""
    orders, items = [], []
    for day in range(days):
        day_start, _ = day_bounds(now, tz, days_ago=day)
        for n in range(orders_per_day):
            created_at = day_start + timedelta(minutes=rng.randint(10 * 60, 23 * 60 - 1))
            if created_at > now:
                continue

            order_id = f"{store_id}-{day:03d}-{n:03d}"
            if day == 0:
                status = rng.choice(ORDER_STATUSES)
            else:
                status = "completed" if rng.random() < 0.9 else "pending"

            subtotal = 0.0
            for product in rng.sample(products, rng.randint(1, 3)):
                quantity = rng.randint(1, 3)
                additionals = rng.choice([0.0, 0.0, 2.5])
                subtotal += (product["price"] + additionals) * quantity
                items.append(
                    {
                        "order_id": order_id,
                        "product_id": product["id"],
                        "name": product["name"],
                        "quantity": quantity,
                        "price": product["price"],
                        "additionals_total": additionals,
                    }
                )

            customer = rng.randrange(len(CUSTOMERS))
            delivery_fee = rng.choice(DELIVERY_FEES)
            orders.append(
                {
                    "id": order_id,
                    "store_id": store_id,
                    "customer_id": f"{store_id}-cust-{customer}",
                    "customer_name": CUSTOMERS[customer],
                    "status": status,
                    "payment_method": rng.choice(PAYMENT_METHODS),
                    "subtotal": round(subtotal, 2),
                    "delivery_fee": delivery_fee,
                    "total": round(subtotal + delivery_fee, 2),
                    "delivery_time": float(rng.randint(20, 60)) if status == "completed" else None,
                    "created_at": to_db_time(created_at),
                }
            )
    return orders, items


def seed_store(
    conn: duckdb.DuckDBPyConnection,
    store_id: str,
    days: int = 30,
    orders_per_day: int = 12,
    seed: int = 42,
    now: datetime | None = None,
    cache: CacheService | None = None,
) -> dict[str, int]:
    """Replace a store's catalog and orders with generated demo data.

    With ``cache`` given, cached dashboard and analytics results of the
    store are cleared afterwards.
    """
    now = now or utcnow()
    rng = random.Random(seed)
    tz = ZoneInfo(TIMEZONE)

    categories, products = build_catalog(store_id)
    orders, items = build_orders(store_id, products, days, orders_per_day, now, tz, rng)

    categories_df = pl.DataFrame(categories, schema={"id": pl.Utf8, "store_id": pl.Utf8, "name": pl.Utf8})
    products_df = pl.DataFrame(
        products,
        schema={"id": pl.Utf8, "store_id": pl.Utf8, "category_id": pl.Utf8, "name": pl.Utf8, "price": pl.Float64},
    )
    orders_df = pl.DataFrame(orders, schema=ORDER_SCHEMA)
    items_df = pl.DataFrame(items, schema=ITEM_SCHEMA)

    conn.execute("BEGIN TRANSACTION")
    try:
        conn.execute(
            "DELETE FROM order_item WHERE order_id IN (SELECT id FROM orders WHERE store_id = ?)",
            [store_id],
        )
        for table in ("orders", "product", "category"):
            conn.execute(f"DELETE FROM {table} WHERE store_id = ?", [store_id])

        for table, df in (
            ("category", categories_df),
            ("product", products_df),
            ("orders", orders_df),
            ("order_item", items_df),
        ):
            conn.register("seed_df", df)
            conn.execute(f"INSERT INTO {table} SELECT * FROM seed_df")
            conn.unregister("seed_df")
        conn.execute("COMMIT")
    except Exception:
        conn.execute("ROLLBACK")
        raise

    logger.info(
        "Seeded store {}: {} categories, {} products, {} orders",
        store_id,
        len(categories),
        len(products),
        len(orders),
    )

    if cache is not None:
        for pattern in INVALIDATED_PATTERNS:
            cache.invalidate_pattern(store_id, pattern)

    return {"categories": len(categories), "products": len(products), "orders": len(orders), "items": len(items)}
