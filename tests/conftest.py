"""Shared fixtures: in-memory DuckDB, controllable clock, order data."""

from datetime import datetime, timedelta, timezone
from zoneinfo import ZoneInfo

import duckdb
import pytest

from app.models.orders import Category, Order, OrderItem, Product
from app.repositories.common import CacheRepository, MemoryCacheStore
from app.repositories.db import init_tables
from app.repositories.orders import OrderRepository
from app.services.cache import CacheService

# 15:30 local time in America/Sao_Paulo (UTC-3)
NOW = datetime(2026, 3, 18, 18, 30, tzinfo=timezone.utc)
TZ = ZoneInfo("America/Sao_Paulo")


class FakeClock:
    """Callable clock that only moves when told to."""

    def __init__(self, now: datetime = NOW):
        self.now = now

    def __call__(self) -> datetime:
        return self.now

    def advance(self, **kwargs) -> None:
        self.now += timedelta(**kwargs)


def local(year: int, month: int, day: int, hour: int, minute: int = 0) -> datetime:
    return datetime(year, month, day, hour, minute, tzinfo=TZ)


@pytest.fixture
def clock() -> FakeClock:
    return FakeClock()


@pytest.fixture
def tz() -> ZoneInfo:
    return TZ


@pytest.fixture
def conn():
    c = duckdb.connect(":memory:")
    init_tables(c)
    yield c
    c.close()


@pytest.fixture(params=["duckdb", "memory"])
def store(request, conn, clock):
    """Both cache backends, same contract."""
    if request.param == "duckdb":
        return CacheRepository(conn, clock=clock)
    return MemoryCacheStore(clock=clock)


@pytest.fixture
def cache(store, clock) -> CacheService:
    return CacheService(store, clock=clock)


@pytest.fixture
def order_repo(conn) -> OrderRepository:
    return OrderRepository(conn)


@pytest.fixture
def orders(order_repo) -> OrderRepository:
    """Small hand-computed order history for ``store1`` (and noise in ``store2``)."""
    order_repo.add_category(Category("cat-burgers", "store1", "Burgers"))
    order_repo.add_category(Category("cat-drinks", "store1", "Drinks"))
    order_repo.add_product(Product("p-xburger", "store1", "cat-burgers", "X-Burger", 25.0))
    order_repo.add_product(Product("p-soda", "store1", "cat-drinks", "Soda", 7.0))
    order_repo.add_category(Category("cat-pizza", "store2", "Pizzas"))
    order_repo.add_product(Product("p-pizza", "store2", "cat-pizza", "Pizza", 50.0))

    order_repo.add_order(
        Order(
            id="o1",
            store_id="store1",
            status="completed",
            created_at=local(2026, 3, 18, 12),
            payment_method="pix",
            customer_id="c1",
            customer_name="Ana",
            subtotal=50.0,
            delivery_fee=5.0,
            total=55.0,
            delivery_time=30.0,
            items=[OrderItem("p-xburger", "X-Burger", 2, 25.0)],
        )
    )
    order_repo.add_order(
        Order(
            id="o2",
            store_id="store1",
            status="completed",
            created_at=local(2026, 3, 18, 14),
            payment_method="credit",
            customer_id="c2",
            customer_name="Bruno",
            subtotal=88.0,
            total=88.0,
            delivery_time=40.0,
            items=[
                OrderItem("p-xburger", "X-Burger", 3, 25.0, additionals_total=2.0),
                OrderItem("p-soda", "Soda", 1, 7.0),
            ],
        )
    )
    order_repo.add_order(
        Order(
            id="o3",
            store_id="store1",
            status="pending",
            created_at=local(2026, 3, 18, 15, 10),
            payment_method="pix",
            customer_id="c1",
            customer_name="Ana",
            subtotal=14.0,
            total=14.0,
            items=[OrderItem("p-soda", "Soda", 2, 7.0)],
        )
    )
    order_repo.add_order(
        Order(
            id="o4",
            store_id="store1",
            status="completed",
            created_at=local(2026, 3, 17, 13),
            payment_method="pix",
            customer_id="c1",
            customer_name="Ana",
            subtotal=25.0,
            delivery_fee=5.0,
            total=30.0,
            delivery_time=50.0,
            items=[OrderItem("p-xburger", "X-Burger", 1, 25.0)],
        )
    )
    order_repo.add_order(
        Order(
            id="o5",
            store_id="store1",
            status="completed",
            created_at=local(2026, 2, 10, 12),
            payment_method="money",
            customer_id="c3",
            customer_name="Carla",
            subtotal=35.0,
            total=35.0,
            delivery_time=25.0,
            items=[OrderItem("p-soda", "Soda", 5, 7.0)],
        )
    )
    order_repo.add_order(
        Order(
            id="o6",
            store_id="store2",
            status="completed",
            created_at=local(2026, 3, 18, 13),
            payment_method="pix",
            customer_id="c9",
            customer_name="Zoe",
            subtotal=999.0,
            total=999.0,
            items=[OrderItem("p-pizza", "Pizza", 20, 49.95)],
        )
    )
    return order_repo
