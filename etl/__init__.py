"""ETL package - demo data seeding."""

from etl.seed import seed_store

__all__ = [
    "seed_store",
]
