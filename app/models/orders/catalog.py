"""Catalog models - categories and products of a store."""

CATEGORY_DDL = """
CREATE TABLE IF NOT EXISTS category (
    id VARCHAR PRIMARY KEY,
    store_id VARCHAR NOT NULL,
    name VARCHAR NOT NULL
)
"""

PRODUCT_DDL = """
CREATE TABLE IF NOT EXISTS product (
    id VARCHAR PRIMARY KEY,
    store_id VARCHAR NOT NULL,
    category_id VARCHAR,
    name VARCHAR NOT NULL,
    price DOUBLE NOT NULL
)
"""

CATALOG_INDEXES = [
    "CREATE INDEX IF NOT EXISTS idx_category_store ON category(store_id)",
    "CREATE INDEX IF NOT EXISTS idx_product_store ON product(store_id)",
]
