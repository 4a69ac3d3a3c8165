"""Application settings."""

import os
from pathlib import Path

# Database
DB_PATH = os.getenv("RESTAURANT_DB_PATH", "restaurant.duckdb")

# Logging
LOG_DIR = Path("logs")
LOG_LEVEL = os.getenv("RESTAURANT_LOG_LEVEL", "INFO")

# Cache
CACHE_TTL_SECONDS = int(os.getenv("RESTAURANT_CACHE_TTL", "1200"))  # 20 min
CACHE_TTL_OVERRIDES: dict[str, int] = {}
CACHE_MAX_ENTRIES = int(os.getenv("RESTAURANT_CACHE_MAX_ENTRIES", "10000"))  # in-memory store only

# Analytics
TIMEZONE = os.getenv("RESTAURANT_TIMEZONE", "America/Sao_Paulo")
DASHBOARD_TOP_PRODUCTS = 4
