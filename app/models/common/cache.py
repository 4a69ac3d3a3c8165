"""Query cache table and entities - shared across all domains."""

from dataclasses import dataclass
from datetime import datetime
from typing import Any

from app.models.common.base import BaseEntity

CACHE_DDL = """
CREATE TABLE IF NOT EXISTS cache_entry (
    scope_id VARCHAR NOT NULL,
    query_type VARCHAR NOT NULL,
    params_hash VARCHAR NOT NULL,
    params JSON NOT NULL,
    data JSON NOT NULL,
    created_at TIMESTAMP NOT NULL,
    PRIMARY KEY (scope_id, query_type, params_hash)
)
"""


@dataclass
class CacheEntry(BaseEntity):
    """Stored payload and the moment it was computed."""

    data: Any
    created_at: datetime


@dataclass
class CachedResult(BaseEntity):
    """Envelope returned by every cached query."""

    data: Any
    timestamp: datetime
    from_cache: bool
