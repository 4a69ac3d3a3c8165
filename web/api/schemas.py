"""Shared API response schemas."""

from datetime import datetime
from typing import Generic, TypeVar

from pydantic import BaseModel, ConfigDict, Field

T = TypeVar("T")


class CachedResponse(BaseModel, Generic[T]):
    """Query result with freshness metadata.

    Serialized with ``by_alias=True`` as ``{"data", "timestamp", "fromCache"}``.
    """

    model_config = ConfigDict(populate_by_name=True)

    data: T
    timestamp: datetime
    from_cache: bool = Field(alias="fromCache")
