"""Cache key construction.

A key is the triple ``(scope_id, query_type, params)``. Params are compared
structurally: they are serialized to canonical JSON (sorted keys, compact
separators) and the text is what gets hashed and stored, so ``{"a": 1, "b": 2}``
and ``{"b": 2, "a": 1}`` name the same entry.
"""

import hashlib
import json
import re
from collections.abc import Mapping
from dataclasses import dataclass
from datetime import datetime, timezone
from typing import Any


class InvalidCacheKeyError(ValueError):
    """Cache key cannot be built (missing scope, bad params)."""


def utcnow() -> datetime:
    """Current time as an aware UTC datetime."""
    return datetime.now(timezone.utc)


def canonical_params(params: Mapping[str, Any] | None) -> str:
    """Serialize params to canonical JSON. ``None`` is the empty mapping."""
    if params is None:
        params = {}
    if not isinstance(params, Mapping):
        raise InvalidCacheKeyError(f"Cache params must be a mapping, got {type(params).__name__}")
    try:
        return json.dumps(params, sort_keys=True, separators=(",", ":"), ensure_ascii=False)
    except (TypeError, ValueError) as e:
        raise InvalidCacheKeyError(f"Cache params are not JSON-serializable: {e}") from e


def require_part(value: str | None, name: str) -> str:
    if not isinstance(value, str) or not value.strip():
        raise InvalidCacheKeyError(f"{name} is required to build a cache key")
    return value


@dataclass(frozen=True)
class CacheKey:
    """Scope-qualified cache key."""

    scope_id: str
    query_type: str
    params_json: str = "{}"

    @classmethod
    def build(cls, scope_id: str, query_type: str, params: Mapping[str, Any] | None = None) -> "CacheKey":
        """Validate and canonicalize key parts."""
        return cls(
            scope_id=require_part(scope_id, "scope_id"),
            query_type=require_part(query_type, "query_type"),
            params_json=canonical_params(params),
        )

    @property
    def params(self) -> dict[str, Any]:
        return json.loads(self.params_json)

    @property
    def params_hash(self) -> str:
        return hashlib.sha256(self.params_json.encode()).hexdigest()

    def __str__(self) -> str:
        return f"{self.scope_id}:{self.query_type}:{self.params_json}"


def require_scope(scope_id: str) -> str:
    """Reject a missing scope before touching any store."""
    return require_part(scope_id, "scope_id")


def pattern_regex(pattern: str) -> re.Pattern:
    """Compile a glob pattern where ``*`` matches any run of characters.

    The whole query type must match; every other character is literal.
    """
    pattern = require_part(pattern, "pattern")
    return re.compile(".*".join(re.escape(part) for part in pattern.split("*")))


def matches_pattern(query_type: str, pattern: str) -> bool:
    return pattern_regex(pattern).fullmatch(query_type) is not None
