"""Cache: Redis service and cache key utilities.

Used by the report and store services to memoize and invalidate per-company
aggregates. Key format is in keys.py (DRY).
"""

from app.infrastructure.cache.cache_protocol import CacheProtocol
from app.infrastructure.cache.keys import (
    fingerprint,
    report_company_pattern,
    report_key,
)
from app.infrastructure.cache.redis_cache import CacheService

__all__ = [
    "CacheProtocol",
    "CacheService",
    "fingerprint",
    "report_company_pattern",
    "report_key",
]
