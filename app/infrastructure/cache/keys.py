"""Cache key builders. Single place for key format (DRY).

Report keys look like ``report:{company_id}:{namespace}:{fingerprint}``.
Key components (company_id, namespace) must not contain
CACHE_KEY_SEP to avoid ambiguous or colliding keys.
"""

import hashlib
import json
from collections.abc import Mapping
from typing import Any

from app.core.constants import CACHE_KEY_SEP, CACHE_PREFIX_REPORT

FINGERPRINT_LENGTH = 16


def _validate_key_component(value: str, name: str) -> None:
    """Raise ValueError if value is empty or contains the cache key separator.

    Args:
        value: String component used in a cache key.
        name: Name of the component (for error message).

    Raises:
        ValueError: If value is empty or contains CACHE_KEY_SEP.
    """
    if not value:
        raise ValueError(f"Cache key component {name!r} must not be empty")
    if CACHE_KEY_SEP in value:
        raise ValueError(
            f"Cache key component {name!r} must not contain separator {CACHE_KEY_SEP!r}"
        )


def _validate_key_components(components: list[tuple[str, str]]) -> None:
    for value, name in components:
        _validate_key_component(value, name)


def fingerprint(params: Mapping[str, Any]) -> str:
    """Short digest of query parameters; key order does not matter.

    None values are dropped so an omitted filter and an explicit null
    share one entry.
    """
    canonical = json.dumps(
        {k: v for k, v in params.items() if v is not None},
        sort_keys=True,
        separators=(",", ":"),
        default=str,
    )
    return hashlib.sha256(canonical.encode("utf-8")).hexdigest()[:FINGERPRINT_LENGTH]


def report_key(company_id: str, namespace: str, params: Mapping[str, Any]) -> str:
    """Cache key for one report of a company."""
    _validate_key_components([(company_id, "company_id"), (namespace, "namespace")])
    return CACHE_KEY_SEP.join(
        (CACHE_PREFIX_REPORT, company_id, namespace, fingerprint(params))
    )


def report_company_pattern(company_id: str) -> str:
    """SCAN pattern matching every cached report of a company."""
    _validate_key_component(company_id, "company_id")
    return f"{CACHE_PREFIX_REPORT}{CACHE_KEY_SEP}{company_id}{CACHE_KEY_SEP}*"
