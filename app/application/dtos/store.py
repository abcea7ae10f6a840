"""DTOs for store use cases (no dependency on ORM)."""

from dataclasses import dataclass, field
from datetime import datetime


@dataclass(frozen=True)
class StoreResult:
    """Store read-model. Credentials stay encrypted and are excluded from repr."""

    id: str
    company_id: str
    name: str
    url: str
    status: str
    commission_rate: float = 0.0
    shipping_cost: float = 0.0
    currency: str | None = None
    last_sync_at: datetime | None = None
    created_at: datetime | None = None
    encrypted_consumer_key: str = field(default="", repr=False)
    encrypted_consumer_secret: str = field(default="", repr=False)


@dataclass(frozen=True)
class StoreCredentials:
    """Plaintext API credentials for one request to a store."""

    url: str
    consumer_key: str = field(repr=False)
    consumer_secret: str = field(repr=False)


@dataclass(frozen=True)
class ConnectionTestResult:
    """Result of probing a store's REST API with a set of credentials."""

    success: bool
    error: str | None = None
