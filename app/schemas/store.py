"""Store API schemas: connect, update, test connection."""

from datetime import datetime
from typing import Annotated

from pydantic import StringConstraints

from app.domain.enums import StoreStatus
from app.schemas.common import CamelModel
from app.shared.validation import (
    COMMISSION_RATE_RULES,
    CREDENTIAL_RULES,
    SHIPPING_COST_RULES,
    STORE_NAME_RULES,
    STORE_URL_RULES,
    enforce,
    one_of,
    precheck,
)

StoreName = Annotated[str, StringConstraints(strip_whitespace=True), enforce(*STORE_NAME_RULES)]
StoreUrl = Annotated[str, StringConstraints(strip_whitespace=True), enforce(*STORE_URL_RULES)]
ApiCredential = Annotated[str, enforce(*CREDENTIAL_RULES)]


class ConnectionTestRequest(CamelModel):
    """Request body for testing credentials without creating a store."""

    url: StoreUrl
    consumer_key: ApiCredential
    consumer_secret: ApiCredential


class CreateStoreRequest(ConnectionTestRequest):
    """Request body for connecting a WooCommerce store."""

    name: StoreName


class UpdateStoreRequest(CamelModel):
    """Request body for updating a store (partial; unset fields stay unchanged)."""

    status: Annotated[StoreStatus, precheck(one_of(StoreStatus.values()))] | None = None
    name: StoreName | None = None
    url: StoreUrl | None = None
    consumer_key: ApiCredential | None = None
    consumer_secret: ApiCredential | None = None
    commission_rate: Annotated[float, enforce(*COMMISSION_RATE_RULES)] | None = None
    shipping_cost: Annotated[float, enforce(*SHIPPING_COST_RULES)] | None = None


class StoreResponse(CamelModel):
    """Store in list/get responses (credentials are never returned)."""

    id: str
    company_id: str
    name: str
    url: str
    status: StoreStatus
    commission_rate: float
    shipping_cost: float
    currency: str | None = None
    last_sync_at: datetime | None = None
    created_at: datetime | None = None


class ConnectionTestResponse(CamelModel):
    success: bool
    error: str | None = None
