"""Store API: connect, list, update, delete, and test WooCommerce stores.

Mounted under /companies/{company_id}/stores. Writes require OWNER/ADMIN,
reads require MEMBER or above.
"""

from typing import Annotated

from fastapi import APIRouter, Depends, Request

from app.api.v1.dependencies import (
    CompanyManager,
    CompanyReader,
    get_company_service,
    get_pagination,
    get_store_service,
)
from app.application.dtos.store import ConnectionTestResult, StoreCredentials, StoreResult
from app.application.services import CompanyService, StoreService
from app.core.limiter import limit_store_test, limit_writes
from app.schemas.common import ApiResponse, MessageResponse, PaginationMeta, PaginationParams, ok
from app.schemas.store import (
    ConnectionTestRequest,
    ConnectionTestResponse,
    CreateStoreRequest,
    StoreResponse,
    UpdateStoreRequest,
)

router = APIRouter()

Stores = Annotated[StoreService, Depends(get_store_service)]


def _store(store: StoreResult) -> StoreResponse:
    return StoreResponse.model_validate(store, from_attributes=True)


def _test_result(result: ConnectionTestResult) -> ConnectionTestResponse:
    return ConnectionTestResponse(success=result.success, error=result.error)


def _credentials(body: ConnectionTestRequest) -> StoreCredentials:
    return StoreCredentials(
        url=body.url, consumer_key=body.consumer_key, consumer_secret=body.consumer_secret
    )


@router.post("/test", response_model=ApiResponse[ConnectionTestResponse])
@limit_store_test
async def test_credentials(
    request: Request,
    company_id: str,
    body: ConnectionTestRequest,
    membership: CompanyManager,
    stores: Stores,
):
    """Probe URL and credentials without saving anything."""
    return ok(_test_result(await stores.test_connection(_credentials(body))))


@router.post("", response_model=ApiResponse[StoreResponse], status_code=201)
@limit_writes
async def create_store(
    request: Request,
    company_id: str,
    body: CreateStoreRequest,
    membership: CompanyManager,
    stores: Stores,
    companies: Annotated[CompanyService, Depends(get_company_service)],
):
    """Connect a store. 403 STORE_LIMIT_REACHED when the plan quota is used up."""
    company = await companies.get_company(company_id)
    store = await stores.create_store(company, body.name, _credentials(body))
    return ok(_store(store), message="Store connected")


@router.get("", response_model=ApiResponse[list[StoreResponse]])
async def list_stores(
    company_id: str,
    membership: CompanyReader,
    stores: Stores,
    pagination: Annotated[PaginationParams, Depends(get_pagination)],
):
    items, total = await stores.list_stores(
        company_id,
        skip=pagination.offset,
        limit=pagination.limit,
        sort_by=pagination.sort_by,
        sort_order=pagination.sort_order,
    )
    return ok(
        [_store(s) for s in items],
        meta=PaginationMeta.build(total, pagination.page, pagination.limit),
    )


@router.get("/{store_id}", response_model=ApiResponse[StoreResponse])
async def get_store(company_id: str, store_id: str, membership: CompanyReader, stores: Stores):
    return ok(_store(await stores.get_store(company_id, store_id)))


@router.put("/{store_id}", response_model=ApiResponse[StoreResponse])
@limit_writes
async def update_store(
    request: Request,
    company_id: str,
    store_id: str,
    body: UpdateStoreRequest,
    membership: CompanyManager,
    stores: Stores,
):
    """Partial update; new credentials are tested before they are saved."""
    store = await stores.update_store(company_id, store_id, body.model_dump(exclude_unset=True))
    return ok(_store(store), message="Store updated")


@router.delete("/{store_id}", response_model=ApiResponse[MessageResponse])
@limit_writes
async def delete_store(
    request: Request,
    company_id: str,
    store_id: str,
    membership: CompanyManager,
    stores: Stores,
):
    await stores.delete_store(company_id, store_id)
    return ok(MessageResponse(message="Store deleted"))


@router.post("/{store_id}/test-connection", response_model=ApiResponse[ConnectionTestResponse])
@limit_store_test
async def test_store_connection(
    request: Request,
    company_id: str,
    store_id: str,
    membership: CompanyManager,
    stores: Stores,
):
    """Probe a saved store; its status flips between ACTIVE and ERROR with the result."""
    return ok(_test_result(await stores.test_stored_connection(company_id, store_id)))
