"""Store repository. Interface methods return application DTOs."""

from typing import Any

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from app.application.dtos.store import StoreResult
from app.domain.enums import SortOrder, StoreStatus
from app.domain.exceptions import ValidationException
from app.infrastructure.persistence.models.store import Store
from app.infrastructure.persistence.repositories.base import BaseRepository

# sortBy values accepted by list_for_company (camelCase and snake_case).
SORTABLE_COLUMNS: dict[str, Any] = {
    "name": Store.name,
    "url": Store.url,
    "status": Store.status,
    "createdAt": Store.created_at,
    "created_at": Store.created_at,
    "lastSyncAt": Store.last_sync_at,
    "last_sync_at": Store.last_sync_at,
}


def _store_to_result(s: Store) -> StoreResult:
    return StoreResult(
        id=s.id,
        company_id=s.company_id,
        name=s.name,
        url=s.url,
        status=s.status,
        commission_rate=s.commission_rate,
        shipping_cost=s.shipping_cost,
        currency=s.currency,
        last_sync_at=s.last_sync_at,
        created_at=s.created_at,
        encrypted_consumer_key=s.consumer_key,
        encrypted_consumer_secret=s.consumer_secret,
    )


class StoreRepository(BaseRepository[Store]):
    """Store repository. Every lookup is scoped by company_id."""

    def __init__(self, db: AsyncSession) -> None:
        super().__init__(db, Store)

    async def _get_scoped(self, company_id: str, store_id: str) -> Store | None:
        result = await self.db.execute(
            select(Store).where(Store.id == store_id, Store.company_id == company_id)
        )
        return result.scalar_one_or_none()

    async def get_for_company(self, company_id: str, store_id: str) -> StoreResult | None:
        store = await self._get_scoped(company_id, store_id)
        return _store_to_result(store) if store else None

    async def count_for_company(self, company_id: str) -> int:
        return await self.count_where(Store.company_id == company_id)

    async def url_exists(
        self, company_id: str, url: str, exclude_id: str | None = None
    ) -> bool:
        criteria: list[Any] = [Store.company_id == company_id, Store.url == url]
        if exclude_id:
            criteria.append(Store.id != exclude_id)
        return await self.count_where(*criteria) > 0

    async def create_store(
        self,
        company_id: str,
        name: str,
        url: str,
        encrypted_key: str,
        encrypted_secret: str,
    ) -> StoreResult:
        store = Store(
            company_id=company_id,
            name=name,
            url=url,
            consumer_key=encrypted_key,
            consumer_secret=encrypted_secret,
            status=StoreStatus.ACTIVE.value,
        )
        return _store_to_result(await self.create(store))

    async def list_for_company(
        self,
        company_id: str,
        skip: int = 0,
        limit: int = 20,
        sort_by: str | None = None,
        sort_order: SortOrder = SortOrder.DESC,
    ) -> tuple[list[StoreResult], int]:
        """Return (page of stores, total count).

        Raises:
            ValidationException: If sort_by is not a sortable column.
        """
        column = SORTABLE_COLUMNS.get(sort_by or "createdAt")
        if column is None:
            raise ValidationException(f"Cannot sort stores by {sort_by!r}", field="sortBy")
        order = column.asc() if sort_order == SortOrder.ASC else column.desc()
        total = await self.count_for_company(company_id)
        result = await self.db.execute(
            select(Store)
            .where(Store.company_id == company_id)
            .order_by(order, Store.id)
            .offset(skip)
            .limit(limit)
        )
        return [_store_to_result(s) for s in result.scalars().all()], total

    async def list_active(self, company_id: str) -> list[StoreResult]:
        result = await self.db.execute(
            select(Store)
            .where(
                Store.company_id == company_id,
                Store.status == StoreStatus.ACTIVE.value,
            )
            .order_by(Store.created_at.asc())
        )
        return [_store_to_result(s) for s in result.scalars().all()]

    async def update_store(
        self, company_id: str, store_id: str, changes: dict[str, Any]
    ) -> StoreResult | None:
        store = await self._get_scoped(company_id, store_id)
        if not store:
            return None
        if changes:
            store = await self.apply_changes(store, changes)
        return _store_to_result(store)

    async def delete_store(self, company_id: str, store_id: str) -> bool:
        store = await self._get_scoped(company_id, store_id)
        if not store:
            return False
        await self.delete(store)
        return True
