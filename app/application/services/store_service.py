"""Store use cases: connect, list, update, delete, and connection tests."""

from __future__ import annotations

import logging
import re
from typing import Any

from app.application.dtos.company import CompanyResult
from app.application.dtos.store import ConnectionTestResult, StoreCredentials, StoreResult
from app.application.interfaces.repositories import IStoreRepository
from app.application.interfaces.services import ICredentialCipher, IStoreApiClientFactory
from app.application.services.plan_service import PlanService
from app.domain.enums import SortOrder, StoreStatus
from app.domain.exceptions import (
    ResourceNotFoundException,
    StoreAlreadyConnectedException,
    StoreConnectionException,
)
from app.infrastructure.cache.cache_protocol import CacheProtocol
from app.infrastructure.cache.keys import report_company_pattern

logger = logging.getLogger(__name__)

_SCHEME_RE = re.compile(r"^[a-z][a-z0-9+.-]*://")
CREDENTIAL_FIELDS = ("url", "consumer_key", "consumer_secret")
UPDATABLE_FIELDS = (
    "name",
    "url",
    "consumer_key",
    "consumer_secret",
    "status",
    "commission_rate",
    "shipping_cost",
)


def normalize_store_url(url: str) -> str:
    """Lower-case, trim, default to https://, and drop trailing slashes.

    ``Shop.Example.com/`` becomes ``https://shop.example.com``.
    """
    normalized = url.strip().lower()
    if not _SCHEME_RE.match(normalized):
        normalized = f"https://{normalized}"
    return normalized.rstrip("/")


def decrypt_credentials(store: StoreResult, cipher: ICredentialCipher) -> StoreCredentials:
    return StoreCredentials(
        url=store.url,
        consumer_key=cipher.decrypt(store.encrypted_consumer_key),
        consumer_secret=cipher.decrypt(store.encrypted_consumer_secret),
    )


class StoreService:
    """Manages a company's connected stores and keeps its report cache coherent."""

    def __init__(
        self,
        store_repo: IStoreRepository,
        plan_service: PlanService,
        cipher: ICredentialCipher,
        client_factory: IStoreApiClientFactory,
        cache: CacheProtocol | None = None,
    ) -> None:
        self.store_repo = store_repo
        self.plan_service = plan_service
        self.cipher = cipher
        self.client_factory = client_factory
        self.cache = cache

    def _invalidate_reports(self, company_id: str) -> None:
        """Drop the company's cached reports once the store write has committed."""
        cache = self.cache
        if cache is None:
            return
        pattern = report_company_pattern(company_id)

        async def invalidate() -> None:
            await cache.delete_pattern(pattern)

        self.store_repo.after_commit(invalidate)

    async def _get(self, company_id: str, store_id: str) -> StoreResult:
        store = await self.store_repo.get_for_company(company_id, store_id)
        if store is None:
            raise ResourceNotFoundException("store", store_id)
        return store

    async def _require_connection(self, credentials: StoreCredentials) -> None:
        result = await self.client_factory(credentials).test_connection()
        if not result.success:
            raise StoreConnectionException(result.error or "Could not connect to the store")

    async def test_connection(self, credentials: StoreCredentials) -> ConnectionTestResult:
        """Probe ad-hoc credentials without persisting anything."""
        normalized = StoreCredentials(
            url=normalize_store_url(credentials.url),
            consumer_key=credentials.consumer_key,
            consumer_secret=credentials.consumer_secret,
        )
        return await self.client_factory(normalized).test_connection()

    async def test_stored_connection(self, company_id: str, store_id: str) -> ConnectionTestResult:
        """Probe a saved store and flip its status between ACTIVE and ERROR accordingly."""
        store = await self._get(company_id, store_id)
        result = await self.client_factory(
            decrypt_credentials(store, self.cipher), store_id=store.id
        ).test_connection()
        new_status: str | None = None
        if result.success and store.status == StoreStatus.ERROR.value:
            new_status = StoreStatus.ACTIVE.value
        elif not result.success and store.status == StoreStatus.ACTIVE.value:
            new_status = StoreStatus.ERROR.value
        if new_status:
            await self.store_repo.update_store(company_id, store_id, {"status": new_status})
            self._invalidate_reports(company_id)
            logger.info("Store %s status changed to %s after connection test", store_id, new_status)
        return result

    async def create_store(
        self,
        company: CompanyResult,
        name: str,
        credentials: StoreCredentials,
    ) -> StoreResult:
        """Connect a store: quota, URL normalization, duplicate check, live test, encrypt, persist.

        Raises:
            StoreLimitExceededException: Company is at its plan's store limit.
            StoreAlreadyConnectedException: The company already has this URL.
            StoreConnectionException: The store rejected the credentials.
        """
        await self.plan_service.ensure_can_add_store(company)
        url = normalize_store_url(credentials.url)
        if await self.store_repo.url_exists(company.id, url):
            raise StoreAlreadyConnectedException(url)
        await self._require_connection(
            StoreCredentials(url, credentials.consumer_key, credentials.consumer_secret)
        )
        store = await self.store_repo.create_store(
            company_id=company.id,
            name=name,
            url=url,
            encrypted_key=self.cipher.encrypt(credentials.consumer_key),
            encrypted_secret=self.cipher.encrypt(credentials.consumer_secret),
        )
        self._invalidate_reports(company.id)
        logger.info("Store %s connected to company %s", store.id, company.id)
        return store

    async def list_stores(
        self,
        company_id: str,
        skip: int = 0,
        limit: int = 20,
        sort_by: str | None = None,
        sort_order: SortOrder = SortOrder.DESC,
    ) -> tuple[list[StoreResult], int]:
        return await self.store_repo.list_for_company(
            company_id, skip=skip, limit=limit, sort_by=sort_by, sort_order=sort_order
        )

    async def get_store(self, company_id: str, store_id: str) -> StoreResult:
        return await self._get(company_id, store_id)

    async def update_store(
        self, company_id: str, store_id: str, changes: dict[str, Any]
    ) -> StoreResult:
        """Apply a partial update; changed credentials are re-tested and re-encrypted.

        Raises:
            ResourceNotFoundException: No such store in this company.
            StoreAlreadyConnectedException: The new URL is already used by another store.
            StoreConnectionException: The new credentials are rejected.
        """
        store = await self._get(company_id, store_id)
        changes = {k: v for k, v in changes.items() if k in UPDATABLE_FIELDS and v is not None}
        if "url" in changes:
            changes["url"] = normalize_store_url(changes["url"])
            if changes["url"] != store.url and await self.store_repo.url_exists(
                company_id, changes["url"], exclude_id=store_id
            ):
                raise StoreAlreadyConnectedException(changes["url"])
        if any(field in changes for field in CREDENTIAL_FIELDS):
            current = decrypt_credentials(store, self.cipher)
            merged = StoreCredentials(
                url=changes.get("url", current.url),
                consumer_key=changes.get("consumer_key", current.consumer_key),
                consumer_secret=changes.get("consumer_secret", current.consumer_secret),
            )
            await self._require_connection(merged)
            if "consumer_key" in changes:
                changes["consumer_key"] = self.cipher.encrypt(changes["consumer_key"])
            if "consumer_secret" in changes:
                changes["consumer_secret"] = self.cipher.encrypt(changes["consumer_secret"])
        if isinstance(changes.get("status"), StoreStatus):
            changes["status"] = changes["status"].value
        for field in ("commission_rate", "shipping_cost"):
            if field in changes and changes[field] != getattr(store, field):
                logger.info(
                    "Store %s %s changed from %s to %s",
                    store_id,
                    field,
                    getattr(store, field),
                    changes[field],
                )
        updated = await self.store_repo.update_store(company_id, store_id, changes)
        if updated is None:
            raise ResourceNotFoundException("store", store_id)
        self._invalidate_reports(company_id)
        return updated

    async def delete_store(self, company_id: str, store_id: str) -> None:
        if not await self.store_repo.delete_store(company_id, store_id):
            raise ResourceNotFoundException("store", store_id)
        self._invalidate_reports(company_id)
        logger.info("Store %s deleted from company %s", store_id, company_id)
