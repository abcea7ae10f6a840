"""Report use cases: per-company aggregates read through the store API and memoized in cache."""

from __future__ import annotations

import asyncio
import logging
from collections.abc import Callable
from datetime import date, datetime, timedelta
from typing import Any

from app.application.dtos.report import DateRange
from app.application.dtos.store import StoreResult
from app.application.interfaces.repositories import IStoreRepository
from app.application.interfaces.services import (
    ICredentialCipher,
    IStoreApiClient,
    IStoreApiClientFactory,
)
from app.application.services.store_service import decrypt_credentials
from app.domain import reports
from app.domain.enums import DatePeriod, ReportNamespace
from app.domain.exceptions import ResourceNotFoundException, ValidationException
from app.infrastructure.cache.cache_protocol import CacheProtocol
from app.infrastructure.cache.keys import report_key
from app.shared.utils.datetime import start_of_day_utc, utc_now

logger = logging.getLogger(__name__)

PERIOD_DAYS = {
    DatePeriod.TODAY: 1,
    DatePeriod.LAST_7_DAYS: 7,
    DatePeriod.LAST_30_DAYS: 30,
    DatePeriod.LAST_365_DAYS: 365,
}


def resolve_date_range(
    period: DatePeriod,
    start_date: date | None = None,
    end_date: date | None = None,
    today: date | None = None,
) -> DateRange:
    """Turn a named period or custom dates into whole UTC days [start, end).

    Named periods end at the close of today, so the range (and the cache
    fingerprint) stays stable for the whole day.

    Raises:
        ValidationException: custom without both dates, or start after end.
    """
    if period == DatePeriod.CUSTOM:
        if start_date is None or end_date is None:
            raise ValidationException(
                "startDate and endDate are required for a custom period", field="startDate"
            )
        if start_date > end_date:
            raise ValidationException("startDate must not be after endDate", field="startDate")
        return DateRange(
            period=period.value,
            start=start_of_day_utc(start_date),
            end=start_of_day_utc(end_date + timedelta(days=1)),
        )
    today = today or utc_now().date()
    days = PERIOD_DAYS[period]
    return DateRange(
        period=period.value,
        start=start_of_day_utc(today - timedelta(days=days - 1)),
        end=start_of_day_utc(today + timedelta(days=1)),
    )


def previous_range(current: DateRange) -> DateRange:
    """The window of equal length immediately before current."""
    length = current.end - current.start
    return DateRange(period=current.period, start=current.start - length, end=current.start)


class ReportService:
    """Computes report namespaces over a company's active stores."""

    def __init__(
        self,
        store_repo: IStoreRepository,
        cipher: ICredentialCipher,
        client_factory: IStoreApiClientFactory,
        cache: CacheProtocol | None = None,
        cache_ttl: int | None = None,
        clock: Callable[[], datetime] = utc_now,
    ) -> None:
        self.store_repo = store_repo
        self.cipher = cipher
        self.client_factory = client_factory
        self.cache = cache
        self.cache_ttl = cache_ttl
        self.clock = clock

    async def get_report(
        self,
        company_id: str,
        namespace: ReportNamespace,
        period: DatePeriod = DatePeriod.LAST_30_DAYS,
        start_date: date | None = None,
        end_date: date | None = None,
        store_id: str | None = None,
    ) -> dict[str, Any]:
        """Return the report payload, from cache when fresh.

        Raises:
            ValidationException: Invalid date range.
            ResourceNotFoundException: store_id is not an active store of the company.
            StoreApiException: A store API call failed (nothing is cached).
        """
        date_range = resolve_date_range(period, start_date, end_date, today=self.clock().date())
        stores = await self.store_repo.list_active(company_id)
        if store_id is not None:
            stores = [s for s in stores if s.id == store_id]
            if not stores:
                raise ResourceNotFoundException("store", store_id)

        async def compute() -> dict[str, Any]:
            return await self._build(namespace, stores, date_range)

        if self.cache is None:
            return await compute()
        key = report_key(
            company_id, namespace.value, {"store_id": store_id, **date_range.as_params()}
        )
        return await self.cache.get_or_compute(key, compute, ttl=self.cache_ttl)

    async def _build(
        self, namespace: ReportNamespace, stores: list[StoreResult], date_range: DateRange
    ) -> dict[str, Any]:
        logger.debug(
            "Computing %s report over %d stores (%s)", namespace.value, len(stores), date_range.period
        )
        if namespace == ReportNamespace.INVENTORY:
            data = reports.inventory_summary(await self._fetch_products(stores))
        elif namespace == ReportNamespace.DASHBOARD:
            current, previous = await asyncio.gather(
                self._fetch_orders(stores, date_range),
                self._fetch_orders(stores, previous_range(date_range)),
            )
            data = reports.dashboard_summary(current, previous)
        else:
            groups = await self._fetch_orders(stores, date_range)
            builder = {
                ReportNamespace.ORDERS: reports.orders_breakdown,
                ReportNamespace.PAYMENTS: reports.payments_breakdown,
                ReportNamespace.PROFITS: reports.profit_breakdown,
                ReportNamespace.REFUNDS: reports.refunds_breakdown,
            }[namespace]
            data = builder(groups)
        return {
            "namespace": namespace.value,
            "period": date_range.period,
            "start": date_range.start.isoformat(),
            "end": date_range.end.isoformat(),
            "store_ids": [s.id for s in stores],
            "generated_at": self.clock().isoformat(),
            "data": data,
        }

    def _client(self, store: StoreResult) -> IStoreApiClient:
        return self.client_factory(decrypt_credentials(store, self.cipher), store_id=store.id)

    async def _fetch_orders(
        self, stores: list[StoreResult], date_range: DateRange
    ) -> list[reports.StoreOrders]:
        async def one(store: StoreResult) -> reports.StoreOrders:
            orders = await self._client(store).list_orders(date_range.start, date_range.end)
            return reports.StoreOrders(
                store_id=store.id,
                store_name=store.name,
                orders=orders,
                commission_rate=store.commission_rate,
                shipping_cost=store.shipping_cost,
            )

        return list(await asyncio.gather(*(one(s) for s in stores)))

    async def _fetch_products(self, stores: list[StoreResult]) -> list[reports.StoreProducts]:
        async def one(store: StoreResult) -> reports.StoreProducts:
            products = await self._client(store).list_products()
            return reports.StoreProducts(store_id=store.id, store_name=store.name, products=products)

        return list(await asyncio.gather(*(one(s) for s in stores)))
