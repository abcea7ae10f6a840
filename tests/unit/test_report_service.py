"""ReportService tests: date ranges, store selection, and cached computation."""

from datetime import UTC, date, datetime
from unittest.mock import AsyncMock, MagicMock

import pytest

from app.application.dtos.report import DateRange
from app.application.dtos.store import StoreResult
from app.application.services.report_service import (
    ReportService,
    previous_range,
    resolve_date_range,
)
from app.domain.enums import DatePeriod, ReportNamespace
from app.domain.exceptions import (
    ResourceNotFoundException,
    StoreApiException,
    ValidationException,
)
from app.infrastructure.cache.redis_cache import CacheService
from tests.fakes import FakeRedis, ReversingCipher

TODAY = date(2026, 3, 10)
NOW = datetime(2026, 3, 10, 15, 30, tzinfo=UTC)


def _utc(day: date) -> datetime:
    return datetime(day.year, day.month, day.day, tzinfo=UTC)


def _store(store_id: str, name: str, commission: float = 0.0) -> StoreResult:
    cipher = ReversingCipher()
    return StoreResult(
        id=store_id,
        company_id="c1",
        name=name,
        url=f"https://{store_id}.example.com",
        status="ACTIVE",
        commission_rate=commission,
        encrypted_consumer_key=cipher.encrypt("ck_" + "a" * 29),
        encrypted_consumer_secret=cipher.encrypt("cs_" + "b" * 29),
    )


ORDERS = {
    "s1": [
        {"id": 1, "status": "completed", "total": "100.00", "payment_method": "card"},
        {"id": 2, "status": "processing", "total": "50.00", "payment_method": "cod"},
    ],
    "s2": [{"id": 3, "status": "refunded", "total": "30.00", "payment_method": "card"}],
}


@pytest.mark.parametrize(
    ("period", "start", "days"),
    [
        (DatePeriod.TODAY, date(2026, 3, 10), 1),
        (DatePeriod.LAST_7_DAYS, date(2026, 3, 4), 7),
        (DatePeriod.LAST_30_DAYS, date(2026, 2, 9), 30),
    ],
)
def test_named_periods_cover_whole_days(period, start, days):
    resolved = resolve_date_range(period, today=TODAY)
    assert resolved.start == _utc(start)
    assert resolved.end == _utc(date(2026, 3, 11))
    assert (resolved.end - resolved.start).days == days


def test_custom_period_includes_end_day():
    resolved = resolve_date_range(DatePeriod.CUSTOM, date(2026, 1, 1), date(2026, 1, 31))
    assert resolved.start == _utc(date(2026, 1, 1))
    assert resolved.end == _utc(date(2026, 2, 1))


def test_custom_period_requires_both_dates():
    with pytest.raises(ValidationException):
        resolve_date_range(DatePeriod.CUSTOM, start_date=date(2026, 1, 1))


def test_custom_period_rejects_inverted_range():
    with pytest.raises(ValidationException):
        resolve_date_range(DatePeriod.CUSTOM, date(2026, 2, 1), date(2026, 1, 1))


def test_named_period_ignores_custom_dates():
    resolved = resolve_date_range(
        DatePeriod.LAST_7_DAYS, date(2020, 1, 1), date(2020, 1, 2), today=TODAY
    )
    assert resolved.start == _utc(date(2026, 3, 4))


def test_previous_range_is_adjacent_and_equal_length():
    current = DateRange("7d", _utc(date(2026, 3, 4)), _utc(date(2026, 3, 11)))
    previous = previous_range(current)
    assert previous.end == current.start
    assert previous.start == _utc(date(2026, 2, 25))


@pytest.fixture
def store_repo() -> AsyncMock:
    repo = AsyncMock()
    repo.list_active = AsyncMock(return_value=[_store("s1", "One", 10), _store("s2", "Two")])
    return repo


@pytest.fixture
def clients() -> dict[str, AsyncMock]:
    result = {}
    for store_id, orders in ORDERS.items():
        client = AsyncMock()
        client.list_orders = AsyncMock(return_value=orders)
        client.list_products = AsyncMock(return_value=[])
        result[store_id] = client
    return result


@pytest.fixture
def client_factory(clients) -> MagicMock:
    return MagicMock(side_effect=lambda creds, store_id=None: clients[store_id])


@pytest.fixture
async def cache(settings, fake_redis: FakeRedis) -> CacheService:
    service = CacheService(settings, redis_client=fake_redis)
    await service.connect()
    return service


def _service(store_repo, client_factory, cache=None) -> ReportService:
    return ReportService(
        store_repo, ReversingCipher(), client_factory, cache=cache, cache_ttl=300, clock=lambda: NOW
    )


async def test_orders_report_aggregates_all_active_stores(store_repo, client_factory, clients):
    report = await _service(store_repo, client_factory).get_report(
        "c1", ReportNamespace.ORDERS, DatePeriod.LAST_7_DAYS
    )

    assert report["namespace"] == "orders"
    assert report["store_ids"] == ["s1", "s2"]
    assert report["data"]["total_orders"] == 3
    assert report["data"]["total_revenue"] == 180.0
    start, end = clients["s1"].list_orders.call_args.args
    assert start == _utc(date(2026, 3, 4))
    assert end == _utc(date(2026, 3, 11))
    assert client_factory.call_args_list[0].args[0].consumer_key == "ck_" + "a" * 29


async def test_store_filter_limits_report(store_repo, client_factory, clients):
    report = await _service(store_repo, client_factory).get_report(
        "c1", ReportNamespace.PROFITS, store_id="s1"
    )

    assert report["store_ids"] == ["s1"]
    assert report["data"]["total_revenue"] == 150.0
    assert report["data"]["total_commission"] == 15.0
    clients["s2"].list_orders.assert_not_awaited()


async def test_unknown_store_filter_is_not_found(store_repo, client_factory):
    with pytest.raises(ResourceNotFoundException):
        await _service(store_repo, client_factory).get_report(
            "c1", ReportNamespace.ORDERS, store_id="elsewhere"
        )


async def test_dashboard_fetches_current_and_previous_window(store_repo, client_factory, clients):
    report = await _service(store_repo, client_factory).get_report(
        "c1", ReportNamespace.DASHBOARD, DatePeriod.TODAY
    )

    windows = [c.args for c in clients["s1"].list_orders.call_args_list]
    assert (_utc(date(2026, 3, 10)), _utc(date(2026, 3, 11))) in windows
    assert (_utc(date(2026, 3, 9)), _utc(date(2026, 3, 10))) in windows
    assert report["data"]["revenue_change"] == 0.0


async def test_inventory_report_reads_products(store_repo, client_factory, clients):
    clients["s1"].list_products.return_value = [
        {"id": 7, "name": "Mug", "manage_stock": True, "stock_quantity": 2, "stock_status": "instock"}
    ]
    report = await _service(store_repo, client_factory).get_report("c1", ReportNamespace.INVENTORY)

    assert report["data"]["low_stock_count"] == 1
    clients["s1"].list_orders.assert_not_awaited()


async def test_cached_report_is_not_recomputed(store_repo, client_factory, clients, cache):
    service = _service(store_repo, client_factory, cache)

    first = await service.get_report("c1", ReportNamespace.ORDERS, DatePeriod.LAST_30_DAYS)
    second = await service.get_report("c1", ReportNamespace.ORDERS, DatePeriod.LAST_30_DAYS)

    assert first == second
    assert clients["s1"].list_orders.await_count == 1


async def test_cache_keys_separate_queries(store_repo, client_factory, clients, cache):
    service = _service(store_repo, client_factory, cache)

    await service.get_report("c1", ReportNamespace.ORDERS, DatePeriod.LAST_30_DAYS)
    await service.get_report("c1", ReportNamespace.ORDERS, DatePeriod.LAST_7_DAYS)
    await service.get_report("c1", ReportNamespace.PAYMENTS, DatePeriod.LAST_7_DAYS)

    assert clients["s1"].list_orders.await_count == 3


async def test_invalidation_forces_recompute(store_repo, client_factory, clients, cache):
    service = _service(store_repo, client_factory, cache)

    await service.get_report("c1", ReportNamespace.ORDERS)
    await cache.delete_pattern("report:c1:*")
    await service.get_report("c1", ReportNamespace.ORDERS)

    assert clients["s1"].list_orders.await_count == 2


async def test_store_api_failure_is_not_cached(store_repo, client_factory, clients, cache):
    service = _service(store_repo, client_factory, cache)
    clients["s2"].list_orders.side_effect = StoreApiException("s2", "boom")

    with pytest.raises(StoreApiException):
        await service.get_report("c1", ReportNamespace.ORDERS)

    clients["s2"].list_orders.side_effect = None
    report = await service.get_report("c1", ReportNamespace.ORDERS)
    assert report["data"]["total_orders"] == 3
