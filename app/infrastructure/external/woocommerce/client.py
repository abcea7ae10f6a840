"""Async WooCommerce REST API client (httpx).

One client instance talks to one store. The underlying httpx.AsyncClient
is shared per process (app.state.http_client) and passed in.
"""

import logging
from collections.abc import Mapping
from datetime import datetime
from typing import Any

import httpx

from app.application.dtos.store import ConnectionTestResult, StoreCredentials
from app.core.constants import STORE_API_MAX_PAGES, STORE_API_PAGE_SIZE
from app.domain.exceptions import StoreApiException

logger = logging.getLogger(__name__)

API_PREFIX = "/wp-json/wc/v3"
TOTAL_PAGES_HEADER = "X-WP-TotalPages"

# Order statuses read for reports (drafts and checkout-drafts are skipped).
REPORT_ORDER_STATUSES = (
    "completed",
    "processing",
    "pending",
    "on-hold",
    "cancelled",
    "refunded",
    "failed",
)

_STATUS_ERRORS = {
    401: "Authentication failed. Check the API keys.",
    403: "Access denied. Check the API key permissions.",
    404: "WooCommerce API not found. Check the URL and the WooCommerce installation.",
}


def api_base_url(store_url: str) -> str:
    """Return the REST base URL for a store URL (idempotent)."""
    base = store_url.rstrip("/")
    if not base.endswith(API_PREFIX):
        base = f"{base}{API_PREFIX}"
    return base


class WooCommerceClient:
    """Read-only client for one WooCommerce store."""

    def __init__(
        self,
        http_client: httpx.AsyncClient,
        credentials: StoreCredentials,
        *,
        store_id: str | None = None,
        timeout: float = 30.0,
        user_agent: str = "StorePulse/1.0",
    ) -> None:
        self._http = http_client
        self._base_url = api_base_url(credentials.url)
        self._auth = httpx.BasicAuth(credentials.consumer_key, credentials.consumer_secret)
        self._timeout = timeout
        self._headers = {"Accept": "application/json", "User-Agent": user_agent}
        self.store_id = store_id

    async def _get(self, path: str, params: Mapping[str, Any] | None = None) -> httpx.Response:
        return await self._http.get(
            f"{self._base_url}{path}",
            params=params,
            auth=self._auth,
            headers=self._headers,
            timeout=self._timeout,
        )

    async def test_connection(self) -> ConnectionTestResult:
        """Probe the products endpoint; never raises for upstream failures."""
        try:
            response = await self._get("/products", {"per_page": 1})
        except httpx.TimeoutException:
            logger.warning("Store connection test timed out: %s", self._base_url)
            return ConnectionTestResult(False, "Connection timed out.")
        except httpx.ConnectError as e:
            logger.warning("Store connection test could not connect to %s: %s", self._base_url, e)
            return ConnectionTestResult(False, "Could not reach the site. Check the URL.")
        except httpx.HTTPError as e:
            logger.warning("Store connection test failed for %s: %s", self._base_url, e)
            return ConnectionTestResult(False, f"Connection failed: {e}")

        if response.is_success:
            return ConnectionTestResult(True)
        logger.warning(
            "Store connection test rejected: %s -> HTTP %s",
            self._base_url,
            response.status_code,
        )
        if response.status_code in _STATUS_ERRORS:
            return ConnectionTestResult(False, _STATUS_ERRORS[response.status_code])
        return ConnectionTestResult(
            False, _error_message(response) or f"Server error: {response.status_code}"
        )

    async def _get_all(self, path: str, params: Mapping[str, Any]) -> list[dict[str, Any]]:
        """Follow X-WP-TotalPages until every page is read (bounded by STORE_API_MAX_PAGES).

        Raises:
            StoreApiException: On transport errors or non-2xx responses.
        """
        items: list[dict[str, Any]] = []
        page, total_pages = 1, 1
        while page <= min(total_pages, STORE_API_MAX_PAGES):
            query = {**params, "page": page, "per_page": STORE_API_PAGE_SIZE}
            try:
                response = await self._get(path, query)
            except httpx.HTTPError as e:
                logger.error("Store API request failed: %s%s: %s", self._base_url, path, e)
                raise StoreApiException(self.store_id, str(e) or type(e).__name__) from e
            if not response.is_success:
                reason = _error_message(response) or f"HTTP {response.status_code}"
                logger.error("Store API error: %s%s -> %s", self._base_url, path, reason)
                raise StoreApiException(self.store_id, reason)
            items.extend(response.json())
            total_pages = _total_pages(response)
            page += 1
        if total_pages > STORE_API_MAX_PAGES:
            logger.warning(
                "Store API paging truncated at %s of %s pages: %s%s",
                STORE_API_MAX_PAGES,
                total_pages,
                self._base_url,
                path,
            )
        return items

    async def list_orders(self, after: datetime, before: datetime) -> list[dict[str, Any]]:
        """Orders created in [after, before) in report-relevant statuses."""
        return await self._get_all(
            "/orders",
            {
                "after": after.isoformat(),
                "before": before.isoformat(),
                "status": ",".join(REPORT_ORDER_STATUSES),
                "orderby": "date",
                "order": "desc",
            },
        )

    async def list_products(self) -> list[dict[str, Any]]:
        return await self._get_all("/products", {"status": "publish"})


def _total_pages(response: httpx.Response) -> int:
    try:
        return max(1, int(response.headers.get(TOTAL_PAGES_HEADER, "1")))
    except ValueError:
        return 1


def _error_message(response: httpx.Response) -> str | None:
    """Extract WooCommerce's error message from a JSON error body, if any."""
    try:
        body = response.json()
    except ValueError:
        return None
    if isinstance(body, dict):
        message = body.get("message")
        return str(message) if message else None
    return None


class WooCommerceClientFactory:
    """Builds per-store clients over one shared httpx.AsyncClient."""

    def __init__(
        self,
        http_client: httpx.AsyncClient,
        timeout: float = 30.0,
        user_agent: str = "StorePulse/1.0",
    ) -> None:
        self._http = http_client
        self._timeout = timeout
        self._user_agent = user_agent

    def __call__(
        self, credentials: StoreCredentials, store_id: str | None = None
    ) -> WooCommerceClient:
        return WooCommerceClient(
            self._http,
            credentials,
            store_id=store_id,
            timeout=self._timeout,
            user_agent=self._user_agent,
        )
