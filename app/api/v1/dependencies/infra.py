"""Infrastructure dependencies: cache, shared HTTP client, cipher, notifier."""

from __future__ import annotations

from functools import lru_cache
from typing import Annotated

import httpx
from fastapi import Depends, Request

from app.core.config import Settings, get_settings
from app.infrastructure.cache.cache_protocol import CacheProtocol
from app.infrastructure.external.woocommerce import WooCommerceClientFactory
from app.infrastructure.security.credentials import StoreCredentialCipher
from app.infrastructure.services import LogOnlyNotificationService


def get_app_settings() -> Settings:
    return get_settings()


def get_cache(request: Request) -> CacheProtocol | None:
    """Report cache set in app lifespan (app.state.cache); None when Redis is disabled."""
    return getattr(request.app.state, "cache", None)


def get_http_client(request: Request) -> httpx.AsyncClient:
    """Shared outbound HTTP client created in app lifespan."""
    client = getattr(request.app.state, "http_client", None)
    if client is None:
        raise RuntimeError("HTTP client not initialized; is the app lifespan running?")
    return client


def get_store_client_factory(
    http_client: Annotated[httpx.AsyncClient, Depends(get_http_client)],
    settings: Annotated[Settings, Depends(get_app_settings)],
) -> WooCommerceClientFactory:
    """Per-store WooCommerce clients over the shared HTTP client (composition root)."""
    return WooCommerceClientFactory(
        http_client,
        timeout=settings.store_api_timeout_seconds,
        user_agent=settings.store_api_user_agent,
    )


@lru_cache
def _cipher() -> StoreCredentialCipher:
    # PBKDF2 runs once per process.
    return StoreCredentialCipher(get_settings())


def get_credential_cipher() -> StoreCredentialCipher:
    """Store credential cipher (composition root)."""
    return _cipher()


def get_notification_service() -> LogOnlyNotificationService:
    return LogOnlyNotificationService()
