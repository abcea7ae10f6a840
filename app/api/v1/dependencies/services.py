"""Application service dependencies (composition root).

Services are built from infrastructure implementations here; routes depend
only on these providers, not on repositories or clients directly.
"""

from __future__ import annotations

from typing import Annotated

from fastapi import Depends

from app.application.services import (
    AuthService,
    CompanyService,
    PlanService,
    ReportService,
    StoreService,
)
from app.core.config import Settings
from app.infrastructure.cache.cache_protocol import CacheProtocol
from app.infrastructure.external.woocommerce import WooCommerceClientFactory
from app.infrastructure.persistence.repositories import (
    CompanyMemberRepository,
    CompanyRepository,
    PasswordResetTokenRepository,
    StoreRepository,
    UserRepository,
)
from app.infrastructure.security.credentials import StoreCredentialCipher
from app.infrastructure.services import LogOnlyNotificationService

from . import db as db_deps
from . import infra


def get_auth_service(
    user_repo: Annotated[UserRepository, Depends(db_deps.get_user_repo_for_write)],
    reset_repo: Annotated[
        PasswordResetTokenRepository, Depends(db_deps.get_password_reset_repo_for_write)
    ],
    notifier: Annotated[LogOnlyNotificationService, Depends(infra.get_notification_service)],
    settings: Annotated[Settings, Depends(infra.get_app_settings)],
) -> AuthService:
    return AuthService(user_repo, reset_repo, notifier, settings)


def get_company_service(
    company_repo: Annotated[CompanyRepository, Depends(db_deps.get_company_repo_for_write)],
    member_repo: Annotated[
        CompanyMemberRepository, Depends(db_deps.get_member_repo_for_write)
    ],
    user_repo: Annotated[UserRepository, Depends(db_deps.get_user_repo_for_write)],
    notifier: Annotated[LogOnlyNotificationService, Depends(infra.get_notification_service)],
) -> CompanyService:
    return CompanyService(company_repo, member_repo, user_repo, notifier)


def get_plan_service(
    company_repo: Annotated[CompanyRepository, Depends(db_deps.get_company_repo_for_write)],
    store_repo: Annotated[StoreRepository, Depends(db_deps.get_store_repo_for_write)],
    settings: Annotated[Settings, Depends(infra.get_app_settings)],
) -> PlanService:
    """Plan usage and quota enforcement under the configured grandfather policy."""
    return PlanService(company_repo, store_repo, policy=settings.grandfather_policy)


def get_store_service(
    store_repo: Annotated[StoreRepository, Depends(db_deps.get_store_repo_for_write)],
    plan_service: Annotated[PlanService, Depends(get_plan_service)],
    cipher: Annotated[StoreCredentialCipher, Depends(infra.get_credential_cipher)],
    client_factory: Annotated[
        WooCommerceClientFactory, Depends(infra.get_store_client_factory)
    ],
    cache: Annotated[CacheProtocol | None, Depends(infra.get_cache)],
) -> StoreService:
    """Store service; invalidates the company's cached reports on writes."""
    return StoreService(store_repo, plan_service, cipher, client_factory, cache=cache)


def get_report_service(
    store_repo: Annotated[StoreRepository, Depends(db_deps.get_store_repo_for_write)],
    cipher: Annotated[StoreCredentialCipher, Depends(infra.get_credential_cipher)],
    client_factory: Annotated[
        WooCommerceClientFactory, Depends(infra.get_store_client_factory)
    ],
    cache: Annotated[CacheProtocol | None, Depends(infra.get_cache)],
    settings: Annotated[Settings, Depends(infra.get_app_settings)],
) -> ReportService:
    """Report service reading through the cache with the configured TTL."""
    return ReportService(
        store_repo,
        cipher,
        client_factory,
        cache=cache,
        cache_ttl=settings.cache_default_ttl,
    )
