"""Authentication and company access guards (composition root).

Routes under /companies/{company_id} resolve the caller's accepted
membership once and gate on its role. Role checks live here; services
only enforce rules that depend on the target (e.g. owner removal).
"""

from __future__ import annotations

from collections.abc import Awaitable, Callable
from typing import Annotated

from fastapi import Depends, HTTPException, Path
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer

from app.application.dtos.company import MemberResult
from app.application.dtos.user import UserResult
from app.domain.enums import CompanyRole, ReportNamespace
from app.domain.exceptions import AuthorizationException
from app.domain.permissions import MANAGER_ROLES, READER_ROLES, can_read_report
from app.infrastructure.persistence.repositories import (
    CompanyMemberRepository,
    UserRepository,
)
from app.infrastructure.security.jwt import verify_token

from .db import get_member_repo, get_user_repo

_http_bearer = HTTPBearer(auto_error=False)

_NOT_AUTHENTICATED = HTTPException(
    status_code=401,
    detail="Not authenticated",
    headers={"WWW-Authenticate": "Bearer"},
)


async def get_current_user_optional(
    credentials: Annotated[HTTPAuthorizationCredentials | None, Depends(_http_bearer)],
    user_repo: Annotated[UserRepository, Depends(get_user_repo)],
) -> UserResult | None:
    """Return current user from JWT if present; else None."""
    if not credentials:
        return None
    try:
        payload = verify_token(credentials.credentials)
    except ValueError:
        return None
    user_id = payload.get("sub")
    if not user_id:
        return None
    user = await user_repo.get_by_id(user_id)
    if not user or not user.is_active:
        return None
    return user


async def get_current_user(
    current_user: Annotated[UserResult | None, Depends(get_current_user_optional)],
) -> UserResult:
    """Return current user from JWT; raise 401 if missing or invalid."""
    if current_user is None:
        raise _NOT_AUTHENTICATED
    return current_user


CurrentUser = Annotated[UserResult, Depends(get_current_user)]


async def require_company_member(
    company_id: Annotated[str, Path()],
    current_user: CurrentUser,
    member_repo: Annotated[CompanyMemberRepository, Depends(get_member_repo)],
) -> MemberResult:
    """Accepted membership of the caller in the path's company; 403 otherwise."""
    membership = await member_repo.get_membership(company_id, current_user.id)
    if membership is None:
        raise AuthorizationException(message="You are not a member of this company")
    return membership


def require_company_role(
    *roles: CompanyRole,
) -> Callable[..., Awaitable[MemberResult]]:
    """Dependency factory: require an accepted membership with one of roles."""
    allowed = {r.value for r in roles}

    async def _require(
        membership: Annotated[MemberResult, Depends(require_company_member)],
    ) -> MemberResult:
        if membership.role not in allowed:
            raise AuthorizationException(
                message="Your role does not allow this action",
            )
        return membership

    return _require


async def require_report_access(
    namespace: Annotated[ReportNamespace, Path()],
    membership: Annotated[MemberResult, Depends(require_company_member)],
) -> MemberResult:
    """Members and above read every report; stockists only inventory."""
    if not can_read_report(membership.role, namespace):
        raise AuthorizationException("report", namespace.value)
    return membership


CompanyMember = Annotated[MemberResult, Depends(require_company_member)]
CompanyReader = Annotated[MemberResult, Depends(require_company_role(*READER_ROLES))]
CompanyManager = Annotated[MemberResult, Depends(require_company_role(*MANAGER_ROLES))]
CompanyOwner = Annotated[MemberResult, Depends(require_company_role(CompanyRole.OWNER))]
ReportReader = Annotated[MemberResult, Depends(require_report_access)]
