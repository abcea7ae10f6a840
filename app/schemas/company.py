"""Company (tenant) API schemas: create/update, members, invites, plan."""

from datetime import datetime
from typing import Annotated

from pydantic import StringConstraints

from app.domain.enums import CompanyRole, InviteRole, InviteStatus, PlanType
from app.schemas.auth import Email
from app.schemas.common import CamelModel
from app.shared.validation import LOGO_RULES, NAME_RULES, enforce, one_of, precheck

CompanyName = Annotated[str, StringConstraints(strip_whitespace=True), enforce(*NAME_RULES)]


class CreateCompanyRequest(CamelModel):
    """Request body for creating a company; the caller becomes its OWNER."""

    name: CompanyName


class UpdateCompanyRequest(CamelModel):
    """Request body for updating a company (partial)."""

    name: CompanyName | None = None
    logo: Annotated[str, enforce(*LOGO_RULES)] | None = None


class InviteMemberRequest(CamelModel):
    """Request body for inviting a member by email."""

    email: Email
    role: Annotated[InviteRole, precheck(one_of(InviteRole.values()))]


class ChangePlanRequest(CamelModel):
    """Request body for PUT /companies/{id}/plan."""

    plan: Annotated[PlanType, precheck(one_of(PlanType.values()))]


class CompanyResponse(CamelModel):
    """Company in list/get responses. role is the caller's role when known."""

    id: str
    name: str
    slug: str
    logo: str | None = None
    plan: PlanType
    grandfathered: bool
    role: CompanyRole | None = None


class MemberResponse(CamelModel):
    """Company member or pending invitation."""

    id: str
    email: str
    role: CompanyRole
    invite_status: InviteStatus
    user_id: str | None = None
    user_name: str | None = None
    invited_at: datetime | None = None
    joined_at: datetime | None = None


class InviteResponse(CamelModel):
    email: str
    role: InviteRole


class PlanUsageResponse(CamelModel):
    """Plan and store quota usage for a company."""

    plan: PlanType
    grandfathered: bool
    store_count: int
    store_limit: int
    usage_percentage: int
    is_at_limit: bool
    is_near_limit: bool
    can_add_store: bool
