"""Company API: companies, membership, invitations, and plan usage.

Role gates come from dependencies (CompanyMember, CompanyManager,
CompanyOwner); CompanyService enforces rules that depend on the target.
"""

from typing import Annotated

from fastapi import APIRouter, Depends, Request

from app.api.v1.dependencies import (
    CompanyManager,
    CompanyMember,
    CompanyOwner,
    CurrentUser,
    get_company_service,
    get_pagination,
    get_plan_service,
)
from app.application.dtos.company import CompanyResult, MemberResult
from app.application.services import CompanyService, PlanService
from app.core.limiter import limit_writes
from app.domain.plans import StoreUsage
from app.schemas.common import ApiResponse, MessageResponse, PaginationMeta, PaginationParams, ok
from app.schemas.company import (
    ChangePlanRequest,
    CompanyResponse,
    CreateCompanyRequest,
    InviteMemberRequest,
    InviteResponse,
    MemberResponse,
    PlanUsageResponse,
    UpdateCompanyRequest,
)

router = APIRouter()

Companies = Annotated[CompanyService, Depends(get_company_service)]
Plans = Annotated[PlanService, Depends(get_plan_service)]


def _company(company: CompanyResult) -> CompanyResponse:
    return CompanyResponse.model_validate(company, from_attributes=True)


def _member(member: MemberResult) -> MemberResponse:
    return MemberResponse.model_validate(member, from_attributes=True)


def _usage(usage: StoreUsage) -> PlanUsageResponse:
    return PlanUsageResponse.model_validate(usage, from_attributes=True)


@router.post("", response_model=ApiResponse[CompanyResponse], status_code=201)
@limit_writes
async def create_company(
    request: Request,
    body: CreateCompanyRequest,
    current_user: CurrentUser,
    companies: Companies,
):
    """Create a company; the caller becomes its OWNER."""
    company = await companies.create_company(current_user, body.name)
    return ok(_company(company), message="Company created")


@router.get("", response_model=ApiResponse[list[CompanyResponse]])
async def list_companies(current_user: CurrentUser, companies: Companies):
    """Companies where the caller has an accepted membership, with their role."""
    items = await companies.list_user_companies(current_user.id)
    return ok([_company(c) for c in items])


@router.post("/accept-invite/{token}", response_model=ApiResponse[CompanyResponse])
@limit_writes
async def accept_invite(
    request: Request,
    token: str,
    current_user: CurrentUser,
    companies: Companies,
):
    """Accept an invitation addressed to the caller's email."""
    company = await companies.accept_invite(token, current_user)
    return ok(_company(company), message="Invitation accepted")


@router.get("/{company_id}", response_model=ApiResponse[CompanyResponse])
async def get_company(company_id: str, membership: CompanyMember, companies: Companies):
    company = await companies.get_company(company_id, role=membership.role)
    return ok(_company(company))


@router.put("/{company_id}", response_model=ApiResponse[CompanyResponse])
@limit_writes
async def update_company(
    request: Request,
    company_id: str,
    body: UpdateCompanyRequest,
    membership: CompanyManager,
    companies: Companies,
):
    """Update name and/or logo (OWNER/ADMIN)."""
    company = await companies.update_company(
        company_id, body.model_dump(exclude_unset=True), role=membership.role
    )
    return ok(_company(company), message="Company updated")


@router.get("/{company_id}/members", response_model=ApiResponse[list[MemberResponse]])
async def list_members(
    company_id: str,
    membership: CompanyMember,
    companies: Companies,
    pagination: Annotated[PaginationParams, Depends(get_pagination)],
):
    """Members and pending invitations, paginated."""
    members, total = await companies.list_members(
        company_id, skip=pagination.offset, limit=pagination.limit
    )
    return ok(
        [_member(m) for m in members],
        meta=PaginationMeta.build(total, pagination.page, pagination.limit),
    )


@router.post(
    "/{company_id}/invite", response_model=ApiResponse[InviteResponse], status_code=201
)
@limit_writes
async def invite_member(
    request: Request,
    company_id: str,
    body: InviteMemberRequest,
    membership: CompanyManager,
    current_user: CurrentUser,
    companies: Companies,
):
    """Invite an email with a role (OWNER/ADMIN). 409 if already a member or pending."""
    invite = await companies.invite_member(
        company_id, body.email, body.role, inviter=current_user
    )
    return ok(InviteResponse(email=invite.email, role=invite.role), message="Invitation sent")


@router.delete("/{company_id}/members/{member_id}", response_model=ApiResponse[MessageResponse])
@limit_writes
async def remove_member(
    request: Request,
    company_id: str,
    member_id: str,
    membership: CompanyManager,
    companies: Companies,
):
    """Remove a member or revoke an invitation (OWNER/ADMIN)."""
    await companies.remove_member(company_id, member_id, actor=membership)
    return ok(MessageResponse(message="Member removed"))


@router.post("/{company_id}/switch", response_model=ApiResponse[CompanyResponse])
async def switch_company(
    company_id: str,
    membership: CompanyMember,
    current_user: CurrentUser,
    companies: Companies,
):
    """Make this the caller's current company."""
    company = await companies.switch_company(current_user.id, company_id)
    return ok(_company(company))


@router.get("/{company_id}/plan", response_model=ApiResponse[PlanUsageResponse])
async def get_plan_usage(company_id: str, membership: CompanyMember, plans: Plans):
    """Store usage against the plan limit."""
    return ok(_usage(await plans.get_usage(company_id)))


@router.put("/{company_id}/plan", response_model=ApiResponse[PlanUsageResponse])
@limit_writes
async def change_plan(
    request: Request,
    company_id: str,
    body: ChangePlanRequest,
    membership: CompanyOwner,
    plans: Plans,
):
    """Switch plan (OWNER only)."""
    usage = await plans.change_plan(company_id, body.plan)
    return ok(_usage(usage), message="Plan updated")
