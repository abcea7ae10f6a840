"""Company (tenant) use cases: create, update, members, invitations, switching."""

from __future__ import annotations

import logging
from dataclasses import replace
from typing import Any

from app.application.dtos.company import CompanyResult, InviteResult, MemberResult
from app.application.dtos.user import UserResult
from app.application.interfaces.repositories import (
    ICompanyMemberRepository,
    ICompanyRepository,
    IUserRepository,
)
from app.application.interfaces.services import INotificationService
from app.domain.enums import CompanyRole, InviteRole, InviteStatus
from app.domain.exceptions import (
    AuthorizationException,
    CompanyNotFoundException,
    InvalidInviteException,
    InviteAlreadyPendingException,
    MemberAlreadyExistsException,
    ResourceNotFoundException,
)
from app.shared.utils.generators import generate_invite_token, slugify

logger = logging.getLogger(__name__)

DEFAULT_SLUG = "company"
MAX_SLUG_ATTEMPTS = 1000


class CompanyService:
    """Company lifecycle and membership management."""

    def __init__(
        self,
        company_repo: ICompanyRepository,
        member_repo: ICompanyMemberRepository,
        user_repo: IUserRepository,
        notifier: INotificationService,
    ) -> None:
        self.company_repo = company_repo
        self.member_repo = member_repo
        self.user_repo = user_repo
        self.notifier = notifier

    async def _unique_slug(self, name: str, exclude_id: str | None = None) -> str:
        """Slug from name; on collision append -1, -2, ... until free."""
        base = slugify(name) or DEFAULT_SLUG
        slug = base
        for counter in range(1, MAX_SLUG_ATTEMPTS + 1):
            if not await self.company_repo.slug_exists(slug, exclude_id=exclude_id):
                return slug
            slug = f"{base}-{counter}"
        raise RuntimeError(f"Could not find a free slug for {base!r}")

    async def create_company(self, user: UserResult, name: str) -> CompanyResult:
        """Create a company; the creator becomes OWNER and it becomes their current company."""
        slug = await self._unique_slug(name)
        company = await self.company_repo.create_company(name=name, slug=slug)
        await self.member_repo.add_owner(company.id, user.id, user.email)
        await self.user_repo.set_current_company(user.id, company.id)
        logger.info("Company %s created by user %s", company.id, user.id)
        return _with_role(company, CompanyRole.OWNER.value)

    async def list_user_companies(self, user_id: str) -> list[CompanyResult]:
        return await self.company_repo.list_for_user(user_id)

    async def get_company(self, company_id: str, role: str | None = None) -> CompanyResult:
        company = await self.company_repo.get_by_id(company_id)
        if company is None:
            raise CompanyNotFoundException(company_id)
        return _with_role(company, role)

    async def update_company(
        self, company_id: str, changes: dict[str, Any], role: str | None = None
    ) -> CompanyResult:
        """Apply a partial update. A new name regenerates the slug."""
        changes = dict(changes)
        if "name" in changes and changes["name"] is not None:
            changes["slug"] = await self._unique_slug(changes["name"], exclude_id=company_id)
        changes = {k: v for k, v in changes.items() if k in ("name", "slug", "logo")}
        updated = await self.company_repo.update_company(company_id, changes)
        if updated is None:
            raise CompanyNotFoundException(company_id)
        return _with_role(updated, role)

    async def list_members(
        self, company_id: str, skip: int = 0, limit: int = 20
    ) -> tuple[list[MemberResult], int]:
        return await self.member_repo.list_members(company_id, skip=skip, limit=limit)

    async def invite_member(
        self,
        company_id: str,
        email: str,
        role: InviteRole,
        inviter: UserResult | None = None,
    ) -> InviteResult:
        """Create or refresh a pending invitation and notify the invitee.

        Raises:
            MemberAlreadyExistsException: The email already belongs to an accepted member.
            InviteAlreadyPendingException: An invitation to the email is still pending.
        """
        email = email.lower()
        company = await self.get_company(company_id)
        existing = await self.member_repo.get_by_email(company_id, email)
        if existing is not None:
            if existing.invite_status == InviteStatus.ACCEPTED.value:
                raise MemberAlreadyExistsException(email)
            if existing.invite_status == InviteStatus.PENDING.value:
                raise InviteAlreadyPendingException(email)
        token = generate_invite_token()
        member = await self.member_repo.upsert_invite(company_id, email, role.value, token)
        await self.notifier.send_invitation(
            to_email=email,
            company_name=company.name,
            role=role.value,
            token=token,
            inviter_name=inviter.name if inviter else None,
        )
        logger.info("Invitation %s created in company %s as %s", member.id, company_id, role.value)
        return InviteResult(member_id=member.id, email=email, role=role.value, token=token)

    async def accept_invite(self, token: str, user: UserResult) -> CompanyResult:
        """Accept a pending invitation addressed to the user's email.

        Raises:
            InvalidInviteException: Unknown or non-pending token, or a different email.
        """
        invite = await self.member_repo.get_by_invite_token(token)
        if invite is None or invite.invite_status != InviteStatus.PENDING.value:
            raise InvalidInviteException()
        if invite.email.lower() != user.email.lower():
            raise InvalidInviteException("This invitation was sent to a different email address")
        accepted = await self.member_repo.accept_invite(invite.id, user.id)
        if accepted is None:
            raise InvalidInviteException()
        await self.user_repo.set_current_company(user.id, invite.company_id)
        logger.info("User %s joined company %s", user.id, invite.company_id)
        return await self.get_company(invite.company_id, role=accepted.role)

    async def remove_member(
        self, company_id: str, member_id: str, actor: MemberResult
    ) -> None:
        """Remove a member or revoke an invitation.

        Raises:
            ResourceNotFoundException: No such member in this company.
            AuthorizationException: Target is the OWNER, or an ADMIN removing an ADMIN.
        """
        target = await self.member_repo.get_by_id(member_id)
        if target is None or target.company_id != company_id:
            raise ResourceNotFoundException("member", member_id)
        if target.role == CompanyRole.OWNER.value:
            raise AuthorizationException(
                "member", "remove", message="The company owner cannot be removed"
            )
        if actor.role == CompanyRole.ADMIN.value and target.role == CompanyRole.ADMIN.value:
            raise AuthorizationException(
                "member", "remove", message="Admins cannot remove other admins"
            )
        await self.member_repo.remove(member_id)
        if target.user_id:
            user = await self.user_repo.get_by_id(target.user_id)
            if user and user.current_company_id == company_id:
                await self.user_repo.set_current_company(target.user_id, None)
        logger.info("Member %s removed from company %s", member_id, company_id)

    async def switch_company(self, user_id: str, company_id: str) -> CompanyResult:
        """Make company_id the user's current company (accepted membership required)."""
        membership = await self.member_repo.get_membership(company_id, user_id)
        if membership is None:
            raise AuthorizationException(message="You are not a member of this company")
        await self.user_repo.set_current_company(user_id, company_id)
        return await self.get_company(company_id, role=membership.role)


def _with_role(company: CompanyResult, role: str | None) -> CompanyResult:
    if role is None or company.role == role:
        return company
    return replace(company, role=role)
