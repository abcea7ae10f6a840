"""Company member repository: memberships and pending invitations."""

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from app.application.dtos.company import MemberResult
from app.domain.enums import CompanyRole, InviteStatus
from app.infrastructure.persistence.models.company_member import CompanyMember
from app.infrastructure.persistence.models.user import User
from app.infrastructure.persistence.repositories.base import BaseRepository
from app.shared.utils.datetime import utc_now


def _member_to_result(m: CompanyMember, user_name: str | None = None) -> MemberResult:
    return MemberResult(
        id=m.id,
        company_id=m.company_id,
        email=m.email,
        role=m.role,
        invite_status=m.invite_status,
        user_id=m.user_id,
        user_name=user_name,
        invite_token=m.invite_token,
        invited_at=m.invited_at,
        joined_at=m.joined_at,
    )


class CompanyMemberRepository(BaseRepository[CompanyMember]):
    """Membership repository. Unique (company_id, email) is enforced by the table."""

    def __init__(self, db: AsyncSession) -> None:
        super().__init__(db, CompanyMember)

    async def get_by_id(self, member_id: str) -> MemberResult | None:
        member = await self.get_entity(member_id)
        return _member_to_result(member) if member else None

    async def get_membership(self, company_id: str, user_id: str) -> MemberResult | None:
        """Return the accepted membership of user in company, or None."""
        result = await self.db.execute(
            select(CompanyMember).where(
                CompanyMember.company_id == company_id,
                CompanyMember.user_id == user_id,
                CompanyMember.invite_status == InviteStatus.ACCEPTED.value,
            )
        )
        member = result.scalar_one_or_none()
        return _member_to_result(member) if member else None

    async def _get_by_email(self, company_id: str, email: str) -> CompanyMember | None:
        result = await self.db.execute(
            select(CompanyMember).where(
                CompanyMember.company_id == company_id,
                CompanyMember.email == email.lower(),
            )
        )
        return result.scalar_one_or_none()

    async def get_by_email(self, company_id: str, email: str) -> MemberResult | None:
        member = await self._get_by_email(company_id, email)
        return _member_to_result(member) if member else None

    async def get_by_invite_token(self, token: str) -> MemberResult | None:
        result = await self.db.execute(
            select(CompanyMember).where(CompanyMember.invite_token == token)
        )
        member = result.scalar_one_or_none()
        return _member_to_result(member) if member else None

    async def list_members(
        self, company_id: str, skip: int = 0, limit: int = 20
    ) -> tuple[list[MemberResult], int]:
        """Return (page of members with user names, total count)."""
        total = await self.count_where(CompanyMember.company_id == company_id)
        result = await self.db.execute(
            select(CompanyMember, User.name)
            .outerjoin(User, User.id == CompanyMember.user_id)
            .where(CompanyMember.company_id == company_id)
            .order_by(CompanyMember.created_at.asc())
            .offset(skip)
            .limit(limit)
        )
        return [_member_to_result(m, name) for m, name in result.all()], total

    async def add_owner(self, company_id: str, user_id: str, email: str) -> MemberResult:
        now = utc_now()
        member = CompanyMember(
            company_id=company_id,
            user_id=user_id,
            email=email.lower(),
            role=CompanyRole.OWNER.value,
            invite_status=InviteStatus.ACCEPTED.value,
            invited_at=now,
            joined_at=now,
        )
        return _member_to_result(await self.create(member))

    async def upsert_invite(
        self, company_id: str, email: str, role: str, token: str
    ) -> MemberResult:
        """Create a pending invite, or reset an existing non-accepted row to pending."""
        now = utc_now()
        member = await self._get_by_email(company_id, email)
        if member is None:
            member = await self.create(
                CompanyMember(
                    company_id=company_id,
                    email=email.lower(),
                    role=role,
                    invite_status=InviteStatus.PENDING.value,
                    invite_token=token,
                    invited_at=now,
                )
            )
        else:
            member = await self.apply_changes(
                member,
                {
                    "role": role,
                    "invite_status": InviteStatus.PENDING.value,
                    "invite_token": token,
                    "invited_at": now,
                },
            )
        return _member_to_result(member)

    async def accept_invite(self, member_id: str, user_id: str) -> MemberResult | None:
        member = await self.get_entity(member_id)
        if not member:
            return None
        member = await self.apply_changes(
            member,
            {
                "user_id": user_id,
                "invite_status": InviteStatus.ACCEPTED.value,
                "invite_token": None,
                "joined_at": utc_now(),
            },
        )
        return _member_to_result(member)

    async def remove(self, member_id: str) -> bool:
        member = await self.get_entity(member_id)
        if not member:
            return False
        await self.delete(member)
        return True

    async def count_accepted(self, company_id: str) -> int:
        return await self.count_where(
            CompanyMember.company_id == company_id,
            CompanyMember.invite_status == InviteStatus.ACCEPTED.value,
        )
