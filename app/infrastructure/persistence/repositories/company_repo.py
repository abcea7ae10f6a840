"""Company repository. Interface methods return application DTOs."""

from typing import Any

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from app.application.dtos.company import CompanyResult
from app.domain.enums import InviteStatus
from app.infrastructure.persistence.models.company import Company
from app.infrastructure.persistence.models.company_member import CompanyMember
from app.infrastructure.persistence.repositories.base import BaseRepository


def _company_to_result(c: Company, role: str | None = None) -> CompanyResult:
    """Map ORM Company to application CompanyResult."""
    return CompanyResult(
        id=c.id,
        name=c.name,
        slug=c.slug,
        plan=c.plan,
        grandfathered=c.grandfathered,
        logo=c.logo,
        role=role,
    )


class CompanyRepository(BaseRepository[Company]):
    """Company repository. create_company, update_company, list_for_user, slug lookups."""

    def __init__(self, db: AsyncSession) -> None:
        super().__init__(db, Company)

    async def get_by_id(self, company_id: str) -> CompanyResult | None:
        company = await self.get_entity(company_id)
        return _company_to_result(company) if company else None

    async def slug_exists(self, slug: str, exclude_id: str | None = None) -> bool:
        criteria: list[Any] = [Company.slug == slug]
        if exclude_id:
            criteria.append(Company.id != exclude_id)
        return await self.count_where(*criteria) > 0

    async def create_company(self, name: str, slug: str) -> CompanyResult:
        created = await self.create(Company(name=name, slug=slug))
        return _company_to_result(created)

    async def update_company(
        self, company_id: str, changes: dict[str, Any]
    ) -> CompanyResult | None:
        """Apply name/slug/logo/plan changes; returns None when the company is gone."""
        company = await self.get_entity(company_id)
        if not company:
            return None
        if changes:
            company = await self.apply_changes(company, changes)
        return _company_to_result(company)

    async def list_for_user(self, user_id: str) -> list[CompanyResult]:
        """Companies where the user is an accepted member, with the user's role."""
        result = await self.db.execute(
            select(Company, CompanyMember.role)
            .join(CompanyMember, CompanyMember.company_id == Company.id)
            .where(
                CompanyMember.user_id == user_id,
                CompanyMember.invite_status == InviteStatus.ACCEPTED.value,
            )
            .order_by(Company.created_at.asc())
        )
        return [_company_to_result(company, role) for company, role in result.all()]
