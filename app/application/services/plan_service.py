"""Plan and store quota use cases."""

from __future__ import annotations

import logging

from app.application.dtos.company import CompanyResult
from app.application.interfaces.repositories import ICompanyRepository, IStoreRepository
from app.domain.enums import PlanType
from app.domain.exceptions import CompanyNotFoundException, StoreLimitExceededException
from app.domain.plans import GrandfatherPolicy, StoreUsage, resolve_store_limit

logger = logging.getLogger(__name__)


class PlanService:
    """Reports store usage against the plan limit and enforces it."""

    def __init__(
        self,
        company_repo: ICompanyRepository,
        store_repo: IStoreRepository,
        policy: GrandfatherPolicy = GrandfatherPolicy.NONE,
    ) -> None:
        self.company_repo = company_repo
        self.store_repo = store_repo
        self.policy = policy

    async def _get_company(self, company_id: str) -> CompanyResult:
        company = await self.company_repo.get_by_id(company_id)
        if company is None:
            raise CompanyNotFoundException(company_id)
        return company

    async def usage_for(self, company: CompanyResult) -> StoreUsage:
        count = await self.store_repo.count_for_company(company.id)
        return StoreUsage(
            plan=PlanType(company.plan),
            grandfathered=company.grandfathered,
            store_count=count,
            store_limit=resolve_store_limit(company.plan, company.grandfathered, self.policy),
        )

    async def get_usage(self, company_id: str) -> StoreUsage:
        return await self.usage_for(await self._get_company(company_id))

    async def ensure_can_add_store(self, company: CompanyResult) -> StoreUsage:
        """Raise StoreLimitExceededException when the company is at its limit."""
        usage = await self.usage_for(company)
        if usage.is_at_limit:
            logger.info(
                "Store limit reached for company %s (%s/%s, plan %s)",
                company.id,
                usage.store_count,
                usage.store_limit,
                usage.plan.value,
            )
            raise StoreLimitExceededException(
                current_count=usage.store_count,
                limit=usage.store_limit,
                plan=usage.plan.value,
            )
        return usage

    async def change_plan(self, company_id: str, plan: PlanType) -> StoreUsage:
        """Switch the company's plan. Existing stores above a lower limit are kept."""
        await self._get_company(company_id)
        updated = await self.company_repo.update_company(company_id, {"plan": plan.value})
        if updated is None:
            raise CompanyNotFoundException(company_id)
        logger.info("Company %s plan changed to %s", company_id, plan.value)
        return await self.usage_for(updated)
