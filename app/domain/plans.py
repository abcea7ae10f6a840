"""Plan quota policy: pure functions mapping plans to store limits.

No I/O here; PlanService combines these with repository counts.
"""

from dataclasses import dataclass
from enum import Enum

from app.core.constants import (
    MAX_STORES_ENTERPRISE,
    MAX_STORES_FREE,
    MAX_STORES_PRO,
    NEAR_LIMIT_PERCENT,
    UNLIMITED_STORES,
)
from app.domain.enums import PlanType

PLAN_STORE_LIMITS: dict[PlanType, int] = {
    PlanType.FREE: MAX_STORES_FREE,
    PlanType.PRO: MAX_STORES_PRO,
    PlanType.ENTERPRISE: MAX_STORES_ENTERPRISE,
}


class GrandfatherPolicy(str, Enum):
    """How the grandfathered flag changes a company's store limit.

    NONE: the flag is ignored; the current plan's limit applies.
    UNLIMITED: grandfathered companies get the unlimited sentinel limit.
    """

    NONE = "none"
    UNLIMITED = "unlimited"


@dataclass(frozen=True)
class StoreUsage:
    """Store quota usage for a company."""

    plan: PlanType
    grandfathered: bool
    store_count: int
    store_limit: int

    @property
    def is_unlimited(self) -> bool:
        return self.store_limit >= UNLIMITED_STORES

    @property
    def usage_percentage(self) -> int:
        if self.is_unlimited or self.store_limit <= 0:
            return 0
        return round(self.store_count / self.store_limit * 100)

    @property
    def is_at_limit(self) -> bool:
        return self.store_count >= self.store_limit

    @property
    def is_near_limit(self) -> bool:
        return self.usage_percentage >= NEAR_LIMIT_PERCENT

    @property
    def can_add_store(self) -> bool:
        return not self.is_at_limit


def store_limit_for_plan(plan: PlanType | str) -> int:
    """Return the maximum number of stores a plan permits.

    Raises:
        ValueError: If plan is not a known plan identifier.
    """
    return PLAN_STORE_LIMITS[PlanType(plan)]


def resolve_store_limit(
    plan: PlanType | str,
    grandfathered: bool,
    policy: GrandfatherPolicy = GrandfatherPolicy.NONE,
) -> int:
    """Return the effective store limit for a company given its plan and flag."""
    if grandfathered and policy == GrandfatherPolicy.UNLIMITED:
        return UNLIMITED_STORES
    return store_limit_for_plan(plan)
