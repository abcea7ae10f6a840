"""Domain enumerations for the StorePulse application.

Enums represent fixed sets of domain values (plans, roles, store and order
status, report namespaces).
"""

from enum import Enum


class _ValuesMixin:
    """Mixin that adds a values() classmethod to str Enums."""

    @classmethod
    def values(cls) -> list[str]:
        """Return all valid values as strings."""
        return [member.value for member in cls]


class PlanType(_ValuesMixin, str, Enum):
    """Subscription tier; determines the company's store quota."""

    FREE = "FREE"
    PRO = "PRO"
    ENTERPRISE = "ENTERPRISE"


class CompanyRole(_ValuesMixin, str, Enum):
    """Role of a member within a company. OWNER is assigned to the creator only."""

    OWNER = "OWNER"
    ADMIN = "ADMIN"
    MEMBER = "MEMBER"
    STOCKIST = "STOCKIST"


class InviteRole(_ValuesMixin, str, Enum):
    """Roles that can be granted through an invitation."""

    ADMIN = "ADMIN"
    MEMBER = "MEMBER"
    STOCKIST = "STOCKIST"


class InviteStatus(_ValuesMixin, str, Enum):
    """Membership invitation lifecycle."""

    PENDING = "PENDING"
    ACCEPTED = "ACCEPTED"


class StoreStatus(_ValuesMixin, str, Enum):
    """Operational status of a connected store."""

    ACTIVE = "ACTIVE"
    INACTIVE = "INACTIVE"
    ERROR = "ERROR"


class OrderStatus(_ValuesMixin, str, Enum):
    """WooCommerce order status (external, read-only)."""

    COMPLETED = "completed"
    PROCESSING = "processing"
    PENDING = "pending"
    ON_HOLD = "on-hold"
    CANCELLED = "cancelled"
    REFUNDED = "refunded"
    FAILED = "failed"


class StockStatus(_ValuesMixin, str, Enum):
    """WooCommerce product stock status (external, read-only)."""

    IN_STOCK = "instock"
    OUT_OF_STOCK = "outofstock"
    ON_BACKORDER = "onbackorder"


class ReportNamespace(_ValuesMixin, str, Enum):
    """Reporting resources; each has its own cache key namespace."""

    DASHBOARD = "dashboard"
    INVENTORY = "inventory"
    ORDERS = "orders"
    PAYMENTS = "payments"
    PROFITS = "profits"
    REFUNDS = "refunds"


class DatePeriod(_ValuesMixin, str, Enum):
    """Named reporting periods."""

    TODAY = "today"
    LAST_7_DAYS = "7d"
    LAST_30_DAYS = "30d"
    LAST_365_DAYS = "365d"
    CUSTOM = "custom"


class SortOrder(_ValuesMixin, str, Enum):
    ASC = "asc"
    DESC = "desc"
