"""DTOs for company, membership, and plan use cases (no dependency on ORM)."""

from dataclasses import dataclass
from datetime import datetime


@dataclass(frozen=True)
class CompanyResult:
    """Company read-model. role is the requesting user's role when listed for a user."""

    id: str
    name: str
    slug: str
    plan: str
    grandfathered: bool
    logo: str | None = None
    role: str | None = None


@dataclass(frozen=True)
class MemberResult:
    """Membership or pending invitation in a company."""

    id: str
    company_id: str
    email: str
    role: str
    invite_status: str
    user_id: str | None = None
    user_name: str | None = None
    invite_token: str | None = None
    invited_at: datetime | None = None
    joined_at: datetime | None = None


@dataclass(frozen=True)
class InviteResult:
    """Outcome of an invitation: who was invited, and the token sent to them."""

    member_id: str
    email: str
    role: str
    token: str
