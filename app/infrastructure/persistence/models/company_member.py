"""CompanyMember ORM model: a user's role in a company, or a pending invitation."""

from datetime import datetime

from sqlalchemy import DateTime, ForeignKey, String, UniqueConstraint
from sqlalchemy.orm import Mapped, mapped_column

from app.domain.enums import CompanyRole, InviteStatus
from app.infrastructure.persistence.database import Base
from app.infrastructure.persistence.models.mixins import CompanyScopedModel, values_check


class CompanyMember(CompanyScopedModel, Base):
    """Membership row. Unique (company_id, email); user_id is set when the invite is accepted."""

    __tablename__ = "company_member"

    user_id: Mapped[str | None] = mapped_column(
        String,
        ForeignKey("app_user.id", ondelete="CASCADE"),
        nullable=True,
        index=True,
    )
    email: Mapped[str] = mapped_column(String(255), nullable=False)
    role: Mapped[str] = mapped_column(String, nullable=False, default=CompanyRole.MEMBER.value)
    invite_status: Mapped[str] = mapped_column(
        String, nullable=False, default=InviteStatus.PENDING.value
    )
    invite_token: Mapped[str | None] = mapped_column(
        String(64), unique=True, nullable=True
    )
    invited_at: Mapped[datetime | None] = mapped_column(DateTime(timezone=True), nullable=True)
    joined_at: Mapped[datetime | None] = mapped_column(DateTime(timezone=True), nullable=True)

    __table_args__ = (
        UniqueConstraint("company_id", "email", name="uq_company_member_email"),
        values_check("role", CompanyRole.values(), "company_member_role_check"),
        values_check(
            "invite_status", InviteStatus.values(), "company_member_invite_status_check"
        ),
    )
