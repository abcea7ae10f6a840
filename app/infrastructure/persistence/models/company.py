"""Company ORM model. Root entity of the tenant hierarchy (no company_id)."""

from sqlalchemy import Boolean, String, Text, text
from sqlalchemy.orm import Mapped, mapped_column

from app.domain.enums import PlanType
from app.infrastructure.persistence.database import Base
from app.infrastructure.persistence.models.mixins import (
    CuidMixin,
    TimestampMixin,
    values_check,
)


class Company(CuidMixin, TimestampMixin, Base):
    """Tenant. Table: company. Plan decides the store quota."""

    __tablename__ = "company"

    name: Mapped[str] = mapped_column(String(100), nullable=False)
    slug: Mapped[str] = mapped_column(String(120), unique=True, nullable=False, index=True)
    logo: Mapped[str | None] = mapped_column(Text, nullable=True)
    plan: Mapped[str] = mapped_column(
        String, nullable=False, default=PlanType.FREE.value
    )
    grandfathered: Mapped[bool] = mapped_column(
        Boolean, nullable=False, default=False, server_default=text("false")
    )

    __table_args__ = (values_check("plan", PlanType.values(), "company_plan_check"),)
