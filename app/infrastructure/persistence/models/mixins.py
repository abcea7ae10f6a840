"""SQLAlchemy mixins for common model patterns (DRY).

Provides: CuidMixin, CompanyMixin, TimestampMixin, the combined
CompanyScopedModel, and the values_check constraint helper.
"""

from datetime import datetime

from sqlalchemy import CheckConstraint, DateTime, ForeignKey, String
from sqlalchemy.orm import Mapped, declared_attr, mapped_column
from sqlalchemy.sql import func

from app.shared.utils.generators import generate_cuid


class CuidMixin:
    """Mixin for models using CUID as primary key. Provides id with default generate_cuid."""

    @declared_attr
    def id(cls) -> Mapped[str]:
        return mapped_column(String, primary_key=True, default=generate_cuid)


class CompanyMixin:
    """Mixin for company-scoped models. Provides company_id FK with CASCADE delete."""

    @declared_attr
    def company_id(cls) -> Mapped[str]:
        return mapped_column(
            String,
            ForeignKey("company.id", ondelete="CASCADE"),
            nullable=False,
            index=True,
        )


class TimestampMixin:
    """Mixin for created_at and updated_at (server defaults, timezone-aware)."""

    @declared_attr
    def created_at(cls) -> Mapped[datetime]:
        return mapped_column(
            DateTime(timezone=True), server_default=func.now(), nullable=False
        )

    @declared_attr
    def updated_at(cls) -> Mapped[datetime]:
        return mapped_column(
            DateTime(timezone=True),
            server_default=func.now(),
            onupdate=func.now(),
            nullable=False,
        )


class CompanyScopedModel(CuidMixin, CompanyMixin, TimestampMixin):
    """Combined mixin: CUID + company_id + created_at/updated_at."""

    __abstract__ = True


def values_check(column: str, values: list[str], name: str) -> CheckConstraint:
    """CHECK constraint restricting a string column to the given enum values."""
    quoted = ", ".join("'{}'".format(v.replace("'", "''")) for v in values)
    return CheckConstraint(f"{column} IN ({quoted})", name=name)
