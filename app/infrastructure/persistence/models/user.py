"""User ORM model for authentication. Users are global; companies are joined through membership."""

from sqlalchemy import Boolean, ForeignKey, String, text
from sqlalchemy.orm import Mapped, mapped_column

from app.infrastructure.persistence.database import Base
from app.infrastructure.persistence.models.mixins import CuidMixin, TimestampMixin


class User(CuidMixin, TimestampMixin, Base):
    """User model. Table: app_user. Email is unique and stored lower-cased."""

    __tablename__ = "app_user"

    email: Mapped[str] = mapped_column(String(255), unique=True, nullable=False, index=True)
    name: Mapped[str] = mapped_column(String(100), nullable=False)
    hashed_password: Mapped[str] = mapped_column(String, nullable=False)
    is_active: Mapped[bool] = mapped_column(
        Boolean, nullable=False, server_default=text("true")
    )
    current_company_id: Mapped[str | None] = mapped_column(
        String, ForeignKey("company.id", ondelete="SET NULL"), nullable=True
    )
