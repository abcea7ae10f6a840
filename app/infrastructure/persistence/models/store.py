"""Store ORM model: a connected WooCommerce store of a company."""

from datetime import datetime

from sqlalchemy import DateTime, Float, String, Text, UniqueConstraint, text
from sqlalchemy.orm import Mapped, mapped_column

from app.core.constants import STORE_NAME_MAX_LENGTH, STORE_URL_MAX_LENGTH
from app.domain.enums import StoreStatus
from app.infrastructure.persistence.database import Base
from app.infrastructure.persistence.models.mixins import CompanyScopedModel, values_check


class Store(CompanyScopedModel, Base):
    """Store. Table: store. Credentials are Fernet ciphertext; url is normalized."""

    __tablename__ = "store"

    name: Mapped[str] = mapped_column(String(STORE_NAME_MAX_LENGTH), nullable=False)
    url: Mapped[str] = mapped_column(String(STORE_URL_MAX_LENGTH), nullable=False)
    consumer_key: Mapped[str] = mapped_column(Text, nullable=False)
    consumer_secret: Mapped[str] = mapped_column(Text, nullable=False)
    status: Mapped[str] = mapped_column(
        String, nullable=False, default=StoreStatus.ACTIVE.value, index=True
    )
    commission_rate: Mapped[float] = mapped_column(
        Float, nullable=False, default=0.0, server_default=text("0")
    )
    shipping_cost: Mapped[float] = mapped_column(
        Float, nullable=False, default=0.0, server_default=text("0")
    )
    currency: Mapped[str | None] = mapped_column(String(8), nullable=True)
    last_sync_at: Mapped[datetime | None] = mapped_column(DateTime(timezone=True), nullable=True)

    __table_args__ = (
        UniqueConstraint("company_id", "url", name="uq_store_company_url"),
        values_check("status", StoreStatus.values(), "store_status_check"),
    )
