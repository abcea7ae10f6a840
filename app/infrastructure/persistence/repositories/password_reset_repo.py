"""Password reset token repository (token_hash lookup, single use)."""

from datetime import datetime

from sqlalchemy import select, update
from sqlalchemy.ext.asyncio import AsyncSession

from app.application.dtos.user import PasswordResetResult
from app.infrastructure.persistence.models.password_reset_token import (
    PasswordResetToken,
)
from app.infrastructure.persistence.repositories.base import BaseRepository
from app.shared.utils.datetime import utc_now


def _token_to_result(t: PasswordResetToken) -> PasswordResetResult:
    return PasswordResetResult(
        id=t.id, user_id=t.user_id, expires_at=t.expires_at, used_at=t.used_at
    )


class PasswordResetTokenRepository(BaseRepository[PasswordResetToken]):
    def __init__(self, db: AsyncSession) -> None:
        super().__init__(db, PasswordResetToken)

    async def create_token(
        self, user_id: str, token_hash: str, expires_at: datetime
    ) -> PasswordResetResult:
        """Store a new token; earlier unused tokens of the user are retired first."""
        await self.db.execute(
            update(PasswordResetToken)
            .where(
                PasswordResetToken.user_id == user_id,
                PasswordResetToken.used_at.is_(None),
            )
            .values(used_at=utc_now())
        )
        token = PasswordResetToken(
            user_id=user_id, token_hash=token_hash, expires_at=expires_at
        )
        return _token_to_result(await self.create(token))

    async def get_valid(self, token_hash: str) -> PasswordResetResult | None:
        """Return the unused, unexpired token with this hash, or None."""
        result = await self.db.execute(
            select(PasswordResetToken).where(
                PasswordResetToken.token_hash == token_hash,
                PasswordResetToken.used_at.is_(None),
                PasswordResetToken.expires_at > utc_now(),
            )
        )
        token = result.scalar_one_or_none()
        return _token_to_result(token) if token else None

    async def mark_used(self, token_id: str) -> None:
        token = await self.get_entity(token_id)
        if token:
            await self.apply_changes(token, {"used_at": utc_now()})
