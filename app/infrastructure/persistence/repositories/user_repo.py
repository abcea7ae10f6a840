"""User repository with password helpers. Interface methods return application DTOs."""

import asyncio

from sqlalchemy import select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from app.application.dtos.user import UserResult
from app.domain.exceptions import EmailAlreadyRegisteredException
from app.infrastructure.persistence.models.user import User
from app.infrastructure.persistence.repositories.base import BaseRepository
from app.infrastructure.security.password import get_password_hash, verify_password

# Lazy dummy hash for constant-time comparison when user is not found (timing-attack mitigation).
_dummy_hash_cache: str | None = None


async def _get_dummy_hash() -> str:
    """Return a valid bcrypt hash for dummy comparison; computed once in thread pool."""
    global _dummy_hash_cache
    if _dummy_hash_cache is None:
        _dummy_hash_cache = await asyncio.to_thread(
            get_password_hash, "not-a-real-password"
        )
    return _dummy_hash_cache


def _user_to_result(u: User) -> UserResult:
    """Map ORM User to application UserResult (no password)."""
    return UserResult(
        id=u.id,
        email=u.email,
        name=u.name,
        is_active=u.is_active,
        current_company_id=u.current_company_id,
    )


class UserRepository(BaseRepository[User]):
    """User repository. authenticate, create_user, update_profile, set_current_company."""

    def __init__(self, db: AsyncSession) -> None:
        super().__init__(db, User)

    async def _get_by_email(self, email: str) -> User | None:
        result = await self.db.execute(select(User).where(User.email == email.lower()))
        return result.scalar_one_or_none()

    async def get_by_id(self, user_id: str) -> UserResult | None:
        user = await self.get_entity(user_id)
        return _user_to_result(user) if user else None

    async def get_by_email(self, email: str) -> UserResult | None:
        user = await self._get_by_email(email)
        return _user_to_result(user) if user else None

    async def authenticate(self, email: str, password: str) -> UserResult | None:
        """Return the active user when email and password match, else None."""
        user = await self._get_by_email(email)
        if not user:
            await asyncio.to_thread(verify_password, password, await _get_dummy_hash())
            return None
        if not user.is_active:
            return None
        if not await asyncio.to_thread(verify_password, password, user.hashed_password):
            return None
        return _user_to_result(user)

    async def check_password(self, user_id: str, password: str) -> bool:
        user = await self.get_entity(user_id)
        if not user:
            return False
        return await asyncio.to_thread(verify_password, password, user.hashed_password)

    async def create_user(self, email: str, name: str, password: str) -> UserResult:
        """Create an account; raises EmailAlreadyRegisteredException on duplicate email."""
        hashed = await asyncio.to_thread(get_password_hash, password)
        user = User(email=email.lower(), name=name, hashed_password=hashed, is_active=True)
        try:
            created = await self.create(user)
        except IntegrityError as e:
            raise EmailAlreadyRegisteredException() from e
        return _user_to_result(created)

    async def update_profile(
        self,
        user_id: str,
        *,
        name: str | None = None,
        password: str | None = None,
    ) -> UserResult | None:
        user = await self.get_entity(user_id)
        if not user:
            return None
        changes: dict[str, object] = {}
        if name is not None:
            changes["name"] = name
        if password is not None:
            changes["hashed_password"] = await asyncio.to_thread(get_password_hash, password)
        if changes:
            user = await self.apply_changes(user, changes)
        return _user_to_result(user)

    async def set_current_company(self, user_id: str, company_id: str | None) -> None:
        user = await self.get_entity(user_id)
        if user:
            await self.apply_changes(user, {"current_company_id": company_id})
