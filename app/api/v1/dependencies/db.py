"""DB session and repository dependencies (composition root)."""

from __future__ import annotations

from typing import Annotated

from fastapi import Depends
from sqlalchemy.ext.asyncio import AsyncSession

from app.infrastructure.persistence.database import get_db, get_db_transactional
from app.infrastructure.persistence.repositories import (
    CompanyMemberRepository,
    CompanyRepository,
    PasswordResetTokenRepository,
    StoreRepository,
    UserRepository,
)

ReadSession = Annotated[AsyncSession, Depends(get_db)]
WriteSession = Annotated[AsyncSession, Depends(get_db_transactional)]


async def get_user_repo(db: ReadSession) -> UserRepository:
    """User repository for read operations (token resolution)."""
    return UserRepository(db)


async def get_member_repo(db: ReadSession) -> CompanyMemberRepository:
    """Membership repository for read operations (company guards)."""
    return CompanyMemberRepository(db)


async def get_user_repo_for_write(db: WriteSession) -> UserRepository:
    return UserRepository(db)


async def get_password_reset_repo_for_write(db: WriteSession) -> PasswordResetTokenRepository:
    return PasswordResetTokenRepository(db)


async def get_company_repo_for_write(db: WriteSession) -> CompanyRepository:
    return CompanyRepository(db)


async def get_member_repo_for_write(db: WriteSession) -> CompanyMemberRepository:
    return CompanyMemberRepository(db)


async def get_store_repo_for_write(db: WriteSession) -> StoreRepository:
    """Store repository sharing the request transaction."""
    return StoreRepository(db)
