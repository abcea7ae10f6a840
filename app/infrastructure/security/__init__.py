"""Security: JWT, password hashing, and store credential encryption."""

from app.infrastructure.security.credentials import StoreCredentialCipher
from app.infrastructure.security.jwt import (
    access_token_lifetime,
    create_access_token,
    verify_token,
)
from app.infrastructure.security.password import (
    generate_reset_token,
    get_password_hash,
    hash_reset_token,
    verify_password,
)

__all__ = [
    "StoreCredentialCipher",
    "access_token_lifetime",
    "create_access_token",
    "generate_reset_token",
    "get_password_hash",
    "hash_reset_token",
    "verify_password",
    "verify_token",
]
