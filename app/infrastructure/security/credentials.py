"""Store API credential encryption (Fernet, key derived from the app secret)."""

import base64

from cryptography.fernet import Fernet, InvalidToken
from cryptography.hazmat.primitives import hashes
from cryptography.hazmat.primitives.kdf.pbkdf2 import PBKDF2HMAC

from app.core.config import Settings, get_settings
from app.domain.exceptions import CredentialException

PBKDF2_ITERATIONS = 100_000


class StoreCredentialCipher:
    """Encrypt/decrypt WooCommerce consumer keys and secrets for storage."""

    def __init__(self, settings: Settings | None = None) -> None:
        self._fernet = Fernet(self._derive_key(settings or get_settings()))

    @staticmethod
    def _derive_key(settings: Settings) -> bytes:
        """Derive a 32-byte key from secret_key + encryption_salt via PBKDF2-HMAC-SHA256."""
        kdf = PBKDF2HMAC(
            algorithm=hashes.SHA256(),
            length=32,
            salt=settings.encryption_salt.get_secret_value().encode(),
            iterations=PBKDF2_ITERATIONS,
        )
        derived = kdf.derive(settings.secret_key.get_secret_value().encode())
        return base64.urlsafe_b64encode(derived)

    def encrypt(self, plaintext: str) -> str:
        return self._fernet.encrypt(plaintext.encode()).decode()

    def decrypt(self, ciphertext: str) -> str:
        """Decrypt a stored credential.

        Raises:
            CredentialException: If the value was not produced with this key.
        """
        try:
            return self._fernet.decrypt(ciphertext.encode()).decode()
        except InvalidToken as e:
            raise CredentialException(
                "Failed to decrypt store credentials - invalid or corrupted data"
            ) from e
