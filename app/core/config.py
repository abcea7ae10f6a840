"""Application configuration (settings and environment).

Single source of truth for all configuration. Uses pydantic-settings
with .env support. Required secrets (SECRET_KEY, ENCRYPTION_SALT) are
validated at load time.
"""

from functools import lru_cache

from pydantic import SecretStr, model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from app.domain.plans import GrandfatherPolicy


class Settings(BaseSettings):
    """Application settings loaded from environment and .env.

    All settings are optional with defaults except secret_key and
    encryption_salt (validated in validate_required).
    """

    # App
    app_name: str = "storepulse"
    app_version: str = "1.0.0"
    debug: bool = False
    default_locale: str = "en"

    # Database (Postgres via asyncpg; schema managed by Alembic)
    database_url: str = ""
    database_echo: bool = False
    db_pool_size: int = 10
    db_max_overflow: int = 20

    # Security
    secret_key: SecretStr = SecretStr("")
    algorithm: str = "HS256"
    access_token_expire_minutes: int = 480  # 8 hours
    remember_me_expire_days: int = 30
    password_reset_expire_minutes: int = 60
    # Salt for deriving the store-credential encryption key from secret_key.
    encryption_salt: SecretStr = SecretStr("")

    # CORS
    allowed_origins: str = "http://localhost:3000"

    # Request / middleware
    request_id_header: str = "X-Request-ID"

    # Redis cache
    redis_enabled: bool = True
    redis_host: str = "localhost"
    redis_port: int = 6379
    redis_db: int = 0
    redis_password: SecretStr | None = None
    redis_ssl: bool = False
    redis_socket_timeout: float = 2.0
    # Seconds to wait before retrying Redis after a connection failure.
    redis_retry_interval: float = 5.0
    cache_default_ttl: int = 300

    # Plans
    grandfather_policy: GrandfatherPolicy = GrandfatherPolicy.NONE

    # WooCommerce
    store_api_timeout_seconds: float = 30.0
    store_api_user_agent: str = "StorePulse/1.0"

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
        case_sensitive=False,
    )

    @model_validator(mode="after")
    def validate_required(self) -> "Settings":
        """Validate required secrets."""
        if not self.secret_key.get_secret_value():
            raise ValueError(
                "SECRET_KEY is required. Generate with: openssl rand -hex 32."
            )
        if not self.encryption_salt.get_secret_value():
            raise ValueError(
                "ENCRYPTION_SALT is required. Generate with: openssl rand -hex 16."
            )
        if self.cache_default_ttl <= 0:
            raise ValueError("CACHE_DEFAULT_TTL must be a positive number of seconds")
        return self


@lru_cache
def get_settings() -> Settings:
    """Return cached application settings (single instance per process).

    Validation runs on first call, not at import time. In tests, call
    get_settings.cache_clear() before overriding env vars so the next
    get_settings() uses the new values.

    Returns:
        Loaded and validated Settings instance.
    """
    return Settings()
