"""Operator tool configuration loaded from environment variables."""

from functools import lru_cache
from typing import Literal

from pydantic import SecretStr, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from bettersaas.services.allowlist import parse_admin_allowlist

# Allowed URL schemes for DATABASE_URL (module-level so validators can use it).
VALID_DATABASE_URL_PREFIXES = (
    "postgresql://",
    "postgresql+psycopg2://",
    "postgres://",
    "postgres+psycopg2://",
)


class Settings(BaseSettings):
    """Validated settings from env and optional .env file."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
        case_sensitive=False,
    )

    APP_ENV: Literal["dev", "prod"] = "dev"
    DEBUG: bool = False

    # Required; the tools exit before any logic runs when it is missing.
    DATABASE_URL: str

    # Comma-separated emails that may be elevated to admin.
    ADMIN_EMAILS: str = ""

    # Provider id the credentials login path checks on the account row.
    CREDENTIAL_PROVIDER_ID: str = "credential"
    # Provider ids written by older tooling; such rows are normalized, not duplicated.
    LEGACY_CREDENTIAL_PROVIDER_IDS: str = "credentials"

    BCRYPT_ROUNDS: int = 12
    # Used by set-password when no password argument is given.
    DEFAULT_RESET_PASSWORD: SecretStr = SecretStr("changeme123")

    LOG_LEVEL: Literal["DEBUG", "INFO", "WARNING", "ERROR"] = "INFO"
    LOG_FORMAT: Literal["auto", "console", "json"] = "auto"

    @field_validator("DATABASE_URL")
    @classmethod
    def validate_database_url(cls, v: str) -> str:
        if not v or not v.strip():
            raise ValueError("DATABASE_URL must be set and non-empty")
        if not any(v.strip().startswith(prefix) for prefix in VALID_DATABASE_URL_PREFIXES):
            raise ValueError(
                "DATABASE_URL must be a PostgreSQL URL (e.g. postgresql:// or postgresql+psycopg2://)"
            )
        return v.strip()

    @field_validator("CREDENTIAL_PROVIDER_ID")
    @classmethod
    def validate_credential_provider_id(cls, v: str) -> str:
        if not v or not v.strip():
            raise ValueError("CREDENTIAL_PROVIDER_ID must be set and non-empty")
        return v.strip()

    @field_validator("BCRYPT_ROUNDS")
    @classmethod
    def validate_bcrypt_rounds(cls, v: int) -> int:
        if v < 4 or v > 16:
            raise ValueError("BCRYPT_ROUNDS must be between 4 and 16")
        return v

    @field_validator("LOG_LEVEL", mode="before")
    @classmethod
    def normalize_log_level(cls, v: str) -> str:
        return v.strip().upper() if isinstance(v, str) else v

    @property
    def admin_allowlist(self) -> frozenset[str]:
        return parse_admin_allowlist(self.ADMIN_EMAILS)

    @property
    def legacy_provider_ids(self) -> frozenset[str]:
        aliases = {p.strip() for p in self.LEGACY_CREDENTIAL_PROVIDER_IDS.split(",")}
        return frozenset(a for a in aliases if a and a != self.CREDENTIAL_PROVIDER_ID)


@lru_cache
def get_settings() -> Settings:
    """Return cached settings instance. Raises pydantic.ValidationError when invalid."""
    return Settings()
