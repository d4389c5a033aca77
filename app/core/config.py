"""Application configuration loaded from environment variables."""

from functools import lru_cache
from typing import Literal

from pydantic import SecretStr, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

# Allowed URL schemes for DATABASE_URL (module-level so validators can use it).
VALID_DATABASE_URL_PREFIXES = (
    "sqlite://",
    "sqlite+pysqlite://",
    "postgresql://",
    "postgresql+psycopg2://",
    "postgres://",
    "postgres+psycopg2://",
)


class Settings(BaseSettings):
    """Validated application settings from env and optional .env file."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
        case_sensitive=False,
    )

    APP_ENV: Literal["dev", "prod"] = "dev"
    DEBUG: bool = False
    API_V1_PREFIX: str = "/api/v1"

    # Where the local overrides live: in process memory, one JSON file per key, or a SQL table.
    STORAGE_BACKEND: Literal["memory", "file", "sql"] = "file"
    STORAGE_DIR: str = ".storage"
    DATABASE_URL: str = "sqlite:///./cittafutura.db"
    STORAGE_KEY_PREFIX: str = "cittafutura_"
    # When False, failed writes are logged and the operation still returns its result.
    STORAGE_STRICT_WRITES: bool = False

    # Seed documents (data/users.json, data/houses.json, data/reservations.json) are
    # fetched relative to this base. Empty disables seeding.
    SEED_BASE_URL: str = "http://localhost:5173/LeCaseDiCittaFutura1/"
    SEED_REQUEST_TIMEOUT_SEC: float = 10.0

    # Artificial latency before every store operation (loading-state testing).
    SIMULATED_DELAY_MS: int = 200

    # JWT authentication
    JWT_SECRET: SecretStr = SecretStr("change-me-in-production")
    JWT_ALGORITHM: str = "HS256"
    JWT_EXPIRE_MINUTES: int = 60

    @field_validator("DATABASE_URL")
    @classmethod
    def validate_database_url(cls, v: str) -> str:
        if not v or not v.strip():
            raise ValueError("DATABASE_URL must be set and non-empty")
        if not any(v.startswith(prefix) for prefix in VALID_DATABASE_URL_PREFIXES):
            raise ValueError(
                "DATABASE_URL must be a SQLite or PostgreSQL URL (e.g. sqlite:///./cittafutura.db)"
            )
        return v.strip()

    @field_validator("STORAGE_DIR")
    @classmethod
    def validate_storage_dir(cls, v: str) -> str:
        if not v or not v.strip():
            raise ValueError("STORAGE_DIR must be set and non-empty")
        return v.strip()

    @field_validator("STORAGE_KEY_PREFIX")
    @classmethod
    def validate_storage_key_prefix(cls, v: str) -> str:
        s = v.strip()
        if any(ch in s for ch in "/\\"):
            raise ValueError("STORAGE_KEY_PREFIX must not contain path separators")
        return s

    @field_validator("SEED_BASE_URL")
    @classmethod
    def validate_seed_base_url(cls, v: str) -> str:
        if not v or not v.strip():
            return ""
        s = v.strip().lower()
        if not (s.startswith("http://") or s.startswith("https://")):
            raise ValueError(
                "SEED_BASE_URL must use http or https (e.g. https://example.github.io/LeCaseDiCittaFutura1/)"
            )
        s = v.strip()
        return s if s.endswith("/") else s + "/"

    @field_validator("SEED_REQUEST_TIMEOUT_SEC")
    @classmethod
    def validate_seed_timeout(cls, v: float) -> float:
        if v <= 0 or v > 120:
            raise ValueError(
                "SEED_REQUEST_TIMEOUT_SEC must be greater than 0 and at most 120"
            )
        return v

    @field_validator("SIMULATED_DELAY_MS")
    @classmethod
    def validate_simulated_delay(cls, v: int) -> int:
        if v < 0 or v > 5000:
            raise ValueError("SIMULATED_DELAY_MS must be between 0 and 5000")
        return v

    @field_validator("JWT_SECRET")
    @classmethod
    def validate_jwt_secret(cls, v: SecretStr) -> SecretStr:
        if not v.get_secret_value() or not v.get_secret_value().strip():
            raise ValueError("JWT_SECRET must be set and non-empty")
        return v

    @field_validator("JWT_ALGORITHM")
    @classmethod
    def validate_jwt_algorithm(cls, v: str) -> str:
        if not v or not v.strip():
            raise ValueError("JWT_ALGORITHM must be set and non-empty")
        return v.strip()

    @field_validator("JWT_EXPIRE_MINUTES")
    @classmethod
    def validate_jwt_expire_minutes(cls, v: int) -> int:
        if v < 1 or v > 10080:
            raise ValueError(
                "JWT_EXPIRE_MINUTES must be between 1 and 10080 (1 min to 7 days)"
            )
        return v


@lru_cache
def get_settings() -> Settings:
    """Return cached settings instance (safe to call from dependencies)."""
    return Settings()


settings = get_settings()
