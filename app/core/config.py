"""Application configuration loaded from environment variables."""

from functools import lru_cache
from typing import Literal

from pydantic import AliasChoices, Field, SecretStr, field_validator, model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

# Allowed URL schemes for DATABASE_URL (module-level so validators can use it).
VALID_DATABASE_URL_PREFIXES = (
    "postgresql://",
    "postgresql+psycopg2://",
    "postgres://",
    "postgres+psycopg2://",
)

DEFAULT_JWT_SECRET = "change-me-in-production"


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
    LOG_LEVEL: str = "INFO"
    API_PREFIX: str = "/api"
    CORS_ORIGINS: list[str] = ["http://localhost:3000", "http://localhost:5173"]

    # Supabase project: required, the app refuses to start without them
    SUPABASE_URL: str
    SUPABASE_KEY: SecretStr = Field(
        validation_alias=AliasChoices("SUPABASE_KEY", "SUPABASE_ANON_KEY"),
    )

    # Direct Postgres URL of the same project; only alembic needs it
    DATABASE_URL: str | None = None

    # Session tokens
    JWT_SECRET: SecretStr = SecretStr(DEFAULT_JWT_SECRET)
    JWT_ALGORITHM: str = "HS256"
    SESSION_EXPIRE_HOURS: int = 24
    SESSION_COOKIE_NAME: str = "token"

    # Teams offered by the public form; anything else is typed in by hand
    TEAM_PRESETS: list[str] = ["Cá Kiếm", "Minato"]

    @field_validator("SUPABASE_URL")
    @classmethod
    def validate_supabase_url(cls, v: str) -> str:
        if not v or not v.strip():
            raise ValueError("SUPABASE_URL must be set and non-empty")
        s = v.strip().lower()
        if not (s.startswith("http://") or s.startswith("https://")):
            raise ValueError(
                "SUPABASE_URL must use http or https (e.g. https://xyz.supabase.co)"
            )
        return v.strip().rstrip("/")

    @field_validator("SUPABASE_KEY")
    @classmethod
    def validate_supabase_key(cls, v: SecretStr) -> SecretStr:
        if not v.get_secret_value() or not v.get_secret_value().strip():
            raise ValueError("SUPABASE_KEY must be set and non-empty")
        return v

    @field_validator("DATABASE_URL")
    @classmethod
    def validate_database_url(cls, v: str | None) -> str | None:
        if v is None or not v.strip():
            return None
        if not any(v.startswith(prefix) for prefix in VALID_DATABASE_URL_PREFIXES):
            raise ValueError(
                "DATABASE_URL must be a PostgreSQL URL (e.g. postgresql:// or postgresql+psycopg2://)"
            )
        return v.strip()

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

    @field_validator("SESSION_EXPIRE_HOURS")
    @classmethod
    def validate_session_expire_hours(cls, v: int) -> int:
        if v < 1 or v > 720:
            raise ValueError(
                "SESSION_EXPIRE_HOURS must be between 1 and 720 (1 hour to 30 days)"
            )
        return v

    @field_validator("TEAM_PRESETS")
    @classmethod
    def validate_team_presets(cls, v: list[str]) -> list[str]:
        return [name.strip() for name in v if name and name.strip()]

    @model_validator(mode="after")
    def reject_default_secret_in_prod(self) -> "Settings":
        if (
            self.APP_ENV == "prod"
            and self.JWT_SECRET.get_secret_value() == DEFAULT_JWT_SECRET
        ):
            raise ValueError("JWT_SECRET must be changed from the default in prod")
        return self


@lru_cache
def get_settings() -> Settings:
    """Return cached settings instance (safe to call from dependencies)."""
    return Settings()


settings = get_settings()
