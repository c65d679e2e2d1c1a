"""Configuration from the environment and `.env`.

Defaults run a local development instance on a SQLite file with e-mail
disabled. Production must at least set both secret keys and DATABASE_URL.
"""

from datetime import timedelta
from functools import lru_cache

from pydantic import Field, computed_field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application-wide settings."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
        populate_by_name=True,
    )

    # Environment
    env_name: str = Field(default="development", alias="ENV_NAME")

    # Database
    database_url: str = Field(default="sqlite:///./chromepass.db", alias="DATABASE_URL")
    db_pool_size: int = Field(default=5, alias="DB_POOL_SIZE", ge=1, le=50)
    db_pool_recycle: int = Field(default=10, alias="DB_POOL_RECYCLE", ge=1)

    # Bearer tokens
    jwt_secret_key: str = Field(default="change-me-in-production", alias="JWT_SECRET_KEY")
    jwt_algorithm: str = Field(default="HS256", alias="JWT_ALGORITHM")
    jwt_expires_minutes: int = Field(
        default=60 * 24 * 7, alias="JWT_EXPIRES_MINUTES", ge=1
    )

    # Password hashing
    bcrypt_rounds: int = Field(default=12, alias="BCRYPT_ROUNDS", ge=4, le=16)

    # Admin panel
    session_secret_key: str = Field(
        default="change-me-in-production", alias="SESSION_SECRET_KEY"
    )

    # CORS
    cors_origins: str = Field(default="*", alias="CORS_ORIGINS")

    # Email (Resend)
    resend_api_key: str | None = Field(default=None, alias="RESEND_API_KEY")
    app_domain: str = Field(default="resend.dev", alias="APP_DOMAIN")
    client_url: str = Field(default="http://localhost:3000", alias="CLIENT_URL")

    # Logging
    log_level: str = Field(default="INFO", alias="LOG_LEVEL")
    log_json: bool = Field(default=False, alias="LOG_JSON")
    log_requests: bool = Field(default=True, alias="LOG_REQUESTS")
    log_sql: bool = Field(default=False, alias="LOG_SQL")

    # Rate limiting (auth routes)
    rate_limit_enabled: bool = Field(default=True, alias="RATE_LIMIT_ENABLED")
    auth_rate_limit: int = Field(default=20, alias="AUTH_RATE_LIMIT", ge=1)
    rate_limit_window_seconds: int = Field(
        default=60, alias="RATE_LIMIT_WINDOW_SECONDS", ge=1
    )

    @computed_field
    @property
    def cors_origins_list(self) -> list[str]:
        """Parse CORS_ORIGINS into a list."""
        origins = []
        for o in self.cors_origins.split(","):
            trimmed = o.strip()
            if trimmed:
                origins.append(trimmed)
        return origins

    @computed_field
    @property
    def is_development(self) -> bool:
        """Whether error details may be exposed to clients."""
        return self.env_name.lower() in {"dev", "development", "local"}

    @computed_field
    @property
    def jwt_expires_in(self) -> timedelta:
        """Get token lifetime as timedelta."""
        return timedelta(minutes=self.jwt_expires_minutes)

    @computed_field
    @property
    def email_configured(self) -> bool:
        return bool(self.resend_api_key)


@lru_cache
def get_settings() -> Settings:
    """Settings are read once per process; tests override the dependency."""
    return Settings()
