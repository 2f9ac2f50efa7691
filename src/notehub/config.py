"""Application configuration using pydantic-settings."""

from functools import lru_cache

from pydantic import AliasChoices, Field, computed_field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from notehub.core.constants import (
    DEFAULT_FREE_PLAN_NOTE_LIMIT,
    DEFAULT_INSECURE_SECRET,
    DEFAULT_TOKEN_EXPIRE_MINUTES,
    MIN_SECRET_KEY_LENGTH,
)


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    # Application
    app_name: str = "notehub"
    debug: bool = False
    environment: str = "development"  # development, staging, production
    secret_key: str = Field(
        default=DEFAULT_INSECURE_SECRET,
        validation_alias=AliasChoices("jwt_secret", "secret_key"),
    )

    # CORS
    cors_origins: list[str] = ["*"]

    # API Documentation
    api_docs_base_url: str = "https://api.example.com"

    # Static frontend
    static_dir: str = "public"

    # Bootstrap data
    seed_demo_data: bool = True

    @field_validator("secret_key")
    @classmethod
    def validate_secret_key(cls, v: str) -> str:
        """Reject short secrets.

        The development default is let through here; `is_production`
        refuses it at runtime.

        Args:
            v: The secret key value

        Returns:
            The validated secret key

        Raises:
            ValueError: If a non-default secret is too short
        """
        if v != DEFAULT_INSECURE_SECRET and len(v) < MIN_SECRET_KEY_LENGTH:
            raise ValueError(
                f"JWT_SECRET must be at least {MIN_SECRET_KEY_LENGTH} characters. "
                "Generate one with: python -c 'import secrets; print(secrets.token_urlsafe(32))'"
            )
        return v

    # Auth
    jwt_algorithm: str = "HS256"
    access_token_expire_minutes: int = DEFAULT_TOKEN_EXPIRE_MINUTES

    # Subscription plans
    free_plan_note_limit: int = DEFAULT_FREE_PLAN_NOTE_LIMIT

    # Rate Limiting
    rate_limit_enabled: bool = True
    rate_limit_requests: int = 100
    rate_limit_window: int = 15 * 60
    login_rate_limit_requests: int = 10
    login_rate_limit_window: int = 60

    # Observability
    log_level: str = "INFO"

    @computed_field  # type: ignore[prop-decorator]
    @property
    def is_production(self) -> bool:
        """Check if running in production environment.

        Raises:
            ValueError: If using insecure secret key in production
        """
        is_prod = self.environment == "production"
        if is_prod and self.secret_key == DEFAULT_INSECURE_SECRET:
            raise ValueError(
                "JWT_SECRET must be set to a secure value in production. "
                "Generate one with: python -c 'import secrets; print(secrets.token_urlsafe(32))'"
            )
        return is_prod

    @computed_field  # type: ignore[prop-decorator]
    @property
    def is_development(self) -> bool:
        """Check if running in development environment."""
        return self.environment == "development"


@lru_cache
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings()


# Global settings instance
settings = get_settings()
