"""
Configuration management for the CS2 loadout API.

Loads settings from .env via pydantic-settings.

Security notes:
    - validate_production_settings() enforces strict CORS in production
    - dev login (token for any Steam ID) must be off in production
"""
import logging

from pydantic_settings import BaseSettings, SettingsConfigDict
from typing import List

logger = logging.getLogger(__name__)


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    # ── Database ────────────────────────────────────────────────────
    database_url: str = "sqlite:///./data/loadouts.db"

    # ── Item Catalogs ───────────────────────────────────────────────
    item_data_dir: str = "data"

    # ── Application ─────────────────────────────────────────────────
    environment: str = "development"
    log_level: str = "INFO"

    # ── Auth (JWT) ──────────────────────────────────────────────────
    # Tokens are minted after the Steam OpenID login, which happens
    # upstream of this service.
    jwt_secret: str = ""
    jwt_issuer: str = "cs2-loadout-api"
    jwt_access_ttl_minutes: int = 60 * 24
    auth_cookie_name: str = "access_token"

    # When True, POST /api/auth/dev-login issues a token for any valid
    # Steam ID. Local development and tests only.
    dev_login_enabled: bool = True

    # ── CORS ────────────────────────────────────────────────────────
    cors_origins: str = "http://localhost:3000,http://127.0.0.1:3000,http://localhost:5173,http://127.0.0.1:5173"

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",  # allow unknown .env keys without crashing
    )

    @property
    def cors_origins_list(self) -> List[str]:
        """Parse CORS origins from comma-separated string."""
        return [origin.strip() for origin in self.cors_origins.split(",")]

    @property
    def is_production(self) -> bool:
        return self.environment == "production"

    def validate_production_settings(self):
        """
        Validate settings for production safety.

        Called during app startup.
        """
        if self.is_production:
            if "*" in self.cors_origins:
                raise ValueError(
                    "CORS_ORIGINS must not contain '*' in production. "
                    "Set explicit allowed origins."
                )
            if self.dev_login_enabled:
                raise ValueError(
                    "DEV_LOGIN_ENABLED must be false in production. "
                    "Dev login issues tokens for any Steam ID."
                )
            if not self.jwt_secret:
                raise ValueError(
                    "JWT_SECRET must be set in production. "
                    "It is used to sign access tokens."
                )
            logger.info("Production settings validated")
        else:
            warnings = []
            if self.dev_login_enabled:
                warnings.append("DEV_LOGIN_ENABLED=true (tokens for any Steam ID)")
            if "*" in self.cors_origins:
                warnings.append("CORS_ORIGINS contains '*' (open access)")
            if not self.jwt_secret:
                warnings.append("JWT_SECRET not set (auth endpoints will fail)")
            for w in warnings:
                logger.warning(w)


# Global settings instance
settings = Settings()
