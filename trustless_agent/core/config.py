"""
Application configuration and settings management.

This module loads configuration from environment variables (and ``.env``)
into a single Settings object. The instance is built once and handed to every
component explicitly; nothing else reads the environment.
"""

from functools import lru_cache

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict

from .constants import (
    CIRCLE_API_BASE_URL,
    CIRCLE_TIMEOUT_SECONDS,
    DEFAULT_APP_PORT,
    DEFAULT_GEMINI_MODEL,
    GEMINI_API_BASE_URL,
    GEMINI_MAX_OUTPUT_TOKENS,
    GEMINI_TEMPERATURE,
    GEMINI_TIMEOUT_SECONDS,
)
from .errors import ConfigurationError


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    # Application
    app_name: str = "Trustless Agent Pay"
    app_version: str = "0.1.0"
    debug: bool = False
    environment: str = Field(default="development", description="deployment environment")

    # API Server
    host: str = "0.0.0.0"
    port: int = DEFAULT_APP_PORT
    cors_origin: str = Field(default="*", description="Comma-separated allowed origins")

    # Logging
    log_level: str = "INFO"
    log_format: str = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"

    # Inference (Gemini)
    gemini_api_key: str | None = Field(default=None, description="Gemini API key")
    gemini_model: str = DEFAULT_GEMINI_MODEL
    gemini_base_url: str = GEMINI_API_BASE_URL
    gemini_temperature: float = GEMINI_TEMPERATURE
    gemini_max_output_tokens: int = Field(default=GEMINI_MAX_OUTPUT_TOKENS, gt=0)
    gemini_timeout_seconds: float = GEMINI_TIMEOUT_SECONDS

    # Custodial wallets (Circle)
    circle_api_key: str | None = Field(default=None, description="Circle API key")
    circle_entity_secret: str | None = Field(
        default=None,
        description="64 hex character entity secret registered with Circle",
    )
    circle_blockchain: str | None = Field(default=None, description="e.g. ARC-TESTNET")
    circle_base_url: str = CIRCLE_API_BASE_URL
    circle_timeout_seconds: float = CIRCLE_TIMEOUT_SECONDS
    circle_agent_wallet_id: str | None = Field(default=None, description="Paying wallet id")
    circle_merchant_wallet_id: str | None = Field(default=None, description="Merchant wallet id")
    merchant_wallet_address: str | None = Field(default=None, description="Merchant on-chain address")
    explorer_tx_base: str | None = Field(
        default=None,
        description="Block explorer prefix; tx hash is appended",
    )

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
        str_strip_whitespace=True,
    )

    @property
    def cors_origins(self) -> list[str]:
        """Allowed CORS origins parsed from the comma-separated setting."""
        origins = [origin.strip() for origin in self.cors_origin.split(",") if origin.strip()]
        return origins or ["*"]

    @property
    def is_production(self) -> bool:
        """Check if running in production environment."""
        return self.environment == "production"

    def require(self, *fields: str) -> None:
        """
        Validate that every named setting is present and non-empty.

        Args:
            fields: Setting attribute names

        Raises:
            ConfigurationError: naming all missing environment variables at once
        """
        missing = [name.upper() for name in fields if not getattr(self, name)]
        if missing:
            raise ConfigurationError(
                f"Missing {', '.join(missing)} in .env",
                details={"missing": missing},
            )


@lru_cache
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings()
