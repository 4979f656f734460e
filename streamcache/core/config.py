"""
Core configuration module for streamcache.

This module provides centralized configuration management using Pydantic Settings.
All configuration is loaded from environment variables with the OPENAI_ prefix,
resolved once, and frozen. Components receive the Settings value explicitly
rather than reading the environment per call.

Example:
    OPENAI_API_KEY=sk-... OPENAI_API_TYPE=AZURE OPENAI_AZURE_DEPLOYMENT=gpt4-prod
"""

from functools import lru_cache
from typing import Optional

from pydantic import Field, SecretStr, field_validator
from pydantic_settings import BaseSettings


DEFAULT_MODEL = "gpt-4-turbo-preview"

API_TYPES = ("OPEN_AI", "AZURE", "AZURE_AD")


class Settings(BaseSettings):
    """
    Client settings loaded from environment variables.

    All fields use the OPENAI_ prefix for environment variables.
    Example: OPENAI_BASE_URL=https://my-proxy.example.com/v1
    """

    # =========================================================================
    # Credentials and Endpoint
    # Pattern: SecretStr masks the key in logs/repr, use .get_secret_value()
    # =========================================================================
    api_key: SecretStr = Field(
        default=SecretStr(""),
        description="OpenAI API key",
    )
    base_url: str = Field(
        default="",
        description="OpenAI base URL",
    )
    url: str = Field(
        default="",
        description="Legacy endpoint variable (OPENAI_URL), used when base_url is empty",
    )
    api_version: str = Field(
        default="",
        description="OpenAI API version (for Azure)",
    )
    api_type: str = Field(
        default="OPEN_AI",
        description="OpenAI API type (valid: OPEN_AI, AZURE, AZURE_AD)",
    )
    org_id: str = Field(
        default="",
        description="OpenAI organization ID",
    )
    user: str = Field(
        default="",
        description="End-user identifier sent with every request",
    )

    # =========================================================================
    # Model Selection
    # =========================================================================
    default_model: str = Field(
        default=DEFAULT_MODEL,
        description="Model used when a request leaves the model empty",
    )
    azure_deployment: str = Field(
        default="",
        description="Azure deployment name serving the default model",
    )

    # =========================================================================
    # Caching and Reproducibility
    # =========================================================================
    set_seed: bool = Field(
        default=False,
        description="Send a content-derived seed with every live call",
    )
    cache_key: str = Field(
        default="",
        description="Explicit cache key base; derived from credentials when empty",
    )
    cache_redis_url: Optional[str] = Field(
        default=None,
        description="Redis URL for the completion cache; caching is disabled when unset",
    )

    model_config = {
        "env_prefix": "OPENAI_",
        "case_sensitive": False,
        "extra": "ignore",
        "frozen": True,
    }

    # =========================================================================
    # Field Validators
    # =========================================================================
    @field_validator("api_type")
    @classmethod
    def validate_api_type(cls, v: str) -> str:
        """Normalize and validate the API type."""
        v = (v or "OPEN_AI").upper()
        if v not in API_TYPES:
            raise ValueError(f"API type must be one of: {', '.join(API_TYPES)}")
        return v

    @field_validator("cache_redis_url")
    @classmethod
    def validate_cache_redis_url(cls, v: Optional[str]) -> Optional[str]:
        """Validate Redis URL format."""
        if v is None or v == "":
            return None
        if not v.startswith(("redis://", "rediss://")):
            raise ValueError("Redis URL must start with redis:// or rediss://")
        return v

    # =========================================================================
    # Derived Values
    # =========================================================================
    @property
    def resolved_base_url(self) -> str:
        """Base URL with the legacy OPENAI_URL fallback applied."""
        return self.base_url or self.url

    @property
    def is_azure(self) -> bool:
        """True for AZURE and AZURE_AD API types."""
        return "AZURE" in self.api_type

    @property
    def has_auth(self) -> bool:
        """True when at least an API key or an endpoint is configured."""
        return bool(self.api_key.get_secret_value() or self.resolved_base_url)


@lru_cache
def get_settings() -> Settings:
    """
    Get the settings singleton.

    Uses functools.lru_cache so the environment is read only once per process.

    Returns:
        Settings: The resolved settings instance.
    """
    return Settings()
