"""Configuration for the OAuth demo client.

All settings come from environment variables (a local .env file is loaded
by the CLI before this module reads them).
"""

from typing import Literal, Optional

from pydantic import Field, HttpUrl, ValidationError, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

LOG_LEVELS = {"CRITICAL", "ERROR", "WARNING", "INFO", "DEBUG"}


class ConfigError(Exception):
    """Raised when required settings are missing or malformed."""

    def __init__(self, errors: list[str]):
        self.errors = errors
        super().__init__("Invalid configuration: " + "; ".join(errors))


class Settings(BaseSettings):
    """Client configuration loaded from environment variables."""

    model_config = SettingsConfigDict(extra="ignore")

    # Identity provider
    fapi_url: HttpUrl = Field(..., description="Provider base URL")
    client_id: str = Field(..., min_length=1, description="OAuth client ID")
    client_secret: str = Field(..., min_length=1, description="OAuth client secret")
    scope: str = Field(default="email profile", description="Requested scopes")
    enable_pkce: bool = Field(default=True, description="Send a PKCE challenge")
    provider_timeout: Optional[float] = Field(
        default=None,
        gt=0,
        description="Timeout for provider calls in seconds (unset: wait indefinitely)"
    )

    # Local server
    port: int = Field(default=3000, ge=1, le=65535, description="Local callback port")
    open_browser: bool = Field(default=True, description="Open the start page on startup")

    # Logging
    log_level: str = Field(default="INFO", description="Logging level")
    log_format: Literal["plain", "json"] = Field(default="plain", description="Log output format")

    @field_validator("log_level")
    @classmethod
    def _known_level(cls, value: str) -> str:
        level = value.upper()
        if level not in LOG_LEVELS:
            raise ValueError(f"unknown logging level '{value}'")
        return level

    @property
    def provider_url(self) -> str:
        """Provider base URL without a trailing slash."""
        return str(self.fapi_url).rstrip("/")

    @property
    def base_url(self) -> str:
        return f"http://localhost:{self.port}"

    @property
    def redirect_uri(self) -> str:
        return f"{self.base_url}/callback"


def load_config(**overrides) -> Settings:
    """Load and validate settings from the environment.

    Raises:
        ConfigError: One entry per invalid or missing field
    """
    try:
        return Settings(**overrides)
    except ValidationError as e:
        errors = []
        for error in e.errors():
            field = ".".join(str(part) for part in error["loc"]).upper() or "config"
            errors.append(f"{field}: {error['msg']}")
        raise ConfigError(errors) from e
