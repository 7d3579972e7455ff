"""
Application configuration using pydantic-settings.
"""
from typing import Optional

from pydantic import ValidationError, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from vantage_proxy.core.exceptions import FatalStartupError


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    PROJECT_NAME: str = "Alpha Vantage Proxy"

    # Alpha Vantage credential, injected server-side as the apikey parameter
    ALPHA_VANTAGE_API_KEY: str

    # Server
    HOST: str = "0.0.0.0"
    PORT: int = 3000

    # Logging
    LOG_LEVEL: str = "INFO"
    LOG_FILE: Optional[str] = "logs/app.log"

    @field_validator("ALPHA_VANTAGE_API_KEY")
    @classmethod
    def require_api_key(cls, v: str) -> str:
        if not v.strip():
            raise ValueError("ALPHA_VANTAGE_API_KEY must not be blank")
        return v

    @field_validator("LOG_FILE", mode="before")
    @classmethod
    def empty_log_file_disables_sink(cls, v: Optional[str]) -> Optional[str]:
        if isinstance(v, str) and not v.strip():
            return None
        return v

    model_config = SettingsConfigDict(env_file=".env", extra="ignore")


def load_settings(**overrides) -> Settings:
    """
    Build the process-wide settings once at startup.

    Args:
        overrides: Explicit values taking precedence over the environment.

    Returns:
        The validated settings.

    Raises:
        FatalStartupError: If the credential is missing or any value is invalid.
    """
    try:
        return Settings(**overrides)
    except ValidationError as exc:
        missing = [".".join(str(part) for part in err["loc"]) for err in exc.errors()]
        raise FatalStartupError(
            "Invalid configuration for "
            f"{', '.join(missing)}. Please create a .env file with its value."
        ) from exc
