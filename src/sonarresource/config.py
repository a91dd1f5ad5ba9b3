"""Configuration management using Pydantic Settings."""

from typing import Literal

from pydantic_settings import BaseSettings, SettingsConfigDict

RESOURCE_VERSION = "0.1.0"


class Settings(BaseSettings):
    """Process-level settings loaded from environment variables.

    Connection parameters (target, token, component, metrics) are not read here;
    they arrive with every request in the source envelope.
    """

    model_config = SettingsConfigDict(
        env_prefix="SONAR_RESOURCE_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    # HTTP
    request_timeout_seconds: float = 30.0
    verify_tls: bool = True
    user_agent: str = f"sonar-resource/{RESOURCE_VERSION}"

    # Versioning
    version_scheme: Literal["timestamp", "ref"] = "timestamp"

    # Logging
    log_json: bool = False


settings = Settings()
