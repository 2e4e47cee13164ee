"""Runtime configuration: env-driven.

Centralized settings using pydantic-settings.  Reads from a .env file and
FAKESNS_* environment variables.
"""

from __future__ import annotations

from pydantic_settings import BaseSettings, SettingsConfigDict


class SnsSettings(BaseSettings):
    """Settings for the simulated notification service.

    All settings can be overridden via FAKESNS_* environment variables
    or a .env file in the working directory.

    Examples
    --------
    Override via environment::

        export FAKESNS_REGION=eu-west-1
        export FAKESNS_LOG_LEVEL=DEBUG
        export FAKESNS_HTTP_TIMEOUT_SECONDS=2.5
    """

    model_config = SettingsConfigDict(
        env_file=".env",
        env_prefix="FAKESNS_",
        env_file_encoding="utf-8",
    )

    # Logging
    log_level: str = "INFO"

    # ARN / URL formatting
    region: str = "us-east-1"
    account_id: str = "123456789012"
    queue_url_base: str = "http://localhost:4568"

    # Runtime environment
    environment: str = "development"

    # Delivery
    http_timeout_seconds: float = 5.0
    max_delivery_workers: int = 8


# Module-level singleton: import as `from fakesns.config import settings`
settings = SnsSettings()
