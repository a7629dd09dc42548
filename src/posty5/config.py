"""
Configuration management for the SDK.
"""

import logging
from dataclasses import dataclass, field, replace
from typing import Dict, Optional

from pydantic import ConfigDict, Field
from pydantic_settings import BaseSettings

DEFAULT_BASE_URL = "https://api.posty5.com"


class Settings(BaseSettings):
    model_config = ConfigDict(env_file=".env", env_prefix="POSTY5_", extra="ignore")

    base_url: str = DEFAULT_BASE_URL
    api_key: Optional[str] = None
    debug: bool = False
    log_level: str = "INFO"

    timeout_seconds: float = Field(default=30.0, gt=0)
    max_retries: int = Field(default=3, ge=0)
    retry_delay: float = Field(default=1.0, ge=0)
    upload_timeout_seconds: float = Field(default=300.0, gt=0)


def get_settings() -> Settings:
    return Settings()


@dataclass(frozen=True)
class ClientConfig:
    """
    Configuration for one HttpClient instance.

    Instances are immutable; rotating the API key produces a new config
    (see ``HttpClient.set_api_key``).

    Attributes:
        base_url: Root URL of the Posty5 API
        api_key: Key sent in the ``X-API-Key`` header, if any
        debug: Log every request and response
        timeout: Default per-request timeout in seconds
        max_retries: Retries after the first attempt for network/5xx failures
        retry_delay: Base delay in seconds; retry n waits ``n * retry_delay``
        headers: Extra headers sent with every request
        log_level: Level applied to the ``posty5`` logger in debug mode
    """

    base_url: str = DEFAULT_BASE_URL
    api_key: Optional[str] = None
    debug: bool = False
    timeout: float = 30.0
    max_retries: int = 3
    retry_delay: float = 1.0
    headers: Dict[str, str] = field(default_factory=dict)
    log_level: str = "INFO"

    @classmethod
    def from_settings(
        cls, settings: Optional[Settings] = None, **overrides
    ) -> "ClientConfig":
        """Build a config from environment-backed settings plus overrides."""
        settings = settings or get_settings()
        config = cls(
            base_url=settings.base_url,
            api_key=settings.api_key,
            debug=settings.debug,
            timeout=settings.timeout_seconds,
            max_retries=settings.max_retries,
            retry_delay=settings.retry_delay,
            log_level=settings.log_level,
        )
        overrides = {key: value for key, value in overrides.items() if value is not None}
        return replace(config, **overrides) if overrides else config

    def with_api_key(self, api_key: Optional[str]) -> "ClientConfig":
        return replace(self, api_key=api_key)


def setup_logging(log_level: str = "INFO") -> None:
    """Configure logging for the SDK."""
    level = getattr(logging, log_level.upper(), logging.INFO)

    logger = logging.getLogger("posty5")
    logger.setLevel(level)

    if not logger.handlers:
        handler = logging.StreamHandler()
        formatter = logging.Formatter(
            "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
        )
        handler.setFormatter(formatter)
        logger.addHandler(handler)


def get_logger(name: str) -> logging.Logger:
    """Get a logger for the given module name."""
    return logging.getLogger(f"posty5.{name}")
