"""
Centralized Configuration Module

Provides configuration classes and environment variable loading for all components.

Usage:
    from tibiahouses.config import get_config

    config = get_config()
    url = config.upstream.community_url
    api_port = config.api.port
"""

import os
from dataclasses import dataclass, field
from typing import Optional

from dotenv import load_dotenv

from tibiahouses.core.constants import COMMUNITY_URL, DEFAULT_USER_AGENT
from tibiahouses.exceptions import ConfigurationError

# Load .env file if present
load_dotenv()


@dataclass
class UpstreamConfig:
    """Upstream website and transport configuration."""

    community_url: str = field(default_factory=lambda: os.getenv(
        "TIBIAHOUSES_COMMUNITY_URL", COMMUNITY_URL
    ))
    user_agent: str = field(default_factory=lambda: os.getenv(
        "TIBIAHOUSES_USER_AGENT", DEFAULT_USER_AGENT
    ))
    timeout: float = field(default_factory=lambda: float(os.getenv(
        "TIBIAHOUSES_TIMEOUT", "15"
    )))
    max_workers: int = field(default_factory=lambda: int(os.getenv(
        "TIBIAHOUSES_MAX_WORKERS", "3"
    )))

    def __post_init__(self):
        if self.timeout <= 0:
            raise ConfigurationError(f"Upstream timeout must be positive, got {self.timeout}")
        if self.max_workers < 1:
            self.max_workers = 1


@dataclass
class APIConfig:
    """API server configuration."""

    host: str = field(default_factory=lambda: os.getenv(
        "TIBIAHOUSES_API_HOST", "127.0.0.1"
    ))
    port: int = field(default_factory=lambda: int(os.getenv(
        "TIBIAHOUSES_API_PORT", "7032"
    )))
    debug: bool = field(default_factory=lambda: os.getenv(
        "TIBIAHOUSES_DEBUG", "false"
    ).lower() in ("true", "1", "yes"))


@dataclass
class LoggingConfig:
    """Logging configuration."""

    level: str = field(default_factory=lambda: os.getenv(
        "TIBIAHOUSES_LOG_LEVEL", "INFO"
    ).upper())
    log_file: Optional[str] = field(default_factory=lambda: os.getenv(
        "TIBIAHOUSES_LOG_FILE"
    ))

    def __post_init__(self):
        # Validate log level
        valid_levels = {"DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"}
        if self.level not in valid_levels:
            self.level = "INFO"


@dataclass
class Config:
    """Main configuration container."""

    upstream: UpstreamConfig = field(default_factory=UpstreamConfig)
    api: APIConfig = field(default_factory=APIConfig)
    logging: LoggingConfig = field(default_factory=LoggingConfig)


# Singleton instance
_config: Optional[Config] = None


def get_config() -> Config:
    """Get the global configuration instance.

    Returns:
        Config: The application configuration.
    """
    global _config
    if _config is None:
        _config = Config()
    return _config


def reset_config() -> None:
    """Reset the configuration (useful for testing)."""
    global _config
    _config = None
