"""
Configuration module for idform.

Handles environment variables and default settings.
"""

import os
from dataclasses import dataclass

from dotenv import load_dotenv

# Load environment variables
load_dotenv()


@dataclass
class IdFormConfig:
    """Configuration settings for idform."""

    # Remote collaborators
    users_url: str = "https://jsonplaceholder.typicode.com/users"
    submit_url: str = "http://httpbin.org/post"
    http_timeout: float = 30.0

    # How long a submission outcome stays visible before it is dismissed
    notification_duration_ms: int = 3000

    # HTTP surface
    server_host: str = "0.0.0.0"
    server_port: int = 9110

    log_level: str = "INFO"

    @classmethod
    def from_env(cls) -> "IdFormConfig":
        """
        Create configuration from environment variables.

        If an environment variable is not set, uses the class field default value.
        """
        _defaults = cls()

        return cls(
            users_url=os.getenv("IDFORM_USERS_URL", _defaults.users_url),
            submit_url=os.getenv("IDFORM_SUBMIT_URL", _defaults.submit_url),
            http_timeout=float(os.getenv("IDFORM_HTTP_TIMEOUT", str(_defaults.http_timeout))),
            notification_duration_ms=int(
                os.getenv("IDFORM_NOTIFICATION_MS", str(_defaults.notification_duration_ms))
            ),
            server_host=os.getenv("IDFORM_HOST", _defaults.server_host),
            server_port=int(os.getenv("IDFORM_PORT", str(_defaults.server_port))),
            log_level=os.getenv("IDFORM_LOG_LEVEL", _defaults.log_level).upper(),
        )


config = IdFormConfig.from_env()


def get_config() -> IdFormConfig:
    """Get the current configuration."""
    return config


def update_config(**kwargs) -> IdFormConfig:
    """Update configuration settings."""
    global config
    for key, value in kwargs.items():
        if hasattr(config, key):
            setattr(config, key, value)
    return config
