# ============================================================================
# FUNCTION APP CONFIGURATION
# ============================================================================
# EPOCH: 1 - BLOB REDIRECT
# STATUS: Redirector - Configuration management
# PURPOSE: Environment-based configuration for the redirect function
# CREATED: 19 OCT 2026
# ============================================================================
"""
Function App Configuration

Loads configuration from environment variables once per process. The result
is a frozen dataclass: invocations only ever read it, so concurrent requests
share it without locking.

Environment:
- ADLS_CONNECTION_String   Storage account connection string (required).
                           ADLS_CONNECTION_STRING is accepted as well.
- TOKEN_TIMEOUT_IN_SECOND  SAS validity in seconds (default 300)
- LOG_LEVEL / LOG_FORMAT   Logging setup (see core.logging)
"""

import os
import re
import logging
from dataclasses import dataclass
from typing import Optional

from __version__ import __version__

logger = logging.getLogger(__name__)


# ============================================================================
# SAS SCOPE CONSTANTS
# ============================================================================
# Fixed for every signature this app issues. Parsed with the SDK's
# from_string helpers: "r" = read, "b" = blob service,
# "oc" = object + container resource types.

SAS_PERMISSION = "r"
SAS_SERVICES = "b"
SAS_RESOURCE_TYPES = "oc"

DEFAULT_TOKEN_TIMEOUT_SECONDS = 300

CONNECTION_STRING_ENV_VARS = ("ADLS_CONNECTION_String", "ADLS_CONNECTION_STRING")
TOKEN_TIMEOUT_ENV_VAR = "TOKEN_TIMEOUT_IN_SECOND"

# ASCII digits with optional sign; rejects "1_000", "1.5" and non-ASCII numerals
_INTEGER_PATTERN = re.compile(r"[+-]?[0-9]+", re.ASCII)


def parse_token_timeout(raw: Optional[str]) -> int:
    """
    Parse the SAS validity duration.

    Falls back to DEFAULT_TOKEN_TIMEOUT_SECONDS when the value is unset,
    empty, or not a plain ASCII integer. Zero and negative values are kept
    as given. The fallback reason is logged.
    """
    if raw is None or not raw.strip():
        logger.info(
            f"No {TOKEN_TIMEOUT_ENV_VAR} defined in environment, "
            f"using default value of {DEFAULT_TOKEN_TIMEOUT_SECONDS} secs"
        )
        return DEFAULT_TOKEN_TIMEOUT_SECONDS

    value = raw.strip()
    if not _INTEGER_PATTERN.fullmatch(value):
        logger.info(
            f"{TOKEN_TIMEOUT_ENV_VAR} is not an integer ({raw!r}), "
            f"using default value of {DEFAULT_TOKEN_TIMEOUT_SECONDS} secs"
        )
        return DEFAULT_TOKEN_TIMEOUT_SECONDS

    return int(value)


@dataclass(frozen=True)
class RedirectorConfig:
    """Configuration for the function app."""

    # Storage
    connection_string: Optional[str] = None
    token_timeout_seconds: int = DEFAULT_TOKEN_TIMEOUT_SECONDS

    # Logging
    log_level: str = "INFO"
    log_json: bool = False

    # App Info
    version: str = __version__
    service_name: str = "blob-redirect"

    @classmethod
    def from_env(cls) -> "RedirectorConfig":
        """Load configuration from environment variables."""
        connection_string = None
        for env_var in CONNECTION_STRING_ENV_VARS:
            value = os.environ.get(env_var)
            if value:
                connection_string = value
                break

        return cls(
            connection_string=connection_string,
            token_timeout_seconds=parse_token_timeout(os.environ.get(TOKEN_TIMEOUT_ENV_VAR)),
            log_level=os.environ.get("LOG_LEVEL", "INFO"),
            log_json=os.environ.get("LOG_FORMAT", "").lower() == "json",
            version=os.environ.get("APP_VERSION", __version__),
            service_name=os.environ.get("SERVICE_NAME", "blob-redirect"),
        )

    @property
    def has_storage_config(self) -> bool:
        """Check if a storage connection string is configured."""
        return bool(self.connection_string and self.connection_string.strip())


# Global config singleton
_config: Optional[RedirectorConfig] = None


def get_config() -> RedirectorConfig:
    """Get the global configuration singleton."""
    global _config
    if _config is None:
        _config = RedirectorConfig.from_env()
    return _config


def reset_config() -> None:
    """Drop the cached configuration so the next get_config() re-reads the environment."""
    global _config
    _config = None


__all__ = [
    "SAS_PERMISSION",
    "SAS_SERVICES",
    "SAS_RESOURCE_TYPES",
    "DEFAULT_TOKEN_TIMEOUT_SECONDS",
    "RedirectorConfig",
    "get_config",
    "parse_token_timeout",
    "reset_config",
]
