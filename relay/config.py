# ============================================================================
# RELAY CONFIGURATION
# ============================================================================
# EPOCH: 1 - SUBMISSION RELAY
# STATUS: Gateway - Configuration management
# PURPOSE: Environment-based configuration for the submission relay
# CREATED: 19 OCT 2026
# ============================================================================
"""
Relay Configuration

Loads configuration from environment variables with sensible defaults.
The relay holds no state between invocations, so configuration is read
fresh for every request: a fix to the Function App settings takes effect
on the next call without a redeploy.

Required:
- AIRTABLE_API_KEY  personal access token (starts with "pat")
- AIRTABLE_BASE_ID  target base id

Optional:
- AIRTABLE_TABLE (default "Submissions")
- CORS_ALLOW_ORIGIN (default "*")
- AIRTABLE_API_URL, AIRTABLE_TIMEOUT_SECONDS
- SERVICE_NAME, APP_VERSION, LOG_LEVEL, LOG_FORMAT
"""

import os
import logging
from dataclasses import dataclass
from typing import Mapping, Optional

from __version__ import __version__

logger = logging.getLogger(__name__)

CREDENTIAL_PREFIX = "pat"
DEFAULT_TABLE = "Submissions"
DEFAULT_API_URL = "https://api.airtable.com"
DEFAULT_TIMEOUT_SECONDS = 10.0


def _read(env: Mapping[str, str], name: str, default: Optional[str] = None) -> Optional[str]:
    """Read a variable, treating blank values as unset."""
    value = env.get(name)
    if value is None or not value.strip():
        return default
    return value.strip()


def _read_float(env: Mapping[str, str], name: str, default: float) -> float:
    raw = _read(env, name)
    if raw is None:
        return default
    try:
        value = float(raw)
    except ValueError:
        logger.warning(f"Ignoring non-numeric {name}={raw!r}, using {default}")
        return default
    if value <= 0:
        logger.warning(f"Ignoring non-positive {name}={raw!r}, using {default}")
        return default
    return value


@dataclass(frozen=True)
class RelayConfig:
    """Configuration snapshot for one invocation."""

    # Airtable (record store)
    airtable_api_key: Optional[str] = None
    airtable_base_id: Optional[str] = None
    airtable_table: str = DEFAULT_TABLE
    airtable_api_url: str = DEFAULT_API_URL
    airtable_timeout_seconds: float = DEFAULT_TIMEOUT_SECONDS

    # CORS
    cors_allow_origin: str = "*"

    # App Info
    version: str = __version__
    service_name: str = "submission-relay"

    # Logging
    log_level: str = "INFO"
    log_json: bool = False

    @classmethod
    def from_env(cls, env: Optional[Mapping[str, str]] = None) -> "RelayConfig":
        """Load configuration from environment variables."""
        env = os.environ if env is None else env
        return cls(
            airtable_api_key=_read(env, "AIRTABLE_API_KEY"),
            airtable_base_id=_read(env, "AIRTABLE_BASE_ID"),
            airtable_table=_read(env, "AIRTABLE_TABLE", DEFAULT_TABLE),
            airtable_api_url=_read(env, "AIRTABLE_API_URL", DEFAULT_API_URL).rstrip("/"),
            airtable_timeout_seconds=_read_float(
                env, "AIRTABLE_TIMEOUT_SECONDS", DEFAULT_TIMEOUT_SECONDS
            ),
            cors_allow_origin=_read(env, "CORS_ALLOW_ORIGIN", "*"),
            version=_read(env, "APP_VERSION", __version__),
            service_name=_read(env, "SERVICE_NAME", "submission-relay"),
            log_level=_read(env, "LOG_LEVEL", "INFO").upper(),
            log_json=(_read(env, "LOG_FORMAT", "") or "").lower() == "json",
        )

    @property
    def has_credential(self) -> bool:
        """Check if an API credential is set at all."""
        return bool(self.airtable_api_key)

    @property
    def has_valid_credential(self) -> bool:
        """Check if the credential follows the personal access token convention."""
        return self.has_credential and self.airtable_api_key.startswith(CREDENTIAL_PREFIX)

    @property
    def has_store_config(self) -> bool:
        """Check if the target base id is configured."""
        return bool(self.airtable_base_id)


def load_config() -> RelayConfig:
    """Read a fresh configuration snapshot from the process environment."""
    return RelayConfig.from_env()


__all__ = [
    "RelayConfig",
    "load_config",
    "CREDENTIAL_PREFIX",
    "DEFAULT_TABLE",
    "DEFAULT_API_URL",
]
