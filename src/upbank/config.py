"""
Configuration management.

All client configuration keys and defaults are defined here.

Sources, in increasing precedence:
- Built-in defaults
- YAML config file
- Environment variables (UPBANK_TOKEN, UPBANK_URL, UPBANK_TIMEOUT)
"""

import os
from dataclasses import dataclass
from pathlib import Path
from urllib.parse import urlsplit

import yaml

DEFAULT_BASE_URL = "https://api.up.com.au/api/v1/"
DEFAULT_TIMEOUT = 30


class ConfigValidationError(Exception):
    """Raised when configuration validation fails."""

    def __init__(self, errors: list[str]):
        self.errors = errors
        super().__init__("Invalid configuration: " + "; ".join(errors))


@dataclass
class UpConfig:
    """Up API configuration.

    base_url must point at the versioned API root; a trailing slash is added
    by the client if missing.
    """

    token: str
    base_url: str = DEFAULT_BASE_URL
    # Request timeout (seconds)
    timeout: float = DEFAULT_TIMEOUT

    def validate(self) -> list[str]:
        """Validate configuration completeness and consistency.

        Returns:
            List of validation errors (empty if valid)
        """
        errors: list[str] = []

        if not self.token:
            errors.append("token is required (set UPBANK_TOKEN or 'token' in the config file)")

        parts = urlsplit(self.base_url or "")
        if parts.scheme not in ("http", "https") or not parts.netloc:
            errors.append(f"base_url must be an absolute http(s) URL, got {self.base_url!r}")

        if self.timeout <= 0:
            errors.append("timeout must be positive")

        return errors


def load_config(config_path: Path | None = None) -> UpConfig:
    """
    Load configuration from a YAML file.

    A missing file is not an error; defaults and environment variables are
    used instead. Environment variables override file values:
    - UPBANK_TOKEN
    - UPBANK_URL
    - UPBANK_TIMEOUT (seconds)
    """
    if config_path is not None and config_path.exists():
        with open(config_path) as f:
            data = yaml.safe_load(f) or {}
    else:
        data = {}

    timeout = data.get("timeout", DEFAULT_TIMEOUT)
    timeout_env = os.environ.get("UPBANK_TIMEOUT", "")
    if timeout_env:
        try:
            timeout = float(timeout_env)
        except ValueError:
            raise ConfigValidationError(
                [f"UPBANK_TIMEOUT must be a number, got {timeout_env!r}"]
            ) from None

    return UpConfig(
        token=os.environ.get("UPBANK_TOKEN", data.get("token", "")),
        base_url=os.environ.get("UPBANK_URL", data.get("base_url", DEFAULT_BASE_URL)),
        timeout=timeout,
    )


def create_default_config(config_path: Path) -> None:
    """Create a default configuration file."""
    default_config = """# Up Bank API client configuration
#
# Environment variables override these values:
#   UPBANK_TOKEN, UPBANK_URL, UPBANK_TIMEOUT

token: ""                                   # Personal access token (prefer UPBANK_TOKEN)
base_url: "https://api.up.com.au/api/v1/"  # Versioned API root
timeout: 30                                 # Request timeout in seconds
"""

    config_path.parent.mkdir(parents=True, exist_ok=True)
    with open(config_path, "w") as f:
        f.write(default_config)
