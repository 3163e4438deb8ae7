# =============================================================================
# core/config.py  -  Runtime Configuration
# =============================================================================
#
# WHAT THIS MODULE DOES:
#   Builds the one Settings object the server needs, once, at startup.
#   Everything downstream receives Settings explicitly; no other module
#   reads os.environ.
#
# ENVIRONMENT VARIABLES:
#   CRUNCHBASE_API_KEY   (required)  Your Crunchbase API key
#   CRUNCHBASE_API_URL   (optional)  Defaults to the public v4 endpoint
#   LOG_LEVEL            (optional)  Defaults to INFO
#
#   A .env file in the working directory is honored via python-dotenv, so
#   local development doesn't need exported shell variables.
# =============================================================================

import os
from dataclasses import dataclass
from typing import Mapping, Optional

from dotenv import load_dotenv

from core.errors import ConfigurationError

DEFAULT_API_URL = "https://api.crunchbase.com/api/v4"


@dataclass(frozen=True)
class Settings:
    """Everything needed to talk to Crunchbase."""

    api_key: str
    base_url: str = DEFAULT_API_URL
    log_level: str = "INFO"

    def __repr__(self) -> str:
        # Keep the key out of logs and tracebacks.
        return f"Settings(api_key='***', base_url={self.base_url!r}, log_level={self.log_level!r})"


def load_settings(environ: Optional[Mapping[str, str]] = None) -> Settings:
    """Read Settings from the environment (or from an explicit mapping).

    Args:
        environ: Variables to read instead of os.environ.  When omitted,
                 a .env file is loaded first and os.environ is used.

    Raises:
        ConfigurationError: if CRUNCHBASE_API_KEY is missing or blank.
    """
    if environ is None:
        load_dotenv()
        environ = os.environ

    api_key = environ.get("CRUNCHBASE_API_KEY", "").strip()
    if not api_key:
        raise ConfigurationError("CRUNCHBASE_API_KEY environment variable is required")

    return Settings(
        api_key=api_key,
        base_url=environ.get("CRUNCHBASE_API_URL", "").strip() or DEFAULT_API_URL,
        log_level=environ.get("LOG_LEVEL", "").strip().upper() or "INFO",
    )
