"""Environment variable configuration for the OMDb backend.

The API key is loaded in priority order:
  1. Shell environment variables (highest priority)
  2. .env file in current directory
  3. ~/.moviesearch/.env (persistent config, set via `movies env set`)

Run `movies env` to see whether the key is configured.
Run `movies env set OMDB_API_KEY value` to save it persistently.
"""

from __future__ import annotations

import os
import re
from pathlib import Path
from typing import Optional

import httpx
from dotenv import load_dotenv, set_key

from moviesearch.errors import ConfigurationError

CONFIG_DIR = Path.home() / ".moviesearch"
PERSISTENT_ENV = CONFIG_DIR / ".env"

DEFAULT_BASE_URL = "https://www.omdbapi.com/"

# Load in reverse priority order (later loads don't overwrite existing)
if PERSISTENT_ENV.exists():
    load_dotenv(PERSISTENT_ENV)

load_dotenv()


# --- Persistent config ---

def save_key(name: str, value: str) -> Path:
    """Save a setting to ~/.moviesearch/.env and apply it to this process."""
    CONFIG_DIR.mkdir(parents=True, exist_ok=True)
    # set_key refuses to create the file
    PERSISTENT_ENV.touch(exist_ok=True)
    set_key(PERSISTENT_ENV, name, value, quote_mode="never")
    os.environ[name] = value
    return PERSISTENT_ENV


# --- Accessors ---

def get_omdb_key() -> str:
    key = os.getenv("OMDB_API_KEY", "").strip()
    if not key:
        raise ConfigurationError(
            "OMDB_API_KEY is not set. "
            "Run `movies env set OMDB_API_KEY <your-key>` to configure it."
        )
    return key


def get_base_url() -> str:
    return os.getenv("OMDB_BASE_URL") or DEFAULT_BASE_URL


def get_timeout() -> float:
    """Request timeout in seconds; falls back to 15 on unreadable values."""
    raw = os.getenv("API_TIMEOUT", "15")
    try:
        return float(raw)
    except ValueError:
        return 15.0


# --- Status check ---

VALID_KEYS = {"OMDB_API_KEY", "OMDB_BASE_URL", "API_TIMEOUT"}

ENV_VARS = {
    "OMDB_API_KEY": {
        "required_by": ["movies find", "movies details"],
        "description": "OMDb API key (https://www.omdbapi.com/apikey.aspx)",
    },
    "OMDB_BASE_URL": {
        "required_by": ["(optional) override the OMDb endpoint"],
        "description": f"OMDb base URL, default {DEFAULT_BASE_URL}",
    },
    "API_TIMEOUT": {
        "required_by": ["(optional) all network commands"],
        "description": "Request timeout in seconds, default 15",
    },
}


_OMDB_KEY_RE = re.compile(r"^[0-9a-fA-F]{8}$")


def _check_omdb_key(value: str) -> Optional[str]:
    if not _OMDB_KEY_RE.match(value):
        return "does not look like an OMDb key (expected 8 hex characters)"
    return None


def _check_base_url(value: str) -> Optional[str]:
    try:
        url = httpx.URL(value)
    except httpx.InvalidURL:
        return "is not a valid URL"
    if url.scheme not in ("http", "https") or not url.host:
        return "must be an absolute http(s) URL"
    return None


def _check_timeout(value: str) -> Optional[str]:
    try:
        seconds = float(value)
    except ValueError:
        return "is not a number; the default of 15 seconds is used"
    if seconds <= 0:
        return "must be greater than zero"
    return None


_CHECKS = {
    "OMDB_API_KEY": _check_omdb_key,
    "OMDB_BASE_URL": _check_base_url,
    "API_TIMEOUT": _check_timeout,
}


def validate_setting(name: str, value: str) -> Optional[str]:
    """Describe what is wrong with ``value`` for setting ``name``, or ``None``."""
    check = _CHECKS.get(name)
    return check(value) if check else None


def check_env() -> list[tuple[str, bool, dict, Optional[str]]]:
    """Return (var_name, is_set, info, problem) for every known setting.

    ``problem`` describes a value that is set but unusable, else ``None``.
    """
    result = []
    for var, info in ENV_VARS.items():
        value = os.getenv(var, "").strip()
        problem = validate_setting(var, value) if value else None
        result.append((var, bool(value), info, problem))
    return result
