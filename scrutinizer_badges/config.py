"""
Configuration management for Scrutinizer Badges.

Settings are resolved from:
1. Values set explicitly at runtime (CLI flags)
2. Environment variables (a local .env file is honoured)
3. .scrutinizer-badges.toml (local config)
4. pyproject.toml (project-level config)
"""

import os
import tomllib
from pathlib import Path

from dotenv import load_dotenv

# Load environment variables
load_dotenv()

# project_root is the parent directory of scrutinizer_badges/
PROJECT_ROOT = Path(__file__).resolve().parent.parent

DEFAULT_API_BASE = "https://scrutinizer-ci.com"
# Default request timeout in seconds
DEFAULT_TIMEOUT = 10.0

# Global configuration for SSL verification
# Default: True (verify SSL certificates)
# Can be set to False by CLI --insecure flag
VERIFY_SSL = True

_API_BASE: str | None = None
_TIMEOUT: float | None = None


def load_config_file(config_path: Path) -> dict:
    """Load a TOML configuration file."""
    if not config_path.exists():
        return {}
    try:
        with open(config_path, "rb") as f:
            return tomllib.load(f)
    except Exception as e:
        raise ValueError(f"Failed to load config from {config_path}: {e}") from e


def get_tool_config() -> dict:
    """
    Return the [tool.scrutinizer-badges] table.

    Priority:
    1. .scrutinizer-badges.toml (local config, highest priority)
    2. pyproject.toml (project-level config, fallback)

    Returns:
        The tool table, or an empty dict when neither file defines one.
    """
    for filename in (".scrutinizer-badges.toml", "pyproject.toml"):
        config = load_config_file(PROJECT_ROOT / filename)
        tool_config = config.get("tool", {}).get("scrutinizer-badges", {})
        if tool_config:
            return tool_config
    return {}


def set_verify_ssl(verify: bool) -> None:
    """
    Set the SSL verification setting globally.

    Args:
        verify: Whether to verify SSL certificates.
    """
    global VERIFY_SSL
    VERIFY_SSL = verify


def get_verify_ssl() -> bool:
    """
    Get the current SSL verification setting.

    Returns:
        Whether SSL verification is enabled.
    """
    return VERIFY_SSL


def get_api_base() -> str:
    """
    Get the Scrutinizer API base URL.

    Priority:
    1. Explicitly set value via set_api_base()
    2. SCRUTINIZER_API_BASE environment variable
    3. api_base key in the tool config
    4. Default: https://scrutinizer-ci.com

    Returns:
        Base URL without a trailing slash.
    """
    if _API_BASE is not None:
        return _API_BASE

    env_api_base = os.getenv("SCRUTINIZER_API_BASE")
    if env_api_base:
        return env_api_base.rstrip("/")

    tool_config = get_tool_config()
    if "api_base" in tool_config:
        return str(tool_config["api_base"]).rstrip("/")

    return DEFAULT_API_BASE


def set_api_base(url: str | None) -> None:
    """
    Set the Scrutinizer API base URL explicitly.

    Args:
        url: Base URL, or None to fall back to env/config/default lookup.
    """
    global _API_BASE
    _API_BASE = url.rstrip("/") if url else None


def get_timeout() -> float:
    """
    Get the request timeout in seconds.

    Priority:
    1. Explicitly set value via set_timeout()
    2. SCRUTINIZER_TIMEOUT environment variable
    3. timeout key in the tool config
    4. Default: 10 seconds
    """
    if _TIMEOUT is not None:
        return _TIMEOUT

    env_timeout = os.getenv("SCRUTINIZER_TIMEOUT")
    if env_timeout:
        try:
            return float(env_timeout)
        except ValueError:
            pass

    tool_config = get_tool_config()
    if "timeout" in tool_config:
        return float(tool_config["timeout"])

    return DEFAULT_TIMEOUT


def set_timeout(seconds: float | None) -> None:
    """Set the request timeout explicitly (None restores the lookup)."""
    global _TIMEOUT
    _TIMEOUT = seconds


def get_token() -> str | None:
    """
    Get the Scrutinizer access token.

    Reads SCRUTINIZER_TOKEN from the environment. Public repositories do not
    need a token.
    """
    token = os.getenv("SCRUTINIZER_TOKEN")
    return token or None
