"""
Configuration management for GitGrade.

Loads settings from:
1. .gitgrade.toml (local config)
2. pyproject.toml (project-level config)
"""

import os
import tomllib
from pathlib import Path
from typing import Any

# project_root is the parent directory of gitgrade/
PROJECT_ROOT = Path(__file__).resolve().parent.parent

# Global configuration for SSL verification
# Default: True (verify SSL certificates)
# Can be set to False by CLI --insecure flag
VERIFY_SSL = True

# Per external call timeout (seconds)
DEFAULT_REQUEST_TIMEOUT = 30.0

# Generation service defaults
DEFAULT_MODEL = "gpt-4o-mini"

# Global overrides (set explicitly, e.g. from the CLI)
_REQUEST_TIMEOUT: float | None = None
_MODEL: str | None = None
_LLM_BASE_URL: str | None = None


def load_config_file(config_path: Path) -> dict:
    """Load a TOML configuration file."""
    if not config_path.exists():
        return {}
    try:
        with open(config_path, "rb") as f:
            return tomllib.load(f)
    except Exception as e:
        raise ValueError(f"Failed to load config from {config_path}: {e}") from e


def get_tool_config() -> dict[str, Any]:
    """
    Load the [tool.gitgrade] table from configuration files.

    Priority:
    1. .gitgrade.toml (local config, highest priority)
    2. pyproject.toml (project-level config, fallback)

    Returns:
        The tool table, or an empty dict when neither file defines one.
    """
    local_config_path = PROJECT_ROOT / ".gitgrade.toml"
    if local_config_path.exists():
        config = load_config_file(local_config_path)
        tool_config = config.get("tool", {}).get("gitgrade", {})
        if tool_config:
            return tool_config

    pyproject_path = PROJECT_ROOT / "pyproject.toml"
    if pyproject_path.exists():
        config = load_config_file(pyproject_path)
        return config.get("tool", {}).get("gitgrade", {})

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


def _positive_seconds(value: object) -> float | None:
    """Parse a timeout setting, or None if it is missing or not a positive number."""
    if value is None or value == "" or isinstance(value, bool):
        return None
    try:
        seconds = float(value)
    except (TypeError, ValueError):
        return None
    return seconds if seconds > 0 else None


def get_request_timeout() -> float:
    """
    Get the timeout applied to every external call, in seconds.

    Priority:
    1. Explicitly set value via set_request_timeout()
    2. GITGRADE_TIMEOUT environment variable
    3. [tool.gitgrade] request_timeout
    4. Default: 30 seconds

    Values that are not positive numbers are ignored.

    Returns:
        Timeout in seconds.
    """
    if _REQUEST_TIMEOUT is not None:
        return _REQUEST_TIMEOUT

    env_timeout = _positive_seconds(os.getenv("GITGRADE_TIMEOUT"))
    if env_timeout is not None:
        return env_timeout

    config_timeout = _positive_seconds(get_tool_config().get("request_timeout"))
    if config_timeout is not None:
        return config_timeout

    return DEFAULT_REQUEST_TIMEOUT


def set_request_timeout(seconds: float | None) -> None:
    """
    Set the external call timeout explicitly.

    Args:
        seconds: Timeout in seconds, or None to fall back to env/config/default.
    """
    global _REQUEST_TIMEOUT
    if seconds is not None and seconds <= 0:
        raise ValueError(f"Timeout must be positive, got {seconds}.")
    _REQUEST_TIMEOUT = seconds


def get_model() -> str:
    """
    Get the generation model name.

    Priority:
    1. Explicitly set value via set_model()
    2. GITGRADE_MODEL environment variable
    3. [tool.gitgrade] model
    4. Default: gpt-4o-mini
    """
    if _MODEL is not None:
        return _MODEL

    env_model = os.getenv("GITGRADE_MODEL")
    if env_model:
        return env_model

    tool_config = get_tool_config()
    if "model" in tool_config:
        return str(tool_config["model"])

    return DEFAULT_MODEL


def set_model(model: str | None) -> None:
    """Set the generation model name explicitly."""
    global _MODEL
    _MODEL = model


def get_llm_base_url() -> str | None:
    """
    Get the base URL of an OpenAI-compatible endpoint.

    Returns None when the official endpoint should be used.
    """
    if _LLM_BASE_URL is not None:
        return _LLM_BASE_URL

    env_base_url = os.getenv("GITGRADE_LLM_BASE_URL")
    if env_base_url:
        return env_base_url

    tool_config = get_tool_config()
    if "llm_base_url" in tool_config:
        return str(tool_config["llm_base_url"])

    return None


def set_llm_base_url(base_url: str | None) -> None:
    """Set the OpenAI-compatible base URL explicitly."""
    global _LLM_BASE_URL
    _LLM_BASE_URL = base_url


def is_content_cache_enabled() -> bool:
    """
    Check if the in-process content cache is enabled.

    Priority:
    1. [tool.gitgrade.cache] enabled
    2. Default: True
    """
    cache_config = get_tool_config().get("cache", {})
    if "enabled" in cache_config:
        return bool(cache_config["enabled"])

    return True
