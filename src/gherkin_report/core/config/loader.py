"""
Configuration loading with multi-layer merging.

Implements the configuration precedence chain:
    defaults < user config < project config < env vars
"""

import json
import logging
import os
from pathlib import Path
from typing import Any

from .models import ReportConfig

logger = logging.getLogger(__name__)

APP_NAME = "gherkin-report"
PROJECT_CONFIG_NAME = ".gherkin-report.json"

# Global cache to avoid reloading config multiple times per session
_config_cache: ReportConfig | None = None


def get_xdg_config_home() -> Path:
    """
    Get XDG config home directory.

    Returns:
        Path to config directory (defaults to ~/.config)
    """
    if xdg_home := os.environ.get("XDG_CONFIG_HOME"):
        return Path(xdg_home)
    return Path.home() / ".config"


def get_user_config_path() -> Path:
    """Path to ~/.config/gherkin-report/config.json (or XDG equivalent)."""
    return get_xdg_config_home() / APP_NAME / "config.json"


def get_project_config_path(cwd: Path | None = None) -> Path:
    """
    Get path to project configuration file.

    Args:
        cwd: Working directory to search from (defaults to current directory)

    Returns:
        Path to .gherkin-report.json in that directory
    """
    if cwd is None:
        cwd = Path.cwd()
    return cwd / PROJECT_CONFIG_NAME


def deep_merge(base: dict[str, Any], override: dict[str, Any]) -> dict[str, Any]:
    """
    Deep merge two dictionaries.

    Values in `override` take precedence over values in `base`; nested dicts
    are merged rather than replaced.

    Example:
        >>> deep_merge({"a": 1, "b": {"x": 1}}, {"b": {"y": 2}})
        {'a': 1, 'b': {'x': 1, 'y': 2}}
    """
    result = base.copy()

    for key, value in override.items():
        if key in result and isinstance(result[key], dict) and isinstance(value, dict):
            result[key] = deep_merge(result[key], value)
        else:
            result[key] = value

    return result


def load_json_file(path: Path) -> dict[str, Any] | None:
    """
    Load a JSON file, returning None if it doesn't exist or is invalid.

    A broken config file is reported and skipped so a typo in one layer
    does not stop report generation.
    """
    if not path.exists():
        return None

    try:
        with path.open(encoding="utf-8") as f:
            data = json.load(f)
    except (json.JSONDecodeError, OSError) as e:
        logger.warning(f"Failed to parse config at {path}: {e}")
        return None

    if not isinstance(data, dict):
        logger.warning(f"Ignoring config at {path}: top level must be an object")
        return None
    return data


def apply_env_overrides(config_dict: dict[str, Any]) -> dict[str, Any]:
    """
    Apply environment variable overrides to configuration.

    Supported env vars:
        GHERKIN_REPORT_DIR - overrides report_dir
        GHERKIN_REPORT_TEMPLATES - overrides templates_dir
        GHERKIN_REPORT_RECURSIVE - overrides recursive (false/0/empty = off)
        GHERKIN_REPORT_TITLE - overrides title
    """
    result = config_dict.copy()

    if report_dir := os.environ.get("GHERKIN_REPORT_DIR"):
        result["report_dir"] = report_dir

    if templates_dir := os.environ.get("GHERKIN_REPORT_TEMPLATES"):
        result["templates_dir"] = templates_dir

    if (recursive := os.environ.get("GHERKIN_REPORT_RECURSIVE")) is not None:
        result["recursive"] = recursive.lower() not in ("false", "0", "")

    if title := os.environ.get("GHERKIN_REPORT_TITLE"):
        result["title"] = title

    return result


def get_default_config() -> dict[str, Any]:
    """Hardcoded defaults, the lowest configuration layer."""
    return ReportConfig().model_dump()


def load_config(project_dir: Path | None = None, use_cache: bool = True) -> ReportConfig:
    """
    Load configuration with multi-layer merging.

    Configuration precedence (highest to lowest):
        1. Environment variables (GHERKIN_REPORT_*)
        2. Project config (.gherkin-report.json)
        3. User config (~/.config/gherkin-report/config.json)
        4. Hardcoded defaults

    Args:
        project_dir: Directory to load .gherkin-report.json from (defaults to cwd)
        use_cache: If True, return cached config from previous load

    Returns:
        Validated ReportConfig instance

    Raises:
        ValidationError: If the merged config fails Pydantic validation
    """
    global _config_cache

    if use_cache and _config_cache is not None:
        return _config_cache

    merged = get_default_config()

    if user_config := load_json_file(get_user_config_path()):
        merged = deep_merge(merged, user_config)

    if project_config := load_json_file(get_project_config_path(project_dir)):
        merged = deep_merge(merged, project_config)

    merged = apply_env_overrides(merged)

    config = ReportConfig(**merged)
    _config_cache = config
    return config


def clear_cache() -> None:
    """
    Clear the cached configuration.

    Useful for testing or when config files change during execution.
    """
    global _config_cache
    _config_cache = None
