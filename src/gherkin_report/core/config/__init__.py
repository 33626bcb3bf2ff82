"""
Configuration models and loading.

This module provides the Pydantic model for gherkin-report configuration
with multi-layer merging: defaults < user < project < env vars.
"""

from .env import load_layered_env
from .loader import (
    clear_cache,
    get_project_config_path,
    get_user_config_path,
    get_xdg_config_home,
    load_config,
)
from .models import BUNDLED_TEMPLATES_DIR, ReportConfig

__all__ = [
    "BUNDLED_TEMPLATES_DIR",
    "ReportConfig",
    "clear_cache",
    "get_project_config_path",
    "get_user_config_path",
    "get_xdg_config_home",
    "load_config",
    "load_layered_env",
]
