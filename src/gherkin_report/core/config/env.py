"""Environment loading helpers.

GHERKIN_REPORT_* settings can live in .env files as well as in the shell:

- ~/.config/gherkin-report/.env holds per-user defaults
- <project>/.env and <project>/.env.local hold per-project values

A variable already exported in the process environment is never replaced.
Project files may replace values that came from the user file.
"""

from __future__ import annotations

import os
from pathlib import Path
from typing import Iterable

from dotenv import dotenv_values

from .loader import APP_NAME, get_xdg_config_home


def read_env_file(path: Path) -> dict[str, str]:
    """Return the key/value pairs of a .env file, or {} if it is absent."""
    if not path.exists():
        return {}
    return {
        str(key): str(value)
        for key, value in dotenv_values(path).items()
        if key is not None and value is not None
    }


def load_layered_env(
    *,
    project_dir: Path | None = None,
    user_env_paths: Iterable[Path] | None = None,
    project_env_paths: Iterable[Path] | None = None,
) -> set[str]:
    """Load user and project .env files into os.environ.

    Args:
        project_dir: base directory for project env paths (defaults to cwd)
        user_env_paths: explicit user env file paths
        project_env_paths: explicit project env file paths

    Returns:
        Names of the variables that were set by this call
    """
    if project_dir is None:
        project_dir = Path.cwd()
    if user_env_paths is None:
        user_env_paths = [get_xdg_config_home() / APP_NAME / ".env"]
    if project_env_paths is None:
        project_env_paths = [project_dir / ".env", project_dir / ".env.local"]

    loaded: set[str] = set()
    for path in user_env_paths:
        for key, value in read_env_file(Path(path)).items():
            if key not in os.environ:
                os.environ[key] = value
                loaded.add(key)

    for path in project_env_paths:
        for key, value in read_env_file(Path(path)).items():
            if key not in os.environ or key in loaded:
                os.environ[key] = value
                loaded.add(key)

    return loaded
