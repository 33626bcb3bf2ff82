"""
Pytest configuration and shared fixtures.

Provides fixtures for sample feature folders, isolated config/env state,
a fixed clock and a Reporter wired to temporary folders.
"""

import shutil
from datetime import datetime
from pathlib import Path

import pytest

from gherkin_report.core.config import ReportConfig, clear_cache
from gherkin_report.core.report import Reporter

FIXTURES_DIR = Path(__file__).parent / "fixtures"

# ==============================================================================
# Isolation Fixtures
# ==============================================================================


@pytest.fixture(autouse=True)
def isolated_config(tmp_path, monkeypatch):
    """Keep user config, env vars and the config cache out of every test."""
    monkeypatch.setenv("XDG_CONFIG_HOME", str(tmp_path / "xdg"))
    for name in (
        "GHERKIN_REPORT_DIR",
        "GHERKIN_REPORT_TEMPLATES",
        "GHERKIN_REPORT_RECURSIVE",
        "GHERKIN_REPORT_TITLE",
    ):
        monkeypatch.delenv(name, raising=False)
    clear_cache()
    yield
    clear_cache()


# ==============================================================================
# Directory Fixtures
# ==============================================================================


@pytest.fixture
def fixtures_dir() -> Path:
    return FIXTURES_DIR


@pytest.fixture
def features_dir(tmp_path) -> Path:
    """A writable copy of tests/fixtures/features."""
    target = tmp_path / "features"
    shutil.copytree(FIXTURES_DIR / "features", target)
    return target


@pytest.fixture
def report_dir(tmp_path) -> Path:
    return tmp_path / "out" / "report"


# ==============================================================================
# Reporter Fixtures
# ==============================================================================


@pytest.fixture
def fixed_clock():
    """Clock returning 2019-10-20 13:22:30."""
    return lambda: datetime(2019, 10, 20, 13, 22, 30)


@pytest.fixture
def report_config(report_dir) -> ReportConfig:
    return ReportConfig(report_dir=str(report_dir))


@pytest.fixture
def reporter(report_config, fixed_clock) -> Reporter:
    return Reporter(report_config, clock=fixed_clock)
