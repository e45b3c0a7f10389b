"""
Shared fixtures for coredeps tests.
"""

import pytest

from coredeps.catalog import DependencyCatalog
from coredeps.cli_config import reset_config

ENV_VARS = (
    "COREDEPS_PLATFORM_VERSION",
    "COREDEPS_TARGET_PLATFORM_VERSION",
    "COREDEPS_LEGACY_COMPATIBLE",
    "COREDEPS_FRAMEWORK_PROJECT",
    "COREDEPS_OUTPUT_FORMAT",
    "COREDEPS_LOG_LEVEL",
    "CI_GROOVY_VERSION",
)


@pytest.fixture(autouse=True)
def isolated_config(tmp_path, monkeypatch):
    """Keep user config files and environment overrides out of every test."""
    for name in ENV_VARS:
        monkeypatch.delenv(name, raising=False)
    # Wide enough that rich never folds coordinates in tables
    monkeypatch.setenv("COLUMNS", "200")
    home = tmp_path / "home"
    home.mkdir()
    monkeypatch.setenv("HOME", str(home))
    workdir = tmp_path / "work"
    workdir.mkdir()
    monkeypatch.chdir(workdir)

    reset_config()
    yield
    reset_config()


@pytest.fixture
def temp_dir(tmp_path):
    """Scratch directory separate from the working directory."""
    scratch = tmp_path / "scratch"
    scratch.mkdir()
    return scratch


@pytest.fixture
def catalog():
    """Default framework-project catalog."""
    return DependencyCatalog("2.5.6")
