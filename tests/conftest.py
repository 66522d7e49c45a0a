"""
Pytest configuration for llm-relay tests
"""

import importlib
import sys
from pathlib import Path

import pytest

# Ensure the parent directory is in the Python path for imports
parent_dir = Path(__file__).resolve().parent.parent
if str(parent_dir) not in sys.path:
    sys.path.insert(0, str(parent_dir))

import utils.env as env_config  # noqa: E402

# Ensure tests operate with runtime environment rather than .env overrides during imports
env_config.reload_env({"RELAY_FORCE_ENV_OVERRIDE": "false"})

import config  # noqa: E402

importlib.reload(config)

from providers.registries import reset_catalog  # noqa: E402
from utils.cost import reset_pricing_table  # noqa: E402

_CONFIG_PATH_VARS = ("MODEL_CATALOG_CONFIG_PATH", "MODEL_PRICING_CONFIG_PATH", "RELAY_DEFAULT_PROVIDER")


@pytest.fixture
def project_path(tmp_path):
    """
    Provides a temporary directory for tests that write manifest files.
    """
    test_dir = tmp_path / "test_workspace"
    test_dir.mkdir(parents=True, exist_ok=True)

    return test_dir


@pytest.fixture(autouse=True)
def isolate_registries(monkeypatch):
    """Give every test a fresh catalogue and price table built from the bundled defaults."""

    for var in _CONFIG_PATH_VARS:
        monkeypatch.delenv(var, raising=False)

    reset_catalog()
    reset_pricing_table()
    try:
        yield
    finally:
        reset_catalog()
        reset_pricing_table()


@pytest.fixture(autouse=True)
def disable_force_env_override(monkeypatch):
    """Default tests to runtime environment visibility unless they explicitly opt in."""

    monkeypatch.setenv("RELAY_FORCE_ENV_OVERRIDE", "false")
    env_config.reload_env({"RELAY_FORCE_ENV_OVERRIDE": "false"})

    try:
        yield
    finally:
        env_config.reload_env()
