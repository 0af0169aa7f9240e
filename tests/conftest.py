# tests/conftest.py
import importlib
import logging
import pkgutil
from unittest.mock import MagicMock

import pytest

import modular.steps
from modular.registry import StepRegistry
from setup.config_models import AppSettings

# Register the built-in steps before any test swaps the registry out.
for _, _module_name, _ in pkgutil.iter_modules(modular.steps.__path__):
    importlib.import_module(f"modular.steps.{_module_name}")


@pytest.fixture
def mock_logger():
    return MagicMock(spec=logging.Logger)


@pytest.fixture
def app_settings(tmp_path):
    """Settings pointing every filesystem location into tmp_path."""
    web_root = tmp_path / "html"
    web_root.mkdir()
    return AppSettings(
        web_root=web_root,
        staging_dir=tmp_path / "staging",
        php={"ini_path": tmp_path / "php.ini"},
    )


@pytest.fixture
def isolated_registry(monkeypatch):
    """A copy of the step registry that is discarded after the test."""
    monkeypatch.setattr(
        StepRegistry, "_registry", dict(StepRegistry._registry)
    )
    return StepRegistry
