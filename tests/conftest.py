"""Shared pytest fixtures."""

import sys

import pytest

from displayform.config import Settings, get_settings
from displayform.forms.model import _model_registry


@pytest.fixture(autouse=True)
def clean_registry():
    """Save and restore the model registry around each test."""
    saved = _model_registry.copy()
    _model_registry.clear()
    yield
    _model_registry.clear()
    _model_registry.update(saved)


@pytest.fixture(autouse=True)
def clean_sys_path():
    """Ensure sys.path is restored after each test."""
    original_path = sys.path.copy()
    yield
    sys.path = original_path


@pytest.fixture
def clean_settings_cache():
    get_settings.cache_clear()
    yield
    get_settings.cache_clear()


@pytest.fixture
def settings():
    """Settings with defaults, independent of any displayform.yaml on disk."""
    return Settings()


@pytest.fixture
def catalog_file(tmp_path):
    """Factory writing a YAML message catalog and returning its path."""

    def _create(content: str, name: str = "en.yaml"):
        path = tmp_path / name
        path.write_text(content, encoding="utf-8")
        return path

    return _create
