"""
Test Configuration
==================

Pytest configuration with fixtures for the header renderer tests.
Provides test settings, the bundled header markup and sample contexts.
"""

import shutil
import tempfile
from pathlib import Path
from typing import Any, Dict, Generator

import pytest
from pydantic_settings import SettingsConfigDict

# Import application modules
from doxyheader.config import settings as settings_module
from doxyheader.config.settings import Settings
from doxyheader.core.rendering.renderer import BUNDLED_TEMPLATE_DIR

from tests.data import FULL_HEADER_CONTEXT, SEARCHBOX_CONTEXT


# Test settings override
class TestSettings(Settings):
    """Test-specific settings."""

    environment: str = "testing"
    debug: bool = True
    log_level: str = "DEBUG"

    model_config = SettingsConfigDict(env_file=".env.test", env_prefix="DOXYHEADER_TEST_")


@pytest.fixture(scope="session")
def test_settings() -> TestSettings:
    """Test settings fixture."""
    return TestSettings()


@pytest.fixture(autouse=True)
def override_settings(test_settings: TestSettings) -> Generator[TestSettings, None, None]:
    """Override application settings for testing."""
    previous = settings_module.settings
    settings_module.settings = test_settings
    yield test_settings
    settings_module.settings = previous


@pytest.fixture
def configure_settings(override_settings: TestSettings):
    """Install settings with field overrides for a single test."""

    def _configure(**overrides: Any) -> Settings:
        configured = override_settings.model_copy(update=overrides)
        settings_module.settings = configured
        return configured

    return _configure


@pytest.fixture
def temp_dir() -> Generator[Path, None, None]:
    """Create temporary directory for test files."""
    temp_path = Path(tempfile.mkdtemp(prefix="doxyheader_test_"))
    yield temp_path
    shutil.rmtree(temp_path, ignore_errors=True)


@pytest.fixture(scope="session")
def header_markup() -> str:
    """Bundled ARGoS API documentation header markup."""
    return (BUNDLED_TEMPLATE_DIR / "api_embedded_header.html").read_text(encoding="utf-8")


@pytest.fixture
def searchbox_context() -> Dict[str, Any]:
    """Token-only context replacing $searchbox with <input/>."""
    return dict(SEARCHBOX_CONTEXT)


@pytest.fixture
def full_header_context() -> Dict[str, Any]:
    """Context supplying every token and enabling every header region."""
    return dict(FULL_HEADER_CONTEXT)
