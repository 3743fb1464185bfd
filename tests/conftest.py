"""
routerfixtures Test Configuration

Shared pytest fixtures and configuration for all test types.
"""

import os
from typing import Generator

import pytest

from routerfixtures.core.config import reset_settings


# Configure pytest collection
def pytest_configure(config: pytest.Config) -> None:
    """Register custom markers for test categorization."""
    config.addinivalue_line("markers", "unit: Unit tests (fast, isolated)")
    config.addinivalue_line("markers", "integration: Integration tests (real TLS handshakes over loopback)")


@pytest.fixture(autouse=True)
def clean_settings() -> Generator[None, None, None]:
    """Reset the settings singleton and ROUTERFIXTURES_ env vars around each test."""

    def _clear() -> None:
        reset_settings()
        for key in list(os.environ.keys()):
            if key.startswith("ROUTERFIXTURES_"):
                del os.environ[key]

    _clear()
    yield
    _clear()


@pytest.fixture
def test_config_dir(tmp_path):
    """Provide a temporary configuration directory for tests."""
    config_dir = tmp_path / ".routerfixtures"
    config_dir.mkdir()
    return config_dir
