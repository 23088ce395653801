"""
tests/conftest.py
Pytest configuration and fixtures
"""

import warnings
import pytest

from config.settings import SuiteConfig


def pytest_configure(config):
    """Configure pytest with custom settings"""
    # Suppress ResourceWarnings from unclosed sessions inside library internals
    warnings.filterwarnings("ignore", category=ResourceWarning)
    config.addinivalue_line("filterwarnings", "ignore::ResourceWarning")
    config.addinivalue_line("filterwarnings", "ignore::DeprecationWarning")


@pytest.fixture(autouse=True)
def fresh_config():
    """Never leak a cached configuration between tests"""
    SuiteConfig.reload()
    yield
    SuiteConfig.reload()
