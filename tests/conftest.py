"""Pytest configuration.

Run pytest from this project's root. pythonpath in pyproject.toml puts src/
and the project root on sys.path so tests import both
best_practices_linter and the shared helpers under tests/.
"""

import pytest

from best_practices_linter.domain.config import ConfigurationLoader


@pytest.fixture(autouse=True)
def reset_configuration_loader():
    """Keep the ConfigurationLoader singleton from leaking between tests."""
    ConfigurationLoader._instance = None
    ConfigurationLoader._config = {}
    yield
    ConfigurationLoader._instance = None
    ConfigurationLoader._config = {}
