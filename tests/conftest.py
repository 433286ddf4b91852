"""
Root conftest.py - sys.path, env vars, shared fixtures.

Sets up the test environment so all production code can be imported
without Azure credentials or network access.
"""

import os
import sys

import pytest

# Add project root to sys.path so 'core', 'config', 'services', etc. are importable
PROJECT_ROOT = os.path.dirname(os.path.dirname(os.path.abspath(__file__)))
if PROJECT_ROOT not in sys.path:
    sys.path.insert(0, PROJECT_ROOT)

TEST_SUBSCRIPTION_ID = "00000000-0000-0000-0000-000000000000"


@pytest.fixture(autouse=True, scope="session")
def set_minimal_env_vars():
    """
    Set minimal environment variables to prevent configuration errors.

    The subscription ID is a syntactically valid GUID that never reaches Azure.
    """
    defaults = {
        "AZURE_SUBSCRIPTION_ID": TEST_SUBSCRIPTION_ID,
        "AZURE_LOCATION": "eastus",
        "ENVIRONMENT": "dev",
    }
    for key, value in defaults.items():
        os.environ.setdefault(key, value)


@pytest.fixture(autouse=True)
def fresh_config():
    """Drop the cached AppConfig so each test sees its own environment."""
    from config import reset_config

    reset_config()
    yield
    reset_config()


@pytest.fixture
def fake_time():
    """Recording sleep + monotonic clock pair."""
    from tests.factories.fakes import FakeTime

    return FakeTime()
