"""
Config test fixtures - clean environment via monkeypatch.
"""

import pytest


@pytest.fixture
def clean_env(monkeypatch):
    """Remove all env vars that config modules might read, for isolation."""
    env_vars_to_clear = [
        "AZURE_SUBSCRIPTION_ID", "AZURE_LOCATION", "RESOURCE_NAME_SUFFIX",
        "STORAGE_ACCOUNT_PREFIX", "STORAGE_SKU", "STORAGE_KIND",
        "COSMOS_ACCOUNT_PREFIX", "COSMOS_DATABASE_NAME", "COSMOS_CONTAINER_NAME", "COSMOS_PARTITION_KEY",
        "POLL_INTERVAL_SECONDS", "POLL_MAX_WAIT_SECONDS", "SETTLE_DELAY_SECONDS",
        "RETRY_MAX_ATTEMPTS", "RETRY_INITIAL_DELAY_SECONDS", "RETRY_BACKOFF_MULTIPLIER", "RETRY_JITTER_RATIO",
        "DATASET_URL", "DATASET_PATH", "SITE_OUTPUT_DIR", "SITE_SETTINGS_FILE",
        "SEARCH_API_URL", "SEARCH_API_KEY",
        "ENVIRONMENT", "LOG_LEVEL", "DEBUG_MODE",
    ]
    for var in env_vars_to_clear:
        monkeypatch.delenv(var, raising=False)
    return monkeypatch
