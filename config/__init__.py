"""
Configuration Package - Domain-Specific Configuration Modules

This package provides application configuration using a composition-based approach.

Structure:
    config/
    ├── __init__.py              # This file - exports and singleton
    ├── app_config.py            # Main config (composes domain configs)
    ├── storage_config.py        # Static website storage account
    ├── database_config.py       # Cosmos DB account / database / container
    ├── provisioning_config.py   # Readiness polling and retry timings
    ├── site_config.py           # Dataset source, static site, search API
    ├── env_validation.py        # Startup validation of env vars
    └── defaults.py              # Default values

Usage:
    # Singleton pattern (preferred)
    from config import get_config
    config = get_config()
    policy = config.provisioning.retry_policy()

    # Debug output
    from config import debug_config
    info = debug_config()  # Secrets masked
"""

from typing import Optional

__version__ = "0.3.0"

from .storage_config import StorageConfig
from .database_config import CosmosConfig
from .provisioning_config import ProvisioningConfig
from .site_config import DatasetConfig, SiteConfig
from .app_config import AppConfig, generate_name_suffix


# ============================================================================
# SINGLETON PATTERN
# ============================================================================

_config_instance: Optional[AppConfig] = None


def get_config() -> AppConfig:
    """
    Get global configuration singleton.

    Returns:
        AppConfig instance loaded from environment
    """
    global _config_instance
    if _config_instance is None:
        _config_instance = AppConfig.from_environment()
    return _config_instance


def reset_config() -> None:
    """Drop the cached singleton so the next get_config() re-reads the environment."""
    global _config_instance
    _config_instance = None


def debug_config() -> dict:
    """
    Get sanitized configuration for debugging (masks sensitive values).

    Returns:
        Dictionary with configuration values, secrets masked
    """
    try:
        config = get_config()
        return {
            'subscription_id': '***MASKED***' if config.subscription_configured else None,
            'location': config.location,
            'name_suffix': config.name_suffix,
            'storage': config.storage.debug_dict(),
            'cosmos': config.cosmos.debug_dict(),
            'provisioning': config.provisioning.debug_dict(),
            'dataset': {
                'url': config.dataset.url,
                'local_path': config.dataset.local_path,
            },
            'site': config.site.debug_dict(),
            'debug_mode': config.debug_mode,
            'environment': config.environment,
            'log_level': config.log_level,
        }
    except Exception as e:
        return {'error': f'Configuration validation failed: {e}'}


# ============================================================================
# EXPORTS
# ============================================================================

__all__ = [
    '__version__',
    'AppConfig',
    'get_config',
    'reset_config',
    'debug_config',
    'generate_name_suffix',
    'StorageConfig',
    'CosmosConfig',
    'ProvisioningConfig',
    'DatasetConfig',
    'SiteConfig',
]
