"""
Main Application Configuration.

Composes domain-specific configuration modules:
    - StorageConfig (static website storage account)
    - CosmosConfig (Cosmos DB account / database / container)
    - ProvisioningConfig (readiness polling and retry timings)
    - DatasetConfig (movie CSV source)
    - SiteConfig (static site output and search API defaults)

Exports:
    AppConfig: Main configuration class

Dependencies:
    pydantic: BaseModel for configuration validation
    config.defaults: Default value constants

Pattern:
    Composition over inheritance - domain configs are composed, not inherited.
"""

import os
import secrets
import string
from typing import Optional

from pydantic import BaseModel, Field, field_validator

from .storage_config import StorageConfig
from .database_config import CosmosConfig
from .provisioning_config import ProvisioningConfig
from .site_config import DatasetConfig, SiteConfig
from .defaults import AzureDefaults, AppDefaults, ProvisioningDefaults


_SUFFIX_ALPHABET = string.ascii_lowercase + string.digits


def generate_name_suffix(length: int = ProvisioningDefaults.NAME_SUFFIX_LENGTH) -> str:
    """Random lowercase alphanumeric suffix for globally unique account names."""
    return "".join(secrets.choice(_SUFFIX_ALPHABET) for _ in range(length))


class AppConfig(BaseModel):
    """
    Application configuration - composition of domain configs.
    """

    # ========================================================================
    # Azure Target
    # ========================================================================

    subscription_id: str = Field(
        default=AzureDefaults.SUBSCRIPTION_ID,
        description="Azure subscription ID (AZURE_SUBSCRIPTION_ID)"
    )

    location: str = Field(
        default=AzureDefaults.LOCATION,
        min_length=1,
        description="Azure region for every resource",
        examples=["eastus", "westeurope"]
    )

    name_suffix: Optional[str] = Field(
        default=None,
        pattern=r"^[a-z0-9]{3,6}$",
        description="Fixed suffix for account names; random per run when unset. "
                    "Set RESOURCE_NAME_SUFFIX to re-run against the same accounts."
    )

    # ========================================================================
    # Core Application Settings
    # ========================================================================

    debug_mode: bool = Field(
        default=AppDefaults.DEBUG_MODE,
        description="Enable verbose diagnostics (DEBUG_MODE=true)"
    )

    environment: str = Field(
        default=AppDefaults.ENVIRONMENT,
        description="Environment name (dev, qa, prod)",
        examples=["dev", "qa", "prod"]
    )

    log_level: str = Field(
        default=AppDefaults.LOG_LEVEL,
        description="Logging level"
    )

    # ========================================================================
    # Domain Configs
    # ========================================================================

    storage: StorageConfig = Field(default_factory=StorageConfig)
    cosmos: CosmosConfig = Field(default_factory=CosmosConfig)
    provisioning: ProvisioningConfig = Field(default_factory=ProvisioningConfig)
    dataset: DatasetConfig = Field(default_factory=DatasetConfig)
    site: SiteConfig = Field(default_factory=SiteConfig)

    @field_validator('log_level')
    @classmethod
    def validate_log_level(cls, v: str) -> str:
        level = v.upper()
        if level not in ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"):
            raise ValueError(f"Invalid log level: {v}")
        return level

    # ========================================================================
    # Derived Names
    # ========================================================================

    def storage_account_name(self, suffix: str) -> str:
        """Storage account name for a run, e.g. moviedatabasesa1a2b3c."""
        return f"{self.storage.account_prefix}{suffix}"

    def cosmos_account_name(self, suffix: str) -> str:
        """Cosmos DB account name for a run, e.g. moviedatabase1a2b3c."""
        return f"{self.cosmos.account_prefix}{suffix}"

    def resolve_name_suffix(self) -> str:
        """Configured suffix, or a fresh random one."""
        return self.name_suffix or generate_name_suffix()

    @property
    def subscription_configured(self) -> bool:
        return bool(self.subscription_id) and self.subscription_id != AzureDefaults.SUBSCRIPTION_ID

    @classmethod
    def from_environment(cls):
        """Load all configs from environment."""
        return cls(
            subscription_id=os.environ.get("AZURE_SUBSCRIPTION_ID", AzureDefaults.SUBSCRIPTION_ID),
            location=os.environ.get("AZURE_LOCATION", AzureDefaults.LOCATION),
            name_suffix=os.environ.get("RESOURCE_NAME_SUFFIX") or None,
            debug_mode=os.environ.get("DEBUG_MODE", str(AppDefaults.DEBUG_MODE).lower()).lower() == "true",
            environment=os.environ.get("ENVIRONMENT", AppDefaults.ENVIRONMENT),
            log_level=os.environ.get("LOG_LEVEL", AppDefaults.LOG_LEVEL),

            storage=StorageConfig.from_environment(),
            cosmos=CosmosConfig.from_environment(),
            provisioning=ProvisioningConfig.from_environment(),
            dataset=DatasetConfig.from_environment(),
            site=SiteConfig.from_environment()
        )
