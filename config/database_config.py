"""
Cosmos DB Configuration.

Settings for the Cosmos DB (SQL API) account, the movie database and its
container. Endpoint and key are NOT configured: they are read from the
control plane after the account is provisioned.

Exports:
    CosmosConfig: Cosmos DB settings
"""

import os
from pydantic import BaseModel, Field, field_validator

from .defaults import CosmosDefaults


class CosmosConfig(BaseModel):
    """
    Cosmos DB account / database / container configuration.

    Environment Variables:
        COSMOS_ACCOUNT_PREFIX  - Name prefix (default: "moviedatabase")
        COSMOS_DATABASE_NAME   - SQL database (default: "moviedb")
        COSMOS_CONTAINER_NAME  - SQL container (default: "movies")
        COSMOS_PARTITION_KEY   - Partition key path (default: "/genre")
    """

    account_prefix: str = Field(
        default=CosmosDefaults.ACCOUNT_PREFIX,
        pattern=r"^[a-z0-9][a-z0-9-]{0,36}$",
        description="Prefix for the generated Cosmos DB account name"
    )

    database_name: str = Field(
        default=CosmosDefaults.DATABASE_NAME,
        min_length=1,
        description="SQL API database name"
    )

    container_name: str = Field(
        default=CosmosDefaults.CONTAINER_NAME,
        min_length=1,
        description="SQL API container holding movie documents"
    )

    partition_key_path: str = Field(
        default=CosmosDefaults.PARTITION_KEY_PATH,
        description="Container partition key path"
    )

    failover_priority: int = Field(default=CosmosDefaults.FAILOVER_PRIORITY, ge=0)
    zone_redundant: bool = Field(default=CosmosDefaults.ZONE_REDUNDANT)

    @field_validator('partition_key_path')
    @classmethod
    def validate_partition_key(cls, v: str) -> str:
        if not v.startswith('/'):
            raise ValueError(f"Partition key path must start with '/': {v}")
        return v

    @classmethod
    def from_environment(cls):
        """Load Cosmos DB configuration from environment variables."""
        return cls(
            account_prefix=os.environ.get("COSMOS_ACCOUNT_PREFIX", CosmosDefaults.ACCOUNT_PREFIX),
            database_name=os.environ.get("COSMOS_DATABASE_NAME", CosmosDefaults.DATABASE_NAME),
            container_name=os.environ.get("COSMOS_CONTAINER_NAME", CosmosDefaults.CONTAINER_NAME),
            partition_key_path=os.environ.get("COSMOS_PARTITION_KEY", CosmosDefaults.PARTITION_KEY_PATH),
        )

    def debug_dict(self) -> dict:
        """Return debug-friendly configuration."""
        return {
            "account_prefix": self.account_prefix,
            "database_name": self.database_name,
            "container_name": self.container_name,
            "partition_key_path": self.partition_key_path,
        }
