"""
Resource Models - Azure resources the deployment creates.

Exports:
    ResourceDescriptor: Immutable description of a resource to provision
    ProvisionResult: Outcome of a provision call
    DeploymentResult: Summary of one full deployment run
"""

import re
from typing import Any, Dict, Optional

from pydantic import BaseModel, ConfigDict, Field, model_validator

from .enums import ProvisioningState, ResourceKind
from .movie import ImportSummary


_STORAGE_ACCOUNT_NAME = re.compile(r"^[a-z0-9]{3,24}$")
_COSMOS_ACCOUNT_NAME = re.compile(r"^[a-z0-9][a-z0-9-]{1,42}[a-z0-9]$")


class ResourceDescriptor(BaseModel):
    """
    Description of a resource to provision.

    Created once at invocation start and never mutated afterwards;
    every later step re-reads the same descriptor.
    """

    model_config = ConfigDict(frozen=True)

    name: str = Field(..., description="Azure resource name (globally unique for storage/cosmos)")
    kind: ResourceKind = Field(..., description="Kind of resource")
    region: str = Field(..., min_length=1, description="Azure region, e.g. 'eastus'")
    resource_group: str = Field(..., min_length=1, description="Target resource group")

    @model_validator(mode='after')
    def validate_name(self) -> 'ResourceDescriptor':
        """Enforce Azure naming rules for the resource kind."""
        if self.kind == ResourceKind.STORAGE and not _STORAGE_ACCOUNT_NAME.match(self.name):
            raise ValueError(
                f"Storage account name '{self.name}' must be 3-24 lowercase letters or digits"
            )
        if self.kind == ResourceKind.DATABASE and not _COSMOS_ACCOUNT_NAME.match(self.name):
            raise ValueError(
                f"Cosmos DB account name '{self.name}' must be 3-44 lowercase letters, digits or hyphens"
            )
        return self

    @property
    def resource_id(self) -> str:
        """Short identifier used in logs and poller calls."""
        return f"{self.resource_group}/{self.kind.value}/{self.name}"


class ProvisionResult(BaseModel):
    """Result of provisioning one resource."""

    descriptor: ResourceDescriptor
    created: bool = Field(..., description="False when the resource already existed")
    state: ProvisioningState = Field(default=ProvisioningState.PENDING)


class DeploymentResult(BaseModel):
    """Summary of a completed deployment."""

    resource_group: str
    location: str
    storage_account: str
    cosmos_account: str
    database_name: str
    container_name: str
    website_url: Optional[str] = None
    cosmos_endpoint: Optional[str] = None
    import_summary: Optional[ImportSummary] = None
    uploaded_files: int = 0

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary for JSON output (no secrets included)."""
        return self.model_dump(mode='json')
