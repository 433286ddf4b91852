"""
Azure Storage Configuration - static website hosting account.

Provides configuration for:
- Storage account SKU and kind
- Static website index / error documents
- The $web container the site is uploaded to

The account NAME is not configured here: it is derived per deployment
from the random suffix (see AppConfig.storage_account_name).
"""

import os
from pydantic import BaseModel, Field

from .defaults import StorageDefaults


class StorageConfig(BaseModel):
    """
    Storage account settings for the static website.

    Environment Variables:
        STORAGE_SKU              - Account SKU (default: "Standard_LRS")
        STORAGE_KIND             - Account kind (default: "StorageV2")
        STORAGE_ACCOUNT_PREFIX   - Name prefix (default: "moviedatabasesa")
        STATIC_INDEX_DOCUMENT    - Index document (default: "index.html")
        STATIC_ERROR_DOCUMENT    - 404 document (default: "404.html")
    """

    account_prefix: str = Field(
        default=StorageDefaults.ACCOUNT_PREFIX,
        pattern=r"^[a-z0-9]{1,18}$",
        description="Prefix for the generated storage account name"
    )

    sku: str = Field(
        default=StorageDefaults.SKU,
        description="Storage account SKU",
        examples=["Standard_LRS", "Standard_GRS"]
    )

    kind: str = Field(
        default=StorageDefaults.KIND,
        description="Storage account kind (static websites need StorageV2)"
    )

    web_container: str = Field(
        default=StorageDefaults.WEB_CONTAINER,
        description="Container served by the static website endpoint"
    )

    index_document: str = Field(default=StorageDefaults.INDEX_DOCUMENT)
    error_document: str = Field(default=StorageDefaults.ERROR_DOCUMENT)

    @classmethod
    def from_environment(cls):
        """Load storage configuration from environment variables."""
        return cls(
            account_prefix=os.environ.get("STORAGE_ACCOUNT_PREFIX", StorageDefaults.ACCOUNT_PREFIX),
            sku=os.environ.get("STORAGE_SKU", StorageDefaults.SKU),
            kind=os.environ.get("STORAGE_KIND", StorageDefaults.KIND),
            index_document=os.environ.get("STATIC_INDEX_DOCUMENT", StorageDefaults.INDEX_DOCUMENT),
            error_document=os.environ.get("STATIC_ERROR_DOCUMENT", StorageDefaults.ERROR_DOCUMENT),
        )

    def debug_dict(self) -> dict:
        """Return debug-friendly configuration showing resolved values."""
        return {
            "account_prefix": self.account_prefix,
            "sku": self.sku,
            "kind": self.kind,
            "web_container": self.web_container,
            "index_document": self.index_document,
            "error_document": self.error_document,
        }
