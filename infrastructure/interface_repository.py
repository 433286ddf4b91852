"""
Repository Abstract Base Classes - Single Point of Truth.

Enforces exact method signatures across all repository implementations,
preventing parameter name mismatches. Services depend on these interfaces
only, so tests can hand in in-memory doubles instead of Azure clients.

Philosophy: "Define once, enforce everywhere"

Exports:
    IControlPlaneRepository: Azure Resource Manager operations (storage + Cosmos DB accounts)
    IStaticWebsiteRepository: Blob data plane for the $web container
    IDocumentRepository: Cosmos DB data plane (document upserts)
"""

from abc import ABC, abstractmethod
from typing import Any, Dict, List, Optional

from core.models import ProvisioningState, ResourceDescriptor


# ============================================================================
# ABSTRACT BASE CLASSES - Enforce exact signatures
# ============================================================================

class IControlPlaneRepository(ABC):
    """
    Control plane interface with EXACT method signatures.

    Account creates take a ResourceDescriptor; everything else addresses
    resources by (resource_group, account_name).
    """

    # ------------------------------------------------------------------
    # Storage account
    # ------------------------------------------------------------------

    @abstractmethod
    def storage_account_exists(self, resource_group: str, account_name: str) -> bool:
        """Check whether a storage account exists in the resource group"""
        pass

    @abstractmethod
    def create_storage_account(self, descriptor: ResourceDescriptor, sku: str, kind: str) -> None:
        """Create a storage account and wait for the create to complete"""
        pass

    @abstractmethod
    def get_storage_provisioning_state(self, resource_group: str, account_name: str) -> ProvisioningState:
        """Current provisioning state of a storage account"""
        pass

    @abstractmethod
    def get_storage_account_key(self, resource_group: str, account_name: str) -> str:
        """Primary access key of a storage account"""
        pass

    @abstractmethod
    def get_web_endpoint(self, resource_group: str, account_name: str) -> str:
        """Static website URL (primaryEndpoints.web)"""
        pass

    # ------------------------------------------------------------------
    # Cosmos DB account
    # ------------------------------------------------------------------

    @abstractmethod
    def cosmos_account_exists(self, resource_group: str, account_name: str) -> bool:
        """Check whether a Cosmos DB account exists in the resource group"""
        pass

    @abstractmethod
    def create_cosmos_account(self, descriptor: ResourceDescriptor,
                              failover_priority: int = 0, zone_redundant: bool = False) -> None:
        """Start creating a Cosmos DB account - returns WITHOUT waiting"""
        pass

    @abstractmethod
    def get_cosmos_provisioning_state(self, resource_group: str, account_name: str) -> ProvisioningState:
        """Current provisioning state of a Cosmos DB account"""
        pass

    @abstractmethod
    def create_sql_database(self, resource_group: str, account_name: str, database_name: str) -> None:
        """Create a SQL API database (waits for the long-running operation)"""
        pass

    @abstractmethod
    def create_sql_container(self, resource_group: str, account_name: str, database_name: str,
                             container_name: str, partition_key_path: str) -> None:
        """Create a SQL API container (waits for the long-running operation)"""
        pass

    @abstractmethod
    def get_document_endpoint(self, resource_group: str, account_name: str) -> str:
        """Cosmos DB document endpoint URL"""
        pass

    @abstractmethod
    def get_primary_key(self, resource_group: str, account_name: str) -> str:
        """Cosmos DB primary master key"""
        pass


class IStaticWebsiteRepository(ABC):
    """
    Static website storage interface.
    """

    @abstractmethod
    def enable_static_website(self, index_document: str, error_document: str) -> None:
        """Turn on static website hosting for the account"""
        pass

    @abstractmethod
    def upload_file(self, blob_path: str, data: bytes, content_type: str) -> Dict[str, Any]:
        """Upload one file to the website container, overwriting"""
        pass

    @abstractmethod
    def list_files(self, prefix: str = "") -> List[str]:
        """List blob names in the website container"""
        pass


class IDocumentRepository(ABC):
    """
    Document store interface (one container).
    """

    @abstractmethod
    def upsert_document(self, document: Dict[str, Any]) -> Dict[str, Any]:
        """Insert or replace a document by id"""
        pass

    @abstractmethod
    def count_documents(self, partition_key: Optional[str] = None) -> int:
        """Count documents, optionally within one partition"""
        pass


__all__ = [
    'IControlPlaneRepository',
    'IStaticWebsiteRepository',
    'IDocumentRepository',
]
