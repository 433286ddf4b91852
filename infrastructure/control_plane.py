"""
Azure Control Plane Repository Implementation.

Resource Manager operations for the two accounts a deployment needs:
a StorageV2 account (static website) and a Cosmos DB SQL API account.

Key Features:
    - Existence checks used by the idempotent provisioner
    - Storage account create (waits for the long-running operation)
    - Cosmos DB account create (returns immediately; readiness is polled)
    - Provisioning state reads normalised to ProvisioningState
    - SQL database / container creates
    - Endpoint and key lookups

Exports:
    AzureControlPlaneRepository: Storage + Cosmos DB management repository
"""

import threading
from typing import Optional

from azure.core.exceptions import ResourceNotFoundError as AzureResourceNotFoundError
from azure.identity import DefaultAzureCredential
from azure.mgmt.cosmosdb import CosmosDBManagementClient
from azure.mgmt.cosmosdb.models import (
    ContainerPartitionKey,
    DatabaseAccountCreateUpdateParameters,
    Location,
    SqlContainerCreateUpdateParameters,
    SqlContainerResource,
    SqlDatabaseCreateUpdateParameters,
    SqlDatabaseResource,
)
from azure.mgmt.storage import StorageManagementClient
from azure.mgmt.storage.models import Sku, StorageAccountCreateParameters

from core.models import ProvisioningState, ResourceDescriptor
from exceptions import ConfigurationError, ResourceNotFoundError
from .interface_repository import IControlPlaneRepository
from util_logger import LoggerFactory, ComponentType

logger = LoggerFactory.create_logger(ComponentType.REPOSITORY, "AzureControlPlaneRepository")


class AzureControlPlaneRepository(IControlPlaneRepository):
    """
    Azure Resource Manager repository for storage and Cosmos DB accounts.

    Follows existing repository patterns:
    - Singleton for credential and client reuse (via instance())
    - DefaultAzureCredential for seamless auth across environments
    - Structured logging with resource names in extras
    - Missing resources surface as exceptions.ResourceNotFoundError

    Example:
        from infrastructure import RepositoryFactory

        control_plane = RepositoryFactory.create_control_plane_repository()
        control_plane.create_cosmos_account(descriptor)
        state = control_plane.get_cosmos_provisioning_state("my-rg", "moviedatabase1a2b3c")
    """

    _instance: Optional['AzureControlPlaneRepository'] = None
    _lock = threading.Lock()

    def __init__(self, subscription_id: Optional[str] = None, credential=None):
        """
        Create management clients.

        Args:
            subscription_id: Azure subscription (defaults to config)
            credential: Token credential (defaults to DefaultAzureCredential)
        """
        logger.info("🏭 Initializing AzureControlPlaneRepository")

        if subscription_id is None:
            from config import get_config
            config = get_config()
            if not config.subscription_configured:
                raise ConfigurationError(
                    "AZURE_SUBSCRIPTION_ID not configured. "
                    "Set this environment variable to provision resources."
                )
            subscription_id = config.subscription_id

        self.subscription_id = subscription_id

        logger.info("🔐 Creating DefaultAzureCredential for Resource Manager")
        self.credential = credential or DefaultAzureCredential()

        self.storage_client = StorageManagementClient(
            credential=self.credential,
            subscription_id=self.subscription_id
        )
        self.cosmos_client = CosmosDBManagementClient(
            credential=self.credential,
            subscription_id=self.subscription_id
        )

        logger.info("✅ AzureControlPlaneRepository initialized")

    @classmethod
    def instance(cls) -> 'AzureControlPlaneRepository':
        """Get singleton instance."""
        if cls._instance is None:
            with cls._lock:
                if cls._instance is None:
                    cls._instance = cls()
        return cls._instance

    # ========================================================================
    # STORAGE ACCOUNT
    # ========================================================================

    def storage_account_exists(self, resource_group: str, account_name: str) -> bool:
        try:
            self.storage_client.storage_accounts.get_properties(resource_group, account_name)
            return True
        except AzureResourceNotFoundError:
            return False

    def create_storage_account(self, descriptor: ResourceDescriptor, sku: str, kind: str) -> None:
        """
        Create a storage account and block until Azure reports it created.

        Args:
            descriptor: Storage account descriptor
            sku: SKU name, e.g. Standard_LRS
            kind: Account kind, e.g. StorageV2
        """
        logger.info(
            f"🚀 Creating storage account: {descriptor.name}",
            extra={
                'resource_group': descriptor.resource_group,
                'account_name': descriptor.name,
                'sku': sku,
                'kind': kind,
            }
        )

        try:
            poller = self.storage_client.storage_accounts.begin_create(
                descriptor.resource_group,
                descriptor.name,
                StorageAccountCreateParameters(
                    sku=Sku(name=sku),
                    kind=kind,
                    location=descriptor.region,
                )
            )
            account = poller.result()
        except Exception as e:
            logger.error(
                f"❌ Failed to create storage account {descriptor.name}: {e}",
                extra={
                    'error_source': 'infrastructure',
                    'account_name': descriptor.name,
                    'error_type': type(e).__name__
                }
            )
            raise

        logger.info(
            f"✅ Storage account created: {descriptor.name}",
            extra={'account_name': descriptor.name, 'provisioning_state': str(account.provisioning_state)}
        )

    def get_storage_provisioning_state(self, resource_group: str, account_name: str) -> ProvisioningState:
        """
        Read the storage account's provisioning state.

        An account that is not visible yet reads as PENDING.
        """
        try:
            account = self.storage_client.storage_accounts.get_properties(resource_group, account_name)
        except AzureResourceNotFoundError:
            logger.debug(f"Storage account {account_name} not visible yet")
            return ProvisioningState.PENDING

        raw = account.provisioning_state
        state = ProvisioningState.from_azure(raw)
        logger.debug(f"Storage account {account_name} state: {raw} -> {state.value}")
        return state

    def get_storage_account_key(self, resource_group: str, account_name: str) -> str:
        try:
            keys = self.storage_client.storage_accounts.list_keys(resource_group, account_name)
        except AzureResourceNotFoundError:
            raise ResourceNotFoundError(f"Storage account '{account_name}' not found in '{resource_group}'")
        return keys.keys[0].value

    def get_web_endpoint(self, resource_group: str, account_name: str) -> str:
        try:
            account = self.storage_client.storage_accounts.get_properties(resource_group, account_name)
        except AzureResourceNotFoundError:
            raise ResourceNotFoundError(f"Storage account '{account_name}' not found in '{resource_group}'")

        endpoints = account.primary_endpoints
        if endpoints is None or not endpoints.web:
            raise ResourceNotFoundError(
                f"Storage account '{account_name}' has no web endpoint (static website disabled?)"
            )
        return endpoints.web

    # ========================================================================
    # COSMOS DB ACCOUNT
    # ========================================================================

    def cosmos_account_exists(self, resource_group: str, account_name: str) -> bool:
        try:
            self.cosmos_client.database_accounts.get(resource_group, account_name)
            return True
        except AzureResourceNotFoundError:
            return False

    def create_cosmos_account(self, descriptor: ResourceDescriptor,
                              failover_priority: int = 0, zone_redundant: bool = False) -> None:
        """
        Start creating a Cosmos DB SQL API account.

        Does NOT wait for the long-running operation: account creation
        takes minutes and readiness is tracked by polling
        get_cosmos_provisioning_state().
        """
        logger.info(
            f"🚀 Creating Cosmos DB account: {descriptor.name}",
            extra={
                'resource_group': descriptor.resource_group,
                'account_name': descriptor.name,
                'location': descriptor.region,
            }
        )

        parameters = DatabaseAccountCreateUpdateParameters(
            location=descriptor.region,
            kind="GlobalDocumentDB",
            database_account_offer_type="Standard",
            locations=[
                Location(
                    location_name=descriptor.region,
                    failover_priority=failover_priority,
                    is_zone_redundant=zone_redundant,
                )
            ],
        )

        try:
            self.cosmos_client.database_accounts.begin_create_or_update(
                descriptor.resource_group,
                descriptor.name,
                parameters
            )
        except Exception as e:
            logger.error(
                f"❌ Failed to start Cosmos DB account create {descriptor.name}: {e}",
                extra={
                    'error_source': 'infrastructure',
                    'account_name': descriptor.name,
                    'error_type': type(e).__name__
                }
            )
            raise

        logger.info(f"⏳ Cosmos DB account create accepted: {descriptor.name}")

    def get_cosmos_provisioning_state(self, resource_group: str, account_name: str) -> ProvisioningState:
        """
        Read the account's provisioning state.

        An account that is not visible yet (create accepted, not listed)
        reads as PENDING.
        """
        try:
            account = self.cosmos_client.database_accounts.get(resource_group, account_name)
        except AzureResourceNotFoundError:
            logger.debug(f"Cosmos DB account {account_name} not visible yet")
            return ProvisioningState.PENDING

        raw = account.provisioning_state
        state = ProvisioningState.from_azure(raw)
        logger.debug(f"Cosmos DB account {account_name} state: {raw} -> {state.value}")
        return state

    def create_sql_database(self, resource_group: str, account_name: str, database_name: str) -> None:
        logger.info(
            f"📁 Creating SQL database: {database_name}",
            extra={'account_name': account_name, 'database_name': database_name}
        )

        poller = self.cosmos_client.sql_resources.begin_create_update_sql_database(
            resource_group,
            account_name,
            database_name,
            SqlDatabaseCreateUpdateParameters(
                resource=SqlDatabaseResource(id=database_name),
                options={},
            )
        )
        poller.result()

        logger.info(f"✅ SQL database created: {database_name}")

    def create_sql_container(self, resource_group: str, account_name: str, database_name: str,
                             container_name: str, partition_key_path: str) -> None:
        logger.info(
            f"📦 Creating SQL container: {database_name}/{container_name}",
            extra={
                'account_name': account_name,
                'database_name': database_name,
                'container_name': container_name,
                'partition_key_path': partition_key_path,
            }
        )

        poller = self.cosmos_client.sql_resources.begin_create_update_sql_container(
            resource_group,
            account_name,
            database_name,
            container_name,
            SqlContainerCreateUpdateParameters(
                resource=SqlContainerResource(
                    id=container_name,
                    partition_key=ContainerPartitionKey(paths=[partition_key_path], kind="Hash"),
                ),
                options={},
            )
        )
        poller.result()

        logger.info(f"✅ SQL container created: {database_name}/{container_name}")

    def get_document_endpoint(self, resource_group: str, account_name: str) -> str:
        try:
            account = self.cosmos_client.database_accounts.get(resource_group, account_name)
        except AzureResourceNotFoundError:
            raise ResourceNotFoundError(f"Cosmos DB account '{account_name}' not found in '{resource_group}'")
        return account.document_endpoint

    def get_primary_key(self, resource_group: str, account_name: str) -> str:
        try:
            keys = self.cosmos_client.database_accounts.list_keys(resource_group, account_name)
        except AzureResourceNotFoundError:
            raise ResourceNotFoundError(f"Cosmos DB account '{account_name}' not found in '{resource_group}'")
        return keys.primary_master_key
