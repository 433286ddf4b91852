"""
Resource Provisioner - idempotent account creation.

Issues create requests for the storage account and the Cosmos DB account
and exposes the follow-up lookups the deployment needs. Creating a
resource that already exists is a no-op reported as created=False, so a
re-run with the same name suffix never issues a second create.

Storage account creation blocks until Azure reports the account created.
Cosmos DB account creation returns as soon as the request is accepted;
readiness is the ReadinessPoller's job.

Exports:
    ResourceProvisioner: Provisioning operations over IControlPlaneRepository
"""

from typing import Callable, Optional

from config import AppConfig, get_config
from core.models import ProvisioningState, ProvisionResult, ResourceDescriptor, ResourceKind
from exceptions import ContractViolationError, ResourceAlreadyExistsError
from infrastructure.interface_repository import IControlPlaneRepository, IStaticWebsiteRepository
from util_logger import LoggerFactory, ComponentType

logger = LoggerFactory.create_logger(ComponentType.SERVICE, "ResourceProvisioner")

WebsiteFactory = Callable[[str, Optional[str]], IStaticWebsiteRepository]


def _require_kind(descriptor: ResourceDescriptor, kind: ResourceKind) -> None:
    if descriptor.kind != kind:
        raise ContractViolationError(
            f"Expected a {kind.value} descriptor, got {descriptor.kind.value} ('{descriptor.name}')"
        )


class ResourceProvisioner:
    """
    Provisioning operations for storage and Cosmos DB accounts.

    Args:
        control_plane: Resource Manager repository
        config: Application configuration (defaults to get_config())
        website_factory: Builds a website repository from (account_name, account_key)
        strict: Raise ResourceAlreadyExistsError instead of the idempotent no-op

    Usage:
        provisioner = ResourceProvisioner(RepositoryFactory.create_control_plane_repository())
        result = provisioner.provision(cosmos_descriptor)
        if not result.created:
            print("reusing existing account")
    """

    def __init__(
        self,
        control_plane: IControlPlaneRepository,
        config: Optional[AppConfig] = None,
        website_factory: Optional[WebsiteFactory] = None,
        strict: bool = False
    ):
        self.control_plane = control_plane
        self.config = config or get_config()
        self.strict = strict
        if website_factory is None:
            from infrastructure import RepositoryFactory
            website_factory = RepositoryFactory.create_website_repository
        self._website_factory = website_factory

    # ========================================================================
    # PROVISION
    # ========================================================================

    def exists(self, descriptor: ResourceDescriptor) -> bool:
        if descriptor.kind == ResourceKind.STORAGE:
            return self.control_plane.storage_account_exists(descriptor.resource_group, descriptor.name)
        return self.control_plane.cosmos_account_exists(descriptor.resource_group, descriptor.name)

    def provision(self, descriptor: ResourceDescriptor) -> ProvisionResult:
        """
        Create the resource unless it already exists.

        Returns:
            ProvisionResult with created=False when the resource was already there

        Raises:
            ResourceAlreadyExistsError: Resource exists and strict mode is on
        """
        if self.exists(descriptor):
            if self.strict:
                raise ResourceAlreadyExistsError(descriptor.name, descriptor.kind.value)
            logger.info(
                f"♻️ {descriptor.kind.value} '{descriptor.name}' already exists - skipping create",
                extra={'custom_dimensions': {'resource_id': descriptor.resource_id}}
            )
            return ProvisionResult(
                descriptor=descriptor,
                created=False,
                state=self.read_state(descriptor)
            )

        if descriptor.kind == ResourceKind.STORAGE:
            self.control_plane.create_storage_account(
                descriptor,
                sku=self.config.storage.sku,
                kind=self.config.storage.kind
            )
            state = ProvisioningState.SUCCEEDED
        else:
            self.control_plane.create_cosmos_account(
                descriptor,
                failover_priority=self.config.cosmos.failover_priority,
                zone_redundant=self.config.cosmos.zone_redundant
            )
            state = ProvisioningState.PENDING

        logger.info(
            f"✅ Create issued for {descriptor.kind.value} '{descriptor.name}'",
            extra={'custom_dimensions': {'resource_id': descriptor.resource_id, 'state': state.value}}
        )
        return ProvisionResult(descriptor=descriptor, created=True, state=state)

    def read_state(self, descriptor: ResourceDescriptor) -> ProvisioningState:
        """
        Current provisioning state as reported by the control plane.

        An account left behind by an interrupted earlier run can still be
        Creating or Failed, so existing storage accounts are read too.
        """
        if descriptor.kind == ResourceKind.STORAGE:
            return self.control_plane.get_storage_provisioning_state(descriptor.resource_group, descriptor.name)
        return self.control_plane.get_cosmos_provisioning_state(descriptor.resource_group, descriptor.name)

    # ========================================================================
    # STORAGE FOLLOW-UPS
    # ========================================================================

    def enable_static_website(self, descriptor: ResourceDescriptor) -> IStaticWebsiteRepository:
        """
        Turn on static website hosting and return the website repository.
        """
        _require_kind(descriptor, ResourceKind.STORAGE)
        account_key = self.control_plane.get_storage_account_key(descriptor.resource_group, descriptor.name)
        website = self._website_factory(descriptor.name, account_key)
        website.enable_static_website(
            self.config.storage.index_document,
            self.config.storage.error_document
        )
        return website

    def get_web_endpoint(self, descriptor: ResourceDescriptor) -> str:
        _require_kind(descriptor, ResourceKind.STORAGE)
        return self.control_plane.get_web_endpoint(descriptor.resource_group, descriptor.name)

    # ========================================================================
    # COSMOS DB FOLLOW-UPS
    # ========================================================================

    def create_sql_database(self, descriptor: ResourceDescriptor, database_name: str) -> None:
        _require_kind(descriptor, ResourceKind.DATABASE)
        self.control_plane.create_sql_database(descriptor.resource_group, descriptor.name, database_name)

    def create_sql_container(self, descriptor: ResourceDescriptor, database_name: str,
                             container_name: str, partition_key_path: str) -> None:
        _require_kind(descriptor, ResourceKind.DATABASE)
        self.control_plane.create_sql_container(
            descriptor.resource_group,
            descriptor.name,
            database_name,
            container_name,
            partition_key_path
        )

    def get_document_endpoint(self, descriptor: ResourceDescriptor) -> str:
        _require_kind(descriptor, ResourceKind.DATABASE)
        return self.control_plane.get_document_endpoint(descriptor.resource_group, descriptor.name)

    def get_primary_key(self, descriptor: ResourceDescriptor) -> str:
        _require_kind(descriptor, ResourceKind.DATABASE)
        return self.control_plane.get_primary_key(descriptor.resource_group, descriptor.name)
