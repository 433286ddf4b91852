"""
Deployment Orchestrator - end-to-end MovieFinder deployment.

Strictly sequential; each step starts only after the previous one
finished:

    1. Provision the storage account; a reused account that is not yet
       Succeeded is polled like the Cosmos DB account. Then enable static
       website hosting
    2. Provision the Cosmos DB account (create returns immediately)
    3. Poll until the account reaches a terminal state
       - FAILED  -> TerminalProvisioningError, nothing else is attempted
       - timeout -> ProvisioningTimeoutError (from the poller)
    4. Wait the settle delay
    5. Create database and container, each under the retry policy
    6. Read endpoint + key, download the dataset, import movies
    7. Render the static site and upload it to $web
    8. Return the website URL in a DeploymentResult

Blocking points (poll sleep, settle wait, retry backoff) all go through
the injected sleep callable, so tests run without real waits.

Exports:
    DeploymentOrchestrator: Runs one deployment
    DeploymentOptions: Step toggles
"""

import time
import uuid
from dataclasses import dataclass
from typing import Callable, Optional

from config import AppConfig, get_config
from core.logic import ReadinessPoller, RetryCoordinator
from core.models import (
    DeploymentResult,
    ImportSummary,
    ProvisioningState,
    ResourceDescriptor,
    ResourceKind,
)
from exceptions import TerminalProvisioningError
from infrastructure.interface_repository import IDocumentRepository
from util_logger import LoggerFactory, ComponentType

from .movie_import_service import MovieImporter
from .provisioning_service import ResourceProvisioner
from .static_site_service import StaticSiteBuilder, StaticSitePublisher

DocumentFactory = Callable[[str, str], IDocumentRepository]


@dataclass
class DeploymentOptions:
    """Which optional steps to run."""

    import_data: bool = True
    publish_site: bool = True
    name_suffix: Optional[str] = None


class DeploymentOrchestrator:
    """
    Runs a full deployment into one resource group.

    Args:
        provisioner: Resource provisioner (owns the control plane repository)
        config: Application configuration (defaults to get_config())
        document_factory: Builds a document repository from (endpoint, key)
        dataset_downloader: Object with fetch(destination) -> Path
        sleep: Blocking wait used by poller, settle delay and retries
        clock: Monotonic clock used for the readiness deadline

    Usage:
        control_plane = RepositoryFactory.create_control_plane_repository()
        orchestrator = DeploymentOrchestrator(ResourceProvisioner(control_plane))
        result = orchestrator.deploy("movie-rg")
        print(result.website_url)
    """

    def __init__(
        self,
        provisioner: ResourceProvisioner,
        config: Optional[AppConfig] = None,
        document_factory: Optional[DocumentFactory] = None,
        dataset_downloader=None,
        sleep: Callable[[float], None] = time.sleep,
        clock: Callable[[], float] = time.monotonic
    ):
        self.provisioner = provisioner
        self.config = config or get_config()
        self._document_factory = document_factory
        self._dataset_downloader = dataset_downloader
        self._sleep = sleep
        self._clock = clock
        self.logger = LoggerFactory.create_logger(ComponentType.SERVICE, "DeploymentOrchestrator")

    # ========================================================================
    # DESCRIPTORS
    # ========================================================================

    def build_descriptors(self, resource_group: str, suffix: str):
        """Storage and Cosmos DB descriptors for one run."""
        storage = ResourceDescriptor(
            name=self.config.storage_account_name(suffix),
            kind=ResourceKind.STORAGE,
            region=self.config.location,
            resource_group=resource_group,
        )
        database = ResourceDescriptor(
            name=self.config.cosmos_account_name(suffix),
            kind=ResourceKind.DATABASE,
            region=self.config.location,
            resource_group=resource_group,
        )
        return storage, database

    # ========================================================================
    # DEPLOY
    # ========================================================================

    def deploy(self, resource_group: str, options: Optional[DeploymentOptions] = None) -> DeploymentResult:
        """
        Run every deployment step in order.

        Raises:
            TerminalProvisioningError: An account ended in FAILED
            ProvisioningTimeoutError: An account not ready before the deadline
            Exception: Last error from database/container creation after retries
        """
        options = options or DeploymentOptions()
        suffix = options.name_suffix or self.config.resolve_name_suffix()
        deployment_id = uuid.uuid4().hex[:12]
        self.logger = LoggerFactory.create_with_context(
            ComponentType.SERVICE,
            f"DeploymentOrchestrator.{deployment_id}",
            deployment_id=deployment_id,
            resource_group=resource_group,
            operation="deploy",
        )

        storage, database = self.build_descriptors(resource_group, suffix)
        self.logger.info(
            f"🚀 Starting deployment into '{resource_group}' "
            f"(storage={storage.name}, cosmos={database.name})"
        )

        # Storage + static website
        storage_result = self.provisioner.provision(storage)
        if storage_result.state is not ProvisioningState.SUCCEEDED:
            self.wait_until_ready(storage)
        website = self.provisioner.enable_static_website(storage)
        website_url = self.provisioner.get_web_endpoint(storage)
        self.logger.info(f"🌐 Static website URL: {website_url}")

        # Cosmos DB account, then wait for readiness
        self.provisioner.provision(database)
        self.wait_for_database(database)

        # Dependent sub-resources
        cosmos = self.config.cosmos
        self.create_with_retry(
            f"create database {cosmos.database_name}",
            lambda: self.provisioner.create_sql_database(database, cosmos.database_name)
        )
        self.create_with_retry(
            f"create container {cosmos.database_name}/{cosmos.container_name}",
            lambda: self.provisioner.create_sql_container(
                database, cosmos.database_name, cosmos.container_name, cosmos.partition_key_path
            )
        )

        endpoint = self.provisioner.get_document_endpoint(database)

        import_summary = None
        if options.import_data:
            key = self.provisioner.get_primary_key(database)
            import_summary = self.import_movies(endpoint, key)

        uploaded = 0
        if options.publish_site:
            output_dir = self.config.site.output_dir
            StaticSiteBuilder(self.config.storage, self.config.site).build(
                output_dir, self.config.site.default_settings()
            )
            uploaded = len(StaticSitePublisher(website).publish(output_dir))

        result = DeploymentResult(
            resource_group=resource_group,
            location=self.config.location,
            storage_account=storage.name,
            cosmos_account=database.name,
            database_name=cosmos.database_name,
            container_name=cosmos.container_name,
            website_url=website_url,
            cosmos_endpoint=endpoint,
            import_summary=import_summary,
            uploaded_files=uploaded,
        )
        self.logger.info(f"🏁 Deployment complete. Website: {website_url}")
        return result

    # ========================================================================
    # STEPS
    # ========================================================================

    def wait_until_ready(self, descriptor: ResourceDescriptor) -> ProvisioningState:
        """
        Poll an account until it reaches a terminal state.

        Raises:
            TerminalProvisioningError: Account reached FAILED
        """
        provisioning = self.config.provisioning
        poller = ReadinessPoller(
            lambda _resource_id: self.provisioner.read_state(descriptor),
            sleep=self._sleep,
            clock=self._clock,
        )
        state = poller.await_ready(
            descriptor.resource_id,
            poll_interval=provisioning.poll_interval_seconds,
            max_wait_seconds=provisioning.poll_max_wait_seconds,
        )

        if state is not ProvisioningState.SUCCEEDED:
            self.logger.error(f"❌ {descriptor.kind.value} account {descriptor.name} ended in {state.value}")
            raise TerminalProvisioningError(descriptor.name, state.value)
        return state

    def wait_for_database(self, database: ResourceDescriptor) -> ProvisioningState:
        """
        Poll the Cosmos DB account until SUCCEEDED, then wait the settle delay.

        Raises:
            TerminalProvisioningError: Account reached FAILED
        """
        state = self.wait_until_ready(database)

        provisioning = self.config.provisioning
        settle = provisioning.settle_delay_seconds
        if settle > 0:
            self.logger.info(f"⏳ Waiting {settle:g}s for the account to become fully operational")
            self._sleep(settle)
        return state

    def create_with_retry(self, operation_name: str, operation: Callable[[], None]) -> RetryCoordinator:
        """Run one sub-resource create under the configured retry policy."""
        coordinator = RetryCoordinator(
            self.config.provisioning.retry_policy(),
            sleep=self._sleep,
            operation_name=operation_name,
        )
        coordinator.run(operation)
        return coordinator

    def import_movies(self, endpoint: str, key: str) -> ImportSummary:
        """Download the dataset (if needed) and upsert every valid row."""
        downloader = self._dataset_downloader
        document_factory = self._document_factory
        if downloader is None or document_factory is None:
            from infrastructure import RepositoryFactory
            downloader = downloader or RepositoryFactory.create_dataset_downloader()
            document_factory = document_factory or RepositoryFactory.create_document_repository

        csv_path = downloader.fetch(self.config.dataset.local_path)
        documents = document_factory(endpoint, key)
        return MovieImporter(documents).import_file(str(csv_path))
