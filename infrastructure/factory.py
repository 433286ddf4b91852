# ============================================================================
# REPOSITORY FACTORY
# ============================================================================
# STATUS: Infrastructure - Central factory for all repository instances
# PURPOSE: Single creation point for control plane, website, document and HTTP clients
# EXPORTS: RepositoryFactory (static class with factory methods for all repository types)
# INTERFACES: Creates IControlPlaneRepository, IStaticWebsiteRepository, IDocumentRepository
# DEPENDENCIES: infrastructure.*, config
# PATTERNS: Factory pattern, Dependency Injection, Singleton (control plane)
# ============================================================================

"""
Repository Factory - Central Creation Point

Services never construct Azure clients directly; they receive them from
this factory (or a test double implementing the same interface).

Imports are deferred inside each method so importing the factory does not
pull in every Azure SDK.
"""

from typing import Optional

from util_logger import LoggerFactory, ComponentType

logger = LoggerFactory.create_logger(ComponentType.FACTORY, "RepositoryFactory")


# ============================================================================
# REPOSITORY FACTORY - Central creation point
# ============================================================================

class RepositoryFactory:
    """
    Factory for creating repository instances.

    Design Philosophy:
    - Single factory for all repository types
    - Configuration-driven defaults
    - Consistent interface across all storage types
    """

    @staticmethod
    def create_control_plane_repository(subscription_id: Optional[str] = None) -> 'AzureControlPlaneRepository':
        """
        Create the Resource Manager repository.

        Args:
            subscription_id: Explicit subscription; the singleton (from config) is used when omitted

        Returns:
            AzureControlPlaneRepository instance
        """
        from .control_plane import AzureControlPlaneRepository

        logger.info("🏭 Creating control plane repository")
        if subscription_id:
            return AzureControlPlaneRepository(subscription_id=subscription_id)
        return AzureControlPlaneRepository.instance()

    @staticmethod
    def create_website_repository(
        storage_account: str,
        account_key: Optional[str] = None
    ) -> 'StaticWebsiteRepository':
        """
        Create the static website blob repository for one storage account.

        Args:
            storage_account: Storage account name
            account_key: Shared key; DefaultAzureCredential is used when omitted

        Example:
            website = RepositoryFactory.create_website_repository(
                "moviedatabasesa1a2b3c",
                account_key=control_plane.get_storage_account_key(rg, "moviedatabasesa1a2b3c")
            )
        """
        from .blob import StaticWebsiteRepository
        from config import get_config

        logger.info(f"🏭 Creating website repository for: {storage_account}")
        return StaticWebsiteRepository(
            account_name=storage_account,
            account_key=account_key,
            web_container=get_config().storage.web_container,
        )

    @staticmethod
    def create_document_repository(
        endpoint: str,
        key: str,
        database_name: Optional[str] = None,
        container_name: Optional[str] = None
    ) -> 'CosmosDocumentRepository':
        """
        Create the Cosmos DB document repository.

        Database and container names default to config (moviedb / movies).
        """
        from .cosmos import CosmosDocumentRepository
        from config import get_config

        cosmos = get_config().cosmos
        logger.info("🏭 Creating document repository")
        return CosmosDocumentRepository(
            endpoint=endpoint,
            key=key,
            database_name=database_name or cosmos.database_name,
            container_name=container_name or cosmos.container_name,
        )

    @staticmethod
    def create_dataset_downloader() -> 'DatasetDownloader':
        from .dataset import DatasetDownloader
        from config import get_config

        dataset = get_config().dataset
        return DatasetDownloader(url=dataset.url, timeout=dataset.download_timeout_seconds)

    @staticmethod
    def create_search_client(settings) -> 'MovieSearchClient':
        """Search client for explicit SiteSettings."""
        from .search_client import MovieSearchClient
        from config import get_config

        return MovieSearchClient(settings, timeout=get_config().site.search_timeout_seconds)


__all__ = ['RepositoryFactory']
