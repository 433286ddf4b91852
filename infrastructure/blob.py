# ============================================================================
# STATIC WEBSITE BLOB REPOSITORY
# ============================================================================
# STATUS: Infrastructure - Azure Blob Storage repository
# PURPOSE: Static website hosting switch and uploads to the $web container
# EXPORTS: StaticWebsiteRepository
# INTERFACES: IStaticWebsiteRepository for dependency injection
# DEPENDENCIES: azure-storage-blob, azure-identity, config
# PATTERNS: Repository, cached container client, account key or DefaultAzureCredential
# ENTRY_POINTS: RepositoryFactory.create_website_repository()
# ============================================================================

"""
Static Website Blob Repository

Wraps the blob data plane of the storage account that hosts the
MovieFinder page. Two things happen here:

1. Static website hosting is switched on (index + 404 documents).
2. Rendered site files are uploaded into the special "$web" container.

Authentication:
    The deployment reads the account key through the control plane right
    after creating the account, so uploads work before any data-plane RBAC
    role assignment has propagated. When no key is given the repository
    falls back to DefaultAzureCredential.

Usage:
    from infrastructure import RepositoryFactory

    website = RepositoryFactory.create_website_repository(account_name, account_key)
    website.enable_static_website("index.html", "404.html")
    website.upload_file("index.html", html_bytes, "text/html")
"""

# ============================================================================
# IMPORTS - Top of file for fail-fast behavior
# ============================================================================

from typing import Any, Dict, List, Optional

# Azure SDK imports - These will fail fast if not installed
from azure.storage.blob import BlobServiceClient, ContainerClient, ContentSettings, StaticWebsite
from azure.identity import DefaultAzureCredential

from config.defaults import StorageDefaults
from .interface_repository import IStaticWebsiteRepository
from util_logger import LoggerFactory, ComponentType

logger = LoggerFactory.create_logger(ComponentType.REPOSITORY, __name__)


# ============================================================================
# STATIC WEBSITE REPOSITORY IMPLEMENTATION
# ============================================================================

class StaticWebsiteRepository(IStaticWebsiteRepository):
    """
    Blob repository bound to one storage account's website container.

    Args:
        account_name: Storage account name
        account_key: Shared key; DefaultAzureCredential is used when omitted
        web_container: Website container (always "$web" on Azure)
        blob_service: Pre-built BlobServiceClient (tests)
    """

    def __init__(self, account_name: str, account_key: Optional[str] = None,
                 web_container: str = StorageDefaults.WEB_CONTAINER,
                 blob_service: Optional[BlobServiceClient] = None):
        self.storage_account = account_name
        self.account_url = f"https://{account_name}.blob.core.windows.net"
        self.web_container = web_container

        if blob_service is not None:
            self.blob_service = blob_service
        elif account_key:
            logger.info(f"Initializing StaticWebsiteRepository with account key for: {account_name}")
            self.blob_service = BlobServiceClient(account_url=self.account_url, credential=account_key)
        else:
            logger.info(f"Initializing StaticWebsiteRepository with DefaultAzureCredential for: {account_name}")
            self.blob_service = BlobServiceClient(
                account_url=self.account_url,
                credential=DefaultAzureCredential()
            )

        self._container_client: Optional[ContainerClient] = None

    def _get_container_client(self) -> ContainerClient:
        """Cached client for the website container."""
        if self._container_client is None:
            self._container_client = self.blob_service.get_container_client(self.web_container)
        return self._container_client

    # ========================================================================
    # STATIC WEBSITE OPERATIONS
    # ========================================================================

    def enable_static_website(self, index_document: str, error_document: str) -> None:
        """
        Enable static website hosting.

        Azure creates the $web container as a side effect.
        """
        logger.info(
            f"🌐 Enabling static website on {self.storage_account}",
            extra={'index_document': index_document, 'error_document': error_document}
        )
        try:
            self.blob_service.set_service_properties(
                static_website=StaticWebsite(
                    enabled=True,
                    index_document=index_document,
                    error_document404_path=error_document,
                )
            )
        except Exception as e:
            logger.error(f"❌ Failed to enable static website on {self.storage_account}: {e}")
            raise
        logger.info(f"✅ Static website enabled: {self.storage_account}")

    def upload_file(self, blob_path: str, data: bytes, content_type: str) -> Dict[str, Any]:
        """
        Upload one file to the website container.

        Args:
            blob_path: Path inside $web (e.g. "index.html")
            data: File content
            content_type: MIME type served to browsers

        Returns:
            Dict with container, blob_path and size
        """
        try:
            blob_client = self._get_container_client().get_blob_client(blob_path)
            logger.debug(f"Uploading {self.web_container}/{blob_path} ({content_type})")
            blob_client.upload_blob(
                data,
                overwrite=True,
                content_settings=ContentSettings(content_type=content_type),
            )
        except Exception as e:
            logger.error(f"Failed to upload {self.web_container}/{blob_path}: {e}")
            raise

        result = {
            'container': self.web_container,
            'blob_path': blob_path,
            'size': len(data),
            'content_type': content_type,
        }
        logger.info(f"✅ Uploaded: {self.web_container}/{blob_path} ({len(data)} bytes)")
        return result

    def list_files(self, prefix: str = "") -> List[str]:
        container_client = self._get_container_client()
        return [blob.name for blob in container_client.list_blobs(name_starts_with=prefix or None)]
