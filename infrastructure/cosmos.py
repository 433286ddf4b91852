"""
Cosmos DB Document Repository.

Data plane access to the movies container: one upsert per movie row.
Authentication uses the account's primary key, read from the control plane
during deployment (or passed on the command line for `import-data`).

Exports:
    CosmosDocumentRepository: Container-scoped document repository
"""

from typing import Any, Dict, Optional

from azure.cosmos import CosmosClient

from .interface_repository import IDocumentRepository
from util_logger import LoggerFactory, ComponentType

logger = LoggerFactory.create_logger(ComponentType.REPOSITORY, "CosmosDocumentRepository")


class CosmosDocumentRepository(IDocumentRepository):
    """
    Document repository bound to one Cosmos DB SQL container.

    Args:
        endpoint: Account document endpoint (https://<account>.documents.azure.com:443/)
        key: Account primary key
        database_name: SQL database (e.g. "moviedb")
        container_name: SQL container (e.g. "movies")
        client: Pre-built CosmosClient (tests)
    """

    def __init__(self, endpoint: str, key: str, database_name: str, container_name: str,
                 client: Optional[CosmosClient] = None):
        self.endpoint = endpoint
        self.database_name = database_name
        self.container_name = container_name

        logger.info(f"🌌 Connecting to Cosmos DB container {database_name}/{container_name}")
        self.client = client or CosmosClient(endpoint, credential=key)
        self.database = self.client.get_database_client(database_name)
        self.container = self.database.get_container_client(container_name)

    def upsert_document(self, document: Dict[str, Any]) -> Dict[str, Any]:
        """Insert or replace a document (matched on id + partition key)."""
        try:
            return self.container.upsert_item(body=document)
        except Exception as e:
            logger.debug(f"Upsert failed for id={document.get('id')}: {e}")
            raise

    def count_documents(self, partition_key: Optional[str] = None) -> int:
        query = "SELECT VALUE COUNT(1) FROM c"
        if partition_key is None:
            items = self.container.query_items(query=query, enable_cross_partition_query=True)
        else:
            items = self.container.query_items(query=query, partition_key=partition_key)
        return next(iter(items), 0)
