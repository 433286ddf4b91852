"""
Infrastructure Package - Lazy Loading Implementation.

Provides all repository implementations with lazy loading so that
importing the package does not import every Azure SDK or read any
environment variable.

How it works:
    - __getattr__ intercepts access to repository classes
    - The actual import happens ONLY when the class is first used
    - This is typically when RepositoryFactory.create_*() is called,
      after the CLI has loaded and validated configuration

Usage:
    from infrastructure import RepositoryFactory

    control_plane = RepositoryFactory.create_control_plane_repository()
"""

from typing import TYPE_CHECKING

# For type checking only - doesn't actually import at runtime
if TYPE_CHECKING:
    from .factory import RepositoryFactory as _RepositoryFactory
    from .control_plane import AzureControlPlaneRepository as _AzureControlPlaneRepository
    from .blob import StaticWebsiteRepository as _StaticWebsiteRepository
    from .cosmos import CosmosDocumentRepository as _CosmosDocumentRepository
    from .dataset import DatasetDownloader as _DatasetDownloader
    from .search_client import MovieSearchClient as _MovieSearchClient
    from .interface_repository import (
        IControlPlaneRepository as _IControlPlaneRepository,
        IStaticWebsiteRepository as _IStaticWebsiteRepository,
        IDocumentRepository as _IDocumentRepository,
    )


def __getattr__(name: str):
    """
    Lazy import mechanism - only imports when actually accessed.
    This prevents module-level code execution until needed.
    """
    # Factory - most common import
    if name == "RepositoryFactory":
        from .factory import RepositoryFactory
        return RepositoryFactory

    # Azure repositories
    elif name == "AzureControlPlaneRepository":
        from .control_plane import AzureControlPlaneRepository
        return AzureControlPlaneRepository
    elif name == "StaticWebsiteRepository":
        from .blob import StaticWebsiteRepository
        return StaticWebsiteRepository
    elif name == "CosmosDocumentRepository":
        from .cosmos import CosmosDocumentRepository
        return CosmosDocumentRepository

    # HTTP clients
    elif name == "DatasetDownloader":
        from .dataset import DatasetDownloader
        return DatasetDownloader
    elif name == "MovieSearchClient":
        from .search_client import MovieSearchClient
        return MovieSearchClient

    # Interfaces
    elif name == "IControlPlaneRepository":
        from .interface_repository import IControlPlaneRepository
        return IControlPlaneRepository
    elif name == "IStaticWebsiteRepository":
        from .interface_repository import IStaticWebsiteRepository
        return IStaticWebsiteRepository
    elif name == "IDocumentRepository":
        from .interface_repository import IDocumentRepository
        return IDocumentRepository

    raise AttributeError(f"module {__name__!r} has no attribute {name!r}")


__all__ = [
    "RepositoryFactory",
    "AzureControlPlaneRepository",
    "StaticWebsiteRepository",
    "CosmosDocumentRepository",
    "DatasetDownloader",
    "MovieSearchClient",
    "IControlPlaneRepository",
    "IStaticWebsiteRepository",
    "IDocumentRepository",
]
