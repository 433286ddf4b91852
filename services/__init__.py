"""
Services Package - deployment business logic.

Services depend on repository interfaces (infrastructure.interface_repository)
and the pure logic in core; they never build Azure clients themselves.

Modules:
    provisioning_service: ResourceProvisioner (idempotent account creation)
    deployment_service: DeploymentOrchestrator (end-to-end sequential deploy)
    movie_import_service: MovieImporter (CSV -> Cosmos DB)
    static_site_service: StaticSiteBuilder / StaticSitePublisher
    search_service: SettingsStore, format_search_outcome
"""

from .provisioning_service import ResourceProvisioner
from .movie_import_service import MovieImporter, parse_movie_row
from .static_site_service import StaticSiteBuilder, StaticSitePublisher, guess_content_type
from .search_service import SettingsStore, format_search_outcome
from .deployment_service import DeploymentOrchestrator, DeploymentOptions

__all__ = [
    'ResourceProvisioner',
    'MovieImporter',
    'parse_movie_row',
    'StaticSiteBuilder',
    'StaticSitePublisher',
    'guess_content_type',
    'SettingsStore',
    'format_search_outcome',
    'DeploymentOrchestrator',
    'DeploymentOptions',
]
