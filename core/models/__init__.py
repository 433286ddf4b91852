"""
Core Data Models Package.

Contains pure data structures without business logic.
All business logic is in the core.logic package.

Exports:
    ResourceKind, ProvisioningState, AttemptOutcome, RetryPhase: Enums
    ResourceDescriptor, ProvisionResult, DeploymentResult: Resource models
    RetryPolicy, AttemptRecord: Retry models
    MovieRecord, ImportSummary: Dataset models
    SiteSettings, MovieStats, MovieSearchResult: Frontend/search models
"""

from .enums import (
    ResourceKind,
    ProvisioningState,
    AttemptOutcome,
    RetryPhase
)

from .movie import MovieRecord, ImportSummary

from .resource import (
    ResourceDescriptor,
    ProvisionResult,
    DeploymentResult
)

from .retry import RetryPolicy, AttemptRecord

from .site import SiteSettings, MovieStats, MovieSearchResult

__all__ = [
    'ResourceKind',
    'ProvisioningState',
    'AttemptOutcome',
    'RetryPhase',
    'MovieRecord',
    'ImportSummary',
    'ResourceDescriptor',
    'ProvisionResult',
    'DeploymentResult',
    'RetryPolicy',
    'AttemptRecord',
    'SiteSettings',
    'MovieStats',
    'MovieSearchResult',
]
