"""
Pure Enumeration Types for Core Framework.

Defines valid states for provisioned resources and retry invocations.
No business logic - pure type definitions only.

Exports:
    ResourceKind: Kind of Azure resource being provisioned
    ProvisioningState: Provider-side lifecycle status of a resource
    AttemptOutcome: Result of a single retry attempt
    RetryPhase: Phase of a retry invocation
"""

from enum import Enum


class ResourceKind(Enum):
    """
    Kinds of resources the provisioner can create.

    STORAGE hosts the static website, DATABASE holds the movie documents.
    """

    STORAGE = "storage"
    DATABASE = "database"


class ProvisioningState(Enum):
    """
    Provisioning status as reported by the Azure control plane.

    Mutated only by the provider; this tool reads it, never writes it.

    State transitions (provider side):
    - PENDING -> IN_PROGRESS -> SUCCEEDED
    - PENDING -> IN_PROGRESS -> FAILED
    """

    PENDING = "pending"
    IN_PROGRESS = "in_progress"
    SUCCEEDED = "succeeded"
    FAILED = "failed"

    @classmethod
    def from_azure(cls, raw: str) -> "ProvisioningState":
        """
        Normalise an Azure provisioningState string.

        Azure reports values such as "Creating", "Updating", "Succeeded",
        "Failed", "Canceled", "Deleting". Unknown or empty values map to
        PENDING so polling continues.
        """
        if not raw:
            return cls.PENDING
        value = raw.strip().lower()
        if value == "succeeded":
            return cls.SUCCEEDED
        if value in ("failed", "canceled", "cancelled", "deleting"):
            return cls.FAILED
        if value in ("creating", "updating", "accepted", "running", "inprogress",
                     "in_progress", "provisioning", "resolvingdns"):
            return cls.IN_PROGRESS
        return cls.PENDING


class AttemptOutcome(Enum):
    """Outcome of one attempt inside a retry invocation."""

    SUCCESS = "success"
    FAILURE = "failure"


class RetryPhase(Enum):
    """
    Phases of a single retry invocation.

    State transitions:
    - ATTEMPTING -> SUCCEEDED
    - ATTEMPTING -> BACKOFF_WAIT -> ATTEMPTING
    - ATTEMPTING -> EXHAUSTED
    """

    ATTEMPTING = "attempting"
    BACKOFF_WAIT = "backoff_wait"
    SUCCEEDED = "succeeded"
    EXHAUSTED = "exhausted"
