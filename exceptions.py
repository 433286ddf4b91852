# ============================================================================
# EXCEPTIONS
# ============================================================================
# STATUS: Shared - used by every layer
# PURPOSE: Custom exception hierarchy for distinguishing contract violations from deployment failures
# EXPORTS: ContractViolationError, BusinessLogicError, TransientRemoteError, TerminalProvisioningError,
#          ProvisioningTimeoutError, ResourceAlreadyExistsError, ResourceNotFoundError,
#          MalformedRecordError, DatasetNotFoundError, SearchNetworkError, ConfigurationError
# DEPENDENCIES: None (standard library only)
# ============================================================================

"""
Custom Exception Hierarchy

Distinguishes between:
1. Contract Violations (programming bugs that need fixing)
2. Business Logic Failures (expected runtime issues during a deployment)
3. Configuration Errors (fatal, raised before any Azure call is made)

Retry behaviour is decided by the caller: the retry coordinator absorbs
TransientRemoteError (and SDK errors) up to the policy limit, the readiness
poller never retries a FAILED resource, and the importer skips
MalformedRecordError rows without aborting the batch.
"""

from typing import Optional


class ContractViolationError(TypeError):
    """
    Raised when component contracts are violated (programming bugs).

    These indicate:
    - Wrong types passed to functions
    - Invalid retry phase transitions
    - Interface contract violations

    These should NEVER be caught and handled - they indicate bugs
    that need to be fixed in the code.
    """
    pass


class BusinessLogicError(Exception):
    """
    Base class for expected runtime failures.

    These are normal failures that occur while talking to Azure and
    should be handled (or surfaced) without a traceback dump.
    """
    pass


class TransientRemoteError(BusinessLogicError):
    """
    Remote call failed in a way that may succeed when retried.

    Examples:
        - Cosmos DB account not yet propagated after provisioning
        - HTTP 429 / 503 from the control plane
        - Connection reset during a long-running operation
    """
    pass


class TerminalProvisioningError(BusinessLogicError):
    """
    A resource reached the FAILED provisioning state.

    The readiness poller returns the FAILED state; the orchestrator
    raises this error so no dependent operation is attempted.
    """

    def __init__(self, resource_name: str, state: str, message: Optional[str] = None):
        self.resource_name = resource_name
        self.state = state
        super().__init__(
            message or f"Resource '{resource_name}' finished provisioning in state '{state}'"
        )


class ProvisioningTimeoutError(BusinessLogicError):
    """
    Readiness polling exceeded its deadline before a terminal state.

    Carries the last observed state so the caller can tell a stuck
    provisioning apart from a resource that never appeared.
    """

    def __init__(self, resource_id: str, last_state: str, waited_seconds: float, polls: int):
        self.resource_id = resource_id
        self.last_state = last_state
        self.waited_seconds = waited_seconds
        self.polls = polls
        super().__init__(
            f"Resource '{resource_id}' not ready after {waited_seconds:.0f}s "
            f"({polls} polls). Last state: {last_state}"
        )


class ResourceAlreadyExistsError(BusinessLogicError):
    """
    Create requested for a resource that already exists.

    Only raised when the provisioner runs in strict mode; the default
    behaviour is an idempotent no-op.
    """

    def __init__(self, resource_name: str, kind: str):
        self.resource_name = resource_name
        self.kind = kind
        super().__init__(f"{kind} resource '{resource_name}' already exists")


class ResourceNotFoundError(BusinessLogicError):
    """
    Requested resource does not exist.

    Examples:
        - Cosmos DB account missing when reading keys
        - Storage account missing when enabling static website
    """
    pass


class MalformedRecordError(BusinessLogicError):
    """
    A dataset row could not be converted into a document.

    Examples:
        - Required column ("Year", "Rank", ...) missing or empty
        - Numeric column holding a non-numeric value
    """

    def __init__(self, row_number: int, reason: str):
        self.row_number = row_number
        self.reason = reason
        super().__init__(f"Row {row_number}: {reason}")


class DatasetNotFoundError(BusinessLogicError):
    """The CSV dataset could not be found or downloaded."""
    pass


class SearchNetworkError(BusinessLogicError):
    """
    Movie search request failed at the network or HTTP level.

    Surfaced to the user as a message, never as a crash.
    """

    def __init__(self, message: str, status_code: Optional[int] = None):
        self.status_code = status_code
        super().__init__(message)


class ConfigurationError(Exception):
    """
    System configuration error.

    These are fatal and indicate misconfiguration that prevents a
    deployment from starting.

    Examples:
        - AZURE_SUBSCRIPTION_ID not set
        - Storage account name longer than 24 characters
        - Search API URL that is not https
    """
    pass
