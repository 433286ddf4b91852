"""
Error Code Definitions and Classification.

Centralized error code management for deployment failures, with retry
classification used when deciding whether a remote error is worth
another attempt.

Key Features:
    - Explicit error codes for all failure modes
    - Retry classification (PERMANENT, TRANSIENT, THROTTLING)
    - Mapping from raised exceptions to error codes

Exports:
    ErrorCode: Standardized error codes enum
    ErrorClassification: Error category enum
    is_retryable: Helper to check if error should be retried
    get_error_classification: Classification lookup
    classify_exception: Map an exception to an ErrorCode
    create_error_response: Standard error dict for CLI JSON output
"""

from enum import Enum
from typing import Dict, Any

from exceptions import (
    ConfigurationError,
    DatasetNotFoundError,
    MalformedRecordError,
    ProvisioningTimeoutError,
    ResourceAlreadyExistsError,
    ResourceNotFoundError,
    SearchNetworkError,
    TerminalProvisioningError,
    TransientRemoteError,
)


class ErrorCode(str, Enum):
    """
    Standardized error codes for deployment failures.

    These codes appear in CLI JSON output and log custom dimensions.
    """

    # Configuration (NOT RETRYABLE)
    CONFIG_ERROR = "CONFIG_ERROR"  # Missing/invalid env var or argument

    # Control plane
    PROVISIONING_FAILED = "PROVISIONING_FAILED"  # Resource reached FAILED state
    PROVISIONING_TIMEOUT = "PROVISIONING_TIMEOUT"  # Readiness deadline exceeded
    RESOURCE_EXISTS = "RESOURCE_EXISTS"  # Strict create on existing resource
    RESOURCE_NOT_FOUND = "RESOURCE_NOT_FOUND"  # Lookup on missing resource
    REMOTE_TRANSIENT = "REMOTE_TRANSIENT"  # Propagation delay, 5xx, connection reset
    THROTTLED = "THROTTLED"  # HTTP 429

    # Data
    MALFORMED_RECORD = "MALFORMED_RECORD"  # CSV row skipped
    DATASET_NOT_FOUND = "DATASET_NOT_FOUND"  # CSV missing / download failed

    # Frontend search
    NETWORK_ERROR = "NETWORK_ERROR"  # Search request failed

    UNEXPECTED_ERROR = "UNEXPECTED_ERROR"  # Anything else


class ErrorClassification(str, Enum):
    """
    Error classification for retry logic.
    """

    PERMANENT = "PERMANENT"  # Never retry
    TRANSIENT = "TRANSIENT"  # Retry with exponential backoff
    THROTTLING = "THROTTLING"  # Retry with longer delay


_ERROR_CLASSIFICATION: Dict[ErrorCode, ErrorClassification] = {
    ErrorCode.CONFIG_ERROR: ErrorClassification.PERMANENT,
    ErrorCode.PROVISIONING_FAILED: ErrorClassification.PERMANENT,
    ErrorCode.RESOURCE_EXISTS: ErrorClassification.PERMANENT,
    ErrorCode.RESOURCE_NOT_FOUND: ErrorClassification.PERMANENT,
    ErrorCode.MALFORMED_RECORD: ErrorClassification.PERMANENT,
    ErrorCode.DATASET_NOT_FOUND: ErrorClassification.PERMANENT,

    ErrorCode.PROVISIONING_TIMEOUT: ErrorClassification.TRANSIENT,
    ErrorCode.REMOTE_TRANSIENT: ErrorClassification.TRANSIENT,
    ErrorCode.NETWORK_ERROR: ErrorClassification.TRANSIENT,
    ErrorCode.UNEXPECTED_ERROR: ErrorClassification.TRANSIENT,

    ErrorCode.THROTTLED: ErrorClassification.THROTTLING,
}


def is_retryable(error_code: ErrorCode) -> bool:
    """
    Determine if an error code should trigger a retry.

    Example:
        >>> is_retryable(ErrorCode.PROVISIONING_FAILED)
        False
        >>> is_retryable(ErrorCode.REMOTE_TRANSIENT)
        True
    """
    classification = _ERROR_CLASSIFICATION.get(error_code, ErrorClassification.TRANSIENT)
    return classification != ErrorClassification.PERMANENT


def get_error_classification(error_code: ErrorCode) -> ErrorClassification:
    """Get the classification for an error code."""
    return _ERROR_CLASSIFICATION.get(error_code, ErrorClassification.TRANSIENT)


def classify_exception(error: BaseException) -> ErrorCode:
    """
    Map a raised exception to its ErrorCode.

    Azure SDK HttpResponseError is recognised by its status_code attribute
    so this module does not import azure-core.
    """
    if isinstance(error, ConfigurationError):
        return ErrorCode.CONFIG_ERROR
    if isinstance(error, TerminalProvisioningError):
        return ErrorCode.PROVISIONING_FAILED
    if isinstance(error, ProvisioningTimeoutError):
        return ErrorCode.PROVISIONING_TIMEOUT
    if isinstance(error, ResourceAlreadyExistsError):
        return ErrorCode.RESOURCE_EXISTS
    if isinstance(error, ResourceNotFoundError):
        return ErrorCode.RESOURCE_NOT_FOUND
    if isinstance(error, MalformedRecordError):
        return ErrorCode.MALFORMED_RECORD
    if isinstance(error, DatasetNotFoundError):
        return ErrorCode.DATASET_NOT_FOUND
    if isinstance(error, SearchNetworkError):
        return ErrorCode.NETWORK_ERROR
    if isinstance(error, TransientRemoteError):
        return ErrorCode.REMOTE_TRANSIENT

    status_code = getattr(error, 'status_code', None)
    if status_code == 429:
        return ErrorCode.THROTTLED
    if status_code == 404:
        return ErrorCode.RESOURCE_NOT_FOUND
    if status_code == 409:
        return ErrorCode.RESOURCE_EXISTS
    if isinstance(status_code, int) and status_code >= 500:
        return ErrorCode.REMOTE_TRANSIENT
    return ErrorCode.UNEXPECTED_ERROR


def create_error_response(
    error_code: ErrorCode,
    message: str,
    **kwargs: Any
) -> Dict[str, Any]:
    """
    Create a standardized error response dictionary.

    Example:
        >>> create_error_response(ErrorCode.CONFIG_ERROR, "AZURE_SUBSCRIPTION_ID not set")
        {'success': False, 'error': 'CONFIG_ERROR', ..., 'retryable': False}
    """
    return {
        "success": False,
        "error": error_code.value,
        "error_type": kwargs.pop("error_type", "BusinessLogicError"),
        "message": message,
        "retryable": is_retryable(error_code),
        **kwargs
    }
