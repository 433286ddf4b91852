"""
Error classification tests.
"""

import pytest

from core.errors import (
    ErrorClassification,
    ErrorCode,
    classify_exception,
    create_error_response,
    get_error_classification,
    is_retryable,
)
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


class _HttpError(Exception):
    def __init__(self, status_code):
        super().__init__(f"HTTP {status_code}")
        self.status_code = status_code


class TestClassifyException:
    @pytest.mark.parametrize("error,expected", [
        (ConfigurationError("x"), ErrorCode.CONFIG_ERROR),
        (TerminalProvisioningError("acct", "failed"), ErrorCode.PROVISIONING_FAILED),
        (ProvisioningTimeoutError("acct", "in_progress", 60, 3), ErrorCode.PROVISIONING_TIMEOUT),
        (ResourceAlreadyExistsError("acct", "storage"), ErrorCode.RESOURCE_EXISTS),
        (ResourceNotFoundError("acct"), ErrorCode.RESOURCE_NOT_FOUND),
        (MalformedRecordError(3, "Year missing"), ErrorCode.MALFORMED_RECORD),
        (DatasetNotFoundError("gone"), ErrorCode.DATASET_NOT_FOUND),
        (SearchNetworkError("down"), ErrorCode.NETWORK_ERROR),
        (TransientRemoteError("busy"), ErrorCode.REMOTE_TRANSIENT),
        (_HttpError(429), ErrorCode.THROTTLED),
        (_HttpError(404), ErrorCode.RESOURCE_NOT_FOUND),
        (_HttpError(409), ErrorCode.RESOURCE_EXISTS),
        (_HttpError(503), ErrorCode.REMOTE_TRANSIENT),
        (ValueError("boom"), ErrorCode.UNEXPECTED_ERROR),
    ])
    def test_mapping(self, error, expected):
        assert classify_exception(error) is expected


class TestRetryClassification:
    def test_every_code_is_classified(self):
        for code in ErrorCode:
            assert isinstance(get_error_classification(code), ErrorClassification)

    @pytest.mark.parametrize("code", [
        ErrorCode.CONFIG_ERROR, ErrorCode.PROVISIONING_FAILED, ErrorCode.MALFORMED_RECORD,
    ])
    def test_permanent_codes_not_retryable(self, code):
        assert is_retryable(code) is False

    @pytest.mark.parametrize("code", [ErrorCode.REMOTE_TRANSIENT, ErrorCode.THROTTLED])
    def test_transient_codes_retryable(self, code):
        assert is_retryable(code) is True


class TestErrorResponse:
    def test_shape(self):
        response = create_error_response(
            ErrorCode.PROVISIONING_FAILED, "account failed",
            error_type="TerminalProvisioningError", resource="acct",
        )
        assert response == {
            "success": False,
            "error": "PROVISIONING_FAILED",
            "error_type": "TerminalProvisioningError",
            "message": "account failed",
            "retryable": False,
            "resource": "acct",
        }

    def test_exception_messages(self):
        assert "acct" in str(TerminalProvisioningError("acct", "failed"))
        assert str(MalformedRecordError(7, "Year: missing")) == "Row 7: Year: missing"
        assert SearchNetworkError("down", status_code=502).status_code == 502
