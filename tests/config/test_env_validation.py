"""
Environment variable validation tests.

Tests regex patterns for the Azure target, naming, timing and search API validators.
"""

import logging

import pytest

from config.env_validation import (
    ENV_VAR_RULES,
    EnvVarRule,
    ValidationError,
    get_validation_summary,
    log_validation_results,
    validate_environment,
    validate_single_var,
)

VALID_SUBSCRIPTION = "0b1c2d3e-4f50-6172-8394-a5b6c7d8e9f0"


class TestSubscriptionValidation:
    """AZURE_SUBSCRIPTION_ID is required and must be a GUID."""

    rule = ENV_VAR_RULES["AZURE_SUBSCRIPTION_ID"]

    def test_guid_accepted(self, monkeypatch):
        monkeypatch.setenv("AZURE_SUBSCRIPTION_ID", VALID_SUBSCRIPTION)
        assert validate_single_var("AZURE_SUBSCRIPTION_ID", self.rule) is None

    def test_uppercase_guid_accepted(self, monkeypatch):
        monkeypatch.setenv("AZURE_SUBSCRIPTION_ID", VALID_SUBSCRIPTION.upper())
        assert validate_single_var("AZURE_SUBSCRIPTION_ID", self.rule) is None

    def test_missing_is_error(self, clean_env):
        result = validate_single_var("AZURE_SUBSCRIPTION_ID", self.rule)
        assert result.severity == "error"
        assert result.message == "Required environment variable not set"

    @pytest.mark.parametrize("value", ["your-subscription-id", "1234", "  "])
    def test_placeholder_rejected(self, monkeypatch, value):
        monkeypatch.setenv("AZURE_SUBSCRIPTION_ID", value)
        result = validate_single_var("AZURE_SUBSCRIPTION_ID", self.rule)
        assert result is not None
        assert result.severity == "error"

    def test_value_masked_in_output(self, monkeypatch):
        monkeypatch.setenv("AZURE_SUBSCRIPTION_ID", "not-a-guid")
        result = validate_single_var("AZURE_SUBSCRIPTION_ID", self.rule)
        assert result.to_dict()["current_value"] == "***MASKED***"


class TestNameSuffixValidation:
    """RESOURCE_NAME_SUFFIX keeps account names within Azure limits."""

    rule = ENV_VAR_RULES["RESOURCE_NAME_SUFFIX"]

    @pytest.mark.parametrize("value", ["abc", "a1b2c3", "123"])
    def test_valid(self, monkeypatch, value):
        monkeypatch.setenv("RESOURCE_NAME_SUFFIX", value)
        assert validate_single_var("RESOURCE_NAME_SUFFIX", self.rule) is None

    @pytest.mark.parametrize("value", ["ab", "abcdefg", "ABC", "a-b"])
    def test_invalid(self, monkeypatch, value):
        monkeypatch.setenv("RESOURCE_NAME_SUFFIX", value)
        assert validate_single_var("RESOURCE_NAME_SUFFIX", self.rule) is not None

    def test_unset_is_silent(self, clean_env):
        assert validate_single_var("RESOURCE_NAME_SUFFIX", self.rule) is None


class TestTimingValidation:
    @pytest.mark.parametrize("var,value", [
        ("POLL_INTERVAL_SECONDS", "30"),
        ("POLL_MAX_WAIT_SECONDS", "3600"),
        ("POLL_MAX_WAIT_SECONDS", "none"),
        ("POLL_MAX_WAIT_SECONDS", "Unbounded"),
        ("SETTLE_DELAY_SECONDS", "0"),
        ("SETTLE_DELAY_SECONDS", "180.5"),
        ("RETRY_MAX_ATTEMPTS", "5"),
        ("RETRY_BACKOFF_MULTIPLIER", "2.0"),
        ("RETRY_JITTER_RATIO", "0.25"),
        ("RETRY_JITTER_RATIO", "1"),
    ])
    def test_valid(self, monkeypatch, var, value):
        monkeypatch.setenv(var, value)
        assert validate_single_var(var, ENV_VAR_RULES[var]) is None

    @pytest.mark.parametrize("var,value", [
        ("POLL_INTERVAL_SECONDS", "0"),
        ("POLL_INTERVAL_SECONDS", "-5"),
        ("POLL_MAX_WAIT_SECONDS", "forever"),
        ("RETRY_MAX_ATTEMPTS", "0"),
        ("RETRY_MAX_ATTEMPTS", "three"),
        ("RETRY_JITTER_RATIO", "1.5"),
    ])
    def test_invalid(self, monkeypatch, var, value):
        monkeypatch.setenv(var, value)
        result = validate_single_var(var, ENV_VAR_RULES[var])
        assert result is not None
        assert result.severity == "error"


class TestCosmosValidation:
    @pytest.mark.parametrize("value", ["/genre", "/a/b"])
    def test_partition_key_accepted(self, monkeypatch, value):
        monkeypatch.setenv("COSMOS_PARTITION_KEY", value)
        assert validate_single_var("COSMOS_PARTITION_KEY", ENV_VAR_RULES["COSMOS_PARTITION_KEY"]) is None

    @pytest.mark.parametrize("value", ["genre", "/", "/ge nre"])
    def test_partition_key_rejected(self, monkeypatch, value):
        monkeypatch.setenv("COSMOS_PARTITION_KEY", value)
        assert validate_single_var("COSMOS_PARTITION_KEY", ENV_VAR_RULES["COSMOS_PARTITION_KEY"]) is not None

    @pytest.mark.parametrize("value", ["Standard_LRS", "Standard_RAGRS", "Premium_ZRS"])
    def test_storage_sku_accepted(self, monkeypatch, value):
        monkeypatch.setenv("STORAGE_SKU", value)
        assert validate_single_var("STORAGE_SKU", ENV_VAR_RULES["STORAGE_SKU"]) is None

    def test_storage_sku_rejected(self, monkeypatch):
        monkeypatch.setenv("STORAGE_SKU", "standard_lrs")
        assert validate_single_var("STORAGE_SKU", ENV_VAR_RULES["STORAGE_SKU"]) is not None


class TestSearchApiValidation:
    def test_https_url_accepted(self, monkeypatch):
        monkeypatch.setenv("SEARCH_API_URL", "https://myapim.azure-api.net/movies/search")
        assert validate_single_var("SEARCH_API_URL", ENV_VAR_RULES["SEARCH_API_URL"]) is None

    def test_http_url_rejected(self, monkeypatch):
        monkeypatch.setenv("SEARCH_API_URL", "http://myapim.azure-api.net/movies/search")
        assert validate_single_var("SEARCH_API_URL", ENV_VAR_RULES["SEARCH_API_URL"]) is not None

    def test_key_masked(self, monkeypatch):
        monkeypatch.setenv("SEARCH_API_KEY", "has space")
        result = validate_single_var("SEARCH_API_KEY", ENV_VAR_RULES["SEARCH_API_KEY"])
        assert result.to_dict()["current_value"] == "***MASKED***"


class TestEnvironmentValidation:
    """ENVIRONMENT must be one of dev, qa, uat, test, staging, prod."""

    rule = ENV_VAR_RULES["ENVIRONMENT"]

    @pytest.mark.parametrize("value", ["dev", "qa", "uat", "test", "staging", "prod", "production"])
    def test_valid_environments_accepted(self, monkeypatch, value):
        monkeypatch.setenv("ENVIRONMENT", value)
        assert validate_single_var("ENVIRONMENT", self.rule) is None

    @pytest.mark.parametrize("value", ["development", "local"])
    def test_invalid_environments_rejected(self, monkeypatch, value):
        monkeypatch.setenv("ENVIRONMENT", value)
        assert validate_single_var("ENVIRONMENT", self.rule) is not None


class TestDefaultWarnings:
    def test_unset_optional_var_warns(self, clean_env):
        result = validate_single_var("AZURE_LOCATION", ENV_VAR_RULES["AZURE_LOCATION"])
        assert result.severity == "warning"
        assert "eastus" in result.expected_pattern

    def test_warnings_can_be_suppressed(self, clean_env):
        assert validate_single_var(
            "AZURE_LOCATION", ENV_VAR_RULES["AZURE_LOCATION"], include_warnings=False
        ) is None

    def test_custom_rule(self, monkeypatch):
        import re

        rule = EnvVarRule(
            pattern=re.compile(r"^x+$"), pattern_description="x's", required=True,
            fix_suggestion="Use x", example="xxx",
        )
        monkeypatch.setenv("CUSTOM_VAR", "y")
        result = validate_single_var("CUSTOM_VAR", rule)
        assert isinstance(result, ValidationError)
        assert result.fix_suggestion == "Use x. Example: xxx"


class TestValidationSummary:
    def test_clean_environment_reports_missing_subscription(self, clean_env):
        summary = get_validation_summary()
        assert summary["valid"] is False
        assert summary["required_vars"]["missing"] == ["AZURE_SUBSCRIPTION_ID"]
        assert summary["error_count"] == 1
        assert summary["warning_count"] > 0

    def test_minimal_valid_environment(self, clean_env):
        clean_env.setenv("AZURE_SUBSCRIPTION_ID", VALID_SUBSCRIPTION)
        summary = get_validation_summary(include_warnings=False)
        assert summary["valid"] is True
        assert summary["warnings"] == []

    def test_validate_environment_custom_rules(self, clean_env):
        assert validate_environment(rules={}) == []


class TestLogValidationResults:
    LOGGER = logging.getLogger("tests.env_validation")

    def test_missing_subscription_logged_as_error(self, clean_env, caplog):
        with caplog.at_level(logging.INFO, logger=self.LOGGER.name):
            assert log_validation_results(self.LOGGER) is False

        errors = [r.getMessage() for r in caplog.records if r.levelno == logging.ERROR]
        assert any("AZURE_SUBSCRIPTION_ID" in message for message in errors)
        assert any("STARTUP_FAILED" in message for message in errors)

    def test_defaults_logged_as_warnings(self, clean_env, caplog):
        clean_env.setenv("AZURE_SUBSCRIPTION_ID", VALID_SUBSCRIPTION)
        with caplog.at_level(logging.INFO, logger=self.LOGGER.name):
            assert log_validation_results(self.LOGGER) is True

        levels = {r.levelno for r in caplog.records}
        assert logging.ERROR not in levels
        assert logging.WARNING in levels
        assert "passed" in caplog.records[-1].getMessage()
