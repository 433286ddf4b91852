# ============================================================================
# ENVIRONMENT VARIABLE VALIDATION
# ============================================================================
# STATUS: Configuration - Startup validation with regex patterns
# PURPOSE: Validate env vars before any Azure call to fail fast with clear error messages
# ============================================================================
"""
Environment Variable Validation Module.

Validates environment variables at startup using regex patterns to catch
configuration errors EARLY with clear, actionable error messages.

The CLI runs this before creating any Azure client, so a typo in a retry
setting fails in a second instead of after a 10 minute Cosmos DB create.

Usage:
    from config.env_validation import validate_environment, ENV_VAR_RULES

    errors = validate_environment()

    for error in errors:
        print(f"{error.var_name}: {error.message}")
        print(f"  Fix: {error.fix_suggestion}")

Example Validations:
    - AZURE_SUBSCRIPTION_ID must be a GUID
    - RESOURCE_NAME_SUFFIX must be 3-6 lowercase alphanumerics
    - COSMOS_PARTITION_KEY must start with '/'
    - SEARCH_API_URL must be https

Exports:
    ENV_VAR_RULES: Dict of all validation rules
    ValidationError: Dataclass for validation errors
    validate_environment: Main validation function
    validate_single_var: Validate one variable
"""

import logging
import os
import re
from dataclasses import dataclass
from typing import Dict, List, Optional, Pattern, Any


# ============================================================================
# VALIDATION ERROR
# ============================================================================

@dataclass
class ValidationError:
    """Result of a failed environment variable validation."""
    var_name: str
    message: str
    current_value: Optional[str]
    expected_pattern: str
    fix_suggestion: str
    severity: str = "error"  # error, warning

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dict for JSON serialization."""
        return {
            "var_name": self.var_name,
            "message": self.message,
            "current_value": self._mask_sensitive(self.current_value),
            "expected_pattern": self.expected_pattern,
            "fix_suggestion": self.fix_suggestion,
            "severity": self.severity,
        }

    def _mask_sensitive(self, value: Optional[str]) -> Optional[str]:
        """Mask potentially sensitive values."""
        if value is None:
            return None
        sensitive_keywords = ["password", "secret", "key", "token", "subscription"]
        var_lower = self.var_name.lower()
        if any(kw in var_lower for kw in sensitive_keywords):
            return "***MASKED***"
        if len(value) > 30:
            return f"{value[:20]}...({len(value)} chars)"
        return value


# ============================================================================
# VALIDATION RULE DEFINITION
# ============================================================================

@dataclass
class EnvVarRule:
    """
    Validation rule for an environment variable.

    Attributes:
        pattern: Compiled regex pattern for validation
        pattern_description: Human-readable description of expected format
        required: Whether this variable must be set
        fix_suggestion: How to fix if validation fails
        example: Example valid value
        allow_empty: Allow empty string (default False)
        default_value: Default value used if not set (for warning messages)
        warn_on_default: Emit warning when using default value
    """
    pattern: Pattern
    pattern_description: str
    required: bool
    fix_suggestion: str
    example: str
    allow_empty: bool = False
    default_value: Optional[str] = None
    warn_on_default: bool = True


# ============================================================================
# VALIDATION RULES - Single source of truth for env var formats
# ============================================================================

_GUID = re.compile(r"^[0-9a-f]{8}-[0-9a-f]{4}-[0-9a-f]{4}-[0-9a-f]{4}-[0-9a-f]{12}$", re.IGNORECASE)
_AZURE_REGION = re.compile(r"^[a-z][a-z0-9]{2,30}$")
_NAME_SUFFIX = re.compile(r"^[a-z0-9]{3,6}$")
_COSMOS_NAME = re.compile(r"^[A-Za-z0-9][A-Za-z0-9_-]{0,254}$")
_PARTITION_KEY = re.compile(r"^/[A-Za-z0-9_]+(/[A-Za-z0-9_]+)*$")
_STORAGE_SKU = re.compile(r"^(Standard|Premium)_(LRS|GRS|RAGRS|ZRS|GZRS|RAGZRS)$")
_HTTPS_URL = re.compile(r"^https://[a-z0-9][a-z0-9.-]+\.[a-z]{2,}.*$", re.IGNORECASE)
_POSITIVE_INT = re.compile(r"^[1-9][0-9]*$")
_NON_NEGATIVE_NUMBER = re.compile(r"^[0-9]+(\.[0-9]+)?$")
_RATIO = re.compile(r"^(0(\.[0-9]+)?|1(\.0+)?)$")
_UNBOUNDED_OR_NUMBER = re.compile(r"^([0-9]+(\.[0-9]+)?|none|unbounded)$", re.IGNORECASE)
_BOOLEAN = re.compile(r"^(true|false|1|0|yes|no)$", re.IGNORECASE)
_ENVIRONMENT = re.compile(r"^(dev|qa|uat|test|staging|prod|production)$")
_LOG_LEVEL = re.compile(r"^(DEBUG|INFO|WARNING|ERROR|CRITICAL)$", re.IGNORECASE)


ENV_VAR_RULES: Dict[str, EnvVarRule] = {
    # =========================================================================
    # AZURE TARGET (Critical)
    # =========================================================================
    "AZURE_SUBSCRIPTION_ID": EnvVarRule(
        pattern=_GUID,
        pattern_description="Subscription GUID (8-4-4-4-12 hex)",
        required=True,
        fix_suggestion="Run 'az account show --query id -o tsv' and export the value",
        example="00000000-0000-0000-0000-000000000000",
    ),

    "AZURE_LOCATION": EnvVarRule(
        pattern=_AZURE_REGION,
        pattern_description="Lowercase Azure region name without spaces",
        required=False,
        fix_suggestion="Use the region's programmatic name, e.g. 'eastus' not 'East US'",
        example="eastus",
        default_value="eastus",
    ),

    "RESOURCE_NAME_SUFFIX": EnvVarRule(
        pattern=_NAME_SUFFIX,
        pattern_description="3-6 lowercase letters or digits",
        required=False,
        fix_suggestion="Leave unset for a random suffix, or reuse the suffix of an earlier run",
        example="a1b2c3",
        warn_on_default=False,
    ),

    # =========================================================================
    # STORAGE / COSMOS DB
    # =========================================================================
    "STORAGE_SKU": EnvVarRule(
        pattern=_STORAGE_SKU,
        pattern_description="Storage SKU such as Standard_LRS",
        required=False,
        fix_suggestion="Use Standard_LRS unless geo-redundancy is needed",
        example="Standard_LRS",
        default_value="Standard_LRS",
    ),

    "COSMOS_DATABASE_NAME": EnvVarRule(
        pattern=_COSMOS_NAME,
        pattern_description="Letters, digits, underscore or hyphen",
        required=False,
        fix_suggestion="Use a simple name like 'moviedb'",
        example="moviedb",
        default_value="moviedb",
    ),

    "COSMOS_CONTAINER_NAME": EnvVarRule(
        pattern=_COSMOS_NAME,
        pattern_description="Letters, digits, underscore or hyphen",
        required=False,
        fix_suggestion="Use a simple name like 'movies'",
        example="movies",
        default_value="movies",
    ),

    "COSMOS_PARTITION_KEY": EnvVarRule(
        pattern=_PARTITION_KEY,
        pattern_description="Path starting with '/', e.g. /genre",
        required=False,
        fix_suggestion="Prefix the document property with '/'",
        example="/genre",
        default_value="/genre",
    ),

    # =========================================================================
    # READINESS / RETRY TIMINGS
    # =========================================================================
    "POLL_INTERVAL_SECONDS": EnvVarRule(
        pattern=_POSITIVE_INT,
        pattern_description="Positive integer seconds",
        required=False,
        fix_suggestion="Use a value like 30",
        example="30",
        default_value="30",
    ),

    "POLL_MAX_WAIT_SECONDS": EnvVarRule(
        pattern=_UNBOUNDED_OR_NUMBER,
        pattern_description="Seconds, or 0/none for no deadline",
        required=False,
        fix_suggestion="Use a value like 3600, or 'none' to wait indefinitely",
        example="3600",
        default_value="3600",
    ),

    "SETTLE_DELAY_SECONDS": EnvVarRule(
        pattern=_NON_NEGATIVE_NUMBER,
        pattern_description="Non-negative seconds",
        required=False,
        fix_suggestion="Use a value like 180, or 0 to skip",
        example="180",
        default_value="180",
    ),

    "RETRY_MAX_ATTEMPTS": EnvVarRule(
        pattern=_POSITIVE_INT,
        pattern_description="Positive integer (1 = no retries)",
        required=False,
        fix_suggestion="Use a value like 5",
        example="5",
        default_value="5",
    ),

    "RETRY_INITIAL_DELAY_SECONDS": EnvVarRule(
        pattern=_NON_NEGATIVE_NUMBER,
        pattern_description="Non-negative seconds",
        required=False,
        fix_suggestion="Use a value like 30",
        example="30",
        default_value="30",
    ),

    "RETRY_BACKOFF_MULTIPLIER": EnvVarRule(
        pattern=_NON_NEGATIVE_NUMBER,
        pattern_description="Number >= 1",
        required=False,
        fix_suggestion="Use 2 for doubling delays",
        example="2",
        default_value="2.0",
    ),

    "RETRY_JITTER_RATIO": EnvVarRule(
        pattern=_RATIO,
        pattern_description="Number between 0 and 1",
        required=False,
        fix_suggestion="Use 0 for deterministic delays or e.g. 0.2 for up to 20% extra",
        example="0.2",
        default_value="0.0",
        warn_on_default=False,
    ),

    # =========================================================================
    # DATASET / SITE
    # =========================================================================
    "DATASET_URL": EnvVarRule(
        pattern=_HTTPS_URL,
        pattern_description="https URL of the movie CSV",
        required=False,
        fix_suggestion="Point at a raw CSV file served over https",
        example="https://raw.githubusercontent.com/org/repo/main/IMDB-Movie-Data.csv",
        warn_on_default=False,
    ),

    "SEARCH_API_URL": EnvVarRule(
        pattern=_HTTPS_URL,
        pattern_description="https URL of the movie search endpoint",
        required=False,
        fix_suggestion="Use the API Management operation URL",
        example="https://myapim.azure-api.net/movies/search",
        warn_on_default=False,
    ),

    "SEARCH_API_KEY": EnvVarRule(
        pattern=re.compile(r"^\S+$"),
        pattern_description="Subscription key without whitespace",
        required=False,
        fix_suggestion="Copy the primary key of the API Management subscription",
        example="0123456789abcdef0123456789abcdef",
        warn_on_default=False,
    ),

    # =========================================================================
    # APPLICATION
    # =========================================================================
    "ENVIRONMENT": EnvVarRule(
        pattern=_ENVIRONMENT,
        pattern_description="One of dev, qa, uat, test, staging, prod, production",
        required=False,
        fix_suggestion="Use 'dev' for personal deployments",
        example="dev",
        default_value="dev",
    ),

    "LOG_LEVEL": EnvVarRule(
        pattern=_LOG_LEVEL,
        pattern_description="DEBUG, INFO, WARNING, ERROR or CRITICAL",
        required=False,
        fix_suggestion="Use INFO",
        example="INFO",
        default_value="INFO",
        warn_on_default=False,
    ),

    "DEBUG_MODE": EnvVarRule(
        pattern=_BOOLEAN,
        pattern_description="Boolean (true/false)",
        required=False,
        fix_suggestion="Use 'true' or 'false'",
        example="false",
        default_value="false",
        warn_on_default=False,
    ),
}


# ============================================================================
# VALIDATION FUNCTIONS
# ============================================================================

def validate_single_var(
    var_name: str,
    rule: EnvVarRule,
    include_warnings: bool = True
) -> Optional[ValidationError]:
    """
    Validate a single environment variable against its rule.

    Args:
        var_name: Environment variable name
        rule: Validation rule to apply
        include_warnings: Whether to return warnings for vars using defaults

    Returns:
        ValidationError if validation fails or warning if using default, None if passes
    """
    value = os.environ.get(var_name)

    if rule.required and (value is None or (not rule.allow_empty and value.strip() == "")):
        return ValidationError(
            var_name=var_name,
            message="Required environment variable not set",
            current_value=value,
            expected_pattern=rule.pattern_description,
            fix_suggestion=f"{rule.fix_suggestion}. Example: {rule.example}",
            severity="error",
        )

    if value is None or value == "":
        if include_warnings and not rule.required and rule.warn_on_default and rule.default_value is not None:
            return ValidationError(
                var_name=var_name,
                message="Not set, using default value",
                current_value=None,
                expected_pattern=f"Default: {rule.default_value}",
                fix_suggestion=f"Set explicitly or accept default. {rule.fix_suggestion}",
                severity="warning",
            )
        return None

    if not rule.pattern.match(value):
        return ValidationError(
            var_name=var_name,
            message="Invalid format",
            current_value=value,
            expected_pattern=rule.pattern_description,
            fix_suggestion=f"{rule.fix_suggestion}. Example: {rule.example}",
            severity="error",
        )

    return None


def validate_environment(
    rules: Optional[Dict[str, EnvVarRule]] = None,
    include_warnings: bool = True
) -> List[ValidationError]:
    """
    Validate all environment variables against their rules.

    Args:
        rules: Optional custom rules dict (defaults to ENV_VAR_RULES)
        include_warnings: Whether to include warnings for vars using defaults

    Returns:
        List of ValidationError objects (errors and optionally warnings)
    """
    if rules is None:
        rules = ENV_VAR_RULES

    results = []
    for var_name, rule in rules.items():
        result = validate_single_var(var_name, rule, include_warnings=include_warnings)
        if result:
            results.append(result)

    return results


def get_validation_summary(include_warnings: bool = True) -> Dict[str, Any]:
    """
    Get a summary of environment variable validation status.

    Returns:
        Dict with validation summary suitable for `validate-env --json`
    """
    all_results = validate_environment(include_warnings=include_warnings)

    errors = [r for r in all_results if r.severity == "error"]
    warnings = [r for r in all_results if r.severity == "warning"]

    required_vars = [name for name, rule in ENV_VAR_RULES.items() if rule.required]
    optional_vars = [name for name, rule in ENV_VAR_RULES.items() if not rule.required]

    set_required = [name for name in required_vars if os.environ.get(name)]
    missing_required = [name for name in required_vars if not os.environ.get(name)]
    set_optional = [name for name in optional_vars if os.environ.get(name)]
    using_defaults = [name for name in optional_vars if not os.environ.get(name)]

    return {
        "valid": len(errors) == 0,
        "error_count": len(errors),
        "warning_count": len(warnings),
        "required_vars": {
            "total": len(required_vars),
            "set": len(set_required),
            "missing": missing_required,
        },
        "optional_vars": {
            "total": len(optional_vars),
            "set": len(set_optional),
            "using_defaults": len(using_defaults),
        },
        "errors": [e.to_dict() for e in errors],
        "warnings": [w.to_dict() for w in warnings],
    }


def log_validation_results(logger: logging.Logger) -> bool:
    """
    Log validation results at appropriate levels.

    Logs errors at ERROR level, warnings at WARNING level.
    Returns True if no errors (warnings are OK).
    """
    all_results = validate_environment(include_warnings=True)

    errors = [r for r in all_results if r.severity == "error"]
    warnings = [r for r in all_results if r.severity == "warning"]

    def _log(level: str, msg: str):
        getattr(logger, level)(msg)

    for error in errors:
        _log("error", f"ENV VAR ERROR: {error.var_name} - {error.message}")
        _log("error", f"  Expected: {error.expected_pattern}")
        _log("error", f"  Fix: {error.fix_suggestion}")

    if warnings:
        _log("warning", f"ENV VARS: {len(warnings)} optional variables using defaults:")
        for warning in warnings:
            default_val = warning.expected_pattern.replace("Default: ", "")
            _log("warning", f"  {warning.var_name} → {default_val}")

    if errors:
        _log("error", f"❌ STARTUP_FAILED: {len(errors)} environment variable errors")
        return False
    elif warnings:
        _log("info", f"✅ Environment validation passed ({len(warnings)} vars using defaults)")
        return True
    else:
        _log("info", "✅ Environment validation passed (all vars explicitly set)")
        return True


# ============================================================================
# EXPORTS
# ============================================================================

__all__ = [
    "ENV_VAR_RULES",
    "EnvVarRule",
    "ValidationError",
    "validate_environment",
    "validate_single_var",
    "get_validation_summary",
    "log_validation_results",
]
