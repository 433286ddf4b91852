"""
Provisioning Configuration - readiness polling and retry timings.

Exports:
    ProvisioningConfig: Poll interval, deadline, settle delay, retry policy values
"""

import os
from typing import Optional

from pydantic import BaseModel, Field

from .defaults import ProvisioningDefaults


def _optional_float(var_name: str, default: Optional[float]) -> Optional[float]:
    """Read a float env var where '0', 'none' or '' mean no limit."""
    raw = os.environ.get(var_name)
    if raw is None:
        return default
    if raw.strip().lower() in ("", "0", "none", "unbounded"):
        return None
    return float(raw)


class ProvisioningConfig(BaseModel):
    """
    Timing configuration for readiness polling and sub-resource retries.

    Environment Variables:
        POLL_INTERVAL_SECONDS        - Fixed interval between state reads (default: 30)
        POLL_MAX_WAIT_SECONDS        - Readiness deadline; 0/none = unbounded (default: 3600)
        SETTLE_DELAY_SECONDS         - Extra wait after Succeeded (default: 180)
        RETRY_MAX_ATTEMPTS           - Attempts per sub-resource call (default: 5)
        RETRY_INITIAL_DELAY_SECONDS  - First backoff delay (default: 30)
        RETRY_BACKOFF_MULTIPLIER     - Delay multiplier (default: 2.0)
        RETRY_JITTER_RATIO           - Random extra delay fraction (default: 0.0)
    """

    poll_interval_seconds: float = Field(
        default=ProvisioningDefaults.POLL_INTERVAL_SECONDS,
        gt=0,
        description="Fixed delay between provisioning state reads"
    )

    poll_max_wait_seconds: Optional[float] = Field(
        default=ProvisioningDefaults.POLL_MAX_WAIT_SECONDS,
        gt=0,
        description="Readiness deadline; None waits indefinitely"
    )

    settle_delay_seconds: float = Field(
        default=ProvisioningDefaults.SETTLE_DELAY_SECONDS,
        ge=0,
        description="Extra wait after the account reports Succeeded"
    )

    retry_max_attempts: int = Field(
        default=ProvisioningDefaults.RETRY_MAX_ATTEMPTS,
        ge=1,
        le=20,
        description="Maximum attempts for database/container creation"
    )

    retry_initial_delay_seconds: float = Field(
        default=ProvisioningDefaults.RETRY_INITIAL_DELAY_SECONDS,
        ge=0,
        description="Delay before the second attempt"
    )

    retry_backoff_multiplier: float = Field(
        default=ProvisioningDefaults.RETRY_BACKOFF_MULTIPLIER,
        ge=1.0,
        description="Multiplier applied to the delay after each failure"
    )

    retry_jitter_ratio: float = Field(
        default=ProvisioningDefaults.RETRY_JITTER_RATIO,
        ge=0.0,
        le=1.0,
        description="Upper bound of random extra delay as a fraction of the delay"
    )

    @classmethod
    def from_environment(cls):
        """Load provisioning timings from environment variables."""
        return cls(
            poll_interval_seconds=float(os.environ.get(
                "POLL_INTERVAL_SECONDS", ProvisioningDefaults.POLL_INTERVAL_SECONDS)),
            poll_max_wait_seconds=_optional_float(
                "POLL_MAX_WAIT_SECONDS", ProvisioningDefaults.POLL_MAX_WAIT_SECONDS),
            settle_delay_seconds=float(os.environ.get(
                "SETTLE_DELAY_SECONDS", ProvisioningDefaults.SETTLE_DELAY_SECONDS)),
            retry_max_attempts=int(os.environ.get(
                "RETRY_MAX_ATTEMPTS", ProvisioningDefaults.RETRY_MAX_ATTEMPTS)),
            retry_initial_delay_seconds=float(os.environ.get(
                "RETRY_INITIAL_DELAY_SECONDS", ProvisioningDefaults.RETRY_INITIAL_DELAY_SECONDS)),
            retry_backoff_multiplier=float(os.environ.get(
                "RETRY_BACKOFF_MULTIPLIER", ProvisioningDefaults.RETRY_BACKOFF_MULTIPLIER)),
            retry_jitter_ratio=float(os.environ.get(
                "RETRY_JITTER_RATIO", ProvisioningDefaults.RETRY_JITTER_RATIO)),
        )

    def retry_policy(self):
        """Build the RetryPolicy used for sub-resource creation."""
        from core.models.retry import RetryPolicy

        return RetryPolicy(
            max_attempts=self.retry_max_attempts,
            initial_delay_seconds=self.retry_initial_delay_seconds,
            backoff_multiplier=self.retry_backoff_multiplier,
            jitter_ratio=self.retry_jitter_ratio,
        )

    def debug_dict(self) -> dict:
        """Return debug-friendly configuration."""
        return self.model_dump()
