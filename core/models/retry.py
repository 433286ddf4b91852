"""
Retry Models - Policy and per-attempt records.

Exports:
    RetryPolicy: Immutable retry configuration supplied per call
    AttemptRecord: Ephemeral record of one attempt (never persisted)
"""

from dataclasses import dataclass
from typing import List, Optional

from pydantic import BaseModel, ConfigDict, Field

from .enums import AttemptOutcome


class RetryPolicy(BaseModel):
    """
    Bounded exponential backoff policy.

    Delay before attempt k+1 is initial_delay_seconds * backoff_multiplier**(k-1).
    jitter_ratio adds up to that fraction of each delay at random; with the
    default of 0.0 the sequence is fully deterministic.
    """

    model_config = ConfigDict(frozen=True)

    max_attempts: int = Field(default=5, ge=1, description="Total attempts including the first")
    initial_delay_seconds: float = Field(default=30.0, ge=0, description="Delay before the second attempt")
    backoff_multiplier: float = Field(default=2.0, ge=1.0, description="Factor applied after each failure")
    jitter_ratio: float = Field(default=0.0, ge=0.0, le=1.0, description="Max random extra delay as a fraction")

    def delays(self) -> List[float]:
        """Base (jitter-free) delays between attempts, max_attempts - 1 entries."""
        return [
            self.initial_delay_seconds * (self.backoff_multiplier ** i)
            for i in range(self.max_attempts - 1)
        ]


@dataclass
class AttemptRecord:
    """One attempt inside a retry invocation."""
    attempt_number: int
    outcome: AttemptOutcome
    error: Optional[str] = None
    delay_before_next_seconds: Optional[float] = None

    def to_dict(self) -> dict:
        """Convert to dictionary for logging."""
        return {
            'attempt_number': self.attempt_number,
            'outcome': self.outcome.value,
            'error': self.error,
            'delay_before_next_seconds': self.delay_before_next_seconds,
        }
