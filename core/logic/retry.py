"""
Retry Coordinator - bounded exponential backoff around one operation.

Used for sub-resource creation on a freshly provisioned Cosmos DB account,
where the control plane is eventually consistent and the first few calls
can fail while the account propagates.

Behaviour:
    - Attempt the operation; return its value on success.
    - On failure with attempts left: sleep the current delay, multiply the
      delay by the backoff multiplier, attempt again.
    - On the final failure: re-raise the exception from that last attempt.
    - Exceptions outside ``retry_on`` propagate immediately, recorded as
      a failed attempt that ends the run.

Every attempt re-invokes the full operation. There is no circuit breaker.

Exports:
    RetryCoordinator: Stateful coordinator exposing the attempt history
    retry: One-shot convenience wrapper
"""

import random
import time
from typing import Callable, List, Optional, Tuple, Type, TypeVar

from exceptions import ContractViolationError
from util_logger import LoggerFactory, ComponentType

from ..models.enums import AttemptOutcome, RetryPhase
from ..models.retry import AttemptRecord, RetryPolicy
from .transitions import can_retry_transition

logger = LoggerFactory.create_logger(ComponentType.CORE, "RetryCoordinator")

T = TypeVar("T")


class RetryCoordinator:
    """
    Runs an operation under a RetryPolicy and records each attempt.

    Example:
        coordinator = RetryCoordinator(RetryPolicy(max_attempts=5, initial_delay_seconds=30))
        database = coordinator.run(lambda: control_plane.create_sql_database(account, "moviedb"))
        print(coordinator.attempt_count, coordinator.total_delay_seconds)
    """

    def __init__(
        self,
        policy: RetryPolicy,
        sleep: Callable[[float], None] = time.sleep,
        retry_on: Tuple[Type[BaseException], ...] = (Exception,),
        operation_name: str = "operation",
        rng: Optional[random.Random] = None
    ):
        self.policy = policy
        self._sleep = sleep
        self._retry_on = retry_on
        self.operation_name = operation_name
        self._rng = rng or random.Random()
        self.attempts: List[AttemptRecord] = []
        self.phase = RetryPhase.ATTEMPTING

    @property
    def attempt_count(self) -> int:
        return len(self.attempts)

    @property
    def total_delay_seconds(self) -> float:
        """Sum of every backoff sleep taken during the last run."""
        return sum(a.delay_before_next_seconds or 0.0 for a in self.attempts)

    def _transition(self, target: RetryPhase) -> None:
        if not can_retry_transition(self.phase, target):
            raise ContractViolationError(
                f"Invalid retry phase transition: {self.phase.value} -> {target.value}"
            )
        self.phase = target

    def _next_delay(self, base_delay: float) -> float:
        if self.policy.jitter_ratio <= 0:
            return base_delay
        return base_delay + self._rng.uniform(0, base_delay * self.policy.jitter_ratio)

    def run(self, operation: Callable[[], T]) -> T:
        """
        Execute operation with retries.

        Args:
            operation: Zero-argument callable; its return value is passed through

        Returns:
            The operation's result from the first successful attempt

        Raises:
            The exception raised by the final attempt once max_attempts is reached,
            or any exception not listed in retry_on, immediately.
        """
        self.attempts = []
        self.phase = RetryPhase.ATTEMPTING
        max_attempts = self.policy.max_attempts
        delay = self.policy.initial_delay_seconds

        for attempt in range(1, max_attempts + 1):
            logger.info(f"🔁 Attempt {attempt} of {max_attempts}: {self.operation_name}")
            try:
                result = operation()
            except self._retry_on as e:
                if attempt >= max_attempts:
                    self.attempts.append(AttemptRecord(
                        attempt_number=attempt,
                        outcome=AttemptOutcome.FAILURE,
                        error=str(e)
                    ))
                    self._transition(RetryPhase.EXHAUSTED)
                    logger.error(
                        f"❌ {self.operation_name} failed after {max_attempts} attempts: {e}",
                        extra={'custom_dimensions': {
                            'operation': self.operation_name,
                            'attempts': max_attempts,
                            'error_type': type(e).__name__,
                        }}
                    )
                    raise

                wait = self._next_delay(delay)
                self.attempts.append(AttemptRecord(
                    attempt_number=attempt,
                    outcome=AttemptOutcome.FAILURE,
                    error=str(e),
                    delay_before_next_seconds=wait
                ))
                self._transition(RetryPhase.BACKOFF_WAIT)
                logger.warning(
                    f"⚠️ {self.operation_name} failed ({type(e).__name__}: {e}). "
                    f"Retrying in {wait:g} seconds...",
                    extra={'custom_dimensions': {
                        'operation': self.operation_name,
                        'attempt': attempt,
                        'delay_seconds': wait,
                    }}
                )
                self._sleep(wait)
                delay *= self.policy.backoff_multiplier
                self._transition(RetryPhase.ATTEMPTING)
            except Exception as e:
                self.attempts.append(AttemptRecord(
                    attempt_number=attempt,
                    outcome=AttemptOutcome.FAILURE,
                    error=str(e)
                ))
                self._transition(RetryPhase.EXHAUSTED)
                logger.error(
                    f"❌ {self.operation_name} failed with non-retryable {type(e).__name__}: {e}",
                    extra={'custom_dimensions': {
                        'operation': self.operation_name,
                        'attempts': attempt,
                        'error_type': type(e).__name__,
                    }}
                )
                raise
            else:
                self.attempts.append(AttemptRecord(
                    attempt_number=attempt,
                    outcome=AttemptOutcome.SUCCESS
                ))
                self._transition(RetryPhase.SUCCEEDED)
                logger.info(f"✅ {self.operation_name} succeeded on attempt {attempt}")
                return result

        # max_attempts >= 1 is enforced by RetryPolicy
        raise ContractViolationError("RetryCoordinator loop exited without a result")


def retry(
    operation: Callable[[], T],
    policy: RetryPolicy,
    sleep: Callable[[float], None] = time.sleep,
    retry_on: Tuple[Type[BaseException], ...] = (Exception,),
    operation_name: str = "operation"
) -> T:
    """Run operation under policy; see RetryCoordinator.run."""
    return RetryCoordinator(
        policy,
        sleep=sleep,
        retry_on=retry_on,
        operation_name=operation_name
    ).run(operation)
