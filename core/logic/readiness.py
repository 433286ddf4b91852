"""
Readiness Poller - blocking wait over an asynchronous provisioning operation.

Polls a resource's provisioning state at a fixed interval. SUCCEEDED and
FAILED both end the wait and are returned as-is; the caller decides what
a FAILED resource means. The poller itself is read-only.

An optional deadline (max_wait_seconds) and poll budget (max_polls) turn
an indefinite wait into a ProvisioningTimeoutError. Passing None for both
keeps polling until a terminal state.

Exports:
    ReadinessPoller: Poller bound to a state reader
    await_ready: One-shot convenience wrapper
"""

import time
from typing import Callable, Iterable, Optional

from exceptions import ProvisioningTimeoutError
from util_logger import LoggerFactory, ComponentType

from ..models.enums import ProvisioningState
from .transitions import is_provisioning_terminal

logger = LoggerFactory.create_logger(ComponentType.CORE, "ReadinessPoller")

StateReader = Callable[[str], ProvisioningState]


class ReadinessPoller:
    """
    Waits for a resource to reach a terminal provisioning state.

    Example:
        poller = ReadinessPoller(control_plane.get_cosmos_provisioning_state)
        state = poller.await_ready("moviedatabase1a2b3c", poll_interval=30)
        if state is ProvisioningState.FAILED:
            ...
    """

    def __init__(
        self,
        read_state: StateReader,
        sleep: Callable[[float], None] = time.sleep,
        clock: Callable[[], float] = time.monotonic
    ):
        self._read_state = read_state
        self._sleep = sleep
        self._clock = clock
        self.poll_count = 0

    def await_ready(
        self,
        resource_id: str,
        poll_interval: float,
        terminal_states: Optional[Iterable[ProvisioningState]] = None,
        max_wait_seconds: Optional[float] = None,
        max_polls: Optional[int] = None
    ) -> ProvisioningState:
        """
        Block until the resource reports a terminal state.

        Args:
            resource_id: Identifier passed to the state reader
            poll_interval: Fixed seconds between polls
            terminal_states: Extra states that end the wait (SUCCEEDED and FAILED always do)
            max_wait_seconds: Deadline measured from the first poll (None = no deadline)
            max_polls: Maximum number of state reads (None = no limit)

        Returns:
            The terminal ProvisioningState observed

        Raises:
            ProvisioningTimeoutError: If the deadline or poll budget runs out first
        """
        logger.info(
            f"⏳ Waiting for {resource_id} to be ready",
            extra={'custom_dimensions': {
                'resource_id': resource_id,
                'poll_interval_seconds': poll_interval,
                'max_wait_seconds': max_wait_seconds,
                'max_polls': max_polls,
            }}
        )

        self.poll_count = 0
        start_time = self._clock()

        while True:
            state = self._read_state(resource_id)
            self.poll_count += 1

            if is_provisioning_terminal(state, terminal_states):
                logger.info(
                    f"🏁 {resource_id} reached {state.value} after {self.poll_count} poll(s)",
                    extra={'custom_dimensions': {
                        'resource_id': resource_id,
                        'state': state.value,
                        'polls': self.poll_count,
                    }}
                )
                return state

            elapsed = self._clock() - start_time
            out_of_polls = max_polls is not None and self.poll_count >= max_polls
            out_of_time = max_wait_seconds is not None and elapsed >= max_wait_seconds
            if out_of_polls or out_of_time:
                logger.error(
                    f"⏰ {resource_id} not ready after {int(elapsed)}s, last state {state.value}",
                    extra={'custom_dimensions': {
                        'error_source': 'core',
                        'resource_id': resource_id,
                        'last_state': state.value,
                        'polls': self.poll_count,
                    }}
                )
                raise ProvisioningTimeoutError(
                    resource_id=resource_id,
                    last_state=state.value,
                    waited_seconds=elapsed,
                    polls=self.poll_count
                )

            logger.debug(
                f"⏳ {resource_id} status: {state.value}, "
                f"elapsed: {int(elapsed)}s, waiting {poll_interval}s..."
            )
            self._sleep(poll_interval)


def await_ready(
    resource_id: str,
    read_state: StateReader,
    poll_interval: float,
    terminal_states: Optional[Iterable[ProvisioningState]] = None,
    max_wait_seconds: Optional[float] = None,
    max_polls: Optional[int] = None,
    sleep: Callable[[float], None] = time.sleep
) -> ProvisioningState:
    """One-shot wrapper around ReadinessPoller.await_ready."""
    return ReadinessPoller(read_state, sleep=sleep).await_ready(
        resource_id,
        poll_interval,
        terminal_states=terminal_states,
        max_wait_seconds=max_wait_seconds,
        max_polls=max_polls
    )
