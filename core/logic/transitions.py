"""
State Transition Logic for Retry Invocations and Provisioning States.

Contains the rules for valid retry phase transitions and which
provisioning states end a readiness wait. Separated from the poller and
retry loop so the rules can be tested exhaustively.

Exports:
    can_retry_transition: Check if a retry phase transition is valid
    get_retry_terminal_phases: Terminal phases of a retry invocation
    is_retry_terminal: Check if a retry phase is terminal
    get_provisioning_terminal_states: Default terminal provisioning states
    is_provisioning_terminal: Check if a provisioning state is terminal

Dependencies:
    core.models.enums: RetryPhase, ProvisioningState
"""

from typing import FrozenSet, Iterable, List, Optional

from ..models.enums import ProvisioningState, RetryPhase


def can_retry_transition(current: RetryPhase, target: RetryPhase) -> bool:
    """
    Check if a retry invocation can move from current to target phase.

    Args:
        current: Current retry phase
        target: Target retry phase

    Returns:
        True if transition is valid, False otherwise
    """
    transitions = {
        RetryPhase.ATTEMPTING: [
            RetryPhase.SUCCEEDED,
            RetryPhase.BACKOFF_WAIT,
            RetryPhase.EXHAUSTED
        ],
        RetryPhase.BACKOFF_WAIT: [RetryPhase.ATTEMPTING],
        RetryPhase.SUCCEEDED: [],  # Terminal state
        RetryPhase.EXHAUSTED: []  # Terminal state
    }

    return target in transitions.get(current, [])


def get_retry_terminal_phases() -> List[RetryPhase]:
    """Get list of terminal retry phases."""
    return [RetryPhase.SUCCEEDED, RetryPhase.EXHAUSTED]


def is_retry_terminal(phase: RetryPhase) -> bool:
    """Check if retry phase is terminal."""
    return phase in get_retry_terminal_phases()


def get_provisioning_terminal_states() -> FrozenSet[ProvisioningState]:
    """States at which a readiness wait stops polling."""
    return frozenset({ProvisioningState.SUCCEEDED, ProvisioningState.FAILED})


def is_provisioning_terminal(
    state: ProvisioningState,
    terminal_states: Optional[Iterable[ProvisioningState]] = None
) -> bool:
    """
    Check if a provisioning state ends the readiness wait.

    SUCCEEDED and FAILED always end the wait, whatever the caller passes,
    so a failed resource can never be polled forever.
    """
    terminal = set(get_provisioning_terminal_states())
    if terminal_states is not None:
        terminal.update(terminal_states)
    return state in terminal
