"""
Core Business Logic Package.

Contains logic that operates on the pure data models.

Exports:
    State transitions: can_retry_transition, is_retry_terminal, is_provisioning_terminal
    Polling: ReadinessPoller, await_ready
    Retries: RetryCoordinator, retry
"""

from .transitions import (
    can_retry_transition,
    get_retry_terminal_phases,
    is_retry_terminal,
    get_provisioning_terminal_states,
    is_provisioning_terminal
)

from .readiness import ReadinessPoller, await_ready
from .retry import RetryCoordinator, retry

__all__ = [
    'can_retry_transition',
    'get_retry_terminal_phases',
    'is_retry_terminal',
    'get_provisioning_terminal_states',
    'is_provisioning_terminal',
    'ReadinessPoller',
    'await_ready',
    'RetryCoordinator',
    'retry',
]
