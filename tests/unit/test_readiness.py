"""
ReadinessPoller tests.

The fake clock advances only when the poller sleeps, so deadlines are exact.
"""

import pytest

from core.logic.readiness import ReadinessPoller, await_ready
from core.models import ProvisioningState
from exceptions import ProvisioningTimeoutError

PENDING = ProvisioningState.PENDING
IN_PROGRESS = ProvisioningState.IN_PROGRESS
SUCCEEDED = ProvisioningState.SUCCEEDED
FAILED = ProvisioningState.FAILED


class StateSequence:
    """State reader returning a scripted sequence; the last state repeats."""

    def __init__(self, *states):
        self.states = list(states)
        self.reads = []

    def __call__(self, resource_id):
        self.reads.append(resource_id)
        return self.states[min(len(self.reads) - 1, len(self.states) - 1)]


def _poller(reader, fake_time):
    return ReadinessPoller(reader, sleep=fake_time.sleep, clock=fake_time.clock)


class TestAwaitReady:
    def test_immediately_ready_never_sleeps(self, fake_time):
        reader = StateSequence(SUCCEEDED)
        poller = _poller(reader, fake_time)

        assert poller.await_ready("rg/database/acct", poll_interval=30) is SUCCEEDED
        assert fake_time.sleeps == []
        assert poller.poll_count == 1

    def test_polls_until_succeeded(self, fake_time):
        reader = StateSequence(PENDING, IN_PROGRESS, IN_PROGRESS, SUCCEEDED)
        poller = _poller(reader, fake_time)

        assert poller.await_ready("rg/database/acct", poll_interval=30) is SUCCEEDED
        assert fake_time.sleeps == [30, 30, 30]
        assert poller.poll_count == 4
        assert reader.reads == ["rg/database/acct"] * 4

    def test_failed_stops_polling_and_is_returned(self, fake_time):
        reader = StateSequence(IN_PROGRESS, FAILED, SUCCEEDED)
        poller = _poller(reader, fake_time)

        assert poller.await_ready("rg/database/acct", poll_interval=10) is FAILED
        assert len(reader.reads) == 2

    def test_custom_terminal_state(self, fake_time):
        reader = StateSequence(PENDING, IN_PROGRESS)
        state = _poller(reader, fake_time).await_ready(
            "acct", poll_interval=5, terminal_states=[IN_PROGRESS]
        )
        assert state is IN_PROGRESS

    def test_unbounded_wait_keeps_polling(self, fake_time):
        reader = StateSequence(*([IN_PROGRESS] * 200), SUCCEEDED)
        state = _poller(reader, fake_time).await_ready("acct", poll_interval=30, max_wait_seconds=None)
        assert state is SUCCEEDED
        assert len(fake_time.sleeps) == 200


class TestAwaitReadyTimeout:
    def test_deadline_raises_with_last_state(self, fake_time):
        reader = StateSequence(IN_PROGRESS)
        poller = _poller(reader, fake_time)

        with pytest.raises(ProvisioningTimeoutError) as exc_info:
            poller.await_ready("rg/database/acct", poll_interval=30, max_wait_seconds=60)

        error = exc_info.value
        assert error.resource_id == "rg/database/acct"
        assert error.last_state == "in_progress"
        assert error.waited_seconds == 60
        assert error.polls == 3
        assert fake_time.sleeps == [30, 30]

    def test_max_polls_raises(self, fake_time):
        reader = StateSequence(PENDING)
        with pytest.raises(ProvisioningTimeoutError) as exc_info:
            _poller(reader, fake_time).await_ready("acct", poll_interval=1, max_polls=4)
        assert exc_info.value.polls == 4
        assert len(reader.reads) == 4

    def test_terminal_state_on_last_allowed_poll_wins(self, fake_time):
        reader = StateSequence(PENDING, PENDING, SUCCEEDED)
        state = _poller(reader, fake_time).await_ready("acct", poll_interval=30, max_polls=3)
        assert state is SUCCEEDED


class TestAwaitReadyFunction:
    def test_wrapper(self, fake_time):
        reader = StateSequence(PENDING, SUCCEEDED)
        state = await_ready("acct", reader, poll_interval=15, sleep=fake_time.sleep)
        assert state is SUCCEEDED
        assert fake_time.sleeps == [15]
