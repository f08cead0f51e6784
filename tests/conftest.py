"""Pytest configuration and shared fixtures."""

import pytest
from datetime import datetime, timezone

from plan_tracker.models.plan import Action, ActionStatus
from plan_tracker.store.plan_store import PlanStore

# 2023-01-01T12:00:00Z
FIXED_NOW_MS = int(datetime(2023, 1, 1, 12, 0, 0, tzinfo=timezone.utc).timestamp() * 1000)
ONE_DAY_MS = 24 * 60 * 60 * 1000


class FakeClock:
    """Deterministic millisecond clock that tests can advance."""

    def __init__(self, start: int = FIXED_NOW_MS):
        self.now = start

    def __call__(self) -> int:
        return self.now

    def advance(self, ms: int) -> None:
        self.now += ms


@pytest.fixture
def clock() -> FakeClock:
    return FakeClock()


@pytest.fixture
def store(clock) -> PlanStore:
    """Fresh store per test with a fixed clock and no latency."""
    return PlanStore(clock=clock)


@pytest.fixture
def future_deadline() -> int:
    """Deadline one week after the fixed clock."""
    return FIXED_NOW_MS + 7 * ONE_DAY_MS


def make_action(action_id: str, status: ActionStatus, deadline: int = FIXED_NOW_MS) -> Action:
    """Build an action directly, bypassing the store."""
    return Action(
        id=action_id,
        description=f"Action {action_id}",
        status=status,
        deadline=deadline,
    )
