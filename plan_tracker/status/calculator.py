"""
Plan status derivation.

A plan's status is never set directly; it is always the result of
calculate_status over the plan's current actions.
"""

from collections.abc import Iterable

from ..models.plan import Action, ActionStatus, PlanStatus

# Kanban column order
STATUS_ORDER = {
    ActionStatus.TODO: 1,
    ActionStatus.DOING: 2,
    ActionStatus.DONE: 3,
}


def calculate_status(actions: Iterable[Action]) -> PlanStatus:
    """
    Derive a plan's status from its actions.

    Rules, in precedence order:
    1. No actions: NotStarted
    2. Every action Done: Done
    3. Any action Doing or Done: InProgress
    4. Otherwise (all Todo): NotStarted

    A single Done action among Todo actions counts as progress and yields
    InProgress, not Done.

    Args:
        actions: The plan's actions in any order

    Returns:
        Derived plan status
    """
    statuses = [action.status for action in actions]

    if not statuses:
        return PlanStatus.NOT_STARTED

    if all(status == ActionStatus.DONE for status in statuses):
        return PlanStatus.DONE

    if any(status in (ActionStatus.DOING, ActionStatus.DONE) for status in statuses):
        return PlanStatus.IN_PROGRESS

    return PlanStatus.NOT_STARTED


def count_by_status(actions: Iterable[Action]) -> dict[ActionStatus, int]:
    """Number of actions in each status; unused statuses count 0."""
    counts = {status: 0 for status in ActionStatus}
    for action in actions:
        counts[action.status] += 1
    return counts


def group_actions_by_status(actions: Iterable[Action]) -> dict[ActionStatus, list[Action]]:
    """Split actions into kanban columns, preserving insertion order within each."""
    columns: dict[ActionStatus, list[Action]] = {status: [] for status in STATUS_ORDER}
    for action in actions:
        columns[action.status].append(action)
    return columns


def sort_actions_by_status(actions: Iterable[Action]) -> list[Action]:
    """Stable sort of actions by column: Todo, Doing, Done."""
    return sorted(actions, key=lambda action: STATUS_ORDER[action.status])
