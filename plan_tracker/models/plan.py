"""
Action plan data models.

This module defines immutable data structures for action plans and their
kanban-style actions. Mutations produce new instances, so any record handed
out by the store is an independent snapshot.
"""

from dataclasses import dataclass, replace
from enum import Enum
from typing import Optional


class ActionStatus(str, Enum):
    """Kanban column of a single action."""
    TODO = "Todo"
    DOING = "Doing"
    DONE = "Done"


class PlanStatus(str, Enum):
    """Aggregate status derived from a plan's actions."""
    NOT_STARTED = "NotStarted"
    IN_PROGRESS = "InProgress"
    DONE = "Done"


@dataclass(frozen=True)
class Action:
    """Single task within a plan."""
    id: str
    description: str
    status: ActionStatus
    deadline: int               # Epoch milliseconds

    def with_changes(
        self,
        description: Optional[str] = None,
        status: Optional[ActionStatus] = None,
        deadline: Optional[int] = None
    ) -> 'Action':
        """Create new action with only the provided fields replaced."""
        changes = {}
        if description is not None:
            changes['description'] = description
        if status is not None:
            changes['status'] = status
        if deadline is not None:
            changes['deadline'] = deadline
        return replace(self, **changes)


@dataclass(frozen=True)
class ActionPlan:
    """Named objective with an ordered set of actions and a derived status."""
    id: str
    title: str
    objective: str
    created_at: int             # Epoch milliseconds, set once at creation
    status: PlanStatus = PlanStatus.NOT_STARTED
    actions: tuple[Action, ...] = ()

    def find_action(self, action_id: str) -> Optional[Action]:
        """Return the action with the given id, None if absent."""
        for action in self.actions:
            if action.id == action_id:
                return action
        return None

    def with_details(self, title: Optional[str] = None,
                     objective: Optional[str] = None) -> 'ActionPlan':
        """Create new plan with title and/or objective replaced; status untouched."""
        changes = {}
        if title is not None:
            changes['title'] = title
        if objective is not None:
            changes['objective'] = objective
        return replace(self, **changes)

    def with_actions(self, actions: tuple[Action, ...], status: PlanStatus) -> 'ActionPlan':
        """Create new plan with a new action sequence and its recomputed status."""
        return replace(self, actions=tuple(actions), status=status)

    def with_action_replaced(self, action: Action) -> tuple[Action, ...]:
        """Action sequence with the action of the same id swapped in place."""
        return tuple(action if a.id == action.id else a for a in self.actions)

    def without_action(self, action_id: str) -> tuple[Action, ...]:
        """Action sequence with the given action removed."""
        return tuple(a for a in self.actions if a.id != action_id)
