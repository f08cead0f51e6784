"""
Optimistic client view over the plan store.

The view keeps a local shadow copy of plans keyed by id. Each change is
applied to the shadow copy first, including the predicted plan status,
then sent to the store. On success the shadow plan is replaced by the
store's authoritative copy; on failure only the affected action is
reverted, by id, and the error is re-raised.
"""

import itertools
from collections.abc import Awaitable
from typing import Any, Optional, TypeVar

from ..errors import NotFoundError
from ..logging.config import get_logger
from ..models.plan import Action, ActionPlan, ActionStatus
from ..status.calculator import calculate_status
from ..store.plan_store import PlanStore

logger = get_logger(__name__)

PENDING_PREFIX = "pending-"

T = TypeVar("T")


class OptimisticPlanView:
    """Local shadow copy of store plans with speculative updates."""

    def __init__(self, store: PlanStore):
        self.store = store
        self.logger = logger
        self.plans: dict[str, ActionPlan] = {}
        self._pending_ids = itertools.count(1)

    def get(self, plan_id: str) -> Optional[ActionPlan]:
        """Local view of a plan, None if not loaded."""
        return self.plans.get(plan_id)

    async def refresh(self) -> list[ActionPlan]:
        """Replace the whole shadow copy with the store's plans."""
        plans = await self.store.list_plans()
        self.plans = {plan.id: plan for plan in plans}
        return plans

    async def refresh_plan(self, plan_id: str) -> ActionPlan:
        """
        Replace one shadow plan with the store's copy.

        Raises:
            NotFoundError: If the store no longer has the plan; the local
                copy is dropped as well
        """
        try:
            plan = await self.store.get_plan(plan_id)
        except NotFoundError:
            self.plans.pop(plan_id, None)
            raise
        self.plans[plan_id] = plan
        return plan

    async def move_action(self, plan_id: str, action_id: str, status: Any) -> Action:
        """Move an action to another kanban column."""
        plan = self._require_local(plan_id)
        previous = plan.find_action(action_id)
        if previous is None:
            raise NotFoundError.action(plan_id, action_id)
        predicted = self.store.validator.validate_status(status)

        self._apply(plan_id, lambda p: p.with_action_replaced(
            previous.with_changes(status=predicted)
        ))
        return await self._confirm(
            plan_id,
            self.store.update_action(plan_id, action_id, status=status),
            revert=lambda p: p.with_action_replaced(previous),
        )

    async def add_action(
        self,
        plan_id: str,
        description: str,
        deadline: int,
        status: Any = ActionStatus.TODO
    ) -> Action:
        """Add an action, shown immediately under a temporary pending id."""
        self._require_local(plan_id)
        pending = Action(
            id=f"{PENDING_PREFIX}{next(self._pending_ids)}",
            description=self.store.validator.validate_description(description),
            status=self.store.validator.validate_status(status),
            deadline=self.store.validator.validate_deadline(deadline),
        )

        self._apply(plan_id, lambda p: p.actions + (pending,))
        return await self._confirm(
            plan_id,
            self.store.add_action(plan_id, description, deadline, status=status),
            revert=lambda p: p.without_action(pending.id),
        )

    async def delete_action(self, plan_id: str, action_id: str) -> None:
        """Remove an action, restoring it at its old position on failure."""
        plan = self._require_local(plan_id)
        previous = plan.find_action(action_id)
        if previous is None:
            raise NotFoundError.action(plan_id, action_id)
        index = plan.actions.index(previous)

        def restore(p: ActionPlan) -> tuple[Action, ...]:
            if p.find_action(action_id) is not None:
                return p.actions
            return p.actions[:index] + (previous,) + p.actions[index:]

        self._apply(plan_id, lambda p: p.without_action(action_id))
        await self._confirm(
            plan_id,
            self.store.delete_action(plan_id, action_id),
            revert=restore,
        )

    def _require_local(self, plan_id: str) -> ActionPlan:
        plan = self.plans.get(plan_id)
        if plan is None:
            raise NotFoundError.plan(plan_id)
        return plan

    def _apply(self, plan_id: str, change) -> None:
        """Apply an action-sequence change locally with the predicted status."""
        plan = self.plans[plan_id]
        actions = change(plan)
        self.plans[plan_id] = plan.with_actions(actions, calculate_status(actions))

    async def _confirm(self, plan_id: str, call: Awaitable[T], revert) -> T:
        """Await the store call, then reconcile or revert the shadow plan."""
        try:
            result = await call
        except BaseException as e:
            # A failed or cancelled store call leaves the store unchanged
            if plan_id in self.plans:
                self._apply(plan_id, revert)
            self.logger.warning(
                "optimistic_update_reverted",
                plan_id=plan_id,
                error_kind=getattr(e, "kind", type(e).__name__),
                error=str(e)
            )
            raise

        await self.refresh_plan(plan_id)
        return result
