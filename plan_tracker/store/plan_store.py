"""
In-memory plan store.

The store is the single authoritative collection of action plans. Every
mutation is a read-modify-write under one asyncio lock, and every action
mutation stores the recomputed plan status together with the action change.
Records are frozen dataclasses, so anything returned is a snapshot.
"""

import asyncio
import itertools
from collections.abc import Callable, Iterable, Iterator
from contextlib import contextmanager
from typing import Any, Optional

from ..config.defaults import StoreParams, TrackerConfig, ValidationParams
from ..errors import NotFoundError, PlanTrackerError, ValidationError
from ..logging.config import get_store_logger, log_status_change
from ..models.plan import Action, ActionPlan, ActionStatus, PlanStatus
from ..status.calculator import calculate_status
from ..utils.time import now_ms
from .validators import InputValidator

logger = get_store_logger(__name__)


class PlanStore:
    """Asynchronous in-memory repository of action plans."""

    def __init__(
        self,
        params: Optional[StoreParams] = None,
        validation: Optional[ValidationParams] = None,
        clock: Optional[Callable[[], int]] = None
    ):
        """
        Initialize an empty store.

        Args:
            params: Store parameters (simulated latency, id counter start)
            validation: Input validation parameters
            clock: Source of the current time in epoch milliseconds
        """
        self.params = params or StoreParams()
        self.clock = clock or now_ms
        self.validator = InputValidator(validation, clock=self.clock)
        self.logger = logger
        self._plans: dict[str, ActionPlan] = {}
        self._ids = itertools.count(self.params.id_start)
        self._used_ids: set[str] = set()
        self._lock = asyncio.Lock()

    @classmethod
    def from_config(cls, config: TrackerConfig,
                    clock: Optional[Callable[[], int]] = None) -> "PlanStore":
        """Create a store from a loaded TrackerConfig."""
        return cls(params=config.store, validation=config.validation, clock=clock)

    # Reads

    async def list_plans(self) -> list[ActionPlan]:
        """Snapshot of all plans in creation order."""
        await self._simulate_latency()
        return list(self._plans.values())

    async def get_plan(self, plan_id: str) -> ActionPlan:
        """
        Snapshot of a single plan.

        Raises:
            NotFoundError: If the plan does not exist
        """
        await self._simulate_latency()
        return self._require_plan(plan_id, operation="get_plan")

    # Plan mutations

    async def create_plan(self, title: str, objective: str) -> ActionPlan:
        """
        Create a plan with no actions and status NotStarted.

        Raises:
            ValidationError: If title or objective is empty
        """
        await self._simulate_latency()
        with self._reported("create_plan"):
            title = self.validator.validate_title(title)
            objective = self.validator.validate_objective(objective)

        async with self._lock:
            plan = ActionPlan(
                id=self._next_id(),
                title=title,
                objective=objective,
                created_at=self.clock(),
                status=PlanStatus.NOT_STARTED,
                actions=(),
            )
            self._plans[plan.id] = plan

        self.logger.info("plan_created", plan_id=plan.id, title=plan.title)
        return plan

    async def update_plan(
        self,
        plan_id: str,
        title: Optional[str] = None,
        objective: Optional[str] = None
    ) -> ActionPlan:
        """
        Merge the provided title and/or objective; status and actions untouched.

        Raises:
            NotFoundError: If the plan does not exist
            ValidationError: If a provided field is empty
        """
        await self._simulate_latency()
        with self._reported("update_plan", plan_id=plan_id):
            if title is not None:
                title = self.validator.validate_title(title)
            if objective is not None:
                objective = self.validator.validate_objective(objective)

        async with self._lock:
            plan = self._require_plan(plan_id, operation="update_plan")
            updated = plan.with_details(title=title, objective=objective)
            self._plans[plan_id] = updated

        self.logger.info(
            "plan_updated",
            plan_id=plan_id,
            fields=[name for name, value in (("title", title), ("objective", objective))
                    if value is not None]
        )
        return updated

    async def delete_plan(self, plan_id: str) -> None:
        """
        Remove a plan together with all of its actions.

        Raises:
            NotFoundError: If the plan does not exist
        """
        await self._simulate_latency()
        async with self._lock:
            plan = self._require_plan(plan_id, operation="delete_plan")
            del self._plans[plan_id]

        self.logger.info("plan_deleted", plan_id=plan_id, actions_removed=len(plan.actions))

    # Action mutations

    async def add_action(
        self,
        plan_id: str,
        description: str,
        deadline: Any,
        status: Any = ActionStatus.TODO
    ) -> Action:
        """
        Append a new action to a plan and recompute the plan status.

        Args:
            plan_id: Owning plan
            description: Non-empty description
            deadline: Epoch milliseconds, datetime or datetime-local string
            status: Initial status, Todo unless given

        Raises:
            NotFoundError: If the plan does not exist
            ValidationError: If description, deadline or status is invalid
        """
        await self._simulate_latency()
        with self._reported("add_action", plan_id=plan_id):
            description = self.validator.validate_description(description)
            deadline = self.validator.validate_deadline(deadline)
            status = self.validator.validate_status(status)

        async with self._lock:
            plan = self._require_plan(plan_id, operation="add_action")
            action = Action(
                id=self._next_id(),
                description=description,
                status=status,
                deadline=deadline,
            )
            self._store_actions(plan, plan.actions + (action,), trigger="add_action")

        self.logger.info(
            "action_added",
            plan_id=plan_id,
            action_id=action.id,
            status=action.status.value
        )
        return action

    async def update_action(
        self,
        plan_id: str,
        action_id: str,
        status: Any = None,
        deadline: Any = None
    ) -> Action:
        """
        Merge the provided status and/or deadline, then recompute the plan status.

        Recomputation runs even for deadline-only changes; it is idempotent.

        Raises:
            NotFoundError: If the plan or action does not exist
            ValidationError: If a provided field is invalid
        """
        await self._simulate_latency()
        with self._reported("update_action", plan_id=plan_id, action_id=action_id):
            if status is not None:
                status = self.validator.validate_status(status)
            if deadline is not None:
                deadline = self.validator.validate_deadline(deadline)

        async with self._lock:
            plan = self._require_plan(plan_id, operation="update_action")
            action = self._require_action(plan, action_id, operation="update_action")
            updated = action.with_changes(status=status, deadline=deadline)
            self._store_actions(plan, plan.with_action_replaced(updated), trigger="update_action")

        self.logger.info(
            "action_updated",
            plan_id=plan_id,
            action_id=action_id,
            status=updated.status.value
        )
        return updated

    async def update_action_description(
        self,
        plan_id: str,
        action_id: str,
        description: str,
        deadline: Any = None
    ) -> Action:
        """
        Update an action's description and optionally its deadline.

        Raises:
            NotFoundError: If the plan or action does not exist
            ValidationError: If description or deadline is invalid
        """
        await self._simulate_latency()
        with self._reported("update_action_description", plan_id=plan_id, action_id=action_id):
            description = self.validator.validate_description(description)
            if deadline is not None:
                deadline = self.validator.validate_deadline(deadline)

        async with self._lock:
            plan = self._require_plan(plan_id, operation="update_action_description")
            action = self._require_action(plan, action_id, operation="update_action_description")
            updated = action.with_changes(description=description, deadline=deadline)
            self._store_actions(
                plan,
                plan.with_action_replaced(updated),
                trigger="update_action_description"
            )

        self.logger.info("action_description_updated", plan_id=plan_id, action_id=action_id)
        return updated

    async def delete_action(self, plan_id: str, action_id: str) -> None:
        """
        Remove an action from its plan and recompute the plan status.

        Raises:
            NotFoundError: If the plan or action does not exist
        """
        await self._simulate_latency()
        async with self._lock:
            plan = self._require_plan(plan_id, operation="delete_action")
            self._require_action(plan, action_id, operation="delete_action")
            self._store_actions(plan, plan.without_action(action_id), trigger="delete_action")

        self.logger.info("action_deleted", plan_id=plan_id, action_id=action_id)

    # Seeding

    async def import_plans(self, plans: Iterable[ActionPlan]) -> list[ActionPlan]:
        """
        Seed the store with existing plan records.

        Each plan's status is recomputed from its actions regardless of the
        status it arrived with. A plan whose id already exists is replaced.
        Generated ids never collide with imported ones. The batch is applied
        all or nothing.

        Returns:
            The stored plans

        Raises:
            ValidationError: If an action id appears twice within the
                resulting store
        """
        await self._simulate_latency()
        plans = list(plans)
        stored = []
        async with self._lock:
            with self._reported("import_plans"):
                self._check_unique_action_ids(plans)
            for plan in plans:
                normalized = plan.with_actions(plan.actions, calculate_status(plan.actions))
                self._plans[normalized.id] = normalized
                self._used_ids.add(normalized.id)
                self._used_ids.update(action.id for action in normalized.actions)
                stored.append(normalized)

        self.logger.info("plans_imported", count=len(stored))
        return stored

    # Internals

    def _check_unique_action_ids(self, plans: list[ActionPlan]) -> None:
        """Reject imports that would leave one action id in two places."""
        resulting = dict(self._plans)
        resulting.update((plan.id, plan) for plan in plans)
        owners: dict[str, str] = {}
        for plan in resulting.values():
            for action in plan.actions:
                if action.id in owners:
                    raise ValidationError(
                        f"Duplicate action id: {action.id}",
                        field="actions",
                        value=action.id,
                        context={"plan_id": plan.id, "other_plan_id": owners[action.id]},
                    )
                owners[action.id] = plan.id

    def _next_id(self) -> str:
        """Allocate the next unused id from the shared counter."""
        while True:
            candidate = str(next(self._ids))
            if candidate not in self._used_ids:
                self._used_ids.add(candidate)
                return candidate

    def _store_actions(self, plan: ActionPlan, actions: tuple[Action, ...], trigger: str) -> ActionPlan:
        """Store a new action sequence together with its recomputed status."""
        new_status = calculate_status(actions)
        updated = plan.with_actions(actions, new_status)
        self._plans[plan.id] = updated

        if new_status != plan.status:
            log_status_change(
                self.logger,
                plan_id=plan.id,
                from_status=plan.status.value,
                to_status=new_status.value,
                trigger=trigger,
                context={"action_count": len(actions)}
            )

        return updated

    def _require_plan(self, plan_id: str, operation: str) -> ActionPlan:
        plan = self._plans.get(plan_id)
        if plan is None:
            error = NotFoundError.plan(plan_id)
            self._log_failure(operation, error)
            raise error
        return plan

    def _require_action(self, plan: ActionPlan, action_id: str, operation: str) -> Action:
        action = plan.find_action(action_id)
        if action is None:
            error = NotFoundError.action(plan.id, action_id)
            self._log_failure(operation, error)
            raise error
        return action

    @contextmanager
    def _reported(self, operation: str, **context: Any) -> Iterator[None]:
        """Log plan tracker errors raised inside the block, then let them propagate."""
        try:
            yield
        except PlanTrackerError as e:
            self._log_failure(operation, e, **context)
            raise

    def _log_failure(self, operation: str, error: PlanTrackerError, **context: Any) -> None:
        self.logger.warning(
            "operation_failed",
            operation=operation,
            error_kind=error.kind,
            error=error.message,
            **{**error.context, **context}
        )

    async def _simulate_latency(self) -> None:
        if self.params.latency_ms > 0:
            await asyncio.sleep(self.params.latency_ms / 1000)

