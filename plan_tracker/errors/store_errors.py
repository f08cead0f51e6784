"""
Error classifications for plan store operations.

None of these errors are retried by the store; any retry policy belongs
to the calling layer.
"""

from typing import Any, Optional


class PlanTrackerError(Exception):
    """Base class for all errors raised by the plan tracker."""

    kind = "error"

    def __init__(self, message: str, context: Optional[dict[str, Any]] = None):
        super().__init__(message)
        self.message = message
        self.context = context or {}
        self.recoverable = False

    def to_dict(self) -> dict[str, Any]:
        """Describe the error for a presentation layer."""
        return {"kind": self.kind, "message": self.message, **self.context}


class ValidationError(PlanTrackerError):
    """Caller supplied a bad value: empty required string, bad deadline or status."""

    kind = "validation"

    def __init__(self, message: str, field: Optional[str] = None,
                 value: Any = None, **kwargs):
        super().__init__(message, **kwargs)
        self.field = field
        self.value = value
        self.context.setdefault("field", field)


class NotFoundError(PlanTrackerError):
    """Referenced plan or action id does not exist."""

    kind = "not_found"

    def __init__(self, message: str, entity: Optional[str] = None,
                 entity_id: Optional[str] = None, **kwargs):
        super().__init__(message, **kwargs)
        self.entity = entity
        self.entity_id = entity_id
        self.context.setdefault("entity", entity)
        self.context.setdefault("entity_id", entity_id)

    @classmethod
    def plan(cls, plan_id: str) -> "NotFoundError":
        return cls(f"Plan not found: {plan_id}", entity="plan", entity_id=plan_id)

    @classmethod
    def action(cls, plan_id: str, action_id: str) -> "NotFoundError":
        return cls(
            f"Action not found: {action_id} (plan {plan_id})",
            entity="action",
            entity_id=action_id,
            context={"plan_id": plan_id},
        )


class ConfigurationError(PlanTrackerError):
    """Configuration failed validation at load time."""

    kind = "configuration"

    def __init__(self, message: str, issues: Optional[list] = None, **kwargs):
        super().__init__(message, **kwargs)
        self.issues = issues or []
