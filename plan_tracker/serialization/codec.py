"""
Plan codec for transport between the store and its consumers.

Plans encode to plain dicts with camelCase keys (``createdAt``) and to
JSON bytes via orjson. Decoding validates the payload shape and raises
ValidationError for anything malformed.
"""

from collections.abc import Iterable
from typing import Any

import orjson

from ..errors import ValidationError
from ..models.plan import Action, ActionPlan, ActionStatus, PlanStatus
from ..utils.time import is_valid_timestamp_ms


def action_to_dict(action: Action) -> dict[str, Any]:
    return {
        "id": action.id,
        "description": action.description,
        "status": action.status.value,
        "deadline": action.deadline,
    }


def plan_to_dict(plan: ActionPlan) -> dict[str, Any]:
    return {
        "id": plan.id,
        "title": plan.title,
        "objective": plan.objective,
        "createdAt": plan.created_at,
        "status": plan.status.value,
        "actions": [action_to_dict(action) for action in plan.actions],
    }


def action_from_dict(data: dict[str, Any]) -> Action:
    """
    Decode an action payload.

    Raises:
        ValidationError: If a field is missing or has the wrong type
    """
    _require_mapping(data, "action")
    return Action(
        id=_require_str(data, "id"),
        description=_require_str(data, "description"),
        status=_require_enum(data, "status", ActionStatus),
        deadline=_require_timestamp(data, "deadline"),
    )


def plan_from_dict(data: dict[str, Any]) -> ActionPlan:
    """
    Decode a plan payload.

    The status is decoded as given; the store recomputes it on import.

    Raises:
        ValidationError: If a field is missing or has the wrong type, or two
            actions share an id
    """
    _require_mapping(data, "plan")
    actions = data.get("actions", [])
    if not isinstance(actions, list):
        raise ValidationError("actions must be a list", field="actions", value=actions)

    decoded = tuple(action_from_dict(action) for action in actions)
    _require_unique_ids(decoded)

    return ActionPlan(
        id=_require_str(data, "id"),
        title=_require_str(data, "title"),
        objective=_require_str(data, "objective"),
        created_at=_require_timestamp(data, "createdAt"),
        status=_require_enum(data, "status", PlanStatus) if "status" in data else PlanStatus.NOT_STARTED,
        actions=decoded,
    )


def dumps_plans(plans: Iterable[ActionPlan]) -> bytes:
    """Encode plans as a JSON array."""
    return orjson.dumps([plan_to_dict(plan) for plan in plans])


def loads_plans(raw_data: bytes | str) -> list[ActionPlan]:
    """
    Decode a JSON array of plans.

    Raises:
        ValidationError: If the payload is not valid JSON or not a list of plans
    """
    try:
        payload = orjson.loads(raw_data)
    except orjson.JSONDecodeError as e:
        raise ValidationError(f"Invalid JSON: {e}", field="payload") from e

    if not isinstance(payload, list):
        raise ValidationError("Expected a list of plans", field="payload", value=type(payload).__name__)

    return [plan_from_dict(item) for item in payload]


def _require_mapping(data: Any, what: str) -> None:
    if not isinstance(data, dict):
        raise ValidationError(f"{what} must be an object", field=what, value=data)


def _require_str(data: dict[str, Any], key: str) -> str:
    value = data.get(key)
    if not isinstance(value, str) or not value:
        raise ValidationError(f"{key} must be a non-empty string", field=key, value=value)
    return value


def _require_timestamp(data: dict[str, Any], key: str) -> int:
    value = data.get(key)
    if not is_valid_timestamp_ms(value):
        raise ValidationError(f"{key} must be an integer timestamp", field=key, value=value)
    return value


def _require_enum(data: dict[str, Any], key: str, enum_cls: type) -> Any:
    value = data.get(key)
    try:
        return enum_cls(value)
    except ValueError:
        raise ValidationError(f"{key} has unknown value", field=key, value=value) from None


def _require_unique_ids(actions: tuple[Action, ...]) -> None:
    seen = set()
    for action in actions:
        if action.id in seen:
            raise ValidationError(
                f"Duplicate action id: {action.id}", field="actions", value=action.id
            )
        seen.add(action.id)
