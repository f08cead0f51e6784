"""Tests for the plan codec."""

import orjson
import pytest

from plan_tracker.errors import ValidationError
from plan_tracker.models.plan import ActionPlan, ActionStatus, PlanStatus
from plan_tracker.serialization.codec import (
    action_from_dict,
    dumps_plans,
    loads_plans,
    plan_from_dict,
    plan_to_dict,
)
from conftest import FIXED_NOW_MS, make_action


def sample_plan() -> ActionPlan:
    return ActionPlan(
        id="1",
        title="Q1 Goals",
        objective="Ship v2",
        created_at=FIXED_NOW_MS,
        status=PlanStatus.IN_PROGRESS,
        actions=(
            make_action("2", ActionStatus.DOING),
            make_action("3", ActionStatus.TODO),
        ),
    )


class TestPlanToDict:
    """Test encoding plans to plain dicts."""

    def test_camel_case_keys_and_string_enums(self):
        """Test the payload uses createdAt and enum values."""
        data = plan_to_dict(sample_plan())

        assert data["createdAt"] == FIXED_NOW_MS
        assert data["status"] == "InProgress"
        assert data["actions"][0] == {
            "id": "2",
            "description": "Action 2",
            "status": "Doing",
            "deadline": FIXED_NOW_MS,
        }

    def test_dumps_is_json_array(self):
        """Test JSON output is an array of plan objects."""
        raw = dumps_plans([sample_plan()])

        payload = orjson.loads(raw)
        assert isinstance(payload, list)
        assert payload[0]["title"] == "Q1 Goals"


class TestPlanFromDict:
    """Test decoding plans from payloads."""

    def test_decode_matches_original(self):
        """Test decoding the encoded form restores the plan."""
        assert loads_plans(dumps_plans([sample_plan()])) == [sample_plan()]

    def test_missing_status_defaults(self):
        """Test a payload without status decodes as NotStarted."""
        data = plan_to_dict(sample_plan())
        del data["status"]

        assert plan_from_dict(data).status == PlanStatus.NOT_STARTED

    def test_missing_actions_defaults_empty(self):
        """Test a payload without actions decodes with none."""
        data = plan_to_dict(sample_plan())
        del data["actions"]

        assert plan_from_dict(data).actions == ()

    @pytest.mark.parametrize("key,value", [
        ("title", ""),
        ("id", 1),
        ("createdAt", "yesterday"),
        ("status", "Finished"),
        ("actions", {"not": "a list"}),
    ])
    def test_malformed_plan(self, key, value):
        """Test malformed plan fields raise ValidationError naming the field."""
        data = plan_to_dict(sample_plan())
        data[key] = value

        with pytest.raises(ValidationError) as exc_info:
            plan_from_dict(data)
        assert exc_info.value.field == key

    def test_malformed_action(self):
        """Test a bad action status is reported."""
        with pytest.raises(ValidationError) as exc_info:
            action_from_dict({"id": "1", "description": "d", "status": "A Fazer", "deadline": 0})
        assert exc_info.value.field == "status"

    def test_non_object_action(self):
        """Test a non-object action is rejected."""
        with pytest.raises(ValidationError):
            action_from_dict(["1", "d"])

    def test_duplicate_action_ids_rejected(self):
        """Test two actions sharing an id within one plan are rejected."""
        data = plan_to_dict(sample_plan())
        data["actions"][1]["id"] = data["actions"][0]["id"]

        with pytest.raises(ValidationError) as exc_info:
            plan_from_dict(data)
        assert exc_info.value.field == "actions"
        assert exc_info.value.value == "2"

    def test_invalid_json(self):
        """Test invalid JSON raises ValidationError."""
        with pytest.raises(ValidationError) as exc_info:
            loads_plans(b"{not json")
        assert exc_info.value.field == "payload"

    def test_non_list_payload(self):
        """Test a JSON object instead of an array is rejected."""
        with pytest.raises(ValidationError):
            loads_plans(b'{"id": "1"}')

    @pytest.mark.asyncio
    async def test_import_decoded_plans(self, store):
        """Test decoded plans can seed a store, which recomputes status."""
        data = plan_to_dict(sample_plan())
        data["status"] = "Done"
        plans = loads_plans(orjson.dumps([data]))

        await store.import_plans(plans)

        assert (await store.get_plan("1")).status == PlanStatus.IN_PROGRESS
