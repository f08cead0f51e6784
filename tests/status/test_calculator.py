"""Tests for plan status derivation and board helpers."""

import itertools

import pytest

from plan_tracker.models.plan import ActionStatus, PlanStatus
from plan_tracker.status.calculator import (
    calculate_status,
    count_by_status,
    group_actions_by_status,
    sort_actions_by_status,
)
from conftest import make_action

TODO = ActionStatus.TODO
DOING = ActionStatus.DOING
DONE = ActionStatus.DONE


def actions_with(*statuses):
    return [make_action(str(i), status) for i, status in enumerate(statuses, start=1)]


class TestCalculateStatus:
    """Test calculate_status precedence rules."""

    def test_empty_actions_not_started(self):
        """Test a plan with no actions is NotStarted."""
        assert calculate_status([]) == PlanStatus.NOT_STARTED

    def test_all_todo_not_started(self):
        """Test all Todo actions yield NotStarted."""
        assert calculate_status(actions_with(TODO, TODO, TODO)) == PlanStatus.NOT_STARTED

    def test_all_done(self):
        """Test all Done actions yield Done."""
        assert calculate_status(actions_with(DONE, DONE)) == PlanStatus.DONE

    def test_single_done(self):
        """Test a single Done action yields Done."""
        assert calculate_status(actions_with(DONE)) == PlanStatus.DONE

    def test_any_doing_in_progress(self):
        """Test one Doing action makes the plan InProgress."""
        assert calculate_status(actions_with(TODO, DOING, TODO)) == PlanStatus.IN_PROGRESS

    def test_done_among_todo_in_progress(self):
        """Test one Done among Todo actions counts as progress, not Done."""
        assert calculate_status(actions_with(DONE, TODO, TODO)) == PlanStatus.IN_PROGRESS

    def test_doing_and_done_in_progress(self):
        """Test a mix of Doing and Done is InProgress."""
        assert calculate_status(actions_with(DOING, DONE)) == PlanStatus.IN_PROGRESS

    def test_accepts_any_iterable(self):
        """Test the calculator accepts tuples and generators."""
        actions = tuple(actions_with(DONE, DONE))
        assert calculate_status(actions) == PlanStatus.DONE
        assert calculate_status(a for a in actions) == PlanStatus.DONE

    def test_idempotent(self):
        """Test repeated calls on the same input give the same result."""
        actions = actions_with(TODO, DOING)
        assert calculate_status(actions) == calculate_status(actions)

    def test_does_not_mutate_input(self):
        """Test the input sequence is left untouched."""
        actions = actions_with(DONE, TODO)
        before = list(actions)
        calculate_status(actions)
        assert actions == before

    @pytest.mark.parametrize("length", [1, 2, 3])
    def test_exhaustive_small_inputs(self, length):
        """Test every status combination up to three actions against the rules."""
        for statuses in itertools.product(list(ActionStatus), repeat=length):
            result = calculate_status(actions_with(*statuses))

            if all(s == TODO for s in statuses):
                assert result == PlanStatus.NOT_STARTED
            elif all(s == DONE for s in statuses):
                assert result == PlanStatus.DONE
            else:
                assert result == PlanStatus.IN_PROGRESS


class TestBoardHelpers:
    """Test kanban board helpers."""

    def test_count_by_status(self):
        """Test counts include every status."""
        counts = count_by_status(actions_with(TODO, DONE, DONE))

        assert counts == {TODO: 1, DOING: 0, DONE: 2}

    def test_count_by_status_empty(self):
        """Test counts for no actions are all zero."""
        assert count_by_status([]) == {TODO: 0, DOING: 0, DONE: 0}

    def test_group_actions_by_status(self):
        """Test grouping keeps column order and insertion order within columns."""
        actions = actions_with(DONE, TODO, DOING, TODO)

        columns = group_actions_by_status(actions)

        assert list(columns) == [TODO, DOING, DONE]
        assert [a.id for a in columns[TODO]] == ["2", "4"]
        assert [a.id for a in columns[DOING]] == ["3"]
        assert [a.id for a in columns[DONE]] == ["1"]

    def test_sort_actions_by_status_is_stable(self):
        """Test sorting orders Todo, Doing, Done and keeps ties in insertion order."""
        actions = actions_with(DONE, TODO, DOING, TODO, DONE)

        ordered = sort_actions_by_status(actions)

        assert [a.id for a in ordered] == ["2", "4", "3", "1", "5"]
