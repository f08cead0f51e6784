#!/usr/bin/env python3
"""
Basic Usage Example - Plan Tracker

This script demonstrates the basic usage of the plan store. It shows how to:
- Load configuration and set up logging
- Create a plan and add actions
- Move actions across kanban columns and watch the derived plan status
- Export the store as JSON

Run: python examples/basic_usage.py
"""

import asyncio

from plan_tracker.config.loader import load_config
from plan_tracker.logging.config import configure_logging
from plan_tracker.models.plan import ActionPlan
from plan_tracker.serialization.codec import dumps_plans
from plan_tracker.status.calculator import group_actions_by_status
from plan_tracker.store.plan_store import PlanStore
from plan_tracker.utils.time import create_future_timestamp, format_timestamp_for_display


def print_board(plan: ActionPlan) -> None:
    """Print a plan as kanban columns."""
    print(f"📊 {plan.title} [{plan.status.value}]")
    for status, actions in group_actions_by_status(plan.actions).items():
        print(f"  {status.value}:")
        for action in actions:
            print(f"    - {action.description} (due {format_timestamp_for_display(action.deadline)})")
    print()


async def main():
    """Main demonstration function."""
    print("🚀 Plan Tracker - Basic Usage Demo")
    print("=" * 60)

    config = load_config()
    configure_logging(config.logging)
    store = PlanStore.from_config(config)

    plan = await store.create_plan("Q1 Goals", "Ship v2")
    print_board(plan)

    design_doc = await store.add_action(plan.id, "Design doc", create_future_timestamp(7))
    print_board(await store.get_plan(plan.id))

    await store.update_action(plan.id, design_doc.id, status="Doing")
    print_board(await store.get_plan(plan.id))

    review = await store.add_action(plan.id, "Review", create_future_timestamp(14), status="Done")
    await store.update_action(plan.id, design_doc.id, status="Done")
    print_board(await store.get_plan(plan.id))

    await store.delete_action(plan.id, review.id)
    print_board(await store.get_plan(plan.id))

    print("📦 Exported store:")
    print(dumps_plans(await store.list_plans()).decode())


if __name__ == "__main__":
    asyncio.run(main())
