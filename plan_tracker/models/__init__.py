"""
Data models and contracts module.

Immutable data structures for action plans and their actions.
Follows functional programming principles with frozen dataclasses.
"""
from .plan import Action, ActionPlan, ActionStatus, PlanStatus

__all__ = ["Action", "ActionPlan", "ActionStatus", "PlanStatus"]
