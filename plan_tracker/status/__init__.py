"""
Plan status derivation module.

Computes a plan's aggregate status from its actions and provides the
kanban board helpers built on the same status ordering.
"""
from .calculator import (
    calculate_status,
    count_by_status,
    group_actions_by_status,
    sort_actions_by_status,
)

__all__ = [
    "calculate_status",
    "count_by_status",
    "group_actions_by_status",
    "sort_actions_by_status",
]
