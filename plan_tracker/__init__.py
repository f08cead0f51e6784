"""
Plan Tracker - Action Plan Status Engine

Tracks action plans made of kanban-style actions and derives each plan's
overall status from the statuses of its actions. Exposes an asynchronous
in-memory store that keeps the derived status consistent under concurrent
mutations.
"""

__version__ = "0.1.0"
__author__ = "Plan Tracker Team"
