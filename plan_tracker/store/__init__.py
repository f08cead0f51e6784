"""
In-memory plan store module.

Authoritative repository of action plans. Serializes mutations and
recomputes the derived plan status after every action change.
"""
from .plan_store import PlanStore

__all__ = ["PlanStore"]
