"""
Client-side view module.

Local shadow copies of store state with speculative updates that are
confirmed or reverted against the authoritative store.
"""
from .optimistic import OptimisticPlanView

__all__ = ["OptimisticPlanView"]
