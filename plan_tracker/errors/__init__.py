"""
Error classification system for plan store operations.

This module provides the structured exception hierarchy surfaced to callers
of the plan store. Every error carries its kind and the offending field or
entity id so the caller can render a user-facing message.
"""

from .store_errors import (
    ConfigurationError,
    NotFoundError,
    PlanTrackerError,
    ValidationError,
)

__all__ = [
    "PlanTrackerError",
    # Caller input
    "ValidationError",
    # Missing entities
    "NotFoundError",
    # Startup
    "ConfigurationError",
]
