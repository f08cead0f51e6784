"""
Input validation for plan store operations.

Every store mutation validates its inputs here before touching state, so
a rejected call never leaves a partial change behind.
"""

from collections.abc import Callable
from typing import Any, Optional

from ..config.defaults import ValidationParams
from ..errors import ValidationError
from ..models.plan import ActionStatus
from ..utils.time import is_future_timestamp, now_ms, to_timestamp_ms


class InputValidator:
    """Validates caller-supplied plan and action fields."""

    def __init__(self, params: Optional[ValidationParams] = None,
                 clock: Callable[[], int] = now_ms):
        """
        Initialize validator with configuration.

        Args:
            params: Validation parameters, defaults when omitted
            clock: Source of the current time in epoch milliseconds
        """
        self.params = params or ValidationParams()
        self.clock = clock

    def validate_text(self, field: str, value: Any, min_length: int = 1) -> str:
        """
        Validate a required text field.

        Returns:
            The value, stripped when strip_whitespace is enabled

        Raises:
            ValidationError: If the value is not a string or is too short
        """
        if not isinstance(value, str):
            raise ValidationError(
                f"{field} must be a string",
                field=field,
                value=value
            )

        text = value.strip() if self.params.strip_whitespace else value
        if not text.strip():
            raise ValidationError(f"{field} is required", field=field, value=value)

        if len(text) < min_length:
            raise ValidationError(
                f"{field} must have at least {min_length} characters",
                field=field,
                value=value
            )

        return text

    def validate_title(self, value: Any) -> str:
        return self.validate_text("title", value, self.params.min_title_length)

    def validate_objective(self, value: Any) -> str:
        return self.validate_text("objective", value, self.params.min_objective_length)

    def validate_description(self, value: Any) -> str:
        return self.validate_text("description", value, self.params.min_description_length)

    def validate_status(self, value: Any) -> ActionStatus:
        """
        Validate an action status given as enum member or its string value.

        Raises:
            ValidationError: If the value names no known status
        """
        try:
            return ActionStatus(value)
        except ValueError:
            allowed = ", ".join(status.value for status in ActionStatus)
            raise ValidationError(
                f"status must be one of: {allowed}",
                field="status",
                value=value
            ) from None

    def validate_deadline(self, value: Any) -> int:
        """
        Validate and normalize a deadline to epoch milliseconds.

        Raises:
            ValidationError: If the value is not a usable timestamp, or is not
                in the future while require_future_deadline is enabled
        """
        try:
            deadline = to_timestamp_ms(value)
        except ValueError as e:
            raise ValidationError(
                f"deadline is not a valid timestamp: {e}",
                field="deadline",
                value=value
            ) from e

        if self.params.require_future_deadline and not is_future_timestamp(deadline, self.clock()):
            raise ValidationError(
                "deadline must be in the future",
                field="deadline",
                value=value
            )

        return deadline
