"""Configuration validation utilities."""

import logging
from dataclasses import dataclass
from typing import Any


@dataclass(frozen=True)
class ConfigIssue:
    """Represents a configuration validation problem."""
    field: str
    message: str
    value: Any


def _is_int(value: Any) -> bool:
    return isinstance(value, int) and not isinstance(value, bool)


class ConfigValidator:
    """Validates configuration parameters."""

    @staticmethod
    def validate_store_params(params: dict[str, Any]) -> list[ConfigIssue]:
        """Validate store parameters."""
        issues = []

        if "latency_ms" in params:
            value = params["latency_ms"]
            if not _is_int(value) or value < 0:
                issues.append(ConfigIssue(
                    field="store.latency_ms",
                    message="Must be a non-negative integer",
                    value=value
                ))

        if "id_start" in params:
            value = params["id_start"]
            if not _is_int(value) or value < 0:
                issues.append(ConfigIssue(
                    field="store.id_start",
                    message="Must be a non-negative integer",
                    value=value
                ))

        return issues

    @staticmethod
    def validate_validation_params(params: dict[str, Any]) -> list[ConfigIssue]:
        """Validate input validation parameters."""
        issues = []

        for name in ("min_title_length", "min_objective_length", "min_description_length"):
            if name in params:
                value = params[name]
                if not _is_int(value) or value < 1:
                    issues.append(ConfigIssue(
                        field=f"validation.{name}",
                        message="Must be a positive integer",
                        value=value
                    ))

        for name in ("strip_whitespace", "require_future_deadline"):
            if name in params:
                value = params[name]
                if not isinstance(value, bool):
                    issues.append(ConfigIssue(
                        field=f"validation.{name}",
                        message="Must be a boolean",
                        value=value
                    ))

        return issues

    @staticmethod
    def validate_logging_params(params: dict[str, Any]) -> list[ConfigIssue]:
        """Validate logging parameters."""
        issues = []

        if "level" in params:
            value = params["level"]
            if not isinstance(value, str) or not isinstance(
                logging.getLevelName(value.upper()), int
            ):
                issues.append(ConfigIssue(
                    field="logging.level",
                    message="Must be a standard logging level name",
                    value=value
                ))

        for key in ("format_json", "include_timestamp", "include_caller"):
            if key in params and not isinstance(params[key], bool):
                issues.append(ConfigIssue(
                    field=f"logging.{key}",
                    message="Must be a boolean",
                    value=params[key]
                ))

        return issues

    @staticmethod
    def validate_config(config: dict[str, Any]) -> list[ConfigIssue]:
        """Validate complete configuration."""
        issues = []

        validators = {
            "store": ConfigValidator.validate_store_params,
            "validation": ConfigValidator.validate_validation_params,
            "logging": ConfigValidator.validate_logging_params,
        }

        for section, validate in validators.items():
            if section not in config:
                continue
            params = config[section]
            if not isinstance(params, dict):
                issues.append(ConfigIssue(
                    field=section,
                    message="Must be a mapping",
                    value=params
                ))
                continue
            issues.extend(validate(params))

        return issues
