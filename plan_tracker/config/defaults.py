"""Default configuration parameters for the plan tracker."""

from dataclasses import dataclass


@dataclass(frozen=True)
class StoreParams:
    """Plan store behaviour."""
    latency_ms: int = 0                 # Simulated latency awaited by every operation
    id_start: int = 1                   # First value of the shared id counter


@dataclass(frozen=True)
class ValidationParams:
    """Input validation rules applied before any mutation."""
    min_title_length: int = 1
    min_objective_length: int = 1
    min_description_length: int = 1
    strip_whitespace: bool = True       # Trim text fields before checking and storing
    require_future_deadline: bool = False


@dataclass(frozen=True)
class LoggingParams:
    """Logging output parameters."""
    level: str = "INFO"
    format_json: bool = False
    include_timestamp: bool = True
    include_caller: bool = False


@dataclass(frozen=True)
class TrackerConfig:
    """Complete configuration."""
    store: StoreParams
    validation: ValidationParams
    logging: LoggingParams


def get_default_config() -> TrackerConfig:
    """Get the default configuration instance."""
    return TrackerConfig(
        store=StoreParams(),
        validation=ValidationParams(),
        logging=LoggingParams(),
    )
