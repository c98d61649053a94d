"""Core module exports."""

from metamodel.core.errors import (
    ConfigError,
    EmissionError,
    ErrorCode,
    ExtractionError,
    MetamodelError,
)
from metamodel.core.logging import (
    clear_run_id,
    configure_logging,
    get_logger,
    get_run_id,
    set_run_id,
)

__all__ = [
    # Errors
    "ConfigError",
    "EmissionError",
    "ErrorCode",
    "ExtractionError",
    "MetamodelError",
    # Logging
    "clear_run_id",
    "configure_logging",
    "get_logger",
    "get_run_id",
    "set_run_id",
]
