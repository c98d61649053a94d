"""Config module exports."""

from metamodel.config.loader import MetamodelSettings, load_config
from metamodel.config.models import (
    GenerationConfig,
    GrammarConfig,
    LoggingConfig,
    MetamodelConfig,
)

__all__ = [
    "load_config",
    "MetamodelConfig",
    "MetamodelSettings",
    "GenerationConfig",
    "GrammarConfig",
    "LoggingConfig",
]
