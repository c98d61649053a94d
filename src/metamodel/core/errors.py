"""metamodel error types with typed error codes.

Error code ranges:
- 2xxx: Config
- 3xxx: Extraction
- 4xxx: Emission
"""

from dataclasses import dataclass, field
from enum import IntEnum
from typing import Any


class ErrorCode(IntEnum):
    """Typed error codes for programmatic handling."""

    # Config (2xxx)
    CONFIG_PARSE_ERROR = 2001
    CONFIG_INVALID_VALUE = 2002

    # Extraction (3xxx)
    SOURCE_NOT_FOUND = 3001
    PARSE_FAILED = 3002
    NO_MATCHING_DECLARATIONS = 3003
    EMBEDDING_CYCLE = 3004

    # Emission (4xxx)
    TEMPLATE_FAILED = 4001
    WRITE_FAILED = 4002


@dataclass(frozen=True)
class MetamodelError(Exception):
    """Base error with structured context."""

    code: ErrorCode
    message: str
    details: dict[str, Any] = field(default_factory=dict)

    @property
    def error_name(self) -> str:
        """String identifier for logging (e.g., 'PARSE_FAILED')."""
        return self.code.name

    def to_dict(self) -> dict[str, Any]:
        """Serialize for JSON output."""
        return {
            "code": self.code.value,
            "error": self.error_name,
            "message": self.message,
            "details": self.details,
        }

    def __str__(self) -> str:
        return f"[{self.code.value}] {self.error_name}: {self.message}"


class ConfigError(MetamodelError):
    """Configuration-related errors."""

    @classmethod
    def parse_error(cls, path: str, reason: str) -> "ConfigError":
        return cls(
            code=ErrorCode.CONFIG_PARSE_ERROR,
            message=f"Failed to parse config at {path}: {reason}",
            details={"path": path, "reason": reason},
        )

    @classmethod
    def invalid_value(cls, field: str, value: Any, reason: str) -> "ConfigError":
        return cls(
            code=ErrorCode.CONFIG_INVALID_VALUE,
            message=f"Invalid value for '{field}': {reason}",
            details={"field": field, "value": str(value), "reason": reason},
        )


class ExtractionError(MetamodelError):
    """Run-level failures of the metadata extraction engine.

    Only failures on the primary input surface as this error. Problems met
    while exploring sibling files or other packages are absorbed by the
    resolver and never raised.
    """

    @classmethod
    def source_not_found(cls, path: str) -> "ExtractionError":
        return cls(
            code=ErrorCode.SOURCE_NOT_FOUND,
            message=f"Source file not found: {path}",
            details={"path": path},
        )

    @classmethod
    def parse_failed(cls, path: str, reason: str) -> "ExtractionError":
        return cls(
            code=ErrorCode.PARSE_FAILED,
            message=f"Failed to parse file {path}: {reason}",
            details={"path": path, "reason": reason},
        )

    @classmethod
    def no_matching_declarations(cls, path: str, tag: str) -> "ExtractionError":
        return cls(
            code=ErrorCode.NO_MATCHING_DECLARATIONS,
            message=f"No structs with '{tag}' tagged fields found in {path}",
            details={"path": path, "tag": tag},
        )

    @classmethod
    def embedding_cycle(cls, chain: list[str]) -> "ExtractionError":
        return cls(
            code=ErrorCode.EMBEDDING_CYCLE,
            message=f"Cyclic struct embedding: {' -> '.join(chain)}",
            details={"chain": chain},
        )


class EmissionError(MetamodelError):
    """Failures while rendering or writing generated files."""

    @classmethod
    def template_failed(cls, template: str, reason: str) -> "EmissionError":
        return cls(
            code=ErrorCode.TEMPLATE_FAILED,
            message=f"Failed to render template {template}: {reason}",
            details={"template": template, "reason": reason},
        )

    @classmethod
    def write_failed(cls, path: str, reason: str) -> "EmissionError":
        return cls(
            code=ErrorCode.WRITE_FAILED,
            message=f"Failed to write {path}: {reason}",
            details={"path": path, "reason": reason},
        )

