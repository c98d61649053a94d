"""Pydantic configuration models with env var support.

Configuration Hierarchy (highest to lowest precedence):
1. Direct kwargs to load_config()
2. Environment variables (METAMODEL__SECTION__KEY)
3. Project YAML (.metamodel.yaml)
4. Global YAML (~/.config/metamodel/config.yaml)
5. Built-in defaults (this file)

Environment Variable Format:
    METAMODEL__<SECTION>__<KEY>=<VALUE>

Examples:
    METAMODEL__LOGGING__LEVEL=DEBUG
    METAMODEL__GENERATION__TAG=gorm
    METAMODEL__GRAMMAR__EMBEDDED_MARKER=embedded
"""

from pathlib import Path
from typing import Literal

from pydantic import BaseModel, Field, field_validator

from metamodel.config.constants import (
    DEFAULT_DIRECTIVE_KEYS,
    DEFAULT_DIRECTIVE_NAMESPACES,
    DEFAULT_EMBEDDED_MARKER,
    DEFAULT_OUTPUT_SUFFIX,
    DEFAULT_SECONDARY_NAMESPACE,
    DEFAULT_TAG,
)

LogLevel = Literal["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"]


class LogOutputConfig(BaseModel):
    """Single logging output configuration.

    Env vars: Not directly configurable via env (use YAML for multi-output).
    """

    format: Literal["json", "console"] = "console"
    destination: str = "stderr"  # stderr, stdout, or absolute file path
    level: LogLevel | None = None  # Inherits from parent if None

    @field_validator("destination")
    @classmethod
    def validate_destination(cls, v: str) -> str:
        if v in ("stderr", "stdout"):
            return v
        path = Path(v).expanduser()
        if not path.is_absolute():
            raise ValueError(f"File destination must be absolute path: {v}")
        return str(path)


class LoggingConfig(BaseModel):
    """Logging configuration.

    Env vars:
        METAMODEL__LOGGING__LEVEL: Log level (DEBUG, INFO, WARNING, ERROR, CRITICAL)
    """

    level: LogLevel = Field(
        default="WARNING",
        description="Root log level. DEBUG traces every resolution step.",
    )
    outputs: list[LogOutputConfig] = Field(default_factory=lambda: [LogOutputConfig()])


class GrammarConfig(BaseModel):
    """Tag grammar configuration.

    Env vars:
        METAMODEL__GRAMMAR__SECONDARY_NAMESPACE: Fallback namespace for directive tags
        METAMODEL__GRAMMAR__EMBEDDED_MARKER: Marker that inlines anonymous fields
    """

    directive_namespaces: list[str] = Field(
        default_factory=lambda: list(DEFAULT_DIRECTIVE_NAMESPACES),
        description="Tag namespaces parsed as ';'-separated directive lists. "
        "Every other namespace is parsed as a ','-separated option list.",
    )
    directive_keys: list[str] = Field(
        default_factory=lambda: list(DEFAULT_DIRECTIVE_KEYS),
        description="Directive keys whose value is the canonical field name. "
        "All keys have equal precedence; the first directive that matches wins.",
    )
    secondary_namespace: str = Field(
        default=DEFAULT_SECONDARY_NAMESPACE,
        description="Namespace consulted when no directive key matches.",
    )
    embedded_marker: str = Field(
        default=DEFAULT_EMBEDDED_MARKER,
        description="Directive marker that inlines an anonymous field's struct.",
    )

    @field_validator("directive_keys")
    @classmethod
    def validate_directive_keys(cls, v: list[str]) -> list[str]:
        if not v:
            raise ValueError("At least one directive key is required")
        return v


class GenerationConfig(BaseModel):
    """Code generation configuration.

    Env vars:
        METAMODEL__GENERATION__TAG: Tag namespace to extract (json, bson, gorm, ...)
        METAMODEL__GENERATION__PACKAGE_NAME: Package name for generated files
        METAMODEL__GENERATION__TABLE_NAME: Table name used for every struct
        METAMODEL__GENERATION__GOFMT: Format generated files with gofmt
    """

    tag: str = Field(
        default=DEFAULT_TAG,
        description="Tag namespace to generate field handles from.",
    )
    package_name: str | None = Field(
        default=None,
        description="Package name for generated files. Default: source package.",
    )
    table_name: str | None = Field(
        default=None,
        description="Table name for every struct. Default: snake_case plural of the struct name.",
    )
    gofmt: bool = Field(
        default=True,
        description="Run gofmt on generated files when it is on PATH.",
    )
    output_suffix: str = Field(
        default=DEFAULT_OUTPUT_SUFFIX,
        description="Suffix replacing the source extension for the metamodel file.",
    )

    @field_validator("tag")
    @classmethod
    def validate_tag(cls, v: str) -> str:
        v = v.strip()
        if not v or any(c in v for c in ' :"'):
            raise ValueError(f"Not a valid struct tag key: {v!r}")
        return v

    @field_validator("output_suffix")
    @classmethod
    def validate_output_suffix(cls, v: str) -> str:
        if not v.endswith(".go"):
            raise ValueError(f"Output suffix must end with .go, got {v!r}")
        return v


class MetamodelConfig(BaseModel):
    """Root configuration for metamodel.

    All settings can be configured via:
    1. Environment variables: METAMODEL__SECTION__KEY
    2. YAML config files (project or global)
    3. Direct kwargs to load_config()
    """

    logging: LoggingConfig = Field(default_factory=LoggingConfig)
    grammar: GrammarConfig = Field(default_factory=GrammarConfig)
    generation: GenerationConfig = Field(default_factory=GenerationConfig)
