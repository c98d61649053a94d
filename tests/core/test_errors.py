"""Tests for error types and codes."""

from collections.abc import Iterator
from contextlib import contextmanager

import pytest

from metamodel.core.errors import (
    ConfigError,
    EmissionError,
    ErrorCode,
    ExtractionError,
    MetamodelError,
)


class TestErrorCode:
    """Error code value tests."""

    @pytest.mark.parametrize(
        ("code", "expected_range"),
        [
            (ErrorCode.CONFIG_PARSE_ERROR, 2000),
            (ErrorCode.CONFIG_INVALID_VALUE, 2000),
            (ErrorCode.SOURCE_NOT_FOUND, 3000),
            (ErrorCode.PARSE_FAILED, 3000),
            (ErrorCode.NO_MATCHING_DECLARATIONS, 3000),
            (ErrorCode.EMBEDDING_CYCLE, 3000),
            (ErrorCode.TEMPLATE_FAILED, 4000),
            (ErrorCode.WRITE_FAILED, 4000),
        ],
    )
    def test_given_error_code_when_checked_then_in_correct_range(
        self, code: ErrorCode, expected_range: int
    ) -> None:
        """Error codes fall within their designated numeric range."""
        assert expected_range <= code.value < expected_range + 1000


class TestMetamodelError:
    """Base error behavior tests."""

    def test_given_error_when_to_dict_then_serializes_all_fields(self) -> None:
        """Error serializes to dict with all required fields."""
        # Given
        error = MetamodelError(
            code=ErrorCode.PARSE_FAILED,
            message="Test message",
            details={"key": "value"},
        )

        # When
        result = error.to_dict()

        # Then
        assert result == {
            "code": 3002,
            "error": "PARSE_FAILED",
            "message": "Test message",
            "details": {"key": "value"},
        }

    def test_given_error_when_str_then_includes_code_and_name(self) -> None:
        error = MetamodelError(code=ErrorCode.WRITE_FAILED, message="boom")
        assert str(error) == "[4002] WRITE_FAILED: boom"

    def test_given_error_when_raised_then_catchable_as_exception(self) -> None:
        with pytest.raises(Exception) as exc_info:
            raise ExtractionError.source_not_found("a.go")
        assert isinstance(exc_info.value, MetamodelError)

    def test_given_error_when_raised_through_context_manager_then_propagates(self) -> None:
        @contextmanager
        def scope() -> Iterator[None]:
            yield

        with pytest.raises(ExtractionError) as exc_info, scope():
            raise ExtractionError.parse_failed("a.go", "missing package clause")
        assert exc_info.value.code == ErrorCode.PARSE_FAILED
        assert exc_info.value.__traceback__ is not None

    def test_given_error_when_annotated_then_exception_state_is_writable(self) -> None:
        error = EmissionError.write_failed("out.go", "disk full")
        error.add_note("while generating order.go")
        error.__traceback__ = None
        assert error.__notes__ == ["while generating order.go"]

    def test_given_error_when_assigning_then_frozen(self) -> None:
        error = ConfigError.parse_error("x.yaml", "bad")
        with pytest.raises(AttributeError):
            error.message = "changed"  # type: ignore[misc]


class TestConfigError:
    """Config error factory tests."""

    def test_parse_error(self) -> None:
        error = ConfigError.parse_error("/path/config.yaml", "invalid syntax")
        assert error.code == ErrorCode.CONFIG_PARSE_ERROR
        assert "/path/config.yaml" in error.message
        assert error.details["path"] == "/path/config.yaml"

    def test_invalid_value(self) -> None:
        error = ConfigError.invalid_value("generation.tag", "", "empty")
        assert error.code == ErrorCode.CONFIG_INVALID_VALUE
        assert "generation.tag" in error.message
        assert error.details["value"] == ""


class TestExtractionError:
    """Extraction error factory tests."""

    def test_source_not_found(self) -> None:
        error = ExtractionError.source_not_found("models/user.go")
        assert error.code == ErrorCode.SOURCE_NOT_FOUND
        assert error.details == {"path": "models/user.go"}

    def test_parse_failed(self) -> None:
        error = ExtractionError.parse_failed("a.go", "syntax error near line 3")
        assert error.code == ErrorCode.PARSE_FAILED
        assert "syntax error near line 3" in error.message

    def test_no_matching_declarations(self) -> None:
        error = ExtractionError.no_matching_declarations("a.go", "bson")
        assert error.code == ErrorCode.NO_MATCHING_DECLARATIONS
        assert error.message == "No structs with 'bson' tagged fields found in a.go"

    def test_embedding_cycle(self) -> None:
        error = ExtractionError.embedding_cycle(["A", "B", "A"])
        assert error.code == ErrorCode.EMBEDDING_CYCLE
        assert error.message == "Cyclic struct embedding: A -> B -> A"
        assert error.details["chain"] == ["A", "B", "A"]


class TestEmissionError:
    """Emission error factory tests."""

    def test_template_failed(self) -> None:
        error = EmissionError.template_failed("common.go.j2", "undefined")
        assert error.code == ErrorCode.TEMPLATE_FAILED
        assert error.details["template"] == "common.go.j2"

    def test_write_failed(self) -> None:
        error = EmissionError.write_failed("/ro/user_metamodel.go", "Permission denied")
        assert error.code == ErrorCode.WRITE_FAILED
        assert error.message == "Failed to write /ro/user_metamodel.go: Permission denied"
