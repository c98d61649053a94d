"""Tests for the Go struct tag tokenizer."""

import pytest

from metamodel.extraction._internal.parsing import parse_struct_tag, unquote_go_string


class TestUnquoteGoString:
    """Tests for unquote_go_string."""

    def test_raw_string(self) -> None:
        assert unquote_go_string('`json:"id"`') == 'json:"id"'

    def test_interpreted_string_with_escapes(self) -> None:
        assert unquote_go_string('"a\\tb\\"c"') == 'a\tb"c'

    def test_unicode_and_hex_escapes(self) -> None:
        assert unquote_go_string('"\\u00e9\\x41"') == "éA"

    @pytest.mark.parametrize("literal", ['"abc', "abc", '"a"b"', '"a\\qb"', "`a`b`", '"'])
    def test_malformed_literal_raises(self, literal: str) -> None:
        with pytest.raises(ValueError):
            unquote_go_string(literal)


class TestParseStructTag:
    """Tests for parse_struct_tag."""

    def test_multiple_keys(self) -> None:
        result = parse_struct_tag('json:"id,omitempty" gorm:"primaryKey"')
        assert result == {"json": "id,omitempty", "gorm": "primaryKey"}

    def test_empty_tag(self) -> None:
        assert parse_struct_tag("") == {}

    def test_first_occurrence_wins(self) -> None:
        assert parse_struct_tag('json:"first" json:"second"') == {"json": "first"}

    def test_extra_spaces_between_pairs(self) -> None:
        assert parse_struct_tag('  json:"a"   bson:"b" ') == {"json": "a", "bson": "b"}

    def test_escaped_quote_in_value(self) -> None:
        assert parse_struct_tag('json:"a\\"b"') == {"json": 'a"b'}

    def test_scanning_stops_at_malformed_pair(self) -> None:
        assert parse_struct_tag('json:"a" broken gorm:"column:x"') == {"json": "a"}

    def test_unterminated_value_is_dropped(self) -> None:
        assert parse_struct_tag('json:"a" gorm:"column:x') == {"json": "a"}

    def test_directive_value_kept_verbatim(self) -> None:
        result = parse_struct_tag('gorm:"column:user_name;not null;index"')
        assert result == {"gorm": "column:user_name;not null;index"}
