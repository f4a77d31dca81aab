"""Tests for array and reference resolution."""

import pytest

from litespec.core.arrays import OBJECTID_PATTERN, primitive_fragment, resolve_array
from litespec.core.errors import ParseError
from litespec.core.lexer import tokenize_attributes


class TestPrimitiveFragment:
    def test_plain_type(self) -> None:
        assert primitive_fragment("string") == {"type": "string"}

    def test_decimal_alias(self) -> None:
        assert primitive_fragment("decimal") == {"bsonType": "Decimal128"}

    def test_objectid(self) -> None:
        assert primitive_fragment("objectid") == {"type": "string", "pattern": OBJECTID_PATTERN}

    def test_missing_type(self) -> None:
        assert primitive_fragment("") == {}


class TestResolveArray:
    def test_primitive_items(self) -> None:
        raw = "array(string) @minItems(1)"
        fragment, remaining = resolve_array("tags", raw, tokenize_attributes(raw))
        assert fragment == {"type": "array", "items": {"type": "string"}}
        assert [t.raw for t in remaining] == ["@minItems(1)"]

    def test_reference_items_consume_ref(self) -> None:
        raw = "array(@ref(Vehicle)) @uniqueItems"
        fragment, remaining = resolve_array("vehicles", raw, tokenize_attributes(raw))
        assert fragment == {"type": "array", "items": {"$ref": "#/$defs/vehicle"}}
        assert [t.raw for t in remaining] == ["@uniqueItems"]

    def test_other_annotations_naming_the_ref_survive(self) -> None:
        raw = "array(@ref(Vehicle)) @ui(wc-grid,,,,,Vehicle)"
        _, remaining = resolve_array("vehicles", raw, tokenize_attributes(raw))
        assert [t.name for t in remaining] == ["ui"]

    def test_unsupported_spelling(self) -> None:
        with pytest.raises(ParseError, match="Unsupported array type"):
            resolve_array("bad", "array() @required", [])
