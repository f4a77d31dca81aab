"""Tests for the line reader and attribute tokenizer."""

import pytest

from litespec.core.errors import ParseError
from litespec.core.ir import AnnotationKind
from litespec.core.lexer import read_lines, split_top_level, tokenize_attributes


class TestReadLines:
    """Source text is normalized into numbered statements."""

    def test_trims_and_drops_blank_lines(self) -> None:
        lines = read_lines("\n  model X object {\n\n    name: string\n  }\n")
        assert [line.text for line in lines] == ["model X object {", "name: string", "}"]

    def test_keeps_original_line_numbers(self) -> None:
        lines = read_lines("\n\nmodel X object {\n\n  name: string\n}")
        assert [line.number for line in lines] == [3, 5, 6]

    def test_drops_comment_lines(self) -> None:
        lines = read_lines("// header comment\nmodel X object {\n  // note\n}")
        assert [line.text for line in lines] == ["model X object {", "}"]

    def test_empty_input(self) -> None:
        assert read_lines("") == []
        assert read_lines("   \n\t\n") == []


class TestTokenizeAttributes:
    """Annotations are found in order, with balanced arguments."""

    def test_no_annotations(self) -> None:
        assert tokenize_attributes("string") == []

    def test_bare_and_argument_annotations(self) -> None:
        tokens = tokenize_attributes("string @required @minLength(2)")
        assert [t.raw for t in tokens] == ["@required", "@minLength(2)"]
        assert tokens[0].argument is None
        assert tokens[1].argument == "2"

    def test_argument_with_commas(self) -> None:
        tokens = tokenize_attributes("string @ui(wc-input,list,main,1)")
        assert tokens[0].name == "ui"
        assert tokens[0].argument == "wc-input,list,main,1"

    def test_nested_parentheses(self) -> None:
        tokens = tokenize_attributes(r"string @pattern(^(\d{3})-(\d{4})$) @required")
        assert tokens[0].argument == r"^(\d{3})-(\d{4})$"
        assert tokens[1].raw == "@required"

    def test_nested_annotation_inside_argument(self) -> None:
        tokens = tokenize_attributes("array(@ref(Vehicle)) @uniqueItems")
        assert [t.raw for t in tokens] == ["@ref(Vehicle)", "@uniqueItems"]

    def test_kind_resolves_known_names(self) -> None:
        tokens = tokenize_attributes("@enum(a,b) @whatever(1)")
        assert tokens[0].kind is AnnotationKind.ENUM
        assert tokens[1].kind is None

    def test_columns_are_one_indexed(self) -> None:
        tokens = tokenize_attributes("string @required", column_offset=6)
        assert tokens[0].column == 14

    def test_unterminated_argument(self) -> None:
        with pytest.raises(ParseError, match="Unterminated argument for @pattern"):
            tokenize_attributes("string @pattern(abc", source="x.ls", line=4)


class TestSplitTopLevel:
    """Separators inside parentheses are not split points."""

    def test_first_top_level_comma(self) -> None:
        parts = split_top_level("@enum(a,b), @required(c), @required(d)", maxsplit=1)
        assert parts == ["@enum(a,b)", " @required(c), @required(d)"]

    def test_no_top_level_separator(self) -> None:
        assert split_top_level("@enum(a,b)") == ["@enum(a,b)"]

    def test_split_all(self) -> None:
        assert split_top_level("a,(b,c),d") == ["a", "(b,c)", "d"]
