"""
Line reader and attribute tokenizer for LiteSpec.

LiteSpec is line oriented: every non-blank line is one statement. The reader
normalizes source text into numbered lines; the tokenizer splits the
annotation tail of a statement (``string @required @ui(wc-input,1)``) into
``@name(argument)`` tokens.

Arguments may contain commas and nested parentheses (``@pattern`` regex
groups, ``@if`` argument lists), so tokens are found with a depth counter
rather than a fixed regex.
"""

from dataclasses import dataclass

from .errors import make_parse_error
from .ir import AnnotationKind

COMMENT_PREFIX = "//"


@dataclass(frozen=True)
class SourceLine:
    """
    One normalized statement.

    Attributes:
        number: Line number in the original text (1-indexed)
        text: Trimmed line content
    """

    number: int
    text: str


@dataclass(frozen=True)
class Annotation:
    """
    A single ``@name`` or ``@name(argument)`` token.

    Attributes:
        name: Annotation name without the ``@``
        argument: Text between the outer parentheses, or None when absent
        raw: The token exactly as written
        column: Column of the ``@`` within the scanned text (1-indexed)
    """

    name: str
    argument: str | None
    raw: str
    column: int = 1

    @property
    def kind(self) -> AnnotationKind | None:
        return AnnotationKind.lookup(self.name)

    def __repr__(self) -> str:
        return f"Annotation({self.raw!r}, col={self.column})"


def read_lines(text: str) -> list[SourceLine]:
    """
    Split source text into trimmed, numbered statements.

    Blank lines and ``//`` comment lines are dropped.
    """
    lines: list[SourceLine] = []
    for number, raw in enumerate(text.split("\n"), start=1):
        stripped = raw.strip()
        if not stripped or stripped.startswith(COMMENT_PREFIX):
            continue
        lines.append(SourceLine(number=number, text=stripped))
    return lines


def _is_name_char(ch: str) -> bool:
    return ch.isalnum() or ch == "_"


def tokenize_attributes(
    text: str,
    source: str = "<string>",
    line: int = 0,
    column_offset: int = 0,
) -> list[Annotation]:
    """
    Scan text for annotation tokens in order of appearance.

    Args:
        text: Type-and-annotations string
        source: Input name (for error reporting)
        line: Line number of the text (for error reporting)
        column_offset: Column of ``text[0]`` within its line, minus one

    Returns:
        Annotation tokens; empty when the text holds no ``@``

    Raises:
        ParseError: If an argument's parentheses are never closed
    """
    tokens: list[Annotation] = []
    n = len(text)
    i = 0

    while i < n:
        if text[i] != "@":
            i += 1
            continue

        start = i
        i += 1
        while i < n and _is_name_char(text[i]):
            i += 1
        name = text[start + 1 : i]

        argument = None
        if i < n and text[i] == "(":
            i += 1
            arg_start = i
            depth = 1
            while i < n and depth > 0:
                if text[i] == "(":
                    depth += 1
                elif text[i] == ")":
                    depth -= 1
                i += 1
            if depth > 0:
                raise make_parse_error(
                    f"Unterminated argument for @{name}",
                    source,
                    line,
                    column_offset + start + 1,
                )
            argument = text[arg_start : i - 1]

        tokens.append(
            Annotation(
                name=name,
                argument=argument,
                raw=text[start:i],
                column=column_offset + start + 1,
            )
        )

    return tokens


def split_top_level(text: str, sep: str = ",", maxsplit: int = -1) -> list[str]:
    """
    Split text on ``sep`` occurrences outside any parentheses.

    ``split_top_level("@enum(a,b), @required(c)", maxsplit=1)`` returns
    ``["@enum(a,b)", " @required(c)"]``.
    """
    parts: list[str] = []
    depth = 0
    last = 0
    for i, ch in enumerate(text):
        if ch == "(":
            depth += 1
        elif ch == ")":
            depth -= 1
        elif ch == sep and depth == 0 and (maxsplit < 0 or len(parts) < maxsplit):
            parts.append(text[last:i])
            last = i + 1
    parts.append(text[last:])
    return parts
