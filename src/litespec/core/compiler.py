"""
LiteSpec to JSON Schema compiler.

Walks the normalized line stream with a small recursive-descent parser. Each
``def``/``model`` header opens a ScopeFrame and recurses into the block
body; the matching ``}`` flushes the frame onto its schema node. The Python
call stack is the scope stack, so an unmatched ``}`` or an unclosed block
is reported as a StructuralError at the offending line.

Example::

    def Address object {
      street: string @required
    }

    model Customer object {
      gender: string @required @enum(male,female)
      address: object @ref(Address)
      @sort(last_name,asc)
    }
"""

from __future__ import annotations

import logging
import re
from pathlib import Path
from typing import Any

from .arrays import is_array_type, primitive_fragment, resolve_array
from .attributes import apply_attributes, declared_type
from .conditions import compile_condition
from .config import CompilerOptions
from .errors import ErrorContext, ParseError, make_parse_error, make_structural_error
from .expressions import compile_breadcrumb, compile_permission, compile_sort
from .ir import AnnotationKind
from .lexer import SourceLine, read_lines, tokenize_attributes
from .scope import ScopeFrame

logger = logging.getLogger(__name__)

_DEF_HEADER = re.compile(r"^def\s+(\w+)\s+(object|array)\b")
_MODEL_HEADER = re.compile(r"^model\s+(\w+)")
_ANNOTATION_NAME = re.compile(r"^@(\w+)")


def _is_def(text: str) -> bool:
    return text.startswith("def ")


def _is_model(text: str) -> bool:
    return text.startswith("model ")


def _is_close(text: str) -> bool:
    return text.startswith("}")


class SchemaCompiler:
    """
    Compiles one LiteSpec document into a JSON-Schema dict.

    A compiler instance owns its document and is used for a single run;
    create a new one (or call ``compile_dsl``) per input.
    """

    def __init__(
        self,
        text: str,
        source: str = "<string>",
        options: CompilerOptions | None = None,
    ):
        """
        Initialize compiler.

        Args:
            text: LiteSpec source
            source: Input name used in error messages
            options: Compiler options (defaults when None)
        """
        self.lines = read_lines(text)
        self.source = source
        self.options = options or CompilerOptions()
        self.pos = 0
        self.depth = 0
        self.schema: dict[str, Any] = {"$defs": {}}
        self._model_line: int | None = None

    def current_line(self) -> SourceLine | None:
        """Get current line or None at end of input."""
        if self.pos >= len(self.lines):
            return None
        return self.lines[self.pos]

    def advance(self) -> SourceLine:
        """Consume and return current line."""
        line = self.lines[self.pos]
        self.pos += 1
        return line

    def compile(self) -> dict[str, Any]:
        """
        Compile the whole document.

        Returns:
            The schema document

        Raises:
            ParseError: On any malformed line (StructuralError for
                unbalanced blocks)
        """
        while (line := self.current_line()) is not None:
            if _is_def(line.text):
                self._parse_definition(line)
            elif _is_model(line.text):
                self._parse_model(line)
            elif _is_close(line.text):
                raise make_structural_error(
                    "Unmatched '}' (no open block)", self.source, line.number, line.text
                )
            else:
                raise make_structural_error(
                    "Statement outside of a def or model block",
                    self.source,
                    line.number,
                    line.text,
                )
        return self.schema

    # ------------------------------------------------------------------
    # Blocks

    def _parse_definition(self, header: SourceLine) -> None:
        match = _DEF_HEADER.match(header.text)
        if not match:
            raise make_parse_error(
                "Invalid def header (expected: def <Name> object|array {)",
                self.source,
                header.number,
                snippet=header.text,
            )
        name, shape = match.groups()
        key = name.lower()
        definitions = self.schema["$defs"]
        if key in definitions:
            logger.warning(
                "%s:%d: definition '%s' redefined", self.source, header.number, name
            )

        definition: dict[str, Any]
        if shape == "object":
            definition = {"type": "object", "properties": {}}
            target = definition
        else:
            definition = {"type": "array", "items": {"type": "object", "properties": {}}}
            target = definition["items"]
        definitions[key] = definition

        self._parse_block(ScopeFrame(name=name, kind=shape, target=target, line=header.number))

    def _parse_model(self, header: SourceLine) -> None:
        if self.depth > 0:
            raise make_structural_error(
                "A model block cannot be nested inside another block",
                self.source,
                header.number,
                header.text,
            )
        if self._model_line is not None:
            raise make_structural_error(
                f"Only one model block is allowed (first one at line {self._model_line})",
                self.source,
                header.number,
                header.text,
            )
        match = _MODEL_HEADER.match(header.text)
        if not match:
            raise make_parse_error(
                "Invalid model header (expected: model <Name> object {)",
                self.source,
                header.number,
                snippet=header.text,
            )
        name = match.group(1)
        self._model_line = header.number
        self.schema["title"] = name.lower()
        self.schema["type"] = "object"
        self.schema["properties"] = {}

        self._parse_block(ScopeFrame(name=name, kind="model", target=self.schema, line=header.number))

    def _parse_block(self, frame: ScopeFrame) -> None:
        """Parse a block body after its header, up to and including ``}``."""
        header = self.advance()
        _, brace, trailing = header.text.partition("{")
        if brace and trailing.strip():
            raise make_structural_error(
                f"Block '{frame.name}' has statements after '{{' on its header line "
                "(one-line blocks are not supported; start the body on the next line)",
                self.source,
                header.number,
                header.text,
            )
        self.depth += 1
        logger.debug("Opened %s '%s' at line %d (depth %d)", frame.kind, frame.name, frame.line, self.depth)

        while True:
            line = self.current_line()
            if line is None:
                raise make_structural_error(
                    f"Block '{frame.name}' is never closed (missing '}}')",
                    self.source,
                    frame.line,
                    self._line_text(frame.line),
                )
            if _is_close(line.text):
                self.advance()
                frame.flush()
                self.depth -= 1
                logger.debug("Closed %s '%s' at line %d", frame.kind, frame.name, line.number)
                return
            if _is_def(line.text):
                self._parse_definition(line)
                continue
            if _is_model(line.text):
                self._parse_model(line)
                continue

            try:
                self._compile_statement(line, frame)
            except ParseError as e:
                e.with_context(
                    ErrorContext(source=self.source, line=line.number, snippet=line.text)
                )
                raise
            self.advance()

    def _line_text(self, number: int) -> str | None:
        for line in self.lines:
            if line.number == number:
                return line.text
        return None

    # ------------------------------------------------------------------
    # Statements

    def _compile_statement(self, line: SourceLine, frame: ScopeFrame) -> None:
        if line.text.startswith("@"):
            self._compile_block_annotation(line, frame)
        else:
            self._compile_field(line, frame)

    def _compile_block_annotation(self, line: SourceLine, frame: ScopeFrame) -> None:
        match = _ANNOTATION_NAME.match(line.text)
        kind = AnnotationKind.lookup(match.group(1)) if match else None

        if kind is AnnotationKind.IF:
            frame.rules.append(compile_condition(line.text, self.options))
        elif kind is AnnotationKind.BREADCRUMB:
            frame.breadcrumb.append(compile_breadcrumb(line.text))
        elif kind is AnnotationKind.SORT:
            frame.sort.append(compile_sort(line.text))
        elif kind is AnnotationKind.CAN:
            frame.collection_permissions.update(compile_permission(line.text))
        else:
            logger.warning(
                "%s:%d: skipping unsupported block annotation: %s",
                self.source,
                line.number,
                line.text,
            )

    def _compile_field(self, line: SourceLine, frame: ScopeFrame) -> None:
        text = line.text
        field_name, sep, rest = text.partition(":")
        field_name = field_name.strip()
        if not sep or not field_name:
            raise make_parse_error(
                "Expected a field declaration '<name>: <type> [@annotations]'",
                self.source,
                line.number,
                snippet=text,
            )
        raw_type = rest.strip()
        offset = len(text) - len(rest) + (len(rest) - len(rest.lstrip()))
        tokens = tokenize_attributes(raw_type, self.source, line.number, offset)

        if is_array_type(raw_type):
            fragment, tokens = resolve_array(field_name, raw_type, tokens)
        else:
            fragment = primitive_fragment(declared_type(raw_type))

        apply_attributes(
            tokens,
            field_name,
            raw_type,
            fragment,
            frame,
            frame.field_permissions,
            self.options,
        )

        properties = frame.properties
        if field_name in properties:
            logger.warning(
                "%s:%d: field '%s' declared twice in '%s'",
                self.source,
                line.number,
                field_name,
                frame.name,
            )
        properties[field_name] = fragment


def compile_dsl(
    text: str,
    options: CompilerOptions | None = None,
    source: str = "<string>",
) -> dict[str, Any]:
    """
    Convenience function to compile LiteSpec text.

    Args:
        text: LiteSpec source
        options: Compiler options
        source: Input name for error messages

    Returns:
        JSON-Schema document
    """
    return SchemaCompiler(text, source=source, options=options).compile()


def compile_file(path: Path | str, options: CompilerOptions | None = None) -> dict[str, Any]:
    """Read a ``.ls`` file and compile it."""
    path = Path(path)
    return compile_dsl(path.read_text(encoding="utf-8"), options=options, source=str(path))
