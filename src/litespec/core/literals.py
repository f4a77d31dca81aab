"""
Literal value coercion shared by ``@default``, ``@const`` and ``@if``.

The ladder, in order:

    ""              -> empty string
    "quoted"        -> quoted (quotes removed)
    true / false    -> bool
    12, -3.5, 1e3   -> int or float (only when the type hint allows numbers)
    anything else   -> the text unchanged
"""

from __future__ import annotations

import re

NUMERIC_TYPES = frozenset({"number", "integer", "decimal"})

_NUMBER_RE = re.compile(r"^[+-]?(\d+(\.\d*)?|\.\d+)([eE][+-]?\d+)?$")
_INTEGER_RE = re.compile(r"^[+-]?\d+$")


def is_numeric(raw: str) -> bool:
    return bool(_NUMBER_RE.match(raw))


def parse_number(raw: str) -> int | float:
    """Parse a numeric literal, keeping integers integral."""
    if _INTEGER_RE.match(raw):
        return int(raw)
    return float(raw)


def unquote(raw: str) -> str:
    if len(raw) >= 2 and raw[0] == raw[-1] and raw[0] in ('"', "'"):
        return raw[1:-1]
    return raw


def coerce_literal(raw: str, type_hint: str | None = None) -> str | bool | int | float:
    """
    Convert a literal written in the DSL to its JSON value.

    Args:
        raw: Literal text as written
        type_hint: Declared type of the receiving field; numeric coercion is
            skipped unless it is None or a numeric type

    Returns:
        The coerced value
    """
    value = raw.strip()
    if value == '""':
        return ""
    if len(value) >= 2 and value[0] == value[-1] == '"':
        return value[1:-1]
    if value in ("true", "false"):
        return value == "true"
    if is_numeric(value) and (type_hint is None or type_hint in NUMERIC_TYPES):
        return parse_number(value)
    return value


def coerce_enum(raw: str) -> list[str]:
    """Split an enum argument into trimmed, unquoted members."""
    return [unquote(member.strip()) for member in raw.split(",")]
