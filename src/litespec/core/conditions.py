"""
Conditional rule compilation for LiteSpec ``@if`` expressions.

Syntax::

    @if(<property>: <condition annotations>, <action annotations>)

Examples::

    @if(has_prior_coverage: @const(true), @required(prior_coverage_company))
    @if(quote.insurance_type: @enum(auto,motorcycle), @minItems(household_vehicles,1))

compile to JSON-Schema ``if/then`` fragments::

    {"if": {"properties": {"has_prior_coverage": {"const": true}}},
     "then": {"required": ["prior_coverage_company"]}}

    {"if": {"properties": {"quote": {"properties":
        {"insurance_type": {"enum": ["auto", "motorcycle"]}}}}},
     "then": {"properties": {"household_vehicles": {"minItems": 1}}}}

A dotted property walks into referenced sub-objects. Condition and action
lists are separated by the first comma outside parentheses, since the
annotation arguments themselves contain commas.
"""

from __future__ import annotations

import logging
import re
from typing import Any

from .config import CompilerOptions
from .errors import ExpressionFormatError
from .ir import AnnotationKind
from .lexer import Annotation, split_top_level, tokenize_attributes
from .literals import coerce_enum, coerce_literal

logger = logging.getLogger(__name__)

_PROPERTY_PATH = re.compile(r"^\w+(\.\w+)*$")
_TARGET = re.compile(r"^\w+$")


def _format_error(expression: str, reason: str) -> ExpressionFormatError:
    return ExpressionFormatError("if", f"Invalid IF expression format ({reason}): {expression}")


def compile_condition(expression: str, options: CompilerOptions | None = None) -> dict[str, Any]:
    """
    Compile one ``@if`` expression into a rule.

    Args:
        expression: The full ``@if(...)`` statement
        options: Compiler options (``require_condition_properties``)

    Returns:
        ``{"if": {...}, "then": {...}}``

    Raises:
        ExpressionFormatError: If the property, condition or action part is
            missing or malformed
    """
    options = options or CompilerOptions()
    text = expression.strip()
    if not (text.startswith("@if(") and text.endswith(")")):
        raise _format_error(expression, "expected @if(...)")

    body = text[len("@if(") : -1]
    prop, sep, rest = body.partition(":")
    prop = prop.strip()
    if not sep or not _PROPERTY_PATH.match(prop):
        raise _format_error(expression, "expected '<property>:' before the condition")

    segments = split_top_level(rest, ",", maxsplit=1)
    if len(segments) != 2:
        raise _format_error(expression, "expected ', ' between condition and action")
    condition_text, action_text = segments

    conditions = tokenize_attributes(condition_text)
    actions = tokenize_attributes(action_text)
    if not conditions:
        raise _format_error(expression, "no condition annotations")
    if not actions:
        raise _format_error(expression, "no action annotations")

    rule = {
        "if": _build_if(prop.split("."), conditions, expression, options),
        "then": _build_then(actions, expression),
    }
    logger.debug("Compiled @if on %s: %s", prop, rule)
    return rule


def _condition_value(kind: AnnotationKind | None, argument: str) -> Any:
    if kind is AnnotationKind.ENUM:
        return coerce_enum(argument)
    return coerce_literal(argument)


def _build_if(
    path: list[str],
    conditions: list[Annotation],
    expression: str,
    options: CompilerOptions,
) -> dict[str, Any]:
    keywords: dict[str, Any] = {}
    for token in conditions:
        if token.argument is None:
            raise _format_error(expression, f"condition {token.raw} has no value")
        keywords[token.name] = _condition_value(token.kind, token.argument)

    # Innermost segment carries the keywords; each outer one wraps it.
    node: dict[str, Any] = keywords
    for segment in reversed(path):
        wrapper: dict[str, Any] = {"properties": {segment: node}}
        if options.require_condition_properties:
            wrapper["required"] = [segment]
        node = wrapper
    return node


def _build_then(actions: list[Annotation], expression: str) -> dict[str, Any]:
    then: dict[str, Any] = {}
    for token in actions:
        argument = token.argument
        if argument is None:
            raise _format_error(expression, f"action {token.raw} has no argument")

        if token.kind is AnnotationKind.REQUIRED:
            names = [name.strip() for name in argument.split(",") if name.strip()]
            then.setdefault("required", []).extend(names)
            continue

        pair = split_top_level(argument, ",", maxsplit=1)
        if len(pair) == 2 and _TARGET.match(pair[0].strip()):
            target, value = pair[0].strip(), pair[1].strip()
            coerced = coerce_enum(value) if token.kind is AnnotationKind.ENUM else coerce_literal(value)
            then.setdefault("properties", {}).setdefault(target, {})[token.name] = coerced
        else:
            # Flat form: keyword applies to the whole object.
            then[token.name] = argument
    return then
