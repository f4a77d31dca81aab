"""
Attribute interpreter: applies a field's annotations.

Each annotation writes to one of four places: the field's schema fragment,
the enclosing block's required list, its UI map, or its field permission
list. Dispatch goes through a table keyed by ``AnnotationKind``; names the
table does not know are ignored.
"""

from __future__ import annotations

import logging
import re
from collections.abc import Callable
from dataclasses import dataclass
from typing import Any

from .config import CompilerOptions
from .errors import MissingArgumentError
from .expressions import compile_permission
from .ir import NUMERIC_KEYWORDS, AnnotationKind, UIHints
from .lexer import Annotation
from .literals import coerce_literal, is_numeric, parse_number
from .scope import ScopeFrame

logger = logging.getLogger(__name__)

_ENUM_ARG = re.compile(r"@enum\((.*?)\)")
_REF_ARG = re.compile(r"@ref\((.*?)\)")

DATE_TIME = "date-time"


def ref_path(name: str) -> str:
    """JSON pointer of a definition: ``Vehicle`` -> ``#/$defs/vehicle``."""
    return f"#/$defs/{name.strip().lower()}"


def declared_type(raw_type: str) -> str:
    """Type name in front of the annotations: ``string @required`` -> ``string``."""
    return raw_type.split("@")[0].strip()


@dataclass
class _FieldContext:
    field_name: str
    raw_type: str
    fragment: dict[str, Any]
    frame: ScopeFrame
    field_permissions: list[dict[str, dict[str, str]]]
    options: CompilerOptions


def _require_argument(token: Annotation) -> str:
    if token.argument is None or not token.argument.strip():
        raise MissingArgumentError(f"@{token.name} needs an argument: {token.raw}")
    return token.argument


def _apply_required(ctx: _FieldContext, token: Annotation) -> None:
    ctx.frame.required.append(ctx.field_name)


def _apply_enum(ctx: _FieldContext, token: Annotation) -> None:
    # Re-read from the full type text so a value may itself mention "@enum".
    match = _ENUM_ARG.search(ctx.raw_type)
    if not match:
        raise MissingArgumentError(f"@enum needs a value list on field '{ctx.field_name}'")
    ctx.fragment["enum"] = [member.strip() for member in match.group(1).split(",")]


def _apply_ref(ctx: _FieldContext, token: Annotation) -> None:
    match = _REF_ARG.search(ctx.raw_type)
    if not match or not match.group(1).strip():
        raise MissingArgumentError(f"@ref needs a definition name on field '{ctx.field_name}'")
    ctx.fragment["$ref"] = ref_path(match.group(1))


def _apply_ui(ctx: _FieldContext, token: Annotation) -> None:
    argument = _require_argument(token)
    slots = [part.strip() for part in argument.split(",")]
    slots += [""] * (8 - len(slots))
    ui_type, list_type, group, order, lookup, collection, display_member, value_member = slots[:8]
    ctx.frame.ui[ctx.field_name] = UIHints(
        ui_type=ui_type,
        ui_list_type=list_type,
        ui_group=group,
        ui_order=int(order) if re.match(r"^[+-]?\d+$", order) else 0,
        ui_lookup=lookup,
        ui_collection=collection,
        ui_collection_display_member=display_member,
        ui_collection_value_member=value_member,
    )


def _apply_number(ctx: _FieldContext, token: Annotation) -> None:
    argument = _require_argument(token).strip()
    if not is_numeric(argument):
        raise MissingArgumentError(f"@{token.name} expects a number, got {argument!r}")
    ctx.fragment[token.name] = parse_number(argument)


def _apply_unique_items(ctx: _FieldContext, token: Annotation) -> None:
    ctx.fragment["uniqueItems"] = True


def _apply_format(ctx: _FieldContext, token: Annotation) -> None:
    value = _require_argument(token).strip()
    if value == DATE_TIME:
        # Accept either a real timestamp or an empty string.
        ctx.fragment.pop("type", None)
        ctx.fragment["anyOf"] = [
            {"type": "string", "format": DATE_TIME},
            {"type": "string", "enum": [""]},
        ]
    else:
        ctx.fragment["format"] = value


def _apply_email(ctx: _FieldContext, token: Annotation) -> None:
    ctx.fragment["format"] = "email"


def _apply_uuid(ctx: _FieldContext, token: Annotation) -> None:
    ctx.fragment["format"] = "uuid"


def _apply_pattern(ctx: _FieldContext, token: Annotation) -> None:
    ctx.fragment["pattern"] = _require_argument(token)


def _apply_default(ctx: _FieldContext, token: Annotation) -> None:
    if token.argument is None:
        raise MissingArgumentError(f"@default needs a value on field '{ctx.field_name}'")
    hint = None if ctx.options.default_coercion == "legacy" else declared_type(ctx.raw_type)
    ctx.fragment["default"] = coerce_literal(token.argument, hint)


def _apply_const(ctx: _FieldContext, token: Annotation) -> None:
    if token.argument is None:
        raise MissingArgumentError(f"@const needs a value on field '{ctx.field_name}'")
    ctx.fragment["const"] = coerce_literal(token.argument)


def _apply_can(ctx: _FieldContext, token: Annotation) -> None:
    ctx.field_permissions.append({ctx.field_name: compile_permission(token.argument or "")})


_HANDLERS: dict[AnnotationKind, Callable[[_FieldContext, Annotation], None]] = {
    AnnotationKind.REQUIRED: _apply_required,
    AnnotationKind.ENUM: _apply_enum,
    AnnotationKind.REF: _apply_ref,
    AnnotationKind.UI: _apply_ui,
    AnnotationKind.UNIQUE_ITEMS: _apply_unique_items,
    AnnotationKind.FORMAT: _apply_format,
    AnnotationKind.EMAIL: _apply_email,
    AnnotationKind.UUID: _apply_uuid,
    AnnotationKind.PATTERN: _apply_pattern,
    AnnotationKind.DEFAULT: _apply_default,
    AnnotationKind.CONST: _apply_const,
    AnnotationKind.CAN: _apply_can,
    **{kind: _apply_number for kind in NUMERIC_KEYWORDS},
}


def apply_attributes(
    tokens: list[Annotation],
    field_name: str,
    raw_type: str,
    fragment: dict[str, Any],
    frame: ScopeFrame,
    field_permissions: list[dict[str, dict[str, str]]],
    options: CompilerOptions | None = None,
) -> None:
    """
    Apply annotation tokens to a field, in order.

    Args:
        tokens: Annotations from the field's type text
        field_name: Property name
        raw_type: Everything after the field's ``:`` (type and annotations)
        fragment: Field schema, updated in place
        frame: Enclosing block; receives required names and UI hints
        field_permissions: Receives ``{field_name: permissions}`` for ``@can``
        options: Compiler options (``default_coercion``)

    Raises:
        MissingArgumentError: If an annotation lacks a usable argument
        ExpressionFormatError: If a ``@can`` expression is malformed
    """
    ctx = _FieldContext(
        field_name=field_name,
        raw_type=raw_type,
        fragment=fragment,
        frame=frame,
        field_permissions=field_permissions,
        options=options or CompilerOptions(),
    )
    for token in tokens:
        kind = token.kind
        handler = _HANDLERS.get(kind) if kind is not None else None
        if handler is None:
            logger.debug("Ignoring annotation %s on field %s", token.raw, field_name)
            continue
        handler(ctx, token)
