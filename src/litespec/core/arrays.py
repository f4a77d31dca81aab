"""
Array and reference resolution for field types.

    tags: array(string)                 -> items: {"type": "string"}
    vehicles: array(@ref(Vehicle))      -> items: {"$ref": "#/$defs/vehicle"}

A bare ``array @ref(Name)`` is not handled here: it is an ordinary
``array`` field whose ``@ref`` annotation lands on the field itself.
"""

from __future__ import annotations

import re
from typing import Any

from .attributes import ref_path
from .errors import ParseError
from .lexer import Annotation

ARRAY_PREFIX = "array("

_PRIMITIVE_ARRAY = re.compile(r"^array\((\w+)\)")
_REF_ARRAY = re.compile(r"^array\((@ref\((\w+)\))\)")

OBJECTID_PATTERN = "^([0-9a-fA-F]{24})?$"


def primitive_fragment(type_name: str) -> dict[str, Any]:
    """
    Schema for a primitive type name.

    ``decimal`` maps to a BSON ``Decimal128``; ``objectid`` to a 24-digit
    hex string that may be left empty until the record is stored.
    """
    if type_name == "decimal":
        return {"bsonType": "Decimal128"}
    if type_name == "objectid":
        return {"type": "string", "pattern": OBJECTID_PATTERN}
    if not type_name:
        return {}
    return {"type": type_name}


def is_array_type(raw_type: str) -> bool:
    return raw_type.startswith(ARRAY_PREFIX)


def resolve_array(
    field_name: str, raw_type: str, tokens: list[Annotation]
) -> tuple[dict[str, Any], list[Annotation]]:
    """
    Build the schema of an ``array(...)`` field.

    Args:
        field_name: Property name (for error messages)
        raw_type: Field type text starting with ``array(``
        tokens: All annotations found in ``raw_type``

    Returns:
        ``(fragment, remaining_tokens)``; for a reference array the
        consumed ``@ref`` token is left out of ``remaining_tokens`` so it is
        not applied to the array itself

    Raises:
        ParseError: If the item type is neither a name nor ``@ref(Name)``
    """
    ref_match = _REF_ARRAY.match(raw_type)
    if ref_match:
        consumed = ref_match.group(1)
        fragment: dict[str, Any] = {"type": "array", "items": {"$ref": ref_path(ref_match.group(2))}}
        remaining = list(tokens)
        for index, token in enumerate(remaining):
            if token.raw == consumed:
                del remaining[index]
                break
        return fragment, remaining

    primitive_match = _PRIMITIVE_ARRAY.match(raw_type)
    if primitive_match:
        item_type = primitive_match.group(1)
        return {"type": "array", "items": primitive_fragment(item_type)}, list(tokens)

    raise ParseError(
        f"Unsupported array type for field '{field_name}': {raw_type.split(' ')[0]} "
        "(expected array(type) or array(@ref(Name)))"
    )
