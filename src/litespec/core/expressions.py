"""
Small expression compilers for block-level annotations.

    @can(view: "admin", edit: "owner || admin")   -> {"view": "admin", ...}
    @sort(created_date,desc)                      -> {"name": ..., "dir": ...}
    @breadcrumb(customer_name, - Quote)           -> {"name": ..., "suffix": ...}

``@can`` is also accepted inside a field's annotation list, where it yields
a per-field permission map.
"""

from __future__ import annotations

import re

from .errors import ExpressionFormatError
from .ir import BreadcrumbRule, SortRule

_PERMISSION_PAIR = re.compile(r'(\w+):\s*"([^"]*)"')
_SORT = re.compile(r"^@sort\((.*)\)$")
_BREADCRUMB = re.compile(r"^@breadcrumb\((.*)\)$")


def compile_permission(expression: str) -> dict[str, str]:
    """
    Collect every ``key: "value"`` pair of a permission expression.

    Raises:
        ExpressionFormatError: If no pair is present
    """
    permissions = {key: value for key, value in _PERMISSION_PAIR.findall(expression)}
    if not permissions:
        raise ExpressionFormatError(
            "permission",
            f'Invalid permission expression format: {expression!r} (expected key: "value" pairs)',
        )
    return permissions


def _split_args(argument: str, count: int) -> list[str]:
    parts = [part.strip() for part in argument.split(",", count - 1)]
    return parts + [""] * (count - len(parts))


def compile_sort(expression: str) -> SortRule:
    """Parse ``@sort(name[,dir])``; dir defaults to ``asc``."""
    match = _SORT.match(expression.strip())
    if not match:
        raise ExpressionFormatError("sort", f"Invalid sort expression format: {expression!r}")
    name, direction = _split_args(match.group(1), 2)
    return SortRule(name=name, dir=direction or "asc")


def compile_breadcrumb(expression: str) -> BreadcrumbRule:
    """Parse ``@breadcrumb(name[,suffix])``."""
    match = _BREADCRUMB.match(expression.strip())
    if not match:
        raise ExpressionFormatError(
            "breadcrumb", f"Invalid breadcrumb expression format: {expression!r}"
        )
    name, suffix = _split_args(match.group(1), 2)
    return BreadcrumbRule(name=name, suffix=suffix)
