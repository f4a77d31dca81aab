"""
Per-block working state of the compiler.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any

from .ir import BreadcrumbRule, SortRule, UIHints


@dataclass
class ScopeFrame:
    """
    State for one open ``def`` or ``model`` block.

    Attributes:
        name: Block name as written
        kind: ``model``, ``object`` or ``array``
        target: Object schema receiving ``properties`` (for an array
            definition this is its ``items``)
        line: Line number of the block header
        required: Field names marked ``@required``, in order
        ui: ``@ui`` hints keyed by field name
        rules: Compiled ``@if`` rules
        sort: ``@sort`` rules
        breadcrumb: ``@breadcrumb`` rules
        collection_permissions: Merged block-level ``@can`` maps
        field_permissions: ``{field: permissions}`` maps from field ``@can``
    """

    name: str
    kind: str
    target: dict[str, Any]
    line: int = 0
    required: list[str] = field(default_factory=list)
    ui: dict[str, UIHints] = field(default_factory=dict)
    rules: list[dict[str, Any]] = field(default_factory=list)
    sort: list[SortRule] = field(default_factory=list)
    breadcrumb: list[BreadcrumbRule] = field(default_factory=list)
    collection_permissions: dict[str, str] = field(default_factory=dict)
    field_permissions: list[dict[str, dict[str, str]]] = field(default_factory=list)

    @property
    def properties(self) -> dict[str, Any]:
        props: dict[str, Any] = self.target.setdefault("properties", {})
        return props

    def flush(self) -> dict[str, Any]:
        """
        Attach accumulated state to the target schema and return it.

        Only non-empty collections are written.
        """
        target = self.target
        if self.ui:
            target["ui"] = {name: hints.model_dump(by_alias=True) for name, hints in self.ui.items()}
        if self.required:
            target["required"] = list(self.required)
        if self.rules:
            target["allOf"] = list(self.rules)
        if self.sort:
            target["sort"] = [rule.model_dump() for rule in self.sort]
        if self.breadcrumb:
            target["breadcrumb"] = [rule.model_dump() for rule in self.breadcrumb]
        if self.collection_permissions or self.field_permissions:
            permissions: dict[str, Any] = target.setdefault("permissions", {})
            if self.collection_permissions:
                permissions["collection"] = dict(self.collection_permissions)
            if self.field_permissions:
                permissions["field"] = list(self.field_permissions)
        return target
