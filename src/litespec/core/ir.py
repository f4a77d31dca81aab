"""
Structured values emitted by the LiteSpec compiler.

Most of the output document is plain JSON-Schema dicts; the models here cover
the repository-specific extensions (``sort``, ``breadcrumb``, ``ui``) and the
annotation vocabulary the tokenizer recognizes.
"""

from __future__ import annotations

from enum import Enum

from pydantic import BaseModel, ConfigDict, Field


class AnnotationKind(str, Enum):
    """Annotations understood by the compiler."""

    REQUIRED = "required"
    ENUM = "enum"
    REF = "ref"
    UI = "ui"
    MIN_ITEMS = "minItems"
    MAX_ITEMS = "maxItems"
    MIN_LENGTH = "minLength"
    MAX_LENGTH = "maxLength"
    MINIMUM = "minimum"
    MAXIMUM = "maximum"
    EXCLUSIVE_MINIMUM = "exclusiveMinimum"
    EXCLUSIVE_MAXIMUM = "exclusiveMaximum"
    MULTIPLE_OF = "multipleOf"
    UNIQUE_ITEMS = "uniqueItems"
    FORMAT = "format"
    PATTERN = "pattern"
    DEFAULT = "default"
    CONST = "const"
    CAN = "can"
    UUID = "uuid"
    EMAIL = "email"
    # Block-level expressions
    IF = "if"
    SORT = "sort"
    BREADCRUMB = "breadcrumb"

    @classmethod
    def lookup(cls, name: str) -> AnnotationKind | None:
        """Resolve an annotation name, or None when it is not recognized."""
        try:
            return cls(name)
        except ValueError:
            return None


# Annotations whose argument is a single number written straight into the
# field fragment under the annotation's own name.
NUMERIC_KEYWORDS = frozenset(
    {
        AnnotationKind.MIN_ITEMS,
        AnnotationKind.MAX_ITEMS,
        AnnotationKind.MIN_LENGTH,
        AnnotationKind.MAX_LENGTH,
        AnnotationKind.MINIMUM,
        AnnotationKind.MAXIMUM,
        AnnotationKind.EXCLUSIVE_MINIMUM,
        AnnotationKind.EXCLUSIVE_MAXIMUM,
        AnnotationKind.MULTIPLE_OF,
    }
)


class SortRule(BaseModel):
    """Default ordering for a collection view: ``@sort(name,dir)``."""

    name: str = ""
    dir: str = "asc"

    model_config = ConfigDict(frozen=True)


class BreadcrumbRule(BaseModel):
    """Breadcrumb label source: ``@breadcrumb(name,suffix)``."""

    name: str = ""
    suffix: str = ""

    model_config = ConfigDict(frozen=True)


class UIHints(BaseModel):
    """
    Rendering hints for one field, from ``@ui(...)``.

    Positional DSL order is type, listType, group, order, lookup, collection,
    displayMember, valueMember. Dumped with the camel-case aliases the form
    runtime reads.
    """

    ui_type: str = Field(default="", alias="uiType")
    ui_list_type: str = Field(default="", alias="uiListType")
    ui_order: int = Field(default=0, alias="uiOrder")
    ui_group: str = Field(default="", alias="uiGroup")
    ui_lookup: str = Field(default="", alias="uiLookup")
    ui_collection: str = Field(default="", alias="uiCollection")
    ui_collection_display_member: str = Field(default="", alias="uiCollectionDisplayMember")
    ui_collection_value_member: str = Field(default="", alias="uiCollectionValueMember")

    model_config = ConfigDict(frozen=True, populate_by_name=True)
