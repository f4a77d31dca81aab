"""Tests for the compiler's structured output values and block state."""

from litespec.core.ir import (
    NUMERIC_KEYWORDS,
    AnnotationKind,
    BreadcrumbRule,
    SortRule,
    UIHints,
)
from litespec.core.scope import ScopeFrame


class TestAnnotationKind:
    def test_lookup_known(self) -> None:
        assert AnnotationKind.lookup("minLength") is AnnotationKind.MIN_LENGTH
        assert AnnotationKind.lookup("if") is AnnotationKind.IF

    def test_lookup_is_case_sensitive(self) -> None:
        assert AnnotationKind.lookup("minlength") is None
        assert AnnotationKind.lookup("bogus") is None

    def test_numeric_keywords(self) -> None:
        assert AnnotationKind.MULTIPLE_OF in NUMERIC_KEYWORDS
        assert AnnotationKind.DEFAULT not in NUMERIC_KEYWORDS


class TestUIHints:
    def test_dumps_with_aliases(self) -> None:
        hints = UIHints(ui_type="wc-select", ui_order=3)
        dumped = hints.model_dump(by_alias=True)
        assert dumped["uiType"] == "wc-select"
        assert dumped["uiOrder"] == 3
        assert dumped["uiCollectionValueMember"] == ""
        assert len(dumped) == 8

    def test_accepts_aliases(self) -> None:
        assert UIHints(uiGroup="General").ui_group == "General"


class TestScopeFrame:
    def test_flush_skips_empty_collections(self) -> None:
        target = {"type": "object", "properties": {"a": {"type": "string"}}}
        frame = ScopeFrame(name="Thing", kind="object", target=target)
        assert frame.flush() == {"type": "object", "properties": {"a": {"type": "string"}}}

    def test_flush_writes_accumulated_state(self) -> None:
        frame = ScopeFrame(name="Thing", kind="object", target={"type": "object"})
        frame.properties["a"] = {"type": "string"}
        frame.required.append("a")
        frame.sort.append(SortRule(name="a", dir="desc"))
        frame.breadcrumb.append(BreadcrumbRule(name="a", suffix="Thing"))
        frame.collection_permissions["view"] = "admin"
        frame.field_permissions.append({"a": {"edit": "admin"}})

        schema = frame.flush()

        assert schema["required"] == ["a"]
        assert schema["sort"] == [{"name": "a", "dir": "desc"}]
        assert schema["breadcrumb"] == [{"name": "a", "suffix": "Thing"}]
        assert schema["permissions"] == {
            "collection": {"view": "admin"},
            "field": [{"a": {"edit": "admin"}}],
        }
        assert "allOf" not in schema
        assert "ui" not in schema
