"""Tests for clipboard document validation rules."""

import pytest

from htmlflow.errors import ValidationError
from htmlflow.model.diagnostic import Diagnostic, Severity
from htmlflow.validation import validate, validate_or_raise
from htmlflow.validation.rules import (
    check_acyclic,
    check_child_references,
    check_document_shape,
    check_reachable,
    check_root_first,
    check_style_references,
    check_text_not_blank,
    check_unique_node_ids,
    check_unique_style_names,
)


def element(node_id: str, children=(), classes=()) -> dict:
    return {
        "_id": node_id,
        "type": "Block",
        "tag": "div",
        "classes": list(classes),
        "children": list(children),
        "data": {},
    }


def text(node_id: str, value: str = "x") -> dict:
    return {"_id": node_id, "text": True, "v": value}


def style(style_id: str, name: str) -> dict:
    return {"_id": style_id, "name": name, "styleLess": ""}


def document(nodes, styles=()) -> dict:
    return {"type": "@webflow/XscpData", "payload": {"nodes": list(nodes), "styles": list(styles)}}


# ---------------------------------------------------------------------------
# Structural rules
# ---------------------------------------------------------------------------


class TestRootFirst:
    def test_valid(self):
        assert check_root_first(document([element("r", ["t"]), text("t")])) == []

    def test_empty(self):
        diags = check_root_first(document([]))
        assert len(diags) == 1
        assert diags[0].is_error

    def test_text_root(self):
        assert check_root_first(document([text("t")]))[0].node_id == "t"

    def test_root_referenced(self):
        diags = check_root_first(document([element("r"), element("c", ["r"])]))
        assert len(diags) == 1
        assert "referenced" in diags[0].message


class TestUniqueness:
    def test_duplicate_node_ids(self):
        diags = check_unique_node_ids(document([element("a"), text("a")]))
        assert [d.node_id for d in diags] == ["a"]

    def test_duplicate_style_names(self):
        diags = check_unique_style_names(document([element("r")], [style("s1", "x"), style("s2", "x")]))
        assert len(diags) == 1


class TestReferences:
    def test_dangling_child(self):
        diags = check_child_references(document([element("r", ["missing"])]))
        assert diags[0].node_id == "r"
        assert "missing" in diags[0].message

    def test_dangling_class(self):
        diags = check_style_references(document([element("r", classes=["s9"])], [style("s1", "a")]))
        assert len(diags) == 1

    def test_resolved_class(self):
        assert check_style_references(document([element("r", classes=["s1"])], [style("s1", "a")])) == []


class TestAcyclic:
    def test_cycle(self):
        diags = check_acyclic(document([element("a", ["b"]), element("b", ["a"])]))
        assert {d.node_id for d in diags} == {"a", "b"}

    def test_self_reference(self):
        assert len(check_acyclic(document([element("a", ["a"])]))) == 1

    def test_tree(self):
        assert check_acyclic(document([element("a", ["b", "c"]), element("b"), text("c")])) == []


# ---------------------------------------------------------------------------
# Quality rules
# ---------------------------------------------------------------------------


class TestQualityRules:
    def test_unreachable_is_warning(self):
        diags = check_reachable(document([element("r"), element("orphan")]))
        assert len(diags) == 1
        assert diags[0].severity is Severity.WARNING
        assert diags[0].node_id == "orphan"

    def test_blank_text(self):
        diags = check_text_not_blank(document([element("r", ["t"]), text("t", "  ")]))
        assert len(diags) == 1
        assert diags[0].is_warning


# ---------------------------------------------------------------------------
# Validator entry points
# ---------------------------------------------------------------------------


class TestValidator:
    def test_clean_document(self):
        assert validate(document([element("r", ["t"]), text("t")])) == []

    def test_extra_rules(self):
        def always(doc):
            return [Diagnostic(rule="custom", severity=Severity.INFO, message="hi")]

        diags = validate(document([element("r")]), extra_rules=[always])
        assert [d.rule for d in diags] == ["custom"]

    def test_raise_on_error(self):
        with pytest.raises(ValidationError) as exc_info:
            validate_or_raise(document([element("r", ["missing"])]))
        assert "1 error(s)" in str(exc_info.value)
        assert exc_info.value.diagnostics[0].rule == "child_references"

    def test_warnings_returned(self):
        diags = validate_or_raise(document([element("r"), element("orphan")]))
        assert [d.rule for d in diags] == ["reachable"]

    def test_diagnostic_str(self):
        diag = Diagnostic(rule="r", severity=Severity.ERROR, message="bad", node_id="n1")
        assert str(diag) == "ERROR [node=n1]: bad"


class TestDocumentShape:
    def test_valid_shape(self):
        assert check_document_shape(document([element("r")])) == []

    @pytest.mark.parametrize("value", [[1, 2], "doc", None, 3])
    def test_non_object_document(self, value):
        diags = check_document_shape(value)
        assert len(diags) == 1
        assert diags[0].rule == "document_shape"

    def test_missing_payload(self):
        assert check_document_shape({"type": "x"})[0].message == "Document has no payload object"

    def test_bad_entries(self):
        doc = {"payload": {"nodes": [1, {"_id": 5}, element("r")], "styles": "nope"}}
        messages = [d.message for d in check_document_shape(doc)]
        assert messages == [
            "payload.nodes[0] must be an object",
            "payload.nodes[1] has no string _id",
            "payload.styles must be a list",
        ]

    def test_bad_references_are_reported(self):
        diags = check_document_shape(document([{"_id": "r", "children": "a"}]))
        assert diags[0].node_id == "r"

    def test_other_rules_skip_malformed_entries(self):
        doc = document(
            [element("r", ["t", 7], classes=[["x"]]), "junk", text("t")],
            [style("s1", ["not", "hashable"])],
        )
        diags = validate(doc)
        assert {d.rule for d in diags} == {"document_shape"}
