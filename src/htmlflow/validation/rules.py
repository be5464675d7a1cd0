"""Validation rules for clipboard documents.

Each rule is a function taking the JSON form of a document and returning a
list of Diagnostic objects describing any issues found. Rules read the
document defensively: entries of the wrong JSON type are reported once by
``check_document_shape`` and skipped by every other rule.
"""

from __future__ import annotations

from collections import Counter
from typing import Any

from htmlflow.model.diagnostic import Diagnostic, Severity

Document = Any


def _payload(document: Document) -> dict[str, Any]:
    payload = document.get("payload") if isinstance(document, dict) else None
    return payload if isinstance(payload, dict) else {}


def _entries(document: Document, key: str) -> list[dict[str, Any]]:
    value = _payload(document).get(key)
    if not isinstance(value, list):
        return []
    return [e for e in value if isinstance(e, dict) and isinstance(e.get("_id"), str)]


def _nodes(document: Document) -> list[dict[str, Any]]:
    return _entries(document, "nodes")


def _styles(document: Document) -> list[dict[str, Any]]:
    return _entries(document, "styles")


def _refs(entry: dict[str, Any], key: str) -> list[str]:
    value = entry.get(key)
    if not isinstance(value, list):
        return []
    return [v for v in value if isinstance(v, str)]


def _children(node: dict[str, Any]) -> list[str]:
    return _refs(node, "children")


def _shape_error(message: str) -> Diagnostic:
    return Diagnostic(rule="document_shape", severity=Severity.ERROR, message=message)


# ---------------------------------------------------------------------------
# Structural rules (ERROR severity)
# ---------------------------------------------------------------------------


def check_document_shape(document: Document) -> list[Diagnostic]:
    """The document, its payload and every node and style are JSON objects."""
    if not isinstance(document, dict):
        return [_shape_error(f"Document must be a JSON object, not {type(document).__name__}")]
    payload = document.get("payload")
    if not isinstance(payload, dict):
        return [_shape_error("Document has no payload object")]
    diagnostics: list[Diagnostic] = []
    for key in ("nodes", "styles"):
        entries = payload.get(key)
        if not isinstance(entries, list):
            diagnostics.append(_shape_error(f"payload.{key} must be a list"))
            continue
        for index, entry in enumerate(entries):
            if not isinstance(entry, dict):
                diagnostics.append(
                    _shape_error(f"payload.{key}[{index}] must be an object")
                )
            elif not isinstance(entry.get("_id"), str):
                diagnostics.append(
                    _shape_error(f"payload.{key}[{index}] has no string _id")
                )
            elif not isinstance(entry.get("children", []), list) or not isinstance(
                entry.get("classes", []), list
            ):
                diagnostics.append(
                    Diagnostic(
                        rule="document_shape",
                        severity=Severity.ERROR,
                        message="children and classes must be lists",
                        node_id=entry["_id"],
                    )
                )
    return diagnostics


def check_root_first(document: Document) -> list[Diagnostic]:
    """The first node is an element that no other node references."""
    nodes = _nodes(document)
    if not nodes:
        return [
            Diagnostic(
                rule="root_first",
                severity=Severity.ERROR,
                message="Document has no nodes",
            )
        ]
    root = nodes[0]
    diagnostics: list[Diagnostic] = []
    if root.get("text"):
        diagnostics.append(
            Diagnostic(
                rule="root_first",
                severity=Severity.ERROR,
                message="Root node must be an element, not a text run",
                node_id=root.get("_id"),
            )
        )
    for node in nodes:
        if root.get("_id") in _children(node):
            diagnostics.append(
                Diagnostic(
                    rule="root_first",
                    severity=Severity.ERROR,
                    message=f"Root node is referenced as a child of {node.get('_id')}",
                    node_id=root.get("_id"),
                )
            )
    return diagnostics


def check_unique_node_ids(document: Document) -> list[Diagnostic]:
    counts = Counter(n.get("_id") for n in _nodes(document))
    return [
        Diagnostic(
            rule="unique_node_ids",
            severity=Severity.ERROR,
            message=f"Node id appears {count} times",
            node_id=node_id,
        )
        for node_id, count in counts.items()
        if count > 1
    ]


def check_unique_style_ids(document: Document) -> list[Diagnostic]:
    counts = Counter(s.get("_id") for s in _styles(document))
    return [
        Diagnostic(
            rule="unique_style_ids",
            severity=Severity.ERROR,
            message=f"Style id appears {count} times",
            style_id=style_id,
        )
        for style_id, count in counts.items()
        if count > 1
    ]


def check_unique_style_names(document: Document) -> list[Diagnostic]:
    counts = Counter(
        s["name"] for s in _styles(document) if isinstance(s.get("name"), str)
    )
    return [
        Diagnostic(
            rule="unique_style_names",
            severity=Severity.ERROR,
            message=f"Style name {name!r} is used by {count} styles",
        )
        for name, count in counts.items()
        if count > 1
    ]


def check_child_references(document: Document) -> list[Diagnostic]:
    """Every child id resolves to a node in the list."""
    ids = {n.get("_id") for n in _nodes(document)}
    diagnostics: list[Diagnostic] = []
    for node in _nodes(document):
        for child_id in _children(node):
            if child_id not in ids:
                diagnostics.append(
                    Diagnostic(
                        rule="child_references",
                        severity=Severity.ERROR,
                        message=f"Child {child_id!r} does not resolve to a node",
                        node_id=node.get("_id"),
                    )
                )
    return diagnostics


def check_style_references(document: Document) -> list[Diagnostic]:
    """Every class id on a node resolves to a style."""
    ids = {s.get("_id") for s in _styles(document)}
    diagnostics: list[Diagnostic] = []
    for node in _nodes(document):
        for style_id in _refs(node, "classes"):
            if style_id not in ids:
                diagnostics.append(
                    Diagnostic(
                        rule="style_references",
                        severity=Severity.ERROR,
                        message=f"Class {style_id!r} does not resolve to a style",
                        node_id=node.get("_id"),
                    )
                )
    return diagnostics


def check_acyclic(document: Document) -> list[Diagnostic]:
    """No node reaches itself through child references."""
    children = {n.get("_id"): _children(n) for n in _nodes(document)}
    diagnostics: list[Diagnostic] = []
    for start in children:
        stack = list(children[start])
        seen: set[str] = set()
        while stack:
            nid = stack.pop()
            if nid == start:
                diagnostics.append(
                    Diagnostic(
                        rule="acyclic",
                        severity=Severity.ERROR,
                        message="Node is its own descendant",
                        node_id=start,
                    )
                )
                break
            if nid in seen:
                continue
            seen.add(nid)
            stack.extend(children.get(nid, []))
    return diagnostics


# ---------------------------------------------------------------------------
# Quality rules (WARNING severity)
# ---------------------------------------------------------------------------


def check_reachable(document: Document) -> list[Diagnostic]:
    """Every node is reachable from the root."""
    nodes = _nodes(document)
    if not nodes:
        return []
    children = {n.get("_id"): _children(n) for n in nodes}
    reached: set[str] = set()
    stack = [nodes[0].get("_id")]
    while stack:
        nid = stack.pop()
        if nid in reached:
            continue
        reached.add(nid)
        stack.extend(children.get(nid, []))
    return [
        Diagnostic(
            rule="reachable",
            severity=Severity.WARNING,
            message="Node is not reachable from the root",
            node_id=n.get("_id"),
        )
        for n in nodes
        if n.get("_id") not in reached
    ]


def check_text_not_blank(document: Document) -> list[Diagnostic]:
    return [
        Diagnostic(
            rule="text_not_blank",
            severity=Severity.WARNING,
            message="Text node has no visible content",
            node_id=n.get("_id"),
        )
        for n in _nodes(document)
        if n.get("text") and not str(n.get("v", "")).strip()
    ]


ALL_RULES = [
    check_document_shape,
    check_root_first,
    check_unique_node_ids,
    check_unique_style_ids,
    check_unique_style_names,
    check_child_references,
    check_style_references,
    check_acyclic,
    check_reachable,
    check_text_not_blank,
]
