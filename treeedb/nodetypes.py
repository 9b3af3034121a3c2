"""Data model for tree-sitter ``node-types.json`` grammar descriptions."""

from __future__ import annotations

import json
from dataclasses import dataclass, field
from typing import Any


@dataclass
class Subtype:
    """A reference to a node type, as used in field, child and subtype lists."""

    ty: str
    named: bool


@dataclass
class Field:
    """The set of node types that may appear in a field or as children."""

    multiple: bool
    required: bool
    types: list[Subtype]


@dataclass
class Node:
    """One entry of ``node-types.json``."""

    ty: str
    named: bool
    fields: dict[str, Field] = field(default_factory=dict)
    subtypes: list[Subtype] = field(default_factory=list)
    children: Field | None = None


def _require(obj: dict[str, Any], key: str, kind: type, where: str) -> Any:
    if key not in obj:
        raise ValueError(f"missing field `{key}` in {where}")
    value = obj[key]
    if not isinstance(value, kind):
        raise ValueError(f"field `{key}` in {where} must be of type {kind.__name__}")
    return value


def _expect_object(value: Any, where: str) -> dict[str, Any]:
    if not isinstance(value, dict):
        raise ValueError(f"expected an object for {where}")
    return value


def _subtype(value: Any) -> Subtype:
    obj = _expect_object(value, "subtype")
    return Subtype(
        ty=_require(obj, "type", str, "subtype"),
        named=_require(obj, "named", bool, "subtype"),
    )


def _field(value: Any) -> Field:
    obj = _expect_object(value, "field")
    types = _require(obj, "types", list, "field")
    return Field(
        multiple=_require(obj, "multiple", bool, "field"),
        required=_require(obj, "required", bool, "field"),
        types=[_subtype(t) for t in types],
    )


def _node(value: Any) -> Node:
    obj = _expect_object(value, "node")
    fields = obj.get("fields", {})
    if not isinstance(fields, dict):
        raise ValueError("field `fields` in node must be an object")
    subtypes = obj.get("subtypes", [])
    if not isinstance(subtypes, list):
        raise ValueError("field `subtypes` in node must be a list")
    children = obj.get("children")
    return Node(
        ty=_require(obj, "type", str, "node"),
        named=_require(obj, "named", bool, "node"),
        fields={name: _field(f) for name, f in fields.items()},
        subtypes=[_subtype(s) for s in subtypes],
        children=None if children is None else _field(children),
    )


def nodes(node_types_json_str: str) -> list[Node]:
    """Parse the contents of ``node-types.json``; raise ``ValueError`` if malformed."""
    data = json.loads(node_types_json_str)
    if not isinstance(data, list):
        raise ValueError("expected a list of node types")
    return [_node(entry) for entry in data]