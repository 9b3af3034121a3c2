"""Generate Soufflé type and relation declarations from tree-sitter node types."""

from __future__ import annotations

from collections.abc import Iterator
from dataclasses import dataclass
from enum import Enum
from typing import TextIO

from .nodetypes import Node, Subtype, nodes

GENERATOR_VERSION = "0.1.0"


class GenError(Exception):
    """Raised when declarations cannot be generated."""


@dataclass
class GenConfig:
    """User-facing options for :func:`gen`."""

    printsize: bool = False
    prefix: str | None = None


class _Mode(Enum):
    BOUNDARY = 0
    LOWER = 1
    UPPER = 2


def _chunks(text: str) -> Iterator[str]:
    current: list[str] = []
    for char in text:
        if char.isalnum():
            current.append(char)
        else:
            yield "".join(current)
            current = []
    yield "".join(current)


def _split_words(chunk: str) -> Iterator[str]:
    if not chunk:
        return
    start = 0
    mode = _Mode.BOUNDARY
    for i, (char, following) in enumerate(zip(chunk, chunk[1:])):
        if char.islower():
            next_mode = _Mode.LOWER
        elif char.isupper():
            next_mode = _Mode.UPPER
        else:
            next_mode = mode
        if next_mode is _Mode.LOWER and following.isupper():
            yield chunk[start:i + 1]
            start = i + 1
            mode = _Mode.BOUNDARY
        elif mode is _Mode.UPPER and char.isupper() and following.islower():
            yield chunk[start:i]
            start = i
            mode = _Mode.BOUNDARY
        else:
            mode = next_mode
    yield chunk[start:]


def to_upper_camel_case(text: str) -> str:
    """Convert ``text`` to UpperCamelCase, splitting words on punctuation and case changes."""
    words = (word for chunk in _chunks(text) for word in _split_words(chunk))
    return "".join(word[0].upper() + word[1:].lower() for word in words if word)


@dataclass(frozen=True)
class _Names:
    printsize: bool
    relation_prefix: str
    type_prefix: str

    @classmethod
    def from_config(cls, config: GenConfig) -> _Names:
        return cls(
            printsize=config.printsize,
            relation_prefix="" if config.prefix is None else f"{config.prefix}_",
            type_prefix=to_upper_camel_case(config.prefix or ""),
        )

    def type_name(self, ty: str) -> str:
        return f"{self.type_prefix}{to_upper_camel_case(ty)}"


def _union(names: _Names, types: list[Subtype]) -> str:
    return " | ".join(names.type_name(t.ty) for t in types if t.named)


def _node_with_fields(names: _Names, w: TextIO, node: Node) -> str:
    rel = f"{names.relation_prefix}{node.ty}"
    type_name = names.type_name(node.ty)
    w.write(f".type {type_name} <: symbol\n")
    w.write(f".decl {rel}(x: {type_name})\n")
    if names.printsize:
        w.write(f".printsize {rel}\n")
    w.write(
        f"{rel}(as(x, {type_name})) :- {names.relation_prefix}node"
        f"(x, \"{node.ty}\", _, _, _, _, _, _, _, _, _, _, _).\n"
    )

    for field_name, fld in node.fields.items():
        named_types = [t for t in fld.types if t.named]
        if not named_types:
            continue
        if len(named_types) == 1:
            field_type_name = names.type_name(named_types[0].ty)
        else:
            field_type_name = (
                f"{names.type_prefix}Field{to_upper_camel_case(node.ty)}"
                f"{to_upper_camel_case(field_name)}"
            )
            w.write(f".type {field_type_name} = {_union(names, fld.types)}\n")
        field_rel = f"{rel}_{field_name}_f"
        w.write(f".decl {field_rel}(x: {type_name}, y: {field_type_name})\n")
        w.write(
            f"{field_rel}(x, as(y, {field_type_name})) :- {rel}(x), "
            f"{names.relation_prefix}field(x, \"{field_name}\", y).\n"
        )

    if node.children is not None:
        for child in node.children.types:
            child_type_name = names.type_name(child.ty)
            child_rel = f"{rel}_{child.ty}_c"
            w.write(f".decl {child_rel}(x: {type_name}, y: {child_type_name})\n")
            w.write(
                f"{child_rel}(x, as(y, {child_type_name})) :- {rel}(x), "
                f"{names.relation_prefix}child(x, y).\n"
            )

    return type_name


def _node_with_subtypes(names: _Names, w: TextIO, node: Node) -> None:
    if not node.subtypes:
        return
    w.write(f".type {names.type_name(node.ty)} = {_union(names, node.subtypes)}\n")


def _gen_nodes(names: _Names, w: TextIO, node_list: list[Node]) -> list[str]:
    types: list[str] = []
    for node in node_list:
        if not node.named:
            continue
        if node.subtypes and node.fields:
            raise GenError(f"node type {node.ty!r} has both subtypes and fields")
        if node.subtypes:
            _node_with_subtypes(names, w, node)
        else:
            types.append(_node_with_fields(names, w, node))
        w.write("\n")
    return types


def _declare_node(names: _Names, w: TextIO) -> None:
    tp, rp = names.type_prefix, names.relation_prefix
    for kind, base in [
        ("NodeKind", "symbol"),
        ("IsNamed", "symbol"),
        ("IsError", "symbol"),
        ("IsExtra", "symbol"),
        ("IsMissing", "symbol"),
        ("StartByte", "number"),
        ("EndByte", "number"),
        ("StartRow", "number"),
        ("StartCol", "number"),
        ("EndRow", "number"),
        ("EndCol", "number"),
        ("NodeText", "symbol"),
    ]:
        w.write(f".type {tp}{kind} <: {base}\n")
    columns = [
        ("id", "Node"),
        ("kind", "NodeKind"),
        ("is_named", "IsNamed"),
        ("is_extra", "IsExtra"),
        ("is_error", "IsError"),
        ("is_missing", "IsMissing"),
        ("start_byte", "StartByte"),
        ("end_byte", "EndByte"),
        ("start_row", "StartRow"),
        ("start_col", "StartCol"),
        ("end_row", "EndRow"),
        ("end_col", "EndCol"),
        ("text", "NodeText"),
    ]
    w.write(f".decl {rp}node({', '.join(f'{col}: {tp}{ty}' for col, ty in columns)})\n")
    w.write(f".decl {rp}node_text(x: {tp}Node, y: {tp}NodeText) inline\n")
    w.write(f"{rp}node_text(x, y) :- {rp}node(x, _, _, _, _, _, _, _, _, _, _, _, y).\n")
    w.write(f".input {rp}node(IO=file, filename=\"node.csv\", rfc4180=true)\n")
    if names.printsize:
        w.write(f".printsize {rp}node\n")


def _declare_field(names: _Names, w: TextIO) -> None:
    tp, rp = names.type_prefix, names.relation_prefix
    w.write(f".type {tp}GrammarFieldName <: symbol\n")
    w.write(
        f".decl {rp}field(parent: {tp}Node, name: {tp}GrammarFieldName, child: {tp}Node)\n"
    )
    w.write(f".input {rp}field(IO=file, filename=\"field.csv\", rfc4180=true)\n")
    if names.printsize:
        w.write(f".printsize {rp}field\n")


def _declare_child(names: _Names, w: TextIO) -> None:
    tp, rp = names.type_prefix, names.relation_prefix
    w.write(f".decl {rp}child(parent: {tp}Node, child: {tp}Node)\n")
    w.write(f".input {rp}child(IO=file, filename=\"child.csv\", rfc4180=true)\n")
    if names.printsize:
        w.write(f".printsize {rp}child\n")


def gen(config: GenConfig, w: TextIO, node_types_json_str: str) -> None:
    """Write Soufflé declarations for the grammar in ``node_types_json_str`` to ``w``.

    Raises :class:`GenError` on malformed input or write failure.
    """
    try:
        w.write(
            f"// NOTE: This file was generated by treeedb v{GENERATOR_VERSION}. "
            "Do not edit!\n"
        )
    except OSError as exc:
        raise GenError(f"I/O error: {exc}") from exc
    names = _Names.from_config(config)
    try:
        node_list = nodes(node_types_json_str)
    except ValueError as exc:
        raise GenError(f"JSON parsing error: {exc}") from exc
    try:
        types = _gen_nodes(names, w, node_list)
        w.write(f".type {names.type_prefix}Node = {' | '.join(types)}\n")
        _declare_node(names, w)
        _declare_field(names, w)
        _declare_child(names, w)
    except OSError as exc:
        raise GenError(f"I/O error: {exc}") from exc