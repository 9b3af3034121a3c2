import io
import json

import pytest

from treeedb.souffle import GenConfig, GenError, gen, to_upper_camel_case

NODE_TYPES = json.dumps(
    [
        {
            "type": "_expression",
            "named": True,
            "subtypes": [
                {"type": "identifier", "named": True},
                {"type": "call", "named": True},
            ],
        },
        {
            "type": "call",
            "named": True,
            "fields": {
                "function": {
                    "multiple": False,
                    "required": True,
                    "types": [{"type": "identifier", "named": True}],
                },
                "arguments": {
                    "multiple": True,
                    "required": False,
                    "types": [
                        {"type": "identifier", "named": True},
                        {"type": "call", "named": True},
                        {"type": ",", "named": False},
                    ],
                },
                "punct": {
                    "multiple": False,
                    "required": False,
                    "types": [{"type": ";", "named": False}],
                },
            },
            "children": {
                "multiple": True,
                "required": False,
                "types": [{"type": "identifier", "named": True}],
            },
        },
        {"type": "identifier", "named": True},
        {"type": ",", "named": False},
    ]
)


def _generate(**kwargs) -> list[str]:
    out = io.StringIO()
    gen(GenConfig(**kwargs), out, NODE_TYPES)
    return out.getvalue().splitlines()


@pytest.mark.parametrize(
    "text",
    ["function_definition", "c_sharp", "_expression", "HTTPServer", "abc123def"],
)
def test_camel_case_is_idempotent_and_alphanumeric(text):
    once = to_upper_camel_case(text)
    assert once.isalnum()
    assert to_upper_camel_case(once) == once
    assert once[0].isupper()


def test_camel_case_pinned_values():
    assert to_upper_camel_case("function_definition") == "FunctionDefinition"
    assert to_upper_camel_case("c_sharp") == "CSharp"
    assert to_upper_camel_case("") == ""


def test_header_is_first_line():
    lines = _generate()
    assert lines[0].startswith("// NOTE: This file was generated by treeedb v")
    assert lines[0].endswith(". Do not edit!")


def test_node_union_lists_concrete_named_nodes():
    lines = _generate()
    assert ".type Node = Call | Identifier" in lines


def test_prefix_applies_to_types_and_relations():
    lines = _generate(prefix="c")
    assert ".type CNode = CCall | CIdentifier" in lines
    assert '.input c_node(IO=file, filename="node.csv", rfc4180=true)' in lines
    assert '.input c_field(IO=file, filename="field.csv", rfc4180=true)' in lines
    assert '.input c_child(IO=file, filename="child.csv", rfc4180=true)' in lines


def test_subtype_node_becomes_union():
    lines = _generate()
    assert ".type Expression = Identifier | Call" in lines
    assert not any(line.startswith(".decl _expression") for line in lines)


def test_single_type_field_relation():
    lines = _generate()
    assert ".decl call_function_f(x: Call, y: Identifier)" in lines
    assert (
        'call_function_f(x, as(y, Identifier)) :- call(x), field(x, "function", y).'
        in lines
    )


def test_multi_type_field_declares_union_of_named_types():
    lines = _generate()
    union = [line for line in lines if line.startswith(".type FieldCallArguments")]
    assert len(union) == 1
    assert "," not in union[0].split("=", 1)[1]


def test_field_without_named_types_is_skipped():
    lines = _generate()
    assert not any("call_punct_f" in line for line in lines)


def test_children_relation():
    lines = _generate()
    assert ".decl call_identifier_c(x: Call, y: Identifier)" in lines


def test_unnamed_nodes_not_declared():
    lines = _generate()
    assert not any(line.startswith(".type ,") for line in lines)


def test_printsize_only_when_requested():
    with_size = [line for line in _generate(printsize=True) if line.startswith(".printsize")]
    without = [line for line in _generate() if line.startswith(".printsize")]
    assert without == []
    assert ".printsize node" in with_size
    assert ".printsize field" in with_size
    assert ".printsize child" in with_size


def test_every_declared_relation_has_a_rule_or_input():
    lines = _generate(prefix="x")
    declared = [
        line.split()[1].split("(")[0] for line in lines if line.startswith(".decl ")
    ]
    for rel in declared:
        assert any(
            line.startswith(f"{rel}(") or line.startswith(f".input {rel}(") for line in lines
        ), rel


def test_invalid_json_raises_gen_error():
    with pytest.raises(GenError):
        gen(GenConfig(), io.StringIO(), "not json")


def test_node_with_fields_and_subtypes_raises():
    bad = json.dumps(
        [
            {
                "type": "weird",
                "named": True,
                "subtypes": [{"type": "a", "named": True}],
                "fields": {
                    "f": {"multiple": False, "required": True, "types": []}
                },
            }
        ]
    )
    with pytest.raises(GenError):
        gen(GenConfig(), io.StringIO(), bad)


def test_write_failure_raises_gen_error():
    class Broken(io.StringIO):
        def write(self, s):
            raise OSError("disk full")

    with pytest.raises(GenError):
        gen(GenConfig(), Broken(), NODE_TYPES)