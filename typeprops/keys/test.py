"""Unit tests for the type-keys call-site transform."""

import pytest

from typeprops.keys import transform_type_keys
from typeprops.registry import ConvertState
from typeprops.syntax import dump_node, generate, parse_node, walk
from typeprops.syntax.build import ts_interface, ts_keyword, ts_prop

TEST_PROPS = dump_node(
    ts_interface(
        "TestProps",
        ts_prop("prop_a", ts_keyword("string")),
        ts_prop("prop_b", ts_keyword("string"), optional=True),
    )
)


def _keys_call(type_name: str, in_production: bool | None = None) -> dict:
    arguments = []
    if in_production is not None:
        arguments.append(
            {
                "type": "ObjectExpression",
                "properties": [
                    {
                        "type": "ObjectProperty",
                        "key": {"type": "Identifier", "name": "transformInProduction"},
                        "value": {"type": "BooleanLiteral", "value": in_production},
                    }
                ],
            }
        )
    return {
        "type": "CallExpression",
        "callee": {"type": "Identifier", "name": "transformTypeToKeys"},
        "arguments": arguments,
        "typeParameters": {
            "type": "TSTypeParameterInstantiation",
            "params": [
                {"type": "TSTypeReference", "typeName": {"type": "Identifier", "name": type_name}}
            ],
        },
    }


def _module(*calls: dict):
    """Program declaring TestProps and one ``const`` per call."""
    declarations = [
        {
            "type": "VariableDeclaration",
            "kind": "const",
            "declarations": [
                {
                    "type": "VariableDeclarator",
                    "id": {"type": "Identifier", "name": f"value{i}"},
                    "init": call,
                }
            ],
        }
        for i, call in enumerate(calls)
    ]
    return parse_node({"type": "Program", "body": [TEST_PROPS, *declarations]})


def _initializers(module) -> list[str]:
    return [
        generate(node.init) for node in walk(module) if node.type == "VariableDeclarator"
    ]


class TestTransformTypeKeys:
    """Tests for transform_type_keys."""

    @pytest.mark.unit
    def test_replaced_with_field_names(self):
        """Calls become the array of field names in declaration order."""
        module = _module(_keys_call("TestProps"))
        assert transform_type_keys(module, ConvertState.for_module(module), production=False) == 1
        assert _initializers(module) == ['["prop_a", "prop_b"]']

    @pytest.mark.unit
    def test_production_guard(self):
        """Production builds yield null unless the call opts in."""
        module = _module(
            _keys_call("TestProps", in_production=False),
            _keys_call("TestProps", in_production=True),
            _keys_call("TestProps"),
        )
        transform_type_keys(module, ConvertState.for_module(module), production=True)
        assert _initializers(module) == ["null", '["prop_a", "prop_b"]', "null"]

    @pytest.mark.unit
    def test_unresolvable_type_kept(self):
        """Calls over unknown types are left as written."""
        module = _module(_keys_call("Elsewhere"))
        assert transform_type_keys(module, ConvertState.for_module(module), production=False) == 0
        assert _initializers(module) == ["transformTypeToKeys()"]

    @pytest.mark.unit
    def test_production_from_environment(self, monkeypatch):
        """Without an override the build target comes from the environment."""
        monkeypatch.setenv("TYPEPROPS_PRODUCTION", "true")
        module = _module(_keys_call("TestProps"))
        transform_type_keys(module, ConvertState.for_module(module))
        assert _initializers(module) == ["null"]
