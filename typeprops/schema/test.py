"""Unit tests for the type-schema call-site transform."""

import pytest

from typeprops.registry import ConvertState
from typeprops.schema import describe_fields, describe_shape, transform_type_schemas
from typeprops.shape import (
    UNKNOWN,
    ArrayShape,
    Field,
    LiteralEnum,
    ObjectShape,
    Primitive,
    PrimitiveKind,
    UnionShape,
)
from typeprops.syntax import dump_node, generate, parse_node, walk
from typeprops.syntax.build import (
    generic_call,
    json_value,
    ts_interface,
    ts_keyword,
    ts_prop,
    ts_ref,
)

STRING = Primitive(PrimitiveKind.STRING)

TEST_PROPS = dump_node(
    ts_interface(
        "TestProps",
        ts_prop("prop_a", ts_keyword("string")),
        ts_prop("prop_b", ts_keyword("string"), optional=True),
    )
)

NESTED_PROPS = [
    dump_node(ts_interface("Outer", ts_prop("inner", ts_ref("Inner")))),
    dump_node(ts_interface("Inner", ts_prop("value", ts_keyword("string")))),
]

TEST_PROPS_SCHEMA = """{
  prop_a: {
    type: "string",
    required: true
  },
  prop_b: {
    type: "string",
    required: false
  }
}"""


def _schema_call(type_name: str, **options) -> dict:
    arguments = [json_value(options)] if options else []
    return dump_node(generic_call("transformTypeToSchema", ts_ref(type_name), *arguments))


def _module(*calls: dict, declarations=(TEST_PROPS,)):
    """Program with the given declarations and one ``const`` per call."""
    statements = [
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
    return parse_node({"type": "Program", "body": [*declarations, *statements]})


def _initializers(module) -> list[str]:
    return [
        generate(node.init) for node in walk(module) if node.type == "VariableDeclarator"
    ]


class TestDescribeShape:
    """Tests for the plain-data descriptions."""

    @pytest.mark.unit
    def test_primitive(self):
        """Primitives describe their runtime kind."""
        assert describe_shape(Primitive(PrimitiveKind.FUNCTION)) == {"type": "function"}

    @pytest.mark.unit
    def test_array(self):
        """Arrays describe their element."""
        assert describe_shape(ArrayShape(STRING)) == {"type": "array", "items": {"type": "string"}}

    @pytest.mark.unit
    def test_enum_and_union(self):
        """Literal sets list their values; other unions list member types."""
        assert describe_shape(LiteralEnum(("info", 2))) == {"type": "enum", "values": ["info", 2]}
        union = UnionShape((STRING, Primitive(PrimitiveKind.NUMBER)))
        assert describe_shape(union) == {
            "type": "union",
            "types": [{"type": "string"}, {"type": "number"}],
        }

    @pytest.mark.unit
    def test_unknown(self):
        """Unresolved shapes describe as any."""
        assert describe_shape(UNKNOWN) == {"type": "any"}

    @pytest.mark.unit
    def test_nested_object_fields(self):
        """Object fields carry their required flag at every level."""
        inner = ObjectShape((Field("value", STRING, optional=True),))
        shape = ObjectShape((Field("inner", inner), Field("extra", UNKNOWN)))
        assert describe_fields(shape) == {
            "inner": {
                "type": "object",
                "properties": {"value": {"type": "string", "required": False}},
                "required": True,
            },
            "extra": {"type": "any", "required": False},
        }


class TestTransformTypeSchemas:
    """Tests for transform_type_schemas."""

    @pytest.mark.unit
    def test_replaced_with_schema(self):
        """Calls become an object literal describing every prop."""
        module = _module(_schema_call("TestProps"))
        assert transform_type_schemas(module, ConvertState.for_module(module), production=False) == 1
        assert _initializers(module) == [TEST_PROPS_SCHEMA]

    @pytest.mark.unit
    def test_production_guard(self):
        """Production builds yield null unless the call opts in."""
        module = _module(
            _schema_call("TestProps", transformInProduction=False),
            _schema_call("TestProps", transformInProduction=True),
        )
        transform_type_schemas(module, ConvertState.for_module(module), production=True)
        assert _initializers(module) == ["null", TEST_PROPS_SCHEMA]

    @pytest.mark.unit
    def test_production_from_environment(self, monkeypatch):
        """Without an override the build target comes from the environment."""
        monkeypatch.setenv("TYPEPROPS_PRODUCTION", "true")
        module = _module(_schema_call("TestProps"))
        transform_type_schemas(module, ConvertState.for_module(module))
        assert _initializers(module) == ["null"]

    @pytest.mark.unit
    def test_max_depth_option(self):
        """maxDepth on the call limits how deep nested types expand."""
        module = _module(
            _schema_call("Outer", maxDepth=1),
            _schema_call("Outer"),
            declarations=NESTED_PROPS,
        )
        transform_type_schemas(module, ConvertState.for_module(module), production=False)
        shallow, deep = _initializers(module)
        assert 'type: "any"' in shallow
        assert 'type: "object"' in deep

    @pytest.mark.unit
    def test_unresolvable_type_kept(self):
        """Calls over unknown types are left as written."""
        module = _module(_schema_call("Elsewhere"))
        assert transform_type_schemas(module, ConvertState.for_module(module), production=False) == 0
        assert _initializers(module) == ["transformTypeToSchema()"]
