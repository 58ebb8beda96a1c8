"""Unit tests for the AST models, builders and expression printer."""

import pytest
from pydantic import ValidationError

from typeprops.syntax import (
    ClassDeclaration,
    ClassProperty,
    Identifier,
    NullLiteral,
    ObjectExpression,
    OpaqueNode,
    Program,
    TSKeyword,
    TSTypeReference,
    call_option,
    dump_node,
    entity_name,
    find_calls,
    generate,
    key_name,
    parse_node,
    replace_child,
    type_arguments,
    type_parameter_names,
    walk,
)
from typeprops.syntax.build import (
    array,
    assign,
    call,
    generic_call,
    identifier,
    json_value,
    literal,
    member,
    object_expression,
    object_property,
    statement,
    static_property,
    ts_alias,
    ts_keyword,
    ts_ref,
)


def _class_json(name: str, props: dict | None = None, kind: str = "ClassDeclaration"):
    """Minimal Babel JSON for ``class name extends Component<props>``."""
    node = {
        "type": kind,
        "id": {"type": "Identifier", "name": name},
        "superClass": {"type": "Identifier", "name": "Component"},
        "body": {"type": "ClassBody", "body": []},
    }
    if props is not None:
        node["superTypeParameters"] = {
            "type": "TSTypeParameterInstantiation",
            "params": [props],
        }
    return node


class TestParseNode:
    """Tests for validating Babel JSON into models."""

    @pytest.mark.unit
    def test_modelled_node(self):
        """Known node kinds become their model."""
        node = parse_node({"type": "Identifier", "name": "Widget"})
        assert isinstance(node, Identifier)
        assert node.name == "Widget"

    @pytest.mark.unit
    def test_camel_case_fields(self):
        """Wire camelCase maps onto snake_case attributes."""
        ref = {"type": "TSTypeReference", "typeName": {"type": "Identifier", "name": "Props"}}
        node = parse_node(_class_json("Widget", ref))
        assert isinstance(node, ClassDeclaration)
        assert isinstance(node.super_type_parameters.params[0], TSTypeReference)

    @pytest.mark.unit
    def test_keyword_types_share_model(self):
        """All keyword types parse into TSKeyword with their wire type."""
        node = parse_node({"type": "TSStringKeyword"})
        assert isinstance(node, TSKeyword)
        assert node.type == "TSStringKeyword"

    @pytest.mark.unit
    def test_class_expression_uses_class_model(self):
        """Class expressions are handled like declarations."""
        node = parse_node(_class_json("Widget", kind="ClassExpression"))
        assert isinstance(node, ClassDeclaration)
        assert node.type == "ClassExpression"

    @pytest.mark.unit
    def test_unknown_kind_is_opaque(self):
        """Unmodelled kinds keep their type and fields."""
        node = parse_node({"type": "DebuggerStatement", "start": 3})
        assert isinstance(node, OpaqueNode)
        assert node.type == "DebuggerStatement"
        assert dump_node(node) == {"type": "DebuggerStatement", "start": 3}

    @pytest.mark.unit
    def test_nested_nodes_in_opaque_fields_are_parsed(self):
        """Nodes inside opaque statements are typed too."""
        data = {
            "type": "FunctionDeclaration",
            "body": {"type": "BlockStatement", "body": [_class_json("Inner")]},
        }
        node = parse_node(data)
        classes = [n for n in walk(node) if isinstance(n, ClassDeclaration)]
        assert [entity_name(c.id) for c in classes] == ["Inner"]

    @pytest.mark.unit
    def test_missing_required_field_rejected(self):
        """Malformed nodes are rejected at the boundary."""
        with pytest.raises(ValidationError):
            parse_node({"type": "Identifier"})

    @pytest.mark.unit
    def test_missing_type_rejected(self):
        """Nodes without a type tag are rejected."""
        with pytest.raises(ValidationError):
            parse_node({"name": "x"})


class TestDumpNode:
    """Tests for converting models back to Babel JSON."""

    @pytest.mark.unit
    def test_unknown_fields_survive(self):
        """loc/start/end and other extras come back unchanged."""
        data = {
            "type": "Identifier",
            "name": "x",
            "start": 0,
            "end": 1,
            "loc": {"start": {"line": 1, "column": 0}, "end": {"line": 1, "column": 1}},
        }
        dumped = dump_node(parse_node(data))
        assert dumped["loc"] == data["loc"]
        assert dumped["start"] == 0
        assert dumped["name"] == "x"

    @pytest.mark.unit
    def test_aliases_used_on_output(self):
        """Output keys use camelCase."""
        node = static_property("propTypes", object_expression())
        dumped = dump_node(node)
        assert dumped["type"] == "ClassProperty"
        assert dumped["static"] is True
        assert dumped["value"] == {"type": "ObjectExpression", "properties": []}

    @pytest.mark.unit
    def test_absent_defaults_not_written(self):
        """Fields missing from the input stay missing in the output."""
        data = _class_json("Widget")
        data["body"]["body"] = [
            {
                "type": "ClassProperty",
                "key": {"type": "Identifier", "name": "state"},
                "value": {"type": "NullLiteral"},
            }
        ]
        assert dump_node(parse_node(data)) == data

    @pytest.mark.unit
    def test_changed_default_written(self):
        """A field changed away from its default is written."""
        node = parse_node({"type": "ObjectExpression", "start": 1})
        assert "properties" not in dump_node(node)
        node.properties.append(object_property("x", NullLiteral()))
        dumped = dump_node(node)
        assert dumped["properties"][0]["key"] == {"type": "Identifier", "name": "x"}
        assert dumped["properties"][0]["computed"] is False

    @pytest.mark.unit
    def test_deeply_nested_types_parse(self):
        """Recursive node fields validate at any depth."""
        inner = {"type": "TSStringKeyword"}
        for _ in range(20):
            inner = {"type": "TSArrayType", "elementType": inner}
        node = parse_node(inner)
        assert dump_node(node) == inner

    @pytest.mark.unit
    def test_round_trip_preserves_structure(self):
        """Parsing a dump yields an equal tree."""
        ref = {"type": "TSTypeReference", "typeName": {"type": "Identifier", "name": "Props"}}
        first = parse_node(_class_json("Widget", ref))
        second = parse_node(dump_node(first))
        assert dump_node(second) == dump_node(first)


class TestTraversal:
    """Tests for walk, iter_children and replace_child."""

    @pytest.mark.unit
    def test_walk_is_preorder(self):
        """Parents come before children, siblings in source order."""
        root = Program(body=[identifier("a"), identifier("b")])
        kinds = [getattr(n, "name", n.type) for n in walk(root)]
        assert kinds == ["Program", "a", "b"]

    @pytest.mark.unit
    def test_replace_list_child(self):
        """List children are replaced by index."""
        root = Program(body=[identifier("a"), identifier("b")])
        replace_child(root, "body", 1, NullLiteral())
        assert isinstance(root.body[1], NullLiteral)

    @pytest.mark.unit
    def test_replace_single_child(self):
        """Single-valued children are replaced by attribute."""
        prop = static_property("x", identifier("old"))
        replace_child(prop, "value", None, identifier("new"))
        assert prop.value.name == "new"


class TestAccessors:
    """Tests for small node accessors."""

    @pytest.mark.unit
    def test_entity_name_qualified(self):
        """Qualified names are dotted."""
        node = parse_node(
            {
                "type": "TSQualifiedName",
                "left": {"type": "Identifier", "name": "React"},
                "right": {"type": "Identifier", "name": "ReactNode"},
            }
        )
        assert entity_name(node) == "React.ReactNode"

    @pytest.mark.unit
    def test_key_name(self):
        """Identifier and string keys are plain, computed keys are not."""
        assert key_name(identifier("a")) == "a"
        assert key_name(literal("aria-label")) == "aria-label"
        assert key_name(identifier("a"), computed=True) is None
        assert key_name(literal(3)) is None

    @pytest.mark.unit
    def test_type_arguments_babel7(self):
        """Type arguments from superTypeParameters."""
        node = parse_node(_class_json("W", {"type": "TSStringKeyword"}))
        assert [a.type for a in type_arguments(node)] == ["TSStringKeyword"]

    @pytest.mark.unit
    def test_type_arguments_babel8(self):
        """Type arguments from superTypeArguments."""
        data = _class_json("W")
        data["superTypeArguments"] = {
            "type": "TSTypeParameterInstantiation",
            "params": [{"type": "TSNumberKeyword"}],
        }
        assert [a.type for a in type_arguments(parse_node(data))] == ["TSNumberKeyword"]

    @pytest.mark.unit
    def test_type_arguments_absent(self):
        """Classes without type arguments yield an empty list."""
        assert type_arguments(parse_node(_class_json("W"))) == []

    @pytest.mark.unit
    def test_type_parameter_names(self):
        """Generic parameters of an alias are listed in order."""
        alias = ts_alias("Pair", ts_ref("A"), type_params=["A", "B"])
        assert type_parameter_names(alias) == ["A", "B"]


class TestGenerate:
    """Tests for the JavaScript expression printer."""

    @pytest.mark.unit
    def test_member_chain(self):
        """Member chains print with dots."""
        node = member(member(identifier("PropTypes"), "string"), "isRequired")
        assert generate(node) == "PropTypes.string.isRequired"

    @pytest.mark.unit
    def test_call_with_array(self):
        """Calls and arrays print inline."""
        node = call(member(identifier("PropTypes"), "oneOf"), array([literal("a"), literal(2)]))
        assert generate(node) == 'PropTypes.oneOf(["a", 2])'

    @pytest.mark.unit
    def test_literals(self):
        """Literal forms print as JavaScript."""
        assert generate(literal(True)) == "true"
        assert generate(literal(None)) == "null"
        assert generate(literal(2.0)) == "2"
        assert generate(literal(1.5)) == "1.5"

    @pytest.mark.unit
    def test_empty_object(self):
        """Empty objects print compactly."""
        assert generate(ObjectExpression()) == "{}"

    @pytest.mark.unit
    def test_nested_object_indentation(self):
        """Nested objects indent one level per depth."""
        inner = object_expression({"b": identifier("x")})
        outer = object_expression({"a": inner, "data-id": identifier("y")})
        assert generate(outer) == '{\n  a: {\n    b: x\n  },\n  "data-id": y\n}'

    @pytest.mark.unit
    def test_unknown_node_placeholder(self):
        """Unsupported expressions print as a placeholder comment."""
        assert generate(ts_keyword("string")) == "/* TSStringKeyword */"

    @pytest.mark.unit
    def test_object_property_builder_quotes_invalid_names(self):
        """Non-identifier names become string keys."""
        prop = object_property("aria-label", identifier("v"))
        assert key_name(prop.key) == "aria-label"
        assert not isinstance(prop.key, Identifier)

    @pytest.mark.unit
    def test_static_property_shape(self):
        """static_property builds a static class property."""
        prop = static_property("propTypes", object_expression())
        assert isinstance(prop, ClassProperty)
        assert prop.static is True
        assert entity_name(prop.key) == "propTypes"

    @pytest.mark.unit
    def test_assignment(self):
        """Assignments print with their operator."""
        node = assign(member(identifier("Widget"), "propTypes"), object_expression())
        assert generate(node) == "Widget.propTypes = {}"

    @pytest.mark.unit
    def test_object_methods(self):
        """Methods and accessors inside objects print by name."""
        methods = [
            parse_node(
                {
                    "type": "ObjectMethod",
                    "kind": kind,
                    "key": {"type": "Identifier", "name": name},
                    "params": [],
                    "body": {"type": "BlockStatement", "body": []},
                }
            )
            for kind, name in [("method", "check"), ("get", "size")]
        ]
        assert generate(object_expression(methods)) == (
            "{\n  check(...) {...},\n  get size(...) {...}\n}"
        )

    @pytest.mark.unit
    def test_json_value(self):
        """Plain data becomes nested literals in key order."""
        node = json_value({"type": "enum", "values": ["a", 1], "required": False})
        assert generate(node) == (
            '{\n  type: "enum",\n  values: ["a", 1],\n  required: false\n}'
        )


class TestCallSites:
    """Tests for find_calls and call_option."""

    @pytest.mark.unit
    def test_find_calls_by_callee(self):
        """Only calls to the named identifier are reported, with their place."""
        target = generic_call("transformTypeToKeys", ts_ref("Props"))
        other = call(identifier("render"))
        root = Program(body=[statement(other), statement(target)])
        sites = find_calls(root, "transformTypeToKeys")
        assert [(key, index, found) for _parent, key, index, found in sites] == [
            ("expression", None, target)
        ]
        assert sites[0][0] is root.body[1]

    @pytest.mark.unit
    def test_call_option(self):
        """Options are read from the object literal argument."""
        options = json_value({"transformInProduction": True, "maxDepth": 3})
        node = generic_call("transformTypeToSchema", ts_ref("Props"), options)
        assert generate(call_option(node, "maxDepth")) == "3"
        assert call_option(node, "missing") is None
        assert call_option(generic_call("f", ts_ref("P")), "maxDepth") is None
        assert call_option(call(identifier("f"), identifier("opts")), "maxDepth") is None
