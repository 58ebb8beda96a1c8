"""Unit tests for type-shape resolution."""

import pytest

from typeprops.registry import ConvertOptions, ConvertState
from typeprops.resolve import resolve, resolve_type
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
from typeprops.syntax import TSMethodSignature, parse_node
from typeprops.syntax.build import (
    identifier,
    program,
    ts_alias,
    ts_array,
    ts_enum,
    ts_interface,
    ts_intersection,
    ts_keyword,
    ts_literal,
    ts_prop,
    ts_ref,
    ts_type_literal,
    ts_union,
)

STRING = Primitive(PrimitiveKind.STRING)
NUMBER = Primitive(PrimitiveKind.NUMBER)
BOOLEAN = Primitive(PrimitiveKind.BOOLEAN)
FUNCTION = Primitive(PrimitiveKind.FUNCTION)


def _state(*declarations, max_depth: int = 10) -> ConvertState:
    return ConvertState.for_module(
        program(*declarations), options=ConvertOptions(max_depth=max_depth)
    )


class TestPrimitives:
    """Tests for keyword and well-known types."""

    @pytest.mark.unit
    @pytest.mark.parametrize(
        "keyword,expected",
        [
            ("string", STRING),
            ("number", NUMBER),
            ("boolean", BOOLEAN),
            ("symbol", Primitive(PrimitiveKind.SYMBOL)),
            ("object", Primitive(PrimitiveKind.OBJECT)),
            ("any", UNKNOWN),
            ("unknown", UNKNOWN),
            ("never", UNKNOWN),
            ("bigint", UNKNOWN),
        ],
    )
    def test_keywords(self, keyword, expected):
        """Keyword types map to their primitive or to unknown."""
        assert resolve_type(ts_keyword(keyword), _state()) == expected

    @pytest.mark.unit
    def test_function_type(self):
        """Function type expressions resolve to function."""
        node = parse_node({"type": "TSFunctionType", "parameters": []})
        assert resolve_type(node, _state()) == FUNCTION

    @pytest.mark.unit
    def test_qualified_react_node(self):
        """React.ReactNode is the renderable-node kind."""
        node = parse_node(
            {
                "type": "TSTypeReference",
                "typeName": {
                    "type": "TSQualifiedName",
                    "left": {"type": "Identifier", "name": "React"},
                    "right": {"type": "Identifier", "name": "ReactNode"},
                },
            }
        )
        assert resolve_type(node, _state()) == Primitive(PrimitiveKind.NODE)

    @pytest.mark.unit
    def test_external_name_is_unknown(self):
        """Names declared nowhere in the module resolve to unknown."""
        assert resolve_type(ts_ref("ImportedProps"), _state()) == UNKNOWN
        assert resolve("ImportedProps", _state()) == UNKNOWN

    @pytest.mark.unit
    def test_local_declaration_shadows_global(self):
        """A module-level declaration wins over a well-known global name."""
        state = _state(ts_alias("Record", ts_keyword("string")))
        assert resolve_type(ts_ref("Record"), state) == STRING


class TestObjects:
    """Tests for interfaces, aliases and type literals."""

    @pytest.mark.unit
    def test_interface_fields_in_order(self):
        """Fields keep declaration order and optional markers."""
        state = _state(
            ts_interface(
                "Props",
                ts_prop("label", ts_keyword("string")),
                ts_prop("count", ts_keyword("number"), optional=True),
            )
        )
        assert resolve("Props", state) == ObjectShape(
            (Field("label", STRING), Field("count", NUMBER, optional=True))
        )

    @pytest.mark.unit
    def test_nullable_union_marks_optional(self):
        """T | null and T | undefined behave like ``?``."""
        state = _state(
            ts_interface(
                "Props",
                ts_prop("a", ts_union(ts_keyword("string"), ts_keyword("null"))),
                ts_prop("b", ts_union(ts_keyword("number"), ts_keyword("undefined"))),
            )
        )
        shape = resolve("Props", state)
        assert shape.get("a") == Field("a", STRING, optional=True)
        assert shape.get("b") == Field("b", NUMBER, optional=True)

    @pytest.mark.unit
    def test_method_signature_is_function(self):
        """Method members become function fields."""
        method = TSMethodSignature(key=identifier("onClick"), optional=True)
        state = _state(ts_interface("Props", method))
        assert resolve("Props", state).get("onClick") == Field(
            "onClick", FUNCTION, optional=True
        )

    @pytest.mark.unit
    def test_extends_then_override(self):
        """Inherited members come first; own members override them."""
        state = _state(
            ts_interface(
                "Base",
                ts_prop("a", ts_keyword("string")),
                ts_prop("b", ts_keyword("number")),
            ),
            ts_interface(
                "Child",
                ts_prop("b", ts_keyword("string")),
                ts_prop("c", ts_keyword("boolean")),
                extends=["Base"],
            ),
        )
        shape = resolve("Child", state)
        assert shape.names == ["a", "b", "c"]
        assert shape.get("b").shape == STRING

    @pytest.mark.unit
    def test_declaration_merging(self):
        """Interfaces declared twice contribute all their members."""
        state = _state(
            ts_interface("Props", ts_prop("a", ts_keyword("string"))),
            ts_interface("Props", ts_prop("b", ts_keyword("number"))),
        )
        assert resolve("Props", state).names == ["a", "b"]

    @pytest.mark.unit
    def test_alias_to_type_literal(self):
        """Aliases resolve through to their target type."""
        state = _state(
            ts_alias("Props", ts_type_literal(ts_prop("x", ts_keyword("number"))))
        )
        assert resolve_type(ts_ref("Props"), state) == ObjectShape((Field("x", NUMBER),))

    @pytest.mark.unit
    def test_intersection_later_wins(self):
        """Intersection merges objects; later operands override."""
        node = ts_intersection(
            ts_type_literal(ts_prop("a", ts_keyword("string")), ts_prop("b", ts_keyword("string"))),
            ts_type_literal(ts_prop("b", ts_keyword("number"))),
        )
        shape = resolve_type(node, _state())
        assert shape == ObjectShape((Field("a", STRING), Field("b", NUMBER)))

    @pytest.mark.unit
    def test_intersection_without_objects(self):
        """Intersections of unresolvable operands are unknown."""
        node = ts_intersection(ts_ref("A"), ts_ref("B"))
        assert resolve_type(node, _state()) == UNKNOWN


class TestCollections:
    """Tests for arrays, tuples, unions and literals."""

    @pytest.mark.unit
    def test_array_forms(self):
        """T[] and Array<T> resolve alike."""
        state = _state()
        assert resolve_type(ts_array(ts_keyword("string")), state) == ArrayShape(STRING)
        assert resolve_type(ts_ref("Array", ts_keyword("string")), state) == ArrayShape(STRING)

    @pytest.mark.unit
    def test_tuple_of_mixed_elements(self):
        """Tuples become arrays of the union of their element shapes."""
        node = parse_node(
            {
                "type": "TSTupleType",
                "elementTypes": [
                    {"type": "TSStringKeyword"},
                    {"type": "TSNumberKeyword"},
                    {"type": "TSStringKeyword"},
                ],
            }
        )
        assert resolve_type(node, _state()) == ArrayShape(UnionShape((STRING, NUMBER)))

    @pytest.mark.unit
    def test_literal_union(self):
        """Unions of literals become a literal enum."""
        node = ts_union(ts_literal("sm"), ts_literal("md"), ts_literal("lg"))
        assert resolve_type(node, _state()) == LiteralEnum(("sm", "md", "lg"))

    @pytest.mark.unit
    def test_literal_union_through_alias(self):
        """Literal sets from aliases flatten into one enum."""
        state = _state(ts_alias("Size", ts_union(ts_literal("sm"), ts_literal("md"))))
        node = ts_union(ts_ref("Size"), ts_literal("xl"))
        assert resolve_type(node, state) == LiteralEnum(("sm", "md", "xl"))

    @pytest.mark.unit
    def test_mixed_union(self):
        """Non-literal unions keep one member per distinct shape."""
        node = ts_union(ts_keyword("string"), ts_keyword("number"), ts_keyword("string"))
        assert resolve_type(node, _state()) == UnionShape((STRING, NUMBER))

    @pytest.mark.unit
    def test_literals_grouped_in_mixed_union(self):
        """Literal members share one enum placed where the first appeared."""
        node = ts_union(ts_literal("a"), ts_keyword("number"), ts_literal("b"))
        assert resolve_type(node, _state()) == UnionShape((LiteralEnum(("a", "b")), NUMBER))

    @pytest.mark.unit
    def test_nested_union_flattened(self):
        """Unions from aliases merge into the enclosing union."""
        state = _state(ts_alias("Size", ts_union(ts_literal("sm"), ts_keyword("number"))))
        node = ts_union(ts_keyword("boolean"), ts_ref("Size"), ts_literal("xl"))
        assert resolve_type(node, state) == UnionShape(
            (BOOLEAN, LiteralEnum(("sm", "xl")), NUMBER)
        )

    @pytest.mark.unit
    def test_single_member_union_collapses(self):
        """A union left with one member is that member."""
        node = ts_union(ts_keyword("string"), ts_keyword("null"))
        assert resolve_type(node, _state()) == STRING


class TestEnums:
    """Tests for enum declarations."""

    @pytest.mark.unit
    def test_implicit_numbering(self):
        """Implicit members count up from the previous numeric value."""
        state = _state(ts_enum("Level", {"Low": None, "High": 5, "Max": None}))
        assert resolve("Level", state) == LiteralEnum((0, 5, 6))

    @pytest.mark.unit
    def test_string_enum(self):
        """String initializers are kept verbatim."""
        state = _state(ts_enum("Tone", {"Info": "info", "Warn": "warn"}))
        assert resolve_type(ts_ref("Tone"), state) == LiteralEnum(("info", "warn"))

    @pytest.mark.unit
    def test_computed_member_is_unknown(self):
        """Enums with non-literal initializers cannot be enumerated."""
        enum = ts_enum("Flags", ["A"])
        enum.members[0].initializer = identifier("OTHER")
        assert resolve("Flags", _state(enum)) == UNKNOWN


class TestGenerics:
    """Tests for generic parameter binding."""

    @pytest.mark.unit
    def test_alias_argument_bound(self):
        """Type arguments substitute for parameters in the body."""
        state = _state(
            ts_alias("Box", ts_type_literal(ts_prop("value", ts_ref("T"))), type_params=["T"])
        )
        shape = resolve_type(ts_ref("Box", ts_keyword("string")), state)
        assert shape == ObjectShape((Field("value", STRING),))

    @pytest.mark.unit
    def test_missing_argument_is_unknown(self):
        """Parameters without an argument resolve to unknown."""
        state = _state(
            ts_alias("Box", ts_type_literal(ts_prop("value", ts_ref("T"))), type_params=["T"])
        )
        assert resolve_type(ts_ref("Box"), state).get("value").shape == UNKNOWN

    @pytest.mark.unit
    def test_bindings_do_not_leak(self):
        """A parameter name is not visible inside another declaration."""
        state = _state(
            ts_interface("Outer", ts_prop("inner", ts_ref("Inner")), type_params=["T"]),
            ts_interface("Inner", ts_prop("value", ts_ref("T"))),
        )
        shape = resolve_type(ts_ref("Outer", ts_keyword("string")), state)
        assert shape.get("inner").shape.get("value").shape == UNKNOWN


class TestUtilityTypes:
    """Tests for the built-in mapped utility types."""

    @pytest.fixture
    def state(self):
        return _state(
            ts_interface(
                "Props",
                ts_prop("a", ts_keyword("string")),
                ts_prop("b", ts_keyword("number"), optional=True),
            )
        )

    @pytest.mark.unit
    def test_partial_and_required(self, state):
        """Partial and Required flip every field's optional flag."""
        partial = resolve_type(ts_ref("Partial", ts_ref("Props")), state)
        required = resolve_type(ts_ref("Required", ts_ref("Props")), state)
        assert all(f.optional for f in partial.fields)
        assert not any(f.optional for f in required.fields)

    @pytest.mark.unit
    def test_pick_and_omit(self, state):
        """Pick and Omit select fields by literal key."""
        picked = resolve_type(ts_ref("Pick", ts_ref("Props"), ts_literal("b")), state)
        omitted = resolve_type(ts_ref("Omit", ts_ref("Props"), ts_literal("b")), state)
        assert picked.names == ["b"]
        assert omitted.names == ["a"]

    @pytest.mark.unit
    def test_keyof(self, state):
        """keyof lists field names as literals."""
        node = parse_node(
            {
                "type": "TSTypeOperator",
                "operator": "keyof",
                "typeAnnotation": {
                    "type": "TSTypeReference",
                    "typeName": {"type": "Identifier", "name": "Props"},
                },
            }
        )
        assert resolve_type(node, state) == LiteralEnum(("a", "b"))


class TestTermination:
    """Tests for cycle and depth guards."""

    @pytest.mark.unit
    def test_self_reference_terminates(self):
        """A recursive type resolves with unknown at the repetition."""
        state = _state(
            ts_interface(
                "TreeNode",
                ts_prop("label", ts_keyword("string")),
                ts_prop("children", ts_array(ts_ref("TreeNode"))),
            )
        )
        shape = resolve("TreeNode", state)
        assert shape.get("children").shape == ArrayShape(UNKNOWN)
        assert state.visited == set()

    @pytest.mark.unit
    def test_mutual_recursion_terminates(self):
        """Cycles through several names also terminate."""
        state = _state(
            ts_interface("A", ts_prop("b", ts_ref("B"))),
            ts_interface("B", ts_prop("a", ts_ref("A"))),
        )
        shape = resolve("A", state)
        assert shape.get("b").shape.get("a").shape == UNKNOWN

    @pytest.mark.unit
    def test_sibling_branches_expand_same_name(self):
        """Only the current chain is guarded, not earlier siblings."""
        state = _state(
            ts_interface("Point", ts_prop("x", ts_keyword("number"))),
            ts_interface(
                "Line",
                ts_prop("start", ts_ref("Point")),
                ts_prop("end", ts_ref("Point")),
            ),
        )
        shape = resolve("Line", state)
        assert shape.get("start").shape == shape.get("end").shape
        assert shape.get("end").shape == ObjectShape((Field("x", NUMBER),))

    @pytest.mark.unit
    def test_max_depth(self):
        """Nesting past max_depth is unknown."""
        state = _state(
            ts_interface(
                "Props",
                ts_prop("inner", ts_type_literal(ts_prop("x", ts_keyword("string")))),
            ),
            max_depth=1,
        )
        shape = resolve("Props", state)
        assert shape.get("inner").shape == UNKNOWN
        assert state.depth == 0
