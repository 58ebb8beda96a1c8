"""Unit tests for validator synthesis and lowering."""

import pytest

from typeprops.registry import ConvertState
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
from typeprops.synth import (
    AnyValidator,
    ArrayOfValidator,
    OneOfTypeValidator,
    OneOfValidator,
    PrimitiveValidator,
    RequiredValidator,
    ShapeValidator,
    ValidatorEntry,
    has_usable_entries,
    synthesize,
    synthesize_fields,
    synthesize_shape,
    validator_to_node,
)
from typeprops.syntax import generate
from typeprops.syntax.build import program

STRING = Primitive(PrimitiveKind.STRING)
NUMBER = Primitive(PrimitiveKind.NUMBER)


@pytest.fixture
def state():
    return ConvertState.for_module(program())


def _render(validator, namespace="PropTypes"):
    return generate(validator_to_node(validator, namespace))


class TestSynthesizeShape:
    """Tests for shape to validator conversion."""

    @pytest.mark.unit
    def test_variants(self, state):
        """Each shape variant maps to its validator."""
        assert synthesize_shape(STRING, state) == PrimitiveValidator(PrimitiveKind.STRING)
        assert synthesize_shape(ArrayShape(NUMBER), state) == ArrayOfValidator(
            PrimitiveValidator(PrimitiveKind.NUMBER)
        )
        assert synthesize_shape(LiteralEnum(("a", 1)), state) == OneOfValidator(("a", 1))
        assert synthesize_shape(UNKNOWN, state) == AnyValidator()

    @pytest.mark.unit
    def test_union(self, state):
        """Unions map member by member."""
        validator = synthesize_shape(UnionShape((STRING, NUMBER)), state)
        assert validator == OneOfTypeValidator(
            (
                PrimitiveValidator(PrimitiveKind.STRING),
                PrimitiveValidator(PrimitiveKind.NUMBER),
            )
        )

    @pytest.mark.unit
    def test_nested_shape_keeps_required_flags(self, state):
        """Nested object fields carry their own required markers."""
        shape = ObjectShape((Field("x", NUMBER), Field("y", NUMBER, optional=True)))
        validator = synthesize_shape(shape, state)
        assert isinstance(validator, ShapeValidator)
        assert [e.required for e in validator.entries] == [True, False]


class TestSynthesize:
    """Tests for per-field required/optional decisions."""

    @pytest.mark.unit
    def test_required_field(self, state):
        """Plain fields are required."""
        entry = synthesize(Field("label", STRING), state)
        assert entry.required is True
        assert entry.expression == RequiredValidator(PrimitiveValidator(PrimitiveKind.STRING))

    @pytest.mark.unit
    def test_optional_field(self, state):
        """Optional fields are not required."""
        entry = synthesize(Field("label", STRING, optional=True), state)
        assert entry.required is False
        assert entry.expression == PrimitiveValidator(PrimitiveKind.STRING)

    @pytest.mark.unit
    def test_unknown_never_required(self, state):
        """Unresolved fields are permissive and never required."""
        entry = synthesize(Field("external", UNKNOWN), state)
        assert entry == ValidatorEntry("external", AnyValidator(), False)

    @pytest.mark.unit
    def test_defaults_relax_required(self, state):
        """Fields with defaults are not required."""
        shape = ObjectShape((Field("count", NUMBER), Field("label", STRING)))
        entries = synthesize_fields(shape, {"count"}, state)
        assert [(e.prop_name, e.required) for e in entries] == [
            ("count", False),
            ("label", True),
        ]


class TestHasUsableEntries:
    """Tests for the skip-on-empty check."""

    @pytest.mark.unit
    def test_all_any(self):
        """Only permissive entries are not usable."""
        assert not has_usable_entries([ValidatorEntry("a", AnyValidator())])
        assert not has_usable_entries([])

    @pytest.mark.unit
    def test_one_concrete(self):
        """A single concrete validator is enough."""
        entries = [
            ValidatorEntry("a", AnyValidator()),
            ValidatorEntry("b", RequiredValidator(PrimitiveValidator(PrimitiveKind.STRING)), True),
        ]
        assert has_usable_entries(entries)


class TestValidatorToNode:
    """Tests for lowering validators to AST."""

    @pytest.mark.unit
    @pytest.mark.parametrize(
        "kind,name",
        [
            (PrimitiveKind.STRING, "string"),
            (PrimitiveKind.BOOLEAN, "bool"),
            (PrimitiveKind.FUNCTION, "func"),
            (PrimitiveKind.NODE, "node"),
            (PrimitiveKind.ELEMENT, "element"),
        ],
    )
    def test_primitive_names(self, kind, name):
        """Primitive kinds use the runtime library's names."""
        assert _render(PrimitiveValidator(kind)) == f"PropTypes.{name}"

    @pytest.mark.unit
    def test_required_wrapper(self):
        """Required validators end in isRequired."""
        validator = RequiredValidator(ArrayOfValidator(PrimitiveValidator(PrimitiveKind.NUMBER)))
        assert _render(validator) == "PropTypes.arrayOf(PropTypes.number).isRequired"

    @pytest.mark.unit
    def test_one_of(self):
        """Literal sets become an array argument."""
        assert _render(OneOfValidator(("sm", 2, True))) == 'PropTypes.oneOf(["sm", 2, true])'

    @pytest.mark.unit
    def test_mixed_literal_union(self, state):
        """Grouped literals render as one oneOf inside oneOfType."""
        shape = UnionShape((LiteralEnum(("a", "b")), NUMBER))
        assert _render(synthesize_shape(shape, state)) == (
            'PropTypes.oneOfType([PropTypes.oneOf(["a", "b"]), PropTypes.number])'
        )

    @pytest.mark.unit
    def test_shape(self):
        """Object shapes render as a nested validator object."""
        validator = ShapeValidator(
            (ValidatorEntry("x", RequiredValidator(PrimitiveValidator(PrimitiveKind.NUMBER)), True),)
        )
        assert _render(validator) == "PropTypes.shape({\n  x: PropTypes.number.isRequired\n})"

    @pytest.mark.unit
    def test_custom_namespace(self):
        """The namespace identifier is configurable."""
        assert _render(AnyValidator(), namespace="T") == "T.any"
