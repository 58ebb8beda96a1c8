"""Unit tests for type shapes and their helpers."""

import pytest

from typeprops.shape import (
    UNKNOWN,
    Field,
    ObjectShape,
    Primitive,
    PrimitiveKind,
    UnknownShape,
    dedupe,
    merge_fields,
)

STRING = Primitive(PrimitiveKind.STRING)
NUMBER = Primitive(PrimitiveKind.NUMBER)


class TestShapes:
    """Tests for shape values."""

    @pytest.mark.unit
    def test_value_equality(self):
        """Shapes compare by value."""
        assert ObjectShape((Field("a", STRING),)) == ObjectShape((Field("a", STRING),))
        assert UnknownShape() == UNKNOWN

    @pytest.mark.unit
    def test_shapes_are_hashable(self):
        """Shapes can be used as set members."""
        assert len({STRING, Primitive(PrimitiveKind.STRING), NUMBER}) == 2

    @pytest.mark.unit
    def test_object_accessors(self):
        """names and get look fields up by name."""
        shape = ObjectShape((Field("a", STRING), Field("b", NUMBER)))
        assert shape.names == ["a", "b"]
        assert shape.get("b").shape == NUMBER
        assert shape.get("c") is None


class TestMergeFields:
    """Tests for merge_fields."""

    @pytest.mark.unit
    def test_later_wins_first_position_kept(self):
        """Redeclared names take the later field in the earlier slot."""
        merged = merge_fields(
            [Field("a", STRING), Field("b", STRING)],
            [Field("c", NUMBER), Field("a", NUMBER)],
        )
        assert [(f.name, f.shape) for f in merged] == [
            ("a", NUMBER),
            ("b", STRING),
            ("c", NUMBER),
        ]


class TestDedupe:
    """Tests for dedupe."""

    @pytest.mark.unit
    def test_keeps_first_seen_order(self):
        """Repeats are dropped, order is kept."""
        assert dedupe(["b", "a", "b"]) == ("b", "a")

    @pytest.mark.unit
    def test_bool_and_int_distinct(self):
        """True and 1 are different literal values."""
        assert dedupe([1, True, 1]) == (1, True)
