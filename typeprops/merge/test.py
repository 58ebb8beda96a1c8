"""Unit tests for the merge engine."""

import pytest

from typeprops.merge import declared_names, merge, missing_entries
from typeprops.registry import ConvertState
from typeprops.shape import PrimitiveKind
from typeprops.synth import PrimitiveValidator, RequiredValidator, ValidatorEntry
from typeprops.syntax import dump_node, generate, key_name, parse_node
from typeprops.syntax.build import (
    call,
    identifier,
    member,
    object_expression,
    program,
)


@pytest.fixture
def state():
    return ConvertState.for_module(program())


def _entry(name, kind=PrimitiveKind.STRING, required=True):
    base = PrimitiveValidator(kind)
    return ValidatorEntry(name, RequiredValidator(base) if required else base, required)


def _names(obj):
    return [key_name(p.key) for p in obj.properties]


class TestMerge:
    """Tests for merge."""

    @pytest.mark.unit
    def test_fresh_object(self, state):
        """Without an existing object, entries are emitted in order."""
        merged = merge(None, [_entry("label"), _entry("count", PrimitiveKind.NUMBER, False)], state)
        assert generate(merged) == (
            "{\n  label: PropTypes.string.isRequired,\n  count: PropTypes.number\n}"
        )

    @pytest.mark.unit
    def test_existing_properties_win(self, state):
        """Hand-written validators stay untouched and in place."""
        custom = call(identifier("customValidator"))
        existing = object_expression({"label": custom})
        merged = merge(existing, [_entry("label"), _entry("count")], state)
        assert _names(merged) == ["label", "count"]
        assert merged.properties[0] is existing.properties[0]
        assert generate(merged.properties[0].value) == "customValidator()"

    @pytest.mark.unit
    def test_argument_not_mutated(self, state):
        """merge returns a new object and leaves its input alone."""
        existing = object_expression({"a": member(identifier("PropTypes"), "any")})
        before = dump_node(existing)
        merged = merge(existing, [_entry("b")], state)
        assert merged is not existing
        assert dump_node(existing) == before

    @pytest.mark.unit
    def test_idempotent(self, state):
        """Merging the same entries twice changes nothing the second time."""
        entries = [_entry("a"), _entry("b")]
        once = merge(None, entries, state)
        twice = merge(once, entries, state)
        assert dump_node(twice) == dump_node(once)

    @pytest.mark.unit
    def test_extras_preserved(self, state):
        """Location data on the existing object is kept."""
        existing = object_expression()
        existing.__pydantic_extra__["start"] = 42
        merged = merge(existing, [_entry("a")], state)
        assert dump_node(merged)["start"] == 42


class TestMissingEntries:
    """Tests for the name bookkeeping helpers."""

    @pytest.mark.unit
    def test_declared_names(self):
        """Plain keys are reported; None means no names."""
        assert declared_names(object_expression({"a": identifier("x")})) == {"a"}
        assert declared_names(None) == set()

    @pytest.mark.unit
    def test_missing_entries_keep_order(self):
        """Only absent names remain, in derivation order."""
        existing = object_expression({"b": identifier("x")})
        missing = missing_entries(existing, [_entry("c"), _entry("b"), _entry("a")])
        assert [e.prop_name for e in missing] == ["c", "a"]

    @pytest.mark.unit
    def test_method_validators_count_as_declared(self):
        """Methods and getters written in the object are not appended again."""
        existing = parse_node(
            {
                "type": "ObjectExpression",
                "properties": [
                    {
                        "type": "ObjectMethod",
                        "kind": "method",
                        "key": {"type": "Identifier", "name": "label"},
                        "params": [{"type": "Identifier", "name": "props"}],
                        "body": {"type": "BlockStatement", "body": []},
                    },
                    {
                        "type": "ObjectMethod",
                        "kind": "get",
                        "key": {"type": "StringLiteral", "value": "count"},
                        "params": [],
                        "body": {"type": "BlockStatement", "body": []},
                    },
                ],
            }
        )
        assert declared_names(existing) == {"label", "count"}
        missing = missing_entries(existing, [_entry("label"), _entry("count"), _entry("tone")])
        assert [e.prop_name for e in missing] == ["tone"]

    @pytest.mark.unit
    def test_computed_method_not_declared(self):
        """A computed method key names no prop."""
        existing = parse_node(
            {
                "type": "ObjectExpression",
                "properties": [
                    {
                        "type": "ObjectMethod",
                        "kind": "method",
                        "computed": True,
                        "key": {"type": "Identifier", "name": "label"},
                        "params": [],
                        "body": {"type": "BlockStatement", "body": []},
                    }
                ],
            }
        )
        assert declared_names(existing) == set()
