"""Unit tests for the default-props collector."""

import pytest

from typeprops.defaults import collect_defaults, find_static_property
from typeprops.registry import ConvertOptions, ConvertState
from typeprops.syntax import ClassProperty, ObjectProperty, SpreadElement, parse_node
from typeprops.syntax.build import (
    call,
    class_declaration,
    identifier,
    literal,
    object_expression,
    program,
    static_property,
)


@pytest.fixture
def state():
    return ConvertState.for_module(program())


def _widget(*body):
    return class_declaration("Widget", None, *body)


class TestFindStaticProperty:
    """Tests for find_static_property."""

    @pytest.mark.unit
    def test_found(self):
        """Static members are found by name."""
        prop = static_property("defaultProps", object_expression())
        assert find_static_property(_widget(prop), "defaultProps") is prop

    @pytest.mark.unit
    def test_instance_member_ignored(self):
        """Non-static members of the same name do not count."""
        prop = ClassProperty(key=identifier("defaultProps"), value=object_expression())
        assert find_static_property(_widget(prop), "defaultProps") is None

    @pytest.mark.unit
    def test_computed_key_ignored(self):
        """Computed keys never match."""
        prop = static_property("defaultProps", object_expression())
        prop.computed = True
        assert find_static_property(_widget(prop), "defaultProps") is None


class TestCollectDefaults:
    """Tests for collect_defaults."""

    @pytest.mark.unit
    def test_plain_keys(self, state):
        """Identifier and string-literal keys are collected."""
        defaults = object_expression({"count": literal(0), "aria-label": literal("x")})
        node = _widget(static_property("defaultProps", defaults))
        assert collect_defaults(node, state) == {"count", "aria-label"}

    @pytest.mark.unit
    def test_spread_and_computed_ignored(self, state):
        """Spreads and computed keys contribute nothing."""
        computed = ObjectProperty(key=identifier("dynamic"), value=literal(1), computed=True)
        spread = SpreadElement(argument=identifier("baseDefaults"))
        defaults = object_expression([computed, spread])
        node = _widget(static_property("defaultProps", defaults))
        assert collect_defaults(node, state) == set()

    @pytest.mark.unit
    def test_methods_ignored(self, state):
        """Object methods are not plain keys."""
        method = parse_node(
            {
                "type": "ObjectMethod",
                "kind": "method",
                "key": {"type": "Identifier", "name": "render"},
                "params": [],
                "body": {"type": "BlockStatement", "body": []},
            }
        )
        node = _widget(static_property("defaultProps", object_expression([method])))
        assert collect_defaults(node, state) == set()

    @pytest.mark.unit
    def test_missing_declaration(self, state):
        """Classes without defaults yield an empty set."""
        assert collect_defaults(_widget(), state) == set()

    @pytest.mark.unit
    def test_non_object_value(self, state):
        """Defaults computed by a call are not inspected."""
        node = _widget(static_property("defaultProps", call(identifier("makeDefaults"))))
        assert collect_defaults(node, state) == set()

    @pytest.mark.unit
    def test_configured_property_name(self):
        """The defaults property name comes from the options."""
        options = ConvertOptions(defaults_property="initialProps")
        state = ConvertState.for_module(program(), options=options)
        defaults = object_expression({"size": literal("md")})
        node = _widget(static_property("initialProps", defaults))
        assert collect_defaults(node, state) == {"size"}
