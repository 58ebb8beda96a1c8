"""Unit tests for the component call-site transform."""

import pytest

from typeprops.component import transform_component_calls
from typeprops.registry import ConvertOptions, ConvertState
from typeprops.syntax import CallExpression, ExpressionStatement, dump_node, generate
from typeprops.syntax.build import (
    assign,
    generic_call,
    identifier,
    literal,
    member,
    object_expression,
    program,
    statement,
    ts_interface,
    ts_keyword,
    ts_prop,
    ts_ref,
)

TEST_PROPS = ts_interface(
    "TestProps",
    ts_prop("prop_a", ts_keyword("string")),
    ts_prop("prop_b", ts_keyword("string"), optional=True),
    ts_prop("prop_c", ts_keyword("number")),
)


def _helper_call(component=None, type_name="TestProps"):
    arguments = [component] if component is not None else []
    return generic_call("transformTypeToPropTypes", ts_ref(type_name), *arguments)


def _module(*statements):
    return program(TEST_PROPS, *statements)


def _run(module, options=None):
    state = ConvertState.for_module(module, options=options or ConvertOptions())
    return transform_component_calls(module, state)


def _last_expression(module):
    last = module.body[-1]
    assert isinstance(last, ExpressionStatement)
    return last.expression


class TestTransformComponentCalls:
    """Tests for transform_component_calls."""

    @pytest.mark.unit
    def test_call_becomes_assignment(self):
        """The helper call is replaced by ``Widget.propTypes = {...}``."""
        module = _module(statement(_helper_call(identifier("Widget"))))
        assert _run(module) == ["Widget"]
        assert generate(_last_expression(module)) == (
            "Widget.propTypes = {\n"
            "  prop_a: PropTypes.string.isRequired,\n"
            "  prop_b: PropTypes.string,\n"
            "  prop_c: PropTypes.number.isRequired\n"
            "}"
        )

    @pytest.mark.unit
    def test_assigned_defaults_relax_required(self):
        """Props given defaults on the component are not required."""
        defaults = assign(
            member(identifier("Widget"), "defaultProps"),
            object_expression({"prop_c": literal(1)}),
        )
        module = _module(statement(defaults), statement(_helper_call(identifier("Widget"))))
        _run(module)
        assert "prop_c: PropTypes.number\n" in generate(_last_expression(module))

    @pytest.mark.unit
    def test_other_component_defaults_ignored(self):
        """Defaults assigned to a different component do not count."""
        defaults = assign(
            member(identifier("Other"), "defaultProps"),
            object_expression({"prop_c": literal(1)}),
        )
        module = _module(statement(defaults), statement(_helper_call(identifier("Widget"))))
        _run(module)
        assert "prop_c: PropTypes.number.isRequired" in generate(_last_expression(module))

    @pytest.mark.unit
    def test_member_component(self):
        """Namespaced components are assigned through the same member path."""
        component = member(identifier("UI"), "Widget")
        module = _module(statement(_helper_call(component)))
        assert _run(module) == ["UI.Widget"]
        assert generate(_last_expression(module)).startswith("UI.Widget.propTypes = {")

    @pytest.mark.unit
    def test_missing_component_kept(self):
        """A call without a component argument is left in place."""
        module = _module(statement(_helper_call()))
        assert _run(module) == []
        assert isinstance(_last_expression(module), CallExpression)

    @pytest.mark.unit
    def test_unresolvable_type_kept(self):
        """Types that are not declared in the module leave the call alone."""
        module = _module(statement(_helper_call(identifier("Widget"), "ExternalProps")))
        assert _run(module) == []
        assert isinstance(_last_expression(module), CallExpression)

    @pytest.mark.unit
    def test_second_run_is_noop(self):
        """Transformed output has no helper calls left to replace."""
        module = _module(statement(_helper_call(identifier("Widget"))))
        _run(module)
        before = dump_node(module)
        assert _run(module) == []
        assert dump_node(module) == before

    @pytest.mark.unit
    def test_custom_names(self):
        """Property and namespace names follow the options."""
        options = ConvertOptions(validator_property="checks", namespace="T")
        module = _module(statement(_helper_call(identifier("Widget"))))
        _run(module, options)
        assert generate(_last_expression(module)).startswith(
            "Widget.checks = {\n  prop_a: T.string.isRequired"
        )
