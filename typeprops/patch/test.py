"""Unit tests for the class patcher."""

import pytest

from typeprops.defaults import find_static_property
from typeprops.patch import PatchStatus, patch_class, transform_module
from typeprops.registry import ConvertOptions, ConvertState
from typeprops.syntax import ClassProperty, dump_node, generate, key_name, parse_node
from typeprops.syntax.build import (
    call,
    class_declaration,
    identifier,
    literal,
    member,
    object_expression,
    program,
    static_property,
    ts_interface,
    ts_keyword,
    ts_prop,
    ts_ref,
    ts_type_literal,
)

WIDGET_PROPS = ts_type_literal(
    ts_prop("label", ts_keyword("string")),
    ts_prop("count", ts_keyword("number"), optional=True),
)


def _patch(class_node, *declarations, options=None):
    state = ConvertState.for_module(
        program(*declarations, class_node), options=options or ConvertOptions()
    )
    return patch_class(class_node, state)


def _validators(class_node, name="propTypes"):
    return generate(find_static_property(class_node, name).value)


class TestPatchClass:
    """Tests for patch_class."""

    @pytest.mark.unit
    def test_widget_end_to_end(self):
        """Inline props produce an ordered validator object."""
        widget = class_declaration("Widget", WIDGET_PROPS)
        result = _patch(widget)
        assert result.status is PatchStatus.PATCHED
        assert result.added == ("label", "count")
        assert _validators(widget) == (
            "{\n  label: PropTypes.string.isRequired,\n  count: PropTypes.number\n}"
        )

    @pytest.mark.unit
    def test_inserted_first_and_static(self):
        """A new validator property goes to the front of the class body."""
        render = ClassProperty(key=identifier("render"), value=identifier("fn"))
        widget = class_declaration("Widget", WIDGET_PROPS, render)
        _patch(widget)
        first = widget.body.body[0]
        assert first.static and key_name(first.key) == "propTypes"
        assert widget.body.body[1] is render

    @pytest.mark.unit
    def test_no_type_argument(self):
        """Untyped components are not applicable and not touched."""
        widget = class_declaration("Plain")
        before = dump_node(widget)
        assert _patch(widget).status is PatchStatus.NOT_APPLICABLE
        assert dump_node(widget) == before

    @pytest.mark.unit
    def test_unresolvable_props_skipped(self):
        """Props from elsewhere yield nothing usable."""
        widget = class_declaration("Widget", ts_ref("ImportedProps"))
        result = _patch(widget)
        assert result.status is PatchStatus.SKIPPED_EMPTY
        assert result.type_names == ("ImportedProps",)
        assert widget.body.body == []

    @pytest.mark.unit
    def test_named_props_and_defaults(self):
        """Referenced interfaces resolve and defaults relax requirements."""
        props = ts_interface(
            "ButtonProps",
            ts_prop("label", ts_keyword("string")),
            ts_prop("size", ts_keyword("number")),
        )
        defaults = static_property("defaultProps", object_expression({"size": literal(1)}))
        button = class_declaration("Button", ts_ref("ButtonProps"), defaults)
        result = _patch(button, props)
        assert result.type_names == ("ButtonProps",)
        assert _validators(button) == (
            "{\n  label: PropTypes.string.isRequired,\n  size: PropTypes.number\n}"
        )

    @pytest.mark.unit
    def test_existing_object_merged_in_place(self):
        """Hand-written entries stay; missing ones are appended."""
        existing = static_property(
            "propTypes", object_expression({"label": call(identifier("custom"))})
        )
        widget = class_declaration("Widget", WIDGET_PROPS, existing)
        result = _patch(widget)
        assert result.added == ("count",)
        assert widget.body.body[0] is existing
        assert _validators(widget) == "{\n  label: custom(),\n  count: PropTypes.number\n}"

    @pytest.mark.unit
    def test_existing_method_validator_wins(self):
        """A validator written as an object method is not duplicated."""
        method = parse_node(
            {
                "type": "ObjectMethod",
                "kind": "method",
                "key": {"type": "Identifier", "name": "label"},
                "params": [
                    {"type": "Identifier", "name": "props"},
                    {"type": "Identifier", "name": "name"},
                ],
                "body": {"type": "BlockStatement", "body": []},
            }
        )
        existing = static_property("propTypes", object_expression([method]))
        widget = class_declaration("Widget", WIDGET_PROPS, existing)
        result = _patch(widget)
        assert result.added == ("count",)
        assert _validators(widget) == "{\n  label(...) {...},\n  count: PropTypes.number\n}"

    @pytest.mark.unit
    def test_second_run_is_noop(self):
        """Patching already patched output changes nothing."""
        widget = class_declaration("Widget", WIDGET_PROPS)
        _patch(widget)
        before = dump_node(widget)
        result = _patch(widget)
        assert result.status is PatchStatus.PATCHED
        assert result.added == ()
        assert dump_node(widget) == before

    @pytest.mark.unit
    def test_wrapped_object_merged_inside_call(self):
        """wrap({...}) keeps its wrapper and gains the missing entries."""
        wrapped = call(identifier("forbidExtraProps"), object_expression())
        widget = class_declaration(
            "Widget", WIDGET_PROPS, static_property("propTypes", wrapped)
        )
        _patch(widget)
        rendered = _validators(widget)
        assert rendered.startswith("forbidExtraProps({\n  label:")

    @pytest.mark.unit
    def test_opaque_existing_value_skipped(self):
        """Validators produced by arbitrary code are left alone."""
        opaque = member(identifier("Base"), "propTypes")
        widget = class_declaration(
            "Widget", WIDGET_PROPS, static_property("propTypes", opaque)
        )
        result = _patch(widget)
        assert result.status is PatchStatus.SKIPPED_OPAQUE
        assert _validators(widget) == "Base.propTypes"

    @pytest.mark.unit
    def test_custom_names(self):
        """Property and namespace names follow the options."""
        options = ConvertOptions(validator_property="checks", namespace="T")
        widget = class_declaration("Widget", WIDGET_PROPS)
        _patch(widget, options=options)
        assert _validators(widget, "checks").startswith("{\n  label: T.string.isRequired")


class TestTransformModule:
    """Tests for transform_module."""

    @pytest.mark.unit
    def test_reports_every_class(self):
        """Every class is reported, nested ones included, in source order."""
        inner = {
            "type": "ClassDeclaration",
            "id": {"type": "Identifier", "name": "Inner"},
            "superClass": {"type": "Identifier", "name": "Component"},
            "superTypeParameters": {
                "type": "TSTypeParameterInstantiation",
                "params": [{"type": "TSTypeLiteral", "members": []}],
            },
            "body": {"type": "ClassBody", "body": []},
        }
        module = parse_node(
            {
                "type": "Program",
                "body": [
                    dump_node(class_declaration("Widget", WIDGET_PROPS)),
                    {
                        "type": "FunctionDeclaration",
                        "body": {"type": "BlockStatement", "body": [inner]},
                    },
                    dump_node(class_declaration("Plain")),
                ],
            }
        )
        report = transform_module(module, ConvertOptions())
        assert [(r.class_name, r.status) for r in report] == [
            ("Widget", PatchStatus.PATCHED),
            ("Inner", PatchStatus.SKIPPED_EMPTY),
            ("Plain", PatchStatus.NOT_APPLICABLE),
        ]
        assert report.changed

    @pytest.mark.unit
    def test_imported_declarations(self):
        """Types from supplied modules are visible to the transform."""
        shared = program(ts_interface("SharedProps", ts_prop("id", ts_keyword("string"))))
        module = program(class_declaration("Widget", ts_ref("SharedProps")))
        report = transform_module(module, ConvertOptions(), imports=[shared])
        assert report.patched[0].added == ("id",)
