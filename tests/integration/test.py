"""Integration tests running the full transform over Babel AST fixtures."""

import pytest

from typeprops.component import transform_component_calls
from typeprops.defaults import find_static_property
from typeprops.keys import transform_type_keys
from typeprops.patch import PatchStatus, transform_module
from typeprops.registry import ConvertOptions, ConvertState
from typeprops.schema import transform_type_schemas
from typeprops.syntax import ClassDeclaration, dump_node, generate, parse_node, walk

EXPECTED_VALIDATORS = """{
  id: PropTypes.string.isRequired,
  label: PropTypes.string.isRequired,
  count: PropTypes.number,
  tone: PropTypes.oneOf(["info", "warn"]),
  tags: PropTypes.arrayOf(PropTypes.string).isRequired,
  onSelect: PropTypes.func.isRequired,
  children: PropTypes.node.isRequired
}"""


def _class(module, name):
    for node in walk(module):
        if isinstance(node, ClassDeclaration) and node.id.name == name:
            return node
    raise LookupError(name)


class TestWidgetModule:
    """End-to-end tests over the widget fixture."""

    @pytest.mark.integration
    def test_transform_reports_each_class(self, widget_json):
        """Typed components are patched and untyped ones skipped."""
        module = parse_node(widget_json)
        report = transform_module(module, ConvertOptions())
        assert [(r.class_name, r.status) for r in report] == [
            ("Widget", PatchStatus.PATCHED),
            ("Untyped", PatchStatus.NOT_APPLICABLE),
        ]
        assert report.patched[0].type_names == ("WidgetProps",)

    @pytest.mark.integration
    def test_generated_validators(self, widget_json):
        """Inherited, enum, array, method and React members all convert."""
        module = parse_node(widget_json)
        transform_module(module, ConvertOptions())
        widget = _class(module, "Widget")
        assert generate(find_static_property(widget, "propTypes").value) == EXPECTED_VALIDATORS

    @pytest.mark.integration
    def test_untouched_fields_survive(self, widget_json):
        """Location data and unmodelled nodes come back as they were."""
        module = parse_node(widget_json)
        transform_module(module, ConvertOptions())
        dumped = dump_node(module)

        body = dumped["program"]["body"]
        assert body[0] == widget_json["program"]["body"][0]
        declaration = body[5]["declaration"]
        original = widget_json["program"]["body"][5]["declaration"]
        assert declaration["loc"] == original["loc"]
        assert declaration["body"]["body"][1] == original["body"]["body"][0]

    @pytest.mark.integration
    def test_transform_is_idempotent(self, widget_json):
        """Transforming transformed output changes nothing."""
        first = parse_node(widget_json)
        transform_module(first, ConvertOptions())
        once = dump_node(first)

        second = parse_node(once)
        report = transform_module(second, ConvertOptions())
        assert dump_node(second) == once
        assert not report.changed

    @pytest.mark.integration
    def test_keys_call_replaced(self, widget_json):
        """transformTypeToKeys<WidgetProps>() becomes the prop names."""
        module = parse_node(widget_json)
        assert transform_type_keys(module, ConvertState.for_module(module), production=False) == 1
        declarator = next(n for n in walk(module) if n.type == "VariableDeclarator")
        assert generate(declarator.init) == (
            '["id", "label", "count", "tone", "tags", "onSelect", "children"]'
        )

    @pytest.mark.integration
    def test_component_call_replaced(self, widget_json):
        """transformTypeToPropTypes<BaseProps>(Badge) becomes an assignment."""
        module = parse_node(widget_json)
        state = ConvertState.for_module(module)
        assert transform_component_calls(module, state) == ["Badge"]
        statement = module.program.body[9]
        assert generate(statement.expression) == (
            "Badge.propTypes = {\n  id: PropTypes.string.isRequired\n}"
        )

    @pytest.mark.integration
    def test_schema_call_replaced(self, widget_json):
        """transformTypeToSchema<BaseProps>() becomes a prop description."""
        module = parse_node(widget_json)
        state = ConvertState.for_module(module)
        assert transform_type_schemas(module, state, production=False) == 1
        declarator = module.program.body[10].declarations[0]
        assert generate(declarator.init) == (
            '{\n  id: {\n    type: "string",\n    required: true\n  }\n}'
        )
