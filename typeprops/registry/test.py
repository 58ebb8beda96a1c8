"""Unit tests for the type registry and conversion state."""

import pytest

from typeprops.registry import ConvertOptions, ConvertState, TypeRegistry
from typeprops.shape import Primitive, PrimitiveKind
from typeprops.syntax import TSEnumDeclaration, TSInterfaceDeclaration, parse_node
from typeprops.syntax.build import (
    program,
    ts_alias,
    ts_enum,
    ts_interface,
    ts_keyword,
    ts_prop,
)


class TestTypeRegistry:
    """Tests for TypeRegistry."""

    @pytest.mark.unit
    def test_collects_declaration_kinds(self):
        """Interfaces, aliases and enums are registered by name."""
        registry = TypeRegistry.from_modules(
            program(
                ts_interface("Props"),
                ts_alias("Size", ts_keyword("string")),
                ts_enum("Tone", ["Info"]),
            )
        )
        assert registry.names() == ["Props", "Size", "Tone"]
        assert "Size" in registry
        assert len(registry) == 3

    @pytest.mark.unit
    def test_nested_declarations_found(self):
        """Exported and nested declarations are registered too."""
        module = parse_node(
            {
                "type": "Program",
                "body": [
                    {
                        "type": "ExportNamedDeclaration",
                        "declaration": {
                            "type": "TSEnumDeclaration",
                            "id": {"type": "Identifier", "name": "Tone"},
                            "members": [],
                        },
                    }
                ],
            }
        )
        assert isinstance(TypeRegistry.from_modules(module).get("Tone")[0], TSEnumDeclaration)

    @pytest.mark.unit
    def test_interfaces_merge(self):
        """Repeated interfaces keep every declaration in order."""
        first = ts_interface("Props", ts_prop("a", ts_keyword("string")))
        second = ts_interface("Props", ts_prop("b", ts_keyword("string")))
        registry = TypeRegistry.from_modules(program(first, second))
        assert registry.get("Props") == (first, second)

    @pytest.mark.unit
    def test_other_redeclarations_replace(self):
        """A non-interface redeclaration replaces what came before."""
        alias = ts_alias("Props", ts_keyword("number"))
        registry = TypeRegistry.from_modules(program(ts_interface("Props"), alias))
        assert registry.get("Props") == (alias,)

    @pytest.mark.unit
    def test_imports_then_module(self):
        """Modules are read in order; the last one shadows earlier ones."""
        imported = program(ts_alias("Size", ts_keyword("number")))
        local = program(ts_alias("Size", ts_keyword("string")))
        registry = TypeRegistry.from_modules(imported, local)
        assert registry.get("Size")[0].type_annotation.type == "TSStringKeyword"

    @pytest.mark.unit
    def test_unknown_name(self):
        """Unknown names give an empty tuple."""
        assert TypeRegistry().get("Missing") == ()


class TestConvertState:
    """Tests for ConvertState guards and bindings."""

    @pytest.fixture
    def state(self):
        return ConvertState.for_module(program(ts_interface("Props")))

    @pytest.mark.unit
    def test_for_module(self, state):
        """State is built with a registry over the module."""
        assert isinstance(state.registry.get("Props")[0], TSInterfaceDeclaration)
        assert state.options == ConvertOptions()

    @pytest.mark.unit
    def test_entering_restores_visited(self, state):
        """Names leave the visited set when resolution returns."""
        with state.entering("Props"):
            assert "Props" in state.visited
        assert state.visited == set()

    @pytest.mark.unit
    def test_nested_depth(self):
        """Depth counts nesting and reports when the limit is hit."""
        state = ConvertState(registry=TypeRegistry(), options=ConvertOptions(max_depth=1))
        assert not state.too_deep
        with state.nested():
            assert state.too_deep
        assert state.depth == 0

    @pytest.mark.unit
    def test_bindings_innermost_only(self, state):
        """Only the innermost frame is visible."""
        string = Primitive(PrimitiveKind.STRING)
        with state.binding({"T": string}):
            assert state.bound("T") == string
            with state.binding({}):
                assert state.bound("T") is None
        assert state.bound("T") is None


class TestConvertOptions:
    """Tests for ConvertOptions.from_environment."""

    @pytest.mark.unit
    def test_defaults(self):
        """Without variables set, the built-in names are used."""
        assert ConvertOptions.from_environment() == ConvertOptions()

    @pytest.mark.unit
    def test_from_variables(self, monkeypatch):
        """TYPEPROPS_* variables override the defaults."""
        monkeypatch.setenv("TYPEPROPS_VALIDATOR_PROPERTY", "checks")
        monkeypatch.setenv("TYPEPROPS_MAX_DEPTH", "4")
        options = ConvertOptions.from_environment()
        assert options.validator_property == "checks"
        assert options.max_depth == 4
