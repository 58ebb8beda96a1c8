"""Unit tests for generic-parameter extraction."""

import pytest

from typeprops.extract import extract_generic_type_names
from typeprops.syntax import parse_node
from typeprops.syntax.build import (
    ts_intersection,
    ts_keyword,
    ts_prop,
    ts_ref,
    ts_type_literal,
    ts_union,
)


class TestExtractGenericTypeNames:
    """Tests for extract_generic_type_names."""

    @pytest.mark.unit
    def test_bare_reference(self):
        """A bare name yields itself."""
        assert extract_generic_type_names(ts_ref("Props")) == ["Props"]

    @pytest.mark.unit
    def test_union_and_intersection(self):
        """Operands are harvested recursively, in order."""
        node = ts_intersection(ts_ref("A"), ts_union(ts_ref("B"), ts_ref("C")))
        assert extract_generic_type_names(node) == ["A", "B", "C"]

    @pytest.mark.unit
    def test_duplicates_removed(self):
        """Repeated names appear once."""
        node = ts_union(ts_ref("A"), ts_ref("B"), ts_ref("A"))
        assert extract_generic_type_names(node) == ["A", "B"]

    @pytest.mark.unit
    def test_generic_arguments(self):
        """Names inside type arguments follow the outer name."""
        node = ts_ref("Partial", ts_ref("Props"))
        assert extract_generic_type_names(node) == ["Partial", "Props"]

    @pytest.mark.unit
    def test_inline_literal_yields_nothing(self):
        """Inline object types are resolved in place, not by name."""
        node = ts_type_literal(ts_prop("label", ts_keyword("string")))
        assert extract_generic_type_names(node) == []

    @pytest.mark.unit
    def test_keyword_yields_nothing(self):
        """Keywords contribute no names."""
        assert extract_generic_type_names(ts_keyword("string")) == []

    @pytest.mark.unit
    def test_missing_argument(self):
        """No type argument means nothing to extract."""
        assert extract_generic_type_names(None) == []

    @pytest.mark.unit
    def test_qualified_and_parenthesized(self):
        """Qualified names are dotted and parentheses are transparent."""
        node = parse_node(
            {
                "type": "TSParenthesizedType",
                "typeAnnotation": {
                    "type": "TSTypeReference",
                    "typeName": {
                        "type": "TSQualifiedName",
                        "left": {"type": "Identifier", "name": "ns"},
                        "right": {"type": "Identifier", "name": "Props"},
                    },
                },
            }
        )
        assert extract_generic_type_names(node) == ["ns.Props"]
