"""Generic-parameter extraction.

Harvests the type names a class's props type argument refers to. Nothing is
resolved here; the names are candidates for registry lookup and are reported
back to callers (e.g. to know which declarations a class depends on).
"""

from typeprops.syntax import (
    BaseNode,
    TSIntersectionType,
    TSParenthesizedType,
    TSTypeReference,
    TSUnionType,
    entity_name,
    type_arguments,
    unwrap_annotation,
)


def extract_generic_type_names(type_node: BaseNode | None) -> list[str]:
    """Names referenced by a props type argument.

    A bare reference yields its own name; unions and intersections yield the
    names of their operands; generic references also yield the names in
    their type arguments. Inline object types, keywords and everything else
    contribute nothing.

    Args:
        type_node: First type argument of the class's superclass.

    Returns:
        list[str]: Ordered names without duplicates.

    Example:
        >>> extract_generic_type_names(parse_node(babel_json_for("A & (B | C)")))
        ['A', 'B', 'C']
    """
    names: list[str] = []
    _collect(unwrap_annotation(type_node), names)
    return names


def _collect(node: BaseNode | None, names: list[str]) -> None:
    if isinstance(node, TSTypeReference):
        name = entity_name(node.type_name)
        if name and name not in names:
            names.append(name)
        for argument in type_arguments(node):
            _collect(argument, names)
    elif isinstance(node, (TSUnionType, TSIntersectionType)):
        for member in node.types:
            _collect(member, names)
    elif isinstance(node, TSParenthesizedType):
        _collect(node.type_annotation, names)
