"""JavaScript source rendering for expression nodes.

Only the expression forms the transform produces (and the ones commonly
found in hand-written validator objects) are rendered. Anything else is
emitted as a ``/* NodeType */`` placeholder so previews never fail.

Example output:
    ```js
    {
      label: PropTypes.string.isRequired,
      count: PropTypes.number
    }
    ```
"""

import json

from .lib import (
    ArrayExpression,
    AssignmentExpression,
    BaseNode,
    BooleanLiteral,
    CallExpression,
    Identifier,
    MemberExpression,
    NullLiteral,
    NumericLiteral,
    ObjectExpression,
    ObjectMethod,
    ObjectProperty,
    SpreadElement,
    StringLiteral,
    is_identifier_name,
)

INDENT = "  "


def generate(node: BaseNode | None, indent: int = 0) -> str:
    """Render an expression node as JavaScript.

    Args:
        node: Expression to render.
        indent: Current indentation level (used by nested object literals).

    Returns:
        str: JavaScript source.
    """
    match node:
        case None:
            return ""
        case Identifier():
            return node.name
        case StringLiteral():
            return json.dumps(node.value)
        case NumericLiteral():
            return _number(node.value)
        case BooleanLiteral():
            return "true" if node.value else "false"
        case NullLiteral():
            return "null"
        case MemberExpression():
            obj = generate(node.object, indent)
            if node.computed:
                return f"{obj}[{generate(node.property, indent)}]"
            return f"{obj}.{generate(node.property, indent)}"
        case CallExpression():
            args = ", ".join(generate(arg, indent) for arg in node.arguments)
            return f"{generate(node.callee, indent)}({args})"
        case ArrayExpression():
            items = ", ".join(
                "" if element is None else generate(element, indent)
                for element in node.elements
            )
            return f"[{items}]"
        case AssignmentExpression():
            return (
                f"{generate(node.left, indent)} {node.operator} "
                f"{generate(node.right, indent)}"
            )
        case ObjectExpression():
            return _object(node, indent)
        case SpreadElement():
            return f"...{generate(node.argument, indent)}"
        case _:
            return f"/* {node.type} */"


def _number(value: int | float) -> str:
    if isinstance(value, float) and value.is_integer():
        return str(int(value))
    return repr(value)


def _key(prop: ObjectProperty | ObjectMethod, indent: int) -> str:
    key = prop.key
    if prop.computed:
        return f"[{generate(key, indent)}]"
    if isinstance(key, StringLiteral) and not is_identifier_name(key.value):
        return json.dumps(key.value)
    if isinstance(key, StringLiteral):
        return key.value
    return generate(key, indent)


def _object(node: ObjectExpression, indent: int) -> str:
    if not node.properties:
        return "{}"
    inner = INDENT * (indent + 1)
    lines: list[str] = []
    for prop in node.properties:
        if isinstance(prop, ObjectProperty):
            lines.append(f"{inner}{_key(prop, indent + 1)}: {generate(prop.value, indent + 1)}")
        elif isinstance(prop, ObjectMethod):
            prefix = "" if prop.kind == "method" else f"{prop.kind} "
            lines.append(f"{inner}{prefix}{_key(prop, indent + 1)}(...) {{...}}")
        else:
            lines.append(f"{inner}{generate(prop, indent + 1)}")
    body = ",\n".join(lines)
    return f"{{\n{body}\n{INDENT * indent}}}"


__all__ = ["generate"]
