"""Type-schema call-site transform.

Replaces ``transformTypeToSchema<T>(options?)`` calls with a plain object
literal describing ``T``, one entry per prop:

    ```ts
    const schema = transformTypeToSchema<Props>();
    // becomes
    const schema = {
      label: { type: "string", required: true },
      tags: { type: "array", items: { type: "string" }, required: false },
    };
    ```

Nested descriptions:
    - primitives: ``{ type: <kind> }`` (string, number, boolean, function,
      object, symbol, node, element)
    - arrays: ``{ type: "array", items: <description> }``
    - object types: ``{ type: "object", properties: { <name>: <entry> } }``
    - literal unions and enums: ``{ type: "enum", values: [...] }``
    - other unions: ``{ type: "union", types: [...] }``
    - anything unresolved: ``{ type: "any" }``

Options read from the call's object literal:
    - ``transformInProduction: true`` keeps the schema in production builds,
      which otherwise get ``null``
    - ``maxDepth: <number>`` overrides the nesting limit for this call
"""

from __future__ import annotations

from dataclasses import replace
from typing import Any

from typeprops.config import is_production
from typeprops.core import get_logger
from typeprops.keys import allowed_in_production
from typeprops.registry import ConvertState
from typeprops.resolve import resolve_type
from typeprops.shape import (
    ArrayShape,
    Field,
    LiteralEnum,
    ObjectShape,
    Primitive,
    TypeShape,
    UnionShape,
    UnknownShape,
)
from typeprops.syntax import (
    BaseNode,
    CallExpression,
    NullLiteral,
    NumericLiteral,
    call_option,
    find_calls,
    replace_child,
    type_arguments,
)
from typeprops.syntax.build import json_value

logger = get_logger("schema")

SCHEMA_HELPER = "transformTypeToSchema"
MAX_DEPTH_OPTION = "maxDepth"


# =============================================================================
# Descriptions
# =============================================================================


def describe_shape(shape: TypeShape) -> dict[str, Any]:
    """Plain-data description of a shape."""
    match shape:
        case Primitive():
            return {"type": shape.kind.value}
        case ArrayShape():
            return {"type": "array", "items": describe_shape(shape.element)}
        case ObjectShape():
            return {"type": "object", "properties": describe_fields(shape)}
        case LiteralEnum():
            return {"type": "enum", "values": list(shape.values)}
        case UnionShape():
            return {"type": "union", "types": [describe_shape(m) for m in shape.members]}
        case _:
            return {"type": "any"}


def describe_field(field: Field) -> dict[str, Any]:
    """Description of one prop with its ``required`` flag.

    Unresolved props are never required, matching the permissive validator
    they would get.
    """
    required = not field.optional and not isinstance(field.shape, UnknownShape)
    return {**describe_shape(field.shape), "required": required}


def describe_fields(shape: ObjectShape) -> dict[str, dict[str, Any]]:
    """Prop name to description, in declaration order."""
    return {f.name: describe_field(f) for f in shape.fields}


# =============================================================================
# Call sites
# =============================================================================


def _call_state(call: CallExpression, state: ConvertState) -> ConvertState:
    """State honouring a ``maxDepth`` option written on the call."""
    value = call_option(call, MAX_DEPTH_OPTION)
    if not isinstance(value, NumericLiteral) or int(value.value) < 1:
        return state
    options = replace(state.options, max_depth=int(value.value))
    return ConvertState(registry=state.registry, options=options)


def transform_type_schemas(
    module: BaseNode, state: ConvertState, production: bool | None = None
) -> int:
    """Replace every schema helper call in ``module`` in place.

    Args:
        module: Module root, mutated in place.
        state: Conversion state for the module.
        production: Build target override. None reads TYPEPROPS_PRODUCTION.

    Returns:
        int: Number of calls replaced. Calls whose type argument does not
        resolve to an object type are left untouched.
    """
    production = is_production(production)

    replaced = 0
    for parent, key, index, call in find_calls(module, SCHEMA_HELPER):
        arguments = type_arguments(call)
        shape = resolve_type(arguments[0], _call_state(call, state)) if arguments else None
        if not isinstance(shape, ObjectShape):
            logger.debug(f"{SCHEMA_HELPER}: type argument does not resolve, call kept")
            continue
        if production and not allowed_in_production(call):
            replacement: BaseNode = NullLiteral()
        else:
            replacement = json_value(describe_fields(shape))
        replace_child(parent, key, index, replacement)
        replaced += 1

    if replaced:
        logger.info(f"Replaced {replaced} {SCHEMA_HELPER} call(s)")
    return replaced


__all__ = [
    "SCHEMA_HELPER",
    "MAX_DEPTH_OPTION",
    "describe_shape",
    "describe_field",
    "describe_fields",
    "transform_type_schemas",
]
