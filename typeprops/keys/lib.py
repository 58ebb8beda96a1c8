"""Type-keys call-site transform.

Replaces ``transformTypeToKeys<T>(options?)`` calls with the array of
``T``'s field names:

    ```ts
    const keys = transformTypeToKeys<Props>();
    // becomes
    const keys = ["label", "count"];
    ```

Production builds get ``null`` instead unless the call opts in with
``{ transformInProduction: true }``.
"""

from __future__ import annotations

from typeprops.config import is_production
from typeprops.core import get_logger
from typeprops.registry import ConvertState
from typeprops.resolve import resolve_type
from typeprops.shape import ObjectShape
from typeprops.syntax import (
    BaseNode,
    BooleanLiteral,
    CallExpression,
    NullLiteral,
    call_option,
    find_calls,
    replace_child,
    type_arguments,
)
from typeprops.syntax.build import array, literal

logger = get_logger("keys")

KEYS_HELPER = "transformTypeToKeys"
PRODUCTION_OPTION = "transformInProduction"


def allowed_in_production(call: CallExpression) -> bool:
    """Whether the call's options object sets ``transformInProduction: true``."""
    value = call_option(call, PRODUCTION_OPTION)
    return isinstance(value, BooleanLiteral) and value.value


def transform_type_keys(
    module: BaseNode, state: ConvertState, production: bool | None = None
) -> int:
    """Replace every keys helper call in ``module`` in place.

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
    for parent, key, index, call in find_calls(module, KEYS_HELPER):
        arguments = type_arguments(call)
        shape = resolve_type(arguments[0], state) if arguments else None
        if not isinstance(shape, ObjectShape):
            logger.debug(f"{KEYS_HELPER}: type argument does not resolve, call kept")
            continue
        if production and not allowed_in_production(call):
            replacement: BaseNode = NullLiteral()
        else:
            replacement = array(literal(name) for name in shape.names)
        replace_child(parent, key, index, replacement)
        replaced += 1

    if replaced:
        logger.info(f"Replaced {replaced} {KEYS_HELPER} call(s)")
    return replaced


__all__ = ["KEYS_HELPER", "PRODUCTION_OPTION", "allowed_in_production", "transform_type_keys"]
