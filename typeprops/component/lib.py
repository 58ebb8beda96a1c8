"""Component call-site transform.

Function components have no class body to patch, so validators are
requested with a helper call next to the component:

    ```ts
    transformTypeToPropTypes<Props>(Widget);
    // becomes
    Widget.propTypes = {
      label: PropTypes.string.isRequired,
    };
    ```

The call is replaced by the assignment. Defaults assigned with
``Widget.defaultProps = {...}`` anywhere in the module relax the required
marker the same way a class's static defaults do. A call whose component
argument or type argument cannot be used is left in place.
"""

from __future__ import annotations

from typeprops.core import get_logger
from typeprops.defaults import collect_assigned_defaults
from typeprops.merge import merge
from typeprops.registry import ConvertState
from typeprops.resolve import resolve_type
from typeprops.shape import ObjectShape
from typeprops.synth import has_usable_entries, synthesize_fields
from typeprops.syntax import (
    BaseNode,
    Identifier,
    MemberExpression,
    find_calls,
    generate,
    replace_child,
    type_arguments,
)
from typeprops.syntax.build import assign, member

logger = get_logger("component")

PROP_TYPES_HELPER = "transformTypeToPropTypes"


def transform_component_calls(module: BaseNode, state: ConvertState) -> list[str]:
    """Replace every component helper call in ``module`` in place.

    Args:
        module: Module root, mutated in place.
        state: Conversion state for the module.

    Returns:
        list[str]: The component expressions that received validators, in
        source order.
    """
    patched: list[str] = []
    for parent, key, index, call in find_calls(module, PROP_TYPES_HELPER):
        component = call.arguments[0] if call.arguments else None
        if not isinstance(component, (Identifier, MemberExpression)):
            logger.debug(f"{PROP_TYPES_HELPER}: component argument missing, call kept")
            continue
        name = generate(component)

        arguments = type_arguments(call)
        shape = resolve_type(arguments[0], state) if arguments else None
        if not isinstance(shape, ObjectShape):
            logger.debug(f"{name}: type argument does not resolve, call kept")
            continue

        defaults = collect_assigned_defaults(module, component, state)
        entries = synthesize_fields(shape, defaults, state)
        if not has_usable_entries(entries):
            logger.debug(f"{name}: no usable validators derived, call kept")
            continue

        validators = merge(None, entries, state)
        target = member(component, state.options.validator_property)
        replace_child(parent, key, index, assign(target, validators))
        patched.append(name)
        logger.info(f"{name}: assigned {state.options.validator_property}")
    return patched


__all__ = ["PROP_TYPES_HELPER", "transform_component_calls"]
