"""Default-props collector.

Reads the names a component class supplies defaults for, so the
synthesizer can relax the required marker on those props.
"""

from __future__ import annotations

from typeprops.core import get_logger
from typeprops.registry import ConvertState
from typeprops.syntax import (
    AssignmentExpression,
    BaseNode,
    ClassDeclaration,
    ClassProperty,
    Identifier,
    MemberExpression,
    ObjectExpression,
    ObjectProperty,
    generate,
    key_name,
    walk,
)

logger = get_logger("defaults")


def find_static_property(class_node: ClassDeclaration, name: str) -> ClassProperty | None:
    """The ``static name = ...`` member of a class, if declared.

    Only plain (non-computed) keys match. When the name is declared more
    than once the first declaration is returned.
    """
    for member in class_node.body.body:
        if (
            isinstance(member, ClassProperty)
            and member.static
            and key_name(member.key, member.computed) == name
        ):
            return member
    return None


def collect_defaults(class_node: ClassDeclaration, state: ConvertState) -> set[str]:
    """Prop names with a default value on the class.

    Args:
        class_node: Component class.
        state: Conversion state (supplies the defaults property name).

    Returns:
        set[str]: Names keyed by an identifier or a non-computed string
        literal in the static defaults object. Empty when the property is
        missing or not an object literal.
    """
    declared = find_static_property(class_node, state.options.defaults_property)
    if declared is None or not isinstance(declared.value, ObjectExpression):
        return set()

    names = _object_keys(declared.value)
    logger.debug(f"Defaults declared for: {sorted(names)}")
    return names


def _object_keys(obj: ObjectExpression) -> set[str]:
    names: set[str] = set()
    for prop in obj.properties:
        # Spreads and methods are ignored
        if not isinstance(prop, ObjectProperty):
            continue
        name = key_name(prop.key, prop.computed)
        if name is not None:
            names.add(name)
    return names


def collect_assigned_defaults(
    module: BaseNode, component: BaseNode, state: ConvertState
) -> set[str]:
    """Prop names given defaults by ``Component.defaultProps = {...}``.

    Function components cannot declare static members, so their defaults
    are assigned after the declaration. Every such assignment to the same
    component expression anywhere in ``module`` contributes.
    """
    target = generate(component)
    names: set[str] = set()
    for node in walk(module):
        if (
            isinstance(node, AssignmentExpression)
            and node.operator == "="
            and isinstance(node.left, MemberExpression)
            and not node.left.computed
            and isinstance(node.left.property, Identifier)
            and node.left.property.name == state.options.defaults_property
            and generate(node.left.object) == target
            and isinstance(node.right, ObjectExpression)
        ):
            names |= _object_keys(node.right)
    if names:
        logger.debug(f"Defaults assigned to {target}: {sorted(names)}")
    return names


__all__ = ["collect_assigned_defaults", "collect_defaults", "find_static_property"]
