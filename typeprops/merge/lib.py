"""Merge engine.

Hand-written validators always win: existing properties are never removed,
reordered or rewritten. Derived entries are only appended for props the
existing object does not mention yet, which also makes a second run over
already-patched output a no-op.
"""

from __future__ import annotations

from typing import Iterable, Sequence

from typeprops.registry import ConvertState
from typeprops.synth import ValidatorEntry, validator_to_node
from typeprops.syntax import ObjectExpression, ObjectMethod, ObjectProperty, key_name
from typeprops.syntax.build import object_expression, object_property


def declared_names(existing: ObjectExpression | None) -> set[str]:
    """Plain property names already present in a validator object.

    Methods, getters and setters count as well: a later duplicate key
    would replace them at runtime.
    """
    if existing is None:
        return set()
    return {
        name
        for prop in existing.properties
        if isinstance(prop, (ObjectProperty, ObjectMethod))
        and (name := key_name(prop.key, prop.computed)) is not None
    }


def missing_entries(
    existing: ObjectExpression | None, entries: Iterable[ValidatorEntry]
) -> list[ValidatorEntry]:
    """Entries whose prop is not declared in ``existing``, in order."""
    present = declared_names(existing)
    return [e for e in entries if e.prop_name not in present]


def merge(
    existing: ObjectExpression | None,
    entries: Sequence[ValidatorEntry],
    state: ConvertState,
) -> ObjectExpression:
    """Combine an existing validator object with derived entries.

    Args:
        existing: Hand-written validator object, or None.
        entries: Derived entries in declaration order.
        state: Conversion state (supplies the validator namespace).

    Returns:
        ObjectExpression: A new object. ``existing`` is left unchanged and
        its property nodes are reused as-is.
    """
    appended = [
        object_property(e.prop_name, validator_to_node(e.expression, state.options.namespace))
        for e in missing_entries(existing, entries)
    ]
    if existing is None:
        return object_expression(appended)
    return existing.model_copy(update={"properties": [*existing.properties, *appended]})


__all__ = ["merge", "missing_entries", "declared_names"]
