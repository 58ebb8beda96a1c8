"""Validator synthesizer.

Converts resolved TypeShapes into validator expressions, then lowers those
expressions to the AST of the runtime validator library:

    Primitive(string)          -> PropTypes.string
    ObjectShape                -> PropTypes.shape({...})
    ArrayShape                 -> PropTypes.arrayOf(...)
    LiteralEnum                -> PropTypes.oneOf([...])
    UnionShape                 -> PropTypes.oneOfType([...])
    UnknownShape               -> PropTypes.any
    required (any of the above) -> <validator>.isRequired

Validators are immutable values; lowering builds fresh nodes every call.
"""

from __future__ import annotations

from dataclasses import dataclass, replace
from typing import Iterable, Union

from typeprops.registry import ConvertState
from typeprops.shape import (
    ArrayShape,
    Field,
    LiteralEnum,
    ObjectShape,
    Primitive,
    PrimitiveKind,
    TypeShape,
    UnionShape,
)
from typeprops.syntax import BaseNode
from typeprops.syntax.build import (
    array,
    call,
    identifier,
    literal,
    member,
    object_expression,
)

# Runtime names of the primitive validators
KIND_NAMES: dict[PrimitiveKind, str] = {
    PrimitiveKind.STRING: "string",
    PrimitiveKind.NUMBER: "number",
    PrimitiveKind.BOOLEAN: "bool",
    PrimitiveKind.FUNCTION: "func",
    PrimitiveKind.OBJECT: "object",
    PrimitiveKind.SYMBOL: "symbol",
    PrimitiveKind.NODE: "node",
    PrimitiveKind.ELEMENT: "element",
}


# =============================================================================
# Validator expressions
# =============================================================================


@dataclass(frozen=True)
class PrimitiveValidator:
    kind: PrimitiveKind


@dataclass(frozen=True)
class ShapeValidator:
    entries: tuple[ValidatorEntry, ...] = ()


@dataclass(frozen=True)
class ArrayOfValidator:
    element: Validator


@dataclass(frozen=True)
class OneOfValidator:
    values: tuple[str | int | float | bool, ...] = ()


@dataclass(frozen=True)
class OneOfTypeValidator:
    members: tuple[Validator, ...] = ()


@dataclass(frozen=True)
class AnyValidator:
    pass


@dataclass(frozen=True)
class RequiredValidator:
    inner: Validator


Validator = Union[
    PrimitiveValidator,
    ShapeValidator,
    ArrayOfValidator,
    OneOfValidator,
    OneOfTypeValidator,
    AnyValidator,
    RequiredValidator,
]


@dataclass(frozen=True)
class ValidatorEntry:
    """One property of a validator object.

    Attributes:
        prop_name: Prop the validator checks.
        expression: Full validator, wrapped in RequiredValidator when required.
        required: Whether the prop must be present.
    """

    prop_name: str
    expression: Validator
    required: bool = False

    @property
    def base(self) -> Validator:
        """The validator without its required wrapper."""
        if isinstance(self.expression, RequiredValidator):
            return self.expression.inner
        return self.expression


# =============================================================================
# Synthesis
# =============================================================================


def synthesize_shape(shape: TypeShape, state: ConvertState) -> Validator:
    """Validator for a shape, without any required marker at the top."""
    match shape:
        case Primitive():
            return PrimitiveValidator(shape.kind)
        case ObjectShape():
            return ShapeValidator(tuple(synthesize(f, state) for f in shape.fields))
        case ArrayShape():
            return ArrayOfValidator(synthesize_shape(shape.element, state))
        case LiteralEnum():
            return OneOfValidator(shape.values)
        case UnionShape():
            return OneOfTypeValidator(
                tuple(synthesize_shape(m, state) for m in shape.members)
            )
        case _:
            return AnyValidator()


def synthesize(field: Field, state: ConvertState) -> ValidatorEntry:
    """Validator entry for one field.

    A field is required unless it is optional, has a default, or its shape
    could not be resolved (permissive validators are never required).
    """
    base = synthesize_shape(field.shape, state)
    required = (
        not field.optional
        and not field.has_default
        and not isinstance(base, AnyValidator)
    )
    expression = RequiredValidator(base) if required else base
    return ValidatorEntry(field.name, expression, required)


def synthesize_fields(
    shape: ObjectShape, defaults: Iterable[str], state: ConvertState
) -> list[ValidatorEntry]:
    """Entries for every field of the props shape, in declaration order.

    Args:
        shape: Resolved props shape.
        defaults: Prop names the class supplies defaults for.
        state: Conversion state.

    Returns:
        list[ValidatorEntry]: One entry per field.
    """
    defaults = set(defaults)
    return [
        synthesize(replace(f, has_default=f.name in defaults), state)
        for f in shape.fields
    ]


def has_usable_entries(entries: Iterable[ValidatorEntry]) -> bool:
    """Whether at least one entry validates more than ``any``."""
    return any(not isinstance(e.base, AnyValidator) for e in entries)


# =============================================================================
# Lowering
# =============================================================================


def validator_to_node(expr: Validator, namespace: str) -> BaseNode:
    """Lower a validator to AST, accessing validators on ``namespace``.

    Example:
        >>> node = validator_to_node(
        ...     RequiredValidator(PrimitiveValidator(PrimitiveKind.STRING)), "PropTypes"
        ... )
        >>> generate(node)
        'PropTypes.string.isRequired'
    """
    ns = identifier(namespace)
    match expr:
        case PrimitiveValidator():
            return member(ns, KIND_NAMES[expr.kind])
        case ShapeValidator():
            fields = {
                e.prop_name: validator_to_node(e.expression, namespace)
                for e in expr.entries
            }
            return call(member(ns, "shape"), object_expression(fields))
        case ArrayOfValidator():
            return call(member(ns, "arrayOf"), validator_to_node(expr.element, namespace))
        case OneOfValidator():
            return call(member(ns, "oneOf"), array(literal(v) for v in expr.values))
        case OneOfTypeValidator():
            return call(
                member(ns, "oneOfType"),
                array(validator_to_node(m, namespace) for m in expr.members),
            )
        case RequiredValidator():
            return member(validator_to_node(expr.inner, namespace), "isRequired")
        case _:
            return member(ns, "any")


__all__ = [
    "KIND_NAMES",
    "Validator",
    "PrimitiveValidator",
    "ShapeValidator",
    "ArrayOfValidator",
    "OneOfValidator",
    "OneOfTypeValidator",
    "AnyValidator",
    "RequiredValidator",
    "ValidatorEntry",
    "synthesize",
    "synthesize_shape",
    "synthesize_fields",
    "has_usable_entries",
    "validator_to_node",
]
