"""Type shapes: the resolved, AST-free form of a TypeScript type.

A shape is a pure value. It never points back at the node it was derived
from, so shapes can be compared, cached and tested without an AST.

Variants:
    - Primitive: a single runtime kind (string, number, ...)
    - ObjectShape: ordered fields of a structural type
    - ArrayShape: homogeneous list of one element shape
    - UnionShape: one of several shapes, literals grouped into one LiteralEnum
    - LiteralEnum: one of a closed set of literal values
    - UnknownShape: anything the resolver cannot see or must not expand
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Iterable, Union


class PrimitiveKind(str, Enum):
    """Runtime kinds a primitive validator can check."""

    STRING = "string"
    NUMBER = "number"
    BOOLEAN = "boolean"
    FUNCTION = "function"
    OBJECT = "object"
    SYMBOL = "symbol"
    NODE = "node"  # anything React can render
    ELEMENT = "element"  # a single React element


@dataclass(frozen=True)
class Primitive:
    kind: PrimitiveKind


@dataclass(frozen=True)
class Field:
    """One member of an object shape.

    Attributes:
        name: Property name.
        shape: Resolved shape of the property's type.
        optional: Declared with ``?`` or unioned with null/undefined.
        has_default: The component supplies a default value for it.
    """

    name: str
    shape: TypeShape
    optional: bool = False
    has_default: bool = False


@dataclass(frozen=True)
class ObjectShape:
    fields: tuple[Field, ...] = ()

    @property
    def names(self) -> list[str]:
        return [f.name for f in self.fields]

    def get(self, name: str) -> Field | None:
        for f in self.fields:
            if f.name == name:
                return f
        return None


@dataclass(frozen=True)
class ArrayShape:
    element: TypeShape


@dataclass(frozen=True)
class UnionShape:
    members: tuple[TypeShape, ...] = ()


@dataclass(frozen=True)
class LiteralEnum:
    values: tuple[str | int | float | bool, ...] = ()


@dataclass(frozen=True)
class UnknownShape:
    pass


TypeShape = Union[Primitive, ObjectShape, ArrayShape, UnionShape, LiteralEnum, UnknownShape]

UNKNOWN = UnknownShape()


def merge_fields(*groups: Iterable[Field]) -> tuple[Field, ...]:
    """Combine field lists; a later field replaces an earlier one of the same name.

    The replacement keeps the position of the first declaration.
    """
    merged: dict[str, Field] = {}
    for group in groups:
        for f in group:
            merged[f.name] = f
    return tuple(merged.values())


def dedupe(items: Iterable) -> tuple:
    """Drop repeated items, keeping first-seen order.

    Items are compared together with their type so that ``1`` and ``True``
    stay distinct literal values.
    """
    seen: set = set()
    kept: list = []
    for item in items:
        key = (type(item), item)
        if key not in seen:
            seen.add(key)
            kept.append(item)
    return tuple(kept)


__all__ = [
    "PrimitiveKind",
    "Primitive",
    "Field",
    "ObjectShape",
    "ArrayShape",
    "UnionShape",
    "LiteralEnum",
    "UnknownShape",
    "TypeShape",
    "UNKNOWN",
    "merge_fields",
    "dedupe",
]
