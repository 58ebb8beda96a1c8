"""Resolved type shapes (AST-free values)."""

from .lib import (
    UNKNOWN,
    ArrayShape,
    Field,
    LiteralEnum,
    ObjectShape,
    Primitive,
    PrimitiveKind,
    TypeShape,
    UnionShape,
    UnknownShape,
    dedupe,
    merge_fields,
)

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
