"""Resolution of TypeScript type nodes into TypeShape values."""

from .lib import (
    ARRAY_GENERICS,
    WELL_KNOWN_TYPES,
    member_fields,
    resolve,
    resolve_nullable,
    resolve_type,
)

__all__ = [
    "resolve",
    "resolve_type",
    "resolve_nullable",
    "member_fields",
    "WELL_KNOWN_TYPES",
    "ARRAY_GENERICS",
]
