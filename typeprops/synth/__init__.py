"""Validator synthesis and lowering to AST."""

from .lib import (
    KIND_NAMES,
    AnyValidator,
    ArrayOfValidator,
    OneOfTypeValidator,
    OneOfValidator,
    PrimitiveValidator,
    RequiredValidator,
    ShapeValidator,
    Validator,
    ValidatorEntry,
    has_usable_entries,
    synthesize,
    synthesize_fields,
    synthesize_shape,
    validator_to_node,
)

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
