"""Call-site transform for ``transformTypeToSchema<T>()``."""

from .lib import (
    MAX_DEPTH_OPTION,
    SCHEMA_HELPER,
    describe_field,
    describe_fields,
    describe_shape,
    transform_type_schemas,
)

__all__ = [
    "SCHEMA_HELPER",
    "MAX_DEPTH_OPTION",
    "describe_shape",
    "describe_field",
    "describe_fields",
    "transform_type_schemas",
]
