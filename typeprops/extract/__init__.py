"""Props type-argument name extraction."""

from .lib import extract_generic_type_names

__all__ = ["extract_generic_type_names"]
