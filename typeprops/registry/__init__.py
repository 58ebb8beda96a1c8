"""Type registry and per-module conversion state."""

from .lib import DECLARATION_TYPES, TypeRegistry, collect_declarations
from .state import ConvertOptions, ConvertState

__all__ = [
    "TypeRegistry",
    "collect_declarations",
    "DECLARATION_TYPES",
    "ConvertOptions",
    "ConvertState",
]
