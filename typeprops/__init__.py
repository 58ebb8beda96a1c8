"""typeprops: runtime prop validators derived from TypeScript props types."""

from typeprops.component import transform_component_calls
from typeprops.keys import transform_type_keys
from typeprops.marker import stamp_file, stamp_text
from typeprops.patch import ModuleReport, PatchResult, PatchStatus, patch_class, transform_module
from typeprops.registry import ConvertOptions, ConvertState, TypeRegistry
from typeprops.schema import transform_type_schemas
from typeprops.syntax import dump_node, generate, parse_node

__all__ = [
    # Transform
    "transform_module",
    "patch_class",
    "PatchStatus",
    "PatchResult",
    "ModuleReport",
    # Helper call sites
    "transform_component_calls",
    "transform_type_keys",
    "transform_type_schemas",
    # State
    "ConvertOptions",
    "ConvertState",
    "TypeRegistry",
    # AST
    "parse_node",
    "dump_node",
    "generate",
    # Markers
    "stamp_text",
    "stamp_file",
]
