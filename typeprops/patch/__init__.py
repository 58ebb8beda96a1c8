"""Class patcher and module-level transform."""

from .lib import ModuleReport, PatchResult, PatchStatus, patch_class, transform_module

__all__ = [
    "PatchStatus",
    "PatchResult",
    "ModuleReport",
    "patch_class",
    "transform_module",
]
