"""Class patcher.

Drives one component class through extraction, resolution, synthesis and
merge, then applies a single mutation: the validator object is inserted as
a new static property at the front of the class body, or written into the
existing property in place.

Statuses:
    - not_applicable: the superclass carries no props type argument
    - skipped_empty: nothing better than ``any`` could be derived
    - skipped_opaque: the existing validator value is hand-authored code the
      merge cannot see into
    - patched: the class holds the merged validator object
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Iterable, Iterator

from typeprops.core import get_logger
from typeprops.defaults import collect_defaults, find_static_property
from typeprops.extract import extract_generic_type_names
from typeprops.merge import merge, missing_entries
from typeprops.registry import ConvertOptions, ConvertState
from typeprops.resolve import resolve_type
from typeprops.shape import ObjectShape
from typeprops.synth import has_usable_entries, synthesize_fields
from typeprops.syntax import (
    BaseNode,
    CallExpression,
    ClassDeclaration,
    ObjectExpression,
    entity_name,
    type_arguments,
    walk,
)
from typeprops.syntax.build import static_property

logger = get_logger("patch")


class PatchStatus(str, Enum):
    """Outcome of patching one class."""

    NOT_APPLICABLE = "not_applicable"
    SKIPPED_EMPTY = "skipped_empty"
    SKIPPED_OPAQUE = "skipped_opaque"
    PATCHED = "patched"


@dataclass(frozen=True)
class PatchResult:
    """What happened to one class.

    Attributes:
        status: Final state of the class.
        class_name: Declared class name (None for anonymous classes).
        type_names: Type names referenced by the props type argument.
        added: Props appended to the validator object by this run.
    """

    status: PatchStatus
    class_name: str | None = None
    type_names: tuple[str, ...] = ()
    added: tuple[str, ...] = ()

    @property
    def patched(self) -> bool:
        return self.status is PatchStatus.PATCHED


@dataclass
class ModuleReport:
    """Per-class results for one module, in source order."""

    results: list[PatchResult] = field(default_factory=list)

    @property
    def patched(self) -> list[PatchResult]:
        return [r for r in self.results if r.patched]

    @property
    def changed(self) -> bool:
        """Whether any class received new validator entries."""
        return any(r.added for r in self.results)

    def by_status(self, status: PatchStatus) -> list[PatchResult]:
        return [r for r in self.results if r.status is status]

    def __iter__(self) -> Iterator[PatchResult]:
        return iter(self.results)

    def __len__(self) -> int:
        return len(self.results)


# =============================================================================
# Patching
# =============================================================================


def patch_class(class_node: ClassDeclaration, state: ConvertState) -> PatchResult:
    """Derive and attach the validator object for one class.

    Args:
        class_node: Class declaration or expression. Mutated only when the
            result status is ``patched`` and new entries were derived.
        state: Conversion state for the enclosing module.

    Returns:
        PatchResult: Status, names involved and props added.
    """
    class_name = entity_name(class_node.id)
    arguments = type_arguments(class_node)
    if not arguments:
        logger.debug(f"{class_name or '<anonymous>'}: no props type argument")
        return PatchResult(PatchStatus.NOT_APPLICABLE, class_name)

    props_type = arguments[0]
    type_names = tuple(extract_generic_type_names(props_type))
    shape = resolve_type(props_type, state)
    entries = (
        synthesize_fields(shape, collect_defaults(class_node, state), state)
        if isinstance(shape, ObjectShape)
        else []
    )
    if not has_usable_entries(entries):
        logger.debug(f"{class_name}: no usable validators derived")
        return PatchResult(PatchStatus.SKIPPED_EMPTY, class_name, type_names)

    options = state.options
    declared = find_static_property(class_node, options.validator_property)
    if declared is None:
        merged = merge(None, entries, state)
        class_node.body.body.insert(0, static_property(options.validator_property, merged))
        added = tuple(e.prop_name for e in entries)
    else:
        target = _merge_target(declared.value)
        if target is None:
            logger.debug(
                f"{class_name}: existing {options.validator_property} is not an object literal"
            )
            return PatchResult(PatchStatus.SKIPPED_OPAQUE, class_name, type_names)
        added = tuple(e.prop_name for e in missing_entries(target, entries))
        if added or declared.value is None:
            declared.value = _rewrap(declared.value, merge(target, entries, state))

    if added:
        logger.info(f"{class_name}: added {options.validator_property} for {', '.join(added)}")
    else:
        logger.debug(f"{class_name}: {options.validator_property} already complete")
    return PatchResult(PatchStatus.PATCHED, class_name, type_names, added)


def _merge_target(value: BaseNode | None) -> ObjectExpression | None:
    """Object literal inside an existing validator value, if there is one.

    A missing value merges into a fresh object; ``wrap({...})`` merges into
    its first argument.
    """
    if value is None:
        return ObjectExpression()
    if isinstance(value, ObjectExpression):
        return value
    if (
        isinstance(value, CallExpression)
        and value.arguments
        and isinstance(value.arguments[0], ObjectExpression)
    ):
        return value.arguments[0]
    return None


def _rewrap(value: BaseNode | None, merged: ObjectExpression) -> BaseNode:
    """Put a merged object back where ``_merge_target`` found it."""
    if isinstance(value, CallExpression):
        return value.model_copy(update={"arguments": [merged, *value.arguments[1:]]})
    return merged


# =============================================================================
# Modules
# =============================================================================


def transform_module(
    program: BaseNode,
    options: ConvertOptions | None = None,
    imports: Iterable[BaseNode] = (),
) -> ModuleReport:
    """Patch every class declared anywhere in a module.

    Args:
        program: Module root (``Program`` or ``File``), mutated in place.
        options: Transform options. Defaults to the environment configuration.
        imports: Already parsed modules whose type declarations are visible.

    Returns:
        ModuleReport: One result per class, in source order.

    Example:
        >>> report = transform_module(parse_node(ast_json))
        >>> [r.class_name for r in report.patched]
        ['Widget']
    """
    state = ConvertState.for_module(
        program, tuple(imports), options or ConvertOptions.from_environment()
    )
    classes = [node for node in walk(program) if isinstance(node, ClassDeclaration)]
    report = ModuleReport([patch_class(node, state) for node in classes])
    logger.debug(f"Patched {len(report.patched)} of {len(report)} classes")
    return report


__all__ = [
    "PatchStatus",
    "PatchResult",
    "ModuleReport",
    "patch_class",
    "transform_module",
]
