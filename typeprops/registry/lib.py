"""Type declaration registry.

Maps type names to the interface, type alias and enum declarations found in
a module (and in any already-parsed modules the caller supplies for local
imports). Built once before resolution and only read afterwards.
"""

from __future__ import annotations

from typing import Iterable, Iterator

from typeprops.core import get_logger
from typeprops.syntax import (
    BaseNode,
    TSEnumDeclaration,
    TSInterfaceDeclaration,
    TSTypeAliasDeclaration,
    entity_name,
    walk,
)

logger = get_logger("registry")

DECLARATION_TYPES = (TSInterfaceDeclaration, TSTypeAliasDeclaration, TSEnumDeclaration)


class TypeRegistry:
    """Name -> declaration lookup.

    Interfaces may be declared several times under one name (declaration
    merging); every declaration is kept in source order.

    Example:
        >>> registry = TypeRegistry.from_modules(program)
        >>> registry.get("ButtonProps")
        (TSInterfaceDeclaration(...),)
    """

    def __init__(self) -> None:
        self._declarations: dict[str, list[BaseNode]] = {}

    @classmethod
    def from_modules(cls, *modules: BaseNode) -> TypeRegistry:
        """Collect declarations from the given modules, in order."""
        registry = cls()
        for module in modules:
            for declaration in collect_declarations(module):
                registry._add(declaration)
        logger.debug(f"Registered {len(registry)} type names")
        return registry

    def _add(self, declaration: BaseNode) -> None:
        name = entity_name(declaration.id)
        if not name:
            return
        existing = self._declarations.setdefault(name, [])
        if existing and not (
            isinstance(declaration, TSInterfaceDeclaration)
            and all(isinstance(d, TSInterfaceDeclaration) for d in existing)
        ):
            # Only interfaces merge; any other redeclaration replaces
            existing.clear()
        existing.append(declaration)

    def get(self, name: str) -> tuple[BaseNode, ...]:
        """Declarations registered under ``name`` (empty if unknown)."""
        return tuple(self._declarations.get(name, ()))

    def names(self) -> list[str]:
        return list(self._declarations)

    def __contains__(self, name: object) -> bool:
        return name in self._declarations

    def __len__(self) -> int:
        return len(self._declarations)

    def __iter__(self) -> Iterator[str]:
        return iter(self._declarations)


def collect_declarations(module: BaseNode) -> Iterable[BaseNode]:
    """All type declarations anywhere in ``module``, in source order."""
    return [node for node in walk(module) if isinstance(node, DECLARATION_TYPES)]
