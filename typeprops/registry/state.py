"""Per-module conversion state.

A ConvertState is created for one module, threaded through resolution and
synthesis of every class in it, and discarded afterwards.
"""

from __future__ import annotations

from contextlib import contextmanager
from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Iterator

from typeprops.config import EnvVar, get_environment

from .lib import TypeRegistry

if TYPE_CHECKING:
    from typeprops.shape import TypeShape
    from typeprops.syntax import BaseNode


@dataclass(frozen=True)
class ConvertOptions:
    """Names and limits used by the transform.

    Attributes:
        validator_property: Static property that receives the validators.
        defaults_property: Static property holding default prop values.
        namespace: Identifier validators are accessed on (``PropTypes``).
        max_depth: Type nesting depth after which a branch resolves to unknown.
    """

    validator_property: str = "propTypes"
    defaults_property: str = "defaultProps"
    namespace: str = "PropTypes"
    max_depth: int = 10

    @classmethod
    def from_environment(cls) -> ConvertOptions:
        """Options from TYPEPROPS_* environment variables."""
        return cls(
            validator_property=get_environment(EnvVar.TYPEPROPS_VALIDATOR_PROPERTY),
            defaults_property=get_environment(EnvVar.TYPEPROPS_DEFAULTS_PROPERTY),
            namespace=get_environment(EnvVar.TYPEPROPS_VALIDATOR_NAMESPACE),
            max_depth=get_environment(EnvVar.TYPEPROPS_MAX_DEPTH),
        )


@dataclass
class ConvertState:
    """Registry, cycle guard and options for one module's conversion.

    Attributes:
        registry: Type declarations visible to the module.
        options: Transform names and limits.
        visited: Names currently being resolved on this branch.
        depth: Current nesting depth.
        bindings: Generic parameter bindings, innermost last.
    """

    registry: TypeRegistry
    options: ConvertOptions = field(default_factory=ConvertOptions)
    visited: set[str] = field(default_factory=set)
    depth: int = 0
    bindings: list[dict[str, TypeShape]] = field(default_factory=list)

    @classmethod
    def for_module(
        cls,
        module: BaseNode,
        imports: tuple[BaseNode, ...] | list[BaseNode] = (),
        options: ConvertOptions | None = None,
    ) -> ConvertState:
        """Fresh state whose registry covers ``imports`` then ``module``."""
        registry = TypeRegistry.from_modules(*imports, module)
        return cls(registry=registry, options=options or ConvertOptions())

    @property
    def too_deep(self) -> bool:
        return self.depth >= self.options.max_depth

    @contextmanager
    def entering(self, name: str) -> Iterator[None]:
        """Mark ``name`` as being resolved on the current branch."""
        self.visited.add(name)
        try:
            yield
        finally:
            self.visited.discard(name)

    @contextmanager
    def nested(self) -> Iterator[None]:
        """One level deeper in the type tree."""
        self.depth += 1
        try:
            yield
        finally:
            self.depth -= 1

    @contextmanager
    def binding(self, frame: dict[str, TypeShape]) -> Iterator[None]:
        """Bind generic parameters while a declaration body is resolved."""
        self.bindings.append(frame)
        try:
            yield
        finally:
            self.bindings.pop()

    def bound(self, name: str) -> TypeShape | None:
        """Shape bound to generic parameter ``name`` in the innermost frame."""
        if self.bindings and name in self.bindings[-1]:
            return self.bindings[-1][name]
        return None
