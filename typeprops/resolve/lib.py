"""Type-shape resolution.

Turns TypeScript type nodes into TypeShape values, looking named types up
in the module's TypeRegistry. Resolution never raises for partial input:
whatever cannot be seen (external imports, unbound generics, cycles, too
deep nesting) becomes UnknownShape and is validated permissively later.

Cycle handling:
    Each named type is added to ``state.visited`` while its body is being
    resolved and removed afterwards, so a type that refers back to itself
    resolves to UnknownShape at the repeated occurrence while sibling
    branches can still expand the same name.
"""

from __future__ import annotations

from dataclasses import replace
from typing import Sequence

from typeprops.core import get_logger
from typeprops.registry import ConvertState
from typeprops.shape import (
    UNKNOWN,
    ArrayShape,
    Field,
    LiteralEnum,
    ObjectShape,
    Primitive,
    PrimitiveKind,
    TypeShape,
    UnionShape,
    dedupe,
    merge_fields,
)
from typeprops.syntax import (
    BaseNode,
    BooleanLiteral,
    NumericLiteral,
    OpaqueNode,
    StringLiteral,
    TSArrayType,
    TSEnumDeclaration,
    TSInterfaceDeclaration,
    TSIntersectionType,
    TSKeyword,
    TSLiteralType,
    TSMethodSignature,
    TSParenthesizedType,
    TSPropertySignature,
    TSTupleType,
    TSTypeAliasDeclaration,
    TSTypeLiteral,
    TSTypeOperator,
    TSTypeReference,
    TSUnionType,
    entity_name,
    key_name,
    type_arguments,
    type_parameter_names,
    unwrap_annotation,
)

logger = get_logger("resolve")

_KEYWORD_SHAPES: dict[str, TypeShape] = {
    "TSStringKeyword": Primitive(PrimitiveKind.STRING),
    "TSNumberKeyword": Primitive(PrimitiveKind.NUMBER),
    "TSBooleanKeyword": Primitive(PrimitiveKind.BOOLEAN),
    "TSSymbolKeyword": Primitive(PrimitiveKind.SYMBOL),
    "TSObjectKeyword": Primitive(PrimitiveKind.OBJECT),
}

NULLISH_TYPES = frozenset({"TSNullKeyword", "TSUndefinedKeyword", "TSVoidKeyword"})

FUNCTION_TYPES = frozenset({"TSFunctionType", "TSConstructorType"})

ARRAY_GENERICS = frozenset({"Array", "ReadonlyArray"})

# Global and library names with a fixed runtime kind
WELL_KNOWN_TYPES: dict[str, TypeShape] = {
    "String": Primitive(PrimitiveKind.STRING),
    "Number": Primitive(PrimitiveKind.NUMBER),
    "Boolean": Primitive(PrimitiveKind.BOOLEAN),
    "Symbol": Primitive(PrimitiveKind.SYMBOL),
    "Function": Primitive(PrimitiveKind.FUNCTION),
    "Object": Primitive(PrimitiveKind.OBJECT),
    "Record": Primitive(PrimitiveKind.OBJECT),
    "ReactNode": Primitive(PrimitiveKind.NODE),
    "React.ReactNode": Primitive(PrimitiveKind.NODE),
    "ReactElement": Primitive(PrimitiveKind.ELEMENT),
    "React.ReactElement": Primitive(PrimitiveKind.ELEMENT),
    "JSX.Element": Primitive(PrimitiveKind.ELEMENT),
}


# =============================================================================
# Entry points
# =============================================================================


def resolve(
    name: str, state: ConvertState, arguments: Sequence[TypeShape] = ()
) -> TypeShape:
    """Resolve a named type through the registry.

    Args:
        name: Type name as written (``Props``).
        state: Conversion state for the current module.
        arguments: Already resolved generic arguments for the declaration's
            type parameters, in order.

    Returns:
        TypeShape: The resolved shape, UnknownShape when the name is on the
        current resolution chain, missing from the registry, or too deep.
    """
    if name in state.visited:
        logger.debug(f"Cycle through '{name}' resolved as unknown")
        return UNKNOWN
    declarations = state.registry.get(name)
    if not declarations:
        logger.debug(f"Type '{name}' is not declared in this module")
        return UNKNOWN
    if state.too_deep:
        logger.debug(f"Type '{name}' exceeds max depth {state.options.max_depth}")
        return UNKNOWN

    with state.entering(name), state.nested():
        if all(isinstance(d, TSInterfaceDeclaration) for d in declarations):
            groups = [_interface_fields(d, arguments, state) for d in declarations]
            return ObjectShape(merge_fields(*groups))

        declaration = declarations[-1]
        if isinstance(declaration, TSEnumDeclaration):
            return _enum_shape(declaration)
        if isinstance(declaration, TSTypeAliasDeclaration):
            with state.binding(_frame(declaration, arguments)):
                return resolve_type(declaration.type_annotation, state)
    return UNKNOWN


def resolve_type(node: BaseNode | None, state: ConvertState) -> TypeShape:
    """Resolve any type node (keyword, literal, reference, union, ...)."""
    node = unwrap_annotation(node)
    match node:
        case None:
            return UNKNOWN
        case TSKeyword():
            return _KEYWORD_SHAPES.get(node.type, UNKNOWN)
        case TSTypeReference():
            return _resolve_reference(node, state)
        case TSTypeLiteral():
            if state.too_deep:
                return UNKNOWN
            with state.nested():
                return ObjectShape(member_fields(node.members, state))
        case TSArrayType():
            return ArrayShape(resolve_type(node.element_type, state))
        case TSTupleType():
            elements = [resolve_type(_tuple_element(e), state) for e in node.element_types]
            return ArrayShape(_combine(elements) if elements else UNKNOWN)
        case TSUnionType():
            return resolve_nullable(node, state)[0]
        case TSIntersectionType():
            return _intersection([resolve_type(t, state) for t in node.types])
        case TSLiteralType():
            return _literal_shape(node.literal)
        case TSParenthesizedType():
            return resolve_type(node.type_annotation, state)
        case TSTypeOperator():
            return _operator_shape(node, state)
        case _ if node.type in FUNCTION_TYPES:
            return Primitive(PrimitiveKind.FUNCTION)
        case _:
            return UNKNOWN


def resolve_nullable(
    node: BaseNode | None, state: ConvertState
) -> tuple[TypeShape, bool]:
    """Resolve a member type, reporting whether it admits null/undefined.

    ``T | null`` and ``T | undefined`` resolve to ``T`` with the nullable
    flag set, which callers treat exactly like a ``?`` marker.
    """
    node = unwrap_annotation(node)
    while isinstance(node, TSParenthesizedType):
        node = node.type_annotation
    if _is_nullish(node):
        return UNKNOWN, True
    if not isinstance(node, TSUnionType):
        return resolve_type(node, state), False

    members = [t for t in node.types if not _is_nullish(t)]
    nullable = len(members) != len(node.types)
    if not members:
        return UNKNOWN, True
    return _combine([resolve_type(t, state) for t in members]), nullable


def member_fields(members: Sequence[BaseNode], state: ConvertState) -> tuple[Field, ...]:
    """Fields for interface or type-literal members, in declaration order.

    Property and method signatures with a plain key become fields; index,
    call and construct signatures are skipped. A repeated name keeps its
    first position and takes the last declaration.
    """
    fields: list[Field] = []
    for member in members:
        if isinstance(member, TSPropertySignature):
            name = key_name(member.key, member.computed)
            if name is None:
                continue
            shape, nullable = resolve_nullable(member.type_annotation, state)
            fields.append(Field(name, shape, optional=member.optional or nullable))
        elif isinstance(member, TSMethodSignature):
            name = key_name(member.key, member.computed)
            if name is None:
                continue
            fields.append(
                Field(name, Primitive(PrimitiveKind.FUNCTION), optional=member.optional)
            )
    return merge_fields(fields)


# =============================================================================
# Declarations
# =============================================================================


def _frame(declaration: BaseNode, arguments: Sequence[TypeShape]) -> dict[str, TypeShape]:
    """Bind a declaration's type parameters to the supplied arguments."""
    names = type_parameter_names(declaration)
    return {
        name: arguments[i] if i < len(arguments) else UNKNOWN
        for i, name in enumerate(names)
    }


def _interface_fields(
    declaration: TSInterfaceDeclaration,
    arguments: Sequence[TypeShape],
    state: ConvertState,
) -> tuple[Field, ...]:
    """Inherited fields first, then the interface's own members."""
    with state.binding(_frame(declaration, arguments)):
        inherited: list[tuple[Field, ...]] = []
        for heritage in declaration.extends or ():
            parent = entity_name(getattr(heritage, "expression", None))
            if not parent:
                continue
            parent_args = [resolve_type(a, state) for a in type_arguments(heritage)]
            shape = resolve(parent, state, parent_args)
            if isinstance(shape, ObjectShape):
                inherited.append(shape.fields)
        own = member_fields(declaration.body.body, state)
    return merge_fields(*inherited, own)


def _enum_shape(declaration: TSEnumDeclaration) -> TypeShape:
    """Literal values of an enum, numbering implicit members like tsc does."""
    values: list[str | int | float] = []
    next_value: int | float = 0
    for member in declaration.members:
        initializer = getattr(member, "initializer", None)
        if initializer is None:
            value: str | int | float = next_value
        else:
            ok, value = _literal_value(initializer)
            if not ok or isinstance(value, bool):
                # Computed members cannot be listed
                return UNKNOWN
        values.append(value)
        if isinstance(value, (int, float)):
            next_value = value + 1
    return LiteralEnum(dedupe(values))


# =============================================================================
# References
# =============================================================================


def _resolve_reference(node: TSTypeReference, state: ConvertState) -> TypeShape:
    name = entity_name(node.type_name)
    if name is None:
        return UNKNOWN
    arguments = type_arguments(node)

    bound = state.bound(name)
    if bound is not None:
        return bound
    if name in state.registry:
        return resolve(name, state, [resolve_type(a, state) for a in arguments])

    if name in ARRAY_GENERICS:
        element = resolve_type(arguments[0], state) if arguments else UNKNOWN
        return ArrayShape(element)
    if name in _UTILITY_TYPES and arguments:
        return _UTILITY_TYPES[name](arguments, state)
    if name in WELL_KNOWN_TYPES:
        return WELL_KNOWN_TYPES[name]
    return resolve(name, state)


def _optional_all(arguments: Sequence[BaseNode], state: ConvertState) -> TypeShape:
    shape = resolve_type(arguments[0], state)
    if not isinstance(shape, ObjectShape):
        return shape
    return ObjectShape(tuple(replace(f, optional=True) for f in shape.fields))


def _required_all(arguments: Sequence[BaseNode], state: ConvertState) -> TypeShape:
    shape = resolve_type(arguments[0], state)
    if not isinstance(shape, ObjectShape):
        return shape
    return ObjectShape(tuple(replace(f, optional=False) for f in shape.fields))


def _same(arguments: Sequence[BaseNode], state: ConvertState) -> TypeShape:
    return resolve_type(arguments[0], state)


def _select_keys(keep: bool):
    """Pick (keep=True) or Omit (keep=False) over literal key sets."""

    def select(arguments: Sequence[BaseNode], state: ConvertState) -> TypeShape:
        shape = resolve_type(arguments[0], state)
        keys = resolve_type(arguments[1], state) if len(arguments) > 1 else UNKNOWN
        if not isinstance(shape, ObjectShape) or not isinstance(keys, LiteralEnum):
            return UNKNOWN
        wanted = {str(k) for k in keys.values}
        return ObjectShape(tuple(f for f in shape.fields if (f.name in wanted) == keep))

    return select


_UTILITY_TYPES = {
    "Partial": _optional_all,
    "Required": _required_all,
    "Readonly": _same,
    "NonNullable": _same,
    "Pick": _select_keys(keep=True),
    "Omit": _select_keys(keep=False),
}


# =============================================================================
# Literals, unions, intersections, operators
# =============================================================================


def _literal_value(node: BaseNode) -> tuple[bool, str | int | float | bool | None]:
    """Python value of a literal node; ``(False, None)`` if not a literal."""
    if isinstance(node, (StringLiteral, NumericLiteral, BooleanLiteral)):
        return True, node.value
    # Babel 7 writes negative numbers as a unary minus over a literal
    if isinstance(node, OpaqueNode) and node.type == "UnaryExpression":
        argument = getattr(node, "argument", None)
        if getattr(node, "operator", None) == "-" and isinstance(argument, NumericLiteral):
            return True, -argument.value
    return False, None


def _literal_shape(literal: BaseNode) -> TypeShape:
    ok, value = _literal_value(literal)
    if ok:
        return LiteralEnum((value,))
    if literal.type in ("TemplateLiteral", "TSTemplateLiteralType"):
        return Primitive(PrimitiveKind.STRING)
    return UNKNOWN


def _is_nullish(node: BaseNode | None) -> bool:
    return isinstance(node, TSKeyword) and node.type in NULLISH_TYPES


def _combine(shapes: Sequence[TypeShape]) -> TypeShape:
    """Shape for alternatives.

    Nested unions are flattened and all literal members are grouped into one
    LiteralEnum at the position of the first one, so ``"a" | "b" | number``
    becomes ``oneOfType([oneOf(["a", "b"]), number])``. A single remaining
    shape collapses to itself.
    """
    members: list[TypeShape] = []
    literals: list = []
    literal_at: int | None = None
    for shape in shapes:
        for member in shape.members if isinstance(shape, UnionShape) else (shape,):
            if isinstance(member, LiteralEnum):
                if literal_at is None:
                    literal_at = len(members)
                    members.append(member)
                literals.extend(member.values)
            else:
                members.append(member)
    if literal_at is not None:
        members[literal_at] = LiteralEnum(dedupe(literals))

    distinct = dedupe(members)
    if len(distinct) == 1:
        return distinct[0]
    return UnionShape(distinct)


def _intersection(shapes: Sequence[TypeShape]) -> TypeShape:
    """Merge object operands; later operands win on name collisions."""
    objects = [s for s in shapes if isinstance(s, ObjectShape)]
    if not objects:
        return UNKNOWN
    return ObjectShape(merge_fields(*(o.fields for o in objects)))


def _operator_shape(node: TSTypeOperator, state: ConvertState) -> TypeShape:
    if node.operator == "keyof":
        target = resolve_type(node.type_annotation, state)
        if isinstance(target, ObjectShape):
            return LiteralEnum(tuple(target.names))
        return UNKNOWN
    # readonly T[] and unique symbol
    return resolve_type(node.type_annotation, state)


def _tuple_element(node: BaseNode) -> BaseNode | None:
    """Element type of a tuple member, looking through labels and ``?``."""
    if isinstance(node, OpaqueNode) and node.type == "TSNamedTupleMember":
        return getattr(node, "elementType", None)
    if isinstance(node, OpaqueNode) and node.type == "TSOptionalType":
        return getattr(node, "typeAnnotation", None)
    return node


__all__ = [
    "resolve",
    "resolve_type",
    "resolve_nullable",
    "member_fields",
    "WELL_KNOWN_TYPES",
    "ARRAY_GENERICS",
]
