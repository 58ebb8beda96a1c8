"""Node builders for synthesizing AST fragments.

Expression builders are used when lowering validators to AST. The
TypeScript builders construct type declarations programmatically, which is
handy when the source module is assembled in Python rather than parsed.

Example:
    >>> required = member(member(identifier("PropTypes"), "string"), "isRequired")
    >>> from typeprops.syntax.codegen import generate
    >>> generate(required)
    'PropTypes.string.isRequired'
"""

from __future__ import annotations

from typing import Any, Iterable

from .lib import (
    ArrayExpression,
    AssignmentExpression,
    BaseNode,
    BooleanLiteral,
    CallExpression,
    ClassBody,
    ClassDeclaration,
    ClassProperty,
    ExpressionStatement,
    Identifier,
    MemberExpression,
    NullLiteral,
    NumericLiteral,
    ObjectExpression,
    ObjectProperty,
    Program,
    StringLiteral,
    TSArrayType,
    TSEnumDeclaration,
    TSEnumMember,
    TSExpressionWithTypeArguments,
    TSInterfaceBody,
    TSInterfaceDeclaration,
    TSIntersectionType,
    TSKeyword,
    TSLiteralType,
    TSPropertySignature,
    TSTypeAliasDeclaration,
    TSTypeAnnotation,
    TSTypeLiteral,
    TSTypeParameter,
    TSTypeParameterDeclaration,
    TSTypeParameterInstantiation,
    TSTypeReference,
    TSUnionType,
    is_identifier_name,
)

# =============================================================================
# Expressions
# =============================================================================


def identifier(name: str) -> Identifier:
    return Identifier(name=name)


def literal(value: Any) -> BaseNode:
    """Literal node for a Python str, bool, int, float or None."""
    if value is None:
        return NullLiteral()
    if isinstance(value, bool):
        return BooleanLiteral(value=value)
    if isinstance(value, (int, float)):
        return NumericLiteral(value=value)
    if isinstance(value, str):
        return StringLiteral(value=value)
    raise TypeError(f"Cannot build a literal from {type(value).__name__}")


def member(obj: BaseNode, name: str) -> MemberExpression:
    """Non-computed member access ``obj.name``."""
    return MemberExpression(object=obj, property=identifier(name), computed=False)


def call(callee: BaseNode, *arguments: BaseNode) -> CallExpression:
    return CallExpression(callee=callee, arguments=list(arguments))


def array(elements: Iterable[BaseNode]) -> ArrayExpression:
    return ArrayExpression(elements=list(elements))


def property_key(name: str) -> BaseNode:
    """Identifier key where the name allows it, string literal otherwise."""
    if is_identifier_name(name):
        return identifier(name)
    return StringLiteral(value=name)


def object_property(name: str, value: BaseNode) -> ObjectProperty:
    return ObjectProperty(
        key=property_key(name), value=value, computed=False, shorthand=False
    )


def object_expression(
    properties: Iterable[BaseNode] | dict[str, BaseNode] = (),
) -> ObjectExpression:
    """Object literal from property nodes or a name -> value mapping."""
    if isinstance(properties, dict):
        properties = [object_property(k, v) for k, v in properties.items()]
    return ObjectExpression(properties=list(properties))


def static_property(name: str, value: BaseNode) -> ClassProperty:
    """``static name = value`` class member."""
    return ClassProperty(key=identifier(name), value=value, static=True, computed=False)


def assign(left: BaseNode, right: BaseNode) -> AssignmentExpression:
    """``left = right``."""
    return AssignmentExpression(operator="=", left=left, right=right)


def statement(expression: BaseNode) -> ExpressionStatement:
    return ExpressionStatement(expression=expression)


def generic_call(
    callee: str, type_argument: BaseNode, *arguments: BaseNode
) -> CallExpression:
    """``callee<type_argument>(...arguments)``."""
    return CallExpression(
        callee=identifier(callee),
        arguments=list(arguments),
        type_parameters=TSTypeParameterInstantiation(params=[type_argument]),
    )


def json_value(value: Any) -> BaseNode:
    """Literal, array or object expression for plain Python data.

    Dict keys become property names in insertion order.
    """
    if isinstance(value, dict):
        return object_expression({str(k): json_value(v) for k, v in value.items()})
    if isinstance(value, (list, tuple)):
        return array(json_value(item) for item in value)
    return literal(value)


# =============================================================================
# TypeScript types
# =============================================================================

_KEYWORDS = {
    "any": "TSAnyKeyword",
    "bigint": "TSBigIntKeyword",
    "boolean": "TSBooleanKeyword",
    "never": "TSNeverKeyword",
    "null": "TSNullKeyword",
    "number": "TSNumberKeyword",
    "object": "TSObjectKeyword",
    "string": "TSStringKeyword",
    "symbol": "TSSymbolKeyword",
    "undefined": "TSUndefinedKeyword",
    "unknown": "TSUnknownKeyword",
    "void": "TSVoidKeyword",
}


def ts_keyword(name: str) -> TSKeyword:
    """Keyword type from its source spelling (``"string"``)."""
    return TSKeyword(type=_KEYWORDS[name])


def ts_ref(name: str, *arguments: BaseNode) -> TSTypeReference:
    """Type reference, optionally generic (``Box<string>``)."""
    params = TSTypeParameterInstantiation(params=list(arguments)) if arguments else None
    return TSTypeReference(type_name=identifier(name), type_parameters=params)


def ts_union(*types: BaseNode) -> TSUnionType:
    return TSUnionType(types=list(types))


def ts_intersection(*types: BaseNode) -> TSIntersectionType:
    return TSIntersectionType(types=list(types))


def ts_array(element: BaseNode) -> TSArrayType:
    return TSArrayType(element_type=element)


def ts_literal(value: str | int | float | bool) -> TSLiteralType:
    return TSLiteralType(literal=literal(value))


def ts_prop(name: str, type_node: BaseNode, optional: bool = False) -> TSPropertySignature:
    return TSPropertySignature(
        key=property_key(name),
        type_annotation=TSTypeAnnotation(type_annotation=type_node),
        optional=optional,
    )


def ts_type_literal(*members: BaseNode) -> TSTypeLiteral:
    return TSTypeLiteral(members=list(members))


def _type_params(names: Iterable[str]) -> TSTypeParameterDeclaration | None:
    params = [TSTypeParameter(name=name) for name in names]
    return TSTypeParameterDeclaration(params=params) if params else None


def ts_interface(
    name: str,
    *members: BaseNode,
    extends: Iterable[str] = (),
    type_params: Iterable[str] = (),
) -> TSInterfaceDeclaration:
    heritage = [TSExpressionWithTypeArguments(expression=identifier(e)) for e in extends]
    return TSInterfaceDeclaration(
        id=identifier(name),
        type_parameters=_type_params(type_params),
        extends=heritage or None,
        body=TSInterfaceBody(body=list(members)),
    )


def ts_alias(
    name: str, type_node: BaseNode, type_params: Iterable[str] = ()
) -> TSTypeAliasDeclaration:
    return TSTypeAliasDeclaration(
        id=identifier(name),
        type_parameters=_type_params(type_params),
        type_annotation=type_node,
    )


def ts_enum(name: str, members: dict[str, Any] | Iterable[str]) -> TSEnumDeclaration:
    """Enum declaration; a mapping gives initializers, None means implicit."""
    if isinstance(members, dict):
        items = list(members.items())
    else:
        items = [(m, None) for m in members]
    return TSEnumDeclaration(
        id=identifier(name),
        members=[
            TSEnumMember(
                id=identifier(m),
                initializer=None if value is None else literal(value),
            )
            for m, value in items
        ],
    )


# =============================================================================
# Classes and modules
# =============================================================================


def class_declaration(
    name: str,
    props_type: BaseNode | None = None,
    *body: BaseNode,
    superclass: str = "Component",
) -> ClassDeclaration:
    """``class name extends superclass<props_type> { ...body }``."""
    params = (
        TSTypeParameterInstantiation(params=[props_type])
        if props_type is not None
        else None
    )
    return ClassDeclaration(
        id=identifier(name),
        super_class=identifier(superclass),
        super_type_parameters=params,
        body=ClassBody(body=list(body)),
    )


def program(*statements: BaseNode) -> Program:
    return Program(body=list(statements))


__all__ = [
    "identifier",
    "literal",
    "member",
    "call",
    "array",
    "property_key",
    "object_property",
    "object_expression",
    "static_property",
    "assign",
    "statement",
    "generic_call",
    "json_value",
    "ts_keyword",
    "ts_ref",
    "ts_union",
    "ts_intersection",
    "ts_array",
    "ts_literal",
    "ts_prop",
    "ts_type_literal",
    "ts_interface",
    "ts_alias",
    "ts_enum",
    "class_declaration",
    "program",
]
