"""Babel AST models, builders and expression rendering.

Example usage:
    >>> from typeprops.syntax import parse_node, dump_node, walk, ClassDeclaration
    >>> module = parse_node(babel_json)
    >>> classes = [n for n in walk(module) if isinstance(n, ClassDeclaration)]
"""

from .codegen import generate
from .lib import (
    KEYWORD_TYPES,
    NODE_MODELS,
    ArrayExpression,
    AssignmentExpression,
    BaseNode,
    BooleanLiteral,
    CallExpression,
    ClassBody,
    ClassDeclaration,
    ClassProperty,
    ExportDefaultDeclaration,
    ExportNamedDeclaration,
    ExpressionStatement,
    File,
    Identifier,
    MemberExpression,
    Node,
    NullLiteral,
    NumericLiteral,
    ObjectExpression,
    ObjectMethod,
    ObjectProperty,
    OpaqueNode,
    Program,
    SpreadElement,
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
    TSMethodSignature,
    TSParenthesizedType,
    TSPropertySignature,
    TSQualifiedName,
    TSTupleType,
    TSTypeAliasDeclaration,
    TSTypeAnnotation,
    TSTypeLiteral,
    TSTypeOperator,
    TSTypeParameter,
    TSTypeParameterDeclaration,
    TSTypeParameterInstantiation,
    TSTypeReference,
    TSUnionType,
    call_option,
    dump_node,
    entity_name,
    find_calls,
    is_identifier_name,
    iter_children,
    key_name,
    parse_node,
    replace_child,
    type_arguments,
    type_parameter_names,
    unwrap_annotation,
    walk,
)

__all__ = [
    # Node union and registry
    "Node",
    "NODE_MODELS",
    "KEYWORD_TYPES",
    "BaseNode",
    "OpaqueNode",
    # Program structure
    "File",
    "Program",
    "ExportNamedDeclaration",
    "ExportDefaultDeclaration",
    # Classes
    "ClassDeclaration",
    "ClassBody",
    "ClassProperty",
    # Expressions
    "Identifier",
    "StringLiteral",
    "NumericLiteral",
    "BooleanLiteral",
    "NullLiteral",
    "ObjectExpression",
    "ObjectProperty",
    "ObjectMethod",
    "SpreadElement",
    "MemberExpression",
    "CallExpression",
    "ArrayExpression",
    "AssignmentExpression",
    "ExpressionStatement",
    # TypeScript
    "TSKeyword",
    "TSTypeAnnotation",
    "TSTypeParameterInstantiation",
    "TSTypeParameterDeclaration",
    "TSTypeParameter",
    "TSTypeReference",
    "TSQualifiedName",
    "TSUnionType",
    "TSIntersectionType",
    "TSTypeLiteral",
    "TSPropertySignature",
    "TSMethodSignature",
    "TSArrayType",
    "TSTupleType",
    "TSLiteralType",
    "TSParenthesizedType",
    "TSTypeOperator",
    "TSExpressionWithTypeArguments",
    "TSInterfaceDeclaration",
    "TSInterfaceBody",
    "TSTypeAliasDeclaration",
    "TSEnumDeclaration",
    "TSEnumMember",
    # Functions
    "parse_node",
    "dump_node",
    "walk",
    "iter_children",
    "replace_child",
    "entity_name",
    "key_name",
    "is_identifier_name",
    "type_arguments",
    "type_parameter_names",
    "unwrap_annotation",
    "find_calls",
    "call_option",
    "generate",
]
