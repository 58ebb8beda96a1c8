"""Babel AST models for the node kinds the transform reads and writes.

The host compiler (``@babel/parser`` with the ``typescript`` plugin) hands
over a module as JSON. This module validates that JSON into pydantic models
for the nodes typeprops needs to understand: classes and their static
properties, object/member/call expressions, literals, and the TypeScript
type nodes that make up interfaces, aliases and enums.

Every other node kind becomes an ``OpaqueNode`` that keeps all of its JSON
fields. Fields a modelled node does not declare (``loc``, ``start``,
``extra``, comments, ...) are kept as pydantic extras, and any nested node
found inside them is parsed too, so ``walk`` reaches classes declared inside
functions or other opaque statements.

Field names are snake_case in Python and camelCase on the wire
(``super_type_parameters`` <-> ``superTypeParameters``).

Example:
    >>> node = parse_node({"type": "Identifier", "name": "Widget"})
    >>> node.name
    'Widget'
    >>> dump_node(node)["type"]
    'Identifier'
"""

from __future__ import annotations

import re
from typing import Annotated, Any, Iterator, Literal, Union

from pydantic import (
    BaseModel,
    ConfigDict,
    Discriminator,
    Field,
    Tag,
    TypeAdapter,
    model_validator,
)
from pydantic.alias_generators import to_camel
from typing_extensions import TypeAliasType

_IDENTIFIER_RE = re.compile(r"^[A-Za-z_$][A-Za-z0-9_$]*$")

# TypeScript keyword types share a single model
KEYWORD_TYPES: frozenset[str] = frozenset(
    {
        "TSAnyKeyword",
        "TSBigIntKeyword",
        "TSBooleanKeyword",
        "TSIntrinsicKeyword",
        "TSNeverKeyword",
        "TSNullKeyword",
        "TSNumberKeyword",
        "TSObjectKeyword",
        "TSStringKeyword",
        "TSSymbolKeyword",
        "TSUndefinedKeyword",
        "TSUnknownKeyword",
        "TSVoidKeyword",
    }
)


class BaseNode(BaseModel):
    """Common base for every AST node.

    Unknown fields are preserved as extras so a parsed tree dumps back to
    the JSON it came from.
    """

    model_config = ConfigDict(
        extra="allow",
        alias_generator=to_camel,
        populate_by_name=True,
    )

    type: str

    @model_validator(mode="after")
    def parse_extra_nodes(self) -> BaseNode:
        extra = self.__pydantic_extra__
        if extra:
            for key, value in extra.items():
                extra[key] = _parse_loose(value)
        return self


class OpaqueNode(BaseNode):
    """Any node kind the transform does not model."""


# =============================================================================
# Program structure
# =============================================================================


class File(BaseNode):
    type: Literal["File"] = "File"
    program: Node


class Program(BaseNode):
    type: Literal["Program"] = "Program"
    body: list[Node] = Field(default_factory=list)


class ExportNamedDeclaration(BaseNode):
    type: Literal["ExportNamedDeclaration"] = "ExportNamedDeclaration"
    declaration: Node | None = None


class ExportDefaultDeclaration(BaseNode):
    type: Literal["ExportDefaultDeclaration"] = "ExportDefaultDeclaration"
    declaration: Node


# =============================================================================
# Classes
# =============================================================================


class ClassDeclaration(BaseNode):
    """A class declaration or class expression.

    ``super_type_parameters`` holds the type arguments written on the
    superclass, e.g. ``<Props>`` in ``class A extends Component<Props>``.
    """

    type: str = "ClassDeclaration"
    id: Node | None = None
    super_class: Node | None = None
    super_type_parameters: Node | None = None
    body: ClassBody


class ClassBody(BaseNode):
    type: Literal["ClassBody"] = "ClassBody"
    body: list[Node] = Field(default_factory=list)


class ClassProperty(BaseNode):
    type: Literal["ClassProperty"] = "ClassProperty"
    key: Node
    value: Node | None = None
    static: bool = False
    computed: bool = False


# =============================================================================
# Expressions
# =============================================================================


class Identifier(BaseNode):
    type: Literal["Identifier"] = "Identifier"
    name: str


class StringLiteral(BaseNode):
    type: Literal["StringLiteral"] = "StringLiteral"
    value: str


class NumericLiteral(BaseNode):
    type: Literal["NumericLiteral"] = "NumericLiteral"
    value: int | float


class BooleanLiteral(BaseNode):
    type: Literal["BooleanLiteral"] = "BooleanLiteral"
    value: bool


class NullLiteral(BaseNode):
    type: Literal["NullLiteral"] = "NullLiteral"


class ObjectExpression(BaseNode):
    type: Literal["ObjectExpression"] = "ObjectExpression"
    properties: list[Node] = Field(default_factory=list)


class ObjectProperty(BaseNode):
    type: Literal["ObjectProperty"] = "ObjectProperty"
    key: Node
    value: Node
    computed: bool = False
    shorthand: bool = False


class ObjectMethod(BaseNode):
    """Method, getter or setter written inside an object literal.

    ``kind`` is ``"method"``, ``"get"`` or ``"set"``. Parameters and body
    are kept as extras.
    """

    type: Literal["ObjectMethod"] = "ObjectMethod"
    kind: str = "method"
    key: Node
    computed: bool = False


class SpreadElement(BaseNode):
    type: Literal["SpreadElement"] = "SpreadElement"
    argument: Node


class MemberExpression(BaseNode):
    type: Literal["MemberExpression"] = "MemberExpression"
    object: Node
    property: Node
    computed: bool = False


class CallExpression(BaseNode):
    type: Literal["CallExpression"] = "CallExpression"
    callee: Node
    arguments: list[Node] = Field(default_factory=list)
    type_parameters: Node | None = None


class ArrayExpression(BaseNode):
    type: Literal["ArrayExpression"] = "ArrayExpression"
    elements: list[Node | None] = Field(default_factory=list)


class AssignmentExpression(BaseNode):
    type: Literal["AssignmentExpression"] = "AssignmentExpression"
    operator: str = "="
    left: Node
    right: Node


class ExpressionStatement(BaseNode):
    type: Literal["ExpressionStatement"] = "ExpressionStatement"
    expression: Node


# =============================================================================
# TypeScript types
# =============================================================================


class TSKeyword(BaseNode):
    """Keyword type such as ``string`` (``TSStringKeyword``)."""

    type: str


class TSTypeAnnotation(BaseNode):
    type: Literal["TSTypeAnnotation"] = "TSTypeAnnotation"
    type_annotation: Node


class TSTypeParameterInstantiation(BaseNode):
    type: Literal["TSTypeParameterInstantiation"] = "TSTypeParameterInstantiation"
    params: list[Node] = Field(default_factory=list)


class TSTypeParameterDeclaration(BaseNode):
    type: Literal["TSTypeParameterDeclaration"] = "TSTypeParameterDeclaration"
    params: list[Node] = Field(default_factory=list)


class TSTypeParameter(BaseNode):
    type: Literal["TSTypeParameter"] = "TSTypeParameter"
    name: str | Node


class TSTypeReference(BaseNode):
    type: Literal["TSTypeReference"] = "TSTypeReference"
    type_name: Node
    type_parameters: Node | None = None


class TSQualifiedName(BaseNode):
    type: Literal["TSQualifiedName"] = "TSQualifiedName"
    left: Node
    right: Node


class TSUnionType(BaseNode):
    type: Literal["TSUnionType"] = "TSUnionType"
    types: list[Node] = Field(default_factory=list)


class TSIntersectionType(BaseNode):
    type: Literal["TSIntersectionType"] = "TSIntersectionType"
    types: list[Node] = Field(default_factory=list)


class TSTypeLiteral(BaseNode):
    type: Literal["TSTypeLiteral"] = "TSTypeLiteral"
    members: list[Node] = Field(default_factory=list)


class TSPropertySignature(BaseNode):
    type: Literal["TSPropertySignature"] = "TSPropertySignature"
    key: Node
    type_annotation: Node | None = None
    optional: bool = False
    computed: bool = False


class TSMethodSignature(BaseNode):
    type: Literal["TSMethodSignature"] = "TSMethodSignature"
    key: Node
    optional: bool = False
    computed: bool = False


class TSArrayType(BaseNode):
    type: Literal["TSArrayType"] = "TSArrayType"
    element_type: Node


class TSTupleType(BaseNode):
    type: Literal["TSTupleType"] = "TSTupleType"
    element_types: list[Node] = Field(default_factory=list)


class TSLiteralType(BaseNode):
    type: Literal["TSLiteralType"] = "TSLiteralType"
    literal: Node


class TSParenthesizedType(BaseNode):
    type: Literal["TSParenthesizedType"] = "TSParenthesizedType"
    type_annotation: Node


class TSTypeOperator(BaseNode):
    type: Literal["TSTypeOperator"] = "TSTypeOperator"
    operator: str
    type_annotation: Node


class TSExpressionWithTypeArguments(BaseNode):
    """Interface heritage clause entry (``extends Base<T>``)."""

    type: str = "TSExpressionWithTypeArguments"
    expression: Node
    type_parameters: Node | None = None


# =============================================================================
# TypeScript declarations
# =============================================================================


class TSInterfaceDeclaration(BaseNode):
    type: Literal["TSInterfaceDeclaration"] = "TSInterfaceDeclaration"
    id: Node
    type_parameters: Node | None = None
    extends: list[Node] | None = None
    body: TSInterfaceBody


class TSInterfaceBody(BaseNode):
    type: Literal["TSInterfaceBody"] = "TSInterfaceBody"
    body: list[Node] = Field(default_factory=list)


class TSTypeAliasDeclaration(BaseNode):
    type: Literal["TSTypeAliasDeclaration"] = "TSTypeAliasDeclaration"
    id: Node
    type_parameters: Node | None = None
    type_annotation: Node


class TSEnumDeclaration(BaseNode):
    type: Literal["TSEnumDeclaration"] = "TSEnumDeclaration"
    id: Node
    members: list[Node] = Field(default_factory=list)


class TSEnumMember(BaseNode):
    type: Literal["TSEnumMember"] = "TSEnumMember"
    id: Node
    initializer: Node | None = None


# =============================================================================
# Node union and registry
# =============================================================================

NODE_MODELS: dict[str, type[BaseNode]] = {
    "File": File,
    "Program": Program,
    "ExportNamedDeclaration": ExportNamedDeclaration,
    "ExportDefaultDeclaration": ExportDefaultDeclaration,
    "ClassDeclaration": ClassDeclaration,
    "ClassBody": ClassBody,
    "ClassProperty": ClassProperty,
    "Identifier": Identifier,
    "StringLiteral": StringLiteral,
    "NumericLiteral": NumericLiteral,
    "BooleanLiteral": BooleanLiteral,
    "NullLiteral": NullLiteral,
    "ObjectExpression": ObjectExpression,
    "ObjectProperty": ObjectProperty,
    "ObjectMethod": ObjectMethod,
    "SpreadElement": SpreadElement,
    "MemberExpression": MemberExpression,
    "CallExpression": CallExpression,
    "ArrayExpression": ArrayExpression,
    "AssignmentExpression": AssignmentExpression,
    "ExpressionStatement": ExpressionStatement,
    "TSKeyword": TSKeyword,
    "TSTypeAnnotation": TSTypeAnnotation,
    "TSTypeParameterInstantiation": TSTypeParameterInstantiation,
    "TSTypeParameterDeclaration": TSTypeParameterDeclaration,
    "TSTypeParameter": TSTypeParameter,
    "TSTypeReference": TSTypeReference,
    "TSQualifiedName": TSQualifiedName,
    "TSUnionType": TSUnionType,
    "TSIntersectionType": TSIntersectionType,
    "TSTypeLiteral": TSTypeLiteral,
    "TSPropertySignature": TSPropertySignature,
    "TSMethodSignature": TSMethodSignature,
    "TSArrayType": TSArrayType,
    "TSTupleType": TSTupleType,
    "TSLiteralType": TSLiteralType,
    "TSParenthesizedType": TSParenthesizedType,
    "TSTypeOperator": TSTypeOperator,
    "TSExpressionWithTypeArguments": TSExpressionWithTypeArguments,
    "TSInterfaceDeclaration": TSInterfaceDeclaration,
    "TSInterfaceBody": TSInterfaceBody,
    "TSTypeAliasDeclaration": TSTypeAliasDeclaration,
    "TSEnumDeclaration": TSEnumDeclaration,
    "TSEnumMember": TSEnumMember,
    "Opaque": OpaqueNode,
}

# Wire types that share a model with another wire type
_TAG_ALIASES: dict[str, str] = {
    **{keyword: "TSKeyword" for keyword in KEYWORD_TYPES},
    "ClassExpression": "ClassDeclaration",
    "TSInterfaceHeritage": "TSExpressionWithTypeArguments",
}


def _node_tag(value: Any) -> str | None:
    """Pick the model for a raw dict or an already built node."""
    if isinstance(value, dict):
        node_type = value.get("type")
    else:
        node_type = getattr(value, "type", None)
    if not isinstance(node_type, str):
        return None
    node_type = _TAG_ALIASES.get(node_type, node_type)
    return node_type if node_type in NODE_MODELS else "Opaque"


# Named so pydantic builds the recursive schema once and refers back to it
Node = TypeAliasType(
    "Node",
    Annotated[
        Union[tuple(Annotated[model, Tag(tag)] for tag, model in NODE_MODELS.items())],
        Discriminator(_node_tag),
    ],
)

for _model in NODE_MODELS.values():
    _model.model_rebuild()

_NODE_ADAPTER: TypeAdapter[BaseNode] = TypeAdapter(Node)


# =============================================================================
# Parsing, dumping, traversal
# =============================================================================


def _is_raw_node(value: Any) -> bool:
    return isinstance(value, dict) and isinstance(value.get("type"), str)


def _parse_loose(value: Any) -> Any:
    """Parse nested raw nodes inside an untyped extra field."""
    if _is_raw_node(value):
        return parse_node(value)
    if isinstance(value, list):
        return [_parse_loose(item) for item in value]
    return value


def parse_node(data: dict[str, Any]) -> BaseNode:
    """Validate a Babel JSON node (and everything under it) into models.

    Args:
        data: Node as emitted by the Babel parser.

    Returns:
        BaseNode: The typed node.

    Raises:
        pydantic.ValidationError: If the JSON is not a well-formed AST.
    """
    return _NODE_ADAPTER.validate_python(data)


def _dump_value(value: Any) -> Any:
    if isinstance(value, BaseNode):
        return dump_node(value)
    if isinstance(value, list):
        return [_dump_value(item) for item in value]
    return value


def dump_node(node: BaseNode) -> dict[str, Any]:
    """Convert a node back into Babel JSON (camelCase keys).

    A declared field is written when the input (or builder) set it, or when
    it has since been changed from its default. Defaults the parser filled
    in for absent keys stay absent, so untouched nodes dump to their input.
    """
    data: dict[str, Any] = {}
    fields_set = node.model_fields_set
    for name, info in type(node).model_fields.items():
        value = getattr(node, name)
        if (
            name != "type"
            and name not in fields_set
            and value == info.get_default(call_default_factory=True)
        ):
            continue
        data[info.alias or name] = _dump_value(value)
    for key, value in (node.__pydantic_extra__ or {}).items():
        data[key] = _dump_value(value)
    return data


def iter_children(node: BaseNode) -> Iterator[tuple[str, int | None, BaseNode]]:
    """Yield ``(field, index, child)`` for every direct child node.

    ``field`` is the Python attribute name for declared fields and the raw
    key for extras; ``index`` is None for single-valued fields.
    """
    for name in type(node).model_fields:
        yield from _children_of(name, getattr(node, name))
    for key, value in (node.__pydantic_extra__ or {}).items():
        yield from _children_of(key, value)


def _children_of(
    key: str, value: Any
) -> Iterator[tuple[str, int | None, BaseNode]]:
    if isinstance(value, BaseNode):
        yield key, None, value
    elif isinstance(value, list):
        for index, item in enumerate(value):
            if isinstance(item, BaseNode):
                yield key, index, item


def replace_child(
    parent: BaseNode, key: str, index: int | None, new: BaseNode
) -> None:
    """Swap one child of ``parent`` for ``new`` (as yielded by iter_children)."""
    if key in type(parent).model_fields:
        if index is None:
            setattr(parent, key, new)
        else:
            getattr(parent, key)[index] = new
        return
    extra = parent.__pydantic_extra__
    if index is None:
        extra[key] = new
    else:
        extra[key][index] = new


def walk(node: BaseNode) -> Iterator[BaseNode]:
    """Depth-first, pre-order traversal in source order."""
    yield node
    for _key, _index, child in iter_children(node):
        yield from walk(child)


# =============================================================================
# Small accessors shared by the transform stages
# =============================================================================


def entity_name(node: BaseNode | None) -> str | None:
    """Dotted name of an identifier or qualified name (``React.ReactNode``)."""
    if isinstance(node, Identifier):
        return node.name
    if isinstance(node, TSQualifiedName):
        left = entity_name(node.left)
        right = entity_name(node.right)
        if left and right:
            return f"{left}.{right}"
    return None


def key_name(key: BaseNode, computed: bool = False) -> str | None:
    """Plain property name of an object or class member key.

    Identifiers and string literals count; computed keys never do.
    """
    if computed:
        return None
    if isinstance(key, Identifier):
        return key.name
    if isinstance(key, StringLiteral):
        return key.value
    return None


def type_arguments(node: BaseNode) -> list[BaseNode]:
    """Type arguments written on a class superclass, call or type reference.

    Accepts both the Babel 7 (``typeParameters``) and Babel 8
    (``typeArguments``) spellings.
    """
    if isinstance(node, ClassDeclaration):
        instantiation = node.super_type_parameters
        fallback = "superTypeArguments"
    else:
        instantiation = getattr(node, "type_parameters", None)
        fallback = "typeArguments"
    if instantiation is None:
        instantiation = (node.__pydantic_extra__ or {}).get(fallback)
    if isinstance(instantiation, TSTypeParameterInstantiation):
        return list(instantiation.params)
    return []


def type_parameter_names(declaration: BaseNode) -> list[str]:
    """Names of the generic parameters a declaration introduces."""
    params = getattr(declaration, "type_parameters", None)
    if not isinstance(params, TSTypeParameterDeclaration):
        return []
    names: list[str] = []
    for param in params.params:
        if isinstance(param, TSTypeParameter):
            name = param.name
            names.append(name if isinstance(name, str) else entity_name(name) or "")
    return names


def is_identifier_name(name: str) -> bool:
    """Whether ``name`` can be written as a bare JavaScript identifier."""
    return _IDENTIFIER_RE.match(name) is not None


def unwrap_annotation(node: BaseNode | None) -> BaseNode | None:
    """Strip a ``TSTypeAnnotation`` wrapper if present."""
    if isinstance(node, TSTypeAnnotation):
        return node.type_annotation
    return node


def find_calls(
    root: BaseNode, callee: str
) -> list[tuple[BaseNode, str, int | None, CallExpression]]:
    """Every ``callee(...)`` call under ``root`` with where it sits.

    Each site is ``(parent, field, index, call)`` as accepted by
    ``replace_child``. Sites are collected up front so callers may replace
    them while iterating.
    """
    return [
        (parent, key, index, child)
        for parent in walk(root)
        for key, index, child in iter_children(parent)
        if isinstance(child, CallExpression)
        and isinstance(child.callee, Identifier)
        and child.callee.name == callee
    ]


def call_option(call: CallExpression, name: str, position: int = 0) -> BaseNode | None:
    """Value node of option ``name`` in the call's options object literal.

    Returns None when the argument at ``position`` is missing, is not an
    object literal, or does not set ``name`` with a plain key.
    """
    if len(call.arguments) <= position:
        return None
    options = call.arguments[position]
    if not isinstance(options, ObjectExpression):
        return None
    for prop in options.properties:
        if isinstance(prop, ObjectProperty) and key_name(prop.key, prop.computed) == name:
            return prop.value
    return None


__all__ = [
    "KEYWORD_TYPES",
    "NODE_MODELS",
    "Node",
    "BaseNode",
    "OpaqueNode",
    "File",
    "Program",
    "ExportNamedDeclaration",
    "ExportDefaultDeclaration",
    "ClassDeclaration",
    "ClassBody",
    "ClassProperty",
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
    "parse_node",
    "dump_node",
    "iter_children",
    "replace_child",
    "walk",
    "entity_name",
    "key_name",
    "type_arguments",
    "type_parameter_names",
    "unwrap_annotation",
    "find_calls",
    "call_option",
    "is_identifier_name",
]
