"""Host program tree: an ECMAScript subset in SWC's JSON interchange shape.

Nodes are frozen Pydantic models tagged by a ``type`` field, with lower
camel case keys and a ``span`` on every node. Unknown keys are rejected,
so a tree that the schema cannot represent fails validation instead of
being silently truncated.

Grammar:
  Program    := Module(body: ModuleItem*) | Script(body: Statement*)
  ModuleItem := ImportDeclaration | Statement
  Statement  := ExpressionStatement | VariableDeclaration | BlockStatement
              | IfStatement | ReturnStatement | FunctionDeclaration
              | EmptyStatement
  Expression := Identifier | StringLiteral | NumericLiteral | BooleanLiteral
              | NullLiteral | ThisExpression | ArrayExpression
              | CallExpression | MemberExpression | UnaryExpression
              | BinaryExpression | AssignmentExpression
              | ConditionalExpression | ParenthesisExpression
"""

from __future__ import annotations

from typing import Annotated, Iterator, Literal, Union

from pydantic import BaseModel, Field
from pydantic.alias_generators import to_camel


class Node(BaseModel):
    """Common configuration for every tree node."""

    model_config = {
        "frozen": True,
        "extra": "forbid",
        "alias_generator": to_camel,
        "populate_by_name": True,
        # 1e999 is a legal literal; keep Infinity/NaN on the wire instead of null.
        "ser_json_inf_nan": "constants",
    }


class Span(Node):
    start: int = 0
    end: int = 0
    ctxt: int = 0


# ---- Expressions ----

class Identifier(Node):
    type: Literal["Identifier"] = "Identifier"
    span: Span = Field(default_factory=Span)
    value: str
    optional: bool = False


class StringLiteral(Node):
    type: Literal["StringLiteral"] = "StringLiteral"
    span: Span = Field(default_factory=Span)
    value: str
    raw: str | None = None


class NumericLiteral(Node):
    type: Literal["NumericLiteral"] = "NumericLiteral"
    span: Span = Field(default_factory=Span)
    value: float
    raw: str | None = None


class BooleanLiteral(Node):
    type: Literal["BooleanLiteral"] = "BooleanLiteral"
    span: Span = Field(default_factory=Span)
    value: bool


class NullLiteral(Node):
    type: Literal["NullLiteral"] = "NullLiteral"
    span: Span = Field(default_factory=Span)


class ThisExpression(Node):
    type: Literal["ThisExpression"] = "ThisExpression"
    span: Span = Field(default_factory=Span)


class ExprOrSpread(Node):
    """Call argument or array element; ``spread`` holds the ``...`` span."""

    spread: Span | None = None
    expression: Expression


class ArrayExpression(Node):
    type: Literal["ArrayExpression"] = "ArrayExpression"
    span: Span = Field(default_factory=Span)
    elements: list[ExprOrSpread | None] = Field(default_factory=list)


class CallExpression(Node):
    type: Literal["CallExpression"] = "CallExpression"
    span: Span = Field(default_factory=Span)
    callee: Expression
    arguments: list[ExprOrSpread] = Field(default_factory=list)
    type_arguments: None = None


class ComputedPropName(Node):
    """``obj[expr]`` property."""

    type: Literal["Computed"] = "Computed"
    span: Span = Field(default_factory=Span)
    expression: Expression


class MemberExpression(Node):
    type: Literal["MemberExpression"] = "MemberExpression"
    span: Span = Field(default_factory=Span)
    obj: Expression = Field(alias="object")
    prop: MemberProp = Field(alias="property")


class UnaryExpression(Node):
    type: Literal["UnaryExpression"] = "UnaryExpression"
    span: Span = Field(default_factory=Span)
    operator: Literal["-", "+", "!", "~", "typeof", "void", "delete"]
    argument: Expression


class BinaryExpression(Node):
    type: Literal["BinaryExpression"] = "BinaryExpression"
    span: Span = Field(default_factory=Span)
    operator: str
    left: Expression
    right: Expression


class AssignmentExpression(Node):
    type: Literal["AssignmentExpression"] = "AssignmentExpression"
    span: Span = Field(default_factory=Span)
    operator: str = "="
    left: Expression
    right: Expression


class ConditionalExpression(Node):
    type: Literal["ConditionalExpression"] = "ConditionalExpression"
    span: Span = Field(default_factory=Span)
    test: Expression
    consequent: Expression
    alternate: Expression


class ParenthesisExpression(Node):
    type: Literal["ParenthesisExpression"] = "ParenthesisExpression"
    span: Span = Field(default_factory=Span)
    expression: Expression


# ---- Statements ----

class ExpressionStatement(Node):
    type: Literal["ExpressionStatement"] = "ExpressionStatement"
    span: Span = Field(default_factory=Span)
    expression: Expression


class VariableDeclarator(Node):
    type: Literal["VariableDeclarator"] = "VariableDeclarator"
    span: Span = Field(default_factory=Span)
    id: Identifier
    init: Expression | None = None
    definite: bool = False


class VariableDeclaration(Node):
    type: Literal["VariableDeclaration"] = "VariableDeclaration"
    span: Span = Field(default_factory=Span)
    kind: Literal["var", "let", "const"] = "const"
    declare: bool = False
    declarations: list[VariableDeclarator] = Field(default_factory=list)


class BlockStatement(Node):
    type: Literal["BlockStatement"] = "BlockStatement"
    span: Span = Field(default_factory=Span)
    stmts: list[Statement] = Field(default_factory=list)


class IfStatement(Node):
    type: Literal["IfStatement"] = "IfStatement"
    span: Span = Field(default_factory=Span)
    test: Expression
    consequent: Statement
    alternate: Statement | None = None


class ReturnStatement(Node):
    type: Literal["ReturnStatement"] = "ReturnStatement"
    span: Span = Field(default_factory=Span)
    argument: Expression | None = None


class EmptyStatement(Node):
    type: Literal["EmptyStatement"] = "EmptyStatement"
    span: Span = Field(default_factory=Span)


class Parameter(Node):
    type: Literal["Parameter"] = "Parameter"
    span: Span = Field(default_factory=Span)
    pat: Identifier


class FunctionDeclaration(Node):
    type: Literal["FunctionDeclaration"] = "FunctionDeclaration"
    span: Span = Field(default_factory=Span)
    identifier: Identifier
    declare: bool = False
    params: list[Parameter] = Field(default_factory=list)
    body: BlockStatement | None = None
    generator: bool = False
    is_async: bool = Field(default=False, alias="async")


# ---- Module items ----

class ImportDefaultSpecifier(Node):
    type: Literal["ImportDefaultSpecifier"] = "ImportDefaultSpecifier"
    span: Span = Field(default_factory=Span)
    local: Identifier


class ImportNamespaceSpecifier(Node):
    type: Literal["ImportNamespaceSpecifier"] = "ImportNamespaceSpecifier"
    span: Span = Field(default_factory=Span)
    local: Identifier


class ImportSpecifier(Node):
    type: Literal["ImportSpecifier"] = "ImportSpecifier"
    span: Span = Field(default_factory=Span)
    local: Identifier
    imported: Identifier | None = None
    is_type_only: bool = False


class ImportDeclaration(Node):
    type: Literal["ImportDeclaration"] = "ImportDeclaration"
    span: Span = Field(default_factory=Span)
    specifiers: list[ImportSpecifierKind] = Field(default_factory=list)
    source: StringLiteral
    type_only: bool = False


class Module(Node):
    type: Literal["Module"] = "Module"
    span: Span = Field(default_factory=Span)
    body: list[ModuleItem] = Field(default_factory=list)
    interpreter: str | None = None


class Script(Node):
    type: Literal["Script"] = "Script"
    span: Span = Field(default_factory=Span)
    body: list[Statement] = Field(default_factory=list)
    interpreter: str | None = None


# Discriminated unions over the "type" tag
Expression = Annotated[
    Union[
        Identifier,
        StringLiteral,
        NumericLiteral,
        BooleanLiteral,
        NullLiteral,
        ThisExpression,
        ArrayExpression,
        CallExpression,
        MemberExpression,
        UnaryExpression,
        BinaryExpression,
        AssignmentExpression,
        ConditionalExpression,
        ParenthesisExpression,
    ],
    Field(discriminator="type"),
]

MemberProp = Annotated[Union[Identifier, ComputedPropName], Field(discriminator="type")]

Statement = Annotated[
    Union[
        ExpressionStatement,
        VariableDeclaration,
        BlockStatement,
        IfStatement,
        ReturnStatement,
        FunctionDeclaration,
        EmptyStatement,
    ],
    Field(discriminator="type"),
]

ModuleItem = Annotated[
    Union[
        ImportDeclaration,
        ExpressionStatement,
        VariableDeclaration,
        BlockStatement,
        IfStatement,
        ReturnStatement,
        FunctionDeclaration,
        EmptyStatement,
    ],
    Field(discriminator="type"),
]

ImportSpecifierKind = Annotated[
    Union[ImportDefaultSpecifier, ImportSpecifier, ImportNamespaceSpecifier],
    Field(discriminator="type"),
]

Program = Annotated[Union[Module, Script], Field(discriminator="type")]

# Rebuild models now that the unions are defined (forward references)
for _model in (
    ExprOrSpread,
    ArrayExpression,
    CallExpression,
    ComputedPropName,
    MemberExpression,
    UnaryExpression,
    BinaryExpression,
    AssignmentExpression,
    ConditionalExpression,
    ParenthesisExpression,
    ExpressionStatement,
    VariableDeclarator,
    VariableDeclaration,
    BlockStatement,
    IfStatement,
    ReturnStatement,
    FunctionDeclaration,
    ImportDeclaration,
    Module,
    Script,
):
    _model.model_rebuild()


# ---- Helpers ----

def ident(name: str) -> Identifier:
    """Shorthand constructor for Identifier."""
    return Identifier(value=name)


def string(value: str) -> StringLiteral:
    """String literal with a double-quoted ``raw`` form."""
    return StringLiteral(value=value, raw=f'"{value}"')


def call(callee: Expression, *args: Expression) -> CallExpression:
    return CallExpression(
        callee=callee,
        arguments=[ExprOrSpread(expression=a) for a in args],
    )


def member(obj: Expression, name: str) -> MemberExpression:
    """``obj.name``"""
    return MemberExpression(obj=obj, prop=ident(name))


def iter_nodes(node: BaseModel) -> Iterator[Node]:
    """Yield *node* and every ``type``-tagged node below it, depth first."""
    if isinstance(node, Node) and "type" in type(node).model_fields:
        yield node
    for name in type(node).model_fields:
        yield from _iter_value(getattr(node, name))


def _iter_value(value: object) -> Iterator[Node]:
    if isinstance(value, BaseModel):
        yield from iter_nodes(value)
    elif isinstance(value, list):
        for item in value:
            yield from _iter_value(item)
