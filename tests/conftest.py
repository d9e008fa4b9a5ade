"""Shared fixtures for visitor-bridge tests."""

from __future__ import annotations

from pathlib import Path
from typing import Callable

import pytest

from visitor_bridge.core.codec import ASTCodec
from visitor_bridge.core.config import ConfigResolver
from visitor_bridge.core.diagnostics import CollectingReporter
from visitor_bridge.core.ecma_ast import (
    ArrayExpression,
    AssignmentExpression,
    BinaryExpression,
    BlockStatement,
    BooleanLiteral,
    ComputedPropName,
    ConditionalExpression,
    EmptyStatement,
    ExpressionStatement,
    ExprOrSpread,
    FunctionDeclaration,
    IfStatement,
    ImportDeclaration,
    ImportDefaultSpecifier,
    ImportNamespaceSpecifier,
    ImportSpecifier,
    MemberExpression,
    Module,
    NullLiteral,
    NumericLiteral,
    Parameter,
    ParenthesisExpression,
    ReturnStatement,
    Script,
    Span,
    ThisExpression,
    UnaryExpression,
    VariableDeclaration,
    VariableDeclarator,
    call,
    ident,
    member,
    string,
)
from visitor_bridge.pipelines.executor import TransformExecutor


@pytest.fixture
def console_log_program() -> Module:
    """console.log("hello")"""
    return Module(
        span=Span(start=0, end=20),
        body=[
            ExpressionStatement(
                expression=call(member(ident("console"), "log"), string("hello")),
            )
        ],
    )


@pytest.fixture
def foo_program() -> Script:
    """foo(1); let x = foo;"""
    return Script(
        body=[
            ExpressionStatement(expression=call(ident("foo"), NumericLiteral(value=1, raw="1"))),
            VariableDeclaration(
                kind="let",
                declarations=[VariableDeclarator(id=ident("x"), init=ident("foo"))],
            ),
        ],
    )


@pytest.fixture
def kitchen_sink_program() -> Module:
    """One of every node kind the host schema defines."""
    body_stmts = [
        IfStatement(
            test=UnaryExpression(operator="!", argument=ident("a")),
            consequent=ReturnStatement(argument=NullLiteral()),
            alternate=BlockStatement(stmts=[EmptyStatement()]),
        ),
        ReturnStatement(
            argument=ConditionalExpression(
                test=BooleanLiteral(value=True),
                consequent=ParenthesisExpression(
                    expression=BinaryExpression(
                        operator="+", left=ident("a"), right=NumericLiteral(value=2.5),
                    )
                ),
                alternate=ArrayExpression(
                    elements=[
                        ExprOrSpread(expression=ThisExpression()),
                        None,
                        ExprOrSpread(spread=Span(start=1, end=4), expression=ident("rest")),
                    ]
                ),
            )
        ),
    ]
    return Module(
        span=Span(start=0, end=200, ctxt=2),
        body=[
            ImportDeclaration(
                specifiers=[
                    ImportDefaultSpecifier(local=ident("React")),
                    ImportSpecifier(local=ident("u"), imported=ident("useState")),
                    ImportNamespaceSpecifier(local=ident("ns")),
                ],
                source=string("react"),
            ),
            FunctionDeclaration(
                identifier=ident("f"),
                params=[Parameter(pat=ident("a"))],
                body=BlockStatement(stmts=body_stmts),
                is_async=True,
            ),
            ExpressionStatement(
                expression=AssignmentExpression(
                    left=MemberExpression(
                        obj=ident("obj"),
                        prop=ComputedPropName(expression=string("key")),
                    ),
                    right=call(ident("f"), ident("x")),
                )
            ),
        ],
        interpreter="node",
    )


@pytest.fixture
def codec() -> ASTCodec:
    return ASTCodec()


@pytest.fixture
def reporter() -> CollectingReporter:
    return CollectingReporter()


@pytest.fixture
def write_impl(tmp_path: Path) -> Callable[[str, str], str]:
    """Write a transform script under tmp_path; returns its relative path."""

    def _write(source: str, name: str = "visitor.py") -> str:
        (tmp_path / name).write_text(source)
        return name

    return _write


@pytest.fixture
def executor(tmp_path: Path, reporter: CollectingReporter) -> TransformExecutor:
    return TransformExecutor(resolver=ConfigResolver(root=tmp_path), reporter=reporter)
