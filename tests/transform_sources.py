"""Transform scripts used across the executor, runtime and CLI tests."""

from __future__ import annotations

from pathlib import Path

SAMPLES_DIR = Path(__file__).resolve().parent.parent / "samples"

IDENTITY_VISITOR = """\
from visitor_bridge.visitor import Visitor


class TransformVisitor(Visitor):
    pass
"""

CONSOLE_REWRITE_VISITOR = (SAMPLES_DIR / "console_rewrite.py").read_text()

RENAME_VISITOR = """\
from visitor_bridge.visitor import *


class Renamer(Visitor):
    def visit_identifier(self, n):
        if n["value"] == "foo":
            n["value"] = "bar"
        return n
"""

THROWING_VISITOR = """\
import visitor_bridge.visitor


class TransformVisitor(Visitor):
    def visit_call_expression(self, n):
        raise ValueError("boom from visitor")
"""

INVALID_TREE_VISITOR = """\
from visitor_bridge.visitor import Visitor


class TransformVisitor(Visitor):
    def visit_string_literal(self, n):
        n["type"] = "NotANode"
        return n
"""

PARENTHESIZED_IMPORT_VISITOR = """\
from __future__ import annotations

from visitor_bridge.visitor import (Visitor, node_type)  # framework


class TransformVisitor(Visitor):
    def visit_numeric_literal(self, n):
        n["value"] = n["value"] * 2
        n["raw"] = None
        return n
"""

DROPPING_VISITOR = """\
from visitor_bridge.visitor import Visitor


class TransformVisitor(Visitor):
    def visit_expression_statement(self, n):
        return None
"""

NULL_PROGRAM_VISITOR = """\
from visitor_bridge.visitor import Visitor


class TransformVisitor(Visitor):
    def visit_program(self, n):
        return None
"""

HALTING_VISITOR = """\
from visitor_bridge.visitor import Visitor


class Halt(BaseException):
    pass


class TransformVisitor(Visitor):
    def visit_call_expression(self, n):
        raise Halt("stop")
"""

AST_IMPORTING_VISITOR = """\
import ast

from visitor_bridge.visitor import Visitor


class TransformVisitor(Visitor):
    def visit_identifier(self, n):
        if n["value"] == "foo":
            n["value"] = ast.literal_eval("'baz'")
        return n
"""

BUILTINS_WRITING_VISITOR = """\
from visitor_bridge.visitor import Visitor

__builtins__["LEAKED"] = "from an earlier transform"


class TransformVisitor(Visitor):
    pass
"""

BUILTINS_READING_VISITOR = """\
from visitor_bridge.visitor import Visitor


class TransformVisitor(Visitor):
    def visit_program(self, n):
        LEAKED
        return self.visit(n)
"""
