"""CodeAssembler: builds one flat program from framework + user transform.

The assembled text is, in order:
  1. the visitor framework source minus its packaging-only lines,
  2. the user transform source minus its imports of the framework module
     and its ``__future__`` imports,
  3. a trailer expression that parses the ``ast`` global, runs the named
     visitor over it and re-serializes the result.

Between 1 and 2 a capture line copies the ``ast`` global and the
framework codec helpers to private names, which the trailer uses; a
user script that rebinds ``ast`` (``import ast``) or redefines a helper
does not change what the trailer sees.

Filtering is line-oriented: a statement split over several lines is not
recognised. Each filter is a named predicate so its cases can be tested
on their own.
"""

from __future__ import annotations

import re
from pathlib import Path
from typing import Final

import visitor_bridge.visitor as _framework_module

FRAMEWORK_MODULE: Final[str] = "visitor_bridge.visitor"
AST_GLOBAL: Final[str] = "ast"

# Private names the trailer reads; bound right after the framework section.
CAPTURED_AST: Final[str] = "_bridge_ast"
CAPTURED_PARSE: Final[str] = "_bridge_parse"
CAPTURED_DUMP: Final[str] = "_bridge_dump"

# Read once at import; shared read-only by every invocation.
FRAMEWORK_SOURCE: Final[str] = Path(_framework_module.__file__).read_text(encoding="utf-8")

# Lines that only make sense when the framework is imported as a module.
FRAMEWORK_EXPORT_PREFIXES: Final[tuple[str, ...]] = (
    "__all__",
    "from __future__ import",
)

_MODULE = re.escape(FRAMEWORK_MODULE)
_NAMES = r"\w+(?:\s*,\s*\w+)*\s*,?"
FRAMEWORK_IMPORT_PATTERN: Final[re.Pattern[str]] = re.compile(
    rf"^(?:import\s+{_MODULE}"
    rf"|from\s+{_MODULE}\s+import\s+(?:\*|{_NAMES}|\(\s*{_NAMES}\s*\)))"
    r"\s*(?:#.*)?$"
)


def is_framework_export_line(line: str) -> bool:
    """True for framework lines that declare module exports or future imports."""
    return line.startswith(FRAMEWORK_EXPORT_PREFIXES)


def is_framework_import_line(line: str) -> bool:
    """True for an unindented user line importing the framework module.

    Recognises ``import visitor_bridge.visitor``, named bindings
    (optionally parenthesised) and the wildcard form. Aliased imports
    (``... import Visitor as Base``) are left alone.
    """
    return FRAMEWORK_IMPORT_PATTERN.match(line.rstrip()) is not None


def is_future_import_line(line: str) -> bool:
    """``from __future__`` imports are only legal at the top of the flat program."""
    return line.startswith("from __future__ import")


def sanitize_framework(framework: str) -> list[str]:
    return [line for line in framework.splitlines() if not is_framework_export_line(line)]


def sanitize_user_impl(user_impl: str) -> list[str]:
    return [
        line
        for line in user_impl.splitlines()
        if not (is_framework_import_line(line) or is_future_import_line(line))
    ]


def build_capture(ast_global: str = AST_GLOBAL) -> str:
    """Pin the tree text and codec helpers before user code can rebind them."""
    return (
        f"{CAPTURED_PARSE}, {CAPTURED_DUMP}, {CAPTURED_AST} = "
        f"parse_program, dump_program, {ast_global}"
    )


def build_trailer(visitor_class_name: str) -> str:
    """Final expression: serialize(VisitorClass().visit_program(parse(ast)))."""
    return (
        f"{CAPTURED_DUMP}({visitor_class_name}().visit_program("
        f"{CAPTURED_PARSE}({CAPTURED_AST})))"
    )


class CodeAssembler:
    """Pure text assembly; performs no I/O or execution."""

    def __init__(self, framework: str = FRAMEWORK_SOURCE) -> None:
        self.framework = framework

    def assemble(self, user_impl: str, visitor_class_name: str) -> str:
        lines = sanitize_framework(self.framework)
        lines.append(build_capture())
        lines.extend(sanitize_user_impl(user_impl))
        lines.append(build_trailer(visitor_class_name))
        return "\n".join(lines)


def assemble(framework: str, user_impl: str, visitor_class_name: str) -> str:
    return CodeAssembler(framework).assemble(user_impl, visitor_class_name)
