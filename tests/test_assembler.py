"""Tests for program assembly and its line filters."""

from __future__ import annotations

import ast

import pytest

from visitor_bridge.transforms.assembler import (
    FRAMEWORK_SOURCE,
    CodeAssembler,
    assemble,
    build_capture,
    build_trailer,
    is_framework_export_line,
    is_framework_import_line,
    is_future_import_line,
    sanitize_framework,
    sanitize_user_impl,
)


class TestExportLineFilter:
    @pytest.mark.parametrize(
        "line",
        [
            '__all__ = ["Visitor"]',
            "__all__ += ['extra']",
            "from __future__ import annotations",
        ],
    )
    def test_export_lines(self, line: str) -> None:
        assert is_framework_export_line(line)

    @pytest.mark.parametrize(
        "line",
        ["import json", "class Visitor:", "    __all__ = []", "x = '__all__'"],
    )
    def test_ordinary_lines(self, line: str) -> None:
        assert not is_framework_export_line(line)

    def test_framework_source_has_export_lines(self) -> None:
        assert any(is_framework_export_line(l) for l in FRAMEWORK_SOURCE.splitlines())

    def test_sanitized_framework_has_none(self) -> None:
        kept = sanitize_framework(FRAMEWORK_SOURCE)
        assert not any(is_framework_export_line(l) for l in kept)
        assert "class Visitor:" in kept


class TestImportLineFilter:
    @pytest.mark.parametrize(
        "line",
        [
            "import visitor_bridge.visitor",
            "from visitor_bridge.visitor import Visitor",
            "from visitor_bridge.visitor import *",
            "from visitor_bridge.visitor import Visitor, node_type",
            "from visitor_bridge.visitor import (Visitor, node_type)",
            "from visitor_bridge.visitor import ( Visitor, )",
            "from  visitor_bridge.visitor  import  Visitor   ",
            "from visitor_bridge.visitor import Visitor  # injected anyway",
            "from visitor_bridge.visitor import Visitor\r",
        ],
    )
    def test_matches_framework_imports(self, line: str) -> None:
        assert is_framework_import_line(line)

    @pytest.mark.parametrize(
        "line",
        [
            "import json",
            "from visitor_bridge.core.ecma_ast import Module",
            "import visitor_bridge.visitors",
            "from visitor_bridge.visitor_extra import Visitor",
            "from visitor_bridge.visitor import Visitor as Base",
            "import visitor_bridge.visitor as v",
            "    from visitor_bridge.visitor import Visitor",
            "from visitor_bridge.visitor import (",
            "# from visitor_bridge.visitor import Visitor",
        ],
    )
    def test_leaves_other_lines(self, line: str) -> None:
        assert not is_framework_import_line(line)

    def test_future_import(self) -> None:
        assert is_future_import_line("from __future__ import annotations")
        assert not is_future_import_line("import future")

    def test_sanitize_user_impl(self) -> None:
        src = (
            "from __future__ import annotations\n"
            "import re\n"
            "from visitor_bridge.visitor import Visitor\n"
            "class TransformVisitor(Visitor):\n"
            "    pass\n"
        )
        assert sanitize_user_impl(src) == [
            "import re",
            "class TransformVisitor(Visitor):",
            "    pass",
        ]


class TestAssemble:
    def test_order_framework_user_trailer(self) -> None:
        code = assemble("FRAMEWORK = 1", "USER = 2", "Mine")
        assert code.splitlines() == [
            "FRAMEWORK = 1",
            build_capture(),
            "USER = 2",
            build_trailer("Mine"),
        ]

    def test_trailer_shape(self) -> None:
        assert build_trailer("Mine") == (
            "_bridge_dump(Mine().visit_program(_bridge_parse(_bridge_ast)))"
        )

    def test_capture_line(self) -> None:
        assert build_capture() == (
            "_bridge_parse, _bridge_dump, _bridge_ast = parse_program, dump_program, ast"
        )

    def test_capture_precedes_user_text(self) -> None:
        code = CodeAssembler().assemble("import ast\n", "TransformVisitor").splitlines()
        assert code.index(build_capture()) < code.index("import ast")
        assert code.index("class Visitor:") < code.index(build_capture())

    def test_trailer_is_final_expression(self) -> None:
        code = CodeAssembler().assemble(
            "from visitor_bridge.visitor import Visitor\n"
            "class TransformVisitor(Visitor):\n"
            "    pass\n",
            "TransformVisitor",
        )
        tree = ast.parse(code)
        assert isinstance(tree.body[-1], ast.Expr)
        assert "__all__" not in code
        assert "from visitor_bridge.visitor import Visitor" not in code.splitlines()

    def test_default_framework_is_shared_constant(self) -> None:
        assert CodeAssembler().framework is FRAMEWORK_SOURCE

    def test_user_text_ending_without_newline(self) -> None:
        code = assemble("A = 1\n", "class T:\n    pass", "T")
        ast.parse(code)
