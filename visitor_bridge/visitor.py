"""Base visitor for script-defined program transforms.

Transform scripts subclass ``Visitor`` and override ``visit_<snake_case>``
methods named after node types (``CallExpression`` ->
``visit_call_expression``). Nodes are the plain dicts decoded from the
JSON interchange text. Each visit method returns the replacement node;
call ``self.generic_visit(n)`` to keep descending into children.

    from visitor_bridge.visitor import Visitor

    class TransformVisitor(Visitor):
        def visit_identifier(self, n):
            if n["value"] == "foo":
                n["value"] = "bar"
            return n

The bridge prepends this file's source to every transform script, so
it must not import anything from the bridge.

Because framework and script share one namespace, a script must not
rebind the module-level names ``Visitor``, ``node_type``,
``visit_method_name``, ``json``, ``re`` or ``_CAMEL_BOUNDARY``; the
visitor methods look them up at call time. The ``ast`` global and the
``parse_program``/``dump_program`` helpers are captured before the
script runs, so ``import ast`` in a script is fine.
"""

from __future__ import annotations

import json
import re

__all__ = ["Visitor", "dump_program", "node_type", "parse_program", "visit_method_name"]

_CAMEL_BOUNDARY = re.compile(r"(?<!^)(?=[A-Z])")


def node_type(node):
    """The ``type`` tag of *node*, or None for untagged values."""
    if isinstance(node, dict):
        tag = node.get("type")
        if isinstance(tag, str):
            return tag
    return None


def visit_method_name(type_name: str) -> str:
    return "visit_" + _CAMEL_BOUNDARY.sub("_", type_name).lower()


class Visitor:
    """Walks a program dict, dispatching on each node's ``type`` tag.

    Children are replaced in place by whatever their visit returns.
    List entries whose visit returns None are removed from the list.
    """

    def visit_program(self, n):
        """Whole-program entry point: dispatches to visit_module / visit_script."""
        return self.visit(n)

    def visit(self, node):
        tag = node_type(node)
        if tag is None:
            return self.generic_visit(node)
        method = getattr(self, visit_method_name(tag), None)
        if method is None:
            return self.generic_visit(node)
        return method(node)

    def generic_visit(self, node):
        if isinstance(node, dict):
            for key, value in list(node.items()):
                if key == "type":
                    continue
                node[key] = self._visit_child(value)
            return node
        if isinstance(node, list):
            return self._visit_list(node)
        return node

    def _visit_child(self, value):
        if isinstance(value, dict):
            return self.visit(value)
        if isinstance(value, list):
            return self._visit_list(value)
        return value

    def _visit_list(self, items):
        result = []
        for item in items:
            if item is None:
                result.append(item)
                continue
            visited = self._visit_child(item)
            if visited is not None:
                result.append(visited)
        return result


def parse_program(text):
    """Decode interchange text into nested program dicts."""
    return json.loads(text)


def dump_program(program) -> str:
    """Encode a program dict back to interchange text."""
    return json.dumps(program)
