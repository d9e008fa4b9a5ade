"""Rewrites the first argument of every ``console.*(...)`` call.

    visitor-bridge transform samples/console_log.json --config '{"transformImplPath": "samples/console_rewrite.py"}'
"""

from visitor_bridge.visitor import Visitor


class TransformVisitor(Visitor):
    def visit_call_expression(self, n):
        callee = n.get("callee") or {}
        receiver = callee.get("object") or {}
        if receiver.get("value") == "console" and n["arguments"]:
            argument = n["arguments"][0]["expression"]
            argument["value"] = "from_plugin"
            argument["raw"] = '"from_plugin"'
        return self.generic_visit(n)
