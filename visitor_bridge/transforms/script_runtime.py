"""ScriptRuntime: a single-use, isolated namespace for assembled programs.

The engine is Python itself. Each runtime owns a fresh globals dict, so
no bindings, classes or module-level state survive from one transform
to the next. The value of the program's final expression statement,
coerced to ``str``, is the evaluation result.
"""

from __future__ import annotations

import ast
import builtins
import keyword
import logging
import traceback
from typing import Any, Protocol, runtime_checkable

from visitor_bridge.core.errors import RuntimeBindError, RuntimeEvalError

logger = logging.getLogger(__name__)

SCRIPT_FILENAME = "<transform>"


@runtime_checkable
class ScriptEngine(Protocol):
    """Minimal capability the executor needs from an embedded engine."""

    def bind_global(self, name: str, value: str) -> None: ...

    def evaluate(self, program_text: str) -> str: ...

    def close(self) -> None: ...


class ScriptRuntime:
    """Evaluates program text in its own globals; discard after one use."""

    def __init__(self, filename: str = SCRIPT_FILENAME) -> None:
        self.filename = filename
        self._globals: dict[str, Any] = {
            "__name__": "__transform__",
            # Private copy: writes through __builtins__ die with the runtime.
            "__builtins__": dict(vars(builtins)),
        }
        self._closed = False

    def bind_global(self, name: str, value: str) -> None:
        if self._closed:
            raise RuntimeBindError("runtime is closed")
        if not isinstance(name, str) or not name.isidentifier() or keyword.iskeyword(name):
            raise RuntimeBindError(f"{name!r} is not a valid global name")
        if name.startswith("__") and name.endswith("__"):
            raise RuntimeBindError(f"{name!r} is reserved")
        if not isinstance(value, str):
            raise RuntimeBindError(
                f"global {name!r} must be text, got {type(value).__name__}"
            )
        self._globals[name] = value

    def evaluate(self, program_text: str) -> str:
        """Run *program_text* to completion and return its final value as text."""
        if self._closed:
            raise RuntimeEvalError("runtime is closed")
        try:
            module = ast.parse(program_text, filename=self.filename, mode="exec")
            if not module.body or not isinstance(module.body[-1], ast.Expr):
                raise RuntimeEvalError("program does not end with an expression")
            tail = ast.Expression(body=module.body.pop().value)
            exec(compile(module, self.filename, "exec"), self._globals)
            value = eval(compile(tail, self.filename, "eval"), self._globals)
        except RuntimeEvalError:
            raise
        except BaseException as e:
            # Scripts may raise anything, KeyboardInterrupt and
            # GeneratorExit included; none of it may reach the host.
            raise RuntimeEvalError(self._describe(e)) from e
        return str(value)

    def close(self) -> None:
        self._globals.clear()
        self._closed = True

    @property
    def closed(self) -> bool:
        return self._closed

    def __enter__(self) -> "ScriptRuntime":
        return self

    def __exit__(self, *exc_info: object) -> None:
        self.close()

    def _describe(self, error: BaseException) -> str:
        """``Type: message (line N)``, pointing at the innermost script frame."""
        text = f"{type(error).__name__}: {error}"
        if isinstance(error, SyntaxError):
            return text
        frames = [
            f for f in traceback.extract_tb(error.__traceback__)
            if f.filename == self.filename
        ]
        if frames:
            text += f" (line {frames[-1].lineno})"
        return text
