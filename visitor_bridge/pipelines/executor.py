"""TransformExecutor: runs a script-defined visitor over a host program.

Stages run strictly in order and stop at the first failure:

  ResolveConfig -> SerializeTree -> PrepareRuntime -> AssembleAndRun
  -> DeserializeResult

Every failure is reported as one Diagnostic and the original program is
returned untouched. No exception leaves ``run`` or ``process``; a
misconfigured or broken transform degrades to a no-op.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Callable, TypeVar

from visitor_bridge.core.codec import ASTCodec
from visitor_bridge.core.config import ConfigResolver, TransformContext
from visitor_bridge.core.diagnostics import Diagnostic, LoggingReporter, Reporter
from visitor_bridge.core.errors import (
    ASTDeserializeError,
    ASTSerializeError,
    BridgeError,
    ConfigMalformed,
    RuntimeBindError,
    RuntimeEvalError,
    Stage,
)
from visitor_bridge.transforms.assembler import AST_GLOBAL, CodeAssembler
from visitor_bridge.transforms.script_runtime import ScriptEngine, ScriptRuntime

logger = logging.getLogger(__name__)

T = TypeVar("T")


@dataclass(frozen=True)
class TransformResult:
    """Outcome of one invocation. ``program`` is always a valid host tree."""

    program: Any
    transformed: bool
    diagnostics: list[Diagnostic] = field(default_factory=list)
    stage_log: list[dict[str, Any]] = field(default_factory=list)

    @property
    def failed_stage(self) -> Stage | None:
        return self.diagnostics[-1].stage if self.diagnostics else None


class _StageFailed(Exception):
    def __init__(self, error: BridgeError) -> None:
        self.error = error
        super().__init__(str(error))


class TransformExecutor:
    """Orchestrates config resolution, codec, assembly and script evaluation.

    Collaborators are injectable; the defaults give the Python script
    runtime, the ECMAScript host schema and a logging reporter.
    """

    def __init__(
        self,
        resolver: ConfigResolver | None = None,
        codec: ASTCodec | None = None,
        assembler: CodeAssembler | None = None,
        runtime_factory: Callable[[], ScriptEngine] = ScriptRuntime,
        reporter: Reporter | None = None,
    ) -> None:
        self.resolver = resolver if resolver is not None else ConfigResolver()
        self.codec = codec if codec is not None else ASTCodec()
        self.assembler = assembler if assembler is not None else CodeAssembler()
        self.runtime_factory = runtime_factory
        self.reporter = reporter if reporter is not None else LoggingReporter()

    def run(self, program: Any, config: str | None) -> TransformResult:
        """Transform *program*; on any failure return it unchanged."""
        stage_log: list[dict[str, Any]] = []
        try:
            context = self._stage(
                Stage.RESOLVE_CONFIG, ConfigMalformed, stage_log,
                lambda: self.resolver.resolve(config),
            )
            serialized = self._stage(
                Stage.SERIALIZE_TREE, ASTSerializeError, stage_log,
                lambda: self.codec.serialize(program),
            )
            runtime = self._stage(
                Stage.PREPARE_RUNTIME, RuntimeBindError, stage_log,
                lambda: self._prepare_runtime(serialized),
            )
            try:
                result_text = self._stage(
                    Stage.ASSEMBLE_AND_RUN, RuntimeEvalError, stage_log,
                    lambda: self._assemble_and_run(runtime, context),
                )
            finally:
                _close_quietly(runtime)
            transformed = self._stage(
                Stage.DESERIALIZE_RESULT, ASTDeserializeError, stage_log,
                lambda: self.codec.deserialize(result_text),
            )
        except _StageFailed as failure:
            diagnostic = Diagnostic.from_error(failure.error)
            self._report(diagnostic)
            return TransformResult(
                program=program,
                transformed=False,
                diagnostics=[diagnostic],
                stage_log=stage_log,
            )

        logger.debug("Transform applied (%d stages)", len(stage_log))
        return TransformResult(program=transformed, transformed=True, stage_log=stage_log)

    def process(self, program: Any, config: str | None) -> Any:
        """Host-facing entry point: returns only the resulting program."""
        return self.run(program, config).program

    def _report(self, diagnostic: Diagnostic) -> None:
        try:
            self.reporter.report(diagnostic)
        except Exception:
            logger.exception("Reporter failed on diagnostic: %s", diagnostic)

    # ---- stages ----

    def _prepare_runtime(self, serialized: str) -> ScriptEngine:
        runtime = self.runtime_factory()
        try:
            runtime.bind_global(AST_GLOBAL, serialized)
        except BaseException:
            _close_quietly(runtime)
            raise
        return runtime

    def _assemble_and_run(self, runtime: ScriptEngine, context: TransformContext) -> str:
        code = self.assembler.assemble(
            context.transform_impl_source, context.visitor_class_name,
        )
        return runtime.evaluate(code)

    def _stage(
        self,
        stage: Stage,
        fallback: Callable[[str], BridgeError],
        stage_log: list[dict[str, Any]],
        fn: Callable[[], T],
    ) -> T:
        """Run one stage; any failure becomes a _StageFailed carrying a BridgeError."""
        logger.debug("Stage %s", stage.value)
        try:
            value = fn()
        except BridgeError as e:
            stage_log.append({"stage": stage.value, "ok": False, "error": e.kind})
            raise _StageFailed(e) from e
        except BaseException as e:
            # Collaborators outside the taxonomy (custom engines, readers).
            error = fallback(f"{type(e).__name__}: {e}")
            stage_log.append({"stage": stage.value, "ok": False, "error": error.kind})
            raise _StageFailed(error) from e
        stage_log.append({"stage": stage.value, "ok": True})
        return value


def _close_quietly(runtime: ScriptEngine) -> None:
    try:
        runtime.close()
    except Exception:
        logger.warning("Script runtime failed to close", exc_info=True)


def process(
    program: Any,
    config: str | None,
    *,
    root: str | Path | None = None,
    reporter: Reporter | None = None,
) -> Any:
    """Plugin entry point: run the configured transform over *program*."""
    executor = TransformExecutor(resolver=ConfigResolver(root=root), reporter=reporter)
    return executor.process(program, config)
