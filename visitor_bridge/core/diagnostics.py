"""Diagnostic records and the reporting capability the executor writes to."""

from __future__ import annotations

import logging
from typing import Protocol, runtime_checkable

from pydantic import BaseModel

from visitor_bridge.core.errors import BridgeError, Stage

logger = logging.getLogger(__name__)


class Diagnostic(BaseModel):
    """One human-readable failure report, tagged with its stage and kind."""

    model_config = {"frozen": True}

    stage: Stage
    kind: str
    message: str

    @classmethod
    def from_error(cls, error: BridgeError) -> "Diagnostic":
        return cls(stage=error.stage, kind=error.kind, message=str(error))

    def __str__(self) -> str:
        return f"[{self.stage.value}] {self.kind}: {self.message}"


@runtime_checkable
class Reporter(Protocol):
    """Sink for diagnostics emitted by a transform invocation."""

    def report(self, diagnostic: Diagnostic) -> None: ...


class LoggingReporter:
    """Reports each diagnostic as an ERROR record on a logger."""

    def __init__(self, log: logging.Logger | None = None) -> None:
        self._log = log or logger

    def report(self, diagnostic: Diagnostic) -> None:
        self._log.error("%s", diagnostic)


class CollectingReporter:
    """Keeps diagnostics in memory; optionally forwards them to another reporter."""

    def __init__(self, forward: Reporter | None = None) -> None:
        self.diagnostics: list[Diagnostic] = []
        self._forward = forward

    def report(self, diagnostic: Diagnostic) -> None:
        self.diagnostics.append(diagnostic)
        if self._forward is not None:
            self._forward.report(diagnostic)

    def kinds(self) -> list[str]:
        return [d.kind for d in self.diagnostics]

    def __len__(self) -> int:
        return len(self.diagnostics)
