"""Failure taxonomy for the transform bridge.

Every stage of the bridge raises one of these. None of them is fatal to
the host: TransformExecutor catches each at its stage, reports it, and
hands the original program back unchanged.
"""

from __future__ import annotations

import enum


class Stage(str, enum.Enum):
    """Linear stages of one transform invocation."""

    RESOLVE_CONFIG = "ResolveConfig"
    SERIALIZE_TREE = "SerializeTree"
    PREPARE_RUNTIME = "PrepareRuntime"
    ASSEMBLE_AND_RUN = "AssembleAndRun"
    DESERIALIZE_RESULT = "DeserializeResult"


class BridgeError(Exception):
    """Base class for all bridge failures."""

    stage: Stage = Stage.RESOLVE_CONFIG

    @property
    def kind(self) -> str:
        return type(self).__name__


class ConfigMissing(BridgeError):
    """No configuration payload was supplied by the host."""

    stage = Stage.RESOLVE_CONFIG

    def __init__(self) -> None:
        super().__init__("Plugin config object is not supplied, skipping transform")


class ConfigMalformed(BridgeError):
    """The configuration payload does not parse into a TransformConfig."""

    stage = Stage.RESOLVE_CONFIG

    def __init__(self, detail: str) -> None:
        self.detail = detail
        super().__init__(
            f"Failed to deserialize plugin config object, skipping transform: {detail}"
        )


class ImplPathMissing(BridgeError):
    stage = Stage.RESOLVE_CONFIG

    def __init__(self) -> None:
        super().__init__("Transform impl path is not supplied, skipping transform")


class ImplReadError(BridgeError):
    """The transform source could not be read (missing, permissions, encoding)."""

    stage = Stage.RESOLVE_CONFIG

    def __init__(self, path: str, detail: str) -> None:
        self.path = path
        self.detail = detail
        super().__init__(
            f"Failed to read transform impl from path {path}, skipping transform: {detail}"
        )


class ASTSerializeError(BridgeError):
    stage = Stage.SERIALIZE_TREE

    def __init__(self, detail: str) -> None:
        self.detail = detail
        super().__init__(
            f"Failed to serialize AST into JSON, cannot perform transform: {detail}"
        )


class RuntimeBindError(BridgeError):
    stage = Stage.PREPARE_RUNTIME

    def __init__(self, detail: str) -> None:
        self.detail = detail
        super().__init__(
            f"Failed to set AST into script context, cannot perform transform: {detail}"
        )


class RuntimeEvalError(BridgeError):
    """The assembled program raised, or produced no value."""

    stage = Stage.ASSEMBLE_AND_RUN

    def __init__(self, detail: str) -> None:
        self.detail = detail
        super().__init__(f"Failed to run transform, cannot perform transform: {detail}")


class ASTDeserializeError(BridgeError):
    stage = Stage.DESERIALIZE_RESULT

    def __init__(self, detail: str) -> None:
        self.detail = detail
        super().__init__(
            f"Failed to deserialize transformed AST, cannot perform transform: {detail}"
        )
