"""ASTCodec: host program tree <-> JSON interchange text.

Both ends of the bridge use the same codec, so for every program the
host schema can represent, ``deserialize(serialize(p)) == p``.
"""

from __future__ import annotations

from typing import Any

from pydantic import TypeAdapter, ValidationError
from pydantic_core import PydanticSerializationError

from visitor_bridge.core.ecma_ast import Program
from visitor_bridge.core.errors import ASTDeserializeError, ASTSerializeError


class ASTCodec:
    """Serialize and deserialize programs of one host tree type."""

    def __init__(self, program_type: Any = Program) -> None:
        self.program_type = program_type
        self._adapter: TypeAdapter[Any] = TypeAdapter(program_type)

    def serialize(self, tree: Any) -> str:
        """Encode *tree* as interchange text (camelCase keys, compact)."""
        try:
            data = self._adapter.dump_json(tree, by_alias=True, warnings="error")
        except (PydanticSerializationError, ValueError, TypeError) as e:
            raise ASTSerializeError(str(e)) from e
        return data.decode("utf-8")

    def deserialize(self, text: str) -> Any:
        """Decode interchange text, validating it against the host schema."""
        try:
            return self._adapter.validate_json(text)
        except ValidationError as e:
            raise ASTDeserializeError(_summarize(e)) from e

    def round_trip(self, tree: Any) -> Any:
        return self.deserialize(self.serialize(tree))


def _summarize(error: ValidationError, limit: int = 5) -> str:
    """Compact one-line summary of the first few validation errors."""
    parts = []
    for item in error.errors()[:limit]:
        loc = ".".join(str(p) for p in item["loc"]) or "<root>"
        parts.append(f"{loc}: {item['msg']}")
    extra = error.error_count() - limit
    if extra > 0:
        parts.append(f"... and {extra} more")
    return "; ".join(parts)
