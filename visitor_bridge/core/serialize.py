"""JSON file import/export helpers for programs and config payloads."""

from __future__ import annotations

import json
from pathlib import Path
from typing import Any

from visitor_bridge.core.codec import ASTCodec


def export_program(program: Any, path: str | Path, codec: ASTCodec | None = None) -> None:
    """Write a program as indented interchange JSON."""
    codec = codec or ASTCodec()
    path = Path(path)
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(program_to_json(program, codec))


def program_to_json(program: Any, codec: ASTCodec | None = None) -> str:
    codec = codec or ASTCodec()
    return json.dumps(json.loads(codec.serialize(program)), indent=2)


def load_program(path: str | Path, codec: ASTCodec | None = None) -> Any:
    """Read and validate a program from a JSON file."""
    codec = codec or ASTCodec()
    return codec.deserialize(Path(path).read_text(encoding="utf-8"))


def load_config_payload(path: str | Path) -> str:
    """Read a config payload file verbatim; validation happens in ConfigResolver."""
    return Path(path).read_text(encoding="utf-8")
