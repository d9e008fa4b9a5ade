"""Transform configuration: payload parsing and transform source loading."""

from __future__ import annotations

import keyword
import logging
from pathlib import Path
from typing import Callable

from pydantic import BaseModel, ValidationError, field_validator
from pydantic.alias_generators import to_camel

from visitor_bridge.core.errors import (
    ConfigMalformed,
    ConfigMissing,
    ImplPathMissing,
    ImplReadError,
)

logger = logging.getLogger(__name__)

DEFAULT_VISITOR_CLASS_NAME = "TransformVisitor"


class TransformConfig(BaseModel):
    """Host-supplied configuration. All keys optional; unknown keys ignored."""

    model_config = {
        "frozen": True,
        "alias_generator": to_camel,
        "populate_by_name": True,
    }

    transform_impl_path: str | None = None
    visitor_class_name: str | None = None

    @field_validator("visitor_class_name")
    @classmethod
    def _must_be_identifier(cls, v: str | None) -> str | None:
        # The name is spliced into the assembled program text.
        if v is not None and (not v.isidentifier() or keyword.iskeyword(v)):
            raise ValueError(f"visitorClassName {v!r} is not a valid class identifier")
        return v


class TransformContext(BaseModel):
    """Everything one invocation needs to assemble and run the transform."""

    model_config = {"frozen": True}

    transform_impl_source: str
    visitor_class_name: str = DEFAULT_VISITOR_CLASS_NAME
    transform_impl_path: str = ""


def read_utf8(path: Path) -> str:
    return path.read_text(encoding="utf-8")


class ConfigResolver:
    """Builds a TransformContext from a raw configuration payload.

    ``root`` is the directory transform paths are resolved against; it
    defaults to the working directory at construction time. ``reader``
    is the file-reading capability and defaults to UTF-8 ``read_text``.
    """

    def __init__(
        self,
        root: str | Path | None = None,
        reader: Callable[[Path], str] | None = None,
    ) -> None:
        self.root = Path(root) if root is not None else Path.cwd()
        self._reader = reader or read_utf8

    def parse(self, payload: str | None) -> TransformConfig:
        if payload is None:
            raise ConfigMissing()
        try:
            return TransformConfig.model_validate_json(payload)
        except ValidationError as e:
            raise ConfigMalformed(str(e)) from e

    def resolve(self, payload: str | None) -> TransformContext:
        config = self.parse(payload)
        if config.transform_impl_path is None:
            raise ImplPathMissing()

        path = self.root / config.transform_impl_path
        try:
            source = self._reader(path)
        except Exception as e:
            # Injected readers may fail with anything; it is still a read failure.
            raise ImplReadError(str(path), f"{type(e).__name__}: {e}") from e

        visitor_class_name = config.visitor_class_name or DEFAULT_VISITOR_CLASS_NAME
        logger.debug("Loaded transform impl %s (visitor %s)", path, visitor_class_name)
        return TransformContext(
            transform_impl_source=source,
            visitor_class_name=visitor_class_name,
            transform_impl_path=str(path),
        )
