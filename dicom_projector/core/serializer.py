"""JSON rendering of projected documents."""

from __future__ import annotations

import base64
import json
from typing import Any

from .exceptions import SerializationError
from .serialization import to_plain


def _encode_default(value: Any) -> Any:
    if isinstance(value, (bytes, bytearray, memoryview)):
        return base64.b64encode(bytes(value)).decode("ascii")
    raise TypeError(f"Object of type {type(value).__name__} is not JSON serializable")


class JsonSerializer:
    """Render documents as JSON text.

    Compact separators are used unless an indent is given. Binary values
    are written as base64 strings. NaN and infinities are rejected.
    """

    def __init__(self, indent: int | None = None) -> None:
        self.indent = indent

    def serialize(self, document: Any) -> str:
        """Render a document (or any plain value) as JSON.

        Raises:
            SerializationError: If the document holds values JSON cannot encode

        """
        separators = (",", ":") if self.indent is None else (",", ": ")
        try:
            return json.dumps(
                to_plain(document),
                indent=self.indent,
                separators=separators,
                allow_nan=False,
                default=_encode_default,
            )
        except (TypeError, ValueError) as e:
            raise SerializationError(
                f"Failed to serialize document: {e}",
                error_code="SERIALIZATION_FAILED",
            ) from e
