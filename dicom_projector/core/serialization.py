"""Serialization utilities for projected documents.

Provides a mixin that turns dataclasses into plain, JSON-ready
dictionaries, recursing into nested documents without copying the
metadata tree.
"""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import fields, is_dataclass
from typing import Any

from .types import OMITTED


def to_plain(value: Any) -> Any:
    """Recursively convert a value to JSON-compatible builtins.

    Objects exposing ``to_dict()`` (entries, documents) are expanded,
    mappings become dicts, tuples become lists. Omitted markers are
    dropped from containers. Bytes are left for the serializer.
    """
    to_dict = getattr(value, "to_dict", None)
    if callable(to_dict):
        return to_dict()

    if isinstance(value, Mapping):
        return {k: to_plain(v) for k, v in value.items() if v is not OMITTED}

    if isinstance(value, (list, tuple)):
        return [to_plain(item) for item in value if item is not OMITTED]

    return value


class SerializableMixin:
    """Mixin for dataclasses with JSON serialization support.

    to_dict() walks the dataclass fields one level at a time (no
    ``asdict`` deep copy), skips fields set to ``OMITTED`` and then
    passes the result through the ``_custom_serialization`` hook so
    subclasses can rename or reorder keys.

    Usage:
        @dataclass
        class Entry(SerializableMixin):
            vr: str
            value: Any = OMITTED

            def _custom_serialization(self, data):
                if "value" in data:
                    data["Value"] = data.pop("value")
                return data
    """

    def to_dict(self) -> dict[str, Any]:
        """Convert dataclass to JSON-serializable dictionary.

        Returns:
            Dictionary of the non-omitted fields, nested values converted
            with to_plain()

        """
        if not is_dataclass(self):
            raise TypeError(
                f"SerializableMixin can only be used with dataclasses, "
                f"got {type(self).__name__}"
            )

        serialized: dict[str, Any] = {}
        for f in fields(self):
            value = getattr(self, f.name)
            if value is OMITTED:
                continue
            serialized[f.name] = to_plain(value)

        custom_method = getattr(self, "_custom_serialization", None)
        if custom_method is not None:
            serialized = custom_method(serialized)

        return serialized
