"""Projected document containers.

A Document is the projection of one dataset level: an ordered
association of canonical tag keys to ValueEntry records. Replacing the
entry of a key already present is an explicit step of ``put()`` and is
reported back to the caller.
"""

from __future__ import annotations

from collections.abc import Iterator, Mapping
from dataclasses import dataclass
from typing import Any

from .serialization import SerializableMixin
from .types import OMITTED


@dataclass(frozen=True)
class ValueEntry(SerializableMixin):
    """One projected element: ``{"name"?, "vr", "Value"?}``.

    Attributes:
        vr: Value representation code of the source node
        value: Projected value, or OMITTED when suppressed
        name: Display name, None when not requested or not resolvable

    """

    vr: str
    value: Any = OMITTED
    name: str | None = None

    def _custom_serialization(self, data: dict[str, Any]) -> dict[str, Any]:
        ordered: dict[str, Any] = {}
        if data.get("name"):
            ordered["name"] = data["name"]
        ordered["vr"] = data["vr"]
        if "value" in data:
            ordered["Value"] = data["value"]
        return ordered


class Document(Mapping[str, ValueEntry]):
    """Ordered mapping of tag keys to entries for one dataset level.

    Keys keep the position of their first insertion. Iteration follows
    insertion order.
    """

    __slots__ = ("_entries",)

    def __init__(self) -> None:
        self._entries: dict[str, ValueEntry] = {}

    def put(self, key: str, entry: ValueEntry) -> ValueEntry | None:
        """Insert an entry, returning the entry it replaced, if any."""
        replaced = self._entries.get(key)
        self._entries[key] = entry
        return replaced

    def __getitem__(self, key: str) -> ValueEntry:
        return self._entries[key]

    def __iter__(self) -> Iterator[str]:
        return iter(self._entries)

    def __len__(self) -> int:
        return len(self._entries)

    def __repr__(self) -> str:
        return f"Document({list(self._entries)!r})"

    def to_dict(self) -> dict[str, Any]:
        """Plain nested dictionaries, ready for a JSON encoder."""
        return {key: entry.to_dict() for key, entry in self._entries.items()}
