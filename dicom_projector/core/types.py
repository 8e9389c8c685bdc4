"""Shared type definitions for the projector.

Kept free of other package imports so every module can depend on it
without circular imports.
"""

from __future__ import annotations

from enum import Enum
from typing import Final


class NodeKind(Enum):
    """Discriminant for the value carried by a metadata node."""

    ELEMENT = "element"  # Scalar leaf values
    SEQUENCE = "sequence"  # Item nodes, one per nested dataset
    ITEM = "item"  # Child nodes forming one nested dataset
    PIXEL_DATA = "pixel_data"  # Frame descriptors for the bulk payload


class NameStyle(str, Enum):
    """How tag names are rendered when name annotation is requested."""

    KEYWORD = "keyword"  # PatientName
    DESCRIPTION = "description"  # Patient's Name


class _Omitted:
    """Marker for an entry value that is left out of the document."""

    _instance: _Omitted | None = None

    def __new__(cls) -> _Omitted:
        if cls._instance is None:
            cls._instance = super().__new__(cls)
        return cls._instance

    def __repr__(self) -> str:
        return "OMITTED"

    def __bool__(self) -> bool:
        return False

    def __copy__(self) -> _Omitted:
        return self

    def __deepcopy__(self, memo: dict) -> _Omitted:
        return self


#: Value of an entry whose ``Value`` field is suppressed
OMITTED: Final = _Omitted()
