"""DICOM tag identifiers.

A tag is the ``(group, element)`` pair naming one metadata field. Its
canonical text form is eight uppercase hex digits, group first
(``"0008103E"``); that form is the key used in projected documents and
in tag filters.
"""

from __future__ import annotations

import re
from dataclasses import dataclass
from typing import Union

from .exceptions import TagFormatError

_HEX_KEY = re.compile(r"^[0-9A-Fa-f]{8}$")
_PAIR = re.compile(r"^\(?\s*([0-9A-Fa-f]{4})\s*,\s*([0-9A-Fa-f]{4})\s*\)?$")


@dataclass(frozen=True, order=True)
class Tag:
    """Immutable ``(group, element)`` identifier.

    Attributes:
        group: 16-bit group number
        element: 16-bit element number

    """

    group: int
    element: int

    def __post_init__(self) -> None:
        for part, value in (("group", self.group), ("element", self.element)):
            if isinstance(value, bool) or not isinstance(value, int):
                raise TagFormatError(
                    f"Tag {part} must be an integer, got {type(value).__name__}",
                    error_code="INVALID_TAG",
                )
            if not 0 <= value <= 0xFFFF:
                raise TagFormatError(
                    f"Tag {part} {value:#x} is outside 0x0000-0xFFFF",
                    error_code="INVALID_TAG",
                    context={part: value},
                )

    @property
    def key(self) -> str:
        """Canonical 8-digit uppercase hex form, e.g. ``"00100010"``."""
        return f"{self.group:04X}{self.element:04X}"

    def __int__(self) -> int:
        return (self.group << 16) | self.element

    def __str__(self) -> str:
        return f"({self.group:04X},{self.element:04X})"

    @classmethod
    def from_int(cls, value: int) -> Tag:
        """Build a tag from its 32-bit combined value (pydicom's form)."""
        if not 0 <= value <= 0xFFFFFFFF:
            raise TagFormatError(
                f"Tag value {value:#x} is outside 32 bits",
                error_code="INVALID_TAG",
                context={"value": value},
            )
        return cls(value >> 16, value & 0xFFFF)

    @classmethod
    def from_string(cls, text: str) -> Tag:
        """Parse ``"0008103E"``, ``"0008103e"``, ``"(0008,103E)"`` or ``"0008,103E"``.

        Raises:
            TagFormatError: If the text is not a recognised tag form

        """
        stripped = text.strip()
        if _HEX_KEY.match(stripped):
            return cls(int(stripped[:4], 16), int(stripped[4:], 16))

        match = _PAIR.match(stripped)
        if match:
            return cls(int(match.group(1), 16), int(match.group(2), 16))

        raise TagFormatError(
            f"Cannot parse tag from {text!r}",
            error_code="INVALID_TAG",
            context={"text": text},
        )


TagLike = Union[Tag, str, int]


def to_tag(value: TagLike) -> Tag:
    """Coerce a tag, tag string or 32-bit tag value into a Tag."""
    if isinstance(value, Tag):
        return value
    if isinstance(value, str):
        return Tag.from_string(value)
    if isinstance(value, int) and not isinstance(value, bool):
        return Tag.from_int(value)
    raise TagFormatError(
        f"Unsupported tag type: {type(value).__name__}",
        error_code="INVALID_TAG",
    )


ITEM_TAG = Tag(0xFFFE, 0xE000)
PIXEL_DATA_TAG = Tag(0x7FE0, 0x0010)
