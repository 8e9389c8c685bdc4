"""pydicom decoder adapter.

Converts pydicom datasets into the projector's node tree:

- file meta elements come first, then the body, each in tag order
- SQ elements become sequence nodes of item nodes, recursively
- IS and DS values are taken from the raw file bytes when available so
  the original encoding reaches the coercer untouched
- binary VRs keep their bytes, AT values become tag keys, text VRs
  become str and binary numeric VRs keep their numbers
- PixelData becomes frame descriptors (offset and size of each frame in
  the file); the pixels themselves are not decoded
"""

from __future__ import annotations

import math
import struct
from collections.abc import Iterable
from enum import Enum
from pathlib import Path
from typing import Any

import pydicom
from pydicom.datadict import dictionary_VR
from pydicom.dataelem import DataElement, RawDataElement
from pydicom.dataset import Dataset
from pydicom.errors import InvalidDicomError
from pydicom.multival import MultiValue

from dicom_projector.core.constants import (
    BINARY_VRS,
    VR_DECIMAL_STRING,
    VR_INTEGER_STRING,
    VR_SEQUENCE,
)
from dicom_projector.core.exceptions import DecodingError
from dicom_projector.core.nodes import FrameDescriptor, Node, PixelDataInfo, Scalar
from dicom_projector.core.tags import PIXEL_DATA_TAG, Tag
from dicom_projector.utils.logger import get_logger

logger = get_logger(__name__)

_NUMERIC_STRING_VRS = {VR_INTEGER_STRING, VR_DECIMAL_STRING}
_ITEM = (0xFFFE, 0xE000)
_SEQUENCE_DELIMITER = (0xFFFE, 0xE0DD)
_ITEM_HEADER = struct.Struct("<HHL")


def read_nodes(
    file_path: str | Path, include_file_meta: bool = True
) -> tuple[Node, ...]:
    """Read a DICOM file and convert it into nodes.

    Args:
        file_path: Path to the DICOM file
        include_file_meta: Prepend the group 0002 file meta elements

    Returns:
        Top-level dataset of the file

    Raises:
        DecodingError: If the file cannot be read or converted

    """
    path = Path(file_path)
    try:
        dataset = pydicom.dcmread(str(path), force=True)
    except (InvalidDicomError, OSError, ValueError, EOFError, struct.error) as e:
        raise DecodingError(
            f"Failed to read DICOM file: {e}",
            error_code="READ_FAILED",
            context={"file_path": str(path)},
        ) from e

    nodes = nodes_from_pydicom(dataset, include_file_meta=include_file_meta)
    logger.debug("dicom_file_decoded", file_path=str(path), elements=len(nodes))
    return nodes


def nodes_from_pydicom(
    dataset: Dataset, include_file_meta: bool = True
) -> tuple[Node, ...]:
    """Convert a pydicom Dataset into a tuple of nodes.

    Raises:
        DecodingError: If an element value cannot be converted

    """
    nodes: list[Node] = []
    file_meta = getattr(dataset, "file_meta", None)
    if include_file_meta and file_meta is not None:
        nodes.extend(_convert_dataset(file_meta))
    nodes.extend(_convert_dataset(dataset))
    return tuple(nodes)


def _convert_dataset(dataset: Dataset, base_offset: int = 0) -> list[Node]:
    """Convert one dataset level.

    ``base_offset`` is the file position that value offsets recorded by
    pydicom for this level are relative to: items of a defined-length
    sequence are parsed from a copy of the sequence value.
    """
    return [
        _convert_element(dataset, tag, base_offset) for tag in sorted(dataset.keys())
    ]


def _convert_element(dataset: Dataset, pydicom_tag: int, base_offset: int) -> Node:
    tag = Tag.from_int(int(pydicom_tag))
    raw = dataset.get_item(pydicom_tag)

    try:
        if isinstance(raw, RawDataElement):
            vr = _raw_vr(raw, tag)
            if vr in _NUMERIC_STRING_VRS:
                return Node.element(tag, vr, _split_raw_strings(raw.value))

        elem = dataset[pydicom_tag]
        vr = _vr_code(elem)

        if tag == PIXEL_DATA_TAG:
            return Node(tag, vr, _pixel_data_info(dataset, elem, raw, base_offset))

        if vr == VR_SEQUENCE:
            item_base = base_offset
            if isinstance(raw, RawDataElement):
                item_base += raw.value_tell or 0
            items = [
                Node.item(_convert_dataset(item, item_base))
                for item in (elem.value or ())
            ]
            return Node.sequence(tag, items)

        return Node.element(tag, vr, _convert_values(vr, elem.value))
    except (ValueError, TypeError, struct.error) as e:
        raise DecodingError(
            f"Failed to convert element {tag}: {e}",
            error_code="CONVERSION_FAILED",
            context={"tag": tag.key},
        ) from e


def _vr_code(elem: DataElement) -> str:
    vr = elem.VR
    if isinstance(vr, Enum):
        return str(vr.value)
    return str(vr)


def _raw_vr(raw: RawDataElement, tag: Tag) -> str:
    if raw.VR:
        return str(getattr(raw.VR, "value", raw.VR))
    try:
        return dictionary_VR(int(tag))
    except KeyError:
        return "UN"


def _split_raw_strings(value: bytes | None) -> list[str]:
    if not value:
        return []
    text = value.decode("ascii", errors="replace")
    return [part.strip(" \x00") for part in text.split("\\")]


def _convert_values(vr: str, value: Any) -> list[Scalar]:
    if value is None:
        return []

    if vr in BINARY_VRS:
        if isinstance(value, (bytes, bytearray)):
            return [bytes(value)] if value else []
        return [bytes(v) for v in _iter_values(value)]

    return [_convert_scalar(vr, v) for v in _iter_values(value)]


def _iter_values(value: Any) -> Iterable[Any]:
    if isinstance(value, (MultiValue, list, tuple)):
        return value
    if value == "":
        return ()
    return (value,)


def _convert_scalar(vr: str, value: Any) -> Scalar:
    if vr == "AT":
        return Tag.from_int(int(value)).key
    if vr in _NUMERIC_STRING_VRS:
        return str(value)
    if isinstance(value, (bytes, bytearray)):
        return bytes(value)
    if isinstance(value, (int, float)) and not isinstance(value, bool):
        return value
    return str(value)


def _pixel_data_info(
    dataset: Dataset,
    elem: DataElement,
    raw: DataElement | RawDataElement,
    base_offset: int = 0,
) -> PixelDataInfo:
    tell = getattr(raw, "value_tell", None)
    if tell is None:
        tell = getattr(elem, "file_tell", None) or 0
    base = base_offset + tell

    data = elem.value or b""
    if getattr(elem, "is_undefined_length", False) or data[:4] == b"\xfe\xff\x00\xe0":
        return PixelDataInfo(tuple(_fragment_frames(data, base)))

    return PixelDataInfo(tuple(_native_frames(dataset, len(data), base)))


def _native_frames(dataset: Dataset, length: int, base: int) -> list[FrameDescriptor]:
    """Frames laid out back to back from the start of the pixel data value."""
    rows = int(getattr(dataset, "Rows", 0) or 0)
    columns = int(getattr(dataset, "Columns", 0) or 0)
    samples = int(getattr(dataset, "SamplesPerPixel", 1) or 1)
    bits = int(getattr(dataset, "BitsAllocated", 8) or 8)
    try:
        count = int(getattr(dataset, "NumberOfFrames", 1) or 1)
    except (ValueError, TypeError):
        count = 1

    pixels = rows * columns * samples
    if bits == 1:
        frame_size = math.ceil(pixels / 8)
    else:
        frame_size = pixels * math.ceil(bits / 8)

    if frame_size <= 0 or count <= 0:
        return [FrameDescriptor(base, length)]
    return [FrameDescriptor(base + i * frame_size, frame_size) for i in range(count)]


def _fragment_frames(data: bytes, base: int) -> list[FrameDescriptor]:
    """One descriptor per fragment, skipping the Basic Offset Table item."""
    frames: list[FrameDescriptor] = []
    position = 0
    first_item = True
    while position + _ITEM_HEADER.size <= len(data):
        group, element, length = _ITEM_HEADER.unpack_from(data, position)
        if (group, element) == _SEQUENCE_DELIMITER:
            break
        if (group, element) != _ITEM:
            raise ValueError(
                f"unexpected tag ({group:04X},{element:04X}) in encapsulated pixel data"
            )

        payload = position + _ITEM_HEADER.size
        if not first_item:
            frames.append(FrameDescriptor(base + payload, length))
        first_item = False
        position = payload + length
    return frames
