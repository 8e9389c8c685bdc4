"""Pixel data projection.

The bulk pixel payload is never decoded; only the location and size of
each frame, as computed by the decoder, is reported.
"""

from __future__ import annotations

from typing import Any

from .exceptions import StructuralError
from .nodes import Node, PixelDataInfo


def project_pixel_data(node: Node) -> dict[str, Any]:
    """Project the frame descriptors of the pixel data node.

    Args:
        node: Pixel data node

    Returns:
        ``{"frames": [{"fileOffset": int, "sizeInBytes": int}, ...]}``

    Raises:
        StructuralError: If the node does not carry a PixelDataInfo

    """
    info = node.value
    if not isinstance(info, PixelDataInfo):
        raise StructuralError(
            f"Pixel data {node.tag} has no frame descriptors "
            f"(got {type(info).__name__})",
            error_code="INVALID_PIXEL_DATA",
            context={"tag": node.key},
        )

    return {
        "frames": [
            {"fileOffset": int(frame.file_offset), "sizeInBytes": int(frame.size_in_bytes)}
            for frame in info.frames
        ]
    }
