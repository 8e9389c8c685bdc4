"""Decoder adapters producing node trees.

Available adapters:
    - pydicom_adapter: pydicom Dataset / DICOM file to nodes

Usage:
    from dicom_projector.adapters import read_nodes

    nodes = read_nodes("image.dcm")
"""

from __future__ import annotations

from .pydicom_adapter import nodes_from_pydicom, read_nodes

__all__ = ["nodes_from_pydicom", "read_nodes"]
