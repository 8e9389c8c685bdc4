"""
DICOM Projector - DICOM metadata as JSON interchange documents.

This package projects a decoded DICOM metadata tree into an ordered,
JSON-ready document keyed by tag, with numeric string parsing, sequence
expansion, pixel data frame descriptors and tag filtering.
"""

__version__ = "1.0.0"
__license__ = "MIT"

from dicom_projector.core.assembler import DocumentAssembler
from dicom_projector.core.document import Document, ValueEntry
from dicom_projector.core.exceptions import (
    DecodingError,
    ProjectionError,
    RecursionDepthError,
    SerializationError,
    StructuralError,
    TagFormatError,
)
from dicom_projector.core.nodes import FrameDescriptor, Node, PixelDataInfo
from dicom_projector.core.projection import (
    dataset_to_document,
    dataset_to_document_filtered,
    dataset_to_text,
    dataset_to_text_filtered,
    default_metadata_tag_filter,
)
from dicom_projector.core.tag_filter import TagFilter
from dicom_projector.core.tags import Tag

__all__ = [
    "__version__",
    "__license__",
    "DecodingError",
    "Document",
    "DocumentAssembler",
    "FrameDescriptor",
    "Node",
    "PixelDataInfo",
    "ProjectionError",
    "RecursionDepthError",
    "SerializationError",
    "StructuralError",
    "Tag",
    "TagFilter",
    "TagFormatError",
    "ValueEntry",
    "dataset_to_document",
    "dataset_to_document_filtered",
    "dataset_to_text",
    "dataset_to_text_filtered",
    "default_metadata_tag_filter",
]
