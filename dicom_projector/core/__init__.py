"""Core projection functionality.

Tag and node model, value coercion, sequence expansion, pixel data
projection, tag filtering, document assembly and JSON rendering.
"""

from .assembler import DocumentAssembler
from .coercion import coerce_value, parse_float_strings, parse_int_strings
from .config import ProjectionSettings, get_settings
from .document import Document, ValueEntry
from .exceptions import (
    DecodingError,
    ProjectionError,
    RecursionDepthError,
    SerializationError,
    StructuralError,
    TagFormatError,
)
from .names import NameResolver, PydicomNameResolver
from .nodes import FrameDescriptor, Node, PixelDataInfo
from .pixel_data import project_pixel_data
from .projection import (
    dataset_to_document,
    dataset_to_document_filtered,
    dataset_to_text,
    dataset_to_text_filtered,
    default_metadata_tag_filter,
)
from .sequence import expand_item, expand_sequence
from .serializer import JsonSerializer
from .tag_filter import TagFilter, included
from .tags import ITEM_TAG, PIXEL_DATA_TAG, Tag
from .types import OMITTED, NameStyle, NodeKind

__all__ = [
    "DecodingError",
    "Document",
    "DocumentAssembler",
    "FrameDescriptor",
    "ITEM_TAG",
    "JsonSerializer",
    "NameResolver",
    "NameStyle",
    "Node",
    "NodeKind",
    "OMITTED",
    "PIXEL_DATA_TAG",
    "PixelDataInfo",
    "ProjectionError",
    "ProjectionSettings",
    "PydicomNameResolver",
    "RecursionDepthError",
    "SerializationError",
    "StructuralError",
    "Tag",
    "TagFilter",
    "TagFormatError",
    "ValueEntry",
    "coerce_value",
    "dataset_to_document",
    "dataset_to_document_filtered",
    "dataset_to_text",
    "dataset_to_text_filtered",
    "default_metadata_tag_filter",
    "expand_item",
    "expand_sequence",
    "get_settings",
    "included",
    "parse_float_strings",
    "parse_int_strings",
    "project_pixel_data",
]
