"""Public projection operations.

Convenience functions around DocumentAssembler and JsonSerializer:

    >>> from dicom_projector import Node, dataset_to_text
    >>> dataset_to_text([Node.element("00100010", "PN", ["DOE^JOHN"])])
    '{"00100010":{"vr":"PN","Value":["DOE^JOHN"]}}'

Text operations raise SerializationError carrying the ``"undefined"``
placeholder when the document cannot be rendered.
"""

from __future__ import annotations

from collections.abc import Iterable

from .assembler import DocumentAssembler
from .constants import DEFAULT_MAX_DEPTH, DEFAULT_METADATA_TAGS
from .document import Document
from .names import NameResolver
from .nodes import Dataset
from .serializer import JsonSerializer
from .tag_filter import TagFilter
from .tags import Tag, TagLike


def default_metadata_tag_filter() -> tuple[Tag, ...]:
    """Return the built-in header-summary allow-list, in its fixed order."""
    return DEFAULT_METADATA_TAGS


def dataset_to_document(
    dataset: Dataset,
    omit_binary_values: bool = False,
    add_names: bool = False,
    *,
    name_resolver: NameResolver | None = None,
    max_depth: int = DEFAULT_MAX_DEPTH,
) -> Document:
    """Project every element of a dataset into a document."""
    assembler = DocumentAssembler(
        omit_binary_values=omit_binary_values,
        add_names=add_names,
        name_resolver=name_resolver,
        max_depth=max_depth,
    )
    return assembler.assemble(dataset)


def dataset_to_document_filtered(
    dataset: Dataset,
    omit_binary_values: bool,
    add_names: bool,
    tags: Iterable[TagLike] | None,
    *,
    name_resolver: NameResolver | None = None,
    max_depth: int = DEFAULT_MAX_DEPTH,
) -> Document:
    """Project only the top-level elements whose tags are listed.

    An empty or missing tag list keeps every element. Nested sequence
    content is never filtered.
    """
    assembler = DocumentAssembler(
        omit_binary_values=omit_binary_values,
        add_names=add_names,
        name_resolver=name_resolver,
        max_depth=max_depth,
    )
    return assembler.assemble(dataset, TagFilter(tags))


def dataset_to_text(
    dataset: Dataset,
    omit_binary_values: bool = False,
    add_names: bool = False,
    *,
    indent: int | None = None,
    name_resolver: NameResolver | None = None,
    max_depth: int = DEFAULT_MAX_DEPTH,
) -> str:
    """Project a dataset and render it as JSON text."""
    document = dataset_to_document(
        dataset,
        omit_binary_values,
        add_names,
        name_resolver=name_resolver,
        max_depth=max_depth,
    )
    return JsonSerializer(indent=indent).serialize(document)


def dataset_to_text_filtered(
    dataset: Dataset,
    omit_binary_values: bool,
    add_names: bool,
    tags: Iterable[TagLike] | None,
    *,
    indent: int | None = None,
    name_resolver: NameResolver | None = None,
    max_depth: int = DEFAULT_MAX_DEPTH,
) -> str:
    """Project the listed top-level elements and render them as JSON text."""
    document = dataset_to_document_filtered(
        dataset,
        omit_binary_values,
        add_names,
        tags,
        name_resolver=name_resolver,
        max_depth=max_depth,
    )
    return JsonSerializer(indent=indent).serialize(document)
