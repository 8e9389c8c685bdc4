"""Document assembly.

The DocumentAssembler walks the sibling nodes of a dataset in order,
drops the ones rejected by the tag filter, projects each remaining node
according to its kind and collects the entries into a Document.
Sequence and item nodes re-enter the assembler for their nested
datasets, one level deeper and unfiltered.

Assembly is all-or-nothing: the first structural problem aborts the
whole call and no partial document is returned.
"""

from __future__ import annotations

from typing import Any

from dicom_projector.utils.logger import get_logger

from .coercion import coerce_value
from .constants import DEFAULT_MAX_DEPTH, MIN_MAX_DEPTH
from .document import Document, ValueEntry
from .exceptions import RecursionDepthError, StructuralError
from .names import NameResolver, PydicomNameResolver, resolve_name
from .nodes import Dataset, Node
from .pixel_data import project_pixel_data
from .sequence import expand_item, expand_sequence
from .tag_filter import TagFilter, included
from .types import NodeKind

logger = get_logger(__name__)


class DocumentAssembler:
    """Projects datasets into documents.

    Attributes:
        omit_binary_values: Leave the Value of OB/OW elements out
        add_names: Annotate entries with the resolved tag name
        name_resolver: Tag name lookup used when add_names is set
        max_depth: Deepest nesting level accepted before failing

    """

    def __init__(
        self,
        omit_binary_values: bool = False,
        add_names: bool = False,
        name_resolver: NameResolver | None = None,
        max_depth: int = DEFAULT_MAX_DEPTH,
    ) -> None:
        if max_depth < MIN_MAX_DEPTH:
            raise ValueError(
                f"max_depth must be at least {MIN_MAX_DEPTH}, got {max_depth}"
            )

        self.omit_binary_values = omit_binary_values
        self.add_names = add_names
        self.name_resolver: NameResolver = name_resolver or PydicomNameResolver()
        self.max_depth = max_depth

    def assemble(self, dataset: Dataset, tag_filter: TagFilter | None = None) -> Document:
        """Project a top-level dataset.

        Args:
            dataset: Ordered sibling nodes
            tag_filter: Optional allow-list applied to this level only

        Returns:
            Newly built document for the dataset

        Raises:
            StructuralError: If the tree is malformed
            RecursionDepthError: If nesting exceeds max_depth

        """
        return self._assemble(dataset, tag_filter, depth=0)

    def _assemble(
        self, dataset: Dataset, tag_filter: TagFilter | None, depth: int
    ) -> Document:
        if depth > self.max_depth:
            raise RecursionDepthError(
                f"Sequence nesting exceeds maximum depth {self.max_depth}",
                error_code="MAX_DEPTH_EXCEEDED",
                context={"max_depth": self.max_depth},
            )

        document = Document()
        for position, node in enumerate(dataset):
            if not isinstance(node, Node):
                raise StructuralError(
                    f"Dataset entry {position} is not a node "
                    f"(got {type(node).__name__})",
                    error_code="INVALID_NODE",
                    context={"position": position, "depth": depth},
                )

            key = node.key
            if not included(node.tag, tag_filter):
                continue

            entry = ValueEntry(
                vr=node.vr,
                value=self._project(node, depth),
                name=self._name_for(node),
            )

            replaced = document.put(key, entry)
            if replaced is not None:
                logger.debug("duplicate_tag_replaced", tag=key, depth=depth)

        return document

    def _project(self, node: Node, depth: int) -> Any:
        if node.kind is NodeKind.ITEM:
            return expand_item(node, self._assemble_nested, depth + 1)
        if node.kind is NodeKind.PIXEL_DATA:
            return project_pixel_data(node)
        if node.kind is NodeKind.SEQUENCE:
            return expand_sequence(node, self._assemble_nested, depth + 1)
        return coerce_value(node, self.omit_binary_values)

    def _assemble_nested(self, dataset: Dataset, depth: int) -> Document:
        return self._assemble(dataset, None, depth)

    def _name_for(self, node: Node) -> str | None:
        if not self.add_names:
            return None
        return resolve_name(self.name_resolver, node.tag)
