"""Sequence expansion.

Sequences hold repeated sub-records as item nodes, each wrapping one
nested dataset. Expansion hands every nested dataset back to the
document assembler, one level deeper, without a tag filter.
"""

from __future__ import annotations

from typing import Callable

from .document import Document
from .exceptions import StructuralError
from .nodes import Dataset, Node
from .types import NodeKind

#: Assembles one nested dataset at the given depth
NestedAssembler = Callable[[Dataset, int], Document]


def expand_item(node: Node, assemble_nested: NestedAssembler, depth: int) -> Document:
    """Project a single item node into the document of its dataset."""
    if node.kind is not NodeKind.ITEM:
        raise StructuralError(
            f"Expected an item node, got {node.kind.value} {node.tag}",
            error_code="INVALID_ITEM",
            context={"tag": node.key},
        )
    return assemble_nested(node.value, depth)


def expand_sequence(
    node: Node, assemble_nested: NestedAssembler, depth: int
) -> list[Document]:
    """Project every item of a sequence node, preserving item order."""
    return [expand_item(item, assemble_nested, depth) for item in node.value]
