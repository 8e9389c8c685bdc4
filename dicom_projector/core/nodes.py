"""Metadata tree model.

A decoded DICOM object is a dataset: an ordered sequence of sibling
nodes. Each node carries a tag, its value representation and a value
whose shape depends on the node kind:

- ELEMENT: tuple of scalar leaf values (str, int, float or bytes)
- SEQUENCE: tuple of ITEM nodes, one per repeated sub-record
- ITEM: tuple of child nodes making up one nested dataset
- PIXEL_DATA: a single PixelDataInfo describing the frames

Shapes are checked when a node is built, so projection can dispatch on
``Node.kind`` instead of inspecting values.
"""

from __future__ import annotations

from collections.abc import Iterable, Sequence
from dataclasses import dataclass, field
from typing import Any, Union

from .constants import VR_SEQUENCE
from .exceptions import StructuralError
from .tags import ITEM_TAG, PIXEL_DATA_TAG, Tag, TagLike, to_tag
from .types import NodeKind

Scalar = Union[str, int, float, bytes]


@dataclass(frozen=True)
class FrameDescriptor:
    """Location of one frame of pixel data inside the source file."""

    file_offset: int
    size_in_bytes: int


@dataclass(frozen=True)
class PixelDataInfo:
    """Frame layout of the bulk pixel payload, in file order."""

    frames: tuple[FrameDescriptor, ...] = ()

    def __post_init__(self) -> None:
        frames = tuple(self.frames)
        for frame in frames:
            if not isinstance(frame, FrameDescriptor):
                raise StructuralError(
                    f"Pixel data frame must be a FrameDescriptor, "
                    f"got {type(frame).__name__}",
                    error_code="INVALID_FRAME",
                )
        object.__setattr__(self, "frames", frames)


@dataclass(frozen=True)
class Node:
    """One element of the metadata tree.

    Attributes:
        tag: Element tag
        vr: Declared value representation code
        value: Leaf values, item nodes, child nodes or PixelDataInfo
        kind: Discriminant derived from tag, VR and value

    """

    tag: Tag
    vr: str
    value: Any = ()
    kind: NodeKind = field(init=False, compare=False)

    def __post_init__(self) -> None:
        if not isinstance(self.tag, Tag):
            object.__setattr__(self, "tag", to_tag(self.tag))

        kind = _classify(self.tag, self.vr, self.value)
        value = self.value
        if kind is not NodeKind.PIXEL_DATA:
            value = _as_tuple(value, self.tag)

        if kind is NodeKind.SEQUENCE:
            for item in value:
                if not isinstance(item, Node) or item.kind is not NodeKind.ITEM:
                    raise StructuralError(
                        f"Sequence {self.tag} must contain item nodes only",
                        error_code="INVALID_SEQUENCE",
                        context={"tag": self.tag.key},
                    )
        elif kind is NodeKind.ITEM:
            for child in value:
                if not isinstance(child, Node):
                    raise StructuralError(
                        f"Item {self.tag} must contain nodes only, "
                        f"got {type(child).__name__}",
                        error_code="INVALID_ITEM",
                        context={"tag": self.tag.key},
                    )
        elif kind is NodeKind.ELEMENT:
            for leaf in value:
                if isinstance(leaf, Node):
                    raise StructuralError(
                        f"Element {self.tag} with VR {self.vr!r} cannot hold nodes",
                        error_code="INVALID_ELEMENT",
                        context={"tag": self.tag.key, "vr": self.vr},
                    )

        object.__setattr__(self, "value", value)
        object.__setattr__(self, "kind", kind)

    @property
    def key(self) -> str:
        return self.tag.key

    @classmethod
    def element(cls, tag: TagLike, vr: str, values: Iterable[Scalar] = ()) -> Node:
        """Build a leaf node holding scalar values."""
        return cls(to_tag(tag), vr, tuple(values))

    @classmethod
    def sequence(cls, tag: TagLike, items: Iterable[Node] = ()) -> Node:
        """Build an SQ node from item nodes."""
        return cls(to_tag(tag), VR_SEQUENCE, tuple(items))

    @classmethod
    def item(cls, children: Iterable[Node] = ()) -> Node:
        """Build an item node wrapping one nested dataset."""
        return cls(ITEM_TAG, "", tuple(children))

    @classmethod
    def pixel_data(
        cls,
        frames: Iterable[FrameDescriptor | tuple[int, int]],
        vr: str = "OW",
    ) -> Node:
        """Build the pixel data node from descriptors or ``(offset, size)`` pairs."""
        descriptors = tuple(
            frame if isinstance(frame, FrameDescriptor) else FrameDescriptor(*frame)
            for frame in frames
        )
        return cls(PIXEL_DATA_TAG, vr, PixelDataInfo(descriptors))


Dataset = Sequence[Node]


def _classify(tag: Tag, vr: str, value: Any) -> NodeKind:
    if tag == ITEM_TAG:
        return NodeKind.ITEM
    if tag == PIXEL_DATA_TAG:
        if not isinstance(value, PixelDataInfo):
            raise StructuralError(
                f"Pixel data value must be PixelDataInfo, got {type(value).__name__}",
                error_code="INVALID_PIXEL_DATA",
                context={"tag": tag.key},
            )
        return NodeKind.PIXEL_DATA
    if vr == VR_SEQUENCE:
        return NodeKind.SEQUENCE
    return NodeKind.ELEMENT


def _as_tuple(value: Any, tag: Tag) -> tuple:
    if value is None:
        return ()
    if isinstance(value, (str, bytes, bytearray)) or not isinstance(value, Iterable):
        raise StructuralError(
            f"Value of {tag} must be a sequence, got {type(value).__name__}",
            error_code="INVALID_VALUE",
            context={"tag": tag.key},
        )
    return tuple(value)
