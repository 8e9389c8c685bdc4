"""Tag display-name resolution.

Any callable taking a Tag and returning a name or None can annotate
projected entries. The default resolver reads pydicom's bundled data
dictionary.
"""

from __future__ import annotations

from typing import Protocol

from pydicom.datadict import dictionary_description, keyword_for_tag

from dicom_projector.utils.logger import get_logger

from .tags import Tag
from .types import NameStyle

logger = get_logger(__name__)


class NameResolver(Protocol):
    """Maps a tag to its display name, or None when it is unknown."""

    def __call__(self, tag: Tag) -> str | None: ...


class PydicomNameResolver:
    """Resolve names from the DICOM data dictionary shipped with pydicom.

    Private tags and tags missing from the dictionary resolve to None.
    """

    def __init__(self, style: NameStyle | str = NameStyle.KEYWORD) -> None:
        self.style = NameStyle(style)

    def __call__(self, tag: Tag) -> str | None:
        if self.style is NameStyle.KEYWORD:
            name = keyword_for_tag(int(tag))
        else:
            try:
                name = dictionary_description(int(tag))
            except KeyError:
                name = ""

        if not name:
            logger.debug("tag_name_not_found", tag=tag.key, style=self.style.value)
            return None
        return name

    def __repr__(self) -> str:
        return f"PydicomNameResolver(style={self.style.value!r})"


def resolve_name(resolver: NameResolver, tag: Tag) -> str | None:
    """Call a resolver, treating an empty result or a lookup error as a miss."""
    try:
        name = resolver(tag)
    except LookupError:
        logger.debug("tag_name_lookup_failed", tag=tag.key)
        return None
    return name or None
