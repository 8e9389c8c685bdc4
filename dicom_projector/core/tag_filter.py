"""Tag allow-list filtering.

A TagFilter restricts projection of the top-level dataset to a fixed
set of tags. An empty filter lets every tag through.
"""

from __future__ import annotations

from collections.abc import Iterable

from .tags import Tag, TagLike, to_tag


class TagFilter:
    """Immutable set of canonical tag keys.

    Tags may be given as Tag objects, tag strings in any accepted form
    (case-insensitive) or 32-bit integers; all are stored in canonical
    uppercase form.
    """

    __slots__ = ("_keys",)

    def __init__(self, tags: Iterable[TagLike] | None = None) -> None:
        self._keys: frozenset[str] = frozenset(
            to_tag(tag).key for tag in (tags or ())
        )

    @property
    def keys(self) -> frozenset[str]:
        return self._keys

    def includes(self, key: str) -> bool:
        """Check a canonical tag key against the filter."""
        return not self._keys or key in self._keys

    def __len__(self) -> int:
        return len(self._keys)

    def __bool__(self) -> bool:
        return bool(self._keys)

    def __repr__(self) -> str:
        return f"TagFilter({sorted(self._keys)!r})"


def included(tag: Tag, tag_filter: TagFilter | None) -> bool:
    """Return True if the tag passes the filter (None passes everything)."""
    if tag_filter is None:
        return True
    return tag_filter.includes(tag.key)
