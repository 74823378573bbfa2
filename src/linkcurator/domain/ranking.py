"""Sorting, filtering, and folder grouping over registry entries.

Pure functions, never mutating their input. Consumers compose them as
filter -> sort -> group so that ordering is computed over the filtered
set rather than the whole vault.
"""

from __future__ import annotations

import functools
from enum import StrEnum
from typing import TYPE_CHECKING

from pyuca import Collator

if TYPE_CHECKING:
    from collections.abc import Sequence

    from linkcurator.domain.unresolved import UnresolvedLinkInfo

# Group key for entries without any recorded source file. Distinct from
# "" (the vault root) so a folder can never collide with it.
NO_SOURCE_FOLDER: None = None

FolderGroups = dict[str | None, list["UnresolvedLinkInfo"]]


class SortPolicy(StrEnum):
    """Ordering applied to registry entries."""

    FREQUENCY = "frequency"
    ALPHABETICAL = "alphabetical"

    @classmethod
    def parse(cls, value: str | SortPolicy | None) -> SortPolicy:
        """Coerce *value* to a policy. Unknown or missing values mean FREQUENCY.

        Examples:
            >>> SortPolicy.parse("alphabetical")
            <SortPolicy.ALPHABETICAL: 'alphabetical'>
            >>> SortPolicy.parse("recency")
            <SortPolicy.FREQUENCY: 'frequency'>
        """
        if value is None:
            return cls.FREQUENCY
        try:
            return cls(str(value).strip().lower())
        except ValueError:
            return cls.FREQUENCY


@functools.cache
def _collator() -> Collator:
    """Unicode Collation Algorithm (DUCET) collator, loaded once."""
    return Collator()


def collation_key(text: str) -> tuple[int, ...]:
    """Locale-aware sort key for *text*."""
    return _collator().sort_key(text)


def sort_links(
    entries: Sequence[UnresolvedLinkInfo],
    policy: str | SortPolicy | None = SortPolicy.FREQUENCY,
) -> list[UnresolvedLinkInfo]:
    """Return a new list of *entries* ordered by *policy*.

    Both policies are stable: entries that compare equal keep their input
    order, so sorting an already-sorted list is a no-op.
    """
    resolved = SortPolicy.parse(policy)
    if resolved is SortPolicy.ALPHABETICAL:
        return sorted(entries, key=lambda e: collation_key(e.link_text))
    return sorted(entries, key=lambda e: e.frequency, reverse=True)


def filter_links(entries: Sequence[UnresolvedLinkInfo], query: str) -> list[UnresolvedLinkInfo]:
    """Case-insensitive substring match of *query* against link text.

    An empty query returns every entry, in input order.
    """
    if not query:
        return list(entries)
    needle = query.casefold()
    return [e for e in entries if needle in e.link_text.casefold()]


def folder_of(path: str) -> str:
    """Directory portion of a vault-relative path; ``""`` for the vault root.

    Examples:
        >>> folder_of("Notes/Sub/A.md")
        'Notes/Sub'
        >>> folder_of("A.md")
        ''
    """
    idx = path.rfind("/")
    return path[:idx] if idx >= 0 else ""


def group_by_folder(entries: Sequence[UnresolvedLinkInfo]) -> FolderGroups:
    """Partition *entries* by the folder of their first recorded source.

    Groups appear in first-encounter order (never alphabetized) and keep
    the relative order of *entries* inside each group. Entries with no
    source file land under :data:`NO_SOURCE_FOLDER`.
    """
    groups: FolderGroups = {}
    for entry in entries:
        key = folder_of(entry.source_files[0]) if entry.source_files else NO_SOURCE_FOLDER
        groups.setdefault(key, []).append(entry)
    return groups
