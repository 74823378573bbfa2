"""Unresolved-link registry — deduplicated, counted occurrences.

The registry is keyed by resolved link text (label first, raw target
otherwise), so ``[[notes/a|Topic]]`` and ``[[other/b|Topic]]`` count as
the same unresolved link. Labels are compared exactly as written, so
``Topic`` and ``Topic `` are two entries.

INVARIANT: ``frequency`` counts every reference, ``source_files`` lists
each document once, in first-seen order. ``source_files[0]`` decides
which folder group an entry lands in.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any

from linkcurator.domain.links import LinkReference, resolved_link_text


@dataclass(frozen=True)
class UnresolvedLinkInfo:
    """One registry entry: an unresolved link and where it is referenced."""

    link_text: str
    frequency: int
    source_files: tuple[str, ...]

    def to_dict(self) -> dict[str, Any]:
        return {
            "link_text": self.link_text,
            "frequency": self.frequency,
            "source_files": list(self.source_files),
        }


# Raw output of one aggregation pass, first-insertion order.
ScanResult = tuple[UnresolvedLinkInfo, ...]


@dataclass
class _Occurrences:
    frequency: int = 0
    sources: list[str] = field(default_factory=list)
    seen: set[str] = field(default_factory=set)


class RegistryBuilder:
    """Accumulates unresolved references into a :data:`ScanResult`.

    Usage::

        builder = RegistryBuilder()
        for path, refs in unresolved_refs_by_document:
            for ref in refs:
                builder.add(ref, path)
        result = builder.build()
    """

    def __init__(self) -> None:
        self._entries: dict[str, _Occurrences] = {}
        self.total_references = 0
        self.skipped = 0

    def add(self, ref: LinkReference, source_path: str) -> bool:
        """Record one unresolved occurrence of *ref* in *source_path*.

        Returns False (and counts a skip) when *ref* has no usable text.
        """
        key = resolved_link_text(ref)
        if not key:
            self.skipped += 1
            return False

        occurrences = self._entries.get(key)
        if occurrences is None:
            occurrences = self._entries[key] = _Occurrences()
        occurrences.frequency += 1
        if source_path not in occurrences.seen:
            occurrences.seen.add(source_path)
            occurrences.sources.append(source_path)
        self.total_references += 1
        return True

    def __len__(self) -> int:
        return len(self._entries)

    def build(self) -> ScanResult:
        """Freeze the registry into an immutable, insertion-ordered result."""
        return tuple(
            UnresolvedLinkInfo(
                link_text=key,
                frequency=occ.frequency,
                source_files=tuple(occ.sources),
            )
            for key, occ in self._entries.items()
        )

