"""ScanCache — last successful scan, held by whoever composes the services.

The cache lets a view paint immediately from the previous scan instead of
forcing a walk of the whole vault. Staleness is cosmetic: a refresh
always rescans.

INVARIANT: Writes replace the stored tuple reference in one assignment,
so a reader sees either the previous result or the new one, never a mix.
Concurrent scans are not coordinated; the last writer wins.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from linkcurator.domain.unresolved import ScanResult


class ScanCache:
    """Holds exactly one :data:`ScanResult`, or nothing."""

    def __init__(self, initial: ScanResult | None = None) -> None:
        self._result: ScanResult | None = initial

    def get(self) -> ScanResult | None:
        return self._result

    def set(self, result: ScanResult) -> None:
        self._result = tuple(result)

    def clear(self) -> None:
        self._result = None

    @property
    def is_empty(self) -> bool:
        return self._result is None

    def __repr__(self) -> str:
        size = "empty" if self._result is None else f"{len(self._result)} links"
        return f"ScanCache({size})"
