"""CuratorService — scan, cache, and query unresolved links.

Composition is fixed: filter -> sort -> (limit) -> group. Sorting and
grouping are computed over the filtered set, never the whole vault.
(See :mod:`linkcurator.domain.ranking`.)
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Any

from linkcurator.domain.ranking import (
    NO_SOURCE_FOLDER,
    SortPolicy,
    filter_links,
    group_by_folder,
    sort_links,
)
from linkcurator.services.base import BaseService
from linkcurator.services.cache import ScanCache
from linkcurator.services.contracts import ListLinksResultData, ScanResultData, dump_validated
from linkcurator.services.result import CORPUS_FAILURE, ServiceResult
from linkcurator.services.scanner import CorpusError, ScanOutcome, scan_unresolved
from linkcurator.services.telemetry import get_current_span, trace_span, traced

if TYPE_CHECKING:
    from linkcurator.config.settings import CuratorSettings
    from linkcurator.domain.ranking import FolderGroups
    from linkcurator.services.scanner import Corpus

logger = logging.getLogger(__name__)

GROUP_NONE = "none"
GROUP_FOLDER = "folder"


class CuratorService(BaseService):
    """Unresolved-link triage over one corpus.

    The cache is injected so the composing layer decides its lifetime
    (one per CLI invocation, one per long-lived host view, ...).
    """

    def __init__(
        self,
        settings: CuratorSettings,
        corpus: Corpus[Any],
        *,
        cache: ScanCache | None = None,
    ) -> None:
        super().__init__(settings)
        self._corpus = corpus
        self._cache = cache if cache is not None else ScanCache()

    @property
    def cache(self) -> ScanCache:
        return self._cache

    # ------------------------------------------------------------------
    # Public API
    # ------------------------------------------------------------------

    @traced
    async def scan(self) -> ServiceResult:
        """Rescan the corpus and replace the cached registry.

        On failure the cache keeps its previous contents.
        """
        try:
            outcome = await self._scan()
        except CorpusError as exc:
            return _corpus_failure("scan", exc)

        warnings = _malformed_warnings(outcome)
        data = dump_validated(
            ScanResultData,
            {
                "count": len(outcome.result),
                "documents": outcome.documents,
                "total_references": outcome.total_references,
                "unresolved_references": outcome.unresolved_references,
                "skipped": outcome.skipped_malformed,
                "items": [entry.to_dict() for entry in outcome.result],
            },
        )
        return ServiceResult(ok=True, op="scan", data=data, warnings=warnings)

    @traced
    async def list_links(
        self,
        *,
        query: str = "",
        sort: str | None = None,
        group: str | None = None,
        limit: int | None = None,
        refresh: bool = False,
    ) -> ServiceResult:
        """Filter, sort, and optionally group unresolved links.

        Reads the cached registry when one exists, unless *refresh* is set.
        Unknown sort policies fall back to frequency order.
        """
        cfg = self._settings.curator
        policy = SortPolicy.parse(sort if sort is not None else cfg.default_sort)
        grouping = group if group is not None else cfg.default_group
        if grouping not in (GROUP_NONE, GROUP_FOLDER):
            grouping = GROUP_FOLDER

        warnings: list[str] = []
        cached = None if refresh else self._cache.get()
        if cached is None:
            try:
                outcome = await self._scan()
            except CorpusError as exc:
                return _corpus_failure("list_links", exc)
            registry = outcome.result
            warnings.extend(_malformed_warnings(outcome))
        else:
            registry = cached

        with trace_span("filter_sort"):
            visible = sort_links(filter_links(registry, query), policy)
        if limit is not None and limit >= 0:
            visible = visible[:limit]

        payload: dict[str, Any] = {
            "query": query,
            "sort": policy.value,
            "group": grouping,
            "count": len(visible),
            "total": len(registry),
        }
        if grouping == GROUP_FOLDER:
            with trace_span("group"):
                payload["groups"] = self._group_payload(group_by_folder(visible))
        else:
            payload["items"] = [entry.to_dict() for entry in visible]

        return ServiceResult(
            ok=True,
            op="list_links",
            data=dump_validated(ListLinksResultData, payload),
            warnings=warnings,
            meta={"cached": cached is not None},
        )

    def invalidate(self) -> ServiceResult:
        """Drop the cached registry so the next listing rescans.

        Call after any batch action that creates notes.
        """
        had_cache = not self._cache.is_empty
        self._cache.clear()
        logger.debug("Scan cache cleared (had_cache=%s)", had_cache)
        return ServiceResult(ok=True, op="invalidate", data={"cleared": had_cache})

    # ------------------------------------------------------------------
    # Internal helpers
    # ------------------------------------------------------------------

    async def _scan(self) -> ScanOutcome:
        outcome = await scan_unresolved(self._corpus)
        self._cache.set(outcome.result)
        span = get_current_span()
        if span is not None:
            span.annotate("links", len(outcome.result))
        return outcome

    def _group_payload(self, groups: FolderGroups) -> list[dict[str, Any]]:
        return [
            {
                "folder": folder,
                "label": self._folder_label(folder),
                "count": len(entries),
                "items": [entry.to_dict() for entry in entries],
            }
            for folder, entries in groups.items()
        ]

    def _folder_label(self, folder: str | None) -> str:
        cfg = self._settings.curator
        if folder is NO_SOURCE_FOLDER:
            return cfg.no_source_label
        return folder or cfg.root_folder_label


def _malformed_warnings(outcome: ScanOutcome) -> list[str]:
    if not outcome.skipped_malformed:
        return []
    return [f"Skipped {outcome.skipped_malformed} link reference(s) with no usable text"]


def _corpus_failure(op: str, exc: CorpusError) -> ServiceResult:
    detail: dict[str, Any] = {}
    if exc.path is not None:
        detail["path"] = exc.path
    if exc.__cause__ is not None:
        detail["cause"] = type(exc.__cause__).__name__
    return ServiceResult.failure(op, CORPUS_FAILURE, str(exc), **detail)
