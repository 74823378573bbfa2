"""Corpus walk — find every unresolved reference in a vault snapshot.

The corpus is a collaborator: it enumerates documents, lists their link
references, and answers whether a reference resolves.  Collaborator
methods may be plain functions or coroutines; the walk awaits whatever
comes back, one document at a time.

INVARIANT: A scan either fully succeeds or fails as a unit. Any
collaborator exception aborts the walk and surfaces as
:class:`CorpusError` with the original exception chained.
"""

from __future__ import annotations

import inspect
import logging
from dataclasses import dataclass
from typing import TYPE_CHECKING, Any, Protocol

from linkcurator.domain.unresolved import RegistryBuilder, ScanResult
from linkcurator.services.telemetry import trace_span

if TYPE_CHECKING:
    from collections.abc import Awaitable, Sequence

    from linkcurator.domain.links import LinkReference

logger = logging.getLogger(__name__)


class Corpus[D](Protocol):
    """Source of documents and link metadata.

    ``enumerate_documents``, ``get_link_references`` and ``resolves`` may
    return their value directly or as an awaitable.
    """

    def enumerate_documents(self) -> Sequence[D] | Awaitable[Sequence[D]]: ...

    def get_link_references(
        self, doc: D
    ) -> Sequence[LinkReference] | Awaitable[Sequence[LinkReference]]: ...

    def resolves(self, ref: LinkReference, doc: D) -> bool | Awaitable[bool]: ...

    def get_path(self, doc: D) -> str: ...


class CorpusError(Exception):
    """The corpus failed to enumerate or read a document.

    Attributes:
        path: Document being processed when the failure happened, or
            None if enumeration itself failed.
    """

    def __init__(self, message: str, *, path: str | None = None) -> None:
        super().__init__(message)
        self.path = path


@dataclass(frozen=True)
class ScanOutcome:
    """A scan result plus the bookkeeping gathered while walking."""

    result: ScanResult
    documents: int
    total_references: int
    unresolved_references: int
    skipped_malformed: int


async def _resolve[T](value: T | Awaitable[T]) -> T:
    if inspect.isawaitable(value):
        return await value
    return value


async def scan_unresolved(corpus: Corpus[Any]) -> ScanOutcome:
    """Walk *corpus* once and build the unresolved-link registry.

    Documents and references are visited in the corpus's own order, so
    the first document referencing a link becomes its canonical source.
    References with no usable text are skipped and counted.

    Raises:
        CorpusError: If enumeration or any per-document call fails.
    """
    with trace_span("enumerate"):
        try:
            documents = list(await _resolve(corpus.enumerate_documents()))
        except Exception as exc:
            logger.debug("Corpus enumeration failed: %s", exc)
            raise CorpusError(f"Could not enumerate documents: {exc}") from exc

    builder = RegistryBuilder()
    references = 0
    with trace_span("aggregate") as span:
        for doc in documents:
            path: str | None = None
            try:
                path = corpus.get_path(doc)
                refs = await _resolve(corpus.get_link_references(doc))
                for ref in refs:
                    references += 1
                    if await _resolve(corpus.resolves(ref, doc)):
                        continue
                    if not builder.add(ref, path):
                        logger.debug("Skipping reference without text in %s: %r", path, ref)
            except Exception as exc:
                logger.debug("Corpus read failed for %s: %s", path, exc)
                where = path if path is not None else repr(doc)
                raise CorpusError(f"Failed to read {where}: {exc}", path=path) from exc
        if span is not None:
            span.annotate("documents", len(documents))
            span.annotate("links", len(builder))

    outcome = ScanOutcome(
        result=builder.build(),
        documents=len(documents),
        total_references=references,
        unresolved_references=builder.total_references,
        skipped_malformed=builder.skipped,
    )
    logger.debug(
        "Scanned %d documents: %d unresolved links (%d references, %d skipped)",
        outcome.documents,
        len(outcome.result),
        outcome.unresolved_references,
        outcome.skipped_malformed,
    )
    return outcome
