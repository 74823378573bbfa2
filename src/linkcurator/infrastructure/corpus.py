"""VaultCorpus — a directory of markdown notes as a link corpus.

INVARIANT: Files are truth. Every scan re-reads the directory tree, so
the corpus is a fresh snapshot per ``enumerate_documents`` call.

Documents are the files with a configured extension, ordered by
vault-relative POSIX path so scans are reproducible. Link resolution
follows the usual vault conventions:

1. Same-note anchors (``[[#Heading]]``) always resolve.
2. Exact vault-relative path, with or without the note extension.
3. Path relative to the linking note (``[x](../other.md)``).
4. Path suffix / bare file name (``[[note]]`` finds ``deep/dir/note.md``).

All comparisons are case-insensitive. Attachments (any file, not just
notes) are valid link targets.
"""

from __future__ import annotations

import logging
import posixpath
from dataclasses import dataclass, field
from pathlib import Path

import anyio
from anyio import to_thread

from linkcurator.domain.content import strip_frontmatter
from linkcurator.domain.links import LinkReference, extract_links, strip_subpath

logger = logging.getLogger(__name__)

DEFAULT_SKIP_DIRS = frozenset({".obsidian", ".git", ".trash", ".linkcurator"})


@dataclass(frozen=True)
class VaultDocument:
    """One note file in the vault."""

    path: Path  # absolute location on disk
    rel_path: str  # vault-relative, POSIX separators

    @property
    def folder(self) -> str:
        return posixpath.dirname(self.rel_path)


@dataclass
class _FileIndex:
    """Case-folded lookup tables over every file in the vault."""

    paths: set[str] = field(default_factory=set)
    names: set[str] = field(default_factory=set)

    def add(self, rel_path: str, note_extensions: tuple[str, ...]) -> None:
        key = rel_path.casefold()
        name = posixpath.basename(key)
        self.paths.add(key)
        self.names.add(name)
        for ext in note_extensions:
            if key.endswith(ext):
                self.paths.add(key[: -len(ext)])
                self.names.add(name[: -len(ext)])

    def contains(self, candidate: str) -> bool:
        key = candidate.casefold()
        if key in self.paths:
            return True
        if "/" not in key:
            return key in self.names
        suffix = "/" + key
        return any(p.endswith(suffix) for p in self.paths)


class VaultCorpus:
    """Filesystem-backed corpus rooted at a vault directory.

    Satisfies :class:`linkcurator.services.scanner.Corpus` with
    :class:`VaultDocument` handles. File reads are awaited through
    ``anyio`` so a scan yields control between documents.
    """

    def __init__(
        self,
        root: Path,
        *,
        extensions: tuple[str, ...] = (".md",),
        skip_dirs: frozenset[str] | tuple[str, ...] = DEFAULT_SKIP_DIRS,
    ) -> None:
        self.root = root
        self.extensions = tuple(ext.casefold() for ext in extensions)
        self.skip_dirs = frozenset(skip_dirs)
        self._index: _FileIndex | None = None

    # ------------------------------------------------------------------
    # Corpus protocol
    # ------------------------------------------------------------------

    async def enumerate_documents(self) -> list[VaultDocument]:
        """All note files, sorted by vault-relative path.

        Raises:
            FileNotFoundError: If the vault root does not exist.
        """
        if not self.root.is_dir():
            msg = f"Vault directory not found: {self.root}"
            raise FileNotFoundError(msg)
        files = await to_thread.run_sync(self._walk)

        index = _FileIndex()
        documents: list[VaultDocument] = []
        for path in files:
            rel = path.relative_to(self.root).as_posix()
            index.add(rel, self.extensions)
            if path.suffix.casefold() in self.extensions:
                documents.append(VaultDocument(path=path, rel_path=rel))
        self._index = index

        documents.sort(key=lambda d: d.rel_path)
        logger.debug("Enumerated %d notes under %s", len(documents), self.root)
        return documents

    async def get_link_references(self, doc: VaultDocument) -> list[LinkReference]:
        """Body links of *doc*, frontmatter excluded.

        Raises:
            OSError, UnicodeDecodeError: If the file cannot be read.
        """
        content = await anyio.Path(doc.path).read_text(encoding="utf-8")
        return extract_links(strip_frontmatter(content))

    def resolves(self, ref: LinkReference, doc: VaultDocument) -> bool:
        """Whether *ref*, written in *doc*, points at an existing file."""
        target = strip_subpath(ref.raw_target).replace("\\", "/")
        if not target:
            return True

        index = self._index if self._index is not None else self._build_index()
        target = target.removeprefix("./")
        candidates = [target.lstrip("/")]
        relative = posixpath.normpath(posixpath.join(doc.folder, target))
        if not relative.startswith("../"):
            candidates.append(relative)
        return any(index.contains(c) for c in candidates)

    def get_path(self, doc: VaultDocument) -> str:
        return doc.rel_path

    # ------------------------------------------------------------------
    # Internal helpers
    # ------------------------------------------------------------------

    def _walk(self) -> list[Path]:
        results: list[Path] = []
        for path in self.root.rglob("*"):
            rel_parts = path.relative_to(self.root).parts
            if any(part in self.skip_dirs for part in rel_parts):
                continue
            if path.is_file():
                results.append(path)
        return results

    def _build_index(self) -> _FileIndex:
        index = _FileIndex()
        for path in self._walk():
            index.add(path.relative_to(self.root).as_posix(), self.extensions)
        self._index = index
        return index
