"""Shared pytest fixtures and test helpers for linkcurator tests."""

from __future__ import annotations

from collections.abc import Generator, Iterable
from pathlib import Path

import pytest
from click.testing import CliRunner

from linkcurator.config.settings import CuratorSettings
from linkcurator.domain.links import LinkReference
from linkcurator.domain.unresolved import UnresolvedLinkInfo
from linkcurator.services.telemetry import _current_span, disable_telemetry

# Sample vault used by corpus, service, and command tests.
#
# Scan order (sorted paths): Existing.md, Notes/A.md, Notes/B.md, Projects/Plan.md
# Unresolved registry, insertion order:
#   Root Idea  x1  [Existing.md]
#   Topic X    x2  [Notes/A.md, Notes/B.md]
#   Topic Y    x1  [Notes/B.md]
#   Zeta       x3  [Projects/Plan.md]
SAMPLE_NOTES: dict[str, str] = {
    "Existing.md": "Already here. See [the A note](Notes/A.md) and [[Root Idea]].\n",
    "Notes/A.md": "# A\n\nSee [[Topic X]] and [[Existing]].\n",
    "Notes/B.md": "More on [[Topic X]] and [[Topic Y]].\n\n![[diagram.png]]\n",
    "Projects/Plan.md": (
        "---\n"
        'related: "[[Front Matter Link]]"\n'
        "---\n"
        "Needs [[Zeta|Zeta]], [[Zeta]] and [[Zeta]].\n"
        "Back to [[Notes/A#Intro]]; ignore `[[Code Link]]`.\n"
    ),
}


@pytest.fixture(autouse=True)
def _reset_telemetry() -> Generator[None]:
    """``-v`` enables telemetry on the test thread's context; undo it."""
    yield
    disable_telemetry()
    _current_span.set(None)


@pytest.fixture
def cli_runner() -> CliRunner:
    """Provide a Click CLI test runner."""
    return CliRunner()


@pytest.fixture
def vault_root(tmp_path: Path) -> Path:
    """Temporary vault populated with :data:`SAMPLE_NOTES`.

    This is the single source of truth for the sample vault layout.
    All vault-related fixtures (settings, _isolated_vault) build on this.
    """
    write_notes(tmp_path, SAMPLE_NOTES)
    return tmp_path


@pytest.fixture
def settings(vault_root: Path) -> CuratorSettings:
    """Default settings rooted at the sample vault."""
    return CuratorSettings.from_cli(vault_root=vault_root)


@pytest.fixture
def _isolated_vault(vault_root: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    """Change CWD to the sample vault so the CLI scans it.

    Use via ``@pytest.mark.usefixtures("_isolated_vault")`` on command test
    classes. Tests that need the path can also request ``vault_root``.
    """
    monkeypatch.delenv("LINKCURATOR_CONFIG", raising=False)
    monkeypatch.chdir(vault_root)


# ---------------------------------------------------------------------------
# Shared test helpers
# ---------------------------------------------------------------------------


def write_notes(root: Path, notes: dict[str, str]) -> None:
    """Write ``{relative_path: content}`` under *root*."""
    for rel, content in notes.items():
        path = root / rel
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(content, encoding="utf-8")


def info(link_text: str, frequency: int, *sources: str) -> UnresolvedLinkInfo:
    """Shorthand registry entry."""
    return UnresolvedLinkInfo(link_text=link_text, frequency=frequency, source_files=sources)


class FakeCorpus:
    """In-memory corpus with synchronous collaborator methods.

    *documents* maps a path to its references; any reference whose raw
    target is in *existing* resolves.  Documents are plain path strings.
    """

    def __init__(
        self,
        documents: dict[str, list[LinkReference]],
        existing: Iterable[str] = (),
    ) -> None:
        self.documents = documents
        self.existing = set(existing)
        self.enumerations = 0

    def enumerate_documents(self) -> list[str]:
        self.enumerations += 1
        return list(self.documents)

    def get_link_references(self, doc: str) -> list[LinkReference]:
        return self.documents[doc]

    def resolves(self, ref: LinkReference, doc: str) -> bool:
        return ref.raw_target in self.existing

    def get_path(self, doc: str) -> str:
        return doc


class AsyncFakeCorpus(FakeCorpus):
    """Same as :class:`FakeCorpus`, with coroutine collaborator methods."""

    async def enumerate_documents(self) -> list[str]:  # type: ignore[override]
        return super().enumerate_documents()

    async def get_link_references(self, doc: str) -> list[LinkReference]:  # type: ignore[override]
        return super().get_link_references(doc)

    async def resolves(self, ref: LinkReference, doc: str) -> bool:  # type: ignore[override]
        return super().resolves(ref, doc)


def scenario_a_corpus() -> FakeCorpus:
    """Two notes in one folder; "Topic X" twice, "Topic Y" once."""
    return FakeCorpus(
        {
            "Notes/A.md": [LinkReference("Topic X")],
            "Notes/B.md": [LinkReference("Topic X"), LinkReference("Topic Y")],
        }
    )
