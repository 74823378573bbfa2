"""Link references — the unit of input to unresolved-link aggregation.

Pure functions, no infrastructure dependencies. The filesystem corpus
uses :func:`extract_links` to index note bodies; the aggregator only ever sees
:class:`LinkReference` values.
"""

from __future__ import annotations

import re
from dataclasses import dataclass
from urllib.parse import unquote

# [[Target]] or [[Target|Display Text]], embeds (![[...]]) excluded.
_WIKILINK_PATTERN = re.compile(r"(?<!!)\[\[([^\[\]]+)\]\]")

# [Label](target) or [Label](<target with spaces>), images excluded.
_MARKDOWN_LINK_PATTERN = re.compile(
    r"(?<!!)\[([^\[\]]*)\]\(\s*(?:<([^<>]+)>|([^()\s]+))(?:\s+\"[^\"]*\")?\s*\)"
)

# scheme:// or mailto: style targets point outside the vault.
_EXTERNAL_PATTERN = re.compile(r"^[a-zA-Z][a-zA-Z0-9+.-]*:")

# Fenced code blocks and inline code never contain live links.
_CODE_PATTERN = re.compile(r"```.*?```|~~~.*?~~~|`[^`\n]*`", re.DOTALL)


@dataclass(frozen=True)
class LinkReference:
    """One cross-reference found in one document."""

    raw_target: str  # link path as written, subpath included
    display_text: str | None = None  # author-supplied label, if any


def resolved_link_text(ref: LinkReference) -> str:
    """The deduplication key for *ref*: its label, else its raw target.

    The label is used exactly as written; only an empty or missing label
    falls back. Returns an empty string when neither is present.

    Examples:
        >>> resolved_link_text(LinkReference("notes/topic", "Topic"))
        'Topic'
        >>> resolved_link_text(LinkReference("notes/topic"))
        'notes/topic'
    """
    return ref.display_text or ref.raw_target or ""


def strip_subpath(target: str) -> str:
    """Drop a ``#heading`` or ``#^block`` suffix from a link target.

    Examples:
        >>> strip_subpath("Topic X#Background")
        'Topic X'
        >>> strip_subpath("#Local heading")
        ''
    """
    return target.split("#", 1)[0].strip()


def extract_links(body: str) -> list[LinkReference]:
    """All link references in *body*, in document order.

    Handles ``[[Target]]``, ``[[Target|Display Text]]`` and vault-internal
    ``[label](target)`` links. Embeds, images, links inside code, external
    URLs and same-note ``#anchor`` links are ignored. Markdown targets are
    URL-decoded, so ``My%20Note.md`` becomes ``My Note.md``.
    """
    text = _strip_code(body)
    spans = [*_wikilink_spans(text), *_markdown_spans(text)]
    spans.sort(key=lambda item: item[0])
    return [ref for _, ref in spans]


# ---------------------------------------------------------------------------
# Internal helpers
# ---------------------------------------------------------------------------


def _wikilink_spans(text: str) -> list[tuple[int, LinkReference]]:
    spans: list[tuple[int, LinkReference]] = []
    for match in _WIKILINK_PATTERN.finditer(text):
        parts = match.group(1).split("|", 1)
        target = parts[0].strip()
        display = parts[1].strip() if len(parts) > 1 else None
        if not target and not display:
            continue
        ref = LinkReference(raw_target=target, display_text=display or None)
        spans.append((match.start(), ref))
    return spans


def _markdown_spans(text: str) -> list[tuple[int, LinkReference]]:
    spans: list[tuple[int, LinkReference]] = []
    for match in _MARKDOWN_LINK_PATTERN.finditer(text):
        label = match.group(1).strip()
        target = unquote((match.group(2) or match.group(3) or "").strip())
        if not target or target.startswith("#") or _EXTERNAL_PATTERN.match(target):
            continue
        ref = LinkReference(raw_target=target, display_text=label or None)
        spans.append((match.start(), ref))
    return spans


def _strip_code(body: str) -> str:
    """Blank out code spans while keeping character offsets stable."""
    return _CODE_PATTERN.sub(lambda m: " " * len(m.group(0)), body)
