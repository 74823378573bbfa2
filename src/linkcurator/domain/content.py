"""Note content helpers — separate the frontmatter block from the body.

Links in YAML frontmatter are not body links and never count as
unresolved references, so the corpus strips the block before extracting.
The YAML itself is not interpreted.
"""

from __future__ import annotations

_FRONTMATTER_DELIMITER = "---"


def split_frontmatter(content: str) -> tuple[str, str]:
    """Split markdown *content* into ``(frontmatter_text, body)``.

    Expects the file to start with ``---`` on the first line. The next
    ``---`` line closes the block. Everything after is the body.

    Handles both ``\\n`` and ``\\r\\n`` line endings.

    Returns:
        ``("", content)`` when no complete frontmatter block is present.
    """
    normalized = content.replace("\r\n", "\n")
    lines = normalized.split("\n")
    if not lines or lines[0].strip() != _FRONTMATTER_DELIMITER:
        return "", content

    for i, line in enumerate(lines[1:], start=1):
        if line.strip() == _FRONTMATTER_DELIMITER:
            frontmatter = "\n".join(lines[1:i])
            body = "\n".join(lines[i + 1 :])
            return frontmatter, body.removeprefix("\n")

    return "", content


def strip_frontmatter(content: str) -> str:
    """The body of *content*, without any leading frontmatter block."""
    return split_frontmatter(content)[1]
