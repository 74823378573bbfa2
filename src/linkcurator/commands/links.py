"""Command: list unresolved links with search, sort, and grouping."""

from __future__ import annotations

from typing import TYPE_CHECKING

import click

from linkcurator.commands._base import CuratorCommand

if TYPE_CHECKING:
    from linkcurator.commands._context import AppContext


@click.command(
    cls=CuratorCommand,
    examples="""\
  linkcurator links
  linkcurator links --search topic
  linkcurator links --sort alphabetical --group none
  linkcurator links --limit 10
  linkcurator -q links --group none""",
)
@click.option("-s", "--search", "query", default="", help="Case-insensitive substring filter.")
@click.option(
    "--sort",
    type=click.Choice(["frequency", "alphabetical"]),
    default=None,
    help="Ordering (default from config: frequency).",
)
@click.option(
    "--group",
    type=click.Choice(["none", "folder"]),
    default=None,
    help="Group by the first referencing note's folder (default from config: folder).",
)
@click.option("--limit", type=click.IntRange(min=0), default=None, help="Show at most N links.")
@click.pass_obj
def links(
    app: AppContext,
    query: str,
    sort: str | None,
    group: str | None,
    limit: int | None,
) -> None:
    """List unresolved links in the vault."""
    svc = app.curator()
    app.emit(app.run(svc.list_links, query=query, sort=sort, group=group, limit=limit))
