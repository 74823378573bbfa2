"""Command: rescan the vault for unresolved links."""

from __future__ import annotations

from typing import TYPE_CHECKING

import click

from linkcurator.commands._base import CuratorCommand

if TYPE_CHECKING:
    from linkcurator.commands._context import AppContext


@click.command(
    cls=CuratorCommand,
    examples="""\
  linkcurator scan
  linkcurator --json scan
  linkcurator -v scan""",
)
@click.pass_obj
def scan(app: AppContext) -> None:
    """Scan the vault and summarize its unresolved links."""
    app.emit(app.run(app.curator().scan))
