"""Command: list configured prompt templates."""

from __future__ import annotations

from typing import TYPE_CHECKING

import click

from linkcurator.commands._base import CuratorCommand

if TYPE_CHECKING:
    from linkcurator.commands._context import AppContext


@click.command(
    cls=CuratorCommand,
    examples="""\
  linkcurator templates
  linkcurator --json templates""",
)
@click.pass_obj
def templates(app: AppContext) -> None:
    """Show the prompt templates from [generator] config."""
    app.emit(app.prompts().templates())
