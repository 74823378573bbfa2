"""Command: render a generation prompt for one link."""

from __future__ import annotations

from typing import TYPE_CHECKING

import click

from linkcurator.commands._base import CuratorCommand

if TYPE_CHECKING:
    from linkcurator.commands._context import AppContext


@click.command(
    cls=CuratorCommand,
    examples="""\
  linkcurator prompt "Topic X"
  linkcurator prompt "Topic X" --template "Default Summary"
  linkcurator prompt "Topic X" --snippet "first excerpt" --snippet "second excerpt"
  linkcurator -q prompt "Topic X" | pbcopy""",
)
@click.argument("link_text")
@click.option("-t", "--template", default=None, help="Template name (default from config).")
@click.option(
    "--snippet",
    "snippets",
    multiple=True,
    help="Context excerpt bound to {{context_snippets}} (repeatable).",
)
@click.pass_obj
def prompt(app: AppContext, link_text: str, template: str | None, snippets: tuple[str, ...]) -> None:
    """Render the prompt that would generate a note for LINK_TEXT."""
    svc = app.prompts()
    app.emit(svc.prompt_for(link_text, template=template, snippets=list(snippets)))
