"""Subcommand modules for linkcurator.

Provides register_commands(), which uses deferred imports to keep
``linkcurator --help`` fast.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    import click


def register_commands(cli: click.Group) -> None:
    """Register all standalone commands on the root CLI group."""
    from linkcurator.commands.links import links
    from linkcurator.commands.prompt import prompt
    from linkcurator.commands.scan import scan
    from linkcurator.commands.templates import templates

    cli.add_command(scan)
    cli.add_command(links)
    cli.add_command(templates)
    cli.add_command(prompt)
