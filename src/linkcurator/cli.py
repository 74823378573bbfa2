"""Root CLI group for linkcurator with global flags and command registration."""

from __future__ import annotations

import click

from linkcurator import __version__
from linkcurator.commands import register_commands
from linkcurator.commands._base import CuratorGroup
from linkcurator.commands._context import AppContext
from linkcurator.config.settings import CuratorSettings


@click.group(
    cls=CuratorGroup,
    invoke_without_command=True,
    examples="""\
  linkcurator scan
  linkcurator links --search topic --sort alphabetical
  linkcurator --json links --group none
  linkcurator -c ~/notes/linkcurator.toml prompt 'Topic X'""",
)
@click.version_option(version=__version__, prog_name="linkcurator")
@click.option("--json", "json_output", is_flag=True, help="Structured JSON output.")
@click.option("-q", "--quiet", is_flag=True, help="Minimal output.")
@click.option("-v", "--verbose", is_flag=True, help="Detailed output with debug info.")
@click.option("--log-json", is_flag=True, help="Structured JSON log output to stderr.")
@click.option("-c", "--config", "config_path", default=None, help="Override config file path.")
@click.pass_context
def cli(
    ctx: click.Context,
    json_output: bool,
    quiet: bool,
    verbose: bool,
    log_json: bool,
    config_path: str | None,
) -> None:
    """linkcurator — triage unresolved links in a markdown vault."""
    ctx.ensure_object(dict)
    settings = CuratorSettings.from_cli(
        config_path=config_path,
        json_output=json_output,
        quiet=quiet,
        verbose=verbose,
        log_json=log_json,
    )
    ctx.obj = AppContext(settings)
    if ctx.invoked_subcommand is None:
        click.echo(ctx.get_help())


register_commands(cli)
