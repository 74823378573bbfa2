"""Tests for the --examples flag on CLI commands."""

from __future__ import annotations

import pytest
from click.testing import CliRunner

from linkcurator.cli import cli

# (CLI args, expected keywords in output)
EXAMPLES_COMMANDS: list[tuple[list[str], list[str]]] = [
    (["--examples"], ["linkcurator scan", "linkcurator links --search"]),
    (["scan", "--examples"], ["linkcurator --json scan"]),
    (["links", "--examples"], ["--sort alphabetical", "--limit 10"]),
    (["templates", "--examples"], ["linkcurator templates"]),
    (["prompt", "--examples"], ["--snippet", "--template"]),
]


@pytest.mark.parametrize(
    ("args", "keywords"),
    EXAMPLES_COMMANDS,
    ids=[" ".join(a) for a, _ in EXAMPLES_COMMANDS],
)
def test_examples(cli_runner: CliRunner, args: list[str], keywords: list[str]) -> None:
    result = cli_runner.invoke(cli, args)
    assert result.exit_code == 0
    assert "Examples for" in result.output
    for keyword in keywords:
        assert keyword in result.output


def test_help_mentions_examples(cli_runner: CliRunner) -> None:
    result = cli_runner.invoke(cli, ["links", "--help"])
    assert "--examples" in result.output
