"""Tests for the links command."""

from __future__ import annotations

import json
from pathlib import Path

import pytest
from click.testing import CliRunner

from linkcurator.cli import cli
from tests.conftest import write_notes


def _json(cli_runner: CliRunner, *args: str) -> dict:
    result = cli_runner.invoke(cli, ["--json", "links", *args])
    assert result.exit_code == 0, result.output
    return json.loads(result.stdout)["data"]


@pytest.mark.usefixtures("_isolated_vault")
class TestLinksCommand:
    def test_default_grouped_by_folder(self, cli_runner: CliRunner) -> None:
        result = cli_runner.invoke(cli, ["links"])
        assert result.exit_code == 0
        out = result.stdout
        assert "📂 Projects (1)" in out
        assert "📂 Notes (2)" in out
        assert "📂 Vault Root (1)" in out
        assert out.index("Projects (1)") < out.index("Notes (2)") < out.index("Vault Root (1)")

    def test_flat_frequency(self, cli_runner: CliRunner) -> None:
        data = _json(cli_runner, "--group", "none")
        assert [i["link_text"] for i in data["items"]] == ["Zeta", "Topic X", "Root Idea", "Topic Y"]

    def test_flat_alphabetical(self, cli_runner: CliRunner) -> None:
        data = _json(cli_runner, "--group", "none", "--sort", "alphabetical")
        assert [i["link_text"] for i in data["items"]] == ["Root Idea", "Topic X", "Topic Y", "Zeta"]

    def test_search(self, cli_runner: CliRunner) -> None:
        data = _json(cli_runner, "--search", "TOPIC", "--group", "none")
        assert [i["link_text"] for i in data["items"]] == ["Topic X", "Topic Y"]
        assert data["total"] == 4

    def test_search_grouped(self, cli_runner: CliRunner) -> None:
        data = _json(cli_runner, "-s", "topic")
        assert [g["label"] for g in data["groups"]] == ["Notes"]

    def test_limit(self, cli_runner: CliRunner) -> None:
        data = _json(cli_runner, "--group", "none", "--limit", "1")
        assert [i["link_text"] for i in data["items"]] == ["Zeta"]

    def test_no_matches(self, cli_runner: CliRunner) -> None:
        result = cli_runner.invoke(cli, ["links", "--search", "nothing-like-this"])
        assert result.exit_code == 0
        assert "No links match your search." in result.stdout

    def test_quiet(self, cli_runner: CliRunner) -> None:
        result = cli_runner.invoke(cli, ["-q", "links", "--group", "none"])
        assert result.stdout.splitlines() == ["Zeta", "Topic X", "Root Idea", "Topic Y"]

    def test_invalid_sort_rejected(self, cli_runner: CliRunner) -> None:
        result = cli_runner.invoke(cli, ["links", "--sort", "recency"])
        assert result.exit_code == 2

    def test_negative_limit_rejected(self, cli_runner: CliRunner) -> None:
        result = cli_runner.invoke(cli, ["links", "--limit", "-1"])
        assert result.exit_code == 2


class TestLinksConfig:
    def test_config_defaults(
        self, cli_runner: CliRunner, vault_root: Path, monkeypatch: pytest.MonkeyPatch
    ) -> None:
        (vault_root / "linkcurator.toml").write_text(
            '[curator]\ndefault_sort = "alphabetical"\ndefault_group = "none"\n'
        )
        monkeypatch.chdir(vault_root / "Notes")
        data = _json(cli_runner)
        assert data["sort"] == "alphabetical"
        assert [i["link_text"] for i in data["items"]] == ["Root Idea", "Topic X", "Topic Y", "Zeta"]

    def test_empty_vault(
        self, cli_runner: CliRunner, tmp_path: Path, monkeypatch: pytest.MonkeyPatch
    ) -> None:
        write_notes(tmp_path, {"Only.md": "No links here."})
        monkeypatch.chdir(tmp_path)
        result = cli_runner.invoke(cli, ["links"])
        assert result.exit_code == 0
        assert "No unresolved links found." in result.stdout

    def test_skip_dirs_from_config(
        self, cli_runner: CliRunner, tmp_path: Path, monkeypatch: pytest.MonkeyPatch
    ) -> None:
        write_notes(
            tmp_path,
            {
                "linkcurator.toml": '[vault]\nskip_dirs = ["Archive"]\n',
                "Live.md": "[[Kept]]",
                "Archive/Old.md": "[[Ignored]]",
            },
        )
        monkeypatch.chdir(tmp_path)
        data = _json(cli_runner, "--group", "none")
        assert [i["link_text"] for i in data["items"]] == ["Kept"]
