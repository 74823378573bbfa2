"""Tests for CuratorSettings — unified settings with TOML source."""

from pathlib import Path

import click
import pytest

from linkcurator.config.settings import CuratorSettings


@pytest.fixture(autouse=True)
def _clean_env(monkeypatch: pytest.MonkeyPatch) -> None:
    for name in ("LINKCURATOR_CONFIG", "LINKCURATOR_VERBOSE", "LINKCURATOR_CURATOR__DEFAULT_SORT"):
        monkeypatch.delenv(name, raising=False)


class TestDefaults:
    def test_all_defaults(self, tmp_path: Path) -> None:
        settings = CuratorSettings.from_cli(vault_root=tmp_path)
        assert settings.vault_root == tmp_path
        assert settings.config_path is None
        assert settings.json_output is False
        assert settings.vault.extensions == (".md",)
        assert settings.curator.default_sort == "frequency"
        assert settings.curator.default_group == "folder"
        assert settings.generator.templates[0].name == "Default Summary"
        assert settings.generator.unmatched_placeholders == "keep"

    def test_frozen(self, tmp_path: Path) -> None:
        settings = CuratorSettings.from_cli(vault_root=tmp_path)
        with pytest.raises(Exception):
            settings.quiet = True  # type: ignore[misc]


class TestTomlSource:
    def test_loads_sections(self, tmp_path: Path) -> None:
        (tmp_path / "linkcurator.toml").write_text(
            '[vault]\nname = "research"\nextensions = ["md", ".markdown"]\n'
            '[curator]\ndefault_sort = "alphabetical"\n'
            '[[generator.templates]]\nname = "Short"\nprompt = "Define {{title}}."\n'
        )
        settings = CuratorSettings.from_cli(vault_root=tmp_path)
        assert settings.vault.name == "research"
        assert settings.vault.extensions == (".md", ".markdown")
        assert settings.curator.default_sort == "alphabetical"
        assert settings.curator.default_group == "folder"
        assert [t.name for t in settings.generator.templates] == ["Short"]

    def test_vault_root_follows_config(self, tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
        (tmp_path / "linkcurator.toml").write_text("")
        child = tmp_path / "Notes" / "Deep"
        child.mkdir(parents=True)
        monkeypatch.chdir(child)
        settings = CuratorSettings.from_cli()
        assert settings.vault_root == tmp_path.resolve()
        assert settings.config_path == (tmp_path / "linkcurator.toml").resolve()

    def test_hidden_config_layout(self, tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
        hidden = tmp_path / ".linkcurator" / "config.toml"
        hidden.parent.mkdir()
        hidden.write_text('[vault]\nname = "hidden"\n')
        monkeypatch.chdir(tmp_path)
        settings = CuratorSettings.from_cli()
        assert settings.vault.name == "hidden"
        assert settings.vault_root == tmp_path.resolve()

    def test_explicit_config_path(self, tmp_path: Path) -> None:
        custom = tmp_path / "custom" / "my.toml"
        custom.parent.mkdir(parents=True)
        custom.write_text('[vault]\nname = "custom"\n')
        settings = CuratorSettings.from_cli(config_path=str(custom), vault_root=tmp_path)
        assert settings.vault.name == "custom"
        assert settings.config_path == custom

    def test_missing_explicit_config(self, tmp_path: Path) -> None:
        with pytest.raises(click.ClickException, match="Config file not found"):
            CuratorSettings.from_cli(config_path=str(tmp_path / "nope.toml"))

    def test_invalid_toml(self, tmp_path: Path) -> None:
        (tmp_path / "linkcurator.toml").write_text("[vault\nname = ")
        with pytest.raises(click.ClickException, match="Invalid TOML"):
            CuratorSettings.from_cli(vault_root=tmp_path)

    def test_invalid_values(self, tmp_path: Path) -> None:
        (tmp_path / "linkcurator.toml").write_text('[curator]\ndefault_sort = "recency"\n')
        with pytest.raises(click.ClickException, match="Invalid configuration"):
            CuratorSettings.from_cli(vault_root=tmp_path)


class TestPriority:
    def test_cli_flags_override(self, tmp_path: Path) -> None:
        settings = CuratorSettings.from_cli(
            vault_root=tmp_path, json_output=True, quiet=True, verbose=True
        )
        assert settings.json_output is True
        assert settings.quiet is True
        assert settings.verbose is True

    def test_env_overrides_toml(self, tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
        (tmp_path / "linkcurator.toml").write_text('[curator]\ndefault_sort = "alphabetical"\n')
        monkeypatch.setenv("LINKCURATOR_CURATOR__DEFAULT_SORT", "frequency")
        settings = CuratorSettings.from_cli(vault_root=tmp_path)
        assert settings.curator.default_sort == "frequency"

    def test_cli_flags_override_env(self, tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("LINKCURATOR_VERBOSE", "true")
        settings = CuratorSettings.from_cli(vault_root=tmp_path, verbose=False)
        assert settings.verbose is False
