"""Tests for PromptService."""

from __future__ import annotations

from pathlib import Path

import pytest

from linkcurator.config.settings import CuratorSettings
from linkcurator.services.prompt import PromptService
from linkcurator.services.result import INVALID_TEMPLATE, NO_TEMPLATES, UNKNOWN_TEMPLATE


def _settings(root: Path, **generator: object) -> CuratorSettings:
    return CuratorSettings.from_cli(vault_root=root, generator=generator)


TEMPLATES = [
    {"name": "Summary", "prompt": "Summarize {{title}}."},
    {"name": "With Context", "prompt": "Explain {{title}} using:\n{{context_snippets}}"},
]


class TestTemplates:
    def test_default_templates(self, settings: CuratorSettings) -> None:
        result = PromptService(settings).templates()
        assert result.ok
        assert result.op == "templates"
        assert result.data["count"] == 1
        item = result.data["items"][0]
        assert item["name"] == "Default Summary"
        assert item["default"] is True
        assert item["placeholders"] == ["title"]

    def test_configured_default_flagged(self, tmp_path: Path) -> None:
        settings = _settings(tmp_path, templates=TEMPLATES, default_template="With Context")
        items = PromptService(settings).templates().data["items"]
        assert [i["default"] for i in items] == [False, True]
        assert items[1]["placeholders"] == ["context_snippets", "title"]

    def test_broken_template_listed_without_placeholders(self, tmp_path: Path) -> None:
        settings = _settings(tmp_path, templates=[{"name": "Broken", "prompt": "{{title"}])
        items = PromptService(settings).templates().data["items"]
        assert items[0]["placeholders"] == []


class TestPromptFor:
    def test_default_template(self, settings: CuratorSettings) -> None:
        result = PromptService(settings).prompt_for("Topic X")
        assert result.ok
        assert result.data == {
            "link_text": "Topic X",
            "template": "Default Summary",
            "prompt": "Please provide a comprehensive summary of the topic: Topic X.",
            "note_path": "Topic X.md",
        }

    def test_named_template_with_snippets(self, tmp_path: Path) -> None:
        svc = PromptService(_settings(tmp_path, templates=TEMPLATES))
        result = svc.prompt_for("Topic X", template="With Context", snippets=["one", "two"])
        assert result.data["prompt"] == "Explain Topic X using:\none\n\ntwo"

    def test_unbound_snippets_kept(self, tmp_path: Path) -> None:
        svc = PromptService(_settings(tmp_path, templates=TEMPLATES))
        result = svc.prompt_for("Topic X", template="With Context")
        assert result.data["prompt"].endswith("{{context_snippets}}")

    def test_unbound_snippets_stripped(self, tmp_path: Path) -> None:
        settings = _settings(tmp_path, templates=TEMPLATES, unmatched_placeholders="strip")
        result = PromptService(settings).prompt_for("Topic X", template="With Context")
        assert result.data["prompt"] == "Explain Topic X using:\n"

    def test_unknown_template(self, settings: CuratorSettings) -> None:
        result = PromptService(settings).prompt_for("Topic X", template="Nope")
        assert not result.ok
        assert result.error is not None
        assert result.error.code == UNKNOWN_TEMPLATE
        assert result.error.detail["available"] == ["Default Summary"]

    def test_no_templates(self, tmp_path: Path) -> None:
        result = PromptService(_settings(tmp_path, templates=[])).prompt_for("Topic X")
        assert result.error is not None
        assert result.error.code == NO_TEMPLATES

    def test_invalid_template(self, tmp_path: Path) -> None:
        settings = _settings(tmp_path, templates=[{"name": "Broken", "prompt": "{{title"}])
        result = PromptService(settings).prompt_for("Topic X")
        assert result.error is not None
        assert result.error.code == INVALID_TEMPLATE
        assert result.error.detail["template"] == "Broken"


class TestNotePath:
    @pytest.mark.parametrize(
        ("folder", "expected"),
        [
            ("", "Topic X.md"),
            ("Inbox", "Inbox/Topic X.md"),
            ("/Inbox/Generated/", "Inbox/Generated/Topic X.md"),
        ],
    )
    def test_note_path(self, tmp_path: Path, folder: str, expected: str) -> None:
        svc = PromptService(_settings(tmp_path, default_new_note_path=folder))
        assert svc.note_path("Topic X") == expected
