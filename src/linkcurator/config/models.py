"""Pydantic configuration models with code-baked defaults.

Sparse TOML contract: defaults baked here, linkcurator.toml only
contains overrides. A fresh vault needs no config file at all.
"""

from __future__ import annotations

from typing import Literal

from pydantic import BaseModel, Field, field_validator, model_validator

# --- linkcurator.toml sections ---


class VaultConfig(BaseModel):
    """[vault] section."""

    model_config = {"frozen": True}

    name: str = "my-vault"
    extensions: tuple[str, ...] = (".md",)
    skip_dirs: tuple[str, ...] = (".obsidian", ".git", ".trash", ".linkcurator")

    @field_validator("extensions")
    @classmethod
    def _dotted(cls, value: tuple[str, ...]) -> tuple[str, ...]:
        return tuple(ext if ext.startswith(".") else f".{ext}" for ext in value)


class CuratorSection(BaseModel):
    """[curator] section."""

    model_config = {"frozen": True}

    default_sort: Literal["frequency", "alphabetical"] = "frequency"
    default_group: Literal["none", "folder"] = "folder"
    root_folder_label: str = "Vault Root"
    no_source_label: str = "No Source Folder"


class PromptTemplate(BaseModel):
    """One entry of [[generator.templates]]."""

    model_config = {"frozen": True}

    name: str = Field(min_length=1)
    prompt: str = Field(min_length=1)


def _default_templates() -> tuple[PromptTemplate, ...]:
    return (
        PromptTemplate(
            name="Default Summary",
            prompt="Please provide a comprehensive summary of the topic: {{title}}.",
        ),
    )


class GeneratorConfig(BaseModel):
    """[generator] section.

    Only prompt preparation lives here; API endpoints and keys belong to
    whatever host performs the actual generation call.
    """

    model_config = {"frozen": True}

    templates: tuple[PromptTemplate, ...] = Field(default_factory=_default_templates)
    default_template: str | None = None
    unmatched_placeholders: Literal["keep", "strip"] = "keep"
    default_new_note_path: str = ""

    @model_validator(mode="after")
    def _known_default(self) -> GeneratorConfig:
        names = [t.name for t in self.templates]
        if len(set(names)) != len(names):
            msg = "Prompt template names must be unique"
            raise ValueError(msg)
        if self.default_template is not None and self.default_template not in names:
            msg = f"default_template {self.default_template!r} is not a configured template"
            raise ValueError(msg)
        return self

    def find_template(self, name: str | None) -> PromptTemplate | None:
        """Template called *name*, or the default (first) one when *name* is None."""
        wanted = name if name is not None else self.default_template
        if wanted is None:
            return self.templates[0] if self.templates else None
        for template in self.templates:
            if template.name == wanted:
                return template
        return None
