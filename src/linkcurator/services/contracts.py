"""Typed payload contracts for service boundaries.

These models validate operation payload shapes before they leave the
service layer so key regressions (for example ``items`` vs ``links``)
fail fast in tests and during development.
"""

from __future__ import annotations

from typing import Any, Literal

from pydantic import BaseModel, ConfigDict


def dump_validated[T: BaseModel](model_cls: type[T], data: dict[str, Any]) -> dict[str, Any]:
    """Validate *data* against *model_cls* and return a normalized payload dict."""
    model = model_cls.model_validate(data)
    return model.model_dump(mode="python")


class LinkItem(BaseModel):
    """One unresolved link row."""

    link_text: str
    frequency: int
    source_files: list[str]


class ScanResultData(BaseModel):
    """Payload contract for ``CuratorService.scan``."""

    count: int
    documents: int
    total_references: int
    unresolved_references: int
    skipped: int
    items: list[LinkItem]


class FolderGroupItem(BaseModel):
    """One folder bucket of unresolved links."""

    folder: str | None
    label: str
    count: int
    items: list[LinkItem]


class ListLinksResultData(BaseModel):
    """Payload contract for ``CuratorService.list_links``."""

    model_config = ConfigDict(extra="forbid")

    query: str
    sort: Literal["frequency", "alphabetical"]
    group: Literal["none", "folder"]
    count: int
    total: int
    items: list[LinkItem] | None = None
    groups: list[FolderGroupItem] | None = None


class TemplateItem(BaseModel):
    """One configured prompt template."""

    name: str
    prompt: str
    default: bool
    placeholders: list[str]


class TemplatesResultData(BaseModel):
    """Payload contract for ``PromptService.templates``."""

    count: int
    items: list[TemplateItem]


class PromptResultData(BaseModel):
    """Payload contract for ``PromptService.prompt_for``."""

    link_text: str
    template: str
    prompt: str
    note_path: str
