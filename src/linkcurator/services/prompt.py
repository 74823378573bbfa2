"""PromptService — prepare generation prompts for unresolved links.

Only the prompt is produced; sending it to a text-generation API and
writing the answer back into the vault belong to the host.
"""

from __future__ import annotations

from pathlib import PurePosixPath

from linkcurator.domain.prompts import PromptRenderError, placeholders, render_prompt
from linkcurator.services.base import BaseService
from linkcurator.services.contracts import PromptResultData, TemplatesResultData, dump_validated
from linkcurator.services.result import (
    INVALID_TEMPLATE,
    NO_TEMPLATES,
    UNKNOWN_TEMPLATE,
    ServiceResult,
)
from linkcurator.services.telemetry import traced


class PromptService(BaseService):
    """Lists prompt templates and renders them for a link."""

    @traced
    def templates(self) -> ServiceResult:
        """All configured templates, with the default one flagged."""
        gen = self._settings.generator
        default = gen.find_template(None)
        items = []
        for template in gen.templates:
            try:
                names = sorted(placeholders(template.prompt))
            except PromptRenderError:
                names = []
            items.append(
                {
                    "name": template.name,
                    "prompt": template.prompt,
                    "default": default is not None and template.name == default.name,
                    "placeholders": names,
                }
            )
        data = dump_validated(TemplatesResultData, {"count": len(items), "items": items})
        return ServiceResult(ok=True, op="templates", data=data)

    @traced
    def prompt_for(
        self,
        link_text: str,
        *,
        template: str | None = None,
        snippets: list[str] | None = None,
    ) -> ServiceResult:
        """Render *template* (or the default one) for *link_text*.

        ``{{title}}`` is bound to the link text. ``{{context_snippets}}`` is
        bound only when *snippets* are given; otherwise the configured
        unmatched-placeholder policy decides what remains.
        """
        op = "prompt"
        gen = self._settings.generator
        if not gen.templates:
            return ServiceResult.failure(op, NO_TEMPLATES, "No prompt templates are configured")

        selected = gen.find_template(template)
        if selected is None:
            return ServiceResult.failure(
                op,
                UNKNOWN_TEMPLATE,
                f"No prompt template named {template!r}",
                available=[t.name for t in gen.templates],
            )

        bindings = {"title": link_text}
        if snippets:
            bindings["context_snippets"] = "\n\n".join(snippets)

        try:
            rendered = render_prompt(
                selected.prompt, bindings, unmatched=gen.unmatched_placeholders
            )
        except PromptRenderError as exc:
            return ServiceResult.failure(op, INVALID_TEMPLATE, str(exc), template=selected.name)

        data = dump_validated(
            PromptResultData,
            {
                "link_text": link_text,
                "template": selected.name,
                "prompt": rendered,
                "note_path": self.note_path(link_text),
            },
        )
        return ServiceResult(ok=True, op=op, data=data)

    def note_path(self, link_text: str) -> str:
        """Vault-relative path a note generated for *link_text* would get.

        Examples (with ``default_new_note_path = "Inbox"``)::

            note_path("Topic X")  -> "Inbox/Topic X.md"
        """
        folder = self._settings.generator.default_new_note_path.strip().strip("/")
        name = f"{link_text}.md"
        return str(PurePosixPath(folder) / name) if folder else name
