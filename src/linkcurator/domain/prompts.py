"""Prompt rendering — ``{{placeholder}}`` substitution for generation prompts.

Templates are user-authored strings such as
``"Write a note about {{title}}."``.  Rendering goes through a sandboxed
Jinja2 environment; what happens to placeholders without a binding is an
explicit policy:

- ``keep``: leave the placeholder verbatim (``{{context_snippets}}``).
- ``strip``: render it as an empty string.
"""

from __future__ import annotations

from collections.abc import Mapping
from enum import StrEnum
from typing import Any

from jinja2 import Undefined, meta
from jinja2.exceptions import TemplateError
from jinja2.sandbox import SandboxedEnvironment


class UnmatchedPolicy(StrEnum):
    """What to do with a placeholder that has no binding."""

    KEEP = "keep"
    STRIP = "strip"


class PromptRenderError(ValueError):
    """A template could not be parsed or rendered."""


class _KeepUndefined(Undefined):
    """Renders a missing variable back as its ``{{name}}`` placeholder."""

    __slots__ = ()

    def __str__(self) -> str:
        return "{{" + str(self._undefined_name) + "}}"


_UNDEFINED_FOR: dict[UnmatchedPolicy, type[Undefined]] = {
    UnmatchedPolicy.KEEP: _KeepUndefined,
    UnmatchedPolicy.STRIP: Undefined,
}


# Only {{ ... }} is template syntax. Block and comment delimiters are moved
# to private-use code points so prose like "{#tag}" or "{% raw %}" stays literal.
_BLOCK_START, _BLOCK_END = "\ue000%", "%\ue000"
_COMMENT_START, _COMMENT_END = "\ue000#", "#\ue000"


def _environment(policy: UnmatchedPolicy) -> SandboxedEnvironment:
    return SandboxedEnvironment(
        undefined=_UNDEFINED_FOR[policy],
        block_start_string=_BLOCK_START,
        block_end_string=_BLOCK_END,
        comment_start_string=_COMMENT_START,
        comment_end_string=_COMMENT_END,
        keep_trailing_newline=True,
        autoescape=False,
    )


def render_prompt(
    template: str,
    bindings: Mapping[str, Any],
    *,
    unmatched: str | UnmatchedPolicy = UnmatchedPolicy.KEEP,
) -> str:
    """Substitute *bindings* into the ``{{name}}`` placeholders of *template*.

    Raises:
        PromptRenderError: If the template is malformed or the policy is unknown.

    Examples:
        >>> render_prompt("About {{title}}.", {"title": "Topic X"})
        'About Topic X.'
        >>> render_prompt("{{title}} {{context_snippets}}", {"title": "X"})
        'X {{context_snippets}}'
        >>> render_prompt("{{title}} {{context_snippets}}", {"title": "X"}, unmatched="strip")
        'X '
    """
    try:
        policy = UnmatchedPolicy(unmatched)
    except ValueError as exc:
        msg = f"Unknown unmatched-placeholder policy: {unmatched!r}"
        raise PromptRenderError(msg) from exc

    try:
        return _environment(policy).from_string(template).render(**dict(bindings))
    except TemplateError as exc:
        msg = f"Invalid prompt template: {exc}"
        raise PromptRenderError(msg) from exc


def placeholders(template: str) -> set[str]:
    """Names of the variables referenced by *template*.

    Examples:
        >>> sorted(placeholders("{{title}} / {{ context_snippets }}"))
        ['context_snippets', 'title']
    """
    env = _environment(UnmatchedPolicy.STRIP)
    try:
        return set(meta.find_undeclared_variables(env.parse(template)))
    except TemplateError as exc:
        msg = f"Invalid prompt template: {exc}"
        raise PromptRenderError(msg) from exc
