"""Output mode dispatch.

The CLI renders ServiceResult for humans (Rich tables and panels) or
machines (--json). The formatter layer picks the mode; the renderers
module owns the human layouts.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from pydantic import BaseModel

from linkcurator.output.renderers import render_quiet, render_result

if TYPE_CHECKING:
    from linkcurator.services.result import ServiceResult


class OutputSettings(BaseModel):
    """How a result should be presented."""

    model_config = {"frozen": True}

    json_output: bool = False
    quiet: bool = False
    verbose: bool = False


def format_result(result: ServiceResult, *, settings: OutputSettings | None = None) -> str:
    """Format a ServiceResult for display.

    Precedence: JSON beats quiet, quiet beats the Rich renderers.
    """
    settings = settings or OutputSettings()
    if settings.json_output:
        return result.model_dump_json(indent=2)
    if settings.quiet:
        return render_quiet(result)
    return render_result(result, verbose=settings.verbose)
