"""AppContext — shared Click context for all commands.

Created once by the root CLI group and handed to subcommands via
``@click.pass_obj``.  Owns the scan cache for the invocation, builds the
vault corpus lazily, and centralizes result emission (stdout/stderr
routing + exit codes).
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any

import anyio
import click

from linkcurator.output.formatters import OutputSettings, format_result
from linkcurator.services.cache import ScanCache

if TYPE_CHECKING:
    from collections.abc import Awaitable, Callable

    from linkcurator.config.settings import CuratorSettings
    from linkcurator.infrastructure.corpus import VaultCorpus
    from linkcurator.services.curator import CuratorService
    from linkcurator.services.prompt import PromptService
    from linkcurator.services.result import ServiceResult


class AppContext:
    """Shared context flowing through Click's command hierarchy.

    The corpus is created on first use so ``--help`` and ``--version``
    never touch the vault directory.
    """

    def __init__(self, settings: CuratorSettings) -> None:
        self.settings = settings
        self.cache = ScanCache()
        self._corpus: VaultCorpus | None = None

        from linkcurator.config.logging import configure_logging

        configure_logging(verbose=settings.verbose, log_json=settings.log_json)

        if settings.verbose:
            from linkcurator.services.telemetry import enable_telemetry

            enable_telemetry()

    @property
    def corpus(self) -> VaultCorpus:
        """The vault corpus (created lazily on first access)."""
        if self._corpus is None:
            from linkcurator.infrastructure.corpus import VaultCorpus

            vault = self.settings.vault
            self._corpus = VaultCorpus(
                self.settings.vault_root,
                extensions=vault.extensions,
                skip_dirs=vault.skip_dirs,
            )
        return self._corpus

    def curator(self) -> CuratorService:
        from linkcurator.services.curator import CuratorService

        return CuratorService(self.settings, self.corpus, cache=self.cache)

    def prompts(self) -> PromptService:
        from linkcurator.services.prompt import PromptService

        return PromptService(self.settings)

    def run(self, func: Callable[..., Awaitable[ServiceResult]], **kwargs: Any) -> ServiceResult:
        """Run an async service method to completion on a fresh event loop."""

        async def _call() -> ServiceResult:
            return await func(**kwargs)

        return anyio.run(_call)

    def emit(self, result: ServiceResult) -> None:
        """Format and output a ServiceResult with correct exit semantics.

        * Success (``result.ok``): writes to stdout, returns normally.
          Warnings go to stderr so they don't pollute piped output.
        * Failure: writes to stderr, exits with code 1.
        """
        settings = OutputSettings(
            json_output=self.settings.json_output,
            quiet=self.settings.quiet,
            verbose=self.settings.verbose,
        )
        output = format_result(result, settings=settings)
        if result.ok:
            click.echo(output)
            # In JSON mode, warnings are already in the serialized payload.
            if not settings.json_output:
                for warning in result.warnings:
                    click.echo(f"WARNING: {warning}", err=True)
        else:
            click.echo(output, err=True)
            raise SystemExit(1)
