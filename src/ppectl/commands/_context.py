"""AppContext — shared Click context for all commands.

Created once by the root CLI group and flows to all subcommands via
``@click.pass_obj``. Owns the process-lifetime :class:`Inventory` and
centralizes result emission (stdout/stderr routing + exit codes).
"""

from __future__ import annotations

from typing import TYPE_CHECKING

import click

from ppectl.output.formatters import OutputSettings, format_result

if TYPE_CHECKING:
    from ppectl.config.settings import PpeSettings
    from ppectl.infrastructure.inventory import Inventory
    from ppectl.services.result import ServiceResult


class AppContext:
    """Shared context flowing through Click's command hierarchy.

    The inventory is created lazily on first use so ``--help`` and
    ``--version`` never build stores.
    """

    def __init__(self, settings: PpeSettings) -> None:
        self.settings = settings
        self._inventory: Inventory | None = None

        from ppectl.config.logging import configure_logging

        configure_logging(
            verbose=settings.verbose, quiet=settings.quiet, log_json=settings.log_json
        )

    @property
    def inventory(self) -> Inventory:
        """The inventory instance (created lazily on first access)."""
        if self._inventory is None:
            from ppectl.infrastructure.inventory import Inventory

            self._inventory = Inventory(self.settings)
        return self._inventory

    @property
    def output_settings(self) -> OutputSettings:
        return OutputSettings(
            json_output=self.settings.json_output,
            quiet=self.settings.quiet,
            verbose=self.settings.verbose,
            display=self.settings.display,
        )

    def emit(self, result: ServiceResult, *, fatal: bool = True) -> None:
        """Format and output a ServiceResult with correct exit semantics.

        * Success (``result.ok``): writes to stdout, returns normally.
          Warnings are emitted to stderr so they don't pollute piped output.
        * Failure: writes to stderr; exits with code 1 when *fatal*.
          The interactive menu passes ``fatal=False`` and keeps running.
        """
        settings = self.output_settings
        output = format_result(result, settings=settings)
        if result.ok:
            click.echo(output)
            # In JSON mode, warnings are already in the serialized payload.
            if not settings.json_output and not settings.verbose:
                for warning in result.warnings:
                    click.echo(f"WARNING: {warning}", err=True)
        else:
            click.echo(output, err=True)
            if fatal:
                raise SystemExit(1)
