"""AppContext — shared Click context for all commands.

Created once by the root CLI group and flows to all subcommands via
``@click.pass_obj``.  Provides centralized result emission
(stdout/stderr routing + exit codes).
"""

from __future__ import annotations

from typing import TYPE_CHECKING

import click

from valgen.output.formatters import OutputSettings, format_result

if TYPE_CHECKING:
    from valgen.config.settings import ValgenSettings
    from valgen.services.result import ServiceResult


class AppContext:
    """Shared context flowing through Click's command hierarchy.

    Subcommands access it via ``@click.pass_obj``.
    """

    def __init__(self, settings: ValgenSettings) -> None:
        self.settings = settings

        # Configure structured logging
        from valgen.config.logging import configure_logging

        configure_logging(verbose=settings.verbose, log_json=settings.log_json)

    @property
    def output_settings(self) -> OutputSettings:
        return OutputSettings(
            json_output=self.settings.json_output,
            quiet=self.settings.quiet,
            verbose=self.settings.verbose,
        )

    def emit(self, result: ServiceResult) -> None:
        """Format and output a ServiceResult with correct exit semantics.

        * Success (``result.ok``): writes to stdout, returns normally.
          Warnings are emitted to stderr so they don't pollute piped output.
        * Failure: writes to stderr, exits with code 1.
        """
        settings = self.output_settings
        output = format_result(result, settings=settings)
        if result.ok:
            click.echo(output)
            # In JSON mode, warnings are already in the serialized payload.
            if not settings.json_output:
                self.emit_warnings(result)
        else:
            click.echo(output, err=True)
            raise SystemExit(1)

    def emit_source(self, result: ServiceResult) -> None:
        """Write a generated module to stdout verbatim.

        Used for ``generate -o -`` so the output can be redirected straight
        into a file. JSON mode and failures fall back to :meth:`emit`.
        """
        if not result.ok or self.settings.json_output:
            self.emit(result)
            return
        click.echo(result.data["source"], nl=False)
        self.emit_warnings(result)

    @staticmethod
    def emit_warnings(result: ServiceResult) -> None:
        for warning in result.warnings:
            click.echo(f"WARNING: {warning}", err=True)
