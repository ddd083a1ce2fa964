"""Per-invocation state for the ``bagrules`` command."""

from __future__ import annotations

from typing import TYPE_CHECKING

import click

from bagrules.config.logging import configure_logging
from bagrules.output.formatters import format_result
from bagrules.services.telemetry import enable_telemetry

if TYPE_CHECKING:
    from bagrules.config.settings import BagRulesSettings
    from bagrules.services.result import ServiceResult


class AppContext:
    """Resolved settings for one run; owns logging setup and result output."""

    def __init__(self, settings: BagRulesSettings) -> None:
        self.settings = settings
        configure_logging(verbose=settings.verbose, log_json=settings.log_json)
        enable_telemetry(settings.verbose)

    def emit(self, result: ServiceResult) -> None:
        """Print *result*: stdout on success, stderr plus exit status 1 on failure."""
        text = format_result(result, json_output=self.settings.json_output)
        click.echo(text, err=not result.ok)
        if not result.ok:
            raise SystemExit(1)
