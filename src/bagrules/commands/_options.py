"""Shared click options for bagrules commands."""

from __future__ import annotations

from collections.abc import Callable
from typing import Any

import click


def examples_option(examples: str) -> Callable[[Callable[..., Any]], Callable[..., Any]]:
    """Add an eager ``--examples`` flag that prints *examples* and exits."""

    def show(ctx: click.Context, _param: click.Parameter, value: bool) -> None:
        if not value or ctx.resilient_parsing:
            return
        click.echo(f"Examples for '{ctx.command_path}':\n")
        click.echo(examples)
        ctx.exit(0)

    return click.option(
        "--examples",
        is_flag=True,
        expose_value=False,
        is_eager=True,
        callback=show,
        help="Show usage examples.",
    )
