"""The bagrules command: answer a containment query for a rules file."""

from __future__ import annotations

from pathlib import Path

import click

from bagrules import __version__
from bagrules.commands._context import AppContext
from bagrules.commands._options import examples_option
from bagrules.config.settings import BagRulesSettings
from bagrules.services.rules import BagRulesService

_EXAMPLES = """\
  bagrules rules.txt
  bagrules rules.txt --part-2
  bagrules rules.txt -p --bag "dark olive bag"
  bagrules --json rules.txt
  bagrules -v --log-json rules.txt -p"""


@click.command()
@examples_option(_EXAMPLES)
@click.version_option(version=__version__, prog_name="bagrules")
@click.argument("file", type=click.Path(path_type=Path))
@click.option(
    "-p",
    "--part-2",
    "part_2",
    is_flag=True,
    help="Count the bags inside the target bag instead of the bags that can contain it.",
)
@click.option("--bag", default=None, help="Target bag (default: [query] target from config).")
@click.option("--json", "json_output", is_flag=True, help="Structured JSON output.")
@click.option("-v", "--verbose", is_flag=True, help="Debug logging and timing telemetry.")
@click.option("--log-json", is_flag=True, help="Structured JSON log output to stderr.")
@click.option("-c", "--config", "config_path", default=None, help="Override config file path.")
def cli(
    file: Path,
    part_2: bool,
    bag: str | None,
    json_output: bool,
    verbose: bool,
    log_json: bool,
    config_path: str | None,
) -> None:
    """Answer bag-containment queries for the rules in FILE.

    By default prints how many bag types can eventually contain the target
    bag. With --part-2, prints how many bags one target bag holds.
    """
    settings = BagRulesSettings.from_cli(
        config_path=config_path,
        json_output=json_output,
        verbose=verbose,
        log_json=log_json,
    )
    app = AppContext(settings)

    service = BagRulesService.from_file(file)
    if not isinstance(service, BagRulesService):
        app.emit(service)
        return

    target = bag if bag is not None else settings.query.target
    app.emit(service.query(target, part_2=part_2))
