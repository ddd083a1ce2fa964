"""Shared pytest fixtures and rule texts for bagrules tests."""

from __future__ import annotations

import logging
from collections.abc import Iterator
from pathlib import Path

import pytest
from click.testing import CliRunner

from bagrules.services.telemetry import _active, enable_telemetry

EXAMPLE_RULES = """\
light red bags contain 1 bright white bag, 2 muted yellow bags.
dark orange bags contain 3 bright white bags, 4 muted yellow bags.
bright white bags contain 1 shiny gold bag.
muted yellow bags contain 2 shiny gold bags, 9 faded blue bags.
shiny gold bags contain 1 dark olive bag, 2 vibrant plum bags.
dark olive bags contain 3 faded blue bags, 4 dotted black bags.
vibrant plum bags contain 5 faded blue bags, 6 dotted black bags.
faded blue bags contain no other bags.
dotted black bags contain no other bags."""

CHAIN_RULES = """\
shiny gold bags contain 2 dark red bags.
dark red bags contain 2 dark orange bags.
dark orange bags contain 2 dark yellow bags.
dark yellow bags contain 2 dark green bags.
dark green bags contain 2 dark blue bags.
dark blue bags contain 2 dark violet bags.
dark violet bags contain no other bags."""

INVALID_RULE = "crazy purple bags play bagpipes."

RULE_FORMAT_TEMPLATE = (
    "<adjective> <colour> bags contain <number> <adjective> <colour> (bag|bags)."
)


@pytest.fixture(autouse=True)
def _reset_global_state() -> Iterator[None]:
    """Undo logging and telemetry set up by CLI invocations."""
    root = logging.getLogger()
    original_handlers = root.handlers[:]
    original_level = root.level
    pkg = logging.getLogger("bagrules")
    pkg_level = pkg.level
    yield
    root.handlers = original_handlers
    root.setLevel(original_level)
    pkg.setLevel(pkg_level)
    enable_telemetry(False)
    _active.set(None)


@pytest.fixture
def cli_runner() -> CliRunner:
    """Provide a Click CLI test runner."""
    return CliRunner()


@pytest.fixture
def _isolated_cwd(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    """Run from an empty temp directory with no config or env overrides.

    Use via ``@pytest.mark.usefixtures("_isolated_cwd")``.
    """
    for var in ("BAGRULES_CONFIG", "BAGRULES_QUERY__TARGET", "BAGRULES_JSON_OUTPUT"):
        monkeypatch.delenv(var, raising=False)
    monkeypatch.chdir(tmp_path)


@pytest.fixture
def rules_file(tmp_path: Path) -> Path:
    """Path for a rules file inside the temp directory (not yet written)."""
    return tmp_path / "input.txt"


@pytest.fixture
def example_rules() -> str:
    """The nine-rule example: 4 containers and 32 contents for shiny gold."""
    return EXAMPLE_RULES


@pytest.fixture
def chain_rules() -> str:
    """A seven-rule linear chain, each bag holding 2 of the next."""
    return CHAIN_RULES


@pytest.fixture
def invalid_rule() -> str:
    return INVALID_RULE


@pytest.fixture
def rule_format_template() -> str:
    return RULE_FORMAT_TEMPLATE
