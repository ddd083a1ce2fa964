"""Rule-set errors — a closed variant carried by a single exception type.

Both variants are user-facing: they describe a problem with the input
text, not a defect. Callers dispatch on the variant with ``match``::

    try:
        rules = BagRules.parse(text)
    except RulesError as exc:
        match exc.error:
            case InvalidRule(line=line): ...
            case RulesCycle(cycle=cycle): ...
"""

from __future__ import annotations

from dataclasses import dataclass
from itertools import pairwise
from typing import TypeAlias

from bagrules.domain.bags import plural_bag

RULE_FORMAT = '"<adjective> <colour> bags contain <number> <adjective> <colour> (bag|bags)."'

_INVALID_RULE_TEMPLATE = """\
The rule:
    "{rule}"
does not have the format:
    {format}"""


@dataclass(frozen=True)
class InvalidRule:
    """A single line failed the rule grammar."""

    line: str  # verbatim offending line

    @property
    def message(self) -> str:
        return _INVALID_RULE_TEMPLATE.format(rule=self.line, format=RULE_FORMAT)


@dataclass(frozen=True)
class RulesCycle:
    """The rule set contains a cycle; *cycle* is its shortest one."""

    cycle: tuple[str, ...]  # canonical bags in containment order, start not repeated

    @property
    def message(self) -> str:
        closed = (*self.cycle, self.cycle[0])
        steps = ", ".join(
            f"{plural_bag(outer)} contain {plural_bag(inner)}"
            for outer, inner in pairwise(closed)
        )
        return f"The rules have a cycle: {steps}"


RuleError: TypeAlias = InvalidRule | RulesCycle


class RulesError(Exception):
    """Raised when rule text cannot produce a usable containment graph."""

    def __init__(self, error: RuleError) -> None:
        super().__init__(error.message)
        self.error = error

    @property
    def message(self) -> str:
        return self.error.message
