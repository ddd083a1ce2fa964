"""Rule parsing — turn rule text into containment edges.

Pure functions, no infrastructure dependencies. The whole text is parsed
atomically: the first line that breaks the grammar aborts with
``InvalidRule`` and no partial result is returned.

Grammar per line::

    rule         := outer_clause " contain " inner_clause "."
    outer_clause := word " " word " bag" ["s"]
    inner_clause := "no other bags" | inner_item (", " inner_item)*
    inner_item   := count " " word " " word " bag" ["s"]
"""

from __future__ import annotations

import logging
from dataclasses import dataclass

from bagrules.domain.bags import COUNTED_BAG_PATTERN, canonical_bag, is_bag_name
from bagrules.domain.errors import InvalidRule, RulesError

logger = logging.getLogger(__name__)

CONTAIN_SEPARATOR = " contain "
NO_OTHER_BAGS = "no other bags."
_ITEM_SEPARATOR = ", "


@dataclass(frozen=True)
class ContainmentEdge:
    """One *outer* bag directly holds *count* bags of type *inner*."""

    outer: str
    inner: str
    count: int


@dataclass(frozen=True)
class ParsedRule:
    """A single parsed line: the declared outer bag and its direct contents."""

    outer: str
    edges: tuple[ContainmentEdge, ...] = ()


def parse_rule(line: str) -> ParsedRule:
    """Parse one rule line.

    Raises:
        RulesError: carrying ``InvalidRule(line)`` if any part of the line
            breaks the grammar. The full input line is reported, never
            the offending sub-item.
    """
    outer_clause, sep, inner_clause = line.partition(CONTAIN_SEPARATOR)
    if not sep or not is_bag_name(outer_clause):
        raise RulesError(InvalidRule(line))

    outer = canonical_bag(outer_clause)
    if inner_clause == NO_OTHER_BAGS:
        return ParsedRule(outer=outer)

    if not inner_clause.endswith("."):
        raise RulesError(InvalidRule(line))

    edges: list[ContainmentEdge] = []
    for item in inner_clause.removesuffix(".").split(_ITEM_SEPARATOR):
        match = COUNTED_BAG_PATTERN.match(item)
        if match is None:
            raise RulesError(InvalidRule(line))
        edges.append(
            ContainmentEdge(
                outer=outer,
                inner=canonical_bag(match.group("bag")),
                count=int(match.group("count")),
            )
        )
    return ParsedRule(outer=outer, edges=tuple(edges))


def parse_rules(text: str) -> list[ParsedRule]:
    """Parse newline-separated rule text.

    Empty lines (such as the one left by a trailing newline) are skipped;
    every other line must match the grammar exactly.
    """
    rules = [parse_rule(line) for line in text.split("\n") if line]
    logger.debug(
        "Parsed %d rules with %d edges",
        len(rules),
        sum(len(rule.edges) for rule in rules),
    )
    return rules
