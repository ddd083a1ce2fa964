"""BagRules — parse → build graph → cycle check → query.

:func:`parse` and :class:`BagRules` are the core surface and raise
:class:`~bagrules.domain.errors.RulesError`. :class:`BagRulesService`
wraps them for the CLI and returns ServiceResult, mapping the error
variant to a ServiceError.
"""

from __future__ import annotations

import logging
from pathlib import Path

from bagrules.domain.bags import canonical_bag
from bagrules.domain.errors import InvalidRule, RulesCycle, RulesError
from bagrules.domain.rules import parse_rules
from bagrules.infrastructure.graph.engine import ContainmentGraph, ContainmentGraphBuilder
from bagrules.services.counting import bags_contained_by, unique_bags_containing
from bagrules.services.result import ServiceError, ServiceResult
from bagrules.services.telemetry import trace_span, traced

logger = logging.getLogger(__name__)


def parse(rule_text: str) -> ContainmentGraph:
    """Parse *rule_text* into a frozen, acyclic ContainmentGraph.

    Raises:
        RulesError: ``InvalidRule`` for the first malformed line, or
            ``RulesCycle`` for the shortest cycle in the rules.
    """
    with trace_span("parse_rules") as span:
        rules = parse_rules(rule_text)
        if span:
            span.rules = len(rules)

    with trace_span("build_graph") as span:
        graph = ContainmentGraphBuilder.from_rules(rules)
        if span:
            span.bags = graph.number_of_nodes()
            span.edges = graph.number_of_edges()
    return graph


class BagRules:
    """A parsed, cycle-free rule set and its two containment queries."""

    def __init__(self, graph: ContainmentGraph) -> None:
        self._graph = graph

    @classmethod
    def parse(cls, rule_text: str) -> BagRules:
        return cls(parse(rule_text))

    @property
    def graph(self) -> ContainmentGraph:
        return self._graph

    def unique_bags_containing(self, bag: str) -> int:
        return unique_bags_containing(self._graph, bag)

    def bags_contained_by(self, bag: str) -> int:
        return bags_contained_by(self._graph, bag)


def _rules_error(op: str, exc: RulesError) -> ServiceResult:
    """Translate a RulesError variant into a failed ServiceResult."""
    match exc.error:
        case InvalidRule(line=line):
            error = ServiceError(code="INVALID_RULE", message=exc.message, detail={"line": line})
        case RulesCycle(cycle=cycle):
            error = ServiceError(
                code="RULES_CYCLE", message=exc.message, detail={"cycle": list(cycle)}
            )
    return ServiceResult(ok=False, op=op, error=error)


class BagRulesService:
    """Answers containment queries for one rule text.

    Parsing is deferred to the first query; a parse failure is reported
    by every query as a failed ServiceResult.
    """

    def __init__(self, rule_text: str) -> None:
        self._rule_text = rule_text
        self._rules: BagRules | None = None

    @classmethod
    def from_text(cls, rule_text: str) -> BagRulesService:
        return cls(rule_text)

    @staticmethod
    def from_file(path: Path) -> BagRulesService | ServiceResult:
        """Read rules from *path*.

        Returns a failed ``ServiceResult`` (``READ_FAILED``) if the file
        cannot be read as UTF-8 text.
        """
        try:
            text = Path(path).read_text(encoding="utf-8")
        except (OSError, UnicodeDecodeError) as exc:
            logger.debug("Failed to read %s", path, exc_info=True)
            return ServiceResult(
                ok=False,
                op="read_rules",
                error=ServiceError(
                    code="READ_FAILED",
                    message=f"Failed to read file {path}.",
                    detail={"path": str(path), "reason": str(exc)},
                ),
            )
        return BagRulesService(text)

    def _load(self) -> BagRules:
        if self._rules is None:
            self._rules = BagRules.parse(self._rule_text)
        return self._rules

    @traced
    def unique_bags_containing(self, bag: str) -> ServiceResult:
        """Count distinct bag types that can eventually contain *bag*."""
        op = "unique_bags_containing"
        try:
            rules = self._load()
        except RulesError as exc:
            return _rules_error(op, exc)

        with trace_span("count") as span:
            count = rules.unique_bags_containing(bag)
            if span:
                span.count = count
        return ServiceResult(ok=True, op=op, data={"bag": canonical_bag(bag), "count": count})

    @traced
    def bags_contained_by(self, bag: str) -> ServiceResult:
        """Count individual bags nested inside one *bag*."""
        op = "bags_contained_by"
        try:
            rules = self._load()
        except RulesError as exc:
            return _rules_error(op, exc)

        with trace_span("count") as span:
            count = rules.bags_contained_by(bag)
            if span:
                span.count = count
        return ServiceResult(ok=True, op=op, data={"bag": canonical_bag(bag), "count": count})

    def query(self, bag: str, *, part_2: bool = False) -> ServiceResult:
        """Part 1 counts containers of *bag*; part 2 counts its contents."""
        if part_2:
            return self.bags_contained_by(bag)
        return self.unique_bags_containing(bag)
