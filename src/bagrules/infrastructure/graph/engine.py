"""ContainmentGraph — frozen NetworkX DiGraph of bag-containment rules.

Built once per parse by :class:`ContainmentGraphBuilder`, cycle-checked,
then frozen. Nodes are canonical bag identifiers; each edge carries a
``count`` attribute (>= 1).

INVARIANT: A ContainmentGraph is acyclic and immutable. Any mutating
call on the exposed NetworkX graph raises ``networkx.NetworkXError``.
"""

from __future__ import annotations

import logging
from collections.abc import Iterable
from typing import TypeAlias

import networkx as nx

from bagrules.domain.rules import ContainmentEdge, ParsedRule
from bagrules.infrastructure.graph.cycles import ensure_acyclic

logger = logging.getLogger(__name__)

_Graph: TypeAlias = nx.DiGraph

COUNT_ATTR = "count"


class ContainmentGraphBuilder:
    """Mutable accumulator for containment edges."""

    def __init__(self) -> None:
        self._graph: _Graph = nx.DiGraph()

    def add_bag(self, bag: str) -> None:
        """Declare *bag* as a node even if it has no edges."""
        self._graph.add_node(bag)

    def put_edge(self, outer: str, inner: str, count: int) -> None:
        """Set the weight of ``outer -> inner``, replacing any earlier value."""
        if count < 1:
            msg = f"Edge count must be >= 1, got {count}"
            raise ValueError(msg)
        self._graph.add_edge(outer, inner, **{COUNT_ATTR: count})

    def add_rule(self, rule: ParsedRule) -> None:
        self.add_bag(rule.outer)
        for edge in rule.edges:
            self.put_edge(edge.outer, edge.inner, edge.count)

    def add_rules(self, rules: Iterable[ParsedRule]) -> ContainmentGraphBuilder:
        for rule in rules:
            self.add_rule(rule)
        return self

    def build(self) -> ContainmentGraph:
        """Cycle-check the accumulated edges and return a frozen snapshot.

        The builder keeps no reference to the snapshot's graph, so later
        builder calls cannot affect it.

        Raises:
            RulesError: carrying ``RulesCycle`` if the rules are cyclic.
        """
        ensure_acyclic(self._graph)
        snapshot: _Graph = nx.freeze(self._graph.copy())
        logger.debug(
            "Built containment graph: %d bags, %d edges",
            snapshot.number_of_nodes(),
            snapshot.number_of_edges(),
        )
        return ContainmentGraph(snapshot)

    @classmethod
    def from_rules(cls, rules: Iterable[ParsedRule]) -> ContainmentGraph:
        return cls().add_rules(rules).build()


class ContainmentGraph:
    """Read-only view over a frozen, acyclic containment DiGraph."""

    __slots__ = ("_graph",)

    def __init__(self, graph: _Graph) -> None:
        if not nx.is_frozen(graph):
            msg = "ContainmentGraph requires a frozen graph; use ContainmentGraphBuilder"
            raise TypeError(msg)
        self._graph = graph

    @property
    def graph(self) -> _Graph:
        """The frozen NetworkX graph (mutation raises NetworkXError)."""
        return self._graph

    def __contains__(self, bag: object) -> bool:
        return bag in self._graph

    def __len__(self) -> int:
        return self._graph.number_of_nodes()

    def contains(self, bag: str) -> bool:
        return bag in self._graph

    @property
    def nodes(self) -> frozenset[str]:
        return frozenset(self._graph.nodes)

    def number_of_nodes(self) -> int:
        return self._graph.number_of_nodes()

    def number_of_edges(self) -> int:
        return self._graph.number_of_edges()

    def successors(self, bag: str) -> list[tuple[str, int]]:
        """Direct contents of *bag* as ``(inner, count)`` pairs; empty if unknown."""
        if bag not in self._graph:
            return []
        return [(inner, attrs[COUNT_ATTR]) for inner, attrs in self._graph.adj[bag].items()]

    def predecessors(self, bag: str) -> list[str]:
        """Bags that directly contain *bag*; empty if unknown."""
        if bag not in self._graph:
            return []
        return list(self._graph.predecessors(bag))

    def edge_count(self, outer: str, inner: str) -> int | None:
        """Weight of ``outer -> inner``, or None if there is no such edge."""
        attrs = self._graph.get_edge_data(outer, inner)
        if attrs is None:
            return None
        return attrs[COUNT_ATTR]

    def edges(self) -> list[ContainmentEdge]:
        return [
            ContainmentEdge(outer=outer, inner=inner, count=count)
            for outer, inner, count in self._graph.edges(data=COUNT_ATTR)
        ]

    def __setattr__(self, name: str, value: object) -> None:
        if hasattr(self, "_graph"):
            msg = "ContainmentGraph is immutable"
            raise AttributeError(msg)
        object.__setattr__(self, name, value)

    def __repr__(self) -> str:
        return (
            f"ContainmentGraph(bags={self.number_of_nodes()}, edges={self.number_of_edges()})"
        )
