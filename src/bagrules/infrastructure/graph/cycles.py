"""Cycle detection over the unweighted containment skeleton.

A cyclic rule set never produces a usable graph. When several cycles
exist, the shortest one (fewest bags) is reported.

Tie-break: a cycle is written starting from its lexicographically smallest
bag. Start bags are tried in sorted order and each search expands
successors in sorted order, so among equally short cycles the one with the
smallest start bag wins, then the first one found by breadth-first search.
"""

from __future__ import annotations

import logging
from collections import deque
from collections.abc import Hashable

import networkx as nx

from bagrules.domain.errors import RulesCycle, RulesError

logger = logging.getLogger(__name__)


def _shortest_return_path(
    g: nx.DiGraph,
    start: str,
    component: dict[Hashable, int],
) -> list[str] | None:
    """BFS from *start* back to itself through bags sorting after *start*.

    Only bags in *start*'s strongly connected component can lie on a cycle
    through it. Returns the cycle as ``[start, ..., last]`` or None.
    """
    scc = component[start]
    parents: dict[str, str | None] = {start: None}
    queue: deque[str] = deque([start])
    while queue:
        node = queue.popleft()
        for succ in sorted(g.successors(node)):
            if succ == start:
                path = [node]
                while (parent := parents[path[-1]]) is not None:
                    path.append(parent)
                path.reverse()
                return path
            if succ > start and succ not in parents and component[succ] == scc:
                parents[succ] = node
                queue.append(succ)
    return None


def find_shortest_cycle(g: nx.DiGraph) -> tuple[str, ...] | None:
    """Return the shortest simple cycle in *g*, or None if *g* is acyclic.

    The returned tuple lists each bag once, in containment order; the
    last bag contains the first.
    """
    if nx.is_directed_acyclic_graph(g):
        return None

    component: dict[Hashable, int] = {}
    for index, members in enumerate(nx.strongly_connected_components(g)):
        for node in members:
            component[node] = index

    best: list[str] | None = None
    for start in sorted(g.nodes):
        path = _shortest_return_path(g, start, component)
        if path is not None and (best is None or len(path) < len(best)):
            best = path
            if len(best) == 1:
                break
    # A non-DAG always has a cycle.
    assert best is not None
    return tuple(best)


def ensure_acyclic(g: nx.DiGraph) -> None:
    """Raise ``RulesError(RulesCycle(...))`` if *g* has any cycle."""
    cycle = find_shortest_cycle(g)
    if cycle is None:
        return
    logger.debug("Rules cycle detected: %s", " -> ".join(cycle))
    raise RulesError(RulesCycle(cycle))
