"""Containment queries over a frozen ContainmentGraph.

Both counters only read the graph. Unknown bags count as 0 in both
directions; bag names are canonicalized first, so plural forms work.
"""

from __future__ import annotations

import networkx as nx

from bagrules.domain.bags import canonical_bag
from bagrules.infrastructure.graph.engine import COUNT_ATTR, ContainmentGraph


def unique_bags_containing(graph: ContainmentGraph, bag: str) -> int:
    """Count distinct bag types that can eventually contain *bag*.

    Breadth-first search over the reversed graph from *bag*; every visited
    bag other than *bag* itself is an ancestor.
    """
    bag = canonical_bag(bag)
    if bag not in graph:
        return 0
    return nx.bfs_tree(graph.graph, bag, reverse=True).number_of_nodes() - 1


def bags_contained_by(graph: ContainmentGraph, bag: str) -> int:
    """Count individual bags nested at any depth inside one *bag*.

    ``total(b) = sum(count * (1 + total(inner)))`` over the direct contents
    of ``b``. Evaluated bottom-up over a DFS post-order of the bags
    reachable from *bag*, so each bag is totalled once and every inner
    bag is totalled before its container.
    """
    bag = canonical_bag(bag)
    if bag not in graph:
        return 0

    g = graph.graph
    totals: dict[str, int] = {}
    for node in nx.dfs_postorder_nodes(g, source=bag):
        totals[node] = sum(
            attrs[COUNT_ATTR] * (1 + totals[inner]) for inner, attrs in g.adj[node].items()
        )
    return totals[bag]
