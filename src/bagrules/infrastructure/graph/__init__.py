"""Containment graph construction and cycle detection."""

from bagrules.infrastructure.graph.engine import ContainmentGraph, ContainmentGraphBuilder

__all__ = ["ContainmentGraph", "ContainmentGraphBuilder"]
