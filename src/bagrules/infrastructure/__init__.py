"""Infrastructure layer — the NetworkX-backed containment graph.

This layer depends on stdlib, NetworkX, and the pure domain layer.
It must never import from services, commands, or output.
"""
