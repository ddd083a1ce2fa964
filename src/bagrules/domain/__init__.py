"""Domain layer — bag identifiers, rule grammar, and error variants.

This layer depends only on the standard library.
It must never import from services, infrastructure, commands, or config.
"""
