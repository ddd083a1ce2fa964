"""Bag identifiers — the canonical "<adjective> <colour> bag" names.

INVARIANT: Graph nodes are always canonical (singular) identifiers.
Equality is exact string equality after canonicalization.
"""

from __future__ import annotations

import re

# "<adjective> <colour> bag" or "<adjective> <colour> bags"
BAG_PATTERN = re.compile(r"^[a-z]+ [a-z]+ bags?$")

# "<count> <adjective> <colour> bag(s)"; count is a positive integer without leading zero.
COUNTED_BAG_PATTERN = re.compile(r"^(?P<count>[1-9][0-9]*) (?P<bag>[a-z]+ [a-z]+ bags?)$")


def canonical_bag(name: str) -> str:
    """Return the singular form of a bag name by dropping one trailing ``s``.

    Examples:
        >>> canonical_bag("shiny gold bags")
        'shiny gold bag'
        >>> canonical_bag("shiny gold bag")
        'shiny gold bag'
    """
    return name.removesuffix("s")


def plural_bag(bag: str) -> str:
    """Return the plural form of a canonical bag identifier."""
    return f"{bag}s"


def is_bag_name(name: str) -> bool:
    """Check whether *name* is a well-formed (singular or plural) bag name."""
    return BAG_PATTERN.match(name) is not None
