"""Service layer — graph queries and ServiceResult-returning operations.

Services may import from domain and infrastructure layers.
They must never import from commands or output.
"""

from bagrules.services.counting import bags_contained_by, unique_bags_containing
from bagrules.services.rules import BagRules, parse

__all__ = ["BagRules", "bags_contained_by", "parse", "unique_bags_containing"]
