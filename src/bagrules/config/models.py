"""Pydantic configuration models with code-baked defaults.

Sparse TOML contract: defaults baked here, bagrules.toml only contains overrides.
"""

from __future__ import annotations

from pydantic import BaseModel

DEFAULT_TARGET_BAG = "shiny gold bag"


class QueryConfig(BaseModel):
    """[query] section."""

    model_config = {"frozen": True}

    target: str = DEFAULT_TARGET_BAG

