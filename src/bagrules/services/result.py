"""What BagRulesService hands back to the CLI.

Every query answers with a frozen ``ServiceResult``. Successful queries put
``{"bag": ..., "count": ...}`` in ``data``; failed ones carry a
``ServiceError`` whose ``code`` is ``INVALID_RULE``, ``RULES_CYCLE`` or
``READ_FAILED``.
"""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel, ConfigDict, Field


class ServiceError(BaseModel):
    """Why a query failed, with the offending line, cycle or path in ``detail``."""

    model_config = ConfigDict(frozen=True)

    code: str
    message: str
    detail: dict[str, Any] = Field(default_factory=dict)


class ServiceResult(BaseModel):
    """Outcome of one query; ``meta["telemetry"]`` holds timing spans when verbose."""

    model_config = ConfigDict(frozen=True)

    ok: bool
    op: str
    data: dict[str, Any] = Field(default_factory=dict)
    error: ServiceError | None = None
    meta: dict[str, Any] | None = None
