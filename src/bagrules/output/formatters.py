"""Render a ServiceResult as CLI output."""

from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from bagrules.services.result import ServiceResult


def format_result(result: ServiceResult, *, json_output: bool = False) -> str:
    """The bare count, ``ERROR: <message>``, or the whole result as JSON."""
    if json_output:
        return result.model_dump_json(indent=2)
    if not result.ok:
        return f"ERROR: {result.error.message if result.error else 'Unknown error'}"
    return str(result.data.get("count", ""))
