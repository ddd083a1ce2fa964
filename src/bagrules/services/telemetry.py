"""Per-query timing spans, switched on by ``--verbose``.

A ``@traced`` service method opens a root span; ``trace_span`` stages
(parse, build, count) nest under it. Each span records the rule, bag,
edge and result counts its stage saw. The finished tree lands in
``ServiceResult.meta["telemetry"]`` and the root is logged via structlog.
With telemetry off, both helpers cost one ContextVar lookup.
"""

from __future__ import annotations

import functools
import time
from collections.abc import Callable, Iterator
from contextlib import contextmanager
from contextvars import ContextVar
from dataclasses import dataclass, field, fields
from typing import Any, ParamSpec

import structlog

from bagrules.services.result import ServiceResult

_enabled: ContextVar[bool] = ContextVar("_telemetry_enabled", default=False)
_active: ContextVar[Span | None] = ContextVar("_active_span", default=None)

_P = ParamSpec("_P")


@dataclass
class Span:
    """One timed stage of a query and the sizes it handled."""

    name: str
    rules: int | None = None
    bags: int | None = None
    edges: int | None = None
    count: int | None = None
    children: list[Span] = field(default_factory=list)
    started: float = field(default_factory=time.perf_counter)
    finished: float | None = None

    @property
    def duration_ms(self) -> float:
        if self.finished is None:
            return 0.0
        return (self.finished - self.started) * 1000

    def counters(self) -> dict[str, int]:
        """The rule/bag/edge/count fields that were recorded."""
        return {
            f.name: value
            for f in fields(self)
            if f.name in ("rules", "bags", "edges", "count")
            and (value := getattr(self, f.name)) is not None
        }

    def to_dict(self) -> dict[str, Any]:
        result: dict[str, Any] = {
            "name": self.name,
            "duration_ms": round(self.duration_ms, 2),
            **self.counters(),
        }
        if self.children:
            result["children"] = [child.to_dict() for child in self.children]
        return result


@contextmanager
def trace_span(name: str) -> Iterator[Span | None]:
    """Time a stage under the active root span; yields None when not tracing."""
    parent = _active.get() if _enabled.get() else None
    if parent is None:
        yield None
        return

    span = Span(name=name)
    parent.children.append(span)
    token = _active.set(span)
    try:
        yield span
    finally:
        span.finished = time.perf_counter()
        _active.reset(token)


def _log_span(span: Span, *, ok: bool) -> None:
    structlog.get_logger("bagrules.telemetry").debug(
        "query.timed",
        query=span.name,
        duration_ms=round(span.duration_ms, 2),
        ok=ok,
        stages=[child.name for child in span.children],
        **{k: v for child in span.children for k, v in child.counters().items()},
    )


def traced(
    func: Callable[_P, ServiceResult],
) -> Callable[_P, ServiceResult]:
    """Wrap a service method in a root span and attach it to the result's meta."""

    @functools.wraps(func)
    def wrapper(*args: _P.args, **kwargs: _P.kwargs) -> ServiceResult:
        if not _enabled.get():
            return func(*args, **kwargs)

        span = Span(name=func.__qualname__)
        token = _active.set(span)
        try:
            result = func(*args, **kwargs)
        finally:
            span.finished = time.perf_counter()
            _active.reset(token)

        _log_span(span, ok=result.ok)
        meta = {**(result.meta or {}), "telemetry": span.to_dict()}
        return result.model_copy(update={"meta": meta})

    return wrapper


def enable_telemetry(enabled: bool = True) -> None:
    """Turn span collection on or off for the current context."""
    _enabled.set(enabled)
