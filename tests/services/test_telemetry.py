"""Tests for query spans: Span counters, trace_span nesting, @traced."""

from __future__ import annotations

import time
from collections.abc import Iterator

import pytest

from bagrules.services.result import ServiceError, ServiceResult
from bagrules.services.telemetry import (
    Span,
    _active,
    enable_telemetry,
    trace_span,
    traced,
)


@pytest.fixture
def root_span() -> Iterator[Span]:
    """Telemetry on, with a root span already active."""
    enable_telemetry()
    root = Span(name="root")
    token = _active.set(root)
    yield root
    _active.reset(token)


class TestSpan:
    def test_unfinished_span_has_zero_duration(self) -> None:
        assert Span(name="stage").duration_ms == 0.0

    def test_finished_span_has_duration(self) -> None:
        span = Span(name="stage")
        time.sleep(0.005)
        span.finished = time.perf_counter()
        assert span.duration_ms > 0

    def test_counters_skip_unset_fields(self) -> None:
        assert Span(name="stage", bags=9).counters() == {"bags": 9}

    def test_to_dict_without_counters_or_children(self) -> None:
        d = Span(name="root").to_dict()
        assert d == {"name": "root", "duration_ms": 0.0}

    def test_to_dict_nests_children_with_counters(self) -> None:
        root = Span(name="root")
        root.children.append(Span(name="build_graph", bags=9, edges=13))
        d = root.to_dict()
        assert d["children"][0]["name"] == "build_graph"
        assert d["children"][0]["bags"] == 9
        assert d["children"][0]["edges"] == 13
        assert "count" not in d["children"][0]


class TestTraceSpan:
    def test_disabled_yields_none(self) -> None:
        with trace_span("stage") as span:
            assert span is None

    def test_enabled_without_root_yields_none(self) -> None:
        enable_telemetry()
        with trace_span("stage") as span:
            assert span is None

    def test_disabled_again_yields_none(self, root_span: Span) -> None:
        enable_telemetry(False)
        with trace_span("stage") as span:
            assert span is None
        assert root_span.children == []

    def test_nested_spans(self, root_span: Span) -> None:
        with trace_span("a"):
            with trace_span("b") as inner:
                assert inner is not None
        assert [c.name for c in root_span.children] == ["a"]
        assert [c.name for c in root_span.children[0].children] == ["b"]
        assert root_span.children[0].finished is not None

    def test_active_span_restored(self, root_span: Span) -> None:
        with trace_span("a"):
            assert _active.get() is not root_span
        assert _active.get() is root_span


class TestTracedDecorator:
    def test_noop_when_disabled(self) -> None:
        @traced
        def op() -> ServiceResult:
            return ServiceResult(ok=True, op="test")

        assert op().meta is None

    def test_injects_meta_and_children(self) -> None:
        @traced
        def op() -> ServiceResult:
            with trace_span("count") as span:
                assert span is not None
                span.count = 4
            return ServiceResult(ok=True, op="test", meta={"existing": "data"})

        enable_telemetry()
        result = op()
        assert result.meta is not None
        assert result.meta["existing"] == "data"
        assert result.meta["telemetry"]["name"].endswith("op")
        assert result.meta["telemetry"]["children"] == [
            {"name": "count", "duration_ms": pytest.approx(0.0, abs=50.0), "count": 4}
        ]

    def test_error_result_gets_telemetry(self) -> None:
        @traced
        def op() -> ServiceResult:
            return ServiceResult(
                ok=False, op="test", error=ServiceError(code="FAIL", message="oops")
            )

        enable_telemetry()
        result = op()
        assert not result.ok
        assert result.meta is not None
        assert "telemetry" in result.meta

    def test_exception_propagates(self) -> None:
        @traced
        def op() -> ServiceResult:
            msg = "boom"
            raise ValueError(msg)

        enable_telemetry()
        with pytest.raises(ValueError, match="boom"):
            op()
        assert _active.get() is None
