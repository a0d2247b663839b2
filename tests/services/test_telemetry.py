"""Tests for Span, trace_span, and @traced."""

from __future__ import annotations

import time

import pytest

from display_icc.services.result import ServiceError, ServiceResult
from display_icc.services.telemetry import (
    Span,
    _current_span,
    enable_telemetry,
    get_current_span,
    trace_span,
    traced,
)


@pytest.fixture
def root_span() -> Span:
    """A root span installed as current, with telemetry on."""
    enable_telemetry()
    root = Span(name="root")
    _current_span.set(root)
    return root


class TestSpan:
    def test_open_span_has_zero_duration(self) -> None:
        assert Span(name="open").duration_ms == 0.0

    def test_duration_after_close(self) -> None:
        span = Span(name="timed")
        time.sleep(0.002)
        span.close()
        assert span.duration_ms > 0

    def test_close_is_idempotent(self) -> None:
        span = Span(name="timed")
        span.close()
        finished = span.finished
        span.close()
        assert span.finished == finished

    def test_to_dict_omits_unset_fields(self) -> None:
        span = Span(name="leaf")
        span.close()
        assert set(span.to_dict()) == {"name", "duration_ms"}

    def test_attempt_fields(self) -> None:
        root = Span(name="root")
        failed = Span(name="enumerate", backend="colormgr")
        failed.fail("SYSTEM_ERROR")
        answered = Span(name="enumerate", backend="filesystem")
        answered.succeed()
        root.children.extend([failed, answered])
        children = root.to_dict()["children"]
        assert children[0]["backend"] == "colormgr"
        assert children[0]["outcome"] == "SYSTEM_ERROR"
        assert children[1]["outcome"] == "ok"
        assert root.failed_attempts == 1


class TestTraceSpan:
    def test_disabled_yields_none(self) -> None:
        with trace_span("resolve", backend="static") as span:
            assert span is None

    def test_without_root_yields_none(self) -> None:
        enable_telemetry()
        with trace_span("resolve") as span:
            assert span is None

    def test_child_attached_and_closed(self, root_span: Span) -> None:
        with trace_span("resolve", backend="static") as span:
            assert span is not None
        assert root_span.children == [span]
        assert span.backend == "static"
        assert span.finished is not None
        assert _current_span.get() is root_span

    def test_nesting(self, root_span: Span) -> None:
        with trace_span("outer"), trace_span("inner"):
            pass
        assert root_span.children[0].children[0].name == "inner"

    def test_closed_on_exception(self, root_span: Span) -> None:
        with pytest.raises(RuntimeError), trace_span("failing"):
            raise RuntimeError("x")
        assert root_span.children[0].finished is not None


class TestTraced:
    def test_noop_when_disabled(self) -> None:
        @traced
        def op() -> ServiceResult:
            return ServiceResult(ok=True, op="op")

        assert op().meta is None

    def test_meta_merged(self) -> None:
        @traced
        def op() -> ServiceResult:
            with trace_span("enumerate", backend="static") as span:
                span.succeed()
            return ServiceResult(ok=True, op="op", meta={"backend": "static"})

        enable_telemetry()
        result = op()
        assert result.meta["backend"] == "static"
        assert result.meta["telemetry"]["children"] == [
            {"name": "enumerate", "duration_ms": pytest.approx(0.0, abs=50), "backend": "static", "outcome": "ok"}
        ]

    def test_error_results_traced(self) -> None:
        @traced
        def op() -> ServiceResult:
            return ServiceResult(ok=False, op="op", error=ServiceError(code="X", message="y"))

        enable_telemetry()
        assert "telemetry" in op().meta

    def test_other_return_values_untouched(self) -> None:
        @traced
        def op() -> int:
            return 7

        enable_telemetry()
        assert op() == 7

    def test_exception_propagates_and_resets(self) -> None:
        @traced
        def op() -> ServiceResult:
            raise ValueError("boom")

        enable_telemetry()
        with pytest.raises(ValueError, match="boom"):
            op()
        assert _current_span.get() is None


class TestGetCurrentSpan:
    def test_none_when_disabled(self) -> None:
        _current_span.set(Span(name="ignored"))
        assert get_current_span() is None

    def test_current(self, root_span: Span) -> None:
        assert get_current_span() is root_span
