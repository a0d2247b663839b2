"""Telemetry: timed spans for service calls and backend attempts.

Telemetry is off unless ``--verbose`` turns it on, and then costs one
ContextVar lookup per call. A ``@traced`` service method opens a root span
and the resolution engine adds one child per backend attempt, recording
which backend it asked and how that went. The finished tree is attached to
``ServiceResult.meta["telemetry"]``.
"""

from __future__ import annotations

import functools
import time
from collections.abc import Callable, Generator
from contextlib import contextmanager
from contextvars import ContextVar
from dataclasses import dataclass, field
from typing import Any, ParamSpec, TypeVar

import structlog

from display_icc.services.result import ServiceResult

OUTCOME_OK = "ok"

_enabled: ContextVar[bool] = ContextVar("_telemetry_enabled", default=False)
_current_span: ContextVar[Span | None] = ContextVar("_current_span", default=None)


@dataclass
class Span:
    """One timed step.

    Attributes:
        name: Service method or engine operation (``enumerate``, ``resolve``).
        backend: Backend asked during this step, for attempt spans.
        outcome: ``"ok"`` or the error code the attempt ended with.
    """

    name: str
    backend: str | None = None
    outcome: str | None = None
    children: list[Span] = field(default_factory=list)
    started: float = field(default_factory=time.perf_counter)
    finished: float | None = None

    @property
    def duration_ms(self) -> float:
        if self.finished is None:
            return 0.0
        return (self.finished - self.started) * 1000

    @property
    def failed_attempts(self) -> int:
        """Attempt spans below this one that ended in an error."""
        own = int(self.outcome not in (None, OUTCOME_OK))
        return own + sum(child.failed_attempts for child in self.children)

    def close(self) -> None:
        if self.finished is None:
            self.finished = time.perf_counter()

    def succeed(self) -> None:
        self.outcome = OUTCOME_OK

    def fail(self, code: str) -> None:
        self.outcome = code

    def to_dict(self) -> dict[str, Any]:
        data: dict[str, Any] = {"name": self.name, "duration_ms": round(self.duration_ms, 2)}
        if self.backend is not None:
            data["backend"] = self.backend
        if self.outcome is not None:
            data["outcome"] = self.outcome
        if self.children:
            data["children"] = [child.to_dict() for child in self.children]
        return data


@contextmanager
def trace_span(name: str, *, backend: str | None = None) -> Generator[Span | None]:
    """Open a child span under the current one.

    Yields None when telemetry is off or no ``@traced`` call is running, so
    callers guard with ``if span:``.
    """
    parent = _current_span.get() if _enabled.get() else None
    if parent is None:
        yield None
        return

    span = Span(name=name, backend=backend)
    parent.children.append(span)
    token = _current_span.set(span)
    try:
        yield span
    finally:
        span.close()
        _current_span.reset(token)


_P = ParamSpec("_P")
_R = TypeVar("_R")


def traced(func: Callable[_P, _R]) -> Callable[_P, _R]:  # noqa: UP047
    """Time a service method and attach its span tree to the ServiceResult."""

    @functools.wraps(func)
    def wrapper(*args: _P.args, **kwargs: _P.kwargs) -> _R:
        if not _enabled.get():
            return func(*args, **kwargs)

        root = Span(name=func.__qualname__)
        token = _current_span.set(root)
        ok = False
        try:
            result = func(*args, **kwargs)
            ok = not isinstance(result, ServiceResult) or result.ok
        finally:
            root.close()
            _current_span.reset(token)
            structlog.get_logger("display_icc.telemetry").debug(
                "span.complete",
                span_name=root.name,
                duration_ms=round(root.duration_ms, 2),
                ok=ok,
                attempts=len(root.children),
                failed_attempts=root.failed_attempts,
            )

        if isinstance(result, ServiceResult):
            meta = {**(result.meta or {}), "telemetry": root.to_dict()}
            result = result.model_copy(update={"meta": meta})  # type: ignore[assignment]
        return result

    return wrapper


def enable_telemetry() -> None:
    """Turn span collection on for the current context (``--verbose``)."""
    _enabled.set(True)


def disable_telemetry() -> None:
    _enabled.set(False)


def get_current_span() -> Span | None:
    """The span being recorded right now, or None when telemetry is off."""
    if not _enabled.get():
        return None
    return _current_span.get()
