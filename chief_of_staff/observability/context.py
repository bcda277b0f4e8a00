from __future__ import annotations

from contextvars import ContextVar


_trace_id: ContextVar[str | None] = ContextVar("trace_id", default=None)
_state: ContextVar[str | None] = ContextVar("state", default=None)


def bind_context(*, trace_id: str) -> None:
    _trace_id.set(trace_id)


def set_state(state: str) -> None:
    _state.set(state)


def snapshot() -> dict[str, object]:
    """Return a snapshot of current observability context for logging."""

    out: dict[str, object] = {}
    if (v := _trace_id.get()) is not None:
        out["trace_id"] = v
    if (v := _state.get()) is not None:
        out["state"] = v
    return out
