from __future__ import annotations

from .context import bind_context, set_state, snapshot
from .ids import new_trace_id
from .logging import configure_logging

__all__ = ["bind_context", "configure_logging", "new_trace_id", "set_state", "snapshot"]
