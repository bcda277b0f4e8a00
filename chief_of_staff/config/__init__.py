"""Startup configuration.

- `.env` file applied to the process environment (never overriding it)
- total, default-backed lookups through `StartupContext`
"""

from __future__ import annotations

from chief_of_staff.config.loader import apply_env_file, load_startup_context
from chief_of_staff.config.model import DEFAULT_MODE, StartupContext

__all__ = ["DEFAULT_MODE", "StartupContext", "apply_env_file", "load_startup_context"]
