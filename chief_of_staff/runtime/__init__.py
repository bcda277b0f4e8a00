"""Process runtime: bootstrap sequence, supervision and shutdown."""

from __future__ import annotations

from chief_of_staff.runtime.bootstrap import BootState, BootstrapRunner, build_status_lines, report_status
from chief_of_staff.runtime.lifecycle import main, supervise

__all__ = ["BootState", "BootstrapRunner", "build_status_lines", "main", "report_status", "supervise"]
