"""Bootstrap runner.

Owns the startup sequence of the process:
- load configuration (`.env` + environment) into a `StartupContext`
- print the startup banner to stdout, strictly in order
- move the lifecycle state STARTING -> READY, or STARTING -> FAILED

Failures are not caught here; they propagate to the supervisor in
`runtime.lifecycle`, which owns the exit code.
"""

from __future__ import annotations

import asyncio
import enum
import logging
import sys
from pathlib import Path
from typing import Iterable, TextIO

from chief_of_staff import APP_NAME, __version__
from chief_of_staff.config.loader import load_startup_context
from chief_of_staff.config.model import StartupContext
from chief_of_staff.observability import set_state


logger = logging.getLogger(__name__)


class BootState(str, enum.Enum):
    STARTING = "STARTING"
    READY = "READY"
    FAILED = "FAILED"


def build_status_lines(context: StartupContext) -> list[str]:
    return [
        f"{APP_NAME} - Starting...",
        f"Version: {__version__}",
        f"Environment: {context.mode}",
        "Ready to assist!",
    ]


def report_status(lines: Iterable[str], *, stream: TextIO | None = None) -> None:
    """Write each line to stdout in order.

    A broken or closed stream is logged and otherwise ignored.
    """

    out = stream or sys.stdout
    try:
        for line in lines:
            out.write(f"{line}\n")
        out.flush()
    except (OSError, ValueError) as e:
        logger.warning("status_write_failed", extra={"error": str(e)})


class BootstrapRunner:
    """One-shot startup sequence. Not restartable."""

    def __init__(
        self,
        *,
        env_file: Path | None = None,
        load_env_file: bool = True,
        log_level: str | None = None,
        stdout: TextIO | None = None,
    ) -> None:
        self._env_file = env_file
        self._load_env_file = load_env_file
        self._log_level = log_level
        self._stdout = stdout
        self._state: BootState | None = None
        self.context: StartupContext | None = None

    @property
    def state(self) -> BootState | None:
        return self._state

    def _transition(self, state: BootState) -> None:
        self._state = state
        set_state(state.value)
        logger.debug("boot_state", extra={"boot_state": state.value})

    async def load_configuration(self) -> StartupContext:
        # File I/O; keep it off the event loop.
        context = await asyncio.to_thread(
            load_startup_context,
            self._env_file,
            load_env_file=self._load_env_file,
        )
        self.context = context
        logger.info("config_loaded", extra={"mode": context.mode})
        return context

    def apply_log_level(self, context: StartupContext) -> str:
        """Apply the explicit level, else LOG_LEVEL or the mode default, to the root logger."""

        level = (self._log_level or context.log_level).upper()
        if not isinstance(logging.getLevelName(level), int):
            raise ValueError(f"Unknown log level: {level!r}")
        logging.getLogger().setLevel(level)
        logger.debug("log_level_applied", extra={"log_level": level})
        return level

    def report_status(self, lines: Iterable[str]) -> None:
        report_status(lines, stream=self._stdout)

    async def run(self) -> StartupContext:
        if self._state is not None:
            raise RuntimeError(f"bootstrap already ran (state={self._state.value})")

        self._transition(BootState.STARTING)
        try:
            context = await self.load_configuration()
            self.apply_log_level(context)
            lines = build_status_lines(context)
            self.report_status(lines[:3])

            # Integrations, API server and database connections attach here.

            self.report_status(lines[3:])
        except BaseException:
            self._transition(BootState.FAILED)
            raise

        self._transition(BootState.READY)
        return context
