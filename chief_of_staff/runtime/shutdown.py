from __future__ import annotations

import asyncio
import logging
import signal


logger = logging.getLogger(__name__)

_SHUTDOWN_SIGNALS = (signal.SIGINT, signal.SIGTERM)


async def wait_for_shutdown(stop_event: asyncio.Event | None = None) -> None:
    """Block until SIGINT/SIGTERM arrives or `stop_event` is set."""

    event = stop_event or asyncio.Event()
    loop = asyncio.get_running_loop()

    installed: list[signal.Signals] = []
    for sig in _SHUTDOWN_SIGNALS:
        try:
            loop.add_signal_handler(sig, event.set)
        except (NotImplementedError, RuntimeError, ValueError):
            # Windows event loops and non-main threads have no signal support.
            continue
        installed.append(sig)

    logger.info("awaiting_shutdown", extra={"signals": [s.name for s in installed]})
    try:
        await event.wait()
    finally:
        for sig in installed:
            loop.remove_signal_handler(sig)

    logger.info("shutdown_requested")
