"""Process lifecycle and main entrypoint.

This module is the executable entry for `chief-of-staff` and
`python -m chief_of_staff`. It parses the CLI, configures logging, and
supervises the bootstrap task: any failure is reported on stderr and turned
into exit code 1.
"""

from __future__ import annotations

import argparse
import asyncio
import json
import logging
import sys
from pathlib import Path
from typing import Any, Awaitable, Callable, Sequence, TextIO

from chief_of_staff import APP_NAME, __version__
from chief_of_staff.config.loader import default_env_file, load_startup_context
from chief_of_staff.config.model import RECOGNIZED_KEYS, StartupContext
from chief_of_staff.errors import StartupFailure
from chief_of_staff.observability import bind_context, configure_logging, new_trace_id
from chief_of_staff.runtime.bootstrap import BootstrapRunner
from chief_of_staff.runtime.shutdown import wait_for_shutdown


logger = logging.getLogger(__name__)

EXIT_OK = 0
EXIT_STARTUP_FAILURE = 1

_LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")
_SECRET_MARKERS = ("api_key", "token", "secret", "password")


def _redact_secrets(obj):  # noqa: ANN001
    """Best-effort redaction for human-facing config dumps."""

    if isinstance(obj, dict):
        out = {}
        for k, v in obj.items():
            if isinstance(k, str) and any(p in k.lower() for p in _SECRET_MARKERS):
                out[k] = "<redacted>"
            else:
                out[k] = _redact_secrets(v)
        return out
    if isinstance(obj, list):
        return [_redact_secrets(x) for x in obj]
    return obj


def describe_context(context: StartupContext, *, include_all: bool = False) -> dict[str, Any]:
    if include_all:
        values = dict(sorted(context.values.items()))
    else:
        values = {k: context.values[k] for k in RECOGNIZED_KEYS if k in context.values}

    return _redact_secrets(
        {
            "mode": context.mode,
            "log_level": context.log_level,
            "values": values,
        }
    )


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="chief-of-staff",
        description=f"{APP_NAME} {__version__}",
    )

    parser.add_argument(
        "--log-level",
        type=str.upper,
        choices=_LOG_LEVELS,
        default=None,
        help="Logging level (defaults to LOG_LEVEL, else DEBUG in development and INFO otherwise)",
    )
    parser.add_argument(
        "--env-file",
        type=Path,
        default=None,
        help="Path to a dotenv file (defaults to ./.env; a missing file is ignored)",
    )

    sub = parser.add_subparsers(dest="command")

    run_p = sub.add_parser("run", help="Run the startup sequence (default)")
    run_p.add_argument(
        "--stay-alive",
        action="store_true",
        help="Keep the process running after startup until SIGINT/SIGTERM",
    )

    print_p = sub.add_parser("print-config", help="Load and print the resolved startup configuration")
    print_p.add_argument(
        "--all",
        dest="show_all",
        action="store_true",
        help="Print the whole environment snapshot (secrets redacted)",
    )

    # After add_subparsers, so that no subcommand still means `run`.
    parser.set_defaults(command="run", stay_alive=False, show_all=False)

    return parser


def supervise(
    main_factory: Callable[[], Awaitable[Any]],
    *,
    stderr: TextIO | None = None,
) -> int:
    """Run the bootstrap task to completion and map the outcome to an exit code.

    No retries: the first failure is final.
    """

    try:
        asyncio.run(main_factory())
    except Exception as e:  # noqa: BLE001
        failure = StartupFailure(e)
        logger.error("startup_failed", exc_info=e, extra={"error": str(failure)})
        (stderr or sys.stderr).write(f"Failed to start: {failure}\n")
        return EXIT_STARTUP_FAILURE
    return EXIT_OK


async def _run(ns: argparse.Namespace, *, stop_event: asyncio.Event | None = None) -> None:
    runner = BootstrapRunner(env_file=ns.env_file, log_level=ns.log_level)
    context = await runner.run()

    logger.info("runtime_ready", extra={"mode": context.mode, "version": __version__})

    if ns.stay_alive:
        await wait_for_shutdown(stop_event)


def _print_config(ns: argparse.Namespace) -> int:
    context = load_startup_context(ns.env_file)
    logger.info(
        "config_loaded",
        extra={"env_file": str(ns.env_file or default_env_file())},
    )
    sys.stdout.write(json.dumps(describe_context(context, include_all=ns.show_all), ensure_ascii=False, indent=2))
    sys.stdout.write("\n")
    return EXIT_OK


def main(argv: Sequence[str] | None = None) -> int:
    """CLI entrypoint referenced by pyproject.toml.

    - `chief-of-staff --help` works without any environment.
    - Any failure while starting exits with status 1 and a message on stderr.
    """

    parser = _build_parser()

    try:
        ns = parser.parse_args(list(argv) if argv is not None else None)
    except SystemExit as e:
        # argparse has already printed help/usage to stdout/stderr.
        code = e.code
        return int(code) if isinstance(code, int) else 1

    configure_logging(level=ns.log_level or "INFO")
    bind_context(trace_id=new_trace_id())

    if ns.command == "print-config":
        return _print_config(ns)

    return supervise(lambda: _run(ns))
