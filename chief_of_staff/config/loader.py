"""Startup configuration loader.

The process environment is the source of truth. An optional `.env` file
(dotenv syntax) is applied on top of it before the snapshot is taken:
- variables already present in the environment are never overridden
- a missing or unreadable file means "no overrides", never an error
"""

from __future__ import annotations

import logging
import os
from pathlib import Path
from typing import MutableMapping

from dotenv import dotenv_values

from chief_of_staff.config.model import StartupContext


logger = logging.getLogger(__name__)


def default_env_file() -> Path:
    return Path.cwd() / ".env"


def apply_env_file(
    path: Path | None = None,
    *,
    environ: MutableMapping[str, str] | None = None,
) -> dict[str, str]:
    """Copy entries of a dotenv file into `environ` without overriding.

    Returns the entries that were actually applied. `${VAR}` references are
    expanded only when writing to the process environment; with a custom
    `environ` the values are applied verbatim.
    """

    target = os.environ if environ is None else environ
    env_path = path or default_env_file()

    try:
        # is_file() re-raises ENAMETOOLONG and EACCES.
        if not env_path.is_file():
            logger.debug("env_file_absent", extra={"env_file": str(env_path)})
            return {}
        entries = dotenv_values(env_path, encoding="utf-8", interpolate=environ is None)
    except (OSError, UnicodeDecodeError) as e:
        logger.warning("env_file_unreadable", extra={"env_file": str(env_path), "error": str(e)})
        return {}

    applied: dict[str, str] = {}
    for key, value in entries.items():
        # `KEY` with no `=` parses to None; treat it as unset.
        if value is None or key in target:
            continue
        target[key] = value
        applied[key] = value

    logger.debug(
        "env_file_applied",
        extra={"env_file": str(env_path), "keys": sorted(applied)},
    )
    return applied


def load_startup_context(
    env_file: Path | None = None,
    *,
    load_env_file: bool = True,
    environ: MutableMapping[str, str] | None = None,
) -> StartupContext:
    """Apply the optional env file and snapshot the environment.

    Args:
        env_file: Explicit dotenv path. Defaults to `.env` in the current
            working directory.
        load_env_file: Whether to read the dotenv file at all.
        environ: Target mapping; defaults to `os.environ`.
    """

    target = os.environ if environ is None else environ
    if load_env_file:
        apply_env_file(env_file, environ=target)
    return StartupContext(values=dict(target))
