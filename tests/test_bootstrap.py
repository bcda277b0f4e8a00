from __future__ import annotations

import asyncio
import io
import logging
from pathlib import Path

import pytest

from chief_of_staff.config.model import StartupContext
from chief_of_staff.runtime.bootstrap import BootState, BootstrapRunner, build_status_lines, report_status


EXPECTED_PRODUCTION = [
    "Digital Chief of Staff - Starting...",
    "Version: 0.1.0",
    "Environment: production",
    "Ready to assist!",
]


def test_status_lines_are_in_fixed_order() -> None:
    assert build_status_lines(StartupContext({"APP_ENV": "production"})) == EXPECTED_PRODUCTION


def test_status_lines_default_mode() -> None:
    lines = build_status_lines(StartupContext())
    assert lines[2] == "Environment: development"


def test_report_status_writes_each_line_in_order() -> None:
    out = io.StringIO()
    report_status(["a", "b", "c"], stream=out)
    assert out.getvalue() == "a\nb\nc\n"


def test_report_status_survives_closed_stream() -> None:
    out = io.StringIO()
    out.close()

    report_status(["a"], stream=out)


def test_runner_reaches_ready(clean_env: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("APP_ENV", "production")
    out = io.StringIO()
    runner = BootstrapRunner(env_file=clean_env / ".env", stdout=out)

    ctx = asyncio.run(runner.run())

    assert runner.state is BootState.READY
    assert ctx.mode == "production"
    assert runner.context is ctx
    assert out.getvalue().splitlines() == EXPECTED_PRODUCTION


def test_runner_reads_mode_from_env_file(clean_env: Path) -> None:
    (clean_env / ".env").write_text("APP_ENV=staging\n", encoding="utf-8")
    out = io.StringIO()

    asyncio.run(BootstrapRunner(stdout=out).run())

    assert out.getvalue().splitlines()[2] == "Environment: staging"


def test_runner_moves_to_failed_and_propagates(clean_env: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    def boom(_ctx: StartupContext) -> list[str]:
        raise RuntimeError("integration init failed")

    monkeypatch.setattr("chief_of_staff.runtime.bootstrap.build_status_lines", boom)
    out = io.StringIO()
    runner = BootstrapRunner(stdout=out)

    with pytest.raises(RuntimeError, match="integration init failed"):
        asyncio.run(runner.run())

    assert runner.state is BootState.FAILED
    assert out.getvalue() == ""


def test_runner_is_one_shot(clean_env: Path) -> None:
    runner = BootstrapRunner(stdout=io.StringIO())
    asyncio.run(runner.run())

    with pytest.raises(RuntimeError, match="already ran"):
        asyncio.run(runner.run())
    assert runner.state is BootState.READY


def test_invalid_log_level_fails_before_any_status_line(clean_env: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("LOG_LEVEL", "chatty")
    out = io.StringIO()
    runner = BootstrapRunner(stdout=out)

    with pytest.raises(ValueError, match="Unknown log level"):
        asyncio.run(runner.run())

    assert runner.state is BootState.FAILED
    assert out.getvalue() == ""


def test_mode_log_level_is_applied_before_status_lines(clean_env: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    seen: list[int] = []

    def record_level(lines, *, stream=None):  # noqa: ANN001
        seen.append(logging.getLogger().level)

    monkeypatch.setattr("chief_of_staff.runtime.bootstrap.report_status", record_level)
    logging.getLogger().setLevel(logging.INFO)

    asyncio.run(BootstrapRunner(stdout=io.StringIO()).run())

    assert seen == [logging.DEBUG, logging.DEBUG]


def test_explicit_log_level_wins_over_mode(clean_env: Path) -> None:
    runner = BootstrapRunner(log_level="warning", stdout=io.StringIO())

    asyncio.run(runner.run())

    assert logging.getLogger().level == logging.WARNING
