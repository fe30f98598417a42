"""Pytest fixtures for the entire xpkg-builder test suite."""

from collections.abc import Callable
from datetime import timedelta
import json
from pathlib import Path
import stat
import sys
import textwrap
from typing import Any

import pytest
from pytest import MonkeyPatch

from xpkg.builder.environment import BUILD_VERSION_ENV_VAR

CI_ENV_VARS = (
    "TEAMCITY_VERSION",
    "JENKINS_URL",
    "TRAVIS",
    "APPVEYOR",
    "GITHUB_ACTIONS",
    "GITLAB_CI",
    "TF_BUILD",
    "CI",
    "BUILD_NUMBER",
    "TRAVIS_BUILD_NUMBER",
    "APPVEYOR_BUILD_VERSION",
    "GITHUB_RUN_NUMBER",
    "CI_PIPELINE_IID",
    "BUILD_BUILDNUMBER",
    BUILD_VERSION_ENV_VAR,
)


@pytest.fixture(autouse=True)
def local_build_env(monkeypatch: MonkeyPatch) -> None:
    """Makes every test run as a local build, whatever CI runs the suite."""
    for name in CI_ENV_VARS:
        monkeypatch.delenv(name, raising=False)


class RecordingInvoker:
    """Stands in for the process invoker and records every call."""

    def __init__(self, exit_code: int | None = 0) -> None:
        self.exit_code = exit_code
        self.calls: list[tuple[str, str, str, timedelta]] = []

    def __call__(
        self, tool_path: str, working_dir: str, arguments: str, timeout: timedelta
    ) -> int | None:
        self.calls.append((tool_path, working_dir, arguments, timeout))
        return self.exit_code


@pytest.fixture
def recording_invoker() -> Callable[[int | None], RecordingInvoker]:
    def _make(exit_code: int | None = 0) -> RecordingInvoker:
        return RecordingInvoker(exit_code)

    return _make


@pytest.fixture
def fake_xpkg_tool(tmp_path: Path) -> Path:
    """
    An executable stand-in for xpkg.

    It appends its arguments as a JSON line to `calls.jsonl` in its working
    directory, sleeps for FAKE_XPKG_SLEEP seconds, kills itself with
    FAKE_XPKG_SIGNAL if set and otherwise exits with FAKE_XPKG_EXIT_CODE.
    """
    if sys.platform == "win32":
        pytest.skip("The fake xpkg tool relies on a POSIX shebang.")

    tool = tmp_path / "bin" / "fake-xpkg"
    tool.parent.mkdir()
    tool.write_text(
        f"#!{sys.executable}\n"
        + textwrap.dedent(
            """
            import json
            import os
            import signal
            import sys
            import time

            with open("calls.jsonl", "a") as f:
                f.write(json.dumps(sys.argv[1:]) + "\\n")
            time.sleep(float(os.environ.get("FAKE_XPKG_SLEEP", "0")))
            if os.environ.get("FAKE_XPKG_SIGNAL"):
                os.kill(os.getpid(), getattr(signal, os.environ["FAKE_XPKG_SIGNAL"]))
            sys.exit(int(os.environ.get("FAKE_XPKG_EXIT_CODE", "0")))
            """
        )
    )
    tool.chmod(tool.stat().st_mode | stat.S_IEXEC)
    return tool


@pytest.fixture
def read_calls() -> Callable[[Path], list[list[Any]]]:
    """Returns a reader for the argument lists recorded by the fake xpkg tool."""

    def _read(working_dir: Path) -> list[list[Any]]:
        calls_file = working_dir / "calls.jsonl"
        if not calls_file.exists():
            return []
        return [json.loads(line) for line in calls_file.read_text().splitlines()]

    return _read
