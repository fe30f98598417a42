"""Runs the xpkg tool as a blocking subprocess with a timeout."""

from datetime import timedelta
import shlex
import subprocess
import sys

from pyvider.telemetry import logger

from ..exceptions import BuildError
from ..tooling import tool_command


def exec_process_and_return_exit_code(
    tool_path: str,
    working_dir: str,
    arguments: str,
    timeout: timedelta,
) -> int | None:
    """
    Launches `tool_path` with `arguments` and waits for it to exit.

    Returns the process exit code, or None if the process had to be killed
    after `timeout`. A process killed by a signal reports a negative code.
    """
    command = tool_command(tool_path)
    if sys.platform == "win32":
        argv: list[str] | str = subprocess.list2cmdline(command) + " " + arguments
    else:
        argv = command + shlex.split(arguments)

    try:
        process = subprocess.Popen(argv, cwd=working_dir)
    except OSError as e:
        raise BuildError(f"Could not start '{tool_path}': {e}") from e

    with process:
        try:
            return process.wait(timeout=timeout.total_seconds())
        except subprocess.TimeoutExpired:
            logger.warning(
                "Process timed out, killing it",
                tool=tool_path,
                timeout_seconds=timeout.total_seconds(),
            )
            process.kill()
            process.wait()
            return None
