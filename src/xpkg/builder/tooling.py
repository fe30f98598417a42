"""
Locates the xpkg executable and works out how to launch it.
"""

from pathlib import Path
import shutil
import sys

from pyvider.telemetry import logger

XPKG_TOOL_NAME = "xpkg.exe"


def default_tool_dir() -> Path:
    """Returns the conventional `tools/xpkg` directory of the current tree."""
    return Path.cwd() / "tools" / "xpkg"


def find_tool_in_subpath(tool_name: str, default_dir: Path | str) -> str:
    """
    Finds `tool_name` under `default_dir`, then on PATH.

    When nothing is found the conventional location is returned anyway, so
    that the failure surfaces when the tool is actually run.
    """
    default_dir = Path(default_dir)
    candidate = default_dir / tool_name
    if candidate.is_file():
        return str(candidate)

    if default_dir.is_dir():
        matches = sorted(p for p in default_dir.rglob(tool_name) if p.is_file())
        if matches:
            return str(matches[0])

    on_path = shutil.which(tool_name)
    if on_path:
        return on_path

    logger.warning(
        "Tool not found, using conventional location",
        tool=tool_name,
        location=str(candidate),
    )
    return str(candidate)


def tool_command(tool_path: str) -> list[str]:
    """
    Returns the argv prefix that launches `tool_path`.

    .NET executables need mono outside of Windows.
    """
    if sys.platform != "win32" and tool_path.lower().endswith(".exe"):
        mono = shutil.which("mono")
        if mono:
            return [mono, tool_path]
    return [tool_path]
