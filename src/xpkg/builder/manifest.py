"""Reads xpkg parameters from the [tool.xpkg] table of a pyproject.toml."""

from pathlib import Path
import tomllib
from typing import Any

from .exceptions import ManifestError
from .models import PARAM_FIELDS

_PATH_KEYS = frozenset({"tool_path", "working_dir"})
_PAIR_KEYS = frozenset({"libraries", "samples"})
_STRING_KEYS = frozenset(
    {
        "package",
        "output_path",
        "version",
        "project",
        "summary",
        "publisher",
        "website",
        "details",
        "license",
        "getting_started",
    }
)


def _pairs(key: str, value: Any) -> list[tuple[str, str]]:
    if isinstance(value, dict):
        items = list(value.items())
    elif isinstance(value, list):
        items = value
    else:
        raise ManifestError(f"'{key}' must be a table or a list of pairs.")

    pairs = []
    for item in items:
        if (
            not isinstance(item, (list, tuple))
            or len(item) != 2
            or not all(isinstance(part, str) for part in item)
        ):
            raise ManifestError(f"Invalid entry in '{key}': {item!r}")
        pairs.append((item[0], item[1]))
    return pairs


def _resolve(base_dir: Path, value: str) -> str:
    return str(base_dir / value)


def parse_xpkg_config(xpkg_conf: dict[str, Any], base_dir: Path) -> dict[str, Any]:
    """Maps a [tool.xpkg] table to XpkgParams field overrides.

    The tool runs from `working_dir`, which defaults to the manifest
    directory, so relative package paths are left as written.
    """
    overrides: dict[str, Any] = {}
    for raw_key, value in xpkg_conf.items():
        key = raw_key.replace("-", "_")
        if key not in PARAM_FIELDS:
            raise ManifestError(f"Unknown key in [tool.xpkg]: '{raw_key}'")

        if key in _PATH_KEYS:
            overrides[key] = _resolve(base_dir, str(value))
        elif key == "timeout":
            if isinstance(value, bool) or not isinstance(value, (int, float)):
                raise ManifestError("'timeout' must be a number of seconds.")
            overrides[key] = value
        elif key == "icons":
            if not isinstance(value, list):
                raise ManifestError("'icons' must be a list of paths.")
            overrides[key] = [str(icon) for icon in value]
        elif key in _PAIR_KEYS:
            overrides[key] = _pairs(key, value)
        elif key in _STRING_KEYS:
            overrides[key] = str(value)
    overrides.setdefault("working_dir", str(base_dir))
    return overrides


def load_manifest(manifest_path: Path) -> dict[str, Any]:
    if not manifest_path.is_file():
        raise ManifestError(f"Manifest not found at: {manifest_path}")
    try:
        with manifest_path.open("rb") as f:
            pyproject_data = tomllib.load(f)
    except tomllib.TOMLDecodeError as e:
        raise ManifestError(f"Could not parse {manifest_path}: {e}") from e

    xpkg_conf = pyproject_data.get("tool", {}).get("xpkg")
    if xpkg_conf is None:
        raise ManifestError("A [tool.xpkg] section was not found in pyproject.toml.")
    if not isinstance(xpkg_conf, dict):
        raise ManifestError("[tool.xpkg] must be a table.")
    return parse_xpkg_config(xpkg_conf, manifest_path.parent)
