"""Tests for reading [tool.xpkg] from pyproject.toml."""

from pathlib import Path

import pytest

from xpkg.builder.exceptions import ManifestError
from xpkg.builder.manifest import load_manifest


def _write(tmp_path: Path, content: str) -> Path:
    manifest = tmp_path / "pyproject.toml"
    manifest.write_text(content)
    return manifest


def test_load_manifest_maps_all_keys(tmp_path: Path) -> None:
    manifest = _write(
        tmp_path,
        """
[tool.xpkg]
tool-path = "tools/xpkg/xpkg.exe"
package = "Portable.Licensing"
version = "1.1.0"
output-path = "publish"
timeout = 120
project = "Portable.Licensing"
summary = "A licensing tool"
getting_started = "GettingStarted.md"
icons = ["icon_512.png", "icon_128.png"]
libraries = [["mobile", "lib/Portable.Licensing.dll"]]

[tool.xpkg.samples]
"Android Sample." = "Samples/Android.sln"
"iOS Sample." = "Samples/iOS.sln"
""",
    )
    overrides = load_manifest(manifest)

    assert overrides == {
        "tool_path": str(tmp_path / "tools/xpkg/xpkg.exe"),
        "working_dir": str(tmp_path),
        "package": "Portable.Licensing",
        "version": "1.1.0",
        "output_path": "publish",
        "timeout": 120,
        "project": "Portable.Licensing",
        "summary": "A licensing tool",
        "getting_started": "GettingStarted.md",
        "icons": ["icon_512.png", "icon_128.png"],
        "libraries": [("mobile", "lib/Portable.Licensing.dll")],
        "samples": [
            ("Android Sample.", "Samples/Android.sln"),
            ("iOS Sample.", "Samples/iOS.sln"),
        ],
    }


def test_package_paths_are_passed_through_as_written(tmp_path: Path) -> None:
    # Only tool_path and working_dir are anchored to the manifest directory;
    # the tool itself resolves the rest from its working directory.
    manifest = _write(
        tmp_path,
        """
[tool.xpkg]
package = "Foo"
output-path = "publish"
icons = ["icon.png"]
libraries = [["mobile", "lib/Foo.dll"]]
samples = [["Sample", "Samples/Sample.sln"]]
""",
    )
    overrides = load_manifest(manifest)

    assert overrides["working_dir"] == str(tmp_path)
    assert overrides["output_path"] == "publish"
    assert overrides["icons"] == ["icon.png"]
    assert overrides["libraries"] == [("mobile", "lib/Foo.dll")]
    assert overrides["samples"] == [("Sample", "Samples/Sample.sln")]


def test_empty_section_is_valid(tmp_path: Path) -> None:
    manifest = _write(tmp_path, "[tool.xpkg]\n")
    assert load_manifest(manifest) == {"working_dir": str(tmp_path)}


def test_working_dir_is_resolved_against_manifest(tmp_path: Path) -> None:
    manifest = _write(tmp_path, '[tool.xpkg]\npackage = "Foo"\nworking-dir = "build"\n')
    assert load_manifest(manifest)["working_dir"] == str(tmp_path / "build")


@pytest.mark.parametrize(
    ("content", "message"),
    [
        ("[project]\nname = 'x'\n", "A \\[tool.xpkg\\] section was not found"),
        ("[tool]\nxpkg = 5\n", "must be a table"),
        ("[tool.xpkg]\npakage = 'Foo'\n", "Unknown key in \\[tool.xpkg\\]: 'pakage'"),
        ("[tool.xpkg]\ntimeout = 'soon'\n", "'timeout' must be a number"),
        ("[tool.xpkg]\nicons = 'a.png'\n", "'icons' must be a list"),
        ("[tool.xpkg]\nlibraries = [['mobile']]\n", "Invalid entry in 'libraries'"),
        ("[tool.xpkg]\nsamples = 'x'\n", "'samples' must be a table or a list"),
        ("[tool.xpkg\n", "Could not parse"),
    ],
)
def test_load_manifest_failures(tmp_path: Path, content: str, message: str) -> None:
    with pytest.raises(ManifestError, match=message):
        load_manifest(_write(tmp_path, content))


def test_load_manifest_missing_file(tmp_path: Path) -> None:
    with pytest.raises(ManifestError, match="Manifest not found"):
        load_manifest(tmp_path / "pyproject.toml")
