"""The `xpkgbuild` command-line interface."""

import importlib.metadata
from pathlib import Path
from typing import Any

import click

from .environment import build_version, detect_build_server
from .exceptions import BuildError, PackagingToolError
from .manifest import load_manifest
from .models import xpkg_defaults
from .packaging.orchestrator import XpkgOrchestrator

try:
    __version__ = importlib.metadata.version("xpkg-builder")
except importlib.metadata.PackageNotFoundError:
    __version__ = "0.0.0-dev"


def _override_options(func: Any) -> Any:
    options = [
        click.option(
            "--manifest",
            "manifest_path",
            default="pyproject.toml",
            type=click.Path(exists=True, dir_okay=False, resolve_path=True),
            help="Path to the pyproject.toml manifest file.",
        ),
        click.option("--package", help="Override the package name from pyproject.toml."),
        click.option(
            "--package-version", help="Override the package version from pyproject.toml."
        ),
        click.option(
            "--out-dir", help="Override the output directory from pyproject.toml."
        ),
        click.option(
            "--tool-path",
            type=click.Path(dir_okay=False, resolve_path=True),
            help="Path to the xpkg executable.",
        ),
        click.option(
            "--timeout",
            type=click.IntRange(min=1),
            help="Seconds to wait for the xpkg tool before giving up.",
        ),
    ]
    for option in reversed(options):
        func = option(func)
    return func


def _collect_overrides(
    manifest_path: str,
    package: str | None,
    package_version: str | None,
    out_dir: str | None,
    tool_path: str | None,
    timeout: int | None,
) -> dict[str, Any]:
    overrides = load_manifest(Path(manifest_path))
    cli_values = {
        "package": package,
        "version": package_version,
        "output_path": out_dir,
        "tool_path": tool_path,
        "timeout": timeout,
    }
    overrides.update({k: v for k, v in cli_values.items() if v is not None})
    if not overrides.get("package"):
        raise click.UsageError(
            "Missing package name. Set 'package' in [tool.xpkg] or pass --package."
        )
    return overrides


def _report_failure(prefix: str, e: Exception) -> None:
    click.secho(f"❌ {prefix}:\n{e}", fg="red", err=True)
    if isinstance(e, PackagingToolError) and e.timed_out:
        click.secho("  The xpkg tool did not finish before the timeout.", fg="red", err=True)


@click.group(context_settings=dict(help_option_names=["-h", "--help"]))
@click.version_option(
    __version__,
    "-V",
    "--version",
    prog_name="xpkgbuild",
    message="%(prog)s version %(version)s",
)
def cli() -> None:
    """Xamarin component (xpkg) packaging tool."""
    pass


@cli.command("pack")
@_override_options
@click.option(
    "--validate/--no-validate",
    default=True,
    show_default=True,
    help="Validate the package after it has been created.",
)
@click.pass_context
def pack_command(
    ctx: click.Context,
    manifest_path: str,
    package: str | None,
    package_version: str | None,
    out_dir: str | None,
    tool_path: str | None,
    timeout: int | None,
    validate: bool,
) -> None:
    """Creates an xpkg package and, by default, validates it."""
    click.echo("🚀 Creating xpkg package...")
    try:
        overrides = _collect_overrides(
            manifest_path, package, package_version, out_dir, tool_path, timeout
        )
        params = XpkgOrchestrator().pack(overrides)
        click.secho(
            f"✅ Package created successfully: {params.package_file_path}", fg="green"
        )
    except (BuildError, click.UsageError) as e:
        _report_failure("Packaging Failed", e)
        raise click.Abort() from e

    if validate:
        click.echo("\n" + "=" * 20 + " Auto-Validation " + "=" * 20)
        ctx.invoke(
            validate_command,
            manifest_path=manifest_path,
            package=package,
            package_version=params.version,
            out_dir=out_dir,
            tool_path=params.tool_path,
            timeout=timeout,
        )


@cli.command("validate")
@_override_options
def validate_command(
    manifest_path: str,
    package: str | None,
    package_version: str | None,
    out_dir: str | None,
    tool_path: str | None,
    timeout: int | None,
) -> None:
    """Validates an existing xpkg package."""
    try:
        overrides = _collect_overrides(
            manifest_path, package, package_version, out_dir, tool_path, timeout
        )
        click.echo("🔍 Validating xpkg package...")
        params = XpkgOrchestrator().validate(overrides)
        click.secho(
            f"✅ Package is valid: {params.package_file_path}", fg="green"
        )
    except (BuildError, click.UsageError) as e:
        _report_failure("Validation Failed", e)
        raise click.Abort() from e


@cli.command("locate")
def locate_command() -> None:
    """Shows the default xpkg tool path and the detected build server."""
    defaults = xpkg_defaults()
    tool = Path(defaults.tool_path)
    click.echo(f"Tool path:    {tool}")
    if not tool.is_file():
        click.secho("ℹ️ The xpkg tool does not exist at this location.", fg="yellow")
    click.echo(f"Build server: {detect_build_server().value}")
    click.echo(f"Version:      {build_version()}")


main = cli
