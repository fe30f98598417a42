"""
This package wraps the xpkg command-line tool that creates and validates
Xamarin component packages (.xam files).
"""

from .exceptions import (
    BuildError,
    InvalidConfigurationError,
    ManifestError,
    PackagingToolError,
)
from .models import XpkgParams, apply_overrides, xpkg_defaults
from .packaging.command_line import CommandKind, build_command_line
from .packaging.orchestrator import XpkgOrchestrator, xpkg_pack, xpkg_validate

__all__ = [
    "BuildError",
    "CommandKind",
    "InvalidConfigurationError",
    "ManifestError",
    "PackagingToolError",
    "XpkgOrchestrator",
    "XpkgParams",
    "apply_overrides",
    "build_command_line",
    "xpkg_defaults",
    "xpkg_pack",
    "xpkg_validate",
]
