from collections.abc import Callable, Iterable, Mapping
from datetime import timedelta
import os
from typing import Any, TypeAlias

import attrs
from attrs import define, field

from .environment import build_version
from .exceptions import InvalidConfigurationError
from .tooling import XPKG_TOOL_NAME, default_tool_dir, find_tool_in_subpath

PACKAGE_EXTENSION = ".xam"
DEFAULT_TIMEOUT = timedelta(minutes=5)
DEFAULT_WORKING_DIR = "./"
DEFAULT_OUTPUT_PATH = "./xpkg"


def _default_tool_path() -> str:
    return find_tool_in_subpath(XPKG_TOOL_NAME, default_tool_dir())


def _to_timedelta(value: timedelta | int | float) -> timedelta:
    if isinstance(value, timedelta):
        return value
    return timedelta(seconds=value)


def _to_paths(value: Iterable[str]) -> tuple[str, ...]:
    if isinstance(value, str):
        return (value,)
    return tuple(value)


def _to_pairs(value: Iterable[Iterable[str]]) -> tuple[tuple[str, str], ...]:
    if isinstance(value, Mapping):
        return tuple((k, v) for k, v in value.items())

    pairs = []
    for item in value:
        if isinstance(item, str) or not isinstance(item, (list, tuple)) or len(item) != 2:
            raise InvalidConfigurationError(
                f"Expected a (name, path) pair, got {item!r}."
            )
        pairs.append((item[0], item[1]))
    return tuple(pairs)


@define(frozen=True, slots=True)
class XpkgParams:
    """Parameters for a single invocation of the xpkg tool."""

    tool_path: str = field(factory=_default_tool_path)
    working_dir: str = field(default=DEFAULT_WORKING_DIR)
    timeout: timedelta = field(default=DEFAULT_TIMEOUT, converter=_to_timedelta)
    package: str | None = field(default=None)
    version: str = field(factory=build_version)
    output_path: str = field(default=DEFAULT_OUTPUT_PATH)
    project: str | None = field(default=None)
    summary: str | None = field(default=None)
    publisher: str | None = field(default=None)
    website: str | None = field(default=None)
    details: str | None = field(default=None)
    license: str | None = field(default=None)
    getting_started: str | None = field(default=None)
    icons: tuple[str, ...] = field(default=(), converter=_to_paths)
    libraries: tuple[tuple[str, str], ...] = field(default=(), converter=_to_pairs)
    samples: tuple[tuple[str, str], ...] = field(default=(), converter=_to_pairs)

    @property
    def package_file_name(self) -> str:
        if not self.package:
            raise InvalidConfigurationError(
                "No package name given. Set 'package' before running xpkg."
            )
        if not self.version:
            raise InvalidConfigurationError(
                "No package version given. Set 'version' before running xpkg."
            )
        return f"{self.package}-{self.version}{PACKAGE_EXTENSION}"

    @property
    def package_file_path(self) -> str:
        return os.path.join(self.output_path, self.package_file_name)


Overrides: TypeAlias = (
    Callable[[XpkgParams], XpkgParams] | Mapping[str, Any] | None
)

PARAM_FIELDS = frozenset(a.name for a in attrs.fields(XpkgParams))


def xpkg_defaults() -> XpkgParams:
    """Creates a fresh set of default xpkg parameters."""
    return XpkgParams()


def apply_overrides(params: XpkgParams, overrides: Overrides) -> XpkgParams:
    """Returns a copy of `params` with the caller's overrides applied."""
    if overrides is None:
        return params
    if callable(overrides):
        result = overrides(params)
        if not isinstance(result, XpkgParams):
            raise InvalidConfigurationError(
                f"Override function must return XpkgParams, got {type(result).__name__}."
            )
        return result

    unknown = set(overrides) - PARAM_FIELDS
    if unknown:
        raise InvalidConfigurationError(
            f"Unknown xpkg parameter(s): {', '.join(sorted(unknown))}"
        )
    return attrs.evolve(params, **overrides)
