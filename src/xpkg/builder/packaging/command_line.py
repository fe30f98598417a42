"""Serialization of xpkg parameters into the tool's argument string."""

import enum

from ..models import XpkgParams


class CommandKind(enum.Enum):
    CREATE = "create"
    VALIDATE = "validate"


# (flag, attribute) in the order the tool documents them.
_NAMED_OPTIONS: tuple[tuple[str, str], ...] = (
    ("--name=", "project"),
    ("--summary=", "summary"),
    ("--publisher=", "publisher"),
    ("--website=", "website"),
    ("--details=", "details"),
    ("--license=", "license"),
    ("--getting-started=", "getting_started"),
)


def _quote(value: str) -> str:
    return f'"{value}"'


def _create_options(params: XpkgParams) -> list[str]:
    tokens = []
    for flag, attr_name in _NAMED_OPTIONS:
        value = getattr(params, attr_name)
        # An empty string is a value; only None omits the flag.
        if value is not None:
            tokens.append(f"{flag}{_quote(value)}")

    tokens.extend(f"--icon={_quote(icon)}" for icon in params.icons)
    tokens.extend(
        f"--library={_quote(platform)}:{_quote(library)}"
        for platform, library in params.libraries
    )
    tokens.extend(
        f"--sample={_quote(sample)}:{_quote(solution)}"
        for sample, solution in params.samples
    )
    return tokens


def build_command_line(params: XpkgParams, kind: CommandKind) -> str:
    """Builds the full argument string for an xpkg `create` or `validate` call."""
    tokens = [kind.value, _quote(params.package_file_path)]
    if kind is CommandKind.CREATE:
        tokens.extend(_create_options(params))
    return " ".join(tokens)
