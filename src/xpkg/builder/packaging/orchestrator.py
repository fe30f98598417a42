"""Core logic for creating and validating xpkg packages via the xpkg tool."""

from collections.abc import Callable
from datetime import timedelta

from pyvider.telemetry import logger

from ..exceptions import PackagingToolError
from ..models import Overrides, XpkgParams, apply_overrides, xpkg_defaults
from .command_line import CommandKind, build_command_line
from .process import exec_process_and_return_exit_code

ProcessInvoker = Callable[[str, str, str, timedelta], int | None]


class XpkgOrchestrator:
    def __init__(self, invoker: ProcessInvoker | None = None) -> None:
        self.invoker = invoker or exec_process_and_return_exit_code

    def _run(
        self, task_name: str, kind: CommandKind, overrides: Overrides
    ) -> XpkgParams:
        params = apply_overrides(xpkg_defaults(), overrides)
        package_file_name = params.package_file_name
        logger.info(f"Starting task {task_name}", package=package_file_name)

        args = build_command_line(params, kind)
        logger.debug(f"{params.tool_path} {args}")

        exit_code = self.invoker(
            params.tool_path, params.working_dir, args, params.timeout
        )
        if exit_code != 0:
            raise PackagingToolError(kind.value, exit_code)

        logger.info(f"Finished task {task_name}", package=package_file_name)
        return params

    def pack(self, overrides: Overrides = None) -> XpkgParams:
        """Creates a new xpkg package named after the package and version."""
        return self._run("xpkgPack", CommandKind.CREATE, overrides)

    def validate(self, overrides: Overrides = None) -> XpkgParams:
        """Validates an existing xpkg package named after the package and version."""
        return self._run("xpkgValidate", CommandKind.VALIDATE, overrides)


def xpkg_pack(overrides: Overrides = None) -> XpkgParams:
    return XpkgOrchestrator().pack(overrides)


def xpkg_validate(overrides: Overrides = None) -> XpkgParams:
    return XpkgOrchestrator().validate(overrides)
