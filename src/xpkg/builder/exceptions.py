class BuildError(Exception):
    pass


class InvalidConfigurationError(BuildError):
    pass


class ManifestError(InvalidConfigurationError):
    pass


class PackagingToolError(BuildError):
    """The xpkg tool finished with a non-zero exit code or timed out."""

    def __init__(self, operation: str, exit_code: int | None) -> None:
        self.operation = operation
        self.exit_code = exit_code
        outcome = (
            "Process timed out."
            if exit_code is None
            else f"Process finished with exit code {exit_code}."
        )
        super().__init__(f"{operation.capitalize()} xpkg package failed. {outcome}")

    @property
    def timed_out(self) -> bool:
        return self.exit_code is None
