"""
The `packaging` sub-package turns xpkg parameters into invocations of the
external xpkg tool.

This includes:
- Building the `create` and `validate` argument strings.
- Running the tool as a subprocess with a timeout.
- Orchestrating the pack and validate operations and interpreting exit codes.
"""
