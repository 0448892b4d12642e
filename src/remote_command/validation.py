from __future__ import annotations

from .command import Command


class CommandValidationError(ValueError):
    """A command is missing a field required for execution."""


class MissingArgsError(CommandValidationError):
    pass


class MissingExecRootError(CommandValidationError):
    pass


class MissingInputSpecError(CommandValidationError):
    pass


class MissingIdentifiersError(CommandValidationError):
    pass


def validation_error(command: Command | None) -> CommandValidationError | None:
    """Return the first missing required field as an error, or None.

    A `None` command passes. An empty argument list passes; only unset
    arguments (`args=None`) fail.

    Example:
        ```python
        err = validation_error(Command(exec_root="/tmp/x"))
        assert str(err) == "missing command arguments"
        ```
    """
    if command is None:
        return None
    if command.args is None:
        return MissingArgsError("missing command arguments")
    if not command.exec_root:
        return MissingExecRootError("missing command exec root")
    if command.input_spec is None:
        return MissingInputSpecError("missing command input spec")
    if command.identifiers is None:
        return MissingIdentifiersError("missing command identifiers")
    return None


def validate(command: Command | None) -> None:
    """Raise if a command is missing any field required for execution.

    Example:
        ```python
        validate(Command(args=[], exec_root="/tmp/x", input_spec=InputSpec(), identifiers=Identifiers()))
        ```
    """
    error = validation_error(command)
    if error is not None:
        raise error
