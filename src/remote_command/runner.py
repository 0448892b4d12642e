from __future__ import annotations

import logging
from typing import Callable

from .command import Command
from .defaults import fill_default_field_values, new_invocation_id
from .execution.engine import ExecutionEngine
from .execution.types import (
    LOCAL_ERROR_EXIT_CODE,
    ExecutionOptions,
    Metadata,
    Result,
    ResultStatus,
)
from .validation import validation_error

logger = logging.getLogger(__name__)


def _resolve_options(
    options: ExecutionOptions | None, options_file: str | None
) -> ExecutionOptions:
    """Resolve the effective execution options for a run.

    Example:
        ```python
        opts = _resolve_options(None, "/tmp/options.toml")
        ```
    """
    if options is not None and options_file is not None:
        raise ValueError("Provide either 'options' or 'options_file', not both")
    if options_file is not None:
        return ExecutionOptions.from_file(options_file)
    if options is None:
        return ExecutionOptions()
    return options


def run_command(
    command: Command | None,
    engine: ExecutionEngine,
    options: ExecutionOptions | None = None,
    options_file: str | None = None,
    *,
    new_id: Callable[[], str] = new_invocation_id,
) -> tuple[Result, Metadata]:
    """Normalize and validate a command, then hand it to the execution engine.

    A command that fails validation never reaches the engine; the validation
    error is returned in a local-error `Result` instead.

    Example:
        ```python
        cmd = Command(args=["echo", "hi"], exec_root="/tmp/x")
        result, meta = run_command(cmd, engine=engine)
        ```
    """
    resolved_options = _resolve_options(options, options_file)
    fill_default_field_values(command, new_id=new_id)

    error = validation_error(command)
    if error is not None:
        logger.warning("Not dispatching command: %s", error)
        return (
            Result(exit_code=LOCAL_ERROR_EXIT_CODE, status=ResultStatus.LOCAL_ERROR, err=error),
            Metadata(),
        )

    if command is not None:
        logger.debug(
            "Dispatching command %s (invocation %s)",
            command.identifiers.command_id,
            command.identifiers.invocation_id,
        )
    return engine.execute(command, resolved_options)
