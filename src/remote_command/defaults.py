from __future__ import annotations

import logging
import uuid
from typing import Callable

from .command import Command, Identifiers, InputSpec
from .fingerprint import stable_id

logger = logging.getLogger(__name__)

DEFAULT_TOOL_NAME = "remote-client"


def new_invocation_id() -> str:
    """Return a fresh random UUID string.

    Example:
        ```python
        invocation_id = new_invocation_id()
        ```
    """
    return str(uuid.uuid4())


def fill_default_field_values(
    command: Command | None,
    *,
    new_id: Callable[[], str] = new_invocation_id,
) -> None:
    """Fill in missing identifiers and allocate a missing input spec, in place.

    Populated fields are never overwritten, so calling this again is a no-op.
    The command id is derived before the input spec is allocated.

    Example:
        ```python
        cmd = Command(args=["echo", "hi"], exec_root="/tmp/x")
        fill_default_field_values(cmd, new_id=lambda: "inv-1")
        assert cmd.identifiers.invocation_id == "inv-1"
        ```
    """
    if command is None:
        return
    if command.identifiers is None:
        command.identifiers = Identifiers()
    ids = command.identifiers
    if not ids.command_id:
        ids.command_id = stable_id(command)
        logger.debug("Assigned command id %s", ids.command_id)
    if not ids.tool_name:
        ids.tool_name = DEFAULT_TOOL_NAME
    if not ids.invocation_id:
        ids.invocation_id = new_id()
        logger.debug("Assigned invocation id %s to command %s", ids.invocation_id, ids.command_id)
    if command.input_spec is None:
        command.input_spec = InputSpec()


normalize = fill_default_field_values
