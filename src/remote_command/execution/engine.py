from __future__ import annotations

from typing import Protocol

from ..command import Command
from .types import ExecutionOptions, Metadata, Result


class ExecutionEngine(Protocol):
    def execute(self, command: Command, options: ExecutionOptions) -> tuple[Result, Metadata]:
        """Execute one normalized, validated command and report its outcome.

        Example:
            ```python
            result, meta = engine.execute(cmd, ExecutionOptions())
            ```
        """
        ...
