from __future__ import annotations

from dataclasses import dataclass, field
from enum import IntEnum
from pathlib import Path

from .config import (
    DEFAULT_ACCEPT_CACHED,
    DEFAULT_DO_NOT_CACHE,
    DEFAULT_DOWNLOAD_OUTPUTS,
    read_options_toml,
)
from .digest import Digest

# Exit code reported for commands that fail before reaching the engine.
LOCAL_ERROR_EXIT_CODE = 35


@dataclass(slots=True)
class ExecutionOptions:
    """How an engine should execute a command.

    Example:
        ```python
        opts = ExecutionOptions(accept_cached=False)
        ```
    """

    accept_cached: bool = DEFAULT_ACCEPT_CACHED
    do_not_cache: bool = DEFAULT_DO_NOT_CACHE
    download_outputs: bool = DEFAULT_DOWNLOAD_OUTPUTS

    @classmethod
    def from_file(cls, config_path: str) -> "ExecutionOptions":
        """Load options from a TOML file, keeping defaults for keys it omits.

        Example:
            ```python
            opts = ExecutionOptions.from_file("/tmp/options.toml")
            ```
        """
        path = Path(config_path)
        if not path.is_file():
            raise ValueError(f"Execution options file not found: {config_path}")
        return cls(**read_options_toml(path))


def default_execution_options() -> ExecutionOptions:
    """Return the recommended execution options.

    Example:
        ```python
        assert default_execution_options().accept_cached is True
        ```
    """
    return ExecutionOptions()


class ResultStatus(IntEnum):
    SUCCESS = 0
    CACHE_HIT = 1
    TIMEOUT = 2
    INTERRUPTED = 3
    REMOTE_ERROR = 4
    LOCAL_ERROR = 5

    def __str__(self) -> str:
        """Return the canonical name of the status.

        Example:
            ```python
            assert str(ResultStatus.CACHE_HIT) == "CacheHitResultStatus"
            ```
        """
        return _RESULT_STATUS_NAMES[self.value]


_RESULT_STATUS_NAMES = (
    "SuccessResultStatus",
    "CacheHitResultStatus",
    "TimeoutResultStatus",
    "InterruptedResultStatus",
    "RemoteErrorResultStatus",
    "LocalErrorResultStatus",
)


def format_result_status(value: int) -> str:
    """Render any integer as a result status name, flagging unknown values.

    Example:
        ```python
        assert format_result_status(2) == "TimeoutResultStatus"
        assert format_result_status(-1) == "InvalidResultStatus(-1)"
        ```
    """
    if ResultStatus.SUCCESS <= value <= ResultStatus.LOCAL_ERROR:
        return _RESULT_STATUS_NAMES[value]
    return f"InvalidResultStatus({int(value)})"


@dataclass(slots=True)
class Result:
    """Outcome of a finished command execution.

    Example:
        ```python
        res = Result(exit_code=0, status=ResultStatus.SUCCESS)
        ```
    """

    exit_code: int = 0
    status: int = ResultStatus.SUCCESS
    err: BaseException | None = None

    def __str__(self) -> str:
        """Return a one-line summary of the result.

        Example:
            ```python
            assert str(Result()) == "SuccessResultStatus (exit code 0)"
            ```
        """
        text = f"{format_result_status(self.status)} (exit code {self.exit_code})"
        if self.err is not None:
            text += f": {self.err}"
        return text


@dataclass(slots=True)
class Metadata:
    """Digests of the executed command and action, for change detection across builds.

    Example:
        ```python
        meta = Metadata(command_digest=Digest.from_string(text))
        ```
    """

    command_digest: Digest = field(default_factory=Digest)
    action_digest: Digest = field(default_factory=Digest)
