from __future__ import annotations

from dataclasses import dataclass, field
from datetime import timedelta
from enum import IntEnum


class InputType(IntEnum):
    """Narrows which kind of input path an exclusion matches."""

    UNSPECIFIED = 0
    DIRECTORY = 1
    FILE = 2

    def __str__(self) -> str:
        """Return the canonical name of the input type.

        Example:
            ```python
            assert str(InputType.FILE) == "FileInputType"
            ```
        """
        return _INPUT_TYPE_NAMES[self.value]


_INPUT_TYPE_NAMES = ("UnspecifiedInputType", "DirectoryInputType", "FileInputType")


def format_input_type(value: int) -> str:
    """Render any integer as an input type name, flagging unknown values.

    Example:
        ```python
        assert format_input_type(1) == "DirectoryInputType"
        assert format_input_type(7) == "InvalidInputType(7)"
        ```
    """
    if InputType.UNSPECIFIED <= value <= InputType.FILE:
        return _INPUT_TYPE_NAMES[value]
    return f"InvalidInputType({int(value)})"


@dataclass(slots=True)
class InputExclusion:
    """Inputs matching `regex` (and `type`) are dropped from the command inputs.

    Example:
        ```python
        excl = InputExclusion(regex=r".*\\.pyc$", type=InputType.FILE)
        ```
    """

    regex: str
    type: int = InputType.UNSPECIFIED


@dataclass(slots=True)
class InputSpec:
    """All the inputs a remote command needs.

    Example:
        ```python
        spec = InputSpec(inputs=["src/main.c"], environment_variables={"LANG": "C"})
        ```
    """

    inputs: list[str] = field(default_factory=list)
    input_exclusions: list[InputExclusion] = field(default_factory=list)
    environment_variables: dict[str, str] = field(default_factory=dict)


@dataclass(slots=True)
class Identifiers:
    """Ids attached to a command when it is sent for remote execution.

    `command_id` is normally derived from the command fingerprint, `invocation_id`
    spans several commands and `correlated_invocation_id` spans several invocations.
    `execution_id` identifies one particular execution of the command.

    Example:
        ```python
        ids = Identifiers(tool_name="bazel", correlated_invocation_id="build-9")
        ```
    """

    command_id: str = ""
    invocation_id: str = ""
    correlated_invocation_id: str = ""
    tool_name: str = ""
    tool_version: str = ""
    execution_id: str = ""


@dataclass(slots=True)
class Command:
    """Everything needed to execute one command remotely.

    Paths in `working_dir`, `output_files`, `output_dirs` and the input spec are
    relative to `exec_root`. `args=None` means the arguments were never set, which
    is different from an empty argument list. Run `fill_default_field_values` on
    every new command before use.

    Example:
        ```python
        cmd = Command(args=["echo", "hi"], exec_root="/tmp/x", input_spec=InputSpec())
        ```
    """

    args: list[str] | None = None
    exec_root: str = ""
    working_dir: str = ""
    input_spec: InputSpec | None = None
    output_files: list[str] = field(default_factory=list)
    output_dirs: list[str] = field(default_factory=list)
    timeout: timedelta = field(default_factory=timedelta)
    platform: dict[str, str] = field(default_factory=dict)
    identifiers: Identifiers | None = None
