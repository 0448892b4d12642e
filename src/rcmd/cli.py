from __future__ import annotations

import argparse
import json
import logging
from datetime import timedelta
from functools import partial
from pathlib import Path
from typing import Any, Never, Sequence

from rich.console import Console
from rich.logging import RichHandler
from rich.panel import Panel
from rich.table import Table
from rich.text import Text
from rich_argparse import RawTextRichHelpFormatter
from remote_command import (
    Command,
    Identifiers,
    InputExclusion,
    InputSpec,
    InputType,
    canonical_text,
    fill_default_field_values,
    validation_error,
)
from remote_command.defaults import new_invocation_id

_CONSOLE = Console(no_color=False)


class _CLIHelpFormatter(RawTextRichHelpFormatter):
    """Rich formatter with explicit high-contrast CLI styles."""

    styles = {
        "argparse.args": "bold cyan",
        "argparse.groups": "bold magenta",
        "argparse.help": "white",
        "argparse.metavar": "bold yellow",
        "argparse.prog": "bold bright_blue",
        "argparse.syntax": "bold bright_white",
        "argparse.text": "bright_white",
    }


_HELP_FORMATTER = partial(
    _CLIHelpFormatter,
    max_help_position=34,
    width=120,
)


class _RichArgumentParser(argparse.ArgumentParser):
    """ArgumentParser that renders errors via Rich.

    Example:
        ```python
        parser = _RichArgumentParser(prog="python -m rcmd")
        ```
    """

    def error(self, message: str) -> Never:
        """Render parse errors with Rich and exit.

        Example:
            ```python
            # parser.error("invalid usage")
            ```
        """
        _CONSOLE.print(Panel.fit(f"[bold red]Error:[/bold red] {message}", border_style="red"))
        self.print_help()
        raise SystemExit(2)


def _str(value: Any, field_name: str) -> str:
    """Validate a JSON string field; `null` counts as empty.

    Example:
        ```python
        root = _str("/tmp/x", "exec_root")
        ```
    """
    if value is None:
        return ""
    if not isinstance(value, str):
        raise ValueError(f"'{field_name}' must be a string")
    return value


def _timeout(value: Any) -> timedelta:
    """Convert a JSON number of seconds into a timeout.

    Example:
        ```python
        timeout = _timeout(1.5)
        ```
    """
    if value is None:
        return timedelta(0)
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        raise ValueError("'timeout_seconds' must be a number")
    try:
        return timedelta(seconds=value)
    except (OverflowError, ValueError):
        raise ValueError(f"'timeout_seconds' is out of range: {value!r}") from None


def _str_list(value: Any, field_name: str) -> list[str]:
    """Validate a JSON list of strings.

    Example:
        ```python
        args = _str_list(["echo", "hi"], "args")
        ```
    """
    if not isinstance(value, list) or not all(isinstance(item, str) for item in value):
        raise ValueError(f"'{field_name}' must be a list of strings")
    return list(value)


def _str_map(value: Any, field_name: str) -> dict[str, str]:
    """Validate a JSON object of string values.

    Example:
        ```python
        platform = _str_map({"OSFamily": "linux"}, "platform")
        ```
    """
    if not isinstance(value, dict) or not all(isinstance(v, str) for v in value.values()):
        raise ValueError(f"'{field_name}' must be an object of strings")
    return dict(value)


def _input_type(value: Any) -> int:
    """Accept an input type as a name (`FileInputType` or `FILE`) or an integer.

    Example:
        ```python
        assert _input_type("DirectoryInputType") == InputType.DIRECTORY
        ```
    """
    if isinstance(value, bool):
        raise ValueError(f"Invalid input type: {value!r}")
    if isinstance(value, int):
        return value
    if isinstance(value, str):
        for member in InputType:
            if value in {str(member), member.name}:
                return member
    raise ValueError(f"Invalid input type: {value!r}")


def command_from_json(data: Any) -> Command:
    """Build a Command from a decoded JSON description.

    Example:
        ```python
        cmd = command_from_json({"args": ["echo", "hi"], "exec_root": "/tmp/x"})
        ```
    """
    if not isinstance(data, dict):
        raise ValueError("Command description must be a JSON object")
    command = Command(
        args=_str_list(data["args"], "args") if data.get("args") is not None else None,
        exec_root=_str(data.get("exec_root"), "exec_root"),
        working_dir=_str(data.get("working_dir"), "working_dir"),
        output_files=_str_list(data.get("output_files", []), "output_files"),
        output_dirs=_str_list(data.get("output_dirs", []), "output_dirs"),
        timeout=_timeout(data.get("timeout_seconds")),
        platform=_str_map(data.get("platform", {}), "platform"),
    )
    spec = data.get("input_spec")
    if spec is not None:
        if not isinstance(spec, dict):
            raise ValueError("'input_spec' must be an object")
        exclusions = spec.get("input_exclusions", [])
        if not isinstance(exclusions, list):
            raise ValueError("'input_exclusions' must be a list")
        command.input_spec = InputSpec(
            inputs=_str_list(spec.get("inputs", []), "inputs"),
            input_exclusions=[
                InputExclusion(regex=_str(item["regex"], "regex"), type=_input_type(item.get("type", 0)))
                for item in exclusions
            ],
            environment_variables=_str_map(
                spec.get("environment_variables", {}), "environment_variables"
            ),
        )
    ids = data.get("identifiers")
    if ids is not None:
        command.identifiers = Identifiers(**_str_map(ids, "identifiers"))
    return command


def build_parser() -> argparse.ArgumentParser:
    """Build CLI parser for inspecting command descriptions.

    Example:
        ```python
        parser = build_parser()
        ```
    """
    parser = _RichArgumentParser(
        prog="python -m rcmd",
        description=(
            "remote-command CLI\n"
            "Inspect the identity of a remote command described in a JSON file.\n"
            "Commands are normalized before anything is printed."
        ),
        epilog=(
            "Quick Examples:\n"
            "  python -m rcmd id command.json\n"
            "  python -m rcmd show command.json\n"
            "  python -m rcmd validate command.json\n"
            "  python -m rcmd --invocation-id build-42 show command.json"
        ),
        formatter_class=_HELP_FORMATTER,
    )
    parser.add_argument(
        "--invocation-id",
        help=(
            "Invocation id to assign when the file has none.\n"
            "Default: a random UUID."
        ),
    )
    parser.add_argument(
        "--verbose",
        action="store_true",
        help="Log normalization details.",
    )

    sub = parser.add_subparsers(
        dest="command",
        required=True,
        parser_class=_RichArgumentParser,
    )
    for name, help_text, description in (
        (
            "id",
            "Print the command id.",
            "Normalize the command and print its command id.",
        ),
        (
            "show",
            "Show identifiers and canonical form.",
            (
                "Normalize the command and show its identifiers\n"
                "together with the canonical text the command id is hashed from."
            ),
        ),
        (
            "validate",
            "Check required command fields.",
            (
                "Normalize the command and check that every field\n"
                "required for remote execution is present."
            ),
        ),
    ):
        cmd = sub.add_parser(
            name,
            help=help_text,
            description=description,
            formatter_class=_HELP_FORMATTER,
        )
        cmd.add_argument("file", help="Path to a JSON command description.")

    return parser


def _load_command(path: str) -> Command:
    """Read and parse a JSON command description.

    Example:
        ```python
        cmd = _load_command("command.json")
        ```
    """
    try:
        data = json.loads(Path(path).read_text(encoding="utf-8"))
    except OSError as exc:
        raise ValueError(f"Cannot read {path}: {exc.strerror}") from exc
    except json.JSONDecodeError as exc:
        raise ValueError(f"Invalid JSON in {path}: {exc.msg}") from exc
    try:
        return command_from_json(data)
    except (KeyError, TypeError, OverflowError) as exc:
        raise ValueError(f"Malformed command description in {path}: {exc}") from exc


def _print_identifiers(ids: Identifiers) -> None:
    """Render command identifiers in a rich table.

    Example:
        ```python
        _print_identifiers(Identifiers(command_id="abcd1234"))
        ```
    """
    table = Table(title="Command Identifiers")
    table.add_column("Field", style="cyan")
    table.add_column("Value", style="magenta")
    table.add_row("command_id", ids.command_id)
    table.add_row("invocation_id", ids.invocation_id)
    table.add_row("correlated_invocation_id", ids.correlated_invocation_id)
    table.add_row("tool_name", ids.tool_name)
    table.add_row("tool_version", ids.tool_version)
    table.add_row("execution_id", ids.execution_id)
    _CONSOLE.print(table)


def main(argv: Sequence[str] | None = None) -> int:
    """Run the `rcmd` CLI command handler.

    Example:
        ```python
        code = main(["id", "command.json"])
        ```
    """
    parser = build_parser()
    args = parser.parse_args(list(argv) if argv is not None else None)
    if args.verbose:
        logging.basicConfig(
            level=logging.DEBUG,
            format="%(message)s",
            handlers=[RichHandler(console=_CONSOLE)],
        )

    try:
        command = _load_command(args.file)
    except ValueError as exc:
        _CONSOLE.print(Panel.fit(f"[bold red]Error:[/bold red] {exc}", border_style="red"))
        return 1

    new_id = (lambda: args.invocation_id) if args.invocation_id else new_invocation_id
    fill_default_field_values(command, new_id=new_id)

    if args.command == "id":
        _CONSOLE.print(command.identifiers.command_id, highlight=False)
        return 0
    if args.command == "show":
        _print_identifiers(command.identifiers)
        _CONSOLE.print(
            Panel.fit(Text(canonical_text(command)), title="Canonical Form", border_style="cyan"),
            highlight=False,
        )
        return 0
    if args.command == "validate":
        error = validation_error(command)
        if error is not None:
            _CONSOLE.print(Panel.fit(f"Invalid command: {error}", style="bold red"))
            return 1
        _CONSOLE.print(Panel.fit("Command is valid", style="bold green"))
        return 0

    parser.error("Unhandled command")
    return 2
