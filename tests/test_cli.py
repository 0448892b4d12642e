from __future__ import annotations

import io
import json
from pathlib import Path

import pytest

from rcmd import cli
from remote_command import Command, InputExclusion, InputSpec, InputType, stable_id


def _write(tmp_path: Path, data: object) -> str:
    path = tmp_path / "command.json"
    path.write_text(json.dumps(data), encoding="utf-8")
    return str(path)


def test_cli_id_prints_command_id(tmp_path: Path, capsys: pytest.CaptureFixture[str]) -> None:
    path = _write(
        tmp_path,
        {
            "args": ["echo", "hi"],
            "exec_root": "/tmp/x",
            "platform": {"OS": "linux", "Arch": "x64"},
            "input_spec": {
                "inputs": ["a.txt"],
                "input_exclusions": [{"regex": "tmp/", "type": "DirectoryInputType"}],
            },
        },
    )
    expected = stable_id(
        Command(
            args=["echo", "hi"],
            exec_root="/tmp/x",
            platform={"Arch": "x64", "OS": "linux"},
            input_spec=InputSpec(
                inputs=["a.txt"],
                input_exclusions=[InputExclusion("tmp/", InputType.DIRECTORY)],
            ),
        )
    )

    code = cli.main(["id", path])

    assert code == 0
    assert capsys.readouterr().out.strip() == expected


def test_cli_show_prints_identifiers_and_canonical_form(
    tmp_path: Path, capsys: pytest.CaptureFixture[str]
) -> None:
    path = _write(tmp_path, {"args": ["echo", "hi"], "exec_root": "/tmp/x"})

    code = cli.main(["--invocation-id", "inv-7", "show", path])
    output = capsys.readouterr().out

    assert code == 0
    assert "inv-7" in output
    assert "remote-client" in output
    assert "echohi/tmp/x0s" in output


def test_cli_keeps_identifiers_from_file(tmp_path: Path, capsys: pytest.CaptureFixture[str]) -> None:
    path = _write(
        tmp_path,
        {"args": ["ls"], "exec_root": "/r", "identifiers": {"command_id": "fixed-id"}},
    )

    code = cli.main(["id", path])

    assert code == 0
    assert capsys.readouterr().out.strip() == "fixed-id"


def test_cli_validate_ok(tmp_path: Path, capsys: pytest.CaptureFixture[str]) -> None:
    path = _write(tmp_path, {"args": [], "exec_root": "/r"})

    code = cli.main(["validate", path])

    assert code == 0
    assert "Command is valid" in capsys.readouterr().out


def test_cli_validate_reports_reason(tmp_path: Path, capsys: pytest.CaptureFixture[str]) -> None:
    path = _write(tmp_path, {"args": ["ls"]})

    code = cli.main(["validate", path])

    assert code == 1
    assert "missing command exec root" in capsys.readouterr().out


def test_cli_validate_missing_args(tmp_path: Path, capsys: pytest.CaptureFixture[str]) -> None:
    path = _write(tmp_path, {"exec_root": "/r"})

    code = cli.main(["validate", path])

    assert code == 1
    assert "missing command arguments" in capsys.readouterr().out


def test_cli_unreadable_file(tmp_path: Path, capsys: pytest.CaptureFixture[str]) -> None:
    code = cli.main(["id", str(tmp_path / "missing.json")])

    assert code == 1
    assert "Cannot read" in capsys.readouterr().out


def test_cli_malformed_description(tmp_path: Path, capsys: pytest.CaptureFixture[str]) -> None:
    path = _write(tmp_path, {"args": "echo", "exec_root": "/r"})

    code = cli.main(["id", path])

    assert code == 1
    assert "must be a list of strings" in capsys.readouterr().out


def test_cli_validate_rejects_null_exec_root(tmp_path: Path, capsys: pytest.CaptureFixture[str]) -> None:
    path = _write(tmp_path, {"args": ["ls"], "exec_root": None, "working_dir": None})

    code = cli.main(["validate", path])

    assert code == 1
    assert "missing command exec root" in capsys.readouterr().out


def test_cli_null_working_dir_is_empty(tmp_path: Path, capsys: pytest.CaptureFixture[str]) -> None:
    path = _write(tmp_path, {"args": ["ls"], "exec_root": "/r", "working_dir": None})

    code = cli.main(["id", path])

    assert code == 0
    assert capsys.readouterr().out.strip() == stable_id(Command(args=["ls"], exec_root="/r"))


def test_cli_rejects_non_string_exec_root(tmp_path: Path, capsys: pytest.CaptureFixture[str]) -> None:
    path = _write(tmp_path, {"args": ["ls"], "exec_root": 5})

    code = cli.main(["validate", path])

    assert code == 1
    assert "'exec_root' must be a string" in capsys.readouterr().out


@pytest.mark.parametrize(
    ("timeout", "message"),
    [
        (1e20, "'timeout_seconds' is out of range"),
        ("soon", "'timeout_seconds' must be a number"),
    ],
)
def test_cli_rejects_bad_timeout(
    tmp_path: Path, capsys: pytest.CaptureFixture[str], timeout: object, message: str
) -> None:
    path = _write(tmp_path, {"args": ["ls"], "exec_root": "/r", "timeout_seconds": timeout})

    code = cli.main(["id", path])

    assert code == 1
    assert message in capsys.readouterr().out


def test_command_from_json_input_types() -> None:
    cmd = cli.command_from_json(
        {
            "args": ["ls"],
            "exec_root": "/r",
            "timeout_seconds": 1.5,
            "input_spec": {
                "input_exclusions": [
                    {"regex": "a", "type": "FILE"},
                    {"regex": "b", "type": 1},
                    {"regex": "c"},
                ],
                "environment_variables": {"LANG": "C"},
            },
        }
    )

    assert cmd.input_spec is not None
    assert [e.type for e in cmd.input_spec.input_exclusions] == [
        InputType.FILE,
        InputType.DIRECTORY,
        InputType.UNSPECIFIED,
    ]
    assert cmd.input_spec.environment_variables == {"LANG": "C"}
    assert cmd.timeout.total_seconds() == 1.5


def test_command_from_json_rejects_unknown_input_type() -> None:
    with pytest.raises(ValueError, match="Invalid input type"):
        cli.command_from_json(
            {"args": [], "input_spec": {"input_exclusions": [{"regex": "a", "type": "Socket"}]}}
        )


def test_cli_top_level_help_examples(capsys: pytest.CaptureFixture[str]) -> None:
    with pytest.raises(SystemExit) as exc:
        cli.main(["--help"])
    output = capsys.readouterr().out
    assert exc.value.code == 0
    assert "Quick Examples:" in output
    assert "python -m rcmd validate command.json" in output


def test_cli_missing_subcommand_exits_with_usage_error(capsys: pytest.CaptureFixture[str]) -> None:
    with pytest.raises(SystemExit) as exc:
        cli.main([])
    assert exc.value.code == 2
    assert "Error:" in capsys.readouterr().out


def test_cli_print_help_writes_to_requested_stream(capsys: pytest.CaptureFixture[str]) -> None:
    parser = cli.build_parser()
    buffer = io.StringIO()
    parser.print_help(file=buffer)
    output = capsys.readouterr().out
    assert output == ""
    help_text = buffer.getvalue()
    assert "Usage:" in help_text
    assert "remote-command CLI" in help_text
