"""Order-normalized byte form of a command.

Fields are concatenated with no separators, so the output is only stable, not
unambiguous: `["ab", "c"]` and `["a", "bc"]` produce the same bytes. Existing
command ids depend on this layout, so it must not change.
"""

from __future__ import annotations

from datetime import timedelta
from typing import Iterable, Mapping

from .command import Command, InputExclusion, format_input_type

_NANOSECOND = 1
_MICROSECOND = 1000 * _NANOSECOND
_MILLISECOND = 1000 * _MICROSECOND
_SECOND = 1000 * _MILLISECOND


def _format_fraction(value: int, precision: int) -> tuple[str, int]:
    """Split off the low `precision` digits of `value` as a decimal fraction.

    Trailing zeros are dropped, and so is the dot when nothing is left.

    Example:
        ```python
        assert _format_fraction(1_500_000_000, 9) == (".5", 1)
        ```
    """
    digits: list[str] = []
    printed = False
    for _ in range(precision):
        digit = value % 10
        printed = printed or digit != 0
        if printed:
            digits.append(str(digit))
        value //= 10
    if not digits:
        return "", value
    return "." + "".join(reversed(digits)), value


def format_duration(timeout: timedelta | int | None) -> str:
    """Render a duration the way command ids expect it, e.g. `1h30m0s` or `250ms`.

    Integers are taken as nanoseconds and `None` as zero.

    Example:
        ```python
        assert format_duration(timedelta(hours=1, minutes=30)) == "1h30m0s"
        assert format_duration(timedelta(0)) == "0s"
        ```
    """
    if timeout is None:
        nanos = 0
    elif isinstance(timeout, timedelta):
        nanos = (timeout // timedelta(microseconds=1)) * _MICROSECOND
    else:
        nanos = int(timeout)
    if nanos == 0:
        return "0s"

    sign = "-" if nanos < 0 else ""
    remaining = abs(nanos)
    if remaining < _SECOND:
        if remaining < _MICROSECOND:
            precision, unit = 0, "ns"
        elif remaining < _MILLISECOND:
            precision, unit = 3, "µs"
        else:
            precision, unit = 6, "ms"
        fraction, whole = _format_fraction(remaining, precision)
        return f"{sign}{whole}{fraction}{unit}"

    fraction, seconds = _format_fraction(remaining, 9)
    text = f"{seconds % 60}{fraction}s"
    minutes = seconds // 60
    if minutes > 0:
        text = f"{minutes % 60}m{text}"
        hours = minutes // 60
        if hours > 0:
            text = f"{hours}h{text}"
    return sign + text


def _join(values: Iterable[str] | None) -> str:
    """Concatenate strings in their given order.

    Example:
        ```python
        assert _join(["echo", "hi"]) == "echohi"
        ```
    """
    return "".join(values or ())


def _join_sorted(values: Iterable[str] | None) -> str:
    """Concatenate strings after sorting them.

    Example:
        ```python
        assert _join_sorted(["b", "a"]) == "ab"
        ```
    """
    return "".join(sorted(values or ()))


def _join_mapping(mapping: Mapping[str, str] | None) -> str:
    """Concatenate key then value for each entry, in ascending key order.

    Example:
        ```python
        assert _join_mapping({"OS": "linux", "Arch": "x64"}) == "Archx64OSlinux"
        ```
    """
    if not mapping:
        return ""
    return "".join(key + mapping[key] for key in sorted(mapping))


def _join_exclusions(exclusions: Iterable[InputExclusion] | None) -> str:
    """Concatenate exclusions by descending regex, then descending type.

    Example:
        ```python
        text = _join_exclusions([InputExclusion("a", 1), InputExclusion("b", 2)])
        assert text == "bFileInputTypeaDirectoryInputType"
        ```
    """
    ordered = sorted(
        exclusions or (),
        key=lambda excl: (excl.regex, int(excl.type)),
        reverse=True,
    )
    return "".join(excl.regex + format_input_type(excl.type) for excl in ordered)


def canonical_text(command: Command) -> str:
    """Return the canonical form of a command as text.

    Example:
        ```python
        text = canonical_text(Command(args=["echo", "hi"], exec_root="/tmp/x"))
        assert text == "echohi/tmp/x0s"
        ```
    """
    parts = [
        _join(command.args),
        command.exec_root,
        command.working_dir,
        _join_sorted(command.output_files),
        _join_sorted(command.output_dirs),
        format_duration(command.timeout),
        _join_mapping(command.platform),
    ]
    spec = command.input_spec
    if spec is not None:
        parts.append(_join_mapping(spec.environment_variables))
        parts.append(_join_sorted(spec.inputs))
        parts.append(_join_exclusions(spec.input_exclusions))
    return "".join(parts)


def canonical_bytes(command: Command) -> bytes:
    """Return the UTF-8 canonical form of a command, the input to its fingerprint.

    Example:
        ```python
        data = canonical_bytes(Command(args=["ls"], exec_root="/work"))
        ```
    """
    return canonical_text(command).encode("utf-8")
