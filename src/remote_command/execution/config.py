from __future__ import annotations

import tomllib
from pathlib import Path
from typing import Any

OPTION_KEYS = ("accept_cached", "do_not_cache", "download_outputs")


def _default_options_path() -> Path:
    """Return bundled default execution options TOML path.

    Example:
        ```python
        path = _default_options_path()
        ```
    """
    return Path(__file__).with_name("default_options.toml")


def read_options_toml(path: Path) -> dict[str, bool]:
    """Read execution options TOML and return the recognized boolean options.

    Options may sit at the top level or under an `[options]` table; unknown
    keys are ignored.

    Example:
        ```python
        raw = read_options_toml(Path("/tmp/options.toml"))
        ```
    """
    if not path.exists():
        return {"accept_cached": True, "do_not_cache": False, "download_outputs": True}
    raw = tomllib.loads(path.read_text(encoding="utf-8"))
    options_obj = raw.get("options", raw)
    if not isinstance(options_obj, dict):
        raise ValueError("Execution options config must be a TOML table")
    return {
        key: _bool(options_obj[key], key) for key in OPTION_KEYS if key in options_obj
    }


def _bool(value: Any, field_name: str) -> bool:
    """Validate a boolean option value.

    Example:
        ```python
        flag = _bool(True, "accept_cached")
        ```
    """
    if not isinstance(value, bool):
        raise ValueError(f"'{field_name}' must be a boolean")
    return value


_DEFAULT_OPTIONS_RAW = read_options_toml(_default_options_path())
DEFAULT_ACCEPT_CACHED = _DEFAULT_OPTIONS_RAW.get("accept_cached", True)
DEFAULT_DO_NOT_CACHE = _DEFAULT_OPTIONS_RAW.get("do_not_cache", False)
DEFAULT_DOWNLOAD_OUTPUTS = _DEFAULT_OPTIONS_RAW.get("download_outputs", True)
