"""Locating and reading ``orderentry.toml``.

An explicit ``ORDERENTRY_CONFIG`` path wins over discovery; otherwise the
nearest ``orderentry.toml`` in the start directory or one of its parents
is used.
"""

from __future__ import annotations

import os
import tomllib
from pathlib import Path
from typing import Any

import click

CONFIG_FILENAME = "orderentry.toml"
CONFIG_ENV_VAR = "ORDERENTRY_CONFIG"


def _env_config() -> Path | None:
    raw = os.environ.get(CONFIG_ENV_VAR)
    return Path(raw) if raw else None


def find_config(start: Path | None = None) -> Path | None:
    """Path of the config file in effect for *start* (default: cwd), or None.

    A set ``ORDERENTRY_CONFIG`` that names no file yields None; discovery
    is not attempted in that case.
    """
    explicit = _env_config()
    if explicit is not None:
        return explicit if explicit.is_file() else None

    origin = (start or Path.cwd()).resolve()
    for directory in (origin, *origin.parents):
        candidate = directory / CONFIG_FILENAME
        if candidate.is_file():
            return candidate
    return None


def read_config(path: Path | None) -> dict[str, Any]:
    """Raw TOML table of *path*; empty for None or a missing file.

    Raises:
        click.ClickException: the file is not valid TOML.
    """
    if path is None or not path.is_file():
        return {}
    try:
        return tomllib.loads(path.read_text(encoding="utf-8"))
    except tomllib.TOMLDecodeError as exc:
        raise click.ClickException(f"Invalid TOML in {path}: {exc}") from exc
