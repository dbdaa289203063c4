"""TOML configuration loading.

Uses tomlkit to read the optional sfra-release.toml. All settings live under
a single [sfra-release] table; anything missing falls back to the defaults
declared on ReleaseConfig.
"""

from __future__ import annotations

from pathlib import Path

import tomlkit
from pydantic import ValidationError
from tomlkit.exceptions import ParseError

from .models import ReleaseConfig
from .shell import fatal

CONFIG_FILENAME = "sfra-release.toml"
CONFIG_TABLE = "sfra-release"


def load_config_doc(path: Path) -> tomlkit.TOMLDocument:
    """Load and parse a TOML config file, exiting on malformed input."""
    try:
        return tomlkit.parse(path.read_text())
    except ParseError as exc:
        fatal(f"Invalid TOML in {path}: {exc}")


def get_release_table(doc: tomlkit.TOMLDocument) -> dict:
    """Extract the [sfra-release] table as plain Python values.

    Returns an empty dict when the table is absent.
    """
    table = doc.get(CONFIG_TABLE, {})
    # unwrap() turns tomlkit containers into builtin dicts/lists/strings
    return table.unwrap() if hasattr(table, "unwrap") else dict(table)


def load_config(path: Path | None = None) -> ReleaseConfig:
    """Build the run configuration.

    Args:
        path: Explicit config file. When None, sfra-release.toml in the
              current directory is used if present, otherwise defaults.

    Raises:
        SystemExit: If an explicit file is missing or any file is invalid.
    """
    if path is None:
        candidate = Path.cwd() / CONFIG_FILENAME
        if not candidate.exists():
            return ReleaseConfig()
        path = candidate
    elif not path.exists():
        fatal(f"Config file {path} does not exist.")

    values = get_release_table(load_config_doc(path))
    try:
        return ReleaseConfig.model_validate(values)
    except ValidationError as exc:
        fatal(f"Invalid configuration in {path}:\n{exc}")
