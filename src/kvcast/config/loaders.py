# topmark:header:start
#
#   project      : KvCast
#   file         : loaders.py
#   file_relpath : src/kvcast/config/loaders.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Load TOML configuration sources.

This module reads KvCast configuration from:
- the runtime defaults defined in code,
- ``kvcast.toml`` files, and
- the ``[tool.kvcast]`` table of ``pyproject.toml``.

Parsing is done with `tomlkit` and returned as plain `dict` structures.
Value getters for the parsed tables live here as well.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any, cast

import tomlkit
from tomlkit.exceptions import ParseError as TomlkitParseError

from kvcast.config.keys import Toml
from kvcast.config.logging import get_logger
from kvcast.constants import (
    DEFAULT_BUFFER_SIZE,
    DEFAULT_COLUMN_WIDTH,
    DEFAULT_INTERFACE,
    DEFAULT_MAX_TOKEN_LENGTH,
    DEFAULT_MULTICAST_TTL,
    PYPROJECT_TOOL_SECTION,
)

if TYPE_CHECKING:
    from pathlib import Path

    from kvcast.config.logging import KvcastLogger

TomlTable = dict[str, Any]

logger: KvcastLogger = get_logger(__name__)


def load_defaults_dict() -> TomlTable:
    """Return KvCast's runtime defaults as a TOML-table-compatible dict.

    This function performs no I/O. The returned value is a new dict so callers
    can mutate it safely.
    """
    return {
        Toml.SECTION_PARSER: {
            Toml.KEY_MAX_TOKEN_LENGTH: DEFAULT_MAX_TOKEN_LENGTH,
        },
        Toml.SECTION_NETWORK: {
            Toml.KEY_TTL: DEFAULT_MULTICAST_TTL,
            Toml.KEY_LOOPBACK: True,
            Toml.KEY_INTERFACE: DEFAULT_INTERFACE,
            Toml.KEY_BUFFER_SIZE: DEFAULT_BUFFER_SIZE,
        },
        Toml.SECTION_DISPLAY: {
            Toml.KEY_DEBUG: False,
            Toml.KEY_COLUMN_WIDTH: DEFAULT_COLUMN_WIDTH,
        },
    }


def load_toml_dict(path: Path) -> TomlTable:
    """Load and parse a TOML file from the filesystem.

    Args:
        path: Path to a TOML document (e.g., ``kvcast.toml`` or ``pyproject.toml``).

    Returns:
        The parsed TOML content.

    Notes:
        - Errors are logged and an empty dict is returned on failure.
        - Encoding is assumed to be UTF-8.
    """
    try:
        text: str = path.read_text(encoding="utf-8")
        doc: tomlkit.TOMLDocument = tomlkit.parse(text)
        data_any: Any = doc.unwrap()
        return cast("TomlTable", data_any) if isinstance(data_any, dict) else {}
    except OSError as e:
        logger.error("Error loading TOML from %s: %s", path, e)
        return {}
    except TomlkitParseError as e:
        logger.error("Error decoding TOML from %s: %s", path, e)
        return {}


def extract_pyproject_table(data: TomlTable) -> TomlTable:
    """Return the ``[tool.kvcast]`` table of a parsed ``pyproject.toml`` (or ``{}``)."""
    table: Any = data
    for part in PYPROJECT_TOOL_SECTION.split("."):
        table = table.get(part) if isinstance(table, dict) else None
        if table is None:
            return {}
    return cast("TomlTable", table) if isinstance(table, dict) else {}


def get_table_value(table: TomlTable, key: str) -> TomlTable:
    """Extract a sub-table from a TOML table (``{}`` when missing or not a table)."""
    value: Any | None = table.get(key)
    if isinstance(value, dict):
        return cast("TomlTable", value)
    if value is not None:
        logger.warning("Ignoring [%s]: expected a table, got %r", key, value)
    return {}


def render_toml(data: TomlTable) -> str:
    """Render a TOML-table-compatible dict as TOML text."""
    return tomlkit.dumps(data)
