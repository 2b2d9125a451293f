# topmark:header:start
#
#   project      : KvCast
#   file         : model.py
#   file_relpath : src/kvcast/config/model.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Configuration model and merge policy.

This module defines:
    - `Config`: an immutable runtime snapshot used by commands.
    - `MutableConfig`: a mutable builder used while merging configuration
      layers; it can be frozen into `Config` and thawed back for edits.

Layer precedence (lowest to highest):
    1. runtime defaults (`load_defaults_dict`),
    2. ``[tool.kvcast]`` in ``pyproject.toml`` of the working directory,
    3. ``kvcast.toml`` of the working directory,
    4. an explicit ``--config FILE``,
    5. command-line options (applied by the commands themselves).

Unknown keys are logged and ignored. Values of the wrong type or outside
their range raise `ConfigError`.
"""

from __future__ import annotations

import ipaddress
from dataclasses import dataclass, field, replace
from pathlib import Path
from typing import TYPE_CHECKING, Any

from kvcast.config.keys import Toml
from kvcast.config.loaders import (
    extract_pyproject_table,
    get_table_value,
    load_defaults_dict,
    load_toml_dict,
)
from kvcast.config.logging import get_logger
from kvcast.constants import (
    CONFIG_FILE_NAME,
    DEFAULT_BUFFER_SIZE,
    DEFAULT_COLUMN_WIDTH,
    DEFAULT_INTERFACE,
    DEFAULT_MAX_TOKEN_LENGTH,
    DEFAULT_MULTICAST_TTL,
    PYPROJECT_FILE_NAME,
)

if TYPE_CHECKING:
    from kvcast.config.loaders import TomlTable
    from kvcast.config.logging import KvcastLogger

logger: KvcastLogger = get_logger(__name__)

# Valid ranges for integer settings (inclusive).
MAX_TOKEN_LENGTH_RANGE: tuple[int, int] = (2, 1 << 20)
TTL_RANGE: tuple[int, int] = (0, 255)
BUFFER_SIZE_RANGE: tuple[int, int] = (1, 65535)
COLUMN_WIDTH_RANGE: tuple[int, int] = (0, 200)


class ConfigError(ValueError):
    """Raised when a configuration value is invalid."""


# ------------------ Immutable runtime config ------------------


@dataclass(frozen=True, slots=True)
class Config:
    """Immutable runtime configuration for KvCast.

    Attributes:
        max_token_length (int): Exclusive byte limit for keys and raw values.
        ttl (int): Multicast time-to-live for sent datagrams.
        loopback (bool): Whether sent datagrams are looped back to local listeners.
        interface (str): Local IPv4 interface used to join groups.
        buffer_size (int): Receive buffer size (largest accepted datagram).
        debug (bool): Display records as pretty JSON.
        column_width (int): Column width of the server display.
        config_files (tuple[Path, ...]): Configuration files that contributed, in order.
    """

    max_token_length: int = DEFAULT_MAX_TOKEN_LENGTH
    ttl: int = DEFAULT_MULTICAST_TTL
    loopback: bool = True
    interface: str = DEFAULT_INTERFACE
    buffer_size: int = DEFAULT_BUFFER_SIZE
    debug: bool = False
    column_width: int = DEFAULT_COLUMN_WIDTH
    config_files: tuple[Path, ...] = ()

    def thaw(self) -> MutableConfig:
        """Return a mutable copy of this configuration."""
        return MutableConfig(
            max_token_length=self.max_token_length,
            ttl=self.ttl,
            loopback=self.loopback,
            interface=self.interface,
            buffer_size=self.buffer_size,
            debug=self.debug,
            column_width=self.column_width,
            config_files=list(self.config_files),
        )

    def with_overrides(self, **overrides: Any) -> Config:
        """Return a copy with the given non-None fields replaced."""
        changes: dict[str, Any] = {k: v for k, v in overrides.items() if v is not None}
        return replace(self, **changes) if changes else self

    def to_toml_dict(self) -> TomlTable:
        """Return the effective settings as a TOML-table-compatible dict."""
        return {
            Toml.SECTION_PARSER: {
                Toml.KEY_MAX_TOKEN_LENGTH: self.max_token_length,
            },
            Toml.SECTION_NETWORK: {
                Toml.KEY_TTL: self.ttl,
                Toml.KEY_LOOPBACK: self.loopback,
                Toml.KEY_INTERFACE: self.interface,
                Toml.KEY_BUFFER_SIZE: self.buffer_size,
            },
            Toml.SECTION_DISPLAY: {
                Toml.KEY_DEBUG: self.debug,
                Toml.KEY_COLUMN_WIDTH: self.column_width,
            },
        }


# ------------------ Mutable builder ------------------


def _checked_int(table: TomlTable, key: str, bounds: tuple[int, int], where: str) -> int | None:
    value: Any | None = table.get(key)
    if value is None:
        return None
    # bool is an int subclass; reject it explicitly
    if isinstance(value, bool) or not isinstance(value, int):
        raise ConfigError(f"{where}.{key}: expected an integer, got {value!r}")
    lo, hi = bounds
    if not lo <= value <= hi:
        raise ConfigError(f"{where}.{key}: {value} is outside {lo}..{hi}")
    return value


def _checked_bool(table: TomlTable, key: str, where: str) -> bool | None:
    value: Any | None = table.get(key)
    if value is None:
        return None
    if not isinstance(value, bool):
        raise ConfigError(f"{where}.{key}: expected true or false, got {value!r}")
    return value


def _checked_ipv4(table: TomlTable, key: str, where: str) -> str | None:
    value: Any | None = table.get(key)
    if value is None:
        return None
    try:
        return str(ipaddress.IPv4Address(str(value)))
    except ValueError as exc:
        raise ConfigError(f"{where}.{key}: not an IPv4 address: {value!r}") from exc


def _warn_unknown(table: TomlTable, known: set[str], where: str) -> None:
    for key in table:
        if key not in known:
            logger.warning("Ignoring unknown configuration key %s.%s", where, key)


@dataclass
class MutableConfig:
    """Mutable configuration builder used while merging layers."""

    max_token_length: int = DEFAULT_MAX_TOKEN_LENGTH
    ttl: int = DEFAULT_MULTICAST_TTL
    loopback: bool = True
    interface: str = DEFAULT_INTERFACE
    buffer_size: int = DEFAULT_BUFFER_SIZE
    debug: bool = False
    column_width: int = DEFAULT_COLUMN_WIDTH
    config_files: list[Path] = field(default_factory=lambda: [])

    @classmethod
    def from_defaults(cls) -> MutableConfig:
        """Return a builder initialized from the runtime defaults."""
        draft = cls()
        draft.apply_table(load_defaults_dict(), source="<defaults>")
        return draft

    def apply_table(self, data: TomlTable, *, source: str) -> MutableConfig:
        """Overlay the settings of a parsed TOML document onto this builder.

        Args:
            data (TomlTable): Parsed TOML document (top level).
            source (str): Human-readable origin used in error messages.

        Returns:
            MutableConfig: ``self``, for chaining.

        Raises:
            ConfigError: If a value has the wrong type or is out of range.
        """
        logger.debug("Applying configuration from %s", source)

        parser: TomlTable = get_table_value(data, Toml.SECTION_PARSER)
        _warn_unknown(parser, {Toml.KEY_MAX_TOKEN_LENGTH}, Toml.SECTION_PARSER)
        where: str = f"{source}: {Toml.SECTION_PARSER}"
        max_len = _checked_int(parser, Toml.KEY_MAX_TOKEN_LENGTH, MAX_TOKEN_LENGTH_RANGE, where)
        if max_len is not None:
            self.max_token_length = max_len

        network: TomlTable = get_table_value(data, Toml.SECTION_NETWORK)
        _warn_unknown(
            network,
            {Toml.KEY_TTL, Toml.KEY_LOOPBACK, Toml.KEY_INTERFACE, Toml.KEY_BUFFER_SIZE},
            Toml.SECTION_NETWORK,
        )
        where = f"{source}: {Toml.SECTION_NETWORK}"
        ttl = _checked_int(network, Toml.KEY_TTL, TTL_RANGE, where)
        if ttl is not None:
            self.ttl = ttl
        loopback = _checked_bool(network, Toml.KEY_LOOPBACK, where)
        if loopback is not None:
            self.loopback = loopback
        interface = _checked_ipv4(network, Toml.KEY_INTERFACE, where)
        if interface is not None:
            self.interface = interface
        buffer_size = _checked_int(network, Toml.KEY_BUFFER_SIZE, BUFFER_SIZE_RANGE, where)
        if buffer_size is not None:
            self.buffer_size = buffer_size

        display: TomlTable = get_table_value(data, Toml.SECTION_DISPLAY)
        _warn_unknown(display, {Toml.KEY_DEBUG, Toml.KEY_COLUMN_WIDTH}, Toml.SECTION_DISPLAY)
        where = f"{source}: {Toml.SECTION_DISPLAY}"
        debug = _checked_bool(display, Toml.KEY_DEBUG, where)
        if debug is not None:
            self.debug = debug
        width = _checked_int(display, Toml.KEY_COLUMN_WIDTH, COLUMN_WIDTH_RANGE, where)
        if width is not None:
            self.column_width = width

        return self

    def apply_file(self, path: Path) -> MutableConfig:
        """Overlay a ``kvcast.toml`` or ``pyproject.toml`` file.

        For ``pyproject.toml`` only the ``[tool.kvcast]`` table is considered; a
        pyproject without that table does not count as a configuration source.
        """
        data: TomlTable = load_toml_dict(path)
        if path.name == PYPROJECT_FILE_NAME:
            data = extract_pyproject_table(data)
            if not data:
                return self
        self.apply_table(data, source=str(path))
        self.config_files.append(path)
        return self

    @classmethod
    def load_merged(
        cls,
        *,
        cwd: Path | None = None,
        extra_config: Path | None = None,
        discover: bool = True,
    ) -> MutableConfig:
        """Build a configuration from defaults, discovered files and an explicit file.

        Args:
            cwd (Path | None): Directory searched for ``pyproject.toml`` and ``kvcast.toml``;
                defaults to the current working directory.
            extra_config (Path | None): Explicit configuration file (highest file precedence).
            discover (bool): If False, skip discovery in ``cwd``.

        Returns:
            MutableConfig: The merged builder.

        Raises:
            ConfigError: If any layer holds an invalid value.
        """
        draft: MutableConfig = cls.from_defaults()
        base: Path = cwd if cwd is not None else Path.cwd()
        if discover:
            for name in (PYPROJECT_FILE_NAME, CONFIG_FILE_NAME):
                candidate: Path = base / name
                if candidate.is_file():
                    draft.apply_file(candidate)
        if extra_config is not None:
            draft.apply_file(extra_config)
        return draft

    def freeze(self) -> Config:
        """Return an immutable snapshot of this builder."""
        return Config(
            max_token_length=self.max_token_length,
            ttl=self.ttl,
            loopback=self.loopback,
            interface=self.interface,
            buffer_size=self.buffer_size,
            debug=self.debug,
            column_width=self.column_width,
            config_files=tuple(self.config_files),
        )
