# topmark:header:start
#
#   project      : KvCast
#   file         : keys.py
#   file_relpath : src/kvcast/config/keys.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Canonical TOML section and key names for KvCast configuration.

Keys defined here are the external configuration API as it appears in
``kvcast.toml`` and in ``[tool.kvcast]`` inside ``pyproject.toml``. Renaming or
removing a key is a breaking change.
"""

from __future__ import annotations

from typing import Final


class Toml:
    """TOML section names and keys used by KvCast configuration."""

    # [parser]
    SECTION_PARSER: Final[str] = "parser"

    KEY_MAX_TOKEN_LENGTH: Final[str] = "max_token_length"

    # [network]
    SECTION_NETWORK: Final[str] = "network"

    KEY_TTL: Final[str] = "ttl"
    KEY_LOOPBACK: Final[str] = "loopback"
    KEY_INTERFACE: Final[str] = "interface"
    KEY_BUFFER_SIZE: Final[str] = "buffer_size"

    # [display]
    SECTION_DISPLAY: Final[str] = "display"

    KEY_DEBUG: Final[str] = "debug"
    KEY_COLUMN_WIDTH: Final[str] = "column_width"
