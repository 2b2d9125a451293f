# topmark:header:start
#
#   project      : KvCast
#   file         : constants.py
#   file_relpath : src/kvcast/constants.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""KvCast Constants."""

from __future__ import annotations

from importlib.metadata import PackageNotFoundError
from importlib.metadata import version as get_version


def _installed_version() -> str:
    try:
        return get_version("kvcast")
    except PackageNotFoundError:
        return "0.0.0+unknown"


KVCAST_VERSION: str = _installed_version()

# Keys and raw values must stay strictly below this many UTF-8 bytes.
DEFAULT_MAX_TOKEN_LENGTH: int = 1024

# Largest datagram the listener accepts in a single recvfrom().
DEFAULT_BUFFER_SIZE: int = 4096

DEFAULT_MULTICAST_TTL: int = 1
DEFAULT_INTERFACE: str = "0.0.0.0"

# Server display columns (right-aligned key and value).
DEFAULT_COLUMN_WIDTH: int = 20

CONFIG_FILE_NAME: str = "kvcast.toml"
PYPROJECT_FILE_NAME: str = "pyproject.toml"
PYPROJECT_TOOL_SECTION: str = "tool.kvcast"

RULE_WIDTH: int = 53
