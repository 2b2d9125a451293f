# topmark:header:start
#
#   project      : KvCast
#   file         : __init__.py
#   file_relpath : src/kvcast/config/__init__.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Configuration for KvCast.

Public surface:
    - `Config`: immutable runtime snapshot.
    - `MutableConfig`: layered merge builder (defaults, ``pyproject.toml``,
      ``kvcast.toml``, explicit file).
    - `ConfigError`: invalid configuration values.
"""

from __future__ import annotations

from kvcast.config.model import Config, ConfigError, MutableConfig

__all__ = [
    "Config",
    "ConfigError",
    "MutableConfig",
]
