# topmark:header:start
#
#   project      : KvCast
#   file         : __init__.py
#   file_relpath : src/kvcast/__init__.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""KvCast: parse ``key:value`` text lines into JSON records and exchange them over UDP multicast.

The parsing core (`kvcast.parsing`) is pure and has no I/O; the wire codec
(`kvcast.wire`), the multicast transport (`kvcast.net`) and the display
(`kvcast.rendering`) build on it, and `kvcast.cli` ties them together.
"""

from __future__ import annotations

from kvcast.constants import KVCAST_VERSION
from kvcast.parsing import parse_line, parse_lines

__version__: str = KVCAST_VERSION

__all__ = [
    "__version__",
    "parse_line",
    "parse_lines",
]
