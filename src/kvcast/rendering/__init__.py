# topmark:header:start
#
#   project      : KvCast
#   file         : __init__.py
#   file_relpath : src/kvcast/rendering/__init__.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Human-readable rendering of records."""

from __future__ import annotations

from kvcast.rendering.display import DisplayMode, RecordPrinter, format_value, render_record, rule

__all__ = [
    "DisplayMode",
    "RecordPrinter",
    "format_value",
    "render_record",
    "rule",
]
