# topmark:header:start
#
#   project      : KvCast
#   file         : display.py
#   file_relpath : src/kvcast/rendering/display.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Human-readable display of records.

Two layouts are supported:

* `DisplayMode.CLIENT`: a ``Parsed JSON data:`` heading followed by
  left-aligned ``key: value`` lines.
* `DisplayMode.SERVER`: key and value right-aligned in fixed-width columns.

In debug mode both layouts are replaced by a ``DEBUG MODE:`` heading and the
tab-indented JSON text of the record.

Values print as they are stored: strings verbatim (quoted values show their
quote characters), booleans as ``true``/``false``, numbers with C-style ``%g``.
"""

from __future__ import annotations

from enum import Enum
from typing import TYPE_CHECKING

from kvcast.constants import DEFAULT_COLUMN_WIDTH, RULE_WIDTH
from kvcast.parsing.model import BoolValue, NumberValue
from kvcast.wire.codec import encode_record_pretty

if TYPE_CHECKING:
    from kvcast.cli.console_api import ConsoleLike
    from kvcast.parsing.model import Record, Value

CLIENT_HEADING: str = "Parsed JSON data:"
DEBUG_HEADING: str = "DEBUG MODE:"
INVALID_OBJECT_MESSAGE: str = "Error: Invalid JSON object"


class DisplayMode(Enum):
    """Layout used to print a record."""

    CLIENT = "client"
    SERVER = "server"


def format_value(value: Value) -> str:
    """Return the display text of a value."""
    if isinstance(value, BoolValue):
        return "true" if value.value else "false"
    if isinstance(value, NumberValue):
        return f"{value.value:g}"
    return value.text


def render_record(
    record: Record,
    mode: DisplayMode,
    *,
    debug: bool = False,
    column_width: int = DEFAULT_COLUMN_WIDTH,
) -> list[str]:
    """Return the display lines for ``record``.

    Args:
        record (Record): The record to render.
        mode (DisplayMode): Client (left-aligned) or server (columns) layout.
        debug (bool): Render the pretty JSON text instead of the layout.
        column_width (int): Minimum width of key and value columns in server mode.

    Returns:
        list[str]: Lines without trailing newlines.
    """
    if debug:
        return [DEBUG_HEADING, *encode_record_pretty(record).splitlines()]

    if mode is DisplayMode.SERVER:
        return [
            f"{p.key:>{column_width}}: {format_value(p.value):>{column_width}}" for p in record
        ]

    return [CLIENT_HEADING, *(f"{p.key}: {format_value(p.value)}" for p in record)]


def rule(title: str = "") -> str:
    """Return a banner rule line, optionally with a centered title."""
    return title.center(RULE_WIDTH, "=") if title else "=" * RULE_WIDTH


class RecordPrinter:
    """Prints records and banners to a console.

    Args:
        console (ConsoleLike): Destination for program output.
        mode (DisplayMode): Record layout.
        debug (bool): Print pretty JSON instead of the layout.
        column_width (int): Column width for the server layout.
    """

    def __init__(
        self,
        console: ConsoleLike,
        mode: DisplayMode,
        *,
        debug: bool = False,
        column_width: int = DEFAULT_COLUMN_WIDTH,
    ) -> None:
        self.console = console
        self.mode = mode
        self.debug = debug
        self.column_width = column_width

    def print_record(self, record: Record) -> None:
        for line in render_record(
            record, self.mode, debug=self.debug, column_width=self.column_width
        ):
            self.console.print(line)

    def print_rule(self, title: str = "") -> None:
        self.console.print(self.console.styled(rule(title), bold=True))

    def print_invalid_object(self) -> None:
        self.console.print(INVALID_OBJECT_MESSAGE)
