# topmark:header:start
#
#   project      : KvCast
#   file         : parse.py
#   file_relpath : src/kvcast/cli/commands/parse.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""KvCast `parse` command.

Parses ``key:value`` lines locally, without any network access, and prints
the records in the client layout or as JSON. Useful to check a data file
before sending it.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

import click

from kvcast.cli.cmd_common import (
    STDIN_MARKER,
    get_console,
    open_input,
    report_discard,
    resolve_config,
)
from kvcast.cli.options import CONTEXT_SETTINGS, debug_option, output_format_option
from kvcast.core.exit_codes import ExitCode
from kvcast.core.formats import OutputFormat, is_machine_format
from kvcast.parsing import ParseErrorKind, ParseFailure, ParseStats, Record, Tokenizer, parse_lines
from kvcast.rendering.display import DisplayMode, RecordPrinter
from kvcast.wire import encode_record

if TYPE_CHECKING:
    from kvcast.cli.console_api import ConsoleLike
    from kvcast.config import Config


def render_summary(stats: ParseStats) -> list[str]:
    """Return the summary lines for ``stats``, with failure kinds aligned."""
    lines: list[str] = [
        f"Lines:     {stats.total}",
        f"Records:   {stats.records}",
        f"Empty:     {stats.empty}",
        f"Discarded: {stats.discarded}",
    ]
    width: int = ParseErrorKind.EMPTY_KEY.value_length
    for kind in ParseErrorKind:
        n: int = stats.failures.get(kind, 0)
        if n:
            lines.append(f"  {kind.value:<{width}} {n}")
    return lines


@click.command(
    name="parse",
    context_settings=CONTEXT_SETTINGS,
    help="Parse FILE (default: stdin) and print its records without sending them.",
)
@click.argument("input_file", metavar="[FILE]", required=False, default=STDIN_MARKER)
@output_format_option
@click.option(
    "--summary",
    is_flag=True,
    default=False,
    help="Print line counts per outcome after the records.",
)
@debug_option
def parse_command(
    *,
    input_file: str,
    output_format: OutputFormat | None,
    summary: bool,
    debug: bool | None,
) -> None:
    """Parse a data file and print the resulting records.

    Exits with ``DATA_ERROR`` when at least one line was discarded.

    Args:
        input_file (str): Data file, or ``-`` for standard input.
        output_format (OutputFormat | None): ``default`` layout, ``json`` array or ``ndjson``.
        summary (bool): Print counts after the records (``default`` format only).
        debug (bool | None): Print pretty JSON in the ``default`` format.
    """
    ctx = click.get_current_context()
    console: ConsoleLike = get_console(ctx)
    config: Config = resolve_config(ctx).with_overrides(debug=debug)
    fmt: OutputFormat = output_format or OutputFormat.DEFAULT

    printer = RecordPrinter(console, DisplayMode.CLIENT, debug=config.debug)
    tokenizer = Tokenizer(config.max_token_length)
    stats = ParseStats()
    encoded: list[str] = []

    with open_input(input_file) as lines:
        for item in parse_lines(lines, tokenizer=tokenizer, stats=stats):
            result = item.result
            if isinstance(result, ParseFailure):
                report_discard(ctx, item.line_no, result)
            elif isinstance(result, Record):
                if fmt == OutputFormat.NDJSON:
                    console.print(encode_record(result))
                elif fmt == OutputFormat.JSON:
                    encoded.append(encode_record(result))
                else:
                    printer.print_record(result)

    if fmt == OutputFormat.JSON:
        console.print("[" + ",".join(encoded) + "]")

    if summary and not is_machine_format(fmt):
        console.print()
        for line in render_summary(stats):
            console.print(line)

    if stats.discarded:
        ctx.exit(ExitCode.DATA_ERROR)
