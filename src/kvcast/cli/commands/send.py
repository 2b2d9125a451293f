# topmark:header:start
#
#   project      : KvCast
#   file         : send.py
#   file_relpath : src/kvcast/cli/commands/send.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""KvCast `send` command.

Reads ``key:value`` lines from a data file, prints every record it builds and
sends each one as a compact JSON datagram to a multicast group. Lines that
cannot be parsed are reported and skipped; they never stop the run.
"""

from __future__ import annotations

from contextlib import closing, nullcontext
from typing import TYPE_CHECKING

import click

from kvcast.cli.cmd_common import (
    get_console,
    get_effective_verbosity,
    open_input,
    prompt_for_input_file,
    report_discard,
    resolve_config,
)
from kvcast.cli.errors import KvcastIOError
from kvcast.cli.options import CONTEXT_SETTINGS, debug_option, network_options
from kvcast.cli.validators import validate_endpoint
from kvcast.config.logging import get_logger
from kvcast.core.exit_codes import ExitCode
from kvcast.net import TransportError, open_sender, send_record
from kvcast.parsing import ParseFailure, ParseStats, Record, Tokenizer, parse_lines
from kvcast.rendering.display import DisplayMode, RecordPrinter

if TYPE_CHECKING:
    import socket

    from kvcast.config import Config
    from kvcast.net import MulticastEndpoint

logger = get_logger(__name__)


@click.command(
    name="send",
    context_settings=CONTEXT_SETTINGS,
    help=(
        "Parse FILE (or '-' for stdin) and send each record to the multicast GROUP on PORT. "
        "Prompts for a file name when FILE is omitted."
    ),
)
@network_options
@click.argument("input_file", metavar="[FILE]", required=False)
@debug_option
@click.option(
    "--ttl",
    type=click.IntRange(0, 255),
    default=None,
    help="Multicast time-to-live (default from [network] ttl).",
)
@click.option(
    "--dry-run",
    is_flag=True,
    default=False,
    help="Parse and display records without opening a socket.",
)
def send_command(
    *,
    group: str,
    port: str,
    input_file: str | None,
    debug: bool | None,
    ttl: int | None,
    dry_run: bool,
) -> None:
    """Parse a data file and multicast its records.

    Exits with ``DATA_ERROR`` when at least one line was discarded, after all
    valid records have been sent.

    Args:
        group (str): Multicast group (IPv4 dotted quad).
        port (str): Destination UDP port.
        input_file (str | None): Data file; prompted for when omitted.
        debug (bool | None): Print pretty JSON instead of the record layout.
        ttl (int | None): Multicast TTL override.
        dry_run (bool): Skip the socket entirely.
    """
    ctx = click.get_current_context()
    console = get_console(ctx)
    endpoint: MulticastEndpoint = validate_endpoint(group, port)
    config: Config = resolve_config(ctx).with_overrides(debug=debug, ttl=ttl)

    path: str = input_file if input_file else prompt_for_input_file(console)
    printer = RecordPrinter(console, DisplayMode.CLIENT, debug=config.debug)
    tokenizer = Tokenizer(config.max_token_length)
    stats = ParseStats()
    sent: int = 0

    sock: socket.socket | None = None
    if not dry_run:
        try:
            sock = open_sender(ttl=config.ttl, loopback=config.loopback)
        except TransportError as exc:
            raise KvcastIOError(str(exc)) from exc

    with closing(sock) if sock is not None else nullcontext(), open_input(path) as lines:
        for item in parse_lines(lines, tokenizer=tokenizer, stats=stats):
            result = item.result
            if isinstance(result, ParseFailure):
                report_discard(ctx, item.line_no, result)
                continue
            if not isinstance(result, Record):
                continue
            printer.print_record(result)
            if sock is None:
                continue
            try:
                send_record(sock, endpoint, result)
            except TransportError as exc:
                raise KvcastIOError(str(exc)) from exc
            sent += 1

    logger.info("%d record(s) sent to %s, %d line(s) discarded", sent, endpoint, stats.discarded)
    if get_effective_verbosity(ctx) > 0:
        target: str = "(dry run)" if dry_run else f"to {endpoint}"
        console.print(
            console.styled(
                f"{stats.records} record(s) {target}, {stats.discarded} line(s) discarded",
                bold=True,
            )
        )

    if stats.discarded:
        ctx.exit(ExitCode.DATA_ERROR)
