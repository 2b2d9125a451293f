# topmark:header:start
#
#   project      : KvCast
#   file         : listen.py
#   file_relpath : src/kvcast/cli/commands/listen.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""KvCast `listen` command.

Joins a multicast group and prints every JSON record received on the port.
Payloads that are not JSON, or not JSON objects, are reported and the loop
keeps listening.
"""

from __future__ import annotations

from contextlib import closing
from typing import TYPE_CHECKING

import click

from kvcast.cli.cmd_common import get_console, resolve_config
from kvcast.cli.errors import KvcastIOError
from kvcast.cli.options import CONTEXT_SETTINGS, debug_option, network_options
from kvcast.cli.validators import validate_endpoint
from kvcast.config.logging import get_logger
from kvcast.net import TransportError, join_group, open_receiver, receive_datagrams
from kvcast.parsing import Record
from kvcast.rendering.display import DisplayMode, RecordPrinter
from kvcast.wire import NotAnObjectError, WireDecodeError, decode_payload, record_from_decoded

if TYPE_CHECKING:
    import socket

    from kvcast.config import Config
    from kvcast.net import Datagram, MulticastEndpoint
    from kvcast.wire import DecodedObject

logger = get_logger(__name__)


def display_datagram(printer: RecordPrinter, datagram: Datagram) -> Record | None:
    """Print one received datagram and return the record it carried, if any.

    Args:
        printer (RecordPrinter): Server-mode printer.
        datagram (Datagram): The received payload and its sender.

    Returns:
        Record | None: The displayed record, or None if the payload carried nothing usable.
    """
    console = printer.console
    console.print(f"Received from {datagram.sender}")
    printer.print_rule()

    try:
        obj: DecodedObject = decode_payload(datagram.payload)
    except NotAnObjectError:
        printer.print_invalid_object()
        return None
    except WireDecodeError as exc:
        logger.debug("Undecodable datagram from %s: %s", datagram.sender, exc)
        text: str = datagram.payload.decode("utf-8", errors="replace")
        console.print(f"Invalid JSON received: {text}")
        return None

    record = record_from_decoded(obj)
    if not isinstance(record, Record):
        logger.info("Datagram from %s holds no displayable members", datagram.sender)
        return None
    printer.print_record(record)
    console.print()
    return record


@click.command(
    name="listen",
    context_settings=CONTEXT_SETTINGS,
    help="Join the multicast GROUP and print the records received on PORT. Stop with Ctrl+C.",
)
@network_options
@debug_option
@click.option(
    "--count",
    "count",
    type=click.IntRange(min=1),
    default=None,
    help="Stop after this many datagrams (default: run until interrupted).",
)
def listen_command(
    *,
    group: str,
    port: str,
    debug: bool | None,
    count: int | None,
) -> None:
    """Receive and display records sent to a multicast group.

    Args:
        group (str): Multicast group to join (IPv4 dotted quad).
        port (str): UDP port to bind.
        debug (bool | None): Print pretty JSON instead of the column layout.
        count (int | None): Number of datagrams to handle before exiting.
    """
    ctx = click.get_current_context()
    console = get_console(ctx)
    endpoint: MulticastEndpoint = validate_endpoint(group, port)
    config: Config = resolve_config(ctx).with_overrides(debug=debug)
    printer = RecordPrinter(
        console,
        DisplayMode.SERVER,
        debug=config.debug,
        column_width=config.column_width,
    )

    printer.print_rule("SETUP")
    try:
        sock: socket.socket = open_receiver(endpoint.port)
    except TransportError as exc:
        raise KvcastIOError(str(exc)) from exc

    with closing(sock):
        try:
            join_group(sock, endpoint.group, config.interface)
        except TransportError as exc:
            raise KvcastIOError(str(exc), hint=f"Interface: {config.interface}") from exc
        console.print(
            f"Socket created, joined multicast group {endpoint.group} on port {endpoint.port}..."
        )
        printer.print_rule()
        console.print()

        try:
            for datagram in receive_datagrams(
                sock, buffer_size=config.buffer_size, limit=count
            ):
                display_datagram(printer, datagram)
        except TransportError as exc:
            raise KvcastIOError(str(exc)) from exc
        except KeyboardInterrupt:
            console.print()
            console.print("Stopped listening.")
            logger.info("Interrupted by user")
