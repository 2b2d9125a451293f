# topmark:header:start
#
#   project      : KvCast
#   file         : multicast.py
#   file_relpath : src/kvcast/net/multicast.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""UDP multicast sockets for sending and receiving records.

Sender sockets are not bound; the operating system picks an ephemeral port on
the first send. Receiver sockets set ``SO_REUSEADDR`` (and ``SO_REUSEPORT``
where available) so several listeners on one host can share a port, bind to
``INADDR_ANY`` and then join the multicast group.
"""

from __future__ import annotations

import socket
import struct
from dataclasses import dataclass
from typing import TYPE_CHECKING

from kvcast.config.logging import get_logger
from kvcast.constants import DEFAULT_BUFFER_SIZE, DEFAULT_INTERFACE, DEFAULT_MULTICAST_TTL
from kvcast.wire.codec import encode_record_bytes

if TYPE_CHECKING:
    from collections.abc import Iterator

    from kvcast.config.logging import KvcastLogger
    from kvcast.net.endpoint import MulticastEndpoint
    from kvcast.parsing.model import Record

logger: KvcastLogger = get_logger(__name__)


class TransportError(OSError):
    """Raised when a socket cannot be created, configured, bound or joined."""


@dataclass(frozen=True)
class Datagram:
    """A received payload and the address it came from."""

    payload: bytes
    sender_host: str
    sender_port: int

    @property
    def sender(self) -> str:
        """``host:port`` of the sender."""
        return f"{self.sender_host}:{self.sender_port}"


def open_sender(*, ttl: int = DEFAULT_MULTICAST_TTL, loopback: bool = True) -> socket.socket:
    """Create a UDP socket for sending to a multicast group.

    Args:
        ttl (int): Multicast time-to-live (hop limit).
        loopback (bool): Whether local listeners receive our own datagrams.

    Returns:
        socket.socket: The configured, unbound socket.

    Raises:
        TransportError: If the socket cannot be created or configured.
    """
    try:
        sock = socket.socket(socket.AF_INET, socket.SOCK_DGRAM, socket.IPPROTO_UDP)
    except OSError as exc:
        raise TransportError(f"socket: {exc}") from exc
    try:
        sock.setsockopt(socket.IPPROTO_IP, socket.IP_MULTICAST_TTL, ttl)
        sock.setsockopt(socket.IPPROTO_IP, socket.IP_MULTICAST_LOOP, 1 if loopback else 0)
    except OSError as exc:
        sock.close()
        raise TransportError(f"setsockopt: {exc}") from exc
    logger.debug("Sender socket ready (ttl=%d, loopback=%s)", ttl, loopback)
    return sock


def open_receiver(port: int) -> socket.socket:
    """Create a UDP socket bound to ``INADDR_ANY:port`` with address reuse enabled.

    Raises:
        TransportError: If the socket cannot be created or bound.
    """
    try:
        sock = socket.socket(socket.AF_INET, socket.SOCK_DGRAM, socket.IPPROTO_UDP)
    except OSError as exc:
        raise TransportError(f"socket: {exc}") from exc
    try:
        sock.setsockopt(socket.SOL_SOCKET, socket.SO_REUSEADDR, 1)
        if hasattr(socket, "SO_REUSEPORT"):
            sock.setsockopt(socket.SOL_SOCKET, socket.SO_REUSEPORT, 1)
        sock.bind(("", port))
    except OSError as exc:
        sock.close()
        raise TransportError(f"bind: {exc}") from exc
    logger.debug("Receiver socket bound to port %d", port)
    return sock


def join_group(sock: socket.socket, group: str, interface: str = DEFAULT_INTERFACE) -> None:
    """Add multicast group membership on ``interface`` (``0.0.0.0`` lets the kernel choose).

    Raises:
        TransportError: If the membership request is rejected.
    """
    try:
        mreq: bytes = struct.pack("4s4s", socket.inet_aton(group), socket.inet_aton(interface))
        sock.setsockopt(socket.IPPROTO_IP, socket.IP_ADD_MEMBERSHIP, mreq)
    except OSError as exc:
        raise TransportError(f"Failed to join multicast group {group}: {exc}") from exc
    logger.info("Joined multicast group %s on interface %s", group, interface)


def send_record(sock: socket.socket, endpoint: MulticastEndpoint, record: Record) -> int:
    """Encode ``record`` and send it as one datagram; return the number of bytes sent.

    Raises:
        TransportError: If the datagram cannot be sent.
    """
    payload: bytes = encode_record_bytes(record)
    try:
        sent: int = sock.sendto(payload, (endpoint.group, endpoint.port))
    except OSError as exc:
        raise TransportError(f"sendto {endpoint}: {exc}") from exc
    logger.debug("Sent %d bytes to %s", sent, endpoint)
    return sent


def receive_datagrams(
    sock: socket.socket,
    *,
    buffer_size: int = DEFAULT_BUFFER_SIZE,
    limit: int | None = None,
) -> Iterator[Datagram]:
    """Yield received datagrams until ``limit`` is reached (forever if None).

    A failing ``recvfrom`` is logged and the loop continues with the next
    datagram, unless the socket has been closed (`TransportError`). Payloads
    longer than ``buffer_size`` are truncated by the kernel.
    """
    received: int = 0
    while limit is None or received < limit:
        try:
            payload, (host, port) = sock.recvfrom(buffer_size)
        except InterruptedError:
            continue
        except OSError as exc:
            if sock.fileno() == -1:
                raise TransportError(f"recvfrom on closed socket: {exc}") from exc
            logger.error("recvfrom: %s", exc)
            continue
        received += 1
        logger.trace("Received %d bytes from %s:%d", len(payload), host, port)
        yield Datagram(payload=payload, sender_host=host, sender_port=port)
