# topmark:header:start
#
#   project      : KvCast
#   file         : __init__.py
#   file_relpath : src/kvcast/net/__init__.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""UDP multicast transport for KvCast records."""

from __future__ import annotations

from kvcast.net.endpoint import EndpointError, MulticastEndpoint, validate_group, validate_port
from kvcast.net.multicast import (
    Datagram,
    TransportError,
    join_group,
    open_receiver,
    open_sender,
    receive_datagrams,
    send_record,
)

__all__ = [
    "Datagram",
    "EndpointError",
    "MulticastEndpoint",
    "TransportError",
    "join_group",
    "open_receiver",
    "open_sender",
    "receive_datagrams",
    "send_record",
    "validate_group",
    "validate_port",
]
