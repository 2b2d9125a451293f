# topmark:header:start
#
#   project      : KvCast
#   file         : endpoint.py
#   file_relpath : src/kvcast/net/endpoint.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Multicast endpoint validation.

Both the sender and the listener take a multicast group and a port from the
command line. Validation is strict and mirrors the classic checks:

1. the group must be an IPv4 dotted-quad address;
2. it must lie in the multicast range 224.0.0.0 - 239.255.255.255;
3. the port must consist of decimal digits only;
4. the port must be in 0 - 65535.
"""

from __future__ import annotations

import ipaddress
from dataclasses import dataclass
from typing import Final

MIN_PORT: Final[int] = 0
MAX_PORT: Final[int] = 65535


class EndpointError(ValueError):
    """Raised when a group address or port is invalid.

    Attributes:
        hint (str | None): Optional second line with the accepted range.
    """

    def __init__(self, message: str, *, hint: str | None = None) -> None:
        super().__init__(message)
        self.hint = hint


@dataclass(frozen=True)
class MulticastEndpoint:
    """A validated multicast group and UDP port."""

    group: str
    port: int

    def __str__(self) -> str:
        return f"{self.group}:{self.port}"

    @classmethod
    def parse(cls, group: str, port: str) -> MulticastEndpoint:
        """Validate both parts and return the endpoint."""
        return cls(group=validate_group(group), port=validate_port(port))


def validate_group(text: str) -> str:
    """Return ``text`` if it is an IPv4 multicast address.

    Raises:
        EndpointError: If the address is malformed or outside the multicast range.
    """
    try:
        addr = ipaddress.IPv4Address(text)
    except ValueError as exc:
        raise EndpointError(f"Invalid IP address format: {text}") from exc
    if not addr.is_multicast:
        raise EndpointError(
            f"Not a multicast address: {text}",
            hint="Multicast range: 224.0.0.0 - 239.255.255.255",
        )
    return str(addr)


def validate_port(text: str) -> int:
    """Return ``text`` as a port number.

    Raises:
        EndpointError: If the port is not all digits or outside 0-65535.
    """
    if not text or not all("0" <= ch <= "9" for ch in text):
        raise EndpointError("The port number isn't a number")
    port = int(text)
    if not MIN_PORT <= port <= MAX_PORT:
        raise EndpointError(
            "Invalid port number",
            hint=f"Valid Port Range: {MIN_PORT}-{MAX_PORT}",
        )
    return port
