# topmark:header:start
#
#   project      : KvCast
#   file         : validators.py
#   file_relpath : src/kvcast/cli/validators.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""CLI input validation helpers.

`validate_*` helpers enforce a policy and raise `KvcastUsageError` when the
invocation is invalid.
"""

from __future__ import annotations

from kvcast.cli.errors import KvcastUsageError
from kvcast.config.logging import get_logger
from kvcast.net.endpoint import EndpointError, MulticastEndpoint

logger = get_logger(__name__)


def validate_endpoint(group: str, port: str) -> MulticastEndpoint:
    """Validate the ``GROUP`` and ``PORT`` arguments.

    Raises:
        KvcastUsageError: If the group is not an IPv4 multicast address or the
            port is not a number in 0-65535.
    """
    try:
        endpoint: MulticastEndpoint = MulticastEndpoint.parse(group, port)
    except EndpointError as exc:
        raise KvcastUsageError(str(exc), hint=exc.hint) from exc
    logger.debug("Endpoint %s validated", endpoint)
    return endpoint
