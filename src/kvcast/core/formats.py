# topmark:header:start
#
#   project      : KvCast
#   file         : formats.py
#   file_relpath : src/kvcast/core/formats.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Output formats understood by ``kvcast parse`` and ``kvcast version``.

``default`` is the human display (the same layout ``send`` prints, colored when
the terminal allows it). ``json`` and ``ndjson`` carry records in their wire
encoding and are never colored.
"""

from __future__ import annotations

from kvcast.core.enum_mixins import KeyedStrEnum


class OutputFormat(KeyedStrEnum):
    """Rendering chosen with ``--format``."""

    DEFAULT = ("default", "human-readable record display")
    JSON = ("json", "one JSON array holding every record")
    NDJSON = ("ndjson", "one compact JSON record per line")

    @property
    def is_machine(self) -> bool:
        """Whether the output is meant for programs rather than people."""
        return self is not OutputFormat.DEFAULT


def is_machine_format(fmt: OutputFormat | None) -> bool:
    """Return True when ``fmt`` is set to a machine format (``None`` means default)."""
    return fmt is not None and fmt.is_machine
