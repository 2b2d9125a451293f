# topmark:header:start
#
#   project      : KvCast
#   file         : codec.py
#   file_relpath : src/kvcast/wire/codec.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""JSON wire codec for records.

Records travel as one compact JSON object per datagram. Members are written
in record order and duplicate keys are written as-is; the decoder keeps
members as ordered pairs so nothing is lost in either direction.

String values are JSON-escaped on the way out. Quoted values keep their
literal quote characters (see `kvcast.parsing.model`), so ``msg:"hi"`` is sent
as ``{"msg":"\\"hi\\""}`` and displays as ``"hi"`` again on the receiving side.

Numbers with an integral value inside the exactly-representable range are
written without a fractional part (``30`` rather than ``30.0``).
"""

from __future__ import annotations

import json
import math
from dataclasses import dataclass
from typing import TYPE_CHECKING, Any, Final

from kvcast.config.logging import get_logger
from kvcast.parsing.model import (
    EMPTY,
    BoolValue,
    Empty,
    NumberValue,
    Pair,
    Record,
    StringValue,
)

if TYPE_CHECKING:
    from collections.abc import Iterator

    from kvcast.config.logging import KvcastLogger
    from kvcast.parsing.model import Value

logger: KvcastLogger = get_logger(__name__)

# Largest magnitude below which every integer is exactly representable as a float.
_EXACT_INT_LIMIT: Final[float] = float(2**53)

ENCODING: Final[str] = "utf-8"


class WireDecodeError(ValueError):
    """Raised when a payload is not a UTF-8 encoded JSON object."""


class NotAnObjectError(WireDecodeError):
    """Raised when a payload is valid JSON but its top-level value is not an object."""


def _encode_number(value: float) -> str:
    if value.is_integer() and abs(value) < _EXACT_INT_LIMIT:
        return str(int(value))
    return json.dumps(value)


def encode_value(value: Value) -> str:
    """Return the JSON text for a single value."""
    if isinstance(value, BoolValue):
        return "true" if value.value else "false"
    if isinstance(value, NumberValue):
        return _encode_number(value.value)
    return json.dumps(value.text, ensure_ascii=False)


def _encode_key(key: str) -> str:
    return json.dumps(key, ensure_ascii=False)


def encode_record(record: Record) -> str:
    """Return the compact JSON object text for ``record``."""
    members: str = ",".join(f"{_encode_key(p.key)}:{encode_value(p.value)}" for p in record)
    return "{" + members + "}"


def encode_record_pretty(record: Record) -> str:
    """Return a tab-indented JSON object text for ``record`` (one member per line)."""
    members: str = ",\n".join(f"\t{_encode_key(p.key)}:\t{encode_value(p.value)}" for p in record)
    return "{\n" + members + "\n}"


def encode_record_bytes(record: Record) -> bytes:
    """Return the datagram payload for ``record``."""
    return encode_record(record).encode(ENCODING)


@dataclass(frozen=True)
class DecodedObject:
    """A decoded JSON object with its members kept as ordered pairs."""

    members: tuple[tuple[str, Any], ...]

    def __iter__(self) -> Iterator[tuple[str, Any]]:
        return iter(self.members)

    def __len__(self) -> int:
        return len(self.members)


def _object_hook(pairs: list[tuple[str, Any]]) -> DecodedObject:
    return DecodedObject(members=tuple(pairs))


def _reject_constant(name: str) -> Any:
    raise WireDecodeError(f"non-standard JSON constant: {name}")


def decode_payload(data: bytes | str) -> DecodedObject:
    """Decode a received payload.

    Args:
        data (bytes | str): The raw datagram payload.

    Returns:
        DecodedObject: The top-level JSON object.

    Raises:
        WireDecodeError: If the payload is not valid UTF-8, not valid JSON, or its
            top-level value is not an object.
    """
    try:
        text: str = data.decode(ENCODING) if isinstance(data, bytes) else data
    except UnicodeDecodeError as exc:
        raise WireDecodeError(f"payload is not valid {ENCODING}: {exc}") from exc

    try:
        decoded: Any = json.loads(
            text, object_pairs_hook=_object_hook, parse_constant=_reject_constant
        )
    except json.JSONDecodeError as exc:
        raise WireDecodeError(f"invalid JSON: {exc}") from exc

    if not isinstance(decoded, DecodedObject):
        raise NotAnObjectError(f"expected a JSON object, got {type(decoded).__name__}")
    return decoded


def value_from_json(obj: Any) -> Value | None:
    """Map a decoded JSON member value to a `Value`, or None if it has no counterpart."""
    # bool is a subclass of int: test it first
    if isinstance(obj, bool):
        return BoolValue(obj)
    if isinstance(obj, (int, float)):
        try:
            number: float = float(obj)
        except OverflowError:
            return None
        # 1e999 decodes to inf
        return NumberValue(number) if math.isfinite(number) else None
    if isinstance(obj, str):
        return StringValue(obj)
    return None


def record_from_decoded(obj: DecodedObject) -> Record | Empty:
    """Convert a decoded object into a `Record`.

    Members whose value is not a string, boolean or number (``null``, nested
    objects, arrays) are skipped. An object with no usable member yields `EMPTY`.
    """
    pairs: list[Pair] = []
    for key, raw in obj:
        value: Value | None = value_from_json(raw)
        if value is None:
            logger.debug("Skipping member %r: unsupported JSON type %s", key, type(raw).__name__)
            continue
        pairs.append(Pair(key=key, value=value))
    if not pairs:
        return EMPTY
    return Record(pairs=tuple(pairs))
