# topmark:header:start
#
#   project      : KvCast
#   file         : __init__.py
#   file_relpath : src/kvcast/wire/__init__.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Wire format for records (compact JSON objects, one per datagram)."""

from __future__ import annotations

from kvcast.wire.codec import (
    DecodedObject,
    NotAnObjectError,
    WireDecodeError,
    decode_payload,
    encode_record,
    encode_record_bytes,
    encode_record_pretty,
    record_from_decoded,
)

__all__ = [
    "DecodedObject",
    "NotAnObjectError",
    "WireDecodeError",
    "decode_payload",
    "encode_record",
    "encode_record_bytes",
    "encode_record_pretty",
    "record_from_decoded",
]
