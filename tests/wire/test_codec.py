# topmark:header:start
#
#   project      : KvCast
#   file         : test_codec.py
#   file_relpath : tests/wire/test_codec.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

# pyright: strict

"""Tests for the JSON wire codec."""

from __future__ import annotations

import json

import pytest

from kvcast.parsing import EMPTY, BoolValue, NumberValue, Pair, Record, StringValue, parse_line
from kvcast.wire import (
    NotAnObjectError,
    WireDecodeError,
    decode_payload,
    encode_record,
    encode_record_bytes,
    encode_record_pretty,
    record_from_decoded,
)
from kvcast.wire.codec import encode_value, value_from_json
from tests.conftest import parametrize


def _record(line: str) -> Record:
    result = parse_line(line)
    assert isinstance(result, Record)
    return result


def test_encodes_compact_object_in_record_order() -> None:
    record = _record('name:"John Doe" age:30 active:true score:89.5')
    assert encode_record(record) == (
        '{"name":"\\"John Doe\\"","age":30,"active":true,"score":89.5}'
    )


def test_encoding_is_valid_json() -> None:
    record = _record('msg:"tab\\there" path:"a\\\\b" ratio:1e-3')
    assert json.loads(encode_record(record)) == {
        "msg": '"tab\there"',
        "path": '"a\\b"',
        "ratio": 0.001,
    }


def test_duplicate_keys_are_written_twice() -> None:
    assert encode_record(_record("k:1 k:2")) == '{"k":1,"k":2}'


@parametrize(
    ("value", "text"),
    [
        (NumberValue(30.0), "30"),
        (NumberValue(-0.0), "0"),
        (NumberValue(0.5), "0.5"),
        (NumberValue(1e20), "1e+20"),
        (NumberValue(2.0**53), "9007199254740992.0"),
        (BoolValue(False), "false"),
        (StringValue("é"), '"é"'),
    ],
)
def test_encode_value(value: NumberValue | BoolValue | StringValue, text: str) -> None:
    assert encode_value(value) == text


def test_pretty_encoding_is_tab_indented() -> None:
    record = _record("a:1 b:x")
    assert encode_record_pretty(record) == '{\n\t"a":\t1,\n\t"b":\t"x"\n}'


def test_bytes_are_utf8() -> None:
    assert encode_record_bytes(_record("k:é")) == '{"k":"é"}'.encode()


def test_decode_keeps_member_order_and_duplicates() -> None:
    obj = decode_payload(b'{"b":1,"a":2,"b":3}')
    assert list(obj) == [("b", 1), ("a", 2), ("b", 3)]
    assert len(obj) == 3


@parametrize(
    "payload",
    [b"not json", b'{"a":', b"\xff\xfe", b'{"a":NaN}', b'{"a":Infinity}', b""],
)
def test_decode_rejects_invalid_payloads(payload: bytes) -> None:
    with pytest.raises(WireDecodeError):
        decode_payload(payload)


@parametrize("payload", [b"[1,2]", b"42", b'"text"', b"null"])
def test_decode_rejects_non_objects(payload: bytes) -> None:
    with pytest.raises(NotAnObjectError):
        decode_payload(payload)


def test_record_from_decoded_maps_supported_types() -> None:
    obj = decode_payload('{"s":"x","n":2,"f":2.5,"t":true,"z":null,"o":{},"l":[]}')
    assert record_from_decoded(obj) == Record(
        pairs=(
            Pair("s", StringValue("x")),
            Pair("n", NumberValue(2.0)),
            Pair("f", NumberValue(2.5)),
            Pair("t", BoolValue(True)),
        )
    )


def test_record_from_decoded_without_usable_members_is_empty() -> None:
    assert record_from_decoded(decode_payload(b"{}")) is EMPTY
    assert record_from_decoded(decode_payload(b'{"a":null}')) is EMPTY


@parametrize("obj", [None, [1], {"a": 1}, 10**400, 1e999])
def test_value_from_json_rejects_unsupported(obj: object) -> None:
    assert value_from_json(obj) is None


def test_value_from_json_bool_is_not_a_number() -> None:
    assert value_from_json(True) == BoolValue(True)
