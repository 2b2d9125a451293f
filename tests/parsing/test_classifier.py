# topmark:header:start
#
#   project      : KvCast
#   file         : test_classifier.py
#   file_relpath : tests/parsing/test_classifier.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

# pyright: strict

"""Tests for value type inference."""

from __future__ import annotations

import math

from kvcast.parsing import BoolValue, NumberValue, StringValue, ValueKind, classify
from kvcast.parsing.classifier import parse_bool, parse_number
from tests.conftest import parametrize


@parametrize("raw", ["true", "TRUE", "True", "tRuE"])
def test_true_is_case_insensitive(raw: str) -> None:
    assert classify(raw, False) == BoolValue(True)


@parametrize("raw", ["false", "FALSE", "False"])
def test_false_is_case_insensitive(raw: str) -> None:
    assert classify(raw, False) == BoolValue(False)


@parametrize("raw", ["truee", "tru", "yes", "1true", "on"])
def test_near_booleans_are_strings(raw: str) -> None:
    assert classify(raw, False) == StringValue(raw)


@parametrize(
    ("raw", "expected"),
    [
        ("42", 42.0),
        ("-7", -7.0),
        ("+3", 3.0),
        ("3.14e-2", 0.0314),
        ("1E10", 1e10),
        ("5.", 5.0),
        (".5", 0.5),
        ("0", 0.0),
        ("1e-400", 0.0),
    ],
)
def test_numbers(raw: str, expected: float) -> None:
    value = classify(raw, False)
    assert isinstance(value, NumberValue)
    assert math.isclose(value.value, expected)


@parametrize(
    "raw",
    [
        "1e10x", "3.14e-2x", "inf", "-Infinity", "nan", "0x1A",
        "1_000", ".", "e5", "1e", "--1", "1e999",
    ],
)
def test_non_numbers_fall_back_to_string(raw: str) -> None:
    assert classify(raw, False) == StringValue(raw)


def test_quoted_tokens_are_always_strings() -> None:
    assert classify('"42"', True) == StringValue('"42"')
    assert classify('"true"', True) == StringValue('"true"')


def test_value_kinds() -> None:
    assert classify("x", False).kind is ValueKind.STRING
    assert classify("true", False).kind is ValueKind.BOOL
    assert classify("1", False).kind is ValueKind.NUMBER


def test_python_values() -> None:
    assert classify("2.5", False).python_value == 2.5
    assert classify("False", False).python_value is False
    assert classify("abc", False).python_value == "abc"


def test_parse_helpers_return_none_on_mismatch() -> None:
    assert parse_bool("maybe") is None
    assert parse_number(" 1") is None
    assert parse_number("1e308") == 1e308
