# topmark:header:start
#
#   project      : KvCast
#   file         : __init__.py
#   file_relpath : src/kvcast/parsing/__init__.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Parsing core: tokenizer, value classifier and record builder.

The package turns ``key:value key:value ...`` lines into typed `Record`
objects. It performs no I/O and keeps no state between lines.

Typical use:

    ```python
    from kvcast.parsing import Record, parse_line

    result = parse_line("name:Alice age:30 active:true")
    if isinstance(result, Record):
        ...
    ```
"""

from __future__ import annotations

from kvcast.parsing.builder import LineResult, ParseStats, RecordBuilder, parse_line, parse_lines
from kvcast.parsing.classifier import classify
from kvcast.parsing.errors import ParseErrorKind
from kvcast.parsing.model import (
    EMPTY,
    BoolValue,
    Empty,
    NumberValue,
    Pair,
    ParseFailure,
    ParseResult,
    Record,
    StringValue,
    Value,
    ValueKind,
)
from kvcast.parsing.tokenizer import RawPair, Tokenizer

__all__ = [
    "EMPTY",
    "BoolValue",
    "Empty",
    "LineResult",
    "NumberValue",
    "Pair",
    "ParseErrorKind",
    "ParseFailure",
    "ParseResult",
    "ParseStats",
    "RawPair",
    "Record",
    "RecordBuilder",
    "StringValue",
    "Tokenizer",
    "Value",
    "ValueKind",
    "classify",
    "parse_line",
    "parse_lines",
]
