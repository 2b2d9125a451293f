# topmark:header:start
#
#   project      : KvCast
#   file         : test_properties.py
#   file_relpath : tests/parsing/test_properties.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

# pyright: strict

"""Property tests for the parser: determinism, totality and whole-line atomicity."""

from __future__ import annotations

import pytest
from hypothesis import given, settings
from hypothesis import strategies as st

from kvcast.parsing import Empty, ParseFailure, Record, classify, parse_line
from kvcast.wire import decode_payload, encode_record, record_from_decoded
from tests.strategies_kvcast import any_text, lines_of, malformed_pairs, valid_pairs

pytestmark: pytest.MarkDecorator = pytest.mark.hypothesis_slow


@given(raw=any_text, was_quoted=st.booleans())
def test_classify_is_deterministic(raw: str, was_quoted: bool) -> None:
    assert classify(raw, was_quoted) == classify(raw, was_quoted)


@given(line=any_text)
def test_parse_line_is_total(line: str) -> None:
    result = parse_line(line)
    assert isinstance(result, (Record, Empty, ParseFailure))


@given(pairs=st.lists(valid_pairs, min_size=1, max_size=8), data=st.data())
def test_valid_lines_keep_every_pair_in_order(pairs: list[str], data: st.DataObject) -> None:
    line: str = data.draw(lines_of(st.just(pairs)))
    result = parse_line(line)
    assert isinstance(result, Record), line
    assert result.keys() == [p.split(":", 1)[0] for p in pairs]


@settings(max_examples=200)
@given(
    before=st.lists(valid_pairs, max_size=5),
    bad=malformed_pairs,
    after=st.lists(valid_pairs, max_size=5),
)
def test_one_malformed_pair_discards_the_whole_line(
    before: list[str], bad: str, after: list[str]
) -> None:
    line: str = " ".join([*before, bad, *after])
    assert isinstance(parse_line(line), ParseFailure), line


@given(pairs=st.lists(valid_pairs, min_size=1, max_size=8))
def test_wire_encoding_preserves_records(pairs: list[str]) -> None:
    record = parse_line(" ".join(pairs))
    assert isinstance(record, Record)
    assert record_from_decoded(decode_payload(encode_record(record))) == record
