# topmark:header:start
#
#   project      : KvCast
#   file         : builder.py
#   file_relpath : src/kvcast/parsing/builder.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Record building with whole-line atomicity.

`parse_line` is the public contract of the parsing core: one line in, one
`ParseResult` out. Pairs are classified as the tokenizer produces them and
accumulated in a `RecordBuilder`; the first failure discards the builder, so a
returned `Record` never contains pairs from a line that was only partially
valid.

`parse_lines` drives `parse_line` over a line supplier (a file object, a list
of strings, stdin) and keeps running `ParseStats`.
"""

from __future__ import annotations

from collections import Counter
from dataclasses import dataclass, field
from typing import TYPE_CHECKING

from kvcast.config.logging import get_logger
from kvcast.constants import DEFAULT_MAX_TOKEN_LENGTH
from kvcast.parsing.classifier import classify
from kvcast.parsing.model import EMPTY, Empty, Pair, ParseFailure, Record
from kvcast.parsing.tokenizer import Tokenizer

if TYPE_CHECKING:
    from collections.abc import Iterable, Iterator

    from kvcast.config.logging import KvcastLogger
    from kvcast.parsing.errors import ParseErrorKind
    from kvcast.parsing.model import ParseResult, Value

logger: KvcastLogger = get_logger(__name__)

_DEFAULT_TOKENIZER: Tokenizer = Tokenizer(DEFAULT_MAX_TOKEN_LENGTH)


class RecordBuilder:
    """Accumulates classified pairs for the line currently being parsed."""

    def __init__(self) -> None:
        self._pairs: list[Pair] = []

    def add(self, key: str, value: Value) -> None:
        """Append a pair in scan order."""
        self._pairs.append(Pair(key=key, value=value))

    def __len__(self) -> int:
        return len(self._pairs)

    def discard(self, failure: ParseFailure) -> ParseFailure:
        """Drop every pair accumulated so far and return ``failure``."""
        if self._pairs:
            logger.debug(
                "Discarding %d parsed pair(s) after %s", len(self._pairs), failure.kind.key
            )
        self._pairs.clear()
        return failure

    def build(self) -> Record | Empty:
        """Return the finished record, or `EMPTY` when no pair was added."""
        if not self._pairs:
            return EMPTY
        return Record(pairs=tuple(self._pairs))


def parse_line(line: str, *, tokenizer: Tokenizer | None = None) -> ParseResult:
    """Parse one line into a `Record`, `Empty` or `ParseFailure`.

    Args:
        line (str): The line to parse (a trailing line terminator is allowed).
        tokenizer (Tokenizer | None): Tokenizer to use; defaults to one with the
            default maximum token length.

    Returns:
        ParseResult: The record, `EMPTY` for blank lines, or the discard reason.
    """
    tok: Tokenizer = tokenizer or _DEFAULT_TOKENIZER
    builder = RecordBuilder()
    for item in tok.tokens(line):
        if isinstance(item, ParseFailure):
            return builder.discard(item)
        builder.add(item.key, classify(item.raw_value, item.was_quoted))
    return builder.build()


@dataclass
class ParseStats:
    """Running counts over a sequence of parsed lines.

    Attributes:
        records (int): Lines that produced a record.
        empty (int): Blank or whitespace-only lines.
        failures (Counter[ParseErrorKind]): Discarded lines per failure kind.
    """

    records: int = 0
    empty: int = 0
    failures: Counter[ParseErrorKind] = field(default_factory=lambda: Counter())

    @property
    def discarded(self) -> int:
        """Total number of discarded lines."""
        return sum(self.failures.values())

    @property
    def total(self) -> int:
        """Total number of lines seen."""
        return self.records + self.empty + self.discarded

    def count(self, result: ParseResult) -> None:
        """Account for one parse result."""
        if isinstance(result, Record):
            self.records += 1
        elif isinstance(result, ParseFailure):
            self.failures[result.kind] += 1
        else:
            self.empty += 1


@dataclass(frozen=True, slots=True)
class LineResult:
    """A parse result together with its 1-based line number."""

    line_no: int
    result: ParseResult


def parse_lines(
    lines: Iterable[str],
    *,
    tokenizer: Tokenizer | None = None,
    stats: ParseStats | None = None,
) -> Iterator[LineResult]:
    """Parse each line of a line supplier, logging discarded lines.

    A failure on one line never stops the iteration; it is logged and
    reported, and parsing continues with the next line.

    Args:
        lines (Iterable[str]): Line supplier, already split on line terminators.
        tokenizer (Tokenizer | None): Tokenizer to use for every line.
        stats (ParseStats | None): Optional statistics object updated in place.

    Yields:
        LineResult: One result per input line, in input order.
    """
    for line_no, line in enumerate(lines, start=1):
        result: ParseResult = parse_line(line, tokenizer=tokenizer)
        if isinstance(result, ParseFailure):
            logger.info("Line %d discarded: %s", line_no, result.message)
        if stats is not None:
            stats.count(result)
        yield LineResult(line_no=line_no, result=result)
