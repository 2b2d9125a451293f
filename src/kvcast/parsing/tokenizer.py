# topmark:header:start
#
#   project      : KvCast
#   file         : tokenizer.py
#   file_relpath : src/kvcast/parsing/tokenizer.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Scanner for ``key:value`` lines.

The tokenizer walks one line left to right and produces raw
``(key, raw_value, was_quoted)`` triples. It does not classify values; that is
the job of `kvcast.parsing.classifier`.

Token grammar:

* Pairs are separated by ASCII whitespace (``" \\t\\n\\v\\f\\r"``).
* A key runs up to the first ``:``. Whitespace, ``"`` or ``\\`` inside a key,
  or reaching the end of the line before a ``:``, is a failure.
* No whitespace may directly follow the ``:``.
* A value starting with ``"`` is scanned in quoted mode: escapes ``\\"``,
  ``\\\\``, ``\\n``, ``\\t`` and ``\\r`` are resolved, and both the opening and
  closing quote characters are kept in the raw value.
* Any other value runs up to the next whitespace; a backslash is not allowed.
* Keys and raw values are measured in UTF-8 bytes and must stay strictly
  below the configured maximum token length.

A line ends at the end of the string or at the first line terminator
(``\\n`` or ``\\r``); anything after the terminator is ignored.

The scan is fail-fast: the first violation ends the scan and is reported as a
`ParseFailure`. Discarding the pairs already scanned on the line is the
caller's responsibility (see `kvcast.parsing.builder`).
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING, Final

from kvcast.config.logging import get_logger
from kvcast.constants import DEFAULT_MAX_TOKEN_LENGTH
from kvcast.parsing.errors import ParseErrorKind
from kvcast.parsing.model import ParseFailure

if TYPE_CHECKING:
    from collections.abc import Iterator

    from kvcast.config.logging import KvcastLogger

logger: KvcastLogger = get_logger(__name__)

WHITESPACE: Final[frozenset[str]] = frozenset(" \t\n\v\f\r")
LINE_TERMINATORS: Final[tuple[str, ...]] = ("\n", "\r")

QUOTE: Final[str] = '"'
BACKSLASH: Final[str] = "\\"
COLON: Final[str] = ":"

ESCAPES: Final[dict[str, str]] = {
    '"': '"',
    "\\": "\\",
    "n": "\n",
    "t": "\t",
    "r": "\r",
}

# Smallest limit that still admits a one-byte token.
MIN_TOKEN_LENGTH: Final[int] = 2


@dataclass(frozen=True, slots=True)
class RawPair:
    """A scanned, unclassified pair.

    Attributes:
        key (str): The key text.
        raw_value (str): The value text; quoted values keep their quote characters
            and have their escapes resolved.
        was_quoted (bool): Whether the value was scanned in quoted mode.
        column (int): 0-based offset of the first key character.
    """

    key: str
    raw_value: str
    was_quoted: bool
    column: int


def line_content(line: str) -> str:
    """Return ``line`` up to (not including) its first line terminator."""
    end: int = len(line)
    for term in LINE_TERMINATORS:
        idx: int = line.find(term, 0, end)
        if idx != -1:
            end = idx
    return line[:end]


class _TokenBuffer:
    """Capacity-limited character buffer measured in UTF-8 bytes."""

    __slots__ = ("_chars", "_limit", "_size")

    def __init__(self, limit: int) -> None:
        self._chars: list[str] = []
        self._limit: int = limit
        self._size: int = 0

    def append(self, ch: str) -> bool:
        """Append ``ch``; return False once the buffer has reached its limit."""
        self._chars.append(ch)
        self._size += len(ch.encode("utf-8"))
        return self._size < self._limit

    def __len__(self) -> int:
        return self._size

    def text(self) -> str:
        return "".join(self._chars)


class _Cursor:
    """Read position over the content of a single line."""

    __slots__ = ("pos", "text")

    def __init__(self, text: str) -> None:
        self.text: str = text
        self.pos: int = 0

    def at_end(self) -> bool:
        return self.pos >= len(self.text)

    def peek(self) -> str:
        return self.text[self.pos]

    def advance(self) -> None:
        self.pos += 1

    def skip_whitespace(self) -> None:
        while not self.at_end() and self.peek() in WHITESPACE:
            self.pos += 1


class Tokenizer:
    """Fail-fast scanner producing `RawPair` items from a line.

    Args:
        max_token_length (int): Exclusive upper bound, in UTF-8 bytes, for keys and
            raw values. A token of exactly this size is rejected.

    Raises:
        ValueError: If ``max_token_length`` is too small to admit any token.
    """

    def __init__(self, max_token_length: int = DEFAULT_MAX_TOKEN_LENGTH) -> None:
        if max_token_length < MIN_TOKEN_LENGTH:
            raise ValueError(
                f"max_token_length must be at least {MIN_TOKEN_LENGTH}, got {max_token_length}"
            )
        self.max_token_length: int = max_token_length

    def tokens(self, line: str) -> Iterator[RawPair | ParseFailure]:
        """Yield the raw pairs of ``line`` in order.

        If the line is malformed, the last item yielded is a `ParseFailure` and
        iteration stops there. A blank line yields nothing.

        Args:
            line (str): The line to scan; a trailing terminator is allowed.

        Yields:
            RawPair | ParseFailure: Scanned pairs, possibly followed by one failure.
        """
        cur = _Cursor(line_content(line))
        while True:
            cur.skip_whitespace()
            if cur.at_end():
                return

            column: int = cur.pos
            key: str | ParseFailure = self._scan_key(cur)
            if isinstance(key, ParseFailure):
                yield key
                return

            quoted: bool = not cur.at_end() and cur.peek() == QUOTE
            raw: str | ParseFailure = self._scan_value(cur)
            if isinstance(raw, ParseFailure):
                yield raw
                return

            logger.trace("scanned %r -> %r (quoted=%s)", key, raw, quoted)
            yield RawPair(key=key, raw_value=raw, was_quoted=quoted, column=column)

    def tokenize(self, line: str) -> list[RawPair] | ParseFailure:
        """Scan a whole line; return all raw pairs or the first failure."""
        out: list[RawPair] = []
        for item in self.tokens(line):
            if isinstance(item, ParseFailure):
                return item
            out.append(item)
        return out

    def _scan_key(self, cur: _Cursor) -> str | ParseFailure:
        """Scan a key and consume the ``:`` that ends it."""
        start: int = cur.pos
        buf = _TokenBuffer(self.max_token_length)
        while not cur.at_end():
            ch: str = cur.peek()
            if ch == COLON:
                break
            if ch in WHITESPACE:
                return ParseFailure(ParseErrorKind.WHITESPACE_IN_KEY, cur.pos)
            if ch == QUOTE:
                return ParseFailure(ParseErrorKind.QUOTE_IN_KEY, cur.pos)
            if ch == BACKSLASH:
                return ParseFailure(ParseErrorKind.BACKSLASH_IN_KEY, cur.pos)
            if not buf.append(ch):
                return ParseFailure(
                    ParseErrorKind.KEY_TOO_LONG,
                    start,
                    f"limit is {self.max_token_length - 1} bytes",
                )
            cur.advance()
        else:
            return ParseFailure(ParseErrorKind.MISSING_COLON, cur.pos)

        if len(buf) == 0:
            return ParseFailure(ParseErrorKind.EMPTY_KEY, cur.pos)

        cur.advance()  # ':'
        return buf.text()

    def _scan_value(self, cur: _Cursor) -> str | ParseFailure:
        """Scan the value that follows a key's ``:``."""
        if cur.at_end():
            return ParseFailure(ParseErrorKind.EMPTY_UNQUOTED_VALUE, cur.pos)
        ch: str = cur.peek()
        if ch in WHITESPACE:
            return ParseFailure(ParseErrorKind.WHITESPACE_AFTER_COLON, cur.pos)
        if ch == QUOTE:
            return self._scan_quoted(cur)
        return self._scan_unquoted(cur)

    def _scan_quoted(self, cur: _Cursor) -> str | ParseFailure:
        start: int = cur.pos
        buf = _TokenBuffer(self.max_token_length)
        buf.append(QUOTE)
        cur.advance()

        while not cur.at_end():
            ch: str = cur.peek()
            if ch == BACKSLASH:
                cur.advance()
                if cur.at_end():
                    return ParseFailure(ParseErrorKind.TRAILING_BACKSLASH, cur.pos - 1)
                escaped: str = cur.peek()
                resolved: str | None = ESCAPES.get(escaped)
                if resolved is None:
                    return ParseFailure(
                        ParseErrorKind.UNKNOWN_ESCAPE, cur.pos - 1, f"\\{escaped}"
                    )
                ch = resolved
            elif ch == QUOTE:
                cur.advance()
                if not buf.append(QUOTE):
                    return self._too_long(start)
                return buf.text()

            if not buf.append(ch):
                return self._too_long(start)
            cur.advance()

        return ParseFailure(ParseErrorKind.UNCLOSED_QUOTE, start)

    def _scan_unquoted(self, cur: _Cursor) -> str | ParseFailure:
        start: int = cur.pos
        buf = _TokenBuffer(self.max_token_length)
        while not cur.at_end():
            ch: str = cur.peek()
            if ch in WHITESPACE:
                break
            if ch == BACKSLASH:
                return ParseFailure(ParseErrorKind.BACKSLASH_IN_UNQUOTED_VALUE, cur.pos)
            if not buf.append(ch):
                return self._too_long(start)
            cur.advance()
        return buf.text()

    def _too_long(self, start: int) -> ParseFailure:
        return ParseFailure(
            ParseErrorKind.VALUE_TOO_LONG,
            start,
            f"limit is {self.max_token_length - 1} bytes",
        )
