# topmark:header:start
#
#   project      : KvCast
#   file         : model.py
#   file_relpath : src/kvcast/parsing/model.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Typed values, records and parse results.

A parsed line produces exactly one of three results:

* `Record`: an ordered, non-empty tuple of `Pair` objects.
* `Empty`: the line held no pairs (blank or whitespace-only).
* `ParseFailure`: the line was discarded; ``kind`` says why.

Values form a closed variant over `StringValue`, `BoolValue` and
`NumberValue`. A `StringValue` built from a quoted token keeps the literal
surrounding quote characters as part of its text; serializers must escape them
when embedding the text into a strict format such as JSON.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import TYPE_CHECKING, Final, Union

if TYPE_CHECKING:
    from collections.abc import Iterator

    from kvcast.parsing.errors import ParseErrorKind


class ValueKind(Enum):
    """Discriminant for the `Value` variant."""

    STRING = "string"
    BOOL = "bool"
    NUMBER = "number"


@dataclass(frozen=True, slots=True)
class StringValue:
    """A string value, stored exactly as it will be displayed."""

    text: str

    @property
    def kind(self) -> ValueKind:
        """Discriminant of this value."""
        return ValueKind.STRING

    @property
    def python_value(self) -> str:
        """Return the value as a plain Python object."""
        return self.text


@dataclass(frozen=True, slots=True)
class BoolValue:
    """A boolean value (from a case-insensitive ``true``/``false`` token)."""

    value: bool

    @property
    def kind(self) -> ValueKind:
        """Discriminant of this value."""
        return ValueKind.BOOL

    @property
    def python_value(self) -> bool:
        """Return the value as a plain Python object."""
        return self.value


@dataclass(frozen=True, slots=True)
class NumberValue:
    """A 64-bit floating-point value."""

    value: float

    @property
    def kind(self) -> ValueKind:
        """Discriminant of this value."""
        return ValueKind.NUMBER

    @property
    def python_value(self) -> float:
        """Return the value as a plain Python object."""
        return self.value


Value = Union[StringValue, BoolValue, NumberValue]


@dataclass(frozen=True, slots=True)
class Pair:
    """One classified ``key:value`` item of a record."""

    key: str
    value: Value


@dataclass(frozen=True, slots=True)
class Record:
    """An ordered, non-empty sequence of pairs parsed from a single line.

    Insertion order is significant and duplicate keys are preserved as parsed.
    """

    pairs: tuple[Pair, ...]

    def __post_init__(self) -> None:
        if not self.pairs:
            raise ValueError("A Record must contain at least one pair")

    def __iter__(self) -> Iterator[Pair]:
        return iter(self.pairs)

    def __len__(self) -> int:
        return len(self.pairs)

    def keys(self) -> list[str]:
        """Return the keys in record order (duplicates included)."""
        return [p.key for p in self.pairs]

    def get(self, key: str) -> Value | None:
        """Return the last value stored under ``key``, or None."""
        found: Value | None = None
        for p in self.pairs:
            if p.key == key:
                found = p.value
        return found


@dataclass(frozen=True, slots=True)
class Empty:
    """Result for a line that contained no pairs."""


EMPTY: Final[Empty] = Empty()


@dataclass(frozen=True, slots=True)
class ParseFailure:
    """Result for a discarded line.

    Attributes:
        kind (ParseErrorKind): Why the line was discarded.
        column (int): 0-based character offset where the violation was detected.
        detail (str | None): Optional extra context (e.g. the offending escape).
    """

    kind: ParseErrorKind
    column: int
    detail: str | None = None

    @property
    def message(self) -> str:
        """Human-readable description of the failure."""
        text: str = f"{self.kind.label} at column {self.column + 1}"
        if self.detail:
            text = f"{text} ({self.detail})"
        return text


ParseResult = Union[Record, Empty, ParseFailure]
