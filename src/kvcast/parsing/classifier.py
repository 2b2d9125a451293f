# topmark:header:start
#
#   project      : KvCast
#   file         : classifier.py
#   file_relpath : src/kvcast/parsing/classifier.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Value type inference for raw value tokens.

Rules, in priority order:

1. A quoted token is always a `StringValue`; the literal quote characters stay
   in the text.
2. ``true`` / ``false`` (case-insensitive) become a `BoolValue`.
3. A token matching the strict numeric grammar in full, with a finite result,
   becomes a `NumberValue`.
4. Anything else is a bare `StringValue`.

Classification never fails and is a pure function of ``(raw, was_quoted)``.
"""

from __future__ import annotations

import math
import re
from typing import Final

from kvcast.parsing.model import BoolValue, NumberValue, StringValue, Value

# Optional sign, digits with optional fraction (or a bare fraction), optional exponent.
# ASCII digits only; no inf/nan, no hex floats, no surrounding whitespace, no underscores.
NUMBER_PATTERN: Final[re.Pattern[str]] = re.compile(
    r"[+-]?(?:[0-9]+(?:\.[0-9]*)?|\.[0-9]+)(?:[eE][+-]?[0-9]+)?"
)


def parse_number(raw: str) -> float | None:
    """Return ``raw`` as a float, or None if it is not a complete, finite number."""
    if NUMBER_PATTERN.fullmatch(raw) is None:
        return None
    value: float = float(raw)
    if math.isinf(value):
        # Overflow
        return None
    return value


def parse_bool(raw: str) -> bool | None:
    """Return the boolean spelled by ``raw`` (any case), or None."""
    lowered: str = raw.lower()
    if lowered == "true":
        return True
    if lowered == "false":
        return False
    return None


def classify(raw: str, was_quoted: bool) -> Value:
    """Classify a validated raw value token.

    Args:
        raw (str): The raw token text; for quoted tokens this includes the
            surrounding quote characters and has escapes already resolved.
        was_quoted (bool): Whether the token was scanned in quoted mode.

    Returns:
        Value: The typed value.
    """
    if was_quoted:
        return StringValue(raw)

    flag: bool | None = parse_bool(raw)
    if flag is not None:
        return BoolValue(flag)

    number: float | None = parse_number(raw)
    if number is not None:
        return NumberValue(number)

    return StringValue(raw)
