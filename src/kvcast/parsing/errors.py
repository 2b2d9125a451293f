# topmark:header:start
#
#   project      : KvCast
#   file         : errors.py
#   file_relpath : src/kvcast/parsing/errors.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Line-scoped parse failure kinds.

Every kind is a recoverable, line-scoped failure: the tokenizer reports it as
part of a `ParseFailure` result and the caller moves on to the next line.
Members carry a stable machine key (``.value``) used in machine output and
summaries, and a human label used in warnings.
"""

from __future__ import annotations

from kvcast.core.enum_mixins import EnumIntrospectionMixin, KeyedStrEnum


class ParseErrorKind(EnumIntrospectionMixin, KeyedStrEnum):
    """Reason a line was discarded by the tokenizer."""

    # Key scan stop conditions
    WHITESPACE_IN_KEY = ("whitespace_in_key", "whitespace in key")
    QUOTE_IN_KEY = ("quote_in_key", "quote character in key")
    BACKSLASH_IN_KEY = ("backslash_in_key", "backslash in key")
    MISSING_COLON = ("missing_colon", "key is not followed by ':'")

    # Size and content
    EMPTY_KEY = ("empty_key", "empty key")
    KEY_TOO_LONG = ("key_too_long", "key too long")
    VALUE_TOO_LONG = ("value_too_long", "value too long")

    # Value scan
    WHITESPACE_AFTER_COLON = ("whitespace_after_colon", "whitespace after ':'")
    EMPTY_UNQUOTED_VALUE = ("empty_unquoted_value", "missing value after ':'")
    BACKSLASH_IN_UNQUOTED_VALUE = (
        "backslash_in_unquoted_value",
        "backslash in unquoted value",
    )

    # Quoted value
    TRAILING_BACKSLASH = ("trailing_backslash", "backslash at end of line")
    UNKNOWN_ESCAPE = ("unknown_escape", "unknown escape sequence")
    UNCLOSED_QUOTE = ("unclosed_quote", "unclosed quote")
