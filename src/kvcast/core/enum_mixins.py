# topmark:header:start
#
#   project      : KvCast
#   file         : enum_mixins.py
#   file_relpath : src/kvcast/core/enum_mixins.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Enum helpers shared by KvCast's vocabularies.

`KeyedStrEnum` members are declared as ``(key, label)`` pairs: the key is the
stable token written to machine output and summaries, the label is the phrase
used in human-facing warnings. `EnumIntrospectionMixin` adds the width needed
to print the keys of an enum in an aligned column.
"""

from __future__ import annotations

from enum import Enum
from functools import cached_property
from typing import TypeVar

_KS = TypeVar("_KS", bound="KeyedStrEnum")


class EnumIntrospectionMixin:
    """Mixin giving Enum members a ``value_length`` (longest ``.value`` in the class)."""

    @cached_property
    def value_length(self) -> int:
        """Width of the longest ``.value`` among the members of this enum."""
        members = type(self)  # an Enum class once mixed in
        return max(len(str(m.value)) for m in members)  # type: ignore[attr-defined]


def _fold(token: str) -> str:
    # "Key too-long", "KEY_TOO_LONG" and "key_too_long" compare equal
    return "_".join(token.strip().lower().replace("-", " ").split())


class KeyedStrEnum(str, Enum):
    """String enum whose value is a machine key, with a human label alongside.

    Attributes:
        label (str): Human-readable description of the member.
    """

    label: str

    def __new__(cls: type[_KS], key: str, label: str) -> _KS:
        member: _KS = str.__new__(cls, key)
        member._value_ = key
        member.label = label
        return member

    def __str__(self) -> str:
        return self.key

    @property
    def key(self) -> str:
        """Machine key of the member (its ``.value``)."""
        return str(self.value)

    @classmethod
    def parse(cls: type[_KS], raw: str | None) -> _KS | None:
        """Look a member up by key or by name, ignoring case, spaces and dashes.

        Returns:
            _KS | None: The matching member, or None for unknown or missing input.
        """
        if raw is None:
            return None
        wanted: str = _fold(raw)
        return next(
            (m for m in cls if wanted in (_fold(m.key), _fold(m.name))),
            None,
        )
