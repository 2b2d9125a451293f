# topmark:header:start
#
#   project      : KvCast
#   file         : cli_types.py
#   file_relpath : src/kvcast/cli/cli_types.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Click parameter types for KvCast's keyed enums."""

from __future__ import annotations

from typing import TYPE_CHECKING, Generic, Protocol, TypeVar

import click

from kvcast.core.enum_mixins import KeyedStrEnum

if TYPE_CHECKING:
    from click.shell_completion import CompletionItem

    class ParamTypeBase(Protocol):
        """Typed stand-in for `click.ParamType` during type checking."""

        name: str

else:
    ParamTypeBase = click.ParamType  # type: ignore[assignment]

K = TypeVar("K", bound=KeyedStrEnum)


class EnumChoiceParam(ParamTypeBase, Generic[K]):
    """Accept the key (or name) of a `KeyedStrEnum` member on the command line.

    Lookup goes through `KeyedStrEnum.parse`, so ``JSON``, ``json`` and
    ``Json`` all select the same member. Completion lists the keys with their
    labels as help text.

    Args:
        enum_cls (type[K]): The enum whose members are accepted.
    """

    def __init__(self, enum_cls: type[K]) -> None:
        self.enum_cls: type[K] = enum_cls
        self.name: str = enum_cls.__name__.lower()
        self.choices: list[str] = [m.key for m in enum_cls]

    def convert(
        self,
        value: str | K | None,
        param: click.Parameter | None,
        ctx: click.Context | None,
    ) -> K | None:
        """Return the member selected by ``value``, failing with the list of keys."""
        if value is None or isinstance(value, self.enum_cls):
            return value
        member: K | None = self.enum_cls.parse(str(value))
        if member is None:
            raise click.BadParameter(
                f"Invalid value '{value}'. Must be one of: {', '.join(self.choices)}",
                param=param,
                ctx=ctx,
            )
        return member

    def get_metavar(self, param: click.Parameter, ctx: click.Context | None = None) -> str:
        """Render the choices as ``[a|b|c]`` in usage lines."""
        return f"[{'|'.join(self.choices)}]"

    def shell_complete(
        self,
        ctx: click.Context,
        param: click.Parameter,
        incomplete: str,
    ) -> list[CompletionItem]:
        """Complete member keys starting with ``incomplete``.

        Bash: ``eval "$(_KVCAST_COMPLETE=bash_source kvcast)"``
        """
        from click.shell_completion import CompletionItem

        prefix: str = incomplete.lower()
        return [
            CompletionItem(m.key, help=m.label)
            for m in self.enum_cls
            if m.key.startswith(prefix)
        ]

    def __repr__(self) -> str:
        return f"EnumChoiceParam({self.enum_cls.__name__})"
