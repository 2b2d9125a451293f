# topmark:header:start
#
#   project      : KvCast
#   file         : console.py
#   file_relpath : src/kvcast/cli/console.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""`ConsoleLike` implementation on top of `click.echo`.

Records and banners go to ``out``; discarded-line warnings, errors and hints
go to ``err``, so that ``kvcast parse --format ndjson > records.ndjson`` only
captures records.
"""

from __future__ import annotations

import sys
from typing import Any, TextIO

import click

from kvcast.cli.console_api import ConsoleLike

# click.style keyword arguments for each stderr channel
_WARN_STYLE: dict[str, Any] = {"fg": "yellow"}
_ERROR_STYLE: dict[str, Any] = {"fg": "bright_red"}
_HINT_STYLE: dict[str, Any] = {"dim": True}


class ClickConsole(ConsoleLike):
    """Console writing through Click, with ANSI styling when enabled.

    Args:
        enable_color (bool): Emit ANSI styles. When False, every style is dropped.
        out (TextIO | None): Program output stream, `sys.stdout` when omitted.
        err (TextIO | None): Diagnostic stream, `sys.stderr` when omitted.
    """

    def __init__(
        self,
        *,
        enable_color: bool = True,
        out: TextIO | None = None,
        err: TextIO | None = None,
    ) -> None:
        self.enable_color = enable_color
        self.out: TextIO = out if out is not None else sys.stdout
        self.err: TextIO = err if err is not None else sys.stderr

    def _to_err(self, text: str, nl: bool, style: dict[str, Any]) -> None:
        click.echo(self.styled(text, **style), nl=nl, file=self.err, color=self.enable_color)

    def print(self, text: str = "", *, nl: bool = True) -> None:
        """Write program output."""
        click.echo(text, nl=nl, file=self.out, color=self.enable_color)

    def warn(self, text: str, *, nl: bool = True) -> None:
        """Write a yellow warning to stderr."""
        self._to_err(text, nl, _WARN_STYLE)

    def error(self, text: str, *, nl: bool = True) -> None:
        """Write a bright red error to stderr."""
        self._to_err(text, nl, _ERROR_STYLE)

    def hint(self, text: str, *, nl: bool = True) -> None:
        """Write a dimmed hint to stderr."""
        self._to_err(text, nl, _HINT_STYLE)

    def styled(self, text: str, **style_kwargs: Any) -> str:
        """Apply `click.style` to ``text``, or return it as is when color is off."""
        return click.style(text, **style_kwargs) if self.enable_color else text
