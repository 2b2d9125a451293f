# topmark:header:start
#
#   project      : KvCast
#   file         : errors.py
#   file_relpath : src/kvcast/cli/errors.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Exceptions for the KvCast CLI.

Raise these from commands to exit with a standardized message and exit code.
When a console is present in the Click context, errors are printed through it
(bright red, with an optional dimmed hint line); otherwise Click's default
display is used.
"""

from __future__ import annotations

from typing import IO, Any

import click

from kvcast.core.exit_codes import ExitCode


class KvcastError(click.ClickException):
    """Base class for all KvCast CLI errors.

    Args:
        message (str): The error message.
        hint (str | None): Optional second line shown below the message.
    """

    exit_code = ExitCode.FAILURE

    def __init__(self, message: str, *, hint: str | None = None) -> None:
        super().__init__(message)
        self.hint = hint

    def format_message(self) -> str:  # pragma: no cover - trivial
        """Return the plain error message text (colorization happens in `show()`)."""
        return str(self.message)

    def show(self, file: IO[Any] | None = None) -> None:  # pragma: no cover - Click prints errors
        """Display the error using the project console if available."""
        ctx = click.get_current_context(silent=True)
        console = None
        if ctx is not None and isinstance(ctx.obj, dict):
            console = ctx.obj.get("console")
        if console is None:
            super().show(file)
            if self.hint:
                click.echo(self.hint, file=file, err=True)
            return
        console.error(f"Error: {self.format_message()}")
        if self.hint:
            console.hint(self.hint)


class KvcastUsageError(KvcastError):
    """Error for command-line invocation errors (invalid endpoint, flags or args)."""

    exit_code = ExitCode.USAGE_ERROR


class KvcastConfigError(KvcastError):
    """Error for invalid configuration values."""

    exit_code = ExitCode.CONFIG_ERROR


class KvcastFileNotFoundError(KvcastError):
    """Error when an input path does not exist."""

    exit_code = ExitCode.FILE_NOT_FOUND


class KvcastIOError(KvcastError):
    """Error for socket and file I/O failures."""

    exit_code = ExitCode.IO_ERROR


class KvcastDataError(KvcastError):
    """Error for unreadable input data (e.g. a file that is not valid UTF-8)."""

    exit_code = ExitCode.DATA_ERROR
