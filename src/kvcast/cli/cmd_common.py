# topmark:header:start
#
#   project      : KvCast
#   file         : cmd_common.py
#   file_relpath : src/kvcast/cli/cmd_common.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Common command utilities for Click-based commands.

This module holds small, focused helpers used by multiple CLI commands:
resolving the layered configuration, opening the line supplier and
reporting discarded lines.
"""

from __future__ import annotations

from contextlib import contextmanager
from pathlib import Path
from typing import TYPE_CHECKING, Iterator, TextIO

import click

from kvcast.cli.errors import (
    KvcastConfigError,
    KvcastDataError,
    KvcastFileNotFoundError,
    KvcastIOError,
)
from kvcast.config import Config, ConfigError, MutableConfig
from kvcast.config.logging import get_logger

if TYPE_CHECKING:
    from kvcast.cli.console_api import ConsoleLike
    from kvcast.parsing import ParseFailure

logger = get_logger(__name__)

#: Input path meaning "read lines from standard input".
STDIN_MARKER: str = "-"


def get_effective_verbosity(ctx: click.Context) -> int:
    """Return the program-output verbosity stored by the group (``0`` if absent)."""
    obj = ctx.obj if isinstance(ctx.obj, dict) else {}
    return int(obj.get("verbosity_level", 0))


def get_console(ctx: click.Context) -> ConsoleLike:
    """Return the console stored on the Click context."""
    return ctx.obj["console"]


def resolve_config(ctx: click.Context) -> Config:
    """Build the effective configuration from the group's ``--config`` options.

    The merged configuration is cached on ``ctx.obj`` so that nested calls
    agree on one snapshot.

    Raises:
        KvcastConfigError: If a configuration layer holds an invalid value.
    """
    obj: dict[str, object] = ctx.ensure_object(dict)
    cached = obj.get("config")
    if isinstance(cached, Config):
        return cached

    config_file = obj.get("config_file")
    try:
        draft: MutableConfig = MutableConfig.load_merged(
            extra_config=Path(str(config_file)) if config_file else None,
            discover=not obj.get("no_config", False),
        )
    except ConfigError as exc:
        raise KvcastConfigError(str(exc), hint="Run 'kvcast config' to see the defaults.") from exc

    config: Config = draft.freeze()
    logger.debug("Effective config: %s", config)
    obj["config"] = config
    return config


def prompt_for_input_file(console: ConsoleLike) -> str:
    """Ask for a data file name until an existing regular file is named.

    Trailing whitespace is stripped from each answer.

    Raises:
        click.Abort: If standard input is exhausted before a valid name is given.
    """
    while True:
        name: str = click.prompt("Enter the data file name", type=str).rstrip()
        if name and Path(name).is_file():
            return name
        console.warn(f"Cannot open '{name}', please try again.")


@contextmanager
def open_input(path: str) -> Iterator[TextIO]:
    """Open a line supplier for ``path`` (``-`` for standard input).

    Raises:
        KvcastFileNotFoundError: If ``path`` does not exist.
        KvcastIOError: If ``path`` cannot be opened.
        KvcastDataError: If the content is not valid UTF-8.
    """
    if path == STDIN_MARKER:
        stream: TextIO = click.get_text_stream("stdin", encoding="utf-8")
        try:
            yield stream
        except UnicodeDecodeError as exc:
            raise KvcastDataError(f"Standard input is not valid UTF-8: {exc.reason}") from exc
        return

    try:
        fh: TextIO = open(path, encoding="utf-8")  # noqa: SIM115
    except (FileNotFoundError, IsADirectoryError) as exc:
        raise KvcastFileNotFoundError(f"No such file: {path}") from exc
    except OSError as exc:
        raise KvcastIOError(f"Cannot open {path}: {exc.strerror or exc}") from exc

    with fh:
        try:
            yield fh
        except UnicodeDecodeError as exc:
            raise KvcastDataError(f"{path} is not valid UTF-8: {exc.reason}") from exc


def report_discard(ctx: click.Context, line_no: int, failure: ParseFailure) -> None:
    """Warn about a discarded line unless ``--quiet`` was given."""
    if get_effective_verbosity(ctx) < 0:
        return
    get_console(ctx).warn(f"Skipping line {line_no}: {failure.message}")
