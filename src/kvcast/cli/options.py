# topmark:header:start
#
#   project      : KvCast
#   file         : options.py
#   file_relpath : src/kvcast/cli/options.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Option decorators and their resolution helpers.

The group carries the options that shape a whole run (verbosity, color,
configuration source). Per-command options shared by several commands
(``GROUP PORT``, ``--debug``, ``--format``) are bundled here too so their help
texts stay identical everywhere.
"""

from __future__ import annotations

import os
import sys
from typing import Callable, ParamSpec, TypeVar

import click

from kvcast.cli.cli_types import EnumChoiceParam
from kvcast.cli.errors import KvcastUsageError
from kvcast.core.enum_mixins import KeyedStrEnum
from kvcast.core.formats import OutputFormat

P = ParamSpec("P")
R = TypeVar("R")

CONTEXT_SETTINGS = {"help_option_names": ["-h", "--help"]}


# --- verbosity -------------------------------------------------------------


def resolve_verbosity(verbose_count: int, quiet_count: int) -> int:
    """Collapse ``-v``/``-q`` counts into one level.

    Returns:
        int: ``-1`` for quiet, otherwise the number of ``-v`` flags.

    Raises:
        KvcastUsageError: When both ``-v`` and ``-q`` are given.
    """
    if verbose_count and quiet_count:
        raise KvcastUsageError("The '--verbose' and '--quiet' options are mutually exclusive.")
    return -1 if quiet_count else verbose_count


def common_verbose_options(f: Callable[P, R]) -> Callable[P, R]:
    """Attach ``-v/--verbose`` and ``-q/--quiet``."""
    f = click.option(
        "-v",
        "--verbose",
        count=True,
        help="Report totals after sending (repeat for more detail).",
    )(f)
    return click.option(
        "-q",
        "--quiet",
        count=True,
        help="Do not warn about discarded lines.",
    )(f)


# --- color -----------------------------------------------------------------


class ColorMode(KeyedStrEnum):
    """Value of ``--color``."""

    AUTO = ("auto", "color when writing to a terminal")
    ALWAYS = ("always", "always emit ANSI styles")
    NEVER = ("never", "plain text only")


def resolve_color_mode(
    *,
    cli_mode: ColorMode | None,
    output_format: OutputFormat | None,
    stdout_isatty: bool | None = None,
) -> bool:
    """Decide whether styled output is enabled.

    Machine formats always win, then an explicit ``--color`` choice, then the
    ``FORCE_COLOR`` and ``NO_COLOR`` conventions, and finally whether stdout
    is a terminal.
    """
    if output_format is not None and output_format.is_machine:
        return False
    if cli_mode in (ColorMode.ALWAYS, ColorMode.NEVER):
        return cli_mode is ColorMode.ALWAYS
    if os.getenv("FORCE_COLOR", "0") != "0":
        return True
    if "NO_COLOR" in os.environ:
        return False
    if stdout_isatty is None:
        try:
            stdout_isatty = sys.stdout.isatty()
        except (AttributeError, ValueError):
            # Detached or closed stream
            stdout_isatty = False
    return stdout_isatty


def common_color_options(f: Callable[P, R]) -> Callable[P, R]:
    """Attach ``--color`` and its ``--no-color`` shorthand."""
    f = click.option(
        "--color",
        "color_mode",
        type=EnumChoiceParam(ColorMode),
        default=None,
        help="When to use colors (default: auto).",
    )(f)
    return click.option(
        "--no-color",
        "no_color",
        is_flag=True,
        help="Same as --color=never.",
    )(f)


# --- configuration ---------------------------------------------------------


def common_config_options(f: Callable[P, R]) -> Callable[P, R]:
    """Attach ``--config FILE`` and ``--no-config``."""
    f = click.option(
        "--config",
        "config_file",
        type=click.Path(exists=True, dir_okay=False, path_type=str),
        default=None,
        help="Extra TOML settings, applied after kvcast.toml / pyproject.toml.",
    )(f)
    return click.option(
        "--no-config",
        "no_config",
        is_flag=True,
        help="Skip kvcast.toml and [tool.kvcast] discovery in the working directory.",
    )(f)


# --- per-command -----------------------------------------------------------


def network_options(f: Callable[P, R]) -> Callable[P, R]:
    """Attach the positional ``GROUP PORT`` pair used by ``send`` and ``listen``."""
    f = click.argument("port", metavar="PORT")(f)
    return click.argument("group", metavar="GROUP")(f)


def debug_option(f: Callable[P, R]) -> Callable[P, R]:
    """Attach ``--debug/--no-debug`` (unset means: use the configuration)."""
    return click.option(
        "--debug/--no-debug",
        "debug",
        default=None,
        help="Display records as pretty JSON (default from [display] debug).",
    )(f)


def output_format_option(f: Callable[P, R]) -> Callable[P, R]:
    """Attach ``--format`` selecting an `OutputFormat`."""
    return click.option(
        "--format",
        "output_format",
        type=EnumChoiceParam(OutputFormat),
        default=None,
        help="Output format: " + ", ".join(f"{m.key} ({m.label})" for m in OutputFormat) + ".",
    )(f)
