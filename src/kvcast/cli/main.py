# topmark:header:start
#
#   project      : KvCast
#   file         : main.py
#   file_relpath : src/kvcast/cli/main.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""KvCast command-line entry point.

Group-level options (verbosity, color, configuration file) are initialized
once and placed into ``ctx.obj``; subcommands read them from there.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

import click

from kvcast.cli.commands.config import config_command
from kvcast.cli.commands.listen import listen_command
from kvcast.cli.commands.parse import parse_command
from kvcast.cli.commands.send import send_command
from kvcast.cli.commands.version import version_command
from kvcast.cli.console import ClickConsole
from kvcast.cli.options import (
    CONTEXT_SETTINGS,
    ColorMode,
    common_color_options,
    common_config_options,
    common_verbose_options,
    resolve_color_mode,
    resolve_verbosity,
)
from kvcast.config.logging import get_logger, resolve_env_log_level, setup_logging

if TYPE_CHECKING:
    from kvcast.cli.console_api import ConsoleLike

logger = get_logger(__name__)


def init_common_state(
    ctx: click.Context,
    *,
    verbose: int,
    quiet: int,
    color_mode: ColorMode | None,
    no_color: bool,
    config_file: str | None,
    no_config: bool,
) -> None:
    """Initialize shared state (verbosity, color, config source) on the Click context.

    Args:
        ctx (click.Context): Current Click context; will have ``obj`` and ``color`` set.
        verbose (int): Count of ``-v`` flags.
        quiet (int): Count of ``-q`` flags.
        color_mode (ColorMode | None): Explicit color mode from ``--color`` (or ``None``).
        no_color (bool): Whether ``--no-color`` was passed; forces color off.
        config_file (str | None): Explicit configuration file from ``--config``.
        no_config (bool): Whether discovery of local configuration files is disabled.
    """
    ctx.obj = ctx.obj or {}

    level_env = resolve_env_log_level()
    ctx.obj["log_level"] = level_env
    effective_color_mode = ColorMode.NEVER if no_color else (color_mode or ColorMode.AUTO)
    enable_color = resolve_color_mode(cli_mode=effective_color_mode, output_format=None)
    setup_logging(level=level_env, colorize=enable_color)
    ctx.obj["color_enabled"] = enable_color
    ctx.color = enable_color
    ctx.obj["console"] = ClickConsole(enable_color=enable_color)

    ctx.obj["verbosity_level"] = resolve_verbosity(verbose, quiet)
    ctx.obj["config_file"] = config_file
    ctx.obj["no_config"] = no_config
    logger.debug("CLI state: %s", ctx.obj)


@click.group(
    cls=click.Group,
    context_settings=CONTEXT_SETTINGS,
    invoke_without_command=True,
    help="KvCast: turn 'key:value' lines into JSON records and cast them over UDP multicast.",
)
@common_verbose_options
@common_color_options
@common_config_options
@click.pass_context
def cli(
    ctx: click.Context,
    verbose: int,
    quiet: int,
    color_mode: ColorMode | None,
    no_color: bool,
    config_file: str | None,
    no_config: bool,
) -> None:
    """Entry point for the KvCast CLI."""
    init_common_state(
        ctx,
        verbose=verbose,
        quiet=quiet,
        color_mode=color_mode,
        no_color=no_color,
        config_file=config_file,
        no_config=no_config,
    )
    console: ConsoleLike = ctx.obj["console"]

    if ctx.invoked_subcommand is None:
        console.print("Hint: use 'kvcast send GROUP PORT FILE' or 'kvcast listen GROUP PORT'.")
        console.print()
        console.print(ctx.get_help())


cli.add_command(version_command)

cli.add_command(config_command)

cli.add_command(parse_command)

cli.add_command(send_command)

cli.add_command(listen_command)

if __name__ == "__main__":
    cli()
