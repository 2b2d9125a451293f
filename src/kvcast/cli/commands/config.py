# topmark:header:start
#
#   project      : KvCast
#   file         : config.py
#   file_relpath : src/kvcast/cli/commands/config.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""KvCast `config` command.

Prints the effective configuration (defaults merged with ``pyproject.toml``,
``kvcast.toml`` and ``--config``) as a TOML document that can be saved as
``kvcast.toml``.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

import click

from kvcast.cli.cmd_common import get_console, get_effective_verbosity, resolve_config
from kvcast.cli.options import CONTEXT_SETTINGS
from kvcast.config.loaders import render_toml

if TYPE_CHECKING:
    from kvcast.cli.console_api import ConsoleLike
    from kvcast.config import Config


@click.command(
    name="config",
    context_settings=CONTEXT_SETTINGS,
    help="Print the effective configuration as TOML.",
)
def config_command() -> None:
    """Print the merged configuration.

    With ``-v``, the configuration files that contributed are listed as TOML
    comments above the document.
    """
    ctx = click.get_current_context()
    console: ConsoleLike = get_console(ctx)
    config: Config = resolve_config(ctx)

    if get_effective_verbosity(ctx) > 0:
        if config.config_files:
            for path in config.config_files:
                console.print(f"# source: {path}")
        else:
            console.print("# source: built-in defaults")
    console.print(render_toml(config.to_toml_dict()).rstrip("\n"))
