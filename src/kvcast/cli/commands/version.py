# topmark:header:start
#
#   project      : KvCast
#   file         : version.py
#   file_relpath : src/kvcast/cli/commands/version.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""KvCast `version` command.

Prints the current KvCast version as installed in the active Python environment.
"""

from __future__ import annotations

import json
from typing import TYPE_CHECKING

import click

from kvcast.cli.cmd_common import get_console, get_effective_verbosity
from kvcast.cli.options import output_format_option
from kvcast.constants import KVCAST_VERSION
from kvcast.core.formats import OutputFormat, is_machine_format

if TYPE_CHECKING:
    from kvcast.cli.console_api import ConsoleLike


@click.command(
    name="version",
    help="Show the current version of KvCast.",
)
@output_format_option
def version_command(*, output_format: OutputFormat | None = None) -> None:
    """Show the current version of KvCast.

    Args:
        output_format (OutputFormat | None): Optional output format (plain text or JSON).
    """
    ctx = click.get_current_context()
    console: ConsoleLike = get_console(ctx)
    vlevel: int = get_effective_verbosity(ctx)

    if is_machine_format(output_format):
        console.print(json.dumps({"version": KVCAST_VERSION}))
    elif vlevel > 0:
        console.print(console.styled("KvCast version:", bold=True, underline=True))
        console.print(f"    {console.styled(KVCAST_VERSION, bold=True)}")
    else:
        console.print(console.styled(KVCAST_VERSION, bold=True))
