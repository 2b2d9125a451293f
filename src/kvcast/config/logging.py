# topmark:header:start
#
#   project      : KvCast
#   file         : logging.py
#   file_relpath : src/kvcast/config/logging.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Diagnostics logging for KvCast.

Diagnostics (socket setup, tokenizer traces, config discovery) are emitted
through `logging` and always land on stderr, so that records printed on stdout
can be piped safely. Program output proper goes through
`kvcast.cli.console_api.ConsoleLike` instead.

The level comes from ``KVCAST_LOG_LEVEL`` and defaults to CRITICAL, which keeps
a normal run silent. A ``TRACE`` level below DEBUG is available for per-token
and per-datagram chatter.
"""

from __future__ import annotations

import logging
import os
import sys
from typing import TYPE_CHECKING, Callable, Final, cast

from yachalk import chalk

if TYPE_CHECKING:
    from collections.abc import Mapping

TRACE_LEVEL: Final[int] = logging.DEBUG - 5

LOG_LEVEL_ENV_VAR: Final[str] = "KVCAST_LOG_LEVEL"

LOG_FORMAT: Final[str] = "[%(levelname)s] %(message)s"
# Verbose levels also show where the message came from
DEBUG_LOG_FORMAT: Final[str] = "[%(levelname)s] %(name)s:%(lineno)d %(funcName)s(): %(message)s"


class KvcastLogger(logging.Logger):
    """Logger with an extra `trace()` method for the TRACE level."""

    def trace(
        self,
        msg: object,
        *args: object,
        extra: Mapping[str, object] | None = None,
    ) -> None:
        """Log ``msg % args`` at TRACE level (below DEBUG)."""
        if not self.isEnabledFor(TRACE_LEVEL):
            return
        self._log(TRACE_LEVEL, msg, args, extra=extra, stacklevel=2)


logging.addLevelName(TRACE_LEVEL, "TRACE")
logging.setLoggerClass(KvcastLogger)


#: Level thresholds and their styles, most severe first.
_LEVEL_STYLES: Final[tuple[tuple[int, Callable[[str], str]], ...]] = (
    (logging.CRITICAL, chalk.red_bright),
    (logging.ERROR, chalk.red),
    (logging.WARNING, chalk.yellow),
    (logging.INFO, chalk.green),
    (logging.DEBUG, chalk.gray),
    (TRACE_LEVEL, chalk.blue),
)


class ChalkFormatter(logging.Formatter):
    """Formatter that colors each message by severity.

    Args:
        fmt (str): The `logging` format string.
        colorize (bool): When False, messages are returned unstyled
            (``--no-color`` or ``--color=never``).
    """

    def __init__(self, fmt: str, *, colorize: bool = True) -> None:
        super().__init__(fmt)
        self.colorize = colorize

    def format(self, record: logging.LogRecord) -> str:
        """Format ``record`` and wrap it in the style of its level."""
        text: str = super().format(record)
        if not self.colorize:
            return text
        for threshold, style in _LEVEL_STYLES:
            if record.levelno >= threshold:
                return style(text)
        # Custom levels below TRACE
        return chalk.dim(text)


def parse_log_level(value: str) -> int | None:
    """Turn a level name (``"debug"``, ``"TRACE"``) or number (``"10"``) into a level.

    Returns:
        int | None: The numeric level, or None when ``value`` is not recognized.
    """
    name: str = value.strip().upper()
    if not name:
        return None
    if name.isdigit():
        return int(name)
    if name == "TRACE":
        return TRACE_LEVEL
    # Accepts the stdlib names plus the WARN and FATAL aliases
    level = logging.getLevelName(name)
    return level if isinstance(level, int) else None


def resolve_env_log_level() -> int | None:
    """Return the level requested through ``KVCAST_LOG_LEVEL``, if any."""
    raw: str | None = os.environ.get(LOG_LEVEL_ENV_VAR)
    if raw is None:
        return None
    return parse_log_level(raw)


def setup_logging(level: int | None = None, *, colorize: bool = True) -> None:
    """(Re)configure the root logger for a KvCast run.

    Any handler installed by a previous run in the same process is replaced, so
    repeated CLI invocations (as in tests) never duplicate messages.

    Args:
        level (int | None): Logging level. When None, ``KVCAST_LOG_LEVEL`` is
            consulted, falling back to CRITICAL.
        colorize (bool): Whether log lines are styled with chalk.
    """
    if level is None:
        level = resolve_env_log_level()
    if level is None:
        level = logging.CRITICAL

    root: logging.Logger = logging.getLogger()
    root.setLevel(level)
    for old in list(root.handlers):
        root.removeHandler(old)

    handler = logging.StreamHandler(sys.stderr)
    fmt: str = LOG_FORMAT if level >= logging.INFO else DEBUG_LOG_FORMAT
    handler.setFormatter(ChalkFormatter(fmt, colorize=colorize))
    root.addHandler(handler)


def get_logger(name: str) -> KvcastLogger:
    """Return the `KvcastLogger` registered under ``name``."""
    return cast("KvcastLogger", logging.getLogger(name))
