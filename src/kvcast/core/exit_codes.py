# topmark:header:start
#
#   project      : KvCast
#   file         : exit_codes.py
#   file_relpath : src/kvcast/core/exit_codes.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Exit codes for the KvCast CLI.

KvCast aligns with the BSD `sysexits` convention where practical, so that other tooling
can interpret failures consistently. Click's own usage errors exit with 2, which KvCast
never uses for its own outcomes.
"""

from enum import IntEnum


class ExitCode(IntEnum):
    """Standardized exit codes for the KvCast CLI.

    Attributes:
        SUCCESS: Successful execution with no errors.
        FAILURE: Generic failure (non-specific error).
        USAGE_ERROR: Command-line invocation error (invalid endpoint, flags or args).
            Mirrors BSD ``EX_USAGE (64)``.
        DATA_ERROR: At least one input line was discarded by the parser.
            Mirrors BSD ``EX_DATAERR (65)``.
        FILE_NOT_FOUND: Input path does not exist. Mirrors BSD ``EX_NOINPUT (66)``.
        IO_ERROR: Socket or file I/O error. Mirrors BSD ``EX_IOERR (74)``.
        CONFIG_ERROR: Configuration error (invalid values in a config file).
            Mirrors BSD ``EX_CONFIG (78)``.
        UNEXPECTED_ERROR: Unhandled/unknown error (last-resort).
    """

    SUCCESS = 0
    FAILURE = 1

    USAGE_ERROR = 64  # EX_USAGE
    DATA_ERROR = 65  # EX_DATAERR
    FILE_NOT_FOUND = 66  # EX_NOINPUT
    IO_ERROR = 74  # EX_IOERR
    CONFIG_ERROR = 78  # EX_CONFIG

    UNEXPECTED_ERROR = 255
