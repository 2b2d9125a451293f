# topmark:header:start
#
#   project      : KvCast
#   file         : conftest.py
#   file_relpath : tests/cli/conftest.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""CLI test helpers for running KvCast through Click's test runner.

`run_cli()` invokes the Click group in-process. Tests that depend on the
working directory (configuration discovery, relative input paths) should use
the `isolation` fixture from the top-level ``conftest.py`` as well.
"""

from __future__ import annotations

from typing import IO, Any, Sequence

from click.testing import CliRunner, Result

from kvcast.cli.main import cli
from kvcast.core.exit_codes import ExitCode


def run_cli(
    argv: str | Sequence[str] | None,
    *,
    input_text: str | bytes | IO[Any] | None = None,
) -> Result:
    """Invoke the CLI without changing the working directory.

    Args:
        argv (str | Sequence[str] | None): CLI argument vector, e.g. ``["parse", "data.txt"]``.
        input_text (str | bytes | IO[Any] | None): Optional standard input for the command.

    Returns:
        Result: The `click.testing.Result` produced by `click.testing.CliRunner.invoke`.

    Example:
        ```python
        result = run_cli(["version"])
        assert_SUCCESS(result)
        ```
    """
    runner = CliRunner()
    return runner.invoke(cli, argv, input=input_text)


def assert_SUCCESS(result: Result) -> None:
    """Assert that the command exited successfully (code 0)."""
    assert result.exit_code == ExitCode.SUCCESS, result.output


def assert_DATA_ERROR(result: Result) -> None:
    """Assert that the command exited because input lines were discarded (code 65)."""
    assert result.exit_code == ExitCode.DATA_ERROR, result.output


def assert_USAGE_ERROR(result: Result) -> None:
    """Assert that the command exited with a usage error (code 64)."""
    assert result.exit_code == ExitCode.USAGE_ERROR, result.output


def assert_exit_code(result: Result, expected: ExitCode) -> None:
    """Assert an arbitrary exit code."""
    assert result.exit_code == expected, result.output
