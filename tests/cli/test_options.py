# topmark:header:start
#
#   project      : KvCast
#   file         : test_options.py
#   file_relpath : tests/cli/test_options.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Tests for option resolution helpers and the keyed enum parameter type."""

from __future__ import annotations

import click
import pytest

from kvcast.cli.cli_types import EnumChoiceParam
from kvcast.cli.errors import KvcastUsageError
from kvcast.cli.options import ColorMode, resolve_color_mode, resolve_verbosity
from kvcast.core.formats import OutputFormat, is_machine_format
from tests.conftest import parametrize


@parametrize(
    ("verbose", "quiet", "expected"),
    [(0, 0, 0), (2, 0, 2), (0, 1, -1), (0, 3, -1)],
)
def test_resolve_verbosity(verbose: int, quiet: int, expected: int) -> None:
    assert resolve_verbosity(verbose, quiet) == expected


def test_verbose_and_quiet_conflict() -> None:
    with pytest.raises(KvcastUsageError, match="mutually exclusive"):
        resolve_verbosity(1, 1)


def _color(mode: ColorMode | None, fmt: OutputFormat | None = None, tty: bool = True) -> bool:
    return resolve_color_mode(cli_mode=mode, output_format=fmt, stdout_isatty=tty)


def test_color_mode_precedence(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.delenv("FORCE_COLOR", raising=False)
    monkeypatch.delenv("NO_COLOR", raising=False)
    assert _color(ColorMode.ALWAYS, OutputFormat.JSON) is False
    assert _color(ColorMode.ALWAYS, tty=False) is True
    assert _color(ColorMode.NEVER) is False
    assert _color(ColorMode.AUTO) is True
    assert _color(ColorMode.AUTO, tty=False) is False
    monkeypatch.setenv("NO_COLOR", "1")
    assert _color(ColorMode.AUTO) is False
    monkeypatch.setenv("FORCE_COLOR", "1")
    assert _color(None, tty=False) is True


def test_machine_formats() -> None:
    assert [f.key for f in OutputFormat if f.is_machine] == ["json", "ndjson"]
    assert is_machine_format(None) is False


def test_enum_choice_param_converts_keys_and_names() -> None:
    param = EnumChoiceParam(OutputFormat)
    assert param.convert("NDJSON", None, None) is OutputFormat.NDJSON
    assert param.convert(OutputFormat.JSON, None, None) is OutputFormat.JSON
    assert param.convert(None, None, None) is None
    with pytest.raises(click.BadParameter, match="Must be one of: default, json, ndjson"):
        param.convert("yaml", None, None)


def test_enum_choice_param_completion() -> None:
    param = EnumChoiceParam(ColorMode)
    ctx = click.Context(click.Command("x"))
    items = param.shell_complete(ctx, click.Option(["--color"]), "a")
    assert [(i.value, i.help) for i in items] == [
        ("auto", "color when writing to a terminal"),
        ("always", "always emit ANSI styles"),
    ]
