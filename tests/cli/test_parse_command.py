# topmark:header:start
#
#   project      : KvCast
#   file         : test_parse_command.py
#   file_relpath : tests/cli/test_parse_command.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Tests for `kvcast parse`."""

from __future__ import annotations

import json
from pathlib import Path

import pytest

from kvcast.core.exit_codes import ExitCode
from tests.cli.conftest import assert_DATA_ERROR, assert_exit_code, assert_SUCCESS, run_cli
from tests.conftest import mark_cli

pytestmark = pytest.mark.usefixtures("isolation")

DATA: str = 'name:Alice age:30 active:true\n\nmsg:"hi\\tthere"\n'


def _data_file(text: str = DATA, name: str = "data.txt") -> str:
    Path(name).write_text(text, encoding="utf-8")
    return name


@mark_cli
def test_default_format_prints_client_layout() -> None:
    result = run_cli(["parse", _data_file()])
    assert_SUCCESS(result)
    assert result.output.splitlines() == [
        "Parsed JSON data:",
        "name: Alice",
        "age: 30",
        "active: true",
        "Parsed JSON data:",
        'msg: "hi\tthere"',
    ]


@mark_cli
def test_reads_stdin_by_default() -> None:
    result = run_cli(["parse"], input_text="k:v\n")
    assert_SUCCESS(result)
    assert "k: v" in result.output


@mark_cli
def test_ndjson_format() -> None:
    result = run_cli(["parse", "--format", "ndjson", _data_file()])
    assert_SUCCESS(result)
    objects = [json.loads(line) for line in result.output.splitlines()]
    assert objects == [
        {"name": "Alice", "age": 30, "active": True},
        {"msg": '"hi\tthere"'},
    ]


@mark_cli
def test_json_format_is_one_array() -> None:
    result = run_cli(["parse", "--format", "JSON", _data_file()])
    assert_SUCCESS(result)
    assert json.loads(result.output) == [
        {"name": "Alice", "age": 30, "active": True},
        {"msg": '"hi\tthere"'},
    ]


@mark_cli
def test_discarded_lines_are_reported_and_exit_65() -> None:
    result = run_cli(["parse", _data_file("a:1\nbad key:x\nb:2 c:\n")])
    assert_DATA_ERROR(result)
    assert "Skipping line 2: whitespace in key at column 4" in result.output
    assert "Skipping line 3: missing value after ':' at column 7" in result.output
    assert "a: 1" in result.output


@mark_cli
def test_quiet_suppresses_discard_warnings() -> None:
    result = run_cli(["-q", "parse", _data_file("bad key:x\n")])
    assert_DATA_ERROR(result)
    assert "Skipping" not in result.output


@mark_cli
def test_summary_counts_outcomes() -> None:
    result = run_cli(["-q", "parse", "--summary", _data_file("a:1\n\nbad key:x\n:x\n")])
    assert_DATA_ERROR(result)
    lines = result.output.splitlines()
    assert "Lines:     4" in lines
    assert "Records:   1" in lines
    assert "Empty:     1" in lines
    assert "Discarded: 2" in lines
    assert any(line.split() == ["whitespace_in_key", "1"] for line in lines)
    assert any(line.split() == ["empty_key", "1"] for line in lines)


@mark_cli
def test_debug_prints_pretty_json() -> None:
    result = run_cli(["parse", "--debug", _data_file("a:1\n")])
    assert_SUCCESS(result)
    assert result.output.splitlines() == ["DEBUG MODE:", "{", '\t"a":\t1', "}"]


@mark_cli
def test_max_token_length_from_config() -> None:
    Path("kvcast.toml").write_text("[parser]\nmax_token_length = 4\n", encoding="utf-8")
    result = run_cli(["parse", _data_file("keys:1\n")])
    assert_DATA_ERROR(result)
    assert "key too long" in result.output


@mark_cli
def test_missing_file_exits_66() -> None:
    result = run_cli(["parse", "nope.txt"])
    assert_exit_code(result, ExitCode.FILE_NOT_FOUND)
    assert "No such file: nope.txt" in result.output


@mark_cli
def test_non_utf8_input_exits_65() -> None:
    Path("bad.txt").write_bytes(b"k:\xff\n")
    result = run_cli(["parse", "bad.txt"])
    assert_DATA_ERROR(result)
    assert "not valid UTF-8" in result.output


@mark_cli
def test_invalid_config_exits_78() -> None:
    Path("kvcast.toml").write_text("[network]\nttl = 999\n", encoding="utf-8")
    result = run_cli(["parse", _data_file()])
    assert_exit_code(result, ExitCode.CONFIG_ERROR)
    assert "outside 0..255" in result.output


@mark_cli
def test_no_config_skips_discovery() -> None:
    Path("kvcast.toml").write_text("[network]\nttl = 999\n", encoding="utf-8")
    result = run_cli(["--no-config", "parse", _data_file()])
    assert_SUCCESS(result)
