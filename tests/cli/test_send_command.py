# topmark:header:start
#
#   project      : KvCast
#   file         : test_send_command.py
#   file_relpath : tests/cli/test_send_command.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Tests for `kvcast send`.

The socket is replaced with an in-memory double so no datagram leaves the
test process.
"""

from __future__ import annotations

import json
from pathlib import Path
from typing import Any

import pytest

from kvcast.cli.commands import send as send_module
from kvcast.core.exit_codes import ExitCode
from kvcast.net import TransportError
from tests.cli.conftest import (
    assert_DATA_ERROR,
    assert_exit_code,
    assert_SUCCESS,
    assert_USAGE_ERROR,
    run_cli,
)
from tests.conftest import mark_cli, parametrize

pytestmark = pytest.mark.usefixtures("isolation")


class RecordingSocket:
    """Collects datagrams passed to ``sendto``."""

    def __init__(self) -> None:
        self.sent: list[tuple[bytes, tuple[str, int]]] = []
        self.closed: bool = False

    def sendto(self, payload: bytes, address: tuple[str, int]) -> int:
        self.sent.append((payload, address))
        return len(payload)

    def close(self) -> None:
        self.closed = True


@pytest.fixture
def fake_socket(monkeypatch: pytest.MonkeyPatch) -> RecordingSocket:
    sock = RecordingSocket()
    options: dict[str, Any] = {}

    def _open_sender(**kwargs: Any) -> RecordingSocket:
        options.update(kwargs)
        return sock

    monkeypatch.setattr(send_module, "open_sender", _open_sender)
    sock.options = options  # type: ignore[attr-defined]
    return sock


def _data_file(text: str, name: str = "data.txt") -> str:
    Path(name).write_text(text, encoding="utf-8")
    return name


@mark_cli
def test_sends_one_datagram_per_record(fake_socket: RecordingSocket) -> None:
    path = _data_file('name:"John Doe" age:30\n\nactive:TRUE\n')
    result = run_cli(["send", "239.0.0.1", "5000", path])
    assert_SUCCESS(result)

    assert [addr for _, addr in fake_socket.sent] == [("239.0.0.1", 5000)] * 2
    assert [json.loads(p) for p, _ in fake_socket.sent] == [
        {"name": '"John Doe"', "age": 30},
        {"active": True},
    ]
    assert fake_socket.closed
    assert result.output.count("Parsed JSON data:") == 2
    assert 'name: "John Doe"' in result.output


@mark_cli
def test_discarded_lines_are_not_sent(fake_socket: RecordingSocket) -> None:
    path = _data_file("a:1 b:\nc:3\n")
    result = run_cli(["send", "239.0.0.1", "5000", path])
    assert_DATA_ERROR(result)
    assert [json.loads(p) for p, _ in fake_socket.sent] == [{"c": 3}]
    assert "Skipping line 1" in result.output


@mark_cli
def test_dry_run_opens_no_socket(monkeypatch: pytest.MonkeyPatch) -> None:
    def _fail(**kwargs: Any) -> None:
        raise AssertionError("socket opened during dry run")

    monkeypatch.setattr(send_module, "open_sender", _fail)
    result = run_cli(["-v", "send", "--dry-run", "239.0.0.1", "5000", _data_file("k:v\n")])
    assert_SUCCESS(result)
    assert "k: v" in result.output
    assert "1 record(s) (dry run), 0 line(s) discarded" in result.output


@mark_cli
def test_ttl_and_loopback_come_from_config_and_options(fake_socket: RecordingSocket) -> None:
    Path("kvcast.toml").write_text("[network]\nttl = 3\nloopback = false\n", encoding="utf-8")
    result = run_cli(["send", "--ttl", "7", "239.0.0.1", "5000", _data_file("k:v\n")])
    assert_SUCCESS(result)
    assert fake_socket.options == {"ttl": 7, "loopback": False}  # type: ignore[attr-defined]


@mark_cli
def test_prompts_until_an_existing_file_is_named(fake_socket: RecordingSocket) -> None:
    path = _data_file("k:v\n")
    result = run_cli(["send", "239.0.0.1", "5000"], input_text=f"missing.txt\n{path}  \n")
    assert_SUCCESS(result)
    assert result.output.count("Enter the data file name") == 2
    assert "Cannot open 'missing.txt', please try again." in result.output
    assert len(fake_socket.sent) == 1


@mark_cli
def test_reads_stdin_with_dash(fake_socket: RecordingSocket) -> None:
    result = run_cli(["send", "239.0.0.1", "5000", "-"], input_text="a:1\nb:2\n")
    assert_SUCCESS(result)
    assert len(fake_socket.sent) == 2


@mark_cli
@parametrize(
    ("group", "port", "message"),
    [
        ("192.168.0.1", "5000", "Not a multicast address: 192.168.0.1"),
        ("999.0.0.1", "5000", "Invalid IP address format: 999.0.0.1"),
        ("239.0.0.1", "50x", "The port number isn't a number"),
        ("239.0.0.1", "70000", "Invalid port number"),
    ],
)
def test_invalid_endpoint_is_a_usage_error(group: str, port: str, message: str) -> None:
    result = run_cli(["send", "--dry-run", group, port, _data_file("k:v\n")])
    assert_USAGE_ERROR(result)
    assert message in result.output


@mark_cli
def test_transport_failure_exits_74(monkeypatch: pytest.MonkeyPatch) -> None:
    def _open_sender(**kwargs: Any) -> None:
        raise TransportError("socket: Operation not permitted")

    monkeypatch.setattr(send_module, "open_sender", _open_sender)
    result = run_cli(["send", "239.0.0.1", "5000", _data_file("k:v\n")])
    assert_exit_code(result, ExitCode.IO_ERROR)
    assert "Operation not permitted" in result.output
