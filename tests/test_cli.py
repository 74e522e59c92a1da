from __future__ import annotations

import json
import threading
from typing import Iterator

import pytest
from websockets.sync.server import Server, ServerConnection, serve

from wsbench.cli import build_parser, main
from wsbench.payload import utf8


def _echo(ws: ServerConnection) -> None:
    for message in ws:
        ws.send(message)


@pytest.fixture
def echo_server() -> Iterator[Server]:
    with serve(_echo, "127.0.0.1", 0) as server:
        thread = threading.Thread(target=server.serve_forever, daemon=True)
        thread.start()
        yield server
        server.shutdown()
        thread.join(timeout=5)


def test_parser_maps_flags() -> None:
    args = build_parser().parse_args(["ws://h", "-A", "5", "-C", "2", "-M", "3", "-B", "64", "-W", "-vv"])
    assert (args.amount, args.concurrent, args.messages, args.buffer) == (5, 2, 3, 64)
    assert args.binary
    assert args.verbose == 2
    assert args.generator is None


def test_json_summary_against_echo_server(echo_server: Server, capsys: pytest.CaptureFixture[str]) -> None:
    port = echo_server.socket.getsockname()[1]
    main([f"ws://127.0.0.1:{port}", "-A", "2", "-M", "1", "--json"])

    summary = json.loads(capsys.readouterr().out)
    envelope = len(utf8(1024))
    assert set(summary) == {
        "Total received",
        "Total transferred",
        "Time taken for tests",
        "Connections created",
        "Handshake duration (median)",
        "Message latency (median)",
        "Total errors",
    }
    assert summary["Total transferred"] == 2 * envelope
    assert summary["Total received"] == 2 * envelope
    assert summary["Connections created"] == 2
    assert summary["Total errors"] == 0
    assert summary["Time taken for tests"] >= 0
    assert summary["Handshake duration (median)"] >= 0
    assert summary["Message latency (median)"] >= 0


def test_text_report_against_echo_server(echo_server: Server, capsys: pytest.CaptureFixture[str]) -> None:
    port = echo_server.socket.getsockname()[1]
    main([f"ws://127.0.0.1:{port}", "-A", "1", "-M", "2", "-W", "-B", "16"])

    out = capsys.readouterr().out
    assert "Connections created" in out
    assert "Latency" in out


def test_bad_url_exits_through_parser(capsys: pytest.CaptureFixture[str]) -> None:
    with pytest.raises(SystemExit) as excinfo:
        main(["http://127.0.0.1:1"])
    assert excinfo.value.code == 2
    assert "ws:// or wss://" in capsys.readouterr().err
