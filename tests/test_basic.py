"""Behavioural tests for the public façade composed in :mod:`fluard.fluard`."""

from __future__ import annotations

from datetime import datetime, timezone

import pytest

import fluard
from fluard import ErrorKind, ParseError, prepare_event, send_test_event, summary_info


class _FakeClient:
    instances: list["_FakeClient"] = []

    def __init__(self, endpoint) -> None:
        self.endpoint = endpoint
        self.sent: list[tuple] = []
        self.closed = False
        _FakeClient.instances.append(self)

    def connect(self) -> None:
        pass

    def send_message(self, tag, record, *, timestamp=None) -> None:
        self.sent.append((tag, record, timestamp))

    def disconnect(self) -> None:
        self.closed = True


class _FakeClock:
    def now(self) -> datetime:
        return datetime(2025, 9, 23, 12, 0, tzinfo=timezone.utc)


@pytest.fixture(autouse=True)
def _reset_fake_clients() -> None:
    _FakeClient.instances.clear()


def test_send_test_event_returns_summary(identity) -> None:
    connected: list[str] = []

    summary = send_test_event(
        "tcp://127.0.0.1:24224",
        tag="app.check",
        identity=identity,
        client_factory=_FakeClient,
        clock=_FakeClock(),
        on_connect=lambda endpoint: connected.append(endpoint.url),
    )

    assert summary == {
        "scheme": "tcp",
        "address": "127.0.0.1:24224",
        "tag": "app.check",
        "timestamp": "2025-09-23T12:00:00+00:00",
        "record": {
            "message": "This is a test event",
            "local": {"user": "tester", "host": "api01", "address": "tcp://127.0.0.1:24224"},
        },
    }
    assert connected == ["tcp://127.0.0.1:24224"]
    client = _FakeClient.instances[0]
    assert client.closed is True
    assert client.sent[0][0] == "app.check"


def test_send_test_event_aborts_before_network_on_bad_record() -> None:
    with pytest.raises(ParseError) as excinfo:
        send_test_event("udp://127.0.0.1:54453", record_input="[1,2,3]", client_factory=_FakeClient)

    assert excinfo.value.kind is ErrorKind.WRONG_SHAPE
    assert _FakeClient.instances == []


def test_send_test_event_aborts_before_network_on_bad_address() -> None:
    with pytest.raises(ParseError) as excinfo:
        send_test_event("tcp://", client_factory=_FakeClient)

    assert excinfo.value.kind is ErrorKind.MALFORMED_ADDRESS
    assert _FakeClient.instances == []


def test_send_test_event_uses_default_forward_client(tcp_server) -> None:
    server, port = tcp_server

    summary = send_test_event(f"tcp://127.0.0.1:{port}", record_input='{"probe": 1}', timeout=2)

    assert summary["record"] == {"probe": 1}
    assert server.received.wait(timeout=2)


def test_prepare_event_resolves_and_builds(identity) -> None:
    endpoint, record = prepare_event("unix:///run/fluentd.sock", identity=identity)

    assert endpoint.as_tuple() == ("unix", "/run/fluentd.sock")
    assert record["local"]["address"] == "unix:///run/fluentd.sock"


def test_public_surface() -> None:
    for name in ("resolve_address", "build_record", "send_test_event", "Endpoint", "ForwardError"):
        assert name in fluard.__all__


def test_summary_info_contains_metadata() -> None:
    summary = summary_info()

    assert "Info for fluard" in summary
    assert "version" in summary
    assert summary.endswith("\n")
    assert summary_info() == summary


@pytest.mark.parametrize("raw", ['{"n": 18446744073709551616}', '{"s": "\\ud800"}'])
def test_send_test_event_rejects_unencodable_record_before_connecting(monkeypatch: pytest.MonkeyPatch, raw: str) -> None:
    import socket

    opened: list[object] = []
    monkeypatch.setattr(socket, "create_connection", lambda *args, **kwargs: opened.append(args))

    with pytest.raises(ParseError, match="cannot encode record") as excinfo:
        send_test_event("tcp://127.0.0.1:24224", record_input=raw)

    assert excinfo.value.kind is ErrorKind.WRONG_SHAPE
    assert excinfo.value.path is None
    assert opened == []


def test_prepare_event_reports_path_of_unencodable_record_file(tmp_path) -> None:
    source = tmp_path / "big.json"
    source.write_text('{"n": 18446744073709551616}', encoding="utf-8")

    with pytest.raises(ParseError) as excinfo:
        prepare_event("udp:127.0.0.1:54453", f"@{source}")

    assert excinfo.value.kind is ErrorKind.WRONG_SHAPE
    assert excinfo.value.path == str(source)


def test_prepare_event_accepts_largest_unsigned_integer() -> None:
    _endpoint, record = prepare_event("udp:127.0.0.1:54453", '{"n": 18446744073709551615}')

    assert record == {"n": 2**64 - 1}
