from __future__ import annotations

import logging
import socket
import threading
from collections.abc import Iterator
from pathlib import Path

import pytest


class FakeIdentity:
    def __init__(self, user: str = "tester", host: str = "api01") -> None:
        self.user = user
        self.host = host

    def user_name(self) -> str:
        return self.user

    def hostname(self) -> str:
        return self.host


class Recorder:
    def __init__(self) -> None:
        self.calls: list[tuple[str, dict]] = []

    def record(self, name: str, **payload) -> None:
        self.calls.append((name, payload))

    @property
    def names(self) -> list[str]:
        return [name for name, _ in self.calls]


class _StreamServer:
    """Accept one connection at a time and collect everything it sends."""

    def __init__(self, sock: socket.socket) -> None:
        self._sock = sock
        self._sock.listen(1)
        self._sock.settimeout(5)
        self.messages: list[bytes] = []
        self.received = threading.Event()
        self._thread = threading.Thread(target=self._run, daemon=True)

    def start(self) -> None:
        self._thread.start()

    def close(self) -> None:
        try:
            self._sock.close()
        finally:
            self._thread.join(timeout=1)

    def _run(self) -> None:
        while True:
            try:
                conn, _ = self._sock.accept()
            except OSError:
                break
            with conn:
                chunks: list[bytes] = []
                while True:
                    try:
                        data = conn.recv(4096)
                    except OSError:
                        break
                    if not data:
                        break
                    chunks.append(data)
            if chunks:
                self.messages.append(b"".join(chunks))
                self.received.set()


@pytest.fixture
def tcp_server() -> Iterator[tuple[_StreamServer, int]]:
    sock = socket.socket(socket.AF_INET, socket.SOCK_STREAM)
    sock.bind(("127.0.0.1", 0))
    server = _StreamServer(sock)
    server.start()
    try:
        yield server, sock.getsockname()[1]
    finally:
        server.close()


@pytest.fixture
def unix_server(tmp_path: Path) -> Iterator[tuple[_StreamServer, Path]]:
    if not hasattr(socket, "AF_UNIX"):
        pytest.skip("AF_UNIX sockets are not available")
    path = tmp_path / "fluentd.sock"
    if len(str(path)) > 100:
        pytest.skip("temporary path too long for a unix socket")
    sock = socket.socket(socket.AF_UNIX, socket.SOCK_STREAM)
    sock.bind(str(path))
    server = _StreamServer(sock)
    server.start()
    try:
        yield server, path
    finally:
        server.close()


@pytest.fixture
def udp_server() -> Iterator[tuple[socket.socket, int]]:
    sock = socket.socket(socket.AF_INET, socket.SOCK_DGRAM)
    sock.bind(("127.0.0.1", 0))
    sock.settimeout(5)
    try:
        yield sock, sock.getsockname()[1]
    finally:
        sock.close()


@pytest.fixture
def identity() -> FakeIdentity:
    return FakeIdentity()


@pytest.fixture
def recorder() -> Recorder:
    return Recorder()


@pytest.fixture(autouse=True)
def _reset_fluard_logger() -> Iterator[None]:
    package_logger = logging.getLogger("fluard")
    handlers = list(package_logger.handlers)
    level = package_logger.level
    propagate = package_logger.propagate
    yield
    package_logger.handlers[:] = handlers
    package_logger.setLevel(level)
    package_logger.propagate = propagate
