"""Fluent Forward client speaking msgpack over TCP, UDP or Unix sockets.

Purpose
-------
Implement :class:`~fluard.application.ports.forward.ForwardClientPort` for the
three transports an :class:`~fluard.domain.endpoint.Endpoint` can name.

Contents
--------
* :func:`split_host_port` – parse ``host:port`` authorities.
* :func:`pack_message` – encode a Forward "Message mode" entry.
* :class:`ForwardClient` – socket-backed adapter.

System Role
-----------
Outermost layer: the only module touching sockets. Every failure is re-raised
as :class:`~fluard.domain.errors.ForwardError` naming the failing stage.
"""

from __future__ import annotations

import logging
import socket
from datetime import datetime, timezone
from typing import Any

import msgpack

from fluard.application.ports.forward import ForwardClientPort
from fluard.domain.endpoint import Endpoint, TransportScheme
from fluard.domain.errors import ForwardError
from fluard.domain.events import EVENT_TIME_EXT_CODE, EventRecord, encode_event_time

logger = logging.getLogger(__name__)

DEFAULT_TIMEOUT = 5.0


def split_host_port(authority: str) -> tuple[str, int]:
    """Split ``host:port`` on the last colon; IPv6 brackets are removed.

    Examples
    --------
    >>> split_host_port("127.0.0.1:24224")
    ('127.0.0.1', 24224)
    >>> split_host_port("[::1]:24224")
    ('::1', 24224)
    >>> split_host_port("localhost")
    Traceback (most recent call last):
    ...
    ValueError: address 'localhost' must look like HOST:PORT
    """
    host, separator, port_str = authority.rpartition(":")
    if not separator or not host:
        raise ValueError(f"address {authority!r} must look like HOST:PORT")
    if host.startswith("[") and host.endswith("]"):
        host = host[1:-1]
    try:
        port = int(port_str)
    except ValueError as exc:
        raise ValueError(f"port {port_str!r} must be an integer") from exc
    if not 0 < port < 65536:
        raise ValueError(f"port {port} must be between 1 and 65535")
    return host, port


def pack_message(tag: str, timestamp: datetime, record: EventRecord) -> bytes:
    """Return ``[tag, EventTime, record]`` encoded with msgpack."""

    event_time = msgpack.ExtType(EVENT_TIME_EXT_CODE, encode_event_time(timestamp))
    return msgpack.packb([tag, event_time, record], use_bin_type=True)


def check_encodable(record: EventRecord) -> None:
    """Raise :class:`ValueError` when msgpack cannot encode ``record``.

    Examples
    --------
    >>> check_encodable({"n": 2**64 - 1})
    >>> check_encodable({"n": 2**64})
    Traceback (most recent call last):
    ...
    ValueError: cannot encode record: Integer value out of range
    """
    try:
        msgpack.packb(record, use_bin_type=True)
    except (TypeError, ValueError, OverflowError) as exc:
        raise ValueError(f"cannot encode record: {exc}") from exc


class ForwardClient(ForwardClientPort):
    """Send Forward protocol messages to the collector at ``endpoint``."""

    def __init__(self, endpoint: Endpoint, *, timeout: float = DEFAULT_TIMEOUT) -> None:
        """Bind the client to ``endpoint``; no connection is opened yet."""
        self._endpoint = endpoint
        self._timeout = timeout
        self._socket: Any | None = None

    @property
    def endpoint(self) -> Endpoint:
        return self._endpoint

    @property
    def connected(self) -> bool:
        return self._socket is not None

    def connect(self) -> None:
        """Open the transport, reusing an existing connection."""
        if self._socket is not None:
            return
        try:
            self._socket = self._open()
        except (OSError, ValueError) as exc:
            raise ForwardError("connect", self._endpoint, str(exc)) from exc
        logger.debug("connected to %s (timeout=%ss)", self._endpoint.url, self._timeout)

    def send_message(self, tag: str, record: EventRecord, *, timestamp: datetime | None = None) -> None:
        """Encode and transmit one message.

        Raises
        ------
        ForwardError
            When the client is not connected, the record cannot be encoded, or
            the socket write fails.
        """
        if self._socket is None:
            raise ForwardError("send", self._endpoint, "client is not connected")
        when = timestamp or datetime.now(timezone.utc)
        try:
            payload = pack_message(tag, when, record)
        except (TypeError, ValueError, OverflowError) as exc:
            raise ForwardError("send", self._endpoint, f"cannot encode record: {exc}") from exc
        try:
            if self._endpoint.scheme is TransportScheme.UDP:
                self._socket.send(payload)
            else:
                self._socket.sendall(payload)
        except OSError as exc:
            raise ForwardError("send", self._endpoint, str(exc)) from exc
        logger.debug("sent %d bytes with tag %s", len(payload), tag)

    def disconnect(self) -> None:
        """Close the socket; a no-op when already closed."""
        sock, self._socket = self._socket, None
        if sock is None:
            return
        try:
            sock.close()
        except OSError as exc:
            raise ForwardError("disconnect", self._endpoint, str(exc)) from exc

    def __enter__(self) -> "ForwardClient":
        self.connect()
        return self

    def __exit__(self, *_exc_info: object) -> None:
        self.disconnect()

    def _open(self) -> Any:
        scheme = self._endpoint.scheme
        if scheme is TransportScheme.TCP:
            return socket.create_connection(split_host_port(self._endpoint.address), timeout=self._timeout)
        if scheme is TransportScheme.UDP:
            host, port = split_host_port(self._endpoint.address)
            family, socktype, proto, _canon, sockaddr = socket.getaddrinfo(host, port, type=socket.SOCK_DGRAM)[0]
            sock = socket.socket(family, socktype, proto)
            return self._finish_connect(sock, sockaddr)
        sock = socket.socket(socket.AF_UNIX, socket.SOCK_STREAM)
        return self._finish_connect(sock, self._endpoint.address)

    def _finish_connect(self, sock: Any, address: Any) -> Any:
        try:
            sock.settimeout(self._timeout)
            sock.connect(address)
        except OSError:
            sock.close()
            raise
        return sock


__all__ = ["DEFAULT_TIMEOUT", "ForwardClient", "check_encodable", "pack_message", "split_host_port"]
