"""Port describing a Fluent Forward protocol client.

Purpose
-------
Keep the send use case independent of sockets and wire encoding; adapters
implementing this protocol own the transport.

Contents
--------
* :class:`ForwardClientPort` – connect/send/disconnect contract.
* :data:`ForwardClientFactory` – builds a client bound to an endpoint.
"""

from __future__ import annotations

from collections.abc import Callable
from datetime import datetime
from typing import Protocol, runtime_checkable

from fluard.domain.endpoint import Endpoint
from fluard.domain.events import EventRecord


@runtime_checkable
class ForwardClientPort(Protocol):
    """Deliver records to a Fluentd-compatible collector.

    Each method may fail independently with :class:`fluard.domain.errors.ForwardError`.
    """

    def connect(self) -> None:
        """Open the transport."""

    def send_message(self, tag: str, record: EventRecord, *, timestamp: datetime | None = None) -> None:
        """Encode and transmit one ``(tag, time, record)`` message."""

    def disconnect(self) -> None:
        """Close the transport; safe to call more than once."""


ForwardClientFactory = Callable[[Endpoint], ForwardClientPort]


__all__ = ["ForwardClientFactory", "ForwardClientPort"]
