"""Deliver a single event through a forward client.

The returned callable connects, sends one message and always disconnects, so a
failed send never leaks the transport. Errors propagate unchanged; there is no
retry.
"""

from __future__ import annotations

import logging
from collections.abc import Callable

from fluard.application.ports.forward import ForwardClientFactory
from fluard.application.ports.time import ClockPort
from fluard.domain.endpoint import Endpoint
from fluard.domain.events import EventRecord, ForwardEvent

logger = logging.getLogger(__name__)

SendCallable = Callable[[Endpoint, str, EventRecord], ForwardEvent]


def create_send_event(*, client_factory: ForwardClientFactory, clock: ClockPort) -> SendCallable:
    """Return a callable sending ``record`` under ``tag`` to ``endpoint``."""

    def send(endpoint: Endpoint, tag: str, record: EventRecord) -> ForwardEvent:
        event = ForwardEvent(tag=tag, timestamp=clock.now(), record=record)
        client = client_factory(endpoint)
        client.connect()
        try:
            client.send_message(event.tag, event.record, timestamp=event.timestamp)
        finally:
            client.disconnect()
        logger.debug("sent %s to %s", event.tag, endpoint.url)
        return event

    return send


__all__ = ["SendCallable", "create_send_event"]
