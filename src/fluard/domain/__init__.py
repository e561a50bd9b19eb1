"""Domain value objects and errors used by the test event emitter."""

from __future__ import annotations

from .endpoint import Endpoint, TransportScheme
from .errors import ErrorKind, ForwardError, ParseError
from .events import EventRecord, ForwardEvent

__all__ = [
    "Endpoint",
    "ErrorKind",
    "EventRecord",
    "ForwardError",
    "ForwardEvent",
    "ParseError",
    "TransportScheme",
]
