"""Forward protocol event in "Message mode".

Purpose
-------
Bundle tag, timestamp and record into the triple the Fluent Forward protocol
transmits, and encode the timestamp as the protocol's ``EventTime`` extension.

Contents
--------
* :data:`EventRecord` – type alias for the JSON object payload.
* :class:`ForwardEvent` – immutable ``(tag, timestamp, record)`` triple.
* :func:`encode_event_time` – ``EventTime`` byte layout.
"""

from __future__ import annotations

import struct
from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import Any

EventRecord = dict[str, Any]

EVENT_TIME_EXT_CODE = 0
#: msgpack extension type reserved for ``EventTime`` by the Forward protocol.


def _ensure_aware(ts: datetime) -> datetime:
    """Validate that ``ts`` is timezone-aware and normalise to UTC."""
    if ts.tzinfo is None or ts.tzinfo.utcoffset(ts) is None:
        raise ValueError("timestamp must be timezone-aware")
    return ts.astimezone(timezone.utc)


def encode_event_time(ts: datetime) -> bytes:
    """Return the 8-byte ``EventTime`` body (big-endian seconds, nanoseconds).

    Examples
    --------
    >>> encode_event_time(datetime(1970, 1, 1, 0, 0, 1, 500, tzinfo=timezone.utc)).hex()
    '000000010007a120'
    """
    ts = _ensure_aware(ts)
    delta = ts - datetime(1970, 1, 1, tzinfo=timezone.utc)
    seconds = delta.days * 86400 + delta.seconds
    return struct.pack(">II", seconds, delta.microseconds * 1000)


@dataclass(slots=True, frozen=True)
class ForwardEvent:
    """Single event handed to the collector.

    Attributes
    ----------
    tag:
        Opaque stream label, e.g. ``fluard.test``.
    timestamp:
        Emission time in timezone-aware UTC.
    record:
        JSON object payload; copied on construction.
    """

    tag: str
    timestamp: datetime
    record: EventRecord = field(default_factory=dict)

    def __post_init__(self) -> None:
        object.__setattr__(self, "timestamp", _ensure_aware(self.timestamp))
        object.__setattr__(self, "record", dict(self.record))

    def to_dict(self) -> dict[str, Any]:
        """Serialize the event with an ISO8601 timestamp."""

        return {
            "tag": self.tag,
            "timestamp": self.timestamp.isoformat(),
            "record": dict(self.record),
        }


__all__ = ["EVENT_TIME_EXT_CODE", "EventRecord", "ForwardEvent", "encode_event_time"]
