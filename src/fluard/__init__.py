"""Emit a single test event to a Fluentd collector.

``import fluard`` exposes the façade used by the CLI so scripts can verify a
log pipeline endpoint without shelling out to ``fluard``.
"""

from __future__ import annotations

from .application.use_cases import build_record, resolve_address
from .domain import Endpoint, ErrorKind, ForwardError, ParseError, TransportScheme
from .fluard import prepare_event, send_test_event, summary_info

__all__ = [
    "Endpoint",
    "ErrorKind",
    "ForwardError",
    "ParseError",
    "TransportScheme",
    "build_record",
    "prepare_event",
    "resolve_address",
    "send_test_event",
    "summary_info",
]
