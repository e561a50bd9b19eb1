"""Use cases composing the test event pipeline."""

from __future__ import annotations

from .build_record import build_record, default_record
from .resolve_address import ADDRESS_HINT, resolve_address
from .send_event import create_send_event

__all__ = ["ADDRESS_HINT", "build_record", "create_send_event", "default_record", "resolve_address"]
