"""Protocols separating the use cases from operating-system adapters."""

from __future__ import annotations

from .forward import ForwardClientFactory, ForwardClientPort
from .identity import UNKNOWN, CurrentIdentityProvider
from .time import ClockPort

__all__ = [
    "ClockPort",
    "CurrentIdentityProvider",
    "ForwardClientFactory",
    "ForwardClientPort",
    "UNKNOWN",
]
