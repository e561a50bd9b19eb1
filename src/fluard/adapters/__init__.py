"""Adapters binding the application ports to sockets and the operating system."""

from __future__ import annotations

from .forward import ForwardClient
from .identity import SystemIdentity

__all__ = ["ForwardClient", "SystemIdentity"]
