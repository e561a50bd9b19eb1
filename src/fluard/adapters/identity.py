"""Operating-system backed :class:`CurrentIdentityProvider`."""

from __future__ import annotations

import getpass
import logging
import socket
from collections.abc import Callable

from fluard.application.ports.identity import UNKNOWN, CurrentIdentityProvider

logger = logging.getLogger(__name__)


def _lookup(name: str, query: Callable[[], str]) -> str:
    try:
        value = query()
    except Exception as exc:  # getpass raises platform specific errors
        logger.debug("%s lookup failed: %s", name, exc)
        return UNKNOWN
    return value or UNKNOWN


class SystemIdentity(CurrentIdentityProvider):
    """Report the login name and hostname of the running process.

    Examples
    --------
    >>> identity = SystemIdentity(user_query=lambda: "ops", host_query=lambda: "")
    >>> identity.user_name(), identity.hostname()
    ('ops', 'unknown')
    """

    def __init__(
        self,
        *,
        user_query: Callable[[], str] | None = None,
        host_query: Callable[[], str] | None = None,
    ) -> None:
        self._user_query = user_query or getpass.getuser
        self._host_query = host_query or socket.gethostname

    def user_name(self) -> str:
        """Return the current login name or ``"unknown"``."""
        return _lookup("user", self._user_query)

    def hostname(self) -> str:
        """Return the machine hostname or ``"unknown"``."""
        return _lookup("hostname", self._host_query)


__all__ = ["SystemIdentity"]
