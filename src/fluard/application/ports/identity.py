"""Port supplying the current user and host names for diagnostic records."""

from __future__ import annotations

from typing import Protocol, runtime_checkable

UNKNOWN = "unknown"
#: Value substituted when an operating-system lookup fails.


@runtime_checkable
class CurrentIdentityProvider(Protocol):
    """Report who is sending the test event and from where.

    Implementations never raise; failed lookups return :data:`UNKNOWN`.
    """

    def user_name(self) -> str: ...

    def hostname(self) -> str: ...


__all__ = ["CurrentIdentityProvider", "UNKNOWN"]
