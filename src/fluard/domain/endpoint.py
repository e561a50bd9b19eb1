"""Endpoint value object describing where a test event is delivered.

Purpose
-------
Capture the outcome of address resolution as an immutable pair of transport
scheme and transport-specific address, keeping the raw command-line input
around for the default diagnostic record.

Contents
--------
* :class:`TransportScheme` – enum of the supported transports.
* :class:`Endpoint` – frozen dataclass consumed by the forward client.

System Role
-----------
Lives in the domain layer; produced by
:func:`fluard.application.use_cases.resolve_address.resolve_address` and read
by both the record builder and the forward client adapter.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum


class TransportScheme(Enum):
    """Transports understood by the Fluent Forward client."""

    TCP = "tcp"
    UDP = "udp"
    UNIX = "unix"

    @property
    def is_network(self) -> bool:
        """Return ``True`` when the address is a ``host:port`` authority."""

        return self is not TransportScheme.UNIX

    @classmethod
    def from_name(cls, name: str) -> "TransportScheme":
        """Return the scheme for the exact keyword ``name``.

        Keywords are case-sensitive, matching the accepted address grammar.

        Examples
        --------
        >>> TransportScheme.from_name("udp") is TransportScheme.UDP
        True
        >>> TransportScheme.from_name("TCP")
        Traceback (most recent call last):
        ...
        ValueError: Unknown transport scheme: 'TCP'
        """
        try:
            return cls(name)
        except ValueError as exc:
            raise ValueError(f"Unknown transport scheme: {name!r}") from exc


@dataclass(slots=True, frozen=True)
class Endpoint:
    """Resolved transport endpoint.

    Attributes
    ----------
    scheme:
        Transport used to reach the collector.
    address:
        ``host:port`` authority for tcp/udp, absolute filesystem path for unix.
    raw:
        The unparsed endpoint string exactly as given on the command line.
    """

    scheme: TransportScheme
    address: str
    raw: str = ""

    def __post_init__(self) -> None:
        if not self.address:
            raise ValueError("address must not be empty")
        if self.scheme is TransportScheme.UNIX and not self.address.startswith("/"):
            raise ValueError("unix socket path must be absolute")
        if not self.raw:
            object.__setattr__(self, "raw", f"{self.scheme.value}://{self.address}")

    @property
    def url(self) -> str:
        """Return a display form ``scheme://address``.

        Examples
        --------
        >>> Endpoint(TransportScheme.TCP, "127.0.0.1:24224").url
        'tcp://127.0.0.1:24224'
        """

        return f"{self.scheme.value}://{self.address}"

    def as_tuple(self) -> tuple[str, str]:
        """Return ``(scheme, address)`` with the scheme as plain string."""

        return self.scheme.value, self.address


__all__ = ["Endpoint", "TransportScheme"]
