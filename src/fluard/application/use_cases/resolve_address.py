"""Classify an endpoint argument into transport scheme and address.

Purpose
-------
Turn strings such as ``tcp://127.0.0.1:24224`` or ``unix:///run/fluentd.sock``
into an :class:`~fluard.domain.endpoint.Endpoint`, rejecting everything else
before any network activity takes place.

Contents
--------
* :data:`ADDRESS_HINT` – usage lines shown when an address is rejected.
* :func:`resolve_address` – the resolver.

Accepted grammar
----------------
* ``tcp:`` / ``udp:`` + any number of ``/`` + non-empty authority.
* ``unix:`` + any number of ``//`` groups + a path starting with ``/``.

The two forms are checked separately by prefix stripping so the branch that
matched is always unambiguous.
"""

from __future__ import annotations

import logging

from fluard.domain.endpoint import Endpoint, TransportScheme
from fluard.domain.errors import ErrorKind, ParseError

logger = logging.getLogger(__name__)

ADDRESS_HINT = (
    "Address format should match any of tcp:(/..)<host>:<port>, udp:(/..)<host>:<port>, or unix:(/..)<path>",
    "Any number of slashes is optional; use an odd number for absolute unix paths",
)


def _reject(raw: str, reason: str) -> ParseError:
    return ParseError(ErrorKind.MALFORMED_ADDRESS, f"invalid address {raw!r}: {reason}", value=raw)


def _network_authority(rest: str) -> str | None:
    """Return the authority after any leading slashes, ``None`` when empty."""
    authority = rest.lstrip("/")
    return authority or None


def _unix_path(rest: str) -> str | None:
    """Strip ``//`` groups while keeping at least one leading slash.

    Examples
    --------
    >>> _unix_path("///run/fluentd.sock")
    '/run/fluentd.sock'
    >>> _unix_path("//run/fluentd.sock")
    '//run/fluentd.sock'
    >>> _unix_path("run/fluentd.sock") is None
    True
    """
    slashes = len(rest) - len(rest.lstrip("/"))
    if slashes == 0:
        return None
    groups = (slashes - 1) // 2
    return rest[2 * groups :]


def resolve_address(raw: str) -> Endpoint:
    """Resolve ``raw`` into an :class:`Endpoint`.

    Parameters
    ----------
    raw:
        Endpoint argument exactly as typed by the operator.

    Returns
    -------
    Endpoint
        Scheme, transport address and the untouched ``raw`` string.

    Raises
    ------
    ParseError
        With :attr:`ErrorKind.MALFORMED_ADDRESS` when ``raw`` matches neither
        form. No partial result is produced.

    Examples
    --------
    >>> resolve_address("tcp://127.0.0.1:24224").as_tuple()
    ('tcp', '127.0.0.1:24224')
    >>> resolve_address("udp:127.0.0.1:54453").as_tuple()
    ('udp', '127.0.0.1:54453')
    >>> resolve_address("unix:///run/fluentd.sock").as_tuple()
    ('unix', '/run/fluentd.sock')
    >>> resolve_address("http://x")
    Traceback (most recent call last):
    ...
    fluard.domain.errors.ParseError: invalid address 'http://x': unknown scheme 'http'
    """
    if "\n" in raw:
        raise _reject(raw, "line breaks are not allowed")

    keyword, separator, rest = raw.partition(":")
    if not separator:
        raise _reject(raw, "missing scheme")

    try:
        scheme = TransportScheme.from_name(keyword)
    except ValueError as exc:
        raise _reject(raw, f"unknown scheme {keyword!r}") from exc

    if scheme.is_network:
        address = _network_authority(rest)
        if address is None:
            raise _reject(raw, "missing host:port")
    else:
        address = _unix_path(rest)
        if address is None:
            raise _reject(raw, "unix socket path must be absolute")

    endpoint = Endpoint(scheme=scheme, address=address, raw=raw)
    logger.debug("resolved %r to %s", raw, endpoint.url)
    return endpoint


__all__ = ["ADDRESS_HINT", "resolve_address"]
