"""Façade wiring resolution, record building and delivery together.

Purpose
-------
Offer one call, :func:`send_test_event`, that host code and the CLI use to
emit a diagnostic event. It is the composition root: default adapters are
chosen here and may be replaced by callers (tests inject fakes).

Contents
--------
* :class:`_SystemClock` – UTC clock port.
* :func:`prepare_event` – resolve the address and build the record.
* :func:`send_test_event` – prepare and deliver one event.
* :func:`summary_info` – metadata banner for the CLI.

System Role
-----------
Nothing touches the network until both the endpoint and the record were
produced; any :class:`~fluard.domain.errors.ParseError` aborts before the
forward client is created.
"""

from __future__ import annotations

from datetime import datetime, timezone
from functools import partial
from typing import Any, Callable

from .adapters import ForwardClient, SystemIdentity
from .adapters.forward import check_encodable
from .application.ports import ClockPort, CurrentIdentityProvider, ForwardClientFactory
from .application.use_cases import build_record, create_send_event, resolve_address
from .application.use_cases.build_record import FILE_SENTINEL
from .config import DEFAULT_TAG, DEFAULT_TIMEOUT
from .domain import Endpoint, ErrorKind, EventRecord, ParseError


class _SystemClock(ClockPort):
    """Concrete clock port returning timezone-aware UTC timestamps."""

    def now(self) -> datetime:
        return datetime.now(timezone.utc)


def prepare_event(
    address: str,
    record_input: str = "",
    *,
    identity: CurrentIdentityProvider | None = None,
) -> tuple[Endpoint, EventRecord]:
    """Resolve ``address`` and build the record for ``record_input``.

    Raises
    ------
    ParseError
        For a malformed address or an unusable record input. A record the
        Forward encoder cannot represent (integers beyond 64 bits, lone
        surrogates, nesting deeper than msgpack allows) is ``WRONG_SHAPE``.

    Examples
    --------
    >>> endpoint, record = prepare_event("udp:127.0.0.1:54453", '{"ok": true}')
    >>> endpoint.as_tuple(), record
    (('udp', '127.0.0.1:54453'), {'ok': True})
    """
    endpoint = resolve_address(address)
    record = build_record(record_input, endpoint, identity=identity or SystemIdentity())
    try:
        check_encodable(record)
    except ValueError as exc:
        path = record_input[len(FILE_SENTINEL) :] if record_input.startswith(FILE_SENTINEL) else None
        raise ParseError(ErrorKind.WRONG_SHAPE, str(exc), value=record_input, path=path) from exc
    return endpoint, record


def send_test_event(
    address: str,
    *,
    tag: str = DEFAULT_TAG,
    record_input: str = "",
    timeout: float = DEFAULT_TIMEOUT,
    identity: CurrentIdentityProvider | None = None,
    client_factory: ForwardClientFactory | None = None,
    clock: ClockPort | None = None,
    on_connect: Callable[[Endpoint], None] | None = None,
) -> dict[str, Any]:
    """Send one event to the collector at ``address``.

    Parameters
    ----------
    address:
        Endpoint argument, e.g. ``tcp://127.0.0.1:24224``.
    tag:
        Event tag passed through unchanged.
    record_input:
        ``""`` for the default record, literal JSON, or ``@<path>``.
    timeout:
        Socket timeout in seconds for the default :class:`ForwardClient`.
    identity / client_factory / clock:
        Optional replacements for the default adapters.
    on_connect:
        Called with the endpoint right before the connection is opened.

    Returns
    -------
    dict[str, Any]
        ``scheme``, ``address``, ``tag``, ``record`` and ISO ``timestamp`` of
        the delivered event.

    Raises
    ------
    ParseError
        Address or record input rejected; nothing was sent.
    ForwardError
        Connecting, sending or disconnecting failed.
    """
    endpoint, record = prepare_event(address, record_input, identity=identity)
    factory = client_factory or partial(ForwardClient, timeout=timeout)
    send = create_send_event(client_factory=factory, clock=clock or _SystemClock())
    if on_connect is not None:
        on_connect(endpoint)
    event = send(endpoint, tag, record)
    return {
        "scheme": endpoint.scheme.value,
        "address": endpoint.address,
        **event.to_dict(),
    }


def summary_info() -> str:
    """Return the metadata banner used by the ``info`` command.

    Examples
    --------
    >>> "version" in summary_info()
    True
    """
    from . import __init__conf__

    lines: list[str] = []
    __init__conf__.print_info(writer=lines.append)
    return "".join(lines)


__all__ = ["prepare_event", "send_test_event", "summary_info"]
