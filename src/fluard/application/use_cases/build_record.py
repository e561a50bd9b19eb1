"""Produce the event record sent to the collector.

Purpose
-------
Accept the ``--record`` argument in its three forms (empty, literal JSON,
``@file``) and return exactly one JSON object, or fail with a classified
:class:`~fluard.domain.errors.ParseError`.

Contents
--------
* :data:`DEFAULT_MESSAGE` – message of the synthesized diagnostic record.
* :func:`default_record` – diagnostic record built from identity lookups.
* :func:`build_record` – the record builder.
"""

from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import Any

from fluard.application.ports.identity import CurrentIdentityProvider
from fluard.domain.endpoint import Endpoint
from fluard.domain.errors import ErrorKind, ParseError
from fluard.domain.events import EventRecord

logger = logging.getLogger(__name__)

DEFAULT_MESSAGE = "This is a test event"
FILE_SENTINEL = "@"


def _reject_constant(name: str) -> Any:
    raise ValueError(f"invalid JSON constant {name}")


def _json_type_name(value: Any) -> str:
    if value is None:
        return "null"
    if isinstance(value, bool):
        return "boolean"
    if isinstance(value, (int, float)):
        return "number"
    if isinstance(value, str):
        return "string"
    return "array"


def _decode_json(text: str) -> Any:
    """Parse strict JSON; ``NaN`` and ``Infinity`` literals are rejected."""
    return json.loads(text, parse_constant=_reject_constant)


def default_record(endpoint: Endpoint, identity: CurrentIdentityProvider) -> EventRecord:
    """Return the diagnostic record used when no ``--record`` is given.

    Examples
    --------
    >>> from fluard.domain.endpoint import TransportScheme
    >>> class _Fixed:
    ...     def user_name(self): return "ops"
    ...     def hostname(self): return "web01"
    >>> endpoint = Endpoint(TransportScheme.TCP, "127.0.0.1:24224", raw="tcp://127.0.0.1:24224")
    >>> default_record(endpoint, _Fixed())["local"]
    {'user': 'ops', 'host': 'web01', 'address': 'tcp://127.0.0.1:24224'}
    """
    return {
        "message": DEFAULT_MESSAGE,
        "local": {
            "user": identity.user_name(),
            "host": identity.hostname(),
            "address": endpoint.raw,
        },
    }


def _read_source(path: str) -> str:
    try:
        content = Path(path).read_bytes()
    except OSError as exc:
        raise ParseError(
            ErrorKind.SOURCE_UNAVAILABLE,
            f"failed to read file {path}: {exc.strerror or exc}",
            value=FILE_SENTINEL + path,
            path=path,
        ) from exc
    try:
        return content.decode("utf-8")
    except UnicodeDecodeError as exc:
        raise ParseError(
            ErrorKind.MALFORMED_JSON,
            f"failed to parse JSON from file {path}: not valid UTF-8",
            value=FILE_SENTINEL + path,
            path=path,
        ) from exc


def build_record(raw_input: str, endpoint: Endpoint, *, identity: CurrentIdentityProvider) -> EventRecord:
    """Build the event record for ``raw_input``.

    Parameters
    ----------
    raw_input:
        Empty string for the default record, ``@<path>`` to load a file, or a
        literal JSON object.
    endpoint:
        Resolved endpoint; its raw form is recorded in the default record.
    identity:
        Source of user and host names for the default record.

    Returns
    -------
    dict
        The decoded JSON object, values untouched.

    Raises
    ------
    ParseError
        ``SOURCE_UNAVAILABLE`` when the file cannot be read, ``MALFORMED_JSON``
        when the text is not JSON or nests too deeply to decode,
        ``WRONG_SHAPE`` when it is not an object.

    Examples
    --------
    >>> from fluard.domain.endpoint import TransportScheme
    >>> class _Fixed:
    ...     def user_name(self): return "ops"
    ...     def hostname(self): return "web01"
    >>> endpoint = Endpoint(TransportScheme.UDP, "127.0.0.1:54453")
    >>> build_record('{"a": 1, "b": [1, 2, 3]}', endpoint, identity=_Fixed())
    {'a': 1, 'b': [1, 2, 3]}
    """
    if not raw_input:
        logger.debug("no record given, synthesizing default record")
        return default_record(endpoint, identity)

    path: str | None = None
    if raw_input.startswith(FILE_SENTINEL):
        path = raw_input[len(FILE_SENTINEL) :]
        text = _read_source(path)
        logger.debug("loaded record from %s", path)
    else:
        text = raw_input

    try:
        data = _decode_json(text)
    except (ValueError, RecursionError) as exc:
        source = f"from file {path}" if path is not None else "string"
        raise ParseError(
            ErrorKind.MALFORMED_JSON,
            f"failed to parse JSON {source}: {exc}",
            value=raw_input,
            path=path,
        ) from exc

    if not isinstance(data, dict):
        raise ParseError(
            ErrorKind.WRONG_SHAPE,
            f"record must be a JSON object, not {_json_type_name(data)}",
            value=raw_input,
            path=path,
        )
    return data


__all__ = ["DEFAULT_MESSAGE", "build_record", "default_record"]
