"""Error types raised while preparing and delivering a test event.

Purpose
-------
Give every failure a stable, inspectable classification so the CLI can print
an actionable message (offending input, file path, failing stage) before it
exits non-zero.

Contents
--------
* :class:`ErrorKind` – classification of input parsing failures.
* :class:`ParseError` – raised by address resolution and record building.
* :class:`ForwardError` – raised by forward client adapters.
"""

from __future__ import annotations

from enum import Enum
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from .endpoint import Endpoint


class ErrorKind(Enum):
    """Reasons an address or record input is rejected."""

    MALFORMED_ADDRESS = "malformed_address"
    SOURCE_UNAVAILABLE = "source_unavailable"
    MALFORMED_JSON = "malformed_json"
    WRONG_SHAPE = "wrong_shape"


class ParseError(ValueError):
    """Input could not be turned into an endpoint or an event record.

    Attributes
    ----------
    kind:
        :class:`ErrorKind` describing the failure.
    value:
        The offending input string (address or record argument).
    path:
        Record file path for ``@file`` inputs, otherwise ``None``.

    Examples
    --------
    >>> err = ParseError(ErrorKind.WRONG_SHAPE, "record must be a JSON object", value="[1]")
    >>> err.kind is ErrorKind.WRONG_SHAPE, str(err)
    (True, 'record must be a JSON object')
    """

    def __init__(self, kind: ErrorKind, message: str, *, value: str | None = None, path: str | None = None) -> None:
        super().__init__(message)
        self.kind = kind
        self.value = value
        self.path = path


class ForwardError(RuntimeError):
    """The forward client failed while talking to the collector.

    Attributes
    ----------
    stage:
        ``"connect"``, ``"send"`` or ``"disconnect"``.
    endpoint:
        Endpoint the client was bound to.
    """

    def __init__(self, stage: str, endpoint: "Endpoint", message: str) -> None:
        super().__init__(f"Failed to {stage} ({endpoint.url}): {message}")
        self.stage = stage
        self.endpoint = endpoint


__all__ = ["ErrorKind", "ForwardError", "ParseError"]
