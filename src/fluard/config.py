"""Environment and ``.env`` configuration for the CLI.

Purpose
-------
Centralise the ``FLUARD_*`` environment variables and optional ``.env``
loading so the CLI and the façade interpret settings the same way.

Contents
--------
* :data:`DOTENV_ENV_VAR` – toggle for loading ``.env``.
* :func:`should_use_dotenv` / :func:`enable_dotenv` – python-dotenv wiring.
* :func:`default_tag`, :func:`default_timeout`, :func:`verbose_default` –
  environment lookups with documented fallbacks.

System Role
-----------
Edge configuration only; the domain and use cases receive plain values.
"""

from __future__ import annotations

import logging
import os
from pathlib import Path

from dotenv import find_dotenv, load_dotenv

logger = logging.getLogger(__name__)

DOTENV_ENV_VAR = "FLUARD_USE_DOTENV"
TAG_ENV_VAR = "FLUARD_TAG"
TIMEOUT_ENV_VAR = "FLUARD_TIMEOUT"
VERBOSE_ENV_VAR = "FLUARD_VERBOSE"

DEFAULT_TAG = "fluard.test"
DEFAULT_TIMEOUT = 5.0

_TRUTHY = {"1", "true", "yes", "on"}
_LOADED_DOTENV: Path | None = None


def env_bool(name: str, default: bool) -> bool:
    """Return the boolean value of an environment variable with fallback.

    Examples
    --------
    >>> _ = os.environ.pop('FLUARD_EXAMPLE_BOOL', None)
    >>> env_bool('FLUARD_EXAMPLE_BOOL', default=True)
    True
    >>> os.environ['FLUARD_EXAMPLE_BOOL'] = 'off'
    >>> env_bool('FLUARD_EXAMPLE_BOOL', default=True)
    False
    >>> _ = os.environ.pop('FLUARD_EXAMPLE_BOOL')
    """
    value = os.getenv(name)
    if value is None or not value.strip():
        return default
    return value.strip().lower() in _TRUTHY


def should_use_dotenv(*, explicit: bool | None = None, env_value: str | None = None) -> bool:
    """Decide whether ``.env`` should be loaded; an explicit flag wins.

    Examples
    --------
    >>> should_use_dotenv(explicit=False, env_value="1")
    False
    >>> should_use_dotenv(env_value="yes")
    True
    >>> should_use_dotenv()
    False
    """
    if explicit is not None:
        return explicit
    if env_value is None:
        return False
    return env_value.strip().lower() in _TRUTHY


def enable_dotenv(search_from: Path | None = None) -> Path | None:
    """Load the nearest ``.env`` without overriding existing variables.

    Parameters
    ----------
    search_from:
        Directory where the upward search starts; defaults to the working
        directory.

    Returns
    -------
    Path | None
        Resolved path of the loaded file, ``None`` when nothing was found.
    """
    global _LOADED_DOTENV

    if search_from is None:
        found = find_dotenv(usecwd=True)
    else:
        candidates = (directory / ".env" for directory in (search_from, *search_from.resolve().parents))
        found = next((str(candidate) for candidate in candidates if candidate.is_file()), "")
    if not found:
        logger.debug("no .env found")
        return None

    resolved = Path(found).resolve()
    load_dotenv(resolved, override=False)
    _LOADED_DOTENV = resolved
    logger.debug("loaded environment from %s", resolved)
    return resolved


def loaded_dotenv() -> Path | None:
    """Return the ``.env`` path loaded by :func:`enable_dotenv`, if any."""
    return _LOADED_DOTENV


def _reset_dotenv_state_for_testing() -> None:
    global _LOADED_DOTENV
    _LOADED_DOTENV = None


def default_tag() -> str:
    """Return ``FLUARD_TAG`` or :data:`DEFAULT_TAG`."""
    return os.getenv(TAG_ENV_VAR) or DEFAULT_TAG


def default_timeout() -> float:
    """Return ``FLUARD_TIMEOUT`` in seconds or :data:`DEFAULT_TIMEOUT`.

    Raises
    ------
    ValueError
        When the variable is set to something other than a positive number.

    Examples
    --------
    >>> _ = os.environ.pop('FLUARD_TIMEOUT', None)
    >>> default_timeout()
    5.0
    """
    raw = os.getenv(TIMEOUT_ENV_VAR)
    if raw is None or not raw.strip():
        return DEFAULT_TIMEOUT
    return coerce_timeout(raw)


def coerce_timeout(value: str | float) -> float:
    """Validate a timeout given in seconds.

    Examples
    --------
    >>> coerce_timeout("2.5")
    2.5
    >>> coerce_timeout("0")
    Traceback (most recent call last):
    ...
    ValueError: timeout must be positive, got 0.0
    """
    try:
        seconds = float(value)
    except (TypeError, ValueError) as exc:
        raise ValueError(f"timeout must be a number of seconds, got {value!r}") from exc
    if not seconds > 0:
        raise ValueError(f"timeout must be positive, got {seconds}")
    return seconds


def verbose_default() -> bool:
    """Return ``FLUARD_VERBOSE`` interpreted as boolean (default ``False``)."""
    return env_bool(VERBOSE_ENV_VAR, False)


__all__ = [
    "DEFAULT_TAG",
    "DEFAULT_TIMEOUT",
    "DOTENV_ENV_VAR",
    "TAG_ENV_VAR",
    "TIMEOUT_ENV_VAR",
    "VERBOSE_ENV_VAR",
    "coerce_timeout",
    "default_tag",
    "default_timeout",
    "enable_dotenv",
    "env_bool",
    "loaded_dotenv",
    "should_use_dotenv",
    "verbose_default",
]
