"""Command line interface sending one test event to a Fluentd collector.

Purpose
-------
Expose ``fluard ADDRESS [--tag] [--record]`` so operators can check that a log
pipeline endpoint accepts Forward protocol traffic.

Contents
--------
* :func:`cli` – rich-click command.
* :func:`main` – entry point routed through ``lib_cli_exit_tools`` so exit
  codes and traceback display follow the shared CLI conventions.

System Role
-----------
Presentation layer: turns :class:`~fluard.domain.errors.ParseError` and
:class:`~fluard.domain.errors.ForwardError` into ``ClickException`` messages
and non-zero exit codes; all behaviour lives in :mod:`fluard.fluard`.
"""

from __future__ import annotations

import logging
import os
from typing import Sequence

import lib_cli_exit_tools
import rich_click as click
from click.core import ParameterSource
from rich.console import Console
from rich.logging import RichHandler

from . import __init__conf__
from . import config as fluard_config
from .application.use_cases.resolve_address import ADDRESS_HINT
from .domain import Endpoint, ErrorKind, ForwardError, ParseError
from .fluard import send_test_event

CLICK_CONTEXT_SETTINGS = {"help_option_names": ["-h", "--help"]}

logger = logging.getLogger(__name__)


def _configure_logging(verbose: bool) -> None:
    """Route ``fluard.*`` loggers to a Rich handler on stderr."""
    package_logger = logging.getLogger("fluard")
    for handler in list(package_logger.handlers):
        package_logger.removeHandler(handler)
    handler = RichHandler(console=Console(stderr=True), show_path=False, markup=False)
    handler.setFormatter(logging.Formatter("%(message)s"))
    package_logger.addHandler(handler)
    package_logger.setLevel(logging.DEBUG if verbose else logging.WARNING)
    package_logger.propagate = False


def _apply_traceback_preference(enabled: bool) -> None:
    lib_cli_exit_tools.config.traceback = enabled
    lib_cli_exit_tools.config.traceback_force_color = enabled


def _load_dotenv_if_requested(ctx: click.Context, use_dotenv: bool) -> None:
    explicit: bool | None = None
    if ctx.get_parameter_source("use_dotenv") is not ParameterSource.DEFAULT:
        explicit = use_dotenv
    env_toggle = os.getenv(fluard_config.DOTENV_ENV_VAR)
    if fluard_config.should_use_dotenv(explicit=explicit, env_value=env_toggle):
        fluard_config.enable_dotenv()


def _print_status(console: Console, text: str, style: str = "") -> None:
    console.print(text, style=style, markup=False, highlight=False, soft_wrap=True)


@click.command(context_settings=CLICK_CONTEXT_SETTINGS)
@click.argument("address", metavar="ADDRESS")
@click.option("--tag", "-t", default=None, help="Fluentd event tag (default: $FLUARD_TAG or fluard.test).")
@click.option("--record", "-r", default="", help="Event record as JSON string or @<file>.")
@click.option("--timeout", type=float, default=None, help="Connection timeout in seconds (default: $FLUARD_TIMEOUT or 5).")
@click.option("--verbose", "-v", is_flag=True, default=False, help="Log resolution and transport details to stderr.")
@click.option(
    "--traceback/--no-traceback",
    is_flag=True,
    default=False,
    help="Show full Python traceback on errors.",
)
@click.option(
    "--use-dotenv/--no-use-dotenv",
    default=False,
    help="Load environment variables from a nearby .env before running.",
)
@click.version_option(__init__conf__.version, "--version", "-V", prog_name=__init__conf__.shell_command)
@click.pass_context
def cli(
    ctx: click.Context,
    *,
    address: str,
    tag: str | None,
    record: str,
    timeout: float | None,
    verbose: bool,
    traceback: bool,
    use_dotenv: bool,
) -> None:
    """Send a single test event to the Fluentd collector at ADDRESS.

    ADDRESS is one of tcp://HOST:PORT, udp://HOST:PORT or unix:///PATH.
    """
    _apply_traceback_preference(traceback)
    _load_dotenv_if_requested(ctx, use_dotenv)
    _configure_logging(verbose or fluard_config.verbose_default())

    try:
        resolved_timeout = fluard_config.coerce_timeout(timeout) if timeout is not None else fluard_config.default_timeout()
    except ValueError as exc:
        raise click.BadParameter(str(exc), param_hint="--timeout") from exc
    resolved_tag = tag if tag is not None else fluard_config.default_tag()

    console = Console(highlight=False)

    def announce(endpoint: Endpoint) -> None:
        _print_status(console, f"Connecting to Fluentd at {endpoint.url}")

    try:
        summary = send_test_event(
            address,
            tag=resolved_tag,
            record_input=record,
            timeout=resolved_timeout,
            on_connect=announce,
        )
    except ParseError as exc:
        if lib_cli_exit_tools.config.traceback:
            raise
        if exc.kind is ErrorKind.MALFORMED_ADDRESS:
            for line in ADDRESS_HINT:
                click.echo(line, err=True)
            raise click.ClickException(f"Failed to parse address: {exc}") from exc
        raise click.ClickException(f"Failed to parse record input: {exc}") from exc
    except ForwardError as exc:
        if lib_cli_exit_tools.config.traceback:
            raise
        raise click.ClickException(str(exc)) from exc

    logger.debug("delivered %s", summary)
    _print_status(console, "Event sent successfully", style="green")


def main(argv: Sequence[str] | None = None, *, restore_traceback: bool = True) -> int:
    """Run :func:`cli` through ``lib_cli_exit_tools`` and return the exit code.

    Parameters
    ----------
    argv:
        Optional argument list (defaults to ``sys.argv[1:]``).
    restore_traceback:
        Restore the global traceback preferences afterwards so embedding
        callers are not affected by ``--traceback``.
    """
    previous_traceback = lib_cli_exit_tools.config.traceback
    previous_force_color = lib_cli_exit_tools.config.traceback_force_color
    try:
        return lib_cli_exit_tools.run_cli(
            cli,
            argv=list(argv) if argv is not None else None,
            prog_name=__init__conf__.shell_command,
        )
    finally:
        if restore_traceback:
            lib_cli_exit_tools.config.traceback = previous_traceback
            lib_cli_exit_tools.config.traceback_force_color = previous_force_color


__all__ = ["cli", "main"]
