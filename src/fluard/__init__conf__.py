"""Static package metadata surfaced by ``fluard --version`` and ``info``."""

from __future__ import annotations

from collections.abc import Callable

name = "fluard"
title = "Send a single test event to a Fluentd collector over the Forward protocol"
version = "0.1.0"
homepage = "https://github.com/fluard/fluard"
author = "fluard contributors"
author_email = "fluard@users.noreply.github.com"
shell_command = "fluard"


def print_info(writer: Callable[[str], None] = print) -> None:
    """Write the metadata banner through ``writer``.

    Examples
    --------
    >>> print_info()  # doctest: +ELLIPSIS
    Info for fluard:
    ...
    """
    fields = [
        ("name", name),
        ("title", title),
        ("version", version),
        ("homepage", homepage),
        ("author", author),
        ("author_email", author_email),
        ("shell_command", shell_command),
    ]
    pad = max(len(label) for label, _ in fields)
    lines = [f"Info for {name}:", ""]
    lines.extend(f"    {label.ljust(pad)} = {value}" for label, value in fields)
    writer("\n".join(lines) + "\n")
