"""Static package metadata surfaced by the CLI ``info`` command.

Values mirror ``pyproject.toml``; keep both in sync when releasing.
"""

from __future__ import annotations

from typing import Callable

name = "lib_log_leveled"
title = "Leveled logging with per-handler gating, colour templates, and call-site capture"
version = "0.1.0"
homepage = "https://github.com/bitranox/lib_log_leveled"
author = "bitranox"
author_email = "bitranox@gmail.com"
shell_command = "lib_log_leveled"


def print_info(writer: Callable[[str], None] | None = None) -> None:
    """Emit the metadata banner through ``writer`` (``print`` by default).

    Examples
    --------
    >>> print_info()  # doctest: +ELLIPSIS
    Info for lib_log_leveled:
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
    text = "\n".join(lines) + "\n"
    if writer is None:
        print(text, end="")
    else:
        writer(text)
