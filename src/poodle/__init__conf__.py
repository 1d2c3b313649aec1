"""Static package metadata surfaced to the CLI, HTTP headers, and config discovery.

Values mirror ``pyproject.toml``; ``tests/test_metadata_sync.py`` guards
against drift.

Contents:
    * Package identity constants (name, title, version, homepage, author).
    * ``LAYEREDCONF_*`` identifiers used by lib_layered_config path resolution.
    * :func:`print_info` - Render the metadata block for ``poodle info``.
"""

from __future__ import annotations

name = "poodle"
title = "Python client for the Poodle transactional email API"
version = "1.0.0"
homepage = "https://github.com/usepoodle/poodle-python"
author = "Poodle"
author_email = "support@usepoodle.com"
shell_command = "poodle"

#: Vendor/app/slug triple consumed by lib_layered_config to locate config files.
LAYEREDCONF_VENDOR = "usepoodle"
LAYEREDCONF_APP = "Poodle"
LAYEREDCONF_SLUG = "poodle"


def print_info() -> None:
    """Print the package metadata block.

    Example:
        >>> print_info()  # doctest: +ELLIPSIS
        Info for poodle:
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
    print("\n".join(lines))


__all__ = [
    "LAYEREDCONF_APP",
    "LAYEREDCONF_SLUG",
    "LAYEREDCONF_VENDOR",
    "author",
    "author_email",
    "homepage",
    "name",
    "print_info",
    "shell_command",
    "title",
    "version",
]
