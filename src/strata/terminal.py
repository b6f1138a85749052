"""ANSI colouring for view diagnostics.

Colours are applied only when the terminal supports them. ``NO_COLOR``
disables them and ``FORCE_COLOR`` enables them regardless of TTY detection.
"""

from __future__ import annotations

import os
import re
import sys
from typing import Literal

_CODES = {
    "reset": "\033[0m",
    "bold": "\033[1m",
    "dim": "\033[2m",
    "cyan": "\033[36m",
    "yellow": "\033[33m",
    "bright_red": "\033[91m",
}

ColorName = Literal["reset", "bold", "dim", "cyan", "yellow", "bright_red"]

_ANSI_RE = re.compile(r"\x1B(?:[@-Z\\-_]|\[[0-?]*[ -/]*[@-~])")


def supports_color() -> bool:
    """Whether diagnostics should be coloured.

    Evaluated on every call so tests and long-running processes can flip
    ``NO_COLOR`` / ``FORCE_COLOR`` at runtime.
    """
    if os.environ.get("FORCE_COLOR"):
        return True
    if os.environ.get("NO_COLOR"):
        return False
    return sys.stdout.isatty()


def colorize(text: str, *colors: ColorName) -> str:
    """Wrap ``text`` in the given ANSI codes, or return it unchanged."""
    if not colors or not supports_color():
        return text
    prefix = "".join(_CODES[color] for color in colors)
    return f"{prefix}{text}{_CODES['reset']}"


def strip_colors(text: str) -> str:
    """Remove ANSI escape sequences from ``text``."""
    return _ANSI_RE.sub("", text)


def error_code(text: str) -> str:
    return colorize(text, "bright_red", "bold")


def location(text: str) -> str:
    return colorize(text, "cyan")


def kind(text: str) -> str:
    return colorize(text, "yellow")


def dim_text(text: str) -> str:
    return colorize(text, "dim")


def format_error_header(code: str | None, message: str) -> str:
    """Prefix ``message`` with a coloured error code when one is given.

    Example:
        >>> format_error_header("S-TPL-001", "Template 'Blog/Show.html' not found")
        'S-TPL-001: Template ...'  # with colours when supported
    """
    if code:
        return f"{error_code(code)}: {message}"
    return message
