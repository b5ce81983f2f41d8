"""ANSI colouring for compact error diagnostics.

Colours are only emitted when stdout is a TTY, unless ``FORCE_COLOR`` is set.
``NO_COLOR`` (https://no-color.org/) turns them off.
"""

from __future__ import annotations

import os
import re
import sys
from typing import Literal

_ANSI = {
    "reset": "\033[0m",
    "bold": "\033[1m",
    "dim": "\033[2m",
    "cyan": "\033[36m",
    "green": "\033[32m",
    "bright_red": "\033[91m",
}

Style = Literal["bold", "dim", "cyan", "green", "bright_red"]

_ANSI_ESCAPE = re.compile(r"\x1B(?:[@-Z\\-_]|\[[0-?]*[ -/]*[@-~])")


def supports_color() -> bool:
    """Return True if diagnostics should be coloured.

    Evaluated on every call so tests and long-running processes can flip
    ``NO_COLOR``/``FORCE_COLOR`` at runtime.
    """
    if os.environ.get("FORCE_COLOR"):
        return True
    if os.environ.get("NO_COLOR"):
        return False
    isatty = getattr(sys.stdout, "isatty", None)
    return bool(isatty and isatty())


def colorize(text: str, *styles: Style) -> str:
    """Wrap ``text`` in the given styles, or return it untouched."""
    if not styles or not supports_color():
        return text
    prefix = "".join(_ANSI[style] for style in styles)
    return f"{prefix}{text}{_ANSI['reset']}"


def strip_colors(text: str) -> str:
    """Remove ANSI escape sequences from ``text``."""
    return _ANSI_ESCAPE.sub("", text)


def error_code(text: str) -> str:
    return colorize(text, "bright_red", "bold")


def location(text: str) -> str:
    return colorize(text, "cyan")


def hint(text: str) -> str:
    return colorize(text, "green")


def dim_text(text: str) -> str:
    return colorize(text, "dim")


def format_error_header(code: str | None, message: str) -> str:
    """Prefix ``message`` with a highlighted error code, if there is one.

    Example:
        >>> format_error_header("ARW-RUN-002", "Iteration limit exceeded")
        'ARW-RUN-002: Iteration limit exceeded'  # without colour support
    """
    if code:
        return f"{error_code(code)}: {message}"
    return message
