"""ANSI styling for terminal output.

Nothing outside this module knows about escape codes; callers ask for named
styles and pass ``enabled`` so plain output stays byte-for-byte plain.
"""

from __future__ import annotations

import os
from typing import TextIO

RESET = "\x1b[0m"

_CODES = {
    "bold": "1",
    "red": "31",
    "green": "32",
    "yellow": "33",
    "cyan": "36",
    "bright_black": "90",
}


def colors_enabled(stream: TextIO) -> bool:
    """True when ``stream`` is a terminal and NO_COLOR is not set."""
    if os.getenv("NO_COLOR"):
        return False
    isatty = getattr(stream, "isatty", None)
    return bool(isatty and isatty())


def paint(text: str, *styles: str, enabled: bool = True) -> str:
    """Wrap ``text`` in the SGR codes for ``styles`` (e.g. "red", "bold")."""
    if not enabled or not styles:
        return text
    codes = ";".join(_CODES[name] for name in styles)
    return f"\x1b[{codes}m{text}{RESET}"
