"""User-facing rendering of PyForgeError values.

``format_error`` builds the lines; ``display_error`` writes them to stderr.
Neither exits the process: cli.main() owns the exit code.
"""

from __future__ import annotations

import sys
from typing import TextIO

from .exceptions import PyForgeError, iter_causes
from .style import colors_enabled, paint

ERROR_PREFIX = "❌ Error:"
SUGGESTION_PREFIX = "💡"


def format_error(error: PyForgeError, *, color: bool = False) -> list[str]:
    """Render ``error`` as terminal lines, colored when ``color`` is set."""
    lines = [f"{paint(ERROR_PREFIX, 'red', 'bold', enabled=color)} {error}"]

    hint = error.hint()
    if hint is not None:
        label = paint("Suggestion", "yellow", enabled=color)
        lines.append(f"{SUGGESTION_PREFIX} {label}: {paint(hint, 'cyan', enabled=color)}")
        if error.examples:
            label = paint("Valid examples:", "green", enabled=color)
            lines.append(f"   {label} {', '.join(error.examples)}")
        return lines

    causes = list(iter_causes(error))
    if causes:
        lines.append(paint("Caused by:", "yellow", enabled=color))
        for cause in causes:
            lines.append(f"  - {paint(str(cause), 'bright_black', enabled=color)}")
    return lines


def display_error(error: PyForgeError, stream: TextIO | None = None) -> None:
    """Write the rendering of ``error`` to ``stream`` (default: stderr)."""
    out = stream if stream is not None else sys.stderr
    for line in format_error(error, color=colors_enabled(out)):
        print(line, file=out)
