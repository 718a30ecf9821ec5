"""Precondition checks shared by the CLI commands.

Each validator returns None on success and raises a PyForgeError subclass on
failure. Only ``ensure_python_project`` touches the filesystem, and only to
test whether marker files exist.
"""

from __future__ import annotations

import re
from pathlib import Path

from .exceptions import (
    InvalidProjectNameError,
    NotAPythonProjectError,
    TemplateNotFoundError,
    UnsupportedPythonVersionError,
)
from .log import get_logger

_log = get_logger("validation")

MAX_PROJECT_NAME_LENGTH = 50
PROJECT_NAME_PATTERN = re.compile(r"[a-zA-Z][a-zA-Z0-9_-]*")
RESERVED_NAMES = frozenset({"test", "tests", "lib", "src", "build", "dist"})

PROJECT_MARKERS = ("setup.py", "pyproject.toml", "requirements.txt", "Pipfile")
SUPPORTED_PYTHON_VERSIONS = ("3.8", "3.9", "3.10", "3.11", "3.12")
BUILTIN_TEMPLATES = ("default", "cli", "library")


def validate_project_name(name: str) -> None:
    """Check that ``name`` can be used as a new project's name.

    Checks run in order and the first failure wins: empty, too long, bad
    characters, reserved word (case-insensitive).
    """
    if not name:
        raise InvalidProjectNameError(name, "Name cannot be empty")

    if len(name) > MAX_PROJECT_NAME_LENGTH:
        raise InvalidProjectNameError(
            name, f"Name is too long (maximum {MAX_PROJECT_NAME_LENGTH} characters)"
        )

    if not PROJECT_NAME_PATTERN.fullmatch(name):
        raise InvalidProjectNameError(
            name,
            "Only letters, numbers, hyphens and underscores. Must start with letter",
        )

    if name.lower() in RESERVED_NAMES:
        raise InvalidProjectNameError(name, f"'{name}' is a reserved word")

    _log.debug("project name ok: %s", name)


def ensure_python_project(directory: Path | None = None) -> None:
    """Require at least one project marker file in ``directory`` (default: cwd)."""
    root = directory if directory is not None else Path.cwd()
    found = [marker for marker in PROJECT_MARKERS if (root / marker).exists()]
    if not found:
        raise NotAPythonProjectError()
    _log.debug("python project markers in %s: %s", root, ", ".join(found))


def validate_python_version(version: str) -> None:
    """Accept any version starting with a supported major.minor, e.g. ``3.11.4``."""
    if not any(version.startswith(v) for v in SUPPORTED_PYTHON_VERSIONS):
        raise UnsupportedPythonVersionError(version)


def validate_template(template: str) -> None:
    if template not in BUILTIN_TEMPLATES:
        raise TemplateNotFoundError(template)
