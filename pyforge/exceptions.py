"""PyForge error taxonomy.

Every failure the CLI reports is exactly one of the classes below, grouped by
``category`` for quick triage:

    io          file and directory failures
    project     project collisions, missing project markers
    config      unusable configuration files
    command     external commands that failed, were missing or timed out
    validation  bad project names, runtimes, templates
    network     connection and download failures
    parsing     malformed JSON/TOML/YAML
    generic     internal errors, cancellation, unfinished features

Each class fixes its own ``exit_code`` and ``recoverable`` flag. Classes with
bespoke guidance override ``hint()``; the rest are rendered with their
``__cause__`` chain (see ``pyforge.render``).

All inherit from PyForgeError for a single catch-all.
"""

from __future__ import annotations

import json
import tomllib
import urllib.error
from typing import Iterator

import yaml  # type: ignore[import-untyped]

# Upper bound on how many ``__cause__`` links are walked when rendering.
MAX_CAUSE_DEPTH = 16


class PyForgeError(Exception):
    """Base class for all PyForge errors."""

    category: str = "generic"
    exit_code: int = 1
    recoverable: bool = False
    examples: tuple[str, ...] = ()

    def __init__(self, text: str, *, source: BaseException | None = None) -> None:
        super().__init__(text)
        if source is not None:
            self.__cause__ = source

    def is_recoverable(self) -> bool:
        """Whether retrying the failed operation could succeed."""
        return self.recoverable

    def hint(self) -> str | None:
        """Actionable guidance shown in place of the cause chain, if any."""
        return None


# === I/O ERRORS ===

class FileError(PyForgeError):
    category = "io"
    exit_code = 2

    def __init__(self, message: str, *, source: BaseException | None = None) -> None:
        self.message = message
        super().__init__(f"File error: {message}", source=source)


class DirectoryNotFoundError(PyForgeError):
    category = "io"

    def __init__(self, path: str) -> None:
        self.path = path
        super().__init__(f"Directory '{path}' not found")


class PermissionDeniedError(PyForgeError):
    category = "io"
    exit_code = 126

    def __init__(self, path: str, reason: str) -> None:
        self.path = path
        self.reason = reason
        super().__init__(f"Cannot write to '{path}': {reason}")


# === PROJECT ERRORS ===

class ProjectAlreadyExistsError(PyForgeError):
    category = "project"

    def __init__(self, name: str, path: str) -> None:
        self.name = name
        self.path = path
        super().__init__(f"Project '{name}' already exists at '{path}'")

    def hint(self) -> str:
        return f"rm -rf {self.path} && pyforge init {self.name}"


class NotAPythonProjectError(PyForgeError):
    category = "project"
    exit_code = 65

    def __init__(self) -> None:
        super().__init__("No valid Python project detected in current directory")

    def hint(self) -> str:
        return "Run 'pyforge init <name>' to create a new project"


class InvalidConfigError(PyForgeError):
    category = "config"

    def __init__(self, file: str, *, source: BaseException) -> None:
        self.file = file
        super().__init__(f"Invalid configuration file: {file}", source=source)


# === COMMAND ERRORS ===

class CommandFailedError(PyForgeError):
    category = "command"

    def __init__(self, command: str, code: int) -> None:
        self.command = command
        self.code = code
        super().__init__(f"Command '{command}' failed with exit code {code}")


class CommandNotFoundError(PyForgeError):
    category = "command"
    exit_code = 127

    def __init__(self, command: str) -> None:
        self.command = command
        super().__init__(f"Command not found: '{command}'")

    def hint(self) -> str:
        return f"Install {self.command} or make sure it's in your PATH"


class CommandTimeoutError(PyForgeError):
    category = "command"
    recoverable = True

    def __init__(self, command: str, timeout: int) -> None:
        self.command = command
        self.timeout = timeout
        super().__init__(f"Timeout executing: '{command}' (expected {timeout}s)")


# === VALIDATION ERRORS ===

class InvalidProjectNameError(PyForgeError):
    category = "validation"
    exit_code = 64
    examples = ("my_project", "awesome-tool", "PyProject2024")

    def __init__(self, name: str, reason: str) -> None:
        self.name = name
        self.reason = reason
        super().__init__(f"Invalid project name: '{name}'. {reason}")

    def hint(self) -> str:
        return "Names must be valid Python package names"


class UnsupportedPythonVersionError(PyForgeError):
    category = "validation"

    def __init__(self, version: str) -> None:
        self.version = version
        super().__init__(f"Unsupported Python version: {version}")


class TemplateNotFoundError(PyForgeError):
    category = "validation"

    def __init__(self, template: str) -> None:
        self.template = template
        super().__init__(f"Template '{template}' not found")


# === NETWORK ERRORS ===

class NetworkError(PyForgeError):
    category = "network"
    recoverable = True

    def __init__(self, message: str, *, source: BaseException | None = None) -> None:
        self.message = message
        super().__init__(f"Network error: {message}", source=source)


class DownloadFailedError(PyForgeError):
    category = "network"

    def __init__(self, url: str, status: str) -> None:
        self.url = url
        self.status = status
        super().__init__(f"Failed to download from '{url}': {status}")


# === PARSING ERRORS ===

class ParseError(PyForgeError):
    category = "parsing"

    def __init__(self, file_type: str, message: str) -> None:
        self.file_type = file_type
        self.message = message
        super().__init__(f"Error parsing {file_type}: {message}")


class InvalidJsonError(PyForgeError):
    category = "parsing"

    def __init__(self, file: str, message: str) -> None:
        self.file = file
        self.message = message
        super().__init__(f"Invalid JSON in '{file}': {message}")


class InvalidTomlError(PyForgeError):
    category = "parsing"

    def __init__(self, file: str, message: str) -> None:
        self.file = file
        self.message = message
        super().__init__(f"Invalid TOML in '{file}': {message}")


# === GENERIC ERRORS ===

class InternalError(PyForgeError):
    def __init__(self, message: str, *, source: BaseException | None = None) -> None:
        self.message = message
        super().__init__(f"Internal error: {message}", source=source)


class UserCancelledError(PyForgeError):
    exit_code = 130  # SIGINT
    recoverable = True

    def __init__(self) -> None:
        super().__init__("Operation cancelled by user")


class FeatureNotImplementedError(PyForgeError):
    def __init__(self, feature: str) -> None:
        self.feature = feature
        super().__init__(f"Feature not implemented: {feature}")


# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------

def internal(message: str, *args: object) -> InternalError:
    """Build an InternalError, %-formatting ``message`` with ``args``."""
    if args:
        message = message % args
    return InternalError(message)


def ensure(condition: object, error: PyForgeError) -> None:
    """Raise ``error`` unless ``condition`` holds."""
    if not condition:
        raise error


def iter_causes(exc: BaseException) -> Iterator[BaseException]:
    """Walk the ``__cause__`` chain of ``exc``, nearest cause first.

    Stops after MAX_CAUSE_DEPTH links so a cyclic chain cannot loop forever.
    """
    cause = exc.__cause__
    depth = 0
    while cause is not None and depth < MAX_CAUSE_DEPTH:
        yield cause
        cause = cause.__cause__
        depth += 1


def from_exception(exc: BaseException) -> PyForgeError:
    """Map a lower-level exception onto the closest PyForgeError."""
    if isinstance(exc, PyForgeError):
        return exc
    if isinstance(exc, FileNotFoundError):
        return FileError("File or directory not found", source=exc)
    if isinstance(exc, PermissionError):
        path = exc.filename if exc.filename is not None else "unknown"
        return PermissionDeniedError(str(path), "Permission denied")
    # ConnectionError and URLError are OSErrors too; check them first.
    if isinstance(exc, (ConnectionError, urllib.error.URLError)):
        return NetworkError("HTTP connection error", source=exc)
    if isinstance(exc, OSError):
        return FileError("I/O error", source=exc)
    if isinstance(exc, json.JSONDecodeError):
        return ParseError("JSON", str(exc))
    if isinstance(exc, tomllib.TOMLDecodeError):
        return ParseError("TOML", str(exc))
    if isinstance(exc, yaml.YAMLError):
        return ParseError("YAML", str(exc))
    return InternalError(str(exc) or type(exc).__name__, source=exc)
