"""Optional PyForge settings file.

Passed with ``--file`` or the PYFORGE_CONFIG environment variable. Accepted
formats, picked by extension:

    pyforge.toml         python_version = "3.11"
    pyforge.json         {"template": "cli"}
    pyforge.yaml/.yml    verbose: true

Unknown keys and wrongly typed values are rejected rather than ignored.
"""

from __future__ import annotations

import json
import os
import tomllib
from dataclasses import dataclass
from pathlib import Path
from typing import Any

import yaml  # type: ignore[import-untyped]

from .exceptions import (
    InvalidConfigError,
    InvalidJsonError,
    InvalidTomlError,
    ParseError,
    from_exception,
)
from .log import get_logger
from .validation import validate_python_version, validate_template

_log = get_logger("config")

CONFIG_ENV_VAR = "PYFORGE_CONFIG"

_FIELD_TYPES: dict[str, type] = {
    "python_version": str,
    "template": str,
    "verbose": bool,
}


@dataclass(frozen=True)
class ForgeConfig:
    python_version: str | None = None
    template: str = "default"
    verbose: bool = False

    @classmethod
    def from_dict(cls, d: dict[str, Any]) -> ForgeConfig:
        """Build a config from a parsed document; raises ValueError on bad keys or types."""
        unknown = sorted(set(d) - set(_FIELD_TYPES))
        if unknown:
            raise ValueError(f"unknown keys: {', '.join(unknown)}")
        for key, value in d.items():
            expected = _FIELD_TYPES[key]
            if not isinstance(value, expected):
                raise ValueError(
                    f"'{key}' must be {expected.__name__}, got {type(value).__name__}"
                )
        return cls(**d)


def resolve_config_path(cli_value: str | None) -> Path | None:
    """``--file`` wins over PYFORGE_CONFIG; neither means no config file."""
    if cli_value:
        return Path(cli_value)
    env_value = os.getenv(CONFIG_ENV_VAR, "").strip()
    return Path(env_value) if env_value else None


def _read_document(path: Path) -> Any:
    try:
        text = path.read_text(encoding="utf-8")
    except UnicodeDecodeError as exc:
        raise InvalidConfigError(str(path), source=exc) from exc
    except OSError as exc:
        raise from_exception(exc) from exc

    suffix = path.suffix.lower()
    if suffix == ".toml":
        try:
            return tomllib.loads(text)
        except tomllib.TOMLDecodeError as exc:
            raise InvalidTomlError(str(path), str(exc)) from exc
    if suffix == ".json":
        try:
            return json.loads(text)
        except json.JSONDecodeError as exc:
            raise InvalidJsonError(str(path), str(exc)) from exc
    if suffix in {".yaml", ".yml"}:
        try:
            document = yaml.safe_load(text)
            # An empty file loads as None; any other falsy document is kept as is.
            return {} if document is None else document
        except yaml.YAMLError as exc:
            raise ParseError("YAML", str(exc)) from exc

    raise InvalidConfigError(
        str(path),
        source=ValueError(f"unsupported config format '{suffix or path.name}'"),
    )


def load_config(path: Path) -> ForgeConfig:
    """Read and validate the settings file at ``path``."""
    document = _read_document(path)
    if not isinstance(document, dict):
        raise InvalidConfigError(
            str(path),
            source=ValueError(f"expected a table/mapping, got {type(document).__name__}"),
        )

    try:
        config = ForgeConfig.from_dict(document)
    except ValueError as exc:
        raise InvalidConfigError(str(path), source=exc) from exc

    if config.python_version is not None:
        validate_python_version(config.python_version)
    validate_template(config.template)

    _log.debug("config loaded from %s: %s", path, config)
    return config
