"""CLI with subcommands for PyForge."""

from __future__ import annotations

import argparse
import sys
import textwrap
from pathlib import Path
from typing import NoReturn

from . import __version__
from .config import ForgeConfig, load_config, resolve_config_path
from .exceptions import (
    FeatureNotImplementedError,
    FileError,
    InternalError,
    ProjectAlreadyExistsError,
    PyForgeError,
    UserCancelledError,
    ensure,
    from_exception,
)
from .log import configure_logging, get_logger, new_run_id, set_verbose
from .render import display_error
from .style import colors_enabled, paint
from .validation import ensure_python_project, validate_project_name, validate_template

_log = get_logger("cli")

BANNER = r"""
    ____        ______
   / __ \__  __/ ____/___  _________ ____
  / /_/ / / / / /_  / __ \/ ___/ __ `/ _ \
 / ____/ /_/ / __/ / /_/ / /  / /_/ /  __/
/_/    \__, /_/    \____/_/   \__, /\___/
      /____/                /____/
"""


class _ArgumentParser(argparse.ArgumentParser):
    """ArgumentParser that raises InternalError instead of exiting on bad usage."""

    def error(self, message: str) -> NoReturn:
        raise InternalError(f"Error parsing arguments: {self.prog}: {message}")


def print_welcome() -> None:
    color = colors_enabled(sys.stdout)
    print()
    print(paint(BANNER, "red", "bold", enabled=color))
    print("Welcome to PyForge!")
    print(
        "PyForge is a blazing fast, flexible, and user-friendly tool "
        "for building Python projects."
    )
    print(f"Get started by running '{paint('pyforge --help', 'yellow', 'bold', enabled=color)}'.")
    print("Happy coding! 🚀")


def create_project_structure(target: Path) -> None:
    """Create the project root directory. Templates are not rendered yet."""
    target.mkdir()


def cmd_init(args: argparse.Namespace, config: ForgeConfig) -> int:
    """Validate the name and template, then create the project directory."""
    name: str = args.name
    validate_project_name(name)

    template = args.template or config.template
    validate_template(template)

    ensure(
        not Path(name).exists(),
        ProjectAlreadyExistsError(name=name, path=name),
    )

    color = colors_enabled(sys.stdout)
    print(f"{paint('🚀', 'green', enabled=color)} Creating project: {paint(name, 'cyan', enabled=color)}")
    _log.debug("init: name=%s template=%s python=%s", name, template, config.python_version)

    try:
        create_project_structure(Path(name))
    except PermissionError as exc:
        raise from_exception(exc) from exc
    except OSError as exc:
        raise FileError("Could not create project") from exc

    print(
        f"{paint('✅', 'green', enabled=color)} Project "
        f"'{paint(name, 'green', enabled=color)}' created successfully!"
    )
    return 0


def cmd_build(args: argparse.Namespace, config: ForgeConfig) -> int:
    """Build the project in the current directory."""
    ensure_python_project()
    raise FeatureNotImplementedError("build")


def build_parser() -> argparse.ArgumentParser:
    parser = _ArgumentParser(
        prog="pyforge",
        description="CLI application for managing python projects",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog=textwrap.dedent(
            """\
            Examples:
              pyforge init my_project
              pyforge init awesome-tool --template cli
              pyforge -f pyforge.toml init my_project
              pyforge build
            """
        ),
    )
    parser.add_argument(
        "--version",
        action="version",
        version=f"%(prog)s {__version__}",
    )
    parser.add_argument("-v", "--verbose", action="store_true", help="verbose mode")
    parser.add_argument("-f", "--file", default=None, help="input file (pyforge settings)")
    subparsers = parser.add_subparsers(dest="command")

    init_parser = subparsers.add_parser("init", help="Init a new project")
    init_parser.add_argument("name")
    init_parser.add_argument("--template", default=None)

    subparsers.add_parser("build", help="Build the current project")

    return parser


def _run(argv: list[str] | None) -> int:
    args = build_parser().parse_args(argv)

    # Initialize structured logging for this invocation
    configure_logging(run_id=new_run_id(), command=args.command or "", verbose=args.verbose)
    _log.debug("invocation: %s", args.command or "<none>")

    config_path = resolve_config_path(args.file)
    config = load_config(config_path) if config_path is not None else ForgeConfig()
    if config.verbose and not args.verbose:
        set_verbose()

    if args.command is None:
        print_welcome()
        return 0

    commands = {
        "init": cmd_init,
        "build": cmd_build,
    }
    return commands[args.command](args, config)


def main(argv: list[str] | None = None) -> int:
    try:
        return _run(argv)
    except PyForgeError as exc:
        error = exc
    except KeyboardInterrupt:
        error = UserCancelledError()
    except Exception as exc:  # noqa: BLE001
        error = from_exception(exc)

    _log.debug(
        "failed: %s",
        type(error).__name__,
        extra={"category": error.category, "exit_code": error.exit_code},
    )
    display_error(error)
    return error.exit_code


if __name__ == "__main__":
    sys.exit(main())
