"""Command line runner: ``azalea program.az`` or ``azalea -e "say 1"``."""

from __future__ import annotations

import argparse
import sys
from pathlib import Path
from typing import List, Optional

from . import __version__
from .config import LOG_LEVELS, InterpreterConfig, load_config
from .errors import ConfigError
from .runtime import Interpreter


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="azalea",
        description="Run an Azalea program and print its result",
    )
    parser.add_argument("--version", action="version", version=f"%(prog)s {__version__}")

    source = parser.add_mutually_exclusive_group(required=True)
    source.add_argument("file", nargs="?", help="Path to an Azalea source file")
    source.add_argument("-e", "--eval", dest="code", help="Program text to run")

    parser.add_argument(
        '--config',
        default=None,
        help='Path to an azalea.toml or .azalearc file',
    )
    parser.add_argument(
        '--workspace',
        default=None,
        help='Directory searched for a config file (defaults to the current directory)',
    )
    parser.add_argument(
        '--log-level',
        choices=sorted(LOG_LEVELS),
        default=None,
        help='Override the configured log level (or set AZALEA_LOG_LEVEL)',
    )
    parser.add_argument(
        '--module',
        action='append',
        dest='modules',
        default=None,
        help='Register a reference capability module; may be repeated',
    )
    return parser


def main(argv: Optional[List[str]] = None) -> int:
    """
    Run a program and print its final value unless it is ``void``.

    Returns the process exit status: ``1`` for an unreadable file or an
    invalid configuration, ``0`` otherwise.  Program mistakes never fail
    the run.
    """
    args = build_parser().parse_args(argv)

    workspace = Path(args.workspace).resolve() if args.workspace else Path.cwd()
    try:
        config = load_config(workspace, Path(args.config) if args.config else None)
        updates = {}
        if args.log_level:
            updates["log_level"] = args.log_level
        if args.modules:
            updates["modules"] = list(dict.fromkeys([*config.modules, *args.modules]))
        if updates:
            config = InterpreterConfig.model_validate({**config.model_dump(), **updates})
    except ConfigError as exc:
        print(f"Error: {exc.format()}", file=sys.stderr)
        return 1
    except ValueError as exc:
        print(f"Error: {exc}", file=sys.stderr)
        return 1

    if args.code is not None:
        source = args.code
    else:
        try:
            source = Path(args.file).read_text(encoding="utf-8")
        except OSError:
            print(f"Error: Cannot open file {args.file}", file=sys.stderr)
            return 1

    interpreter = Interpreter.from_config(config)
    result = interpreter.execute(source)
    if not result.is_void:
        print(result.to_string())
    return 0


if __name__ == "__main__":  # pragma: no cover
    sys.exit(main())
