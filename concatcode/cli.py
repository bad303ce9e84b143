"""CLI entrypoint for concatcode."""

from __future__ import annotations

import argparse
import sys
from pathlib import Path

from . import __version__
from .concatenator import Concatenator, OutputSetupError
from .config import ConcatConfig, ConfigError, load_config
from .logging import configure_logging
from .modules import NestedManifestError

_USAGE_HINT = "Usage: concatcode <directory> [<directory> ...] --output <output_file>\n"


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="concatcode",
        description=(
            "Concatenate source files from one or more directory trees into a single "
            "file annotated with module and file markers."
        ),
    )
    parser.add_argument(
        "directories",
        nargs="+",
        metavar="directory",
        help="One or more directory paths to scan for source files.",
    )
    parser.add_argument(
        "-o",
        "--output",
        required=True,
        help="The absolute or relative path for the output file.",
    )
    parser.add_argument(
        "--config",
        help="Path to a .concatcode.yml file (defaults to the one in the current directory).",
    )
    parser.add_argument(
        "--exclude",
        action="append",
        default=[],
        metavar="NAME",
        help="File name or glob to leave out of the output. May be repeated.",
    )
    parser.add_argument(
        "--strict-packages",
        action="store_true",
        help="Fail when a package manifest is nested inside another package.",
    )
    parser.add_argument(
        "--log-file",
        help="Also write log output to this file.",
    )
    parser.add_argument(
        "-v",
        "--verbose",
        action="store_true",
        default=False,
        help="Increase log verbosity for troubleshooting.",
    )
    parser.add_argument("--version", action="version", version=f"%(prog)s {__version__}")
    return parser


def _load_config(parser: argparse.ArgumentParser, args: argparse.Namespace) -> ConcatConfig:
    if args.config:
        config_path = Path(args.config).expanduser()
        if not config_path.exists():
            parser.exit(1, f"Error: config file not found: {config_path}\n")
    else:
        config_path = Path.cwd()

    try:
        config = load_config(config_path)
    except ConfigError as exc:
        parser.exit(1, f"Error: {exc}\n")

    config.exclude_files.extend(args.exclude)
    if args.strict_packages:
        config.strict_packages = True
    return config


def main(argv: list[str] | None = None) -> None:
    """CLI entrypoint for concatcode."""
    parser = _build_parser()
    args = parser.parse_args(argv)

    log_file = Path(args.log_file) if args.log_file else None
    configure_logging(verbose=bool(args.verbose), log_file=log_file)

    config = _load_config(parser, args)
    concatenator = Concatenator(config)

    try:
        result = concatenator.run(args.directories, args.output)
    except OutputSetupError as exc:
        parser.exit(1, f"Error: {exc}\n{_USAGE_HINT}")
    except NestedManifestError as exc:
        parser.exit(1, f"Error: {exc}\nRun without --strict-packages to allow nested packages.\n")

    print(f"Concatenation complete. Output written to {result.output_path}")


if __name__ == "__main__":
    main(sys.argv[1:])
