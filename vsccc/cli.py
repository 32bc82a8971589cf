# SPDX-License-Identifier: MIT
"""Command-line interface for vsccc."""

from __future__ import annotations

import argparse
import logging
import sys
from collections.abc import Sequence
from pathlib import Path

from vsccc.config import parse_property_string, seed_macros
from vsccc.core.errors import UsageError, VscccError
from vsccc.core.loader import Build, load_build
from vsccc.generators.compile_commands import CompileCommandsGenerator

# Set up logging
logger = logging.getLogger("vsccc")

# MSBuild-style spellings of --property, e.g. -p:Configuration=Release
_MSBUILD_PROPERTY_PREFIXES = ("--property:", "-property:", "/property:", "-p:", "/p:")


def setup_logging(verbose: bool = False, debug: bool = False) -> None:
    """Configure logging based on verbosity level."""
    if debug:
        level = logging.DEBUG
        fmt = "%(levelname)s: %(name)s: %(message)s"
    elif verbose:
        level = logging.INFO
        fmt = "%(levelname)s: %(message)s"
    else:
        level = logging.WARNING
        fmt = "%(levelname)s: %(message)s"

    logging.basicConfig(level=level, format=fmt)


def normalize_args(args: Sequence[str]) -> list[str]:
    """Rewrite MSBuild-style ``-p:N=V`` options as ``--property N=V``."""
    result: list[str] = []
    for arg in args:
        for prefix in _MSBUILD_PROPERTY_PREFIXES:
            if arg.lower().startswith(prefix):
                result.extend(["--property", arg[len(prefix) :]])
                break
        else:
            result.append(arg)
    return result


def log_build(build: Build) -> None:
    """Log each project's macros and items (shown with --verbose)."""
    for project in build.projects:
        logger.info("%s", project.path)
        for name, value in project.macros.items():
            logger.info("    %s: %s", name, value)
        for item in project.items:
            logger.info("    %s: %s", item.type, item.full_path)
            for name, value in item.properties.items():
                logger.info("        %s: %s", name, value)


def cmd_generate(args: argparse.Namespace) -> int:
    """Load the solution or project and write compile_commands.json."""
    setup_logging(args.verbose, args.debug)

    try:
        properties = [parse_property_string(p) for p in args.property]
        build = load_build(args.path, macros=seed_macros(properties))
        if logger.isEnabledFor(logging.INFO):
            log_build(build)

        output_dir = Path(args.output_dir) if args.output_dir else None
        output_file = CompileCommandsGenerator().generate(build, output_dir)
    except VscccError as e:
        logger.error("%s", e)
        return e.exit_code

    logger.info("Generated %s", output_file)
    return 0


def main(argv: Sequence[str] | None = None) -> int:
    """Main entry point for the vsccc CLI."""
    parser = argparse.ArgumentParser(
        prog="vsccc",
        description="Generate compile_commands.json from a Visual Studio "
        "solution or C++ project.",
        epilog="Without a path, the solution or project in the current "
        "directory is used.",
    )
    from vsccc import __version__

    parser.add_argument(
        "--version", action="version", version=f"%(prog)s {__version__}"
    )
    parser.add_argument("-v", "--verbose", action="store_true", help="Verbose output")
    parser.add_argument("--debug", action="store_true", help="Debug output")
    parser.add_argument(
        "-p",
        "--property",
        action="append",
        default=[],
        metavar="N=V[;N=V]",
        help="Initial property values (also -p:N=V)",
    )
    parser.add_argument(
        "-o",
        "--output-dir",
        metavar="DIR",
        help="Directory for compile_commands.json (default: solution directory)",
    )
    parser.add_argument(
        "path", nargs="?", help="Solution, project, or directory containing one"
    )

    args = parser.parse_args(normalize_args(sys.argv[1:] if argv is None else argv))
    return cmd_generate(args)


if __name__ == "__main__":
    sys.exit(main())
