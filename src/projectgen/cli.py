"""Command line interface for the project generator."""

from __future__ import annotations

import argparse
import logging
import sys
from pathlib import Path
from typing import NoReturn, Sequence

from .config import GeneratorConfig, GeneratorSettings
from .errors import LayoutError
from .generator import ProjectGenerator
from .layouts import TemplateVariant, load_layout
from .status import StatusCode

LOGGER = logging.getLogger(__name__)

_LOG_FORMAT = "%(levelname)s %(name)s: %(message)s"


class _UsageError(Exception):
    pass


class _ArgumentParser(argparse.ArgumentParser):
    def error(self, message: str) -> NoReturn:
        raise _UsageError(message)


def build_parser(settings: GeneratorSettings | None = None) -> argparse.ArgumentParser:
    settings = settings or GeneratorSettings()
    parser = _ArgumentParser(
        prog="projectgen",
        description="Create a GitHub repository from a project template, clone it and rename it.",
        add_help=False,
    )
    parser.add_argument("name", help="Name of the new project")
    parser.add_argument(
        "--dir",
        dest="directory",
        type=Path,
        metavar="PATH",
        help=f"Set the local directory of the project (default is {settings.default_directory})",
    )
    visibility = parser.add_mutually_exclusive_group()
    visibility.add_argument(
        "--public",
        dest="public",
        action="store_true",
        help="Make the project's repository public",
    )
    visibility.add_argument(
        "--private",
        dest="public",
        action="store_false",
        help="Make the project's repository private (default)",
    )
    parser.add_argument(
        "--olc",
        action="store_true",
        help=f"Use {TemplateVariant.ALTERNATE.repository} instead of {TemplateVariant.STANDARD.repository}",
    )
    parser.add_argument("--layout", type=Path, metavar="FILE", help="JSON file describing a custom template layout")
    parser.add_argument("--dry-run", action="store_true", help="Print external commands instead of running them")
    parser.add_argument(
        "--no-open",
        dest="open_solution",
        action="store_false",
        help="Don't open the generated solution",
    )
    parser.add_argument(
        "--cleanup-on-failure",
        action="store_true",
        help="Delete the partially generated project directory when a step fails",
    )
    parser.add_argument("-v", "--verbose", action="count", default=0, help="Increase log verbosity")
    parser.set_defaults(public=False)
    return parser


def _configure_logging(verbosity: int) -> None:
    level = logging.WARNING
    if verbosity == 1:
        level = logging.INFO
    elif verbosity > 1:
        level = logging.DEBUG
    logging.basicConfig(level=level, format=_LOG_FORMAT)


def _report(status: StatusCode) -> int:
    if status.is_error:
        print(status.message, file=sys.stderr)
    return int(status)


def _show_help(parser: argparse.ArgumentParser) -> int:
    parser.print_help()
    return int(StatusCode.HELP_SHOWN)


def _directory_value_missing(arguments: Sequence[str]) -> bool:
    for index, argument in enumerate(arguments):
        if argument != "--dir":
            continue
        if index + 1 == len(arguments) or arguments[index + 1].startswith("-"):
            return True
    return False


def _handle_generate(args: argparse.Namespace, settings: GeneratorSettings) -> int:
    variant = TemplateVariant.ALTERNATE if args.olc else TemplateVariant.STANDARD
    layout = None
    if args.layout is not None:
        try:
            layout = load_layout(args.layout)
        except LayoutError as exc:
            LOGGER.error("%s", exc)
            return _report(exc.status)

    config = GeneratorConfig.create(
        args.name,
        directory=args.directory,
        settings=settings,
        variant=variant,
        layout=layout,
        public=args.public,
        dry_run=args.dry_run,
        open_solution=args.open_solution,
        cleanup_on_failure=args.cleanup_on_failure,
    )
    status = ProjectGenerator(config).generate()
    if status is StatusCode.SUCCESS:
        print(f"Project created at {config.project_directory}")
    return _report(status)


def main(argv: Sequence[str] | None = None) -> int:
    arguments = list(sys.argv[1:] if argv is None else argv)
    settings = GeneratorSettings()
    parser = build_parser(settings)

    if not arguments or "--help" in arguments or "-h" in arguments:
        return _show_help(parser)
    if _directory_value_missing(arguments):
        return _report(StatusCode.DIRECTORY_ARG_MISSING)

    try:
        args = parser.parse_args(arguments)
    except _UsageError as exc:
        print(f"{parser.prog}: {exc}", file=sys.stderr)
        return _show_help(parser)

    if not args.name.strip():
        return _show_help(parser)

    _configure_logging(args.verbose)
    return _handle_generate(args, settings)


if __name__ == "__main__":  # pragma: no cover
    raise SystemExit(main())
