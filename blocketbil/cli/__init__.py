"""Command-line interface for the ``blocketbil`` tool."""

from __future__ import annotations

import argparse
import logging
import sys
from typing import Optional, Sequence

from pydantic import ValidationError

from ..errors import BlocketError
from . import search


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="blocketbil",
        description="Retrieve car ads from www.blocket.se and write them to stdout or a CSV file.",
    )
    search.add_arguments(parser)
    parser.add_argument(
        "-v",
        "--verbose",
        action="store_true",
        help="Log requests and other debug details to stderr.",
    )
    return parser


def configure_logging(verbose: bool = False) -> None:
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.INFO,
        format="%(levelname)s: %(message)s",
        stream=sys.stderr,
    )


def _one_line(exc: BaseException) -> str:
    return "; ".join(line.strip() for line in str(exc).splitlines() if line.strip())


def run_cli(argv: Optional[Sequence[str]] = None) -> int:
    parser = build_parser()
    raw_args = list(sys.argv[1:] if argv is None else argv)
    if not raw_args:
        parser.print_help()
        return 0

    args = parser.parse_args(raw_args)
    if not search.has_valid_selection(args):
        parser.print_help()
        return 0

    configure_logging(args.verbose)
    try:
        result = args.func(args)
    except (BlocketError, ValidationError, OSError) as exc:
        print(f"error: {_one_line(exc)}", file=sys.stderr)
        return 1

    if isinstance(result, int):
        return result
    return 0


def main(argv: Optional[Sequence[str]] = None) -> int:
    """Entry-point compatible with ``python -m blocketbil`` and console scripts."""

    exit_code = run_cli(argv)
    return exit_code


if __name__ == "__main__":  # pragma: no cover
    sys.exit(main())
