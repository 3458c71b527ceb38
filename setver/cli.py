"""
setver command line.

Usage:
    setver canonicalize <version>       Print the canonical form
    setver compare <a> <b>              Print equal, less, greater or incomparable
    setver natural <n>                  Print the version of natural number n
    setver integralternative <version>  Print direct and canonical integralternatives
"""

import argparse
import logging
import sys
from typing import List, Optional

from . import __version__
from .parsing import SetVerParseError, parse_version
from .versioning import (
    from_natural,
    partial_compare,
    string_to_integralternative_digits,
    to_integralternative_digits,
)

logger = logging.getLogger("setver.cli")


def cmd_canonicalize(args: argparse.Namespace) -> int:
    print(parse_version(args.version))
    return 0


def cmd_compare(args: argparse.Namespace) -> int:
    print(partial_compare(parse_version(args.a), parse_version(args.b)))
    return 0


def cmd_natural(args: argparse.Namespace) -> int:
    if args.number < 0:
        print("error: number must not be negative", file=sys.stderr)
        return 2

    print(from_natural(args.number))
    return 0


def cmd_integralternative(args: argparse.Namespace) -> int:
    canonical = parse_version(args.version)
    direct = args.version
    canonical_str = str(canonical)

    original_width = max(len(direct), len("direct"))
    canonical_width = max(len(canonical_str), len("canonicalized"))

    rows = [
        ("", "direct", "canonicalized"),
        ("set representation", direct, canonical_str),
        (
            "integralternative",
            string_to_integralternative_digits(direct),
            to_integralternative_digits(canonical),
        ),
    ]
    for label, left, right in rows:
        print(f"{label:<19} {left:>{original_width}} {right:>{canonical_width}}")

    return 0


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="setver",
        description="Parse, canonicalize and compare SetVer versions.",
    )
    parser.add_argument("--version", action="version", version=f"%(prog)s {__version__}")
    parser.add_argument("-v", "--verbose", action="store_true", help="Enable debug logging")

    subparsers = parser.add_subparsers(dest="command", required=True)

    p = subparsers.add_parser("canonicalize", help="Print the canonical form of a version")
    p.add_argument("version")
    p.set_defaults(func=cmd_canonicalize)

    p = subparsers.add_parser("compare", help="Compare two versions by the subset relation")
    p.add_argument("a")
    p.add_argument("b")
    p.set_defaults(func=cmd_compare)

    p = subparsers.add_parser("natural", help="Print the version of a natural number")
    p.add_argument("number", type=int)
    p.set_defaults(func=cmd_natural)

    p = subparsers.add_parser("integralternative", help="Print integralternative representations")
    p.add_argument("version")
    p.set_defaults(func=cmd_integralternative)

    return parser


def main(argv: Optional[List[str]] = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)

    if args.verbose:
        logging.basicConfig(level="DEBUG")

    try:
        return args.func(args)
    except SetVerParseError as e:
        logger.debug(f"Command {args.command} failed", exc_info=True)
        print(f"error: {e}", file=sys.stderr)
        return 2


if __name__ == "__main__":
    sys.exit(main())
