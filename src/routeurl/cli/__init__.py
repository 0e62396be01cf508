"""routeurl CLI — inspect URLs and try route patterns from the shell.

Entry point registered as ``routeurl`` in ``pyproject.toml``::

    [project.scripts]
    routeurl = "routeurl.cli:main"
"""

import argparse
import sys


def main(argv: list[str] | None = None) -> None:
    """CLI entry point for the ``routeurl`` command."""
    parser = argparse.ArgumentParser(
        prog="routeurl",
        description="routeurl — route patterns, URL parsing and parameter extraction.",
    )
    subparsers = parser.add_subparsers(dest="command")

    # -- routeurl parse ---------------------------------------------------
    parse_parser = subparsers.add_parser("parse", help="Split a URL into its parts")
    parse_parser.add_argument("url", help="URL to parse")

    # -- routeurl match ---------------------------------------------------
    match_parser = subparsers.add_parser("match", help="Match a path against a route pattern")
    match_parser.add_argument("pattern", help="Route pattern (e.g. /users/:id)")
    match_parser.add_argument("path", help="Path to match (may carry ?query and #hash)")
    match_parser.add_argument(
        "--sensitive",
        action="store_true",
        help="Match literal segments case-sensitively",
    )
    match_parser.add_argument(
        "--strict",
        action="store_true",
        help="Do not accept an optional trailing slash",
    )
    match_parser.add_argument(
        "--prefix",
        action="store_true",
        help="Only require the pattern to match a prefix of the path",
    )

    args = parser.parse_args(argv)

    if args.command is None:
        parser.print_help()
        sys.exit(0)

    if args.command == "parse":
        from routeurl.cli._inspect import run_parse

        run_parse(args)
    elif args.command == "match":
        from routeurl.cli._inspect import run_match

        run_match(args)
