"""``routeurl parse`` and ``routeurl match`` — print results as JSON."""

import argparse
import json
import sys

from routeurl.config import CompileOptions
from routeurl.errors import NoMatch, PatternError
from routeurl.routing.pattern import UrlPattern
from routeurl.url.parse import parse


def run_parse(args: argparse.Namespace) -> None:
    """Print the ``UrlRecord`` of ``args.url`` as a JSON object."""
    print(json.dumps(parse(args.url).as_dict(), indent=2))


def run_match(args: argparse.Namespace) -> None:
    """Match ``args.path`` against ``args.pattern`` and print its params.

    Exits with status 1 when the pattern is invalid or does not match.
    """
    options = CompileOptions(
        sensitive=args.sensitive,
        strict=args.strict,
        end=not args.prefix,
    )
    try:
        pattern = UrlPattern(args.pattern, options)
        params = pattern.params(args.path)
    except (NoMatch, PatternError) as exc:
        print(f"Error: {exc}", file=sys.stderr)
        raise SystemExit(1) from exc

    result = {
        "params": params.as_dict(),
        "positional": list(params.positional),
        "hash": params.hash,
    }
    print(json.dumps(result, indent=2))
