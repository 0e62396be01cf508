"""routeurl exception hierarchy.

Shared across the URL parser, the pattern compiler and ``UrlPattern`` so
every module raises and catches the same types.
"""

from dataclasses import dataclass


class RouteUrlError(Exception):
    """Base for all routeurl-specific errors."""


class InvalidArgument(RouteUrlError, TypeError):  # noqa: N818 — mirrors the error kind name
    """Raised when an argument has the wrong type.

    ``from_query_string`` accepts only strings, ``to_query_string`` only
    mappings. Also raised by ``UrlPattern.resolve`` when a required
    parameter has no value.
    """


class PatternError(RouteUrlError, ValueError):
    """Raised when a route pattern cannot be compiled.

    Typically surfaces at startup, when the route table is built.
    """


@dataclass(frozen=True, slots=True)
class NoMatch(RouteUrlError):  # noqa: N818 — conventional name for routing misses
    """A path was handed to ``UrlPattern.params`` that the pattern rejects.

    Callers that want a non-raising check use ``test`` or ``exec`` first.
    """

    route: str
    path: str

    def __str__(self) -> str:
        return f'The route named "{self.route}" does not match the path "{self.path}"'
