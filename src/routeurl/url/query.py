"""Query string <-> mapping conversion.

Keys are kept raw on the way in and encoded on the way out; values are
decoded and encoded with URI-component rules. A repeated key keeps its
last value.
"""

from collections.abc import Mapping

from routeurl.errors import InvalidArgument
from routeurl.url.encoding import decode_uri_component, encode_uri_component


def split_pairs(query: str) -> dict[str, str]:
    """Split ``a=1&b=2`` into a dict without touching a leading ``?``.

    Only the text between the first and second ``=`` of a pair is the
    value. A pair without ``=`` maps to the empty string; empty pairs
    (``a=1&&b=2``, a trailing ``&``) are skipped.
    """
    result: dict[str, str] = {}
    for pair in query.split("&"):
        if not pair:
            continue
        parts = pair.split("=")
        value = parts[1] if len(parts) > 1 else ""
        result[parts[0]] = decode_uri_component(value)
    return result


def from_query_string(query: str | None) -> dict[str, str]:
    """Parse a query string into a dict.

    Examples::

        >>> from_query_string("?p1=value1&p2=value2")
        {'p1': 'value1', 'p2': 'value2'}
        >>> from_query_string("a=1&a=2")
        {'a': '2'}

    Raises ``InvalidArgument`` if *query* is truthy but not a string.
    """
    if not query:
        return {}
    if not isinstance(query, str):
        msg = f"expected string, got {type(query).__name__}"
        raise InvalidArgument(msg)

    if query.startswith("?"):
        query = query[1:]
    return split_pairs(query)


def to_query_string(query_object: Mapping[str, object]) -> str:
    """Build a ``?``-prefixed query string from a mapping.

    Returns ``""`` for an empty mapping rather than a bare ``?``.
    Raises ``InvalidArgument`` if *query_object* is not a mapping.
    """
    if not isinstance(query_object, Mapping):
        msg = f"expected mapping, got {type(query_object).__name__}"
        raise InvalidArgument(msg)

    pairs = [
        f"{encode_uri_component(key)}={encode_uri_component(value)}"
        for key, value in query_object.items()
    ]
    if pairs:
        return "?" + "&".join(pairs)
    return ""
