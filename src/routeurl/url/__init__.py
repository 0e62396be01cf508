"""URL parsing, normalization and query string conversion."""

from routeurl.url.parse import UrlRecord, normalize, parse
from routeurl.url.query import from_query_string, to_query_string

__all__ = [
    "UrlRecord",
    "from_query_string",
    "normalize",
    "parse",
    "to_query_string",
]
