"""UrlPattern — one compiled route pattern and the operations on it.

A pattern is compiled once; afterwards ``test``, ``exec`` and ``params``
run candidate paths against it. The pattern string is itself parsed as a
URL, so a pattern written as an absolute URL exposes its own host, port
and protocol.
"""

import logging
import re
from collections.abc import Mapping
from typing import Any

from routeurl.config import CompileOptions, coerce_options
from routeurl.errors import InvalidArgument, NoMatch, PatternError
from routeurl.routing.compiler import compile_path, tokenize
from routeurl.routing.params import convert_param
from routeurl.routing.route import CompiledPath, ParamKey, RouteParams
from routeurl.url.encoding import decode_uri, decode_uri_component, encode_uri_component
from routeurl.url.parse import UrlRecord, normalize, parse
from routeurl.url.query import split_pairs, to_query_string

logger = logging.getLogger("routeurl.routing")


def _encode_segment(value: object, converter: str) -> str:
    text = str(value)
    if converter == "path":
        # Slashes are structure in a path parameter
        return "/".join(encode_uri_component(part) for part in text.split("/"))
    return encode_uri_component(text)


class UrlPattern:
    """A route pattern compiled for matching.

    Usage::

        pattern = UrlPattern("/users/:id")
        pattern.test("/users/42")                   # True
        pattern.exec("/users/42")                   # ("/users/42", "42")
        pattern.params("/users/42?tab=posts#top")   # id="42", tab="posts", hash="top"

    Every field of the pattern's own ``UrlRecord`` is readable directly on
    the instance (``pattern.hostname``); ``pattern.url`` is the record itself.

    Paths are normalized before matching, so they never end in ``/``. A
    pattern ending in ``/`` compiled with ``strict=True`` could never match
    and is rejected with ``PatternError``.

    Instances are immutable and safe to share between threads.
    """

    __slots__ = ("_compiled", "name", "options", "pattern", "url")

    pattern: str | re.Pattern[str]
    name: str
    options: CompileOptions
    url: UrlRecord
    _compiled: CompiledPath

    def __init__(
        self,
        pattern: str | re.Pattern[str],
        options: CompileOptions | Mapping[str, object] | None = None,
        *,
        name: str | None = None,
    ) -> None:
        opts = coerce_options(options)
        source = pattern.pattern if isinstance(pattern, re.Pattern) else pattern
        if opts.strict and isinstance(pattern, str) and len(pattern) > 1 and pattern.endswith("/"):
            msg = (
                f"Strict pattern {pattern!r} ends with '/' but matched paths are "
                f"normalized without a trailing slash, so it can never match."
            )
            raise PatternError(msg)
        object.__setattr__(self, "pattern", pattern)
        object.__setattr__(self, "options", opts)
        object.__setattr__(self, "name", name or source)
        object.__setattr__(self, "_compiled", compile_path(pattern, opts))
        url = UrlRecord() if isinstance(pattern, re.Pattern) else parse(pattern)
        object.__setattr__(self, "url", url)

    def __setattr__(self, name: str, value: object) -> None:
        msg = "UrlPattern is immutable"
        raise AttributeError(msg)

    def __repr__(self) -> str:
        return f"UrlPattern({self.name!r})"

    # -- Compiled pattern ----------------------------------------------------

    @property
    def regex(self) -> re.Pattern[str]:
        return self._compiled.regex

    @property
    def keys(self) -> tuple[ParamKey | None, ...]:
        return self._compiled.keys

    # -- URL parts of the pattern itself -------------------------------------

    @property
    def protocol(self) -> str:
        return self.url.protocol

    @property
    def host(self) -> str:
        return self.url.host

    @property
    def hostname(self) -> str:
        return self.url.hostname

    @property
    def port(self) -> str:
        return self.url.port

    @property
    def origin(self) -> str:
        return self.url.origin

    @property
    def pathname(self) -> str:
        return self.url.pathname

    @property
    def search(self) -> str:
        return self.url.search

    @property
    def hash(self) -> str:
        return self.url.hash

    @property
    def href(self) -> str:
        return self.url.href

    @property
    def root_url(self) -> str:
        return self.url.root_url

    @property
    def original_url(self) -> str:
        return self.url.original_url

    @property
    def auth(self) -> str:
        return self.url.auth

    @property
    def path(self) -> str:
        return self.url.path

    @property
    def query(self) -> str:
        return self.url.query

    @property
    def query_object(self) -> dict[str, str]:
        return self.url.query_object

    @property
    def slashes(self) -> bool:
        return self.url.slashes

    # -- Matching ------------------------------------------------------------

    normalize = staticmethod(normalize)

    def match(self, path: str | None) -> re.Match[str] | None:
        """Return the regex match for the normalized *path*, or ``None``."""
        normalized = normalize(path)
        if normalized is None:
            normalized = ""
        return self._compiled.regex.search(normalized)

    def test(self, path: str | None) -> bool:
        """Return True if the normalized *path* matches the pattern."""
        return self.match(path) is not None

    def exec(self, path: str | None) -> tuple[str | None, ...] | None:
        """Return ``(whole_match, *groups)`` for *path*, or ``None``."""
        m = self.match(path)
        if m is None:
            return None
        return (m.group(0), *m.groups())

    def params(self, path: str | None, *, convert: bool = False) -> RouteParams:
        """Extract the parameters of *path*.

        Named captures come first; query values fill in names no capture
        has taken. With ``convert=True`` named captures are converted by
        their ``{name:type}`` converter.

        Raises ``NoMatch`` if *path* does not match the pattern.
        """
        if not path:
            return RouteParams()

        m = self.match(path)
        if m is None:
            logger.debug("Route %r rejected path %r", self.name, path)
            raise NoMatch(route=self.name, path=path)

        named: dict[str, Any] = {}
        positional: list[str | None] = []
        for key, value in zip(self._compiled.keys, m.groups(), strict=True):
            if value is not None:
                value = decode_uri_component(value)
            if key is None:
                positional.append(value)
            # An optional group that did not participate leaves its name unset
            elif value is not None and key.name not in named:
                if convert:
                    named[key.name] = convert_param(value, key.converter, self.options.converters)
                else:
                    named[key.name] = value

        decoded = decode_uri(path)
        query_string = ""
        if "?" in decoded:
            query_string = decoded.split("?")[1].split("#")[0]
        fragment = decoded.split("#")[1] if "#" in decoded else ""

        query = split_pairs(query_string) if query_string else {}
        for key_name, value in query.items():
            named.setdefault(key_name, value)

        return RouteParams(named, tuple(positional), hash=fragment, query=query)

    # -- Building ------------------------------------------------------------

    def resolve(
        self,
        params: Mapping[str, object] | None = None,
        query: Mapping[str, object] | None = None,
        hash: str | None = None,  # noqa: A002 — mirrors the URL part name
    ) -> str:
        """Build a path from the pattern, the inverse of ``params``.

        Values are URI-component encoded; repeated parameters accept a
        list or tuple of segments. Positional groups cannot be filled in.

        Raises ``InvalidArgument`` for a missing required parameter or a
        pattern with positional groups.
        """
        if isinstance(self.pattern, re.Pattern):
            msg = "Cannot resolve a path from a regular expression pattern."
            raise InvalidArgument(msg)

        values = params or {}
        parts: list[str] = []
        for token in tokenize(self.pattern, self.options.converters):
            if isinstance(token, str):
                parts.append(token)
                continue
            if token.key is None:
                msg = f"Cannot resolve positional groups in route {self.name!r}."
                raise InvalidArgument(msg)

            value = values.get(token.key.name)
            if value is None or value == "":
                if token.optional:
                    continue
                msg = f"Missing value for parameter {token.key.name!r} of route {self.name!r}."
                raise InvalidArgument(msg)

            segments = value if isinstance(value, list | tuple) else [value]
            encoded = [_encode_segment(segment, token.key.converter) for segment in segments]
            parts.append(token.prefix + token.prefix.join(encoded))

        path = "".join(parts) or "/"
        path += to_query_string(query or {})
        if hash:
            path += f"#{hash}"
        return path
