"""URL decomposition.

One RFC 3986 (appendix B) regular expression splits a URL into scheme,
authority, path, query and fragment; everything else is derived from
those five captures.
"""

import re
from dataclasses import asdict, dataclass, field

from routeurl.url.query import from_query_string

# https://www.rfc-editor.org/rfc/rfc3986#appendix-B
_URL_RE = re.compile(
    r"^(?:(?P<scheme>[^:/?#]+):)?"
    r"(?P<slashes>//(?P<authority>[^/?#]*))?"
    r"(?P<path>[^?#]*)"
    r"(?:\?(?P<query>[^#]*))?"
    r"(?:#(?P<fragment>.*))?",
    re.DOTALL,
)


@dataclass(frozen=True, slots=True)
class UrlRecord:
    """The parts of a URL string.

    Every string field is ``""`` when the URL lacks that part. A record
    built from an empty URL is falsy and ``as_dict()`` returns ``{}``.

    ``protocol`` and ``hash`` hold the bare scheme and fragment; ``search``
    keeps its leading ``?``. The derived fields (``origin``, ``root_url``,
    ``href``) put the delimiters back.
    """

    root_url: str = ""
    original_url: str = ""
    href: str = ""
    protocol: str = ""
    auth: str = ""
    host: str = ""
    hostname: str = ""
    port: str = ""
    origin: str = ""
    path: str = ""
    pathname: str = ""
    search: str = ""
    query: str = ""
    query_object: dict[str, str] = field(default_factory=dict)
    hash: str = ""
    slashes: bool = False

    def __bool__(self) -> bool:
        return bool(self.original_url)

    def as_dict(self) -> dict[str, object]:
        """Return the fields as a plain dict (``{}`` for an empty record)."""
        if not self:
            return {}
        return asdict(self)


def _split_authority(authority: str) -> tuple[str, str, str]:
    """Return ``(auth, host, normalized_authority)``.

    More than one ``@`` leaves both auth and host empty.
    """
    parts = authority.split("@")
    if len(parts) == 1:
        host = parts[0].lower()
        return "", host, host
    if len(parts) == 2:
        auth, host = parts[0], parts[1].lower()
        return auth, host, f"{auth}@{host}"
    return "", "", authority.lower()


def parse(url: str | None) -> UrlRecord:
    """Split *url* into a ``UrlRecord``.

    A fragment that carries a ``?`` (``/app#/inbox?page=2``) donates its
    query to ``search`` when the URL has no query of its own.

    Examples::

        >>> record = parse("http://Example.com:8080/a/b?x=1#frag")
        >>> record.hostname, record.port, record.pathname
        ('example.com', '8080', '/a/b')
        >>> record.query_object
        {'x': '1'}
    """
    if not url:
        return UrlRecord()

    match = _URL_RE.match(url)
    # The expression has no mandatory part, so it always matches
    assert match is not None

    protocol = (match.group("scheme") or "").lower()
    slashes = match.group("slashes") is not None
    auth, host, authority = _split_authority(match.group("authority") or "")

    host_parts = host.split(":")
    hostname = host_parts[0]
    port = host_parts[1] if len(host_parts) > 1 else ""

    pathname = match.group("path")
    query = match.group("query")
    fragment = match.group("fragment") or ""

    if query is not None:
        search = "?" + query
    else:
        search = ""
        query = ""
        index = fragment.find("?")
        if index != -1:
            search = fragment[index:]
            query = search[1:]
            fragment = fragment[:index]

    root_url = "".join(
        (
            f"{protocol}:" if protocol else "",
            "//" if slashes else "",
            authority,
        )
    )
    path = pathname + search

    return UrlRecord(
        root_url=root_url,
        original_url=url,
        href=root_url + path + (f"#{fragment}" if fragment else ""),
        protocol=protocol,
        auth=auth,
        host=host,
        hostname=hostname,
        port=port,
        origin=f"{protocol}://{host}" if protocol and host else "",
        path=path,
        pathname=pathname,
        search=search,
        query=query,
        query_object=from_query_string(query),
        hash=fragment,
        slashes=slashes,
    )


def normalize(url: str | None) -> str | None:
    """Reduce *url* to its pathname with one leading and no trailing slash.

    Falsy input is returned unchanged::

        >>> normalize("/a/b/")
        '/a/b'
        >>> normalize("a/b?x=1")
        '/a/b'
        >>> normalize("/")
        '/'
    """
    if not url:
        return url

    pathname = parse(url).pathname
    if not pathname.startswith("/"):
        pathname = "/" + pathname
    if len(pathname) > 1 and pathname.endswith("/"):
        pathname = pathname[:-1]
    return pathname
