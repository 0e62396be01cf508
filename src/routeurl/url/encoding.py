"""Percent-encoding with browser semantics.

``urllib.parse`` quotes for HTTP forms (``+`` for spaces, a different safe
set), so the helpers here pin the exact character classes that browsers
use for ``encodeURIComponent``, ``decodeURIComponent`` and ``decodeURI``.
"""

import re
from urllib.parse import quote, unquote

# Characters encodeURIComponent leaves alone, besides ASCII letters and digits
_COMPONENT_SAFE = "-_.!~*'()"

# Escapes of these bytes survive whole-URI decoding
_URI_RESERVED = frozenset(b";/?:@&=+$,#")

_ESCAPE_RUN = re.compile(r"(?:%[0-9A-Fa-f]{2})+")


def encode_uri_component(value: object) -> str:
    """Percent-encode *value* as a single URI component.

    Non-string values are converted with ``str()`` first; ``None`` becomes
    the empty string.
    """
    if value is None:
        return ""
    return quote(str(value), safe=_COMPONENT_SAFE, encoding="utf-8")


def decode_uri_component(value: str) -> str:
    """Decode every ``%XX`` escape in *value* as UTF-8.

    ``+`` is left as is. Invalid UTF-8 sequences decode to U+FFFD.
    """
    if "%" not in value:
        return value
    return unquote(value, encoding="utf-8", errors="replace")


def _decode_escape_run(match: re.Match[str]) -> str:
    run = match.group(0)
    parts: list[str] = []
    pending = bytearray()
    for i in range(0, len(run), 3):
        escape = run[i : i + 3]
        byte = int(escape[1:], 16)
        if byte in _URI_RESERVED:
            if pending:
                parts.append(pending.decode("utf-8", errors="replace"))
                pending.clear()
            parts.append(escape)
        else:
            pending.append(byte)
    if pending:
        parts.append(pending.decode("utf-8", errors="replace"))
    return "".join(parts)


def decode_uri(value: str) -> str:
    """Decode a whole URI, keeping escapes of reserved characters.

    ``%2F``, ``%3F``, ``%23``, ``%26``, ``%3D`` and the other reserved
    delimiters stay encoded so the structure of the URI is unchanged::

        >>> decode_uri("/a%20b?x=%26")
        '/a b?x=%26'
    """
    if "%" not in value:
        return value
    return _ESCAPE_RUN.sub(_decode_escape_run, value)
