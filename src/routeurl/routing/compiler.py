"""Route pattern compiler.

Turns a pattern string into an anchored regular expression with one group
per pattern variable, plus the list of ``ParamKey`` aligned with those
groups. Pattern syntax::

    /users/:id            named parameter, one segment
    /users/:id(\\d+)       named parameter with a custom regex
    /users/{id:int}       named parameter using a converter
    /posts/:slug?         optional parameter (the preceding "/" too)
    /files/:parts*        zero or more segments
    /files/:parts+        one or more segments
    /archive/(\\d{4})      positional group
    /static/*             positional wildcard
    /price/\\:usd          escaped literal

Groups inside a custom regex are made non-capturing, so every variable
owns exactly one group. The compiler knows nothing about query strings or
fragments; callers normalize paths before matching.
"""

import logging
import re
from collections.abc import Mapping
from dataclasses import dataclass

from routeurl.config import CompileOptions, coerce_options
from routeurl.errors import PatternError
from routeurl.routing.params import CONVERTERS
from routeurl.routing.route import CompiledPath, ParamKey

logger = logging.getLogger("routeurl.routing")

_PATH_TOKEN = re.compile(
    r"(?P<escaped>\\.)"
    r"|(?P<prefix>[/.])?(?:"
    r":(?P<name>\w+)"
    r"|\{(?P<brace>[^{}:]*)(?::(?P<converter>[^{}]*))?\}"
    r"|(?P<group>\()"
    r"|(?P<asterisk>\*)"
    r")"
)

_MODIFIERS = "+*?"


@dataclass(frozen=True, slots=True)
class _Token:
    """A variable part of a pattern. ``key`` is None for positional groups."""

    prefix: str
    pattern: str
    optional: bool
    repeat: bool
    key: ParamKey | None


def _scan_group(pattern: str, start: int) -> tuple[str, int]:
    """Return the body of the group opening at *start* and the index after it.

    Escapes and character classes are skipped, so ``\\)`` and ``[)]`` do
    not close the group.
    """
    depth = 0
    in_class = False
    i = start
    while i < len(pattern):
        ch = pattern[i]
        if ch == "\\":
            i += 2
            continue
        if in_class:
            if ch == "]":
                in_class = False
        elif ch == "[":
            in_class = True
        elif ch == "(":
            depth += 1
        elif ch == ")":
            depth -= 1
            if depth == 0:
                body = pattern[start + 1 : i]
                if not body:
                    msg = f"Empty group at position {start} in pattern {pattern!r}."
                    raise PatternError(msg)
                return body, i + 1
        i += 1
    msg = f"Unbalanced group at position {start} in pattern {pattern!r}."
    raise PatternError(msg)


def _non_capturing(source: str) -> str:
    """Rewrite bare ``(`` in a regex to ``(?:``.

    ``(?...`` groups, escaped parens and parens inside character classes
    are left alone.
    """
    out: list[str] = []
    in_class = False
    i = 0
    while i < len(source):
        ch = source[i]
        if ch == "\\":
            out.append(source[i : i + 2])
            i += 2
            continue
        if in_class:
            if ch == "]":
                in_class = False
        elif ch == "[":
            in_class = True
        elif ch == "(" and not source.startswith("?", i + 1):
            out.append("(?:")
            i += 1
            continue
        out.append(ch)
        i += 1
    return "".join(out)


def _check_literal(text: str, pattern: str) -> str:
    if ")" in text:
        msg = f"Unbalanced ')' in pattern {pattern!r}. Escape it as \\) to match it literally."
        raise PatternError(msg)
    return text


def _converter_pattern(
    name: str,
    converter: str,
    converters: Mapping[str, tuple[str, type]],
    source: str,
) -> str:
    try:
        pattern, _ = converters[converter]
    except KeyError:
        known = ", ".join(sorted(converters))
        msg = (
            f"Unknown converter {converter!r} for parameter {name!r} in "
            f"pattern {source!r}. Known converters: {known}"
        )
        raise PatternError(msg) from None
    return pattern


def tokenize(
    pattern: str,
    converters: Mapping[str, tuple[str, type]] | None = None,
) -> list[str | _Token]:
    """Split a pattern into literal strings and variable tokens.

    Examples::

        "/users"           -> ["/users"]
        "/users/:id"       -> ["/users", _Token("/", "[^/]+?", key=ParamKey("id"))]
        "/files/*"         -> ["/files", _Token("/", ".*", key=None)]
    """
    table = {**CONVERTERS, **converters} if converters else CONVERTERS
    tokens: list[str | _Token] = []
    literal = ""
    index = 0

    while (m := _PATH_TOKEN.search(pattern, index)) is not None:
        literal += _check_literal(pattern[index : m.start()], pattern)
        index = m.end()

        if m.group("escaped"):
            literal += m.group("escaped")[1]
            continue

        if literal:
            tokens.append(literal)
            literal = ""

        prefix = m.group("prefix") or ""

        if m.group("asterisk"):
            tokens.append(_Token(prefix, ".*", optional=False, repeat=False, key=None))
            continue

        capture: str | None = None
        if m.group("group"):
            capture, index = _scan_group(pattern, m.start("group"))
        elif m.group("name") is not None and pattern.startswith("(", index):
            capture, index = _scan_group(pattern, index)

        modifier = ""
        if index < len(pattern) and pattern[index] in _MODIFIERS:
            modifier = pattern[index]
            index += 1
        optional = modifier in ("?", "*")
        repeat = modifier in ("+", "*")

        if m.group("group"):
            tokens.append(_Token(prefix, _non_capturing(capture), optional, repeat, key=None))
            continue

        if m.group("name") is not None:
            name = m.group("name")
            converter = "str"
            if capture is not None:
                capture_pattern = _non_capturing(capture)
            else:
                capture_pattern = f"[^{re.escape(prefix or '/')}]+?"
        else:
            name = m.group("brace").strip()
            if not name:
                msg = f"Empty parameter name in pattern {pattern!r}."
                raise PatternError(msg)
            converter = (m.group("converter") or "str").strip()
            capture_pattern = _non_capturing(_converter_pattern(name, converter, table, pattern))

        key = ParamKey(
            name=name,
            optional=optional,
            repeat=repeat,
            pattern=capture_pattern,
            converter=converter,
        )
        tokens.append(_Token(prefix, capture_pattern, optional, repeat, key=key))

    literal += _check_literal(pattern[index:], pattern)
    if literal:
        tokens.append(literal)
    return tokens


def _token_source(token: _Token) -> str:
    prefix = re.escape(token.prefix)
    capture = token.pattern
    if token.repeat:
        capture += f"(?:{prefix}{capture})*"
    if token.optional:
        if prefix:
            return f"(?:{prefix}({capture}))?"
        return f"({capture})?"
    return f"{prefix}({capture})"


def _compile_regex(compiled: re.Pattern[str]) -> CompiledPath:
    names = {index: name for name, index in compiled.groupindex.items()}
    keys = tuple(
        ParamKey(name=names[i], pattern="") if i in names else None
        for i in range(1, compiled.groups + 1)
    )
    return CompiledPath(regex=compiled, keys=keys)


def compile_path(
    pattern: str | re.Pattern[str],
    options: CompileOptions | Mapping[str, object] | None = None,
) -> CompiledPath:
    """Compile *pattern* into a ``CompiledPath``.

    An already compiled regular expression is accepted as is: its named
    groups become keys and its other groups positional.

    Raises ``PatternError`` if the pattern is malformed.
    """
    if isinstance(pattern, re.Pattern):
        return _compile_regex(pattern)

    opts = coerce_options(options)
    tokens = tokenize(pattern, opts.converters)

    route = ""
    keys: list[ParamKey | None] = []
    for token in tokens:
        if isinstance(token, str):
            route += re.escape(token)
        else:
            route += _token_source(token)
            keys.append(token.key)

    ends_with_slash = route.endswith("/")
    if not opts.strict:
        route = (route[:-1] if ends_with_slash else route) + "(?:/(?=$))?"
    if opts.end:
        route += "$"
    elif not (opts.strict and ends_with_slash):
        route += "(?=/|$)"

    flags = 0 if opts.sensitive else re.IGNORECASE
    try:
        regex = re.compile(f"^{route}", flags)
    except re.error as exc:
        msg = f"Invalid pattern {pattern!r}: {exc}"
        raise PatternError(msg) from exc

    if regex.groups != len(keys):
        msg = (
            f"Pattern {pattern!r} has named groups inside a parameter regex. "
            f"Name the parameter itself instead."
        )
        raise PatternError(msg)

    logger.debug("Compiled %r to %r", pattern, regex.pattern)
    return CompiledPath(regex=regex, keys=tuple(keys))
