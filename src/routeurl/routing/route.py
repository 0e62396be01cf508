"""ParamKey, CompiledPath and RouteParams."""

import re
from collections.abc import Iterator, Mapping
from dataclasses import dataclass
from typing import Any


@dataclass(frozen=True, slots=True)
class ParamKey:
    """A named parameter of a compiled pattern.

    ``:id``           -> ParamKey("id")
    ``:id?``          -> ParamKey("id", optional=True)
    ``:parts+``       -> ParamKey("parts", repeat=True)
    ``{id:int}``      -> ParamKey("id", pattern=r"\\d+", converter="int")
    """

    name: str
    optional: bool = False
    repeat: bool = False
    pattern: str = r"[^/]+?"
    converter: str = "str"


@dataclass(frozen=True, slots=True)
class CompiledPath:
    """A pattern compiled to a regular expression.

    ``keys`` is aligned with the regex groups: ``keys[i]`` describes group
    ``i + 1``. ``None`` marks a positional (unnamed) group.
    """

    regex: re.Pattern[str]
    keys: tuple[ParamKey | None, ...]

    @property
    def names(self) -> tuple[str, ...]:
        return tuple(key.name for key in self.keys if key is not None)


class RouteParams(Mapping[str, Any]):
    """Parameters extracted from a matched path.

    Attributes:
        positional: Unnamed captures, in order.
        hash: Fragment of the matched path (``""`` when absent).
        query: Every query value found in the path, including values
            shadowed by a capture of the same name.

    The mapping itself holds named captures, then query values whose names
    no capture has taken. An ``int`` key indexes ``positional``.
    """

    _named: dict[str, Any]
    positional: tuple[str | None, ...]
    hash: str
    query: dict[str, str]

    __slots__ = ("_named", "hash", "positional", "query")

    def __init__(
        self,
        named: Mapping[str, Any] | None = None,
        positional: tuple[str | None, ...] = (),
        hash: str = "",  # noqa: A002 — mirrors the URL part name
        query: Mapping[str, str] | None = None,
    ) -> None:
        object.__setattr__(self, "_named", dict(named or {}))
        object.__setattr__(self, "positional", tuple(positional))
        object.__setattr__(self, "hash", hash)
        object.__setattr__(self, "query", dict(query or {}))

    def __setattr__(self, name: str, value: object) -> None:
        msg = "RouteParams is immutable"
        raise AttributeError(msg)

    def __getitem__(self, key: str | int) -> Any:  # type: ignore[override]
        if isinstance(key, int):
            try:
                return self.positional[key]
            except IndexError:
                raise KeyError(key) from None
        return self._named[key]

    def __contains__(self, key: object) -> bool:
        if isinstance(key, int):
            return -len(self.positional) <= key < len(self.positional)
        return key in self._named

    def __iter__(self) -> Iterator[str]:
        return iter(self._named)

    def __len__(self) -> int:
        return len(self._named)

    def __eq__(self, other: object) -> bool:
        if isinstance(other, RouteParams):
            return (
                self._named == other._named
                and self.positional == other.positional
                and self.hash == other.hash
            )
        if isinstance(other, Mapping):
            return self._named == dict(other)
        return NotImplemented

    __hash__ = None  # type: ignore[assignment]

    def __bool__(self) -> bool:
        return bool(self._named or self.positional)

    def __repr__(self) -> str:
        return (
            f"RouteParams({self._named!r}, positional={self.positional!r}, "
            f"hash={self.hash!r})"
        )

    def as_dict(self) -> dict[str, Any]:
        """Return the named values as a new plain dict."""
        return dict(self._named)
