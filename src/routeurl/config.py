"""Pattern compilation options.

CompileOptions is a frozen dataclass — immutable after creation, IDE-autocompletable,
no string-key dict lookups.
"""

from collections.abc import Mapping
from dataclasses import dataclass, field, fields


@dataclass(frozen=True, slots=True)
class CompileOptions:
    """How a route pattern is turned into a regular expression.

    All fields have sensible defaults. Override what you need::

        options = CompileOptions(sensitive=True, strict=True)
    """

    # Literal segments match case-sensitively
    sensitive: bool = False

    # Reject a trailing slash the pattern does not spell out. UrlPattern
    # normalizes paths first, so it refuses strict patterns ending in "/"
    strict: bool = False

    # Match the whole path (False: a prefix ending at a segment boundary)
    end: bool = True

    # Extra {name:type} converters, merged over the built-ins
    converters: Mapping[str, tuple[str, type]] = field(default_factory=dict)

    @classmethod
    def from_mapping(cls, options: Mapping[str, object] | None) -> "CompileOptions":
        """Build options from a plain mapping, ignoring keys it does not know."""
        if not options:
            return cls()
        known = {f.name for f in fields(cls)}
        return cls(**{k: v for k, v in options.items() if k in known})  # type: ignore[arg-type]


def coerce_options(
    options: "CompileOptions | Mapping[str, object] | None",
) -> CompileOptions:
    """Accept a ``CompileOptions``, a plain mapping, or ``None``."""
    if isinstance(options, CompileOptions):
        return options
    return CompileOptions.from_mapping(options)
