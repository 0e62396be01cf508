"""Path parameter converters and type conversion.

Built-in converters for ``{name:type}`` pattern segments like ``{id:int}``.
"""

from collections.abc import Mapping

# (regex_pattern, python_type) for each supported converter
CONVERTERS: dict[str, tuple[str, type]] = {
    "str": (r"[^/]+?", str),
    "int": (r"\d+", int),
    "float": (r"\d+(?:\.\d+)?", float),
    "path": (r".+", str),
}


def convert_param(
    value: str,
    param_type: str,
    converters: Mapping[str, tuple[str, type]] | None = None,
) -> object:
    """Convert a captured path parameter string to the target type.

    *converters* extends (and may override) the built-in table.

    Raises ``ValueError`` if the string cannot be converted.
    Raises ``KeyError`` if *param_type* is not a registered converter.
    """
    table = {**CONVERTERS, **converters} if converters else CONVERTERS
    _, target_type = table[param_type]
    return target_type(value)
