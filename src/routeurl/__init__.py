"""routeurl — route patterns, URL parsing and parameter extraction.

Compile a route pattern once, then test request paths against it and pull
out their parameters. The URL parser works on its own too.

Basic usage::

    from routeurl import UrlPattern, parse

    pattern = UrlPattern("/users/:id")
    pattern.test("/users/42")                      # True
    params = pattern.params("/users/42?tab=posts")
    params["id"], params["tab"]                    # ("42", "posts")

    parse("https://example.com/a?x=1").query_object   # {"x": "1"}
"""

__version__ = "0.1.0"
__all__ = [
    "CompileOptions",
    "InvalidArgument",
    "NoMatch",
    "ParamKey",
    "PatternError",
    "RouteParams",
    "RouteUrlError",
    "UrlPattern",
    "UrlRecord",
    "compile_path",
    "from_query_string",
    "normalize",
    "parse",
    "to_query_string",
]

# Public name -> defining module
_LAZY_IMPORTS: dict[str, str] = {
    "CompileOptions": "routeurl.config",
    "InvalidArgument": "routeurl.errors",
    "NoMatch": "routeurl.errors",
    "PatternError": "routeurl.errors",
    "RouteUrlError": "routeurl.errors",
    "ParamKey": "routeurl.routing.route",
    "RouteParams": "routeurl.routing.route",
    "UrlPattern": "routeurl.routing.pattern",
    "compile_path": "routeurl.routing.compiler",
    "UrlRecord": "routeurl.url.parse",
    "normalize": "routeurl.url.parse",
    "parse": "routeurl.url.parse",
    "from_query_string": "routeurl.url.query",
    "to_query_string": "routeurl.url.query",
}


def __getattr__(name: str) -> object:
    """Lazy imports for public API.

    Keeps ``import routeurl`` fast while providing a clean top-level API.
    """
    module_name = _LAZY_IMPORTS.get(name)
    if module_name is not None:
        import importlib

        return getattr(importlib.import_module(module_name), name)

    msg = f"module {__name__!r} has no attribute {name!r}"
    raise AttributeError(msg)
