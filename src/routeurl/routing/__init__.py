"""Routing — route patterns compiled to anchored regular expressions.

Patterns are compiled once into an immutable ``UrlPattern`` and then
matched against any number of request paths.
"""

from routeurl.routing.compiler import compile_path
from routeurl.routing.pattern import UrlPattern
from routeurl.routing.route import CompiledPath, ParamKey, RouteParams

__all__ = ["CompiledPath", "ParamKey", "RouteParams", "UrlPattern", "compile_path"]
