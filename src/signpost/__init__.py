"""Signpost — resolve anything a call site has into a path or URL.

A literal URL, a map of route parameters, a list of path components,
a route name, a class, or a domain record: ``url_for`` classifies the
value and asks the route set for the matching path.

Basic usage::

    from signpost import RouteSet, UrlResolver

    routes = RouteSet()
    routes.add("/books", name="books", controller="books", action="index")
    routes.add("/books/{id:int}", name="book", controller="books", action="show")
    routes.compile()

    resolver = UrlResolver(routes)
    resolver.url_for({"controller": "books", "action": "index"})  # "/books"
    resolver.url_for(book)                                       # "/books/3"

Templates (kida)::

    from signpost.templating import register_url_helpers
    register_url_helpers(env, resolver)
"""

# Declare free-threading support (PEP 703)
_Py_mod_gil = 0

__version__ = "0.1.0-dev"
__all__ = [
    "BACK",
    "AmbiguousRoute",
    "ConfigurationError",
    "MissingHost",
    "Name",
    "ResolverConfig",
    "Routable",
    "RoutableMixin",
    "Route",
    "RouteNotFound",
    "RouteSet",
    "RoutingContext",
    "SignpostError",
    "UnroutableValue",
    "UrlResolver",
    "get_routing_context",
    "routing_context",
]


def __getattr__(name: str) -> object:
    """Lazy imports for public API.

    Keeps ``import signpost`` fast while providing a clean top-level API.
    """
    if name == "UrlResolver":
        from signpost.resolver import UrlResolver

        return UrlResolver

    if name == "RouteSet":
        from signpost.routing.router import RouteSet

        return RouteSet

    if name == "Route":
        from signpost.routing.route import Route

        return Route

    if name == "ResolverConfig":
        from signpost.config import ResolverConfig

        return ResolverConfig

    if name in ("RoutingContext", "get_routing_context", "routing_context"):
        from signpost import context as _ctx

        return getattr(_ctx, name)

    if name in ("Name", "BACK"):
        from signpost import descriptors as _desc

        return getattr(_desc, name)

    if name in ("Routable", "RoutableMixin"):
        from signpost import records as _records

        return getattr(_records, name)

    if name in (
        "AmbiguousRoute",
        "ConfigurationError",
        "MissingHost",
        "RouteNotFound",
        "SignpostError",
        "UnroutableValue",
    ):
        from signpost import errors as _errors

        return getattr(_errors, name)

    msg = f"module {__name__!r} has no attribute {name!r}"
    raise AttributeError(msg)
