"""The resolver — turns any destination descriptor into a path or URL.

``UrlResolver.url_for`` is the single public entry point. It classifies
the descriptor, normalizes parameter maps, and hands off to the route
set (parameter maps) or the named-route builder (names, classes,
records, segment lists)::

    resolver = UrlResolver(routes)

    resolver.url_for("https://example.com")                  # unchanged
    resolver.url_for({"controller": "books", "action": "index"})  # "/books"
    resolver.url_for(Workshop(id=5))                         # "/workshops/5"
    resolver.url_for([blog, post, {"anchor": "comments"}])   # "/blogs/1/posts/2#comments"
    resolver.url_for(BACK)                                   # referer or history.back()

Resolution is pure and synchronous. Errors (``UnroutableValue``,
``RouteNotFound``, ``AmbiguousRoute``, ``MissingHost``) propagate to the
caller unchanged.
"""

import logging
from typing import Any
from urllib.parse import urlsplit

from signpost.config import ResolverConfig
from signpost.context import RoutingContext, get_routing_context
from signpost.descriptors import (
    BackTarget,
    DefaultTarget,
    LiteralTarget,
    NameTarget,
    ParamsTarget,
    RecordTarget,
    SegmentsTarget,
    TypeTarget,
    classify,
)
from signpost.options import normalize_options
from signpost.polymorphic import PolymorphicBuilder
from signpost.routing.router import RouteSet

logger = logging.getLogger("signpost.resolver")


def usable_referer(referer: str | None) -> bool:
    """Check whether a referer can be handed back as the BACK address.

    Only absolute ``http``/``https`` URLs with a host qualify. Blank
    values, ``javascript:`` and other schemes, and malformed URLs do not.
    """
    if not referer or not isinstance(referer, str) or not referer.strip():
        return False
    try:
        parts = urlsplit(referer.strip())
    except ValueError:
        return False
    return parts.scheme in ("http", "https") and bool(parts.netloc)


class UrlResolver:
    """Resolve destination descriptors against a route set.

    The ambient ``RoutingContext`` (see ``signpost.context``) supplies the
    current protocol, host and controller; pass *context* explicitly to
    resolve for a different request.
    """

    __slots__ = ("_routes",)

    def __init__(self, routes: RouteSet) -> None:
        self._routes = routes

    @property
    def routes(self) -> RouteSet:
        return self._routes

    @property
    def config(self) -> ResolverConfig:
        return self._routes.config

    def url_for(self, descriptor: Any = None, context: RoutingContext | None = None) -> str:
        """Return the path or URL for *descriptor*.

        Paths are generated unless the descriptor asks for a full URL
        (``only_path=False``, or a ``host`` without ``only_path``) or the
        resolver is configured with ``generate_paths_by_default=False``.
        """
        context = context or get_routing_context()
        target = classify(descriptor)
        paths = self.config.generate_paths_by_default
        logger.debug("url_for %s -> %s", type(descriptor).__name__, type(target).__name__)

        match target:
            case LiteralTarget(url=url):
                return url
            case DefaultTarget():
                return self._routes.generate({"only_path": paths}, context)
            case ParamsTarget(params=params):
                options = normalize_options(params, generate_paths_by_default=paths)
                return self._routes.generate(options, context)
            case BackTarget():
                return self.back_url(context)
            case SegmentsTarget(components=components, options=options):
                return self._builder(context).handle_list(components, options)
            case NameTarget(name=name):
                return self._builder(context).handle_name(name)
            case TypeTarget(cls=cls):
                return self._builder(context).handle_type(cls)
            case RecordTarget():
                return self._builder(context).handle_record(target)

    def back_url(self, context: RoutingContext | None = None) -> str:
        """The previous request's address, or the configured fallback."""
        context = context or get_routing_context()
        referer = context.previous_address()
        if usable_referer(referer):
            return referer.strip()  # type: ignore[union-attr]
        if referer:
            logger.warning("Ignoring unusable referer %r; returning %r", referer, self.config.back_fallback)
        return self.config.back_fallback

    def _builder(self, context: RoutingContext) -> PolymorphicBuilder:
        return PolymorphicBuilder(
            self._routes,
            only_path=self.config.generate_paths_by_default,
            context=context,
        )
