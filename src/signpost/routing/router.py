"""Route table and URL generator.

Routes are registered during setup and frozen with ``compile()``.
Generation runs in two directions into the same table: from a
normalized parameter map (controller/action lookup) and from a route
name plus arguments (the named-route builder).
"""

import logging
from collections.abc import Mapping, Sequence
from typing import Any

from signpost.config import ResolverConfig
from signpost.context import RoutingContext
from signpost.errors import AmbiguousRoute, ConfigurationError, RouteNotFound
from signpost.routing.params import CONVERTERS, format_param
from signpost.routing.route import PathSegment, Route
from signpost.routing.url import build_url

logger = logging.getLogger("signpost.routing")

# Options consumed by URL assembly; never treated as route parameters
URL_OPTION_KEYS = frozenset(
    {
        "anchor",
        "only_path",
        "trailing_slash",
        "host",
        "protocol",
        "port",
        "user",
        "password",
        "script_name",
    }
)


def parse_path(path: str) -> list[PathSegment]:
    """Parse a route path string into segments.

    Examples::

        "/users"          -> [PathSegment("users")]
        "/users/{id}"     -> [PathSegment("users"), PathSegment("{id}", is_param=True, ...)]
        "/users/{id:int}" -> [PathSegment("{id:int}", is_param=True, param_type="int")]
        "/files/{path:path}" -> [PathSegment("{path:path}", is_param=True, param_type="path")]

    Raises ``ConfigurationError`` for Flask-style ``<param>`` segments and
    for unknown converters.
    """
    segments: list[PathSegment] = []
    for part in path.strip("/").split("/"):
        if not part:
            continue
        if part.startswith("<") and part.endswith(">"):
            msg = (
                f"Route path {path!r} uses <param> syntax. "
                f"Signpost expects {{param}} segments, e.g. {{id}} or {{id:int}}."
            )
            raise ConfigurationError(msg)
        if part.startswith("{") and part.endswith("}"):
            inner = part[1:-1]
            if ":" in inner:
                param_name, param_type = inner.split(":", 1)
            else:
                param_name = inner
                param_type = "str"
            if param_type not in CONVERTERS:
                known = ", ".join(sorted(CONVERTERS))
                msg = f"Unknown converter {param_type!r} in route path {path!r}. Known: {known}."
                raise ConfigurationError(msg)
            segments.append(
                PathSegment(
                    value=part,
                    is_param=True,
                    param_name=param_name,
                    param_type=param_type,
                )
            )
        else:
            segments.append(PathSegment(value=part))
    return segments


def _fill(route: Route, params: Mapping[str, Any]) -> str | None:
    """Fill the route template from *params*, or None if a value is missing or invalid."""
    parts: list[str] = []
    for seg in route.segments:
        if not seg.is_param:
            parts.append(seg.value)
            continue
        rendered = format_param(params.get(seg.param_name or ""), seg.param_type)
        if rendered is None:
            return None
        parts.append(rendered)
    return "/" + "/".join(parts)


def _defaults_conflict(route: Route, params: Mapping[str, Any]) -> bool:
    """True if *params* overrides a default the route's path cannot carry."""
    return any(
        key in params and str(params[key]) != str(value)
        for key, value in route.defaults.items()
        if key not in route.param_names
    )


class RouteSet:
    """Route table with URL generation.

    Usage::

        routes = RouteSet()
        routes.add("/books", name="books", controller="books", action="index")
        routes.add("/books/{id:int}", name="book", controller="books", action="show")
        routes.compile()

        routes.generate({"controller": "books", "action": "show", "id": 3, "only_path": True})
        # -> "/books/3"
        routes.url_for_name("book", (3,), only_path=True)
        # -> "/books/3"
    """

    __slots__ = ("_by_endpoint", "_compiled", "_config", "_named", "_routes")

    def __init__(self, config: ResolverConfig | None = None) -> None:
        self._config = config or ResolverConfig()
        self._routes: list[Route] = []
        self._named: dict[str, Route] = {}
        self._by_endpoint: dict[tuple[str, str], list[Route]] = {}
        self._compiled = False

    @property
    def config(self) -> ResolverConfig:
        return self._config

    # -- Registration --

    def add(
        self,
        path: str,
        *,
        name: str | None = None,
        controller: str | None = None,
        action: str | None = None,
        defaults: Mapping[str, Any] | None = None,
    ) -> Route:
        """Add a route. Must be called before compile()."""
        if self._compiled:
            msg = "Cannot add routes after compilation."
            raise RuntimeError(msg)
        if name is not None and name in self._named:
            msg = f"Duplicate route name {name!r}: already bound to {self._named[name].path!r}."
            raise ConfigurationError(msg)
        if controller is not None:
            controller = controller.strip("/")

        route = Route(
            path=path,
            name=name,
            controller=controller,
            action=action,
            defaults=dict(defaults or {}),
            segments=tuple(parse_path(path)),
        )
        self._routes.append(route)
        if name is not None:
            self._named[name] = route
        if controller is not None:
            self._by_endpoint.setdefault((controller, action or "index"), []).append(route)
        return route

    def compile(self) -> None:
        """Freeze the route set. No more routes can be added."""
        self._compiled = True

    @property
    def routes(self) -> list[Route]:
        """Return all registered routes in registration order."""
        return list(self._routes)

    def has_named(self, name: str) -> bool:
        return name in self._named

    def named(self, name: str) -> Route:
        """Return the route registered under *name*.

        Raises ``RouteNotFound`` if no route has that name.
        """
        try:
            return self._named[name]
        except KeyError:
            raise RouteNotFound(f"No route named {name!r}") from None

    # -- Generation from a parameter map --

    def generate(self, options: Mapping[str, Any], context: RoutingContext | None = None) -> str:
        """Generate a path or URL from normalized options.

        Raises ``RouteNotFound`` when no route serves the controller/action
        with the supplied parameters, ``AmbiguousRoute`` when a relative
        controller matches several namespaces.
        """
        context = context or RoutingContext()
        params = {k: v for k, v in options.items() if k not in URL_OPTION_KEYS}

        requested = params.pop("controller", None)
        if requested is not None:
            controller = self._resolve_controller(str(requested), context.namespace)
        elif context.controller:
            controller = context.controller
        elif "root" in self._named and "action" not in params:
            return self._generate_root(params, options, context)
        else:
            raise RouteNotFound(
                "No route matches: no controller given and no current controller in the routing context",
                options,
            )

        action = params.pop("action", None)
        if action is None:
            same_controller = controller == context.controller
            action = context.action if same_controller and context.action else "index"
        action = str(action)

        candidates = self._by_endpoint.get((controller, action), [])
        best: tuple[Route, str] | None = None
        for route in candidates:
            if _defaults_conflict(route, params):
                continue
            path = _fill(route, {**route.defaults, **params})
            if path is None:
                continue
            # Prefer the route that consumes the most path parameters; ties keep registration order
            if best is None or len(route.param_names) > len(best[0].param_names):
                best = (route, path)

        if best is not None:
            route, path = best
            extras = {
                k: v for k, v in params.items() if k not in route.param_names and k not in route.defaults
            }
            logger.debug("generate %s#%s -> %s", controller, action, route.path)
            return self._assemble(path, extras, options, context)

        if candidates:
            required = sorted({n for r in candidates for n in r.param_names} - set(params))
            detail = f"No route matches {{controller: {controller!r}, action: {action!r}}}"
            if required:
                detail += f", missing required keys: {required}"
            else:
                detail += ", possible unmatched constraints"
            raise RouteNotFound(detail, options)
        raise RouteNotFound(f"No route matches {{controller: {controller!r}, action: {action!r}}}", options)

    def _generate_root(
        self,
        params: Mapping[str, Any],
        options: Mapping[str, Any],
        context: RoutingContext,
    ) -> str:
        """Outside any controller, an empty parameter map means the ``root`` route."""
        route = self._named["root"]
        path = None if _defaults_conflict(route, params) else _fill(route, {**route.defaults, **params})
        if path is None:
            raise RouteNotFound(f"No route matches 'root' ({route.path})", options)
        extras = {k: v for k, v in params.items() if k not in route.param_names and k not in route.defaults}
        logger.debug("generate root -> %s", route.path)
        return self._assemble(path, extras, options, context)

    def _resolve_controller(self, reference: str, namespace: str) -> str:
        """Scope a controller reference to the current namespace.

        ``/users`` is absolute. ``users`` inside the ``admin/v2`` namespace
        tries ``admin/v2/users``, then ``admin/users``, then ``users``.
        """
        if reference.startswith("/"):
            return reference.strip("/")

        known = {controller for controller, _ in self._by_endpoint}
        scope = namespace
        while scope:
            candidate = f"{scope}/{reference}"
            if candidate in known:
                return candidate
            scope = scope.rpartition("/")[0]
        if reference in known:
            return reference

        elsewhere = sorted(c for c in known if c.endswith(f"/{reference}"))
        if len(elsewhere) > 1:
            raise AmbiguousRoute(reference, elsewhere)
        return f"{namespace}/{reference}" if namespace else reference

    # -- Generation from a route name --

    def url_for_name(
        self,
        name: str,
        args: Sequence[Any] = (),
        params: Mapping[str, Any] | None = None,
        *,
        only_path: bool | None = None,
        context: RoutingContext | None = None,
    ) -> str:
        """Generate a path or URL for the route registered under *name*.

        Positional *args* fill path parameters, in template order, that
        *params* does not already name. URL option keys in *params*
        (anchor, host, ...) are applied to the result; the rest become
        path parameters or the query string.
        """
        route = self.named(name)
        context = context or RoutingContext()
        params = dict(params or {})

        open_slots = [n for n in route.param_names if n not in params]
        if len(args) > len(open_slots):
            raise RouteNotFound(
                f"Route {name!r} ({route.path}) takes {len(route.param_names)} "
                f"path parameters, got {len(args)} positional arguments",
                params,
            )
        route_params = {k: v for k, v in params.items() if k not in URL_OPTION_KEYS}
        route_params.update(zip(open_slots, args, strict=False))

        path = _fill(route, {**route.defaults, **route_params})
        if path is None:
            missing = [n for n in route.param_names if route_params.get(n) is None]
            detail = f"No route matches {name!r} ({route.path})"
            if missing:
                detail += f", missing required keys: {missing}"
            else:
                detail += ", possible unmatched constraints"
            raise RouteNotFound(detail, params)

        extras = {k: v for k, v in route_params.items() if k not in route.param_names}
        url_options = dict(params)
        if only_path is not None:
            url_options["only_path"] = only_path
        logger.debug("generate named %s -> %s", name, route.path)
        return self._assemble(path, extras, url_options, context)

    # -- Assembly --

    def _assemble(
        self,
        path: str,
        query: Mapping[str, Any],
        options: Mapping[str, Any],
        context: RoutingContext,
    ) -> str:
        config = self._config
        only_path = options.get("only_path")
        if only_path is None:
            only_path = config.generate_paths_by_default and "host" not in options
        script_name = options.get("script_name")
        if script_name is None:
            script_name = context.script_name or config.script_name

        # An explicit host does not inherit the current request's port
        if options.get("host"):
            host = options["host"]
            port = options.get("port")
        else:
            host = context.host or config.default_host
            port = options["port"] if "port" in options else (context.port or config.default_port)

        return build_url(
            path,
            only_path=bool(only_path),
            params=query,
            anchor=options.get("anchor"),
            trailing_slash=bool(options.get("trailing_slash", config.trailing_slash)),
            script_name=script_name,
            protocol=options.get("protocol"),
            default_protocol=context.protocol or config.default_protocol,
            host=host,
            port=port,
            user=options.get("user"),
            password=options.get("password"),
            port_given="port" in options,
        )
