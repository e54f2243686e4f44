"""Ambient routing context via ContextVar.

Provides:
- ``RoutingContext``: the request-derived values URL generation reads
  (scheme, host, mount point, current controller/action, referer).
- ``routing_context_var``: the current context for this task/thread.
- ``routing_context()``: a context manager that sets and resets it.

Thread safety:
    ``ContextVar`` is task-local under asyncio and thread-local under
    free-threading (3.14t). No locks needed.
"""

from collections.abc import Iterator
from contextlib import contextmanager
from contextvars import ContextVar
from dataclasses import dataclass, replace

from signpost._internal.asgi import Scope, scope_header

_DEFAULT_PORTS = {"http": 80, "https": 443}


@dataclass(frozen=True, slots=True)
class RoutingContext:
    """Immutable snapshot of the request a URL is generated for.

    Every field is optional. Outside a request the empty context is
    used and generation falls back to ``ResolverConfig`` defaults.
    """

    protocol: str | None = None
    host: str | None = None
    port: int | None = None
    script_name: str = ""
    controller: str | None = None
    action: str | None = None
    referer: str | None = None

    @property
    def namespace(self) -> str:
        """Namespace of the current controller (``admin/posts`` -> ``admin``)."""
        if not self.controller or "/" not in self.controller:
            return ""
        return self.controller.rsplit("/", 1)[0]

    def previous_address(self) -> str | None:
        """The address the current request came from, if the client sent one."""
        return self.referer

    def with_endpoint(self, controller: str | None, action: str | None = None) -> RoutingContext:
        """Return a copy scoped to *controller* and *action*."""
        return replace(self, controller=controller, action=action)

    @classmethod
    def from_asgi(cls, scope: Scope) -> RoutingContext:
        """Build a context from a raw ASGI HTTP scope.

        The ``Host`` header wins over the ``server`` tuple. Default ports
        for the scheme are dropped so generated URLs stay canonical.
        """
        protocol = scope.get("scheme", "http")
        host: str | None = None
        port: int | None = None

        host_header = scope_header(scope, "host")
        if host_header:
            # IPv6 literals are bracketed; the port follows the closing bracket
            bracket = host_header.rfind("]")
            host, sep, raw_port = host_header.rpartition(":")
            if not sep or host_header.rfind(":") < bracket:
                host, raw_port = host_header, ""
            port = int(raw_port) if raw_port.isdigit() else None
        elif scope.get("server"):
            host, port = scope["server"]

        if port is not None and _DEFAULT_PORTS.get(protocol) == port:
            port = None

        return cls(
            protocol=protocol,
            host=host or None,
            port=port,
            script_name=scope.get("root_path", ""),
            referer=scope_header(scope, "referer"),
        )


EMPTY_CONTEXT = RoutingContext()

routing_context_var: ContextVar[RoutingContext] = ContextVar("signpost_routing_context")
"""The current routing context. Set by ``routing_context()``."""


def get_routing_context() -> RoutingContext:
    """Return the current routing context, or the empty one outside a scope."""
    return routing_context_var.get(EMPTY_CONTEXT)


@contextmanager
def routing_context(context: RoutingContext) -> Iterator[RoutingContext]:
    """Make *context* the ambient routing context for the enclosed block.

    Usage::

        with routing_context(RoutingContext.from_asgi(scope)):
            resolver.url_for({"action": "index"})
    """
    token = routing_context_var.set(context)
    try:
        yield context
    finally:
        routing_context_var.reset(token)
