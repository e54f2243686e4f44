"""Signpost exception hierarchy.

Shared across the classifier, the route set, and the resolver so every
module raises and catches the same types. Nothing here is recovered
locally: a failed resolution is a programming error at the call site.
"""

from collections.abc import Mapping, Sequence
from typing import Any


class SignpostError(Exception):
    """Base for all signpost-specific errors."""


class ConfigurationError(SignpostError):
    """Raised when the route table or resolver configuration is invalid.

    Typically raised while routes are being registered.
    """


class UnroutableValue(SignpostError, TypeError):
    """A descriptor matched no resolution strategy.

    Raised for values that are neither a string, mapping, segment list,
    name, class, nor an object exposing the ``Routable`` capability.
    """

    def __init__(self, value: Any, detail: str = "") -> None:
        self.value = value
        default_detail = (
            f"Cannot resolve {type(value).__name__} {value!r} to a URL. "
            f"Pass a str, a mapping of route parameters, a list of segments, "
            f"a Name, a class, or an object implementing Routable."
        )
        super().__init__(detail or default_detail)


class RouteNotFound(SignpostError, LookupError):
    """The route generator had no route matching the normalized options."""

    def __init__(self, detail: str = "No route matches", options: Mapping[str, Any] | None = None) -> None:
        self.detail = detail
        self.options = dict(options) if options is not None else {}
        super().__init__(detail)


class AmbiguousRoute(SignpostError, LookupError):
    """A relative controller reference matched more than one namespace.

    ``candidates`` lists the fully qualified controllers that matched.
    """

    def __init__(self, reference: str, candidates: Sequence[str]) -> None:
        self.reference = reference
        self.candidates = tuple(candidates)
        listed = ", ".join(f"/{c}" for c in self.candidates)
        super().__init__(
            f"Controller {reference!r} is ambiguous: it matches {listed}. "
            f"Use an absolute reference with a leading '/'."
        )


class MissingHost(SignpostError, ValueError):
    """A full URL was requested but no host is known.

    Set ``host`` in the options, on the ``RoutingContext``, or as
    ``ResolverConfig.default_host``; or pass ``only_path=True``.
    """

    def __init__(self, detail: str = "Missing host to link to!") -> None:
        super().__init__(detail)
