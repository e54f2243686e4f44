"""Route and PathSegment frozen dataclasses."""

from collections.abc import Mapping
from dataclasses import dataclass, field
from typing import Any


@dataclass(frozen=True, slots=True)
class PathSegment:
    """A parsed segment of a route path.

    Static:  ``/users``  (is_param=False)
    Param:   ``/{id}``   (is_param=True, param_name="id")
    Typed:   ``/{id:int}`` (is_param=True, param_name="id", param_type="int")
    """

    value: str
    is_param: bool = False
    param_name: str | None = None
    param_type: str = "str"


@dataclass(frozen=True, slots=True)
class Route:
    """A frozen route definition.

    ``name`` makes the route addressable by the named-route builder.
    ``controller``/``action`` make it reachable from a parameter map.
    ``defaults`` are parameters implied by the route; they never end up
    in the query string.
    """

    path: str
    name: str | None = None
    controller: str | None = None
    action: str | None = None
    defaults: Mapping[str, Any] = field(default_factory=dict)
    segments: tuple[PathSegment, ...] = field(default=(), compare=False, repr=False)

    @property
    def param_names(self) -> tuple[str, ...]:
        """Path parameter names in template order."""
        return tuple(s.param_name for s in self.segments if s.is_param and s.param_name)
