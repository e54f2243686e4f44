"""Record Adapter — the capability a domain object implements to get a URL.

Any object with ``is_persisted()``, ``to_param()`` and ``route_key_name()``
satisfies ``Routable``. Developers bring their own model (an ORM class,
a dataclass) and either implement the three methods or mix in
``RoutableMixin`` for the common case of an ``id`` attribute::

    @dataclass
    class Workshop(RoutableMixin):
        id: int | None = None

    resolver.url_for(Workshop())       # -> "/workshops"
    resolver.url_for(Workshop(id=5))   # -> "/workshops/5"
"""

from dataclasses import dataclass
from typing import Any, Protocol, runtime_checkable

from signpost.naming import pluralize, route_key_for_type


@runtime_checkable
class Routable(Protocol):
    """Protocol for objects that participate in named-route inference."""

    def is_persisted(self) -> bool: ...

    def to_param(self) -> str | None: ...

    def route_key_name(self) -> str: ...


class RoutableMixin:
    """Default ``Routable`` implementation keyed on an ``id`` attribute."""

    __slots__ = ()

    def is_persisted(self) -> bool:
        return getattr(self, "id", None) is not None

    def to_param(self) -> str | None:
        if not self.is_persisted():
            return None
        return str(getattr(self, "id"))

    def route_key_name(self) -> str:
        return route_key_for_type(type(self))


@dataclass(frozen=True, slots=True)
class RecordAdapter:
    """Result of one capability query against a record.

    ``singular`` names the instance route (``workshop``), ``plural`` the
    collection/create route (``workshops``). ``param`` is the identifier
    projection, ``None`` for unsaved records.
    """

    record: Any
    singular: str
    persisted: bool
    param: str | None

    @property
    def plural(self) -> str:
        return pluralize(self.singular)

    @property
    def route_key(self) -> str:
        """Route stem for this record on its own: instance when saved, collection otherwise."""
        return self.singular if self.persisted else self.plural


def as_routable(value: Any) -> RecordAdapter | None:
    """Query *value* for the ``Routable`` capability.

    Returns a ``RecordAdapter`` snapshot when the capability is present,
    ``None`` otherwise. The record's methods are each called exactly once.
    """
    if isinstance(value, type) or not isinstance(value, Routable):
        return None
    persisted = bool(value.is_persisted())
    return RecordAdapter(
        record=value,
        singular=value.route_key_name(),
        persisted=persisted,
        param=value.to_param() if persisted else None,
    )


def generic_param(value: Any) -> str | None:
    """Identifier projection for objects without the capability.

    Uses ``to_param()`` when the object has one, then an ``id``
    attribute. Returns None when neither yields a value.
    """
    to_param = getattr(value, "to_param", None)
    if callable(to_param):
        param = to_param()
        return None if param is None else str(param)
    ident = getattr(value, "id", None)
    return None if ident is None else str(ident)
