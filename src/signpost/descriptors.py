"""Destination descriptors and their classification.

Call sites pass whatever is convenient: a literal URL, a parameter map,
a list of path components, a route ``Name``, a class, or a record.
``classify()`` turns that value into exactly one target variant; the
resolver then dispatches on the variant.

Dispatch order (first match wins):

    1. ``str``              -> LiteralTarget
    2. ``None``             -> DefaultTarget
    3. ``Mapping``          -> ParamsTarget
    4. ``BACK``             -> BackTarget
    5. ``list`` / ``tuple`` -> SegmentsTarget (trailing mapping = options)
    6. ``Name``             -> NameTarget
    7. class                -> TypeTarget
    8. anything else        -> RecordTarget (capability queried once)
"""

from collections.abc import Mapping
from dataclasses import dataclass, field
from typing import Any

from signpost.records import RecordAdapter, as_routable


@dataclass(frozen=True, slots=True)
class Name:
    """A bare route name, e.g. ``Name("new_workshop")``.

    Strings are returned unchanged by the resolver, so a route name has
    to be wrapped to be looked up.
    """

    name: str

    def __str__(self) -> str:
        return self.name


BACK = Name("back")
"""The previous page: the referer when usable, else a history.back() link."""


# -- Targets --


@dataclass(frozen=True, slots=True)
class LiteralTarget:
    url: str


@dataclass(frozen=True, slots=True)
class DefaultTarget:
    pass


@dataclass(frozen=True, slots=True)
class ParamsTarget:
    params: Mapping[Any, Any]


@dataclass(frozen=True, slots=True)
class BackTarget:
    pass


@dataclass(frozen=True, slots=True)
class SegmentsTarget:
    components: tuple[Any, ...]
    options: dict[Any, Any] = field(default_factory=dict)


@dataclass(frozen=True, slots=True)
class NameTarget:
    name: str


@dataclass(frozen=True, slots=True)
class TypeTarget:
    cls: type


@dataclass(frozen=True, slots=True)
class RecordTarget:
    """A record, with the result of its capability query.

    ``adapter`` is None when the value does not implement ``Routable``;
    the value is then attempted generically.
    """

    value: Any
    adapter: RecordAdapter | None


type Target = (
    LiteralTarget
    | DefaultTarget
    | ParamsTarget
    | BackTarget
    | SegmentsTarget
    | NameTarget
    | TypeTarget
    | RecordTarget
)


def split_options(components: list[Any] | tuple[Any, ...]) -> tuple[tuple[Any, ...], dict[Any, Any]]:
    """Split a segment list into path components and a trailing options map.

    The last element is extracted as options only when it is a mapping.
    ``None`` components are dropped.
    """
    items = list(components)
    options: dict[Any, Any] = {}
    if items and isinstance(items[-1], Mapping):
        options = dict(items.pop())
    return tuple(c for c in items if c is not None), options


def classify(value: Any) -> Target:
    """Select the resolution strategy for *value*."""
    match value:
        case str():
            return LiteralTarget(value)
        case None:
            return DefaultTarget()
        case Mapping():
            return ParamsTarget(value)
        case Name(name="back"):
            return BackTarget()
        case list() | tuple():
            components, options = split_options(value)
            return SegmentsTarget(components, options)
        case Name(name=name):
            return NameTarget(name)
        case type():
            return TypeTarget(value)
        case _:
            return RecordTarget(value, as_routable(value))
