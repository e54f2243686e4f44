"""Named-route builder — route names inferred from records, classes and names.

A list of components is folded into one route name plus positional
arguments, then handed to ``RouteSet.url_for_name``::

    [blog, post]            -> blog_post(blog.id, post.id)
    [Name("admin"), post]   -> admin_post(post.id)
    [blog, Post]            -> blog_posts(blog.id)
    [Workshop(), {"action": "new"}] -> new_workshop()

A saved record contributes its singular route key and its ``to_param()``;
an unsaved one (or a class) as the last component contributes the
plural key, or the singular one when the action is ``new``.
"""

from collections.abc import Mapping, Sequence
from typing import Any

from signpost.context import RoutingContext
from signpost.descriptors import Name, RecordTarget
from signpost.errors import UnroutableValue
from signpost.naming import pluralize, route_key_for_type
from signpost.options import canonical_key
from signpost.records import RecordAdapter, as_routable, generic_param
from signpost.routing.router import RouteSet

type Component = tuple[Any, RecordAdapter | None]


class PolymorphicBuilder:
    """Builds paths or full URLs from route names, classes and records.

    ``only_path`` selects the form: True for paths, False for full URLs.
    A trailing options map may still override it per call.
    """

    __slots__ = ("_context", "_only_path", "_routes")

    def __init__(self, routes: RouteSet, *, only_path: bool, context: RoutingContext) -> None:
        self._routes = routes
        self._only_path = only_path
        self._context = context

    def handle_name(self, name: str) -> str:
        """Resolve a route by its literal name."""
        return self._routes.url_for_name(name, only_path=self._only_path, context=self._context)

    def handle_type(self, cls: type) -> str:
        """Resolve the collection route of a class (``Workshop`` -> ``workshops``)."""
        return self._build([(cls, None)], {})

    def handle_record(self, target: RecordTarget) -> str:
        """Resolve a record, choosing the route shape from its persistence state."""
        return self._build([(target.value, target.adapter)], {})

    def handle_list(self, components: Sequence[Any], options: Mapping[Any, Any]) -> str:
        """Resolve a component list with its (already extracted) options map."""
        if not components:
            raise UnroutableValue(list(components), "Cannot resolve an empty segment list to a URL.")
        pairs: list[Component] = []
        for component in components:
            if isinstance(component, str | Name | type):
                pairs.append((component, None))
            else:
                pairs.append((component, as_routable(component)))
        return self._build(pairs, options)

    def _build(self, pairs: list[Component], options: Mapping[Any, Any]) -> str:
        params = {canonical_key(k): v for k, v in options.items()}
        action = params.pop("action", None)
        only_path = params.pop("only_path", self._only_path)

        parts: list[str] = []
        args: list[Any] = []
        last_index = len(pairs) - 1
        for index, (component, adapter) in enumerate(pairs):
            is_last = index == last_index
            match component:
                case str() | Name():
                    parts.append(str(component))
                case type():
                    singular = route_key_for_type(component)
                    parts.append(pluralize(singular) if is_last and action != "new" else singular)
                case _:
                    adapter = adapter or self._generic_adapter(component)
                    if adapter.persisted:
                        parts.append(adapter.route_key)
                        args.append(adapter.param)
                    elif is_last:
                        parts.append(adapter.singular if action == "new" else adapter.route_key)
                    else:
                        msg = (
                            f"Cannot nest under unsaved {type(component).__name__}: "
                            f"a parent record needs an identifier."
                        )
                        raise UnroutableValue(component, msg)

        name = "_".join([str(action), *parts] if action else parts)
        return self._routes.url_for_name(
            name,
            args,
            params,
            only_path=only_path,
            context=self._context,
        )

    def _generic_adapter(self, value: Any) -> RecordAdapter:
        """Treat an object without the Routable capability as a saved record.

        Works when the object projects an identifier (``to_param()`` or
        ``id``) and its type has a registered instance route.
        """
        param = generic_param(value)
        singular = route_key_for_type(type(value))
        if param is None or not self._routes.has_named(singular):
            raise UnroutableValue(value)
        return RecordAdapter(record=value, singular=singular, persisted=True, param=param)
