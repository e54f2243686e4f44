"""Tests for signpost.polymorphic — route names inferred from components."""

from dataclasses import dataclass

import pytest

from signpost.context import RoutingContext
from signpost.descriptors import Name, RecordTarget, classify
from signpost.errors import RouteNotFound, UnroutableValue
from signpost.polymorphic import PolymorphicBuilder
from signpost.records import RecordAdapter, RoutableMixin
from signpost.routing.router import RouteSet


@dataclass
class Workshop(RoutableMixin):
    id: int | None = None


@dataclass
class Blog(RoutableMixin):
    id: int | None = None


@dataclass
class Post(RoutableMixin):
    id: int | None = None


class Legacy:
    """No Routable capability, but an id and a registered route."""

    def __init__(self, id: int) -> None:
        self.id = id


def _routes() -> RouteSet:
    routes = RouteSet()
    routes.add("/workshops", name="workshops")
    routes.add("/workshops/new", name="new_workshop")
    routes.add("/workshops/{id}", name="workshop")
    routes.add("/workshops/{id}/edit", name="edit_workshop")
    routes.add("/admin/workshops/{id}", name="admin_workshop")
    routes.add("/blogs/{blog_id:int}/posts", name="blog_posts")
    routes.add("/blogs/{blog_id:int}/posts/{id:int}", name="blog_post")
    routes.add("/legacies/{id}", name="legacy")
    routes.add("/dashboard", name="dashboard")
    routes.compile()
    return routes


def _builder(*, only_path: bool = True, context: RoutingContext | None = None) -> PolymorphicBuilder:
    return PolymorphicBuilder(_routes(), only_path=only_path, context=context or RoutingContext())


class TestHandleName:
    def test_literal_route_name(self) -> None:
        assert _builder().handle_name("dashboard") == "/dashboard"

    def test_unknown_name(self) -> None:
        with pytest.raises(RouteNotFound):
            _builder().handle_name("nope")

    def test_url_form(self) -> None:
        builder = _builder(only_path=False, context=RoutingContext(host="example.com"))
        assert builder.handle_name("dashboard") == "http://example.com/dashboard"


class TestHandleType:
    def test_class_resolves_to_collection(self) -> None:
        assert _builder().handle_type(Workshop) == "/workshops"


class TestHandleRecord:
    def test_new_record_resolves_to_collection(self) -> None:
        target = classify(Workshop())
        assert _builder().handle_record(target) == "/workshops"  # type: ignore[arg-type]

    def test_saved_record_resolves_to_instance(self) -> None:
        target = classify(Workshop(id=5))
        assert _builder().handle_record(target) == "/workshops/5"  # type: ignore[arg-type]

    def test_adapter_route_key_picks_stem(self) -> None:
        class DashboardAdapter(RecordAdapter):
            @property
            def route_key(self) -> str:
                return "dashboard"

        adapter = DashboardAdapter(record=object(), singular="board", persisted=False, param=None)
        target = RecordTarget(value=adapter.record, adapter=adapter)
        assert _builder().handle_record(target) == "/dashboard"

    def test_generic_object_with_id(self) -> None:
        target = classify(Legacy(7))
        assert _builder().handle_record(target) == "/legacies/7"  # type: ignore[arg-type]

    def test_raw_number_is_unroutable(self) -> None:
        target = classify(42)
        with pytest.raises(UnroutableValue) as exc_info:
            _builder().handle_record(target)  # type: ignore[arg-type]
        assert exc_info.value.value == 42


class TestHandleList:
    def test_nested_records(self) -> None:
        assert _builder().handle_list((Blog(id=1), Post(id=2)), {}) == "/blogs/1/posts/2"

    def test_nested_new_record_is_collection(self) -> None:
        assert _builder().handle_list((Blog(id=1), Post()), {}) == "/blogs/1/posts"

    def test_nested_class_is_collection(self) -> None:
        assert _builder().handle_list((Blog(id=1), Post), {}) == "/blogs/1/posts"

    def test_name_prefix(self) -> None:
        assert _builder().handle_list((Name("admin"), Workshop(id=5)), {}) == "/admin/workshops/5"

    def test_string_prefix(self) -> None:
        assert _builder().handle_list(("admin", Workshop(id=5)), {}) == "/admin/workshops/5"

    def test_new_action(self) -> None:
        assert _builder().handle_list((Workshop(),), {"action": "new"}) == "/workshops/new"
        assert _builder().handle_list((Workshop,), {"action": "new"}) == "/workshops/new"

    def test_edit_action(self) -> None:
        assert _builder().handle_list((Workshop(id=5),), {"action": "edit"}) == "/workshops/5/edit"

    def test_options_anchor_and_query(self) -> None:
        result = _builder().handle_list((Blog(id=1), Post(id=2)), {"anchor": "comments", "page": 2})
        assert result == "/blogs/1/posts/2?page=2#comments"

    def test_only_path_override(self) -> None:
        result = _builder().handle_list((Workshop(id=5),), {"only_path": False, "host": "example.com"})
        assert result == "http://example.com/workshops/5"

    def test_unsaved_parent(self) -> None:
        with pytest.raises(UnroutableValue, match="unsaved Blog"):
            _builder().handle_list((Blog(), Post(id=2)), {})

    def test_empty(self) -> None:
        with pytest.raises(UnroutableValue, match="empty segment list"):
            _builder().handle_list((), {})

    def test_unregistered_combination(self) -> None:
        with pytest.raises(RouteNotFound, match="workshop_post"):
            _builder().handle_list((Workshop(id=1), Post(id=2)), {})
