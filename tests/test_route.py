"""Tests for signpost.routing.route — Route, PathSegment."""

import pytest

from signpost.routing.route import PathSegment, Route
from signpost.routing.router import parse_path


class TestPathSegment:
    def test_static(self) -> None:
        seg = PathSegment(value="users")
        assert seg.value == "users"
        assert seg.is_param is False
        assert seg.param_name is None
        assert seg.param_type == "str"

    def test_param(self) -> None:
        seg = PathSegment(value="{id}", is_param=True, param_name="id", param_type="int")
        assert seg.is_param is True
        assert seg.param_name == "id"
        assert seg.param_type == "int"

    def test_frozen(self) -> None:
        seg = PathSegment(value="users")
        with pytest.raises(AttributeError):
            seg.value = "other"  # type: ignore[misc]


class TestRoute:
    def test_creation(self) -> None:
        route = Route(path="/users")
        assert route.path == "/users"
        assert route.name is None
        assert route.controller is None
        assert route.action is None
        assert route.defaults == {}
        assert route.param_names == ()

    def test_named_endpoint(self) -> None:
        route = Route(path="/users", name="users", controller="users", action="index")
        assert route.name == "users"
        assert route.controller == "users"
        assert route.action == "index"

    def test_param_names_in_template_order(self) -> None:
        path = "/blogs/{blog_id:int}/posts/{id}"
        route = Route(path=path, segments=tuple(parse_path(path)))
        assert route.param_names == ("blog_id", "id")

    def test_frozen(self) -> None:
        route = Route(path="/users")
        with pytest.raises(AttributeError):
            route.path = "/other"  # type: ignore[misc]
