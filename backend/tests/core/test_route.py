"""Route — tests for build_route validation and route immutability.

Tests cover:
    - Valid raw settings produce a Route with parsed fields
    - Each invalid field raises its ConfigError subclass, tagged with the route path
    - Mixed binding styles fail at construction
    - search_roots is [local] or [local, global]
    - Route is frozen
"""

import dataclasses

import pytest

from sqlite_serve.core.errors import (
    InvalidDatabaseLocatorError,
    InvalidQueryError,
    InvalidTemplateLocatorError,
    MixedBindingStyleError,
)
from sqlite_serve.core.route import build_route


def _route(**overrides):
    kwargs = dict(
        path="/books",
        database="books.db",
        query="SELECT * FROM books",
        template="list.hbs",
        params=[],
        template_dir="www/books",
    )
    kwargs.update(overrides)
    return build_route(**kwargs)


def test_build_route_parses_fields():
    route = _route(params=[("", "$arg_id")])
    assert route.path == "/books"
    assert route.database.as_text() == "books.db"
    assert route.query.text == "SELECT * FROM books"
    assert route.template.path == "list.hbs"
    assert len(route.bindings) == 1
    assert route.global_template_dir is None


@pytest.mark.parametrize("field,value,error", [
    ("database", "", InvalidDatabaseLocatorError),
    ("query", "DELETE FROM books", InvalidQueryError),
    ("template", "list.html", InvalidTemplateLocatorError),
])
def test_build_route_rejects_bad_field(field, value, error):
    with pytest.raises(error) as exc:
        _route(**{field: value})
    assert exc.value.context.route_path == "/books"


def test_build_route_rejects_mixed_bindings():
    with pytest.raises(MixedBindingStyleError):
        _route(params=[("", "$arg_a"), (":b", "$arg_b")])


def test_search_roots_local_only():
    assert _route().search_roots() == ["www/books"]


def test_search_roots_local_before_global():
    route = _route(global_template_dir="www/_shared")
    assert route.search_roots() == ["www/books", "www/_shared"]


def test_empty_global_dir_is_ignored():
    assert _route(global_template_dir="").search_roots() == ["www/books"]


def test_route_is_frozen():
    route = _route()
    with pytest.raises(dataclasses.FrozenInstanceError):
        route.path = "/other"
