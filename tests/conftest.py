"""Shared route table and request fixtures."""

from collections.abc import Callable

import pytest

from routeurl.http.request import RequestContext
from routeurl.routing.route import OPTIONAL
from routeurl.routing.table import RouteTable

BASE_URL = "http://localhost:8000/"


def build_table() -> RouteTable:
    table = RouteTable()
    table.add("foo.show", "foo/{id}")
    table.add("bar.show", "bar/{id}", defaults={"id": OPTIONAL})
    table.add("bar.one.two", "bar/{one}/{two}", defaults={"one": OPTIONAL, "two": OPTIONAL})
    table.add("foo.one.two", "foo/{one}/{two}")
    table.add("constraint", "constraints/{id:int}", constraints={"id": r"\d+"})
    table.compile()
    return table


def single_route_table(name: str, path: str, **kwargs: object) -> RouteTable:
    table = RouteTable()
    table.add(name, path, **kwargs)  # type: ignore[arg-type]
    table.compile()
    return table


@pytest.fixture
def table() -> RouteTable:
    return build_table()


@pytest.fixture
def make_table() -> Callable[..., RouteTable]:
    """Build a compiled table holding one route, like ``RouteTable.add``."""
    return single_route_table


@pytest.fixture
def request_context() -> RequestContext:
    return RequestContext.from_url(BASE_URL)
