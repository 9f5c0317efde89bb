"""Tests for routeurl.generation.classify — partitioning parameter objects."""

import logging
from dataclasses import dataclass, field
from datetime import date, datetime
from enum import Enum
from pathlib import PurePosixPath
from types import SimpleNamespace
from typing import ClassVar, NamedTuple, Protocol
from uuid import UUID

import pytest

from routeurl.generation.classify import (
    ClassifiedParameters,
    classify,
    classify_type,
    is_aggregate,
    iter_properties,
    nested_type,
    stringify,
)
from routeurl.routing.route import OPTIONAL, Route
from routeurl.routing.table import RouteTable


def _route(path: str = "foo/{id}", **kwargs: object) -> Route:
    return RouteTable().add("r", path, **kwargs)  # type: ignore[arg-type]


class Color(Enum):
    RED = "red"


@dataclass
class BarType:
    abc: str | None = "abc"
    xyz: str | None = "xyz"


@dataclass
class ComplexRouteParameters:
    bar: BarType | None = field(default_factory=BarType)
    id: int = 0


@dataclass
class Filter:
    level: int | None = None


@dataclass
class NestedFilter:
    id: int = 0
    filter: Filter | None = None


class Point(NamedTuple):
    x: int
    y: int


class HasFirst[T](Protocol):
    @property
    def first(self) -> T: ...


class FirstImpl:
    def __init__(self, first: int) -> None:
        self.first = first


class PlainBar:
    def __init__(self) -> None:
        self.abc = "abc"


class SlottedParams:
    __slots__ = ("id", "page", "_cache")

    def __init__(self, id: int, page: int) -> None:
        self.id = id
        self.page = page
        self._cache = None


class SlottedChild(SlottedParams):
    __slots__ = "sort"

    def __init__(self, id: int, page: int, sort: str) -> None:
        super().__init__(id, page)
        self.sort = sort


@dataclass
class WithInterface:
    id: int = 0
    test: HasFirst[int] | None = None


@dataclass
class Node:
    name: str = ""
    parent: "Node | None" = None


class AnnotatedParams:
    kind: ClassVar[str] = "annotated"
    id: int
    page: int


class TestStringify:
    @pytest.mark.parametrize(
        ("value", "expected"),
        [
            (1, "1"),
            (-12, "-12"),
            (2.5, "2.5"),
            ("abc", "abc"),
            (True, "true"),
            (False, "false"),
            (Color.RED, "red"),
            (date(2024, 1, 2), "2024-01-02"),
            (datetime(2024, 1, 2, 3, 4, 5), "2024-01-02T03:04:05"),
        ],
    )
    def test_scalars(self, value: object, expected: str) -> None:
        assert stringify(value) == expected


class TestIsAggregate:
    @pytest.mark.parametrize(
        "value",
        [
            {"a": 1},
            BarType(),
            Point(1, 2),
            SimpleNamespace(a=1),
            FirstImpl(1),
            SlottedParams(1, 2),
        ],
    )
    def test_aggregates(self, value: object) -> None:
        assert is_aggregate(value)

    @pytest.mark.parametrize(
        "value",
        [
            1,
            "abc",
            (1, 2),
            [1, 2],
            BarType,
            FirstImpl,
            date(2024, 1, 1),
            Color.RED,
            UUID(int=1),
            PurePosixPath("a/b"),
            object(),
        ],
    )
    def test_leaves(self, value: object) -> None:
        assert not is_aggregate(value)


class TestIterProperties:
    def test_mapping_order(self) -> None:
        assert list(iter_properties({"b": 1, "a": 2})) == [("b", 1), ("a", 2)]

    def test_dataclass_declaration_order(self) -> None:
        props = list(iter_properties(ComplexRouteParameters(id=3)))
        assert [name for name, _ in props] == ["bar", "id"]

    def test_namedtuple(self) -> None:
        assert list(iter_properties(Point(1, 2))) == [("x", 1), ("y", 2)]

    def test_plain_object_public_attributes(self) -> None:
        obj = FirstImpl(1)
        obj._hidden = 2  # type: ignore[attr-defined]
        assert list(iter_properties(obj)) == [("first", 1)]

    def test_slotted_object(self) -> None:
        assert list(iter_properties(SlottedParams(1, 2))) == [("id", 1), ("page", 2)]

    def test_slots_read_along_mro(self) -> None:
        props = list(iter_properties(SlottedChild(1, 2, "name")))
        assert props == [("id", 1), ("page", 2), ("sort", "name")]

    def test_unset_slot_skipped(self) -> None:
        obj = SlottedParams.__new__(SlottedParams)
        obj.id = 3
        assert list(iter_properties(obj)) == [("id", 3)]

    def test_unreadable_object(self) -> None:
        with pytest.raises(TypeError, match="Cannot read properties"):
            list(iter_properties(42))


class TestClassify:
    def test_no_params(self) -> None:
        assert classify(_route(), None) == ClassifiedParameters()

    def test_required_segment(self) -> None:
        result = classify(_route(), {"Id": 1})
        assert result.path_values == {"id": "1"}
        assert result.optional_path_values == {}
        assert result.leftover == ()

    def test_optional_segment(self) -> None:
        result = classify(_route("bar/{id}", defaults={"id": OPTIONAL}), {"id": 7})
        assert result.path_values == {}
        assert result.optional_path_values == {"id": "7"}

    def test_leftover_in_declaration_order(self) -> None:
        result = classify(_route(), {"Id": 1, "Bar": "Foo", "Bam": 2})
        assert result.leftover == (("bar", "Foo"), ("bam", "2"))

    def test_nested_flattened(self) -> None:
        result = classify(_route(), {"Id": 1, "Bar": {"Abc": "abc", "Def": "def"}})
        assert result.path_values == {"id": "1"}
        assert result.leftover == (("bar.abc", "abc"), ("bar.def", "def"))

    def test_deep_nesting(self) -> None:
        result = classify(_route(), {"a": {"b": {"c": 1}}})
        assert result.leftover == (("a.b.c", "1"),)

    def test_nested_never_fills_path(self) -> None:
        result = classify(_route(), {"filter": {"id": 5}})
        assert result.path_values == {}
        assert result.leftover == (("filter.id", "5"),)

    def test_null_values_skipped(self) -> None:
        result = classify(_route(), {"id": None, "q": None})
        assert result == ClassifiedParameters()

    def test_null_nested_object_contributes_nothing(self) -> None:
        result = classify(_route(), NestedFilter(id=1))
        assert result.path_values == {"id": "1"}
        assert result.leftover == ()

    def test_all_null_nested_object_contributes_nothing(self) -> None:
        result = classify(_route(), NestedFilter(id=1, filter=Filter()))
        assert result.leftover == ()

    def test_null_leaf_in_nested_object(self) -> None:
        result = classify(_route(), {"bar": BarType(abc=None)})
        assert result.leftover == (("bar.xyz", "xyz"),)

    def test_dataclass_instance(self) -> None:
        result = classify(_route(), ComplexRouteParameters(id=1))
        assert result.path_values == {"id": "1"}
        assert result.leftover == (("bar.abc", "abc"), ("bar.xyz", "xyz"))

    def test_plain_object_value_flattened(self) -> None:
        result = classify(_route(), WithInterface(id=1, test=FirstImpl(5)))
        assert result.leftover == (("test.first", "5"),)

    def test_plain_class_instance_flattened(self) -> None:
        result = classify(_route(), {"id": 1, "bar": PlainBar()})
        assert result.path_values == {"id": "1"}
        assert result.leftover == (("bar.abc", "abc"),)

    def test_slotted_root(self) -> None:
        result = classify(_route(), SlottedParams(4, 2))
        assert result.path_values == {"id": "4"}
        assert result.leftover == (("page", "2"),)

    def test_slotted_value_flattened(self) -> None:
        result = classify(_route(), {"id": 1, "paging": SlottedParams(0, 3)})
        assert result.leftover == (("paging.id", "0"), ("paging.page", "3"))

    def test_namedtuple_value_flattened(self) -> None:
        result = classify(_route(), {"at": Point(1, 2)})
        assert result.leftover == (("at.x", "1"), ("at.y", "2"))

    def test_plain_tuple_is_leaf(self) -> None:
        result = classify(_route(), {"at": (1, 2)})
        assert result.leftover == (("at", "(1, 2)"),)

    def test_each_property_in_one_bucket(self) -> None:
        route = _route("foo/{one}/{two}", defaults={"two": OPTIONAL})
        result = classify(route, {"one": 1, "two": 2, "three": 3})
        assert result.path_values == {"one": "1"}
        assert result.optional_path_values == {"two": "2"}
        assert result.leftover == (("three", "3"),)

    def test_first_declared_casing_wins(self, caplog: pytest.LogCaptureFixture) -> None:
        with caplog.at_level(logging.DEBUG, logger="routeurl.generation"):
            result = classify(_route(), {"Id": 1, "id": 2})
        assert result.path_values == {"id": "1"}
        assert result.leftover == ()
        assert any("already filled" in r.getMessage() for r in caplog.records)

    def test_duplicate_leftover_key_first_wins(self) -> None:
        result = classify(_route(), {"Q": "a", "q": "b"})
        assert result.leftover == (("q", "a"),)

    def test_preserve_key_case(self) -> None:
        result = classify(_route(), {"pageSize": 10, "Bar": {"Abc": 1}}, lowercase_keys=False)
        assert result.leftover == (("pageSize", "10"), ("Bar.Abc", "1"))

    def test_segment_name_keeps_route_casing(self) -> None:
        result = classify(_route("users/{userId}"), {"USERID": 4})
        assert result.path_values == {"userId": "4"}

    def test_self_reference_does_not_recurse_forever(self) -> None:
        data: dict[str, object] = {"name": "x"}
        data["self"] = data
        result = classify(_route(), {"node": data})
        assert result.leftover_keys == ("node.name", "node.self")


class TestClassifyType:
    def test_declared_nested_fields(self) -> None:
        result = classify_type(_route(), ComplexRouteParameters)
        assert result.path_values == {"id": ""}
        assert result.leftover_keys == ("bar.abc", "bar.xyz")

    def test_interface_annotation_is_leaf(self) -> None:
        result = classify_type(_route(), WithInterface)
        assert result.leftover_keys == ("test",)

    def test_namedtuple_class(self) -> None:
        result = classify_type(_route(), Point)
        assert result.leftover_keys == ("x", "y")

    def test_plain_annotated_class_skips_classvar(self) -> None:
        result = classify_type(_route(), AnnotatedParams)
        assert result.path_values == {"id": ""}
        assert result.leftover_keys == ("page",)

    def test_recursive_type(self) -> None:
        result = classify_type(_route(), Node)
        assert result.leftover_keys == ("name", "parent")


class TestNestedType:
    def test_optional_dataclass(self) -> None:
        assert nested_type(BarType | None) is BarType

    def test_plain_dataclass(self) -> None:
        assert nested_type(BarType) is BarType

    def test_scalar(self) -> None:
        assert nested_type(int) is None
        assert nested_type(str | None) is None

    def test_generic_protocol(self) -> None:
        assert nested_type(HasFirst[int]) is None

    def test_ambiguous_union(self) -> None:
        assert nested_type(BarType | Filter) is None
