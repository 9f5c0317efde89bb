"""Parameter classification.

Splits a parameter object into the values consumed by a route's path and
the leftovers destined for the query string::

    route = table.resolve("foo.show")              # foo/{id}
    classify(route, {"Id": 1, "Bar": {"Abc": "abc"}})
    # path_values={"id": "1"}, leftover=(("bar.abc", "abc"),)

A parameter object may be a mapping, a dataclass, a ``NamedTuple``, a
``SimpleNamespace`` or any object with public attributes, slotted or not.
The same kinds of object are *nested* when they appear as a property
value. Scalars, enums, dates and collections are leaves and contribute a
single entry.
"""

import dataclasses
import logging
import types
from collections.abc import Collection, Iterator, Mapping
from dataclasses import dataclass, field
from datetime import date, datetime, time
from enum import Enum
from numbers import Number
from pathlib import PurePath
from typing import Any, ClassVar, Union, get_args, get_origin, get_type_hints
from uuid import UUID

from routeurl.routing.route import PathSegment, Route

logger = logging.getLogger("routeurl.generation")


@dataclass(frozen=True, slots=True)
class ClassifiedParameters:
    """Parameters partitioned for one generation call.

    ``path_values`` and ``optional_path_values`` are keyed by the segment
    name as declared in the route. ``leftover`` keeps the order in which
    properties were enumerated.
    """

    path_values: Mapping[str, str] = field(default_factory=dict)
    optional_path_values: Mapping[str, str] = field(default_factory=dict)
    leftover: tuple[tuple[str, str], ...] = ()

    @property
    def leftover_keys(self) -> tuple[str, ...]:
        return tuple(key for key, _ in self.leftover)


def stringify(value: Any) -> str:
    """Render a scalar the way it appears in a URL.

    Booleans become ``true``/``false``, enums their value, dates and
    times ISO 8601. Everything else goes through ``str()``.
    """
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, Enum):
        return stringify(value.value)
    if isinstance(value, (datetime, date, time)):
        return value.isoformat()
    return str(value)


def _is_namedtuple_type(tp: type) -> bool:
    return issubclass(tp, tuple) and hasattr(tp, "_fields")


# Values rendered whole even when they carry attributes of their own
_SCALARS = (str, bytes, bytearray, Number, Enum, date, time, UUID, PurePath, Collection)


def _instance_attributes(obj: Any) -> dict[str, Any] | None:
    """Attributes stored on *obj* itself, or None if it has no storage.

    Reads ``__slots__`` along the MRO (base classes first) and then
    ``__dict__``.
    """
    cls = type(obj)
    has_storage = hasattr(obj, "__dict__")
    attrs: dict[str, Any] = {}
    for klass in reversed(cls.__mro__):
        slots = klass.__dict__.get("__slots__", ())
        if isinstance(slots, str):
            slots = (slots,)
        for name in slots:
            if name in ("__dict__", "__weakref__"):
                continue
            has_storage = True
            if hasattr(obj, name):
                attrs.setdefault(name, getattr(obj, name))
    if not has_storage:
        return None
    if hasattr(obj, "__dict__"):
        for name, value in vars(obj).items():
            attrs.setdefault(name, value)
    return attrs


def is_aggregate(value: Any) -> bool:
    """True if *value* is an aggregate to flatten into dotted keys.

    Mappings, dataclasses, ``NamedTuple`` and ``SimpleNamespace`` always
    are. Any other instance is an aggregate when it holds public
    attributes, unless it is a scalar, enum, date, UUID, path or
    collection.
    """
    if isinstance(value, (Mapping, types.SimpleNamespace)):
        return True
    if isinstance(value, type):
        return False
    if dataclasses.is_dataclass(value) or _is_namedtuple_type(type(value)):
        return True
    if isinstance(value, _SCALARS):
        return False
    attrs = _instance_attributes(value)
    return attrs is not None and any(not name.startswith("_") for name in attrs)


def iter_properties(obj: Any) -> Iterator[tuple[str, Any]]:
    """Yield ``(name, value)`` for each readable property of *obj*.

    Declaration order is preserved. Names starting with ``_`` are private
    and skipped. Plain objects are read through ``__slots__`` and
    ``__dict__``.
    """
    if isinstance(obj, Mapping):
        items = ((str(key), value) for key, value in obj.items())
    elif dataclasses.is_dataclass(obj) and not isinstance(obj, type):
        items = ((f.name, getattr(obj, f.name)) for f in dataclasses.fields(obj))
    elif _is_namedtuple_type(type(obj)):
        items = zip(obj._fields, obj, strict=True)
    else:
        attrs = _instance_attributes(obj)
        if attrs is None:
            msg = f"Cannot read properties from {type(obj).__name__!r} object"
            raise TypeError(msg)
        items = iter(attrs.items())

    for name, value in items:
        if not name.startswith("_"):
            yield name, value


def iter_declared(cls: type) -> Iterator[tuple[str, Any]]:
    """Yield ``(name, annotation)`` for each declared field of *cls*.

    Works on dataclasses, ``NamedTuple`` classes and plain annotated
    classes. ``ClassVar`` annotations are not fields.
    """
    hints = get_type_hints(cls)
    if dataclasses.is_dataclass(cls):
        names = [f.name for f in dataclasses.fields(cls)]
    elif _is_namedtuple_type(cls):
        names = list(cls._fields)
    else:
        names = [name for name, hint in hints.items() if get_origin(hint) is not ClassVar]

    for name in names:
        if not name.startswith("_"):
            yield name, hints.get(name, Any)


def nested_type(hint: Any) -> type | None:
    """Return the aggregate class behind *hint*, or None for a leaf.

    ``Optional[X]`` and ``X | None`` unwrap to ``X``. Protocols, ABCs,
    parameterized generics and scalars are leaves.
    """
    if get_origin(hint) in (Union, types.UnionType):
        args = [arg for arg in get_args(hint) if arg is not type(None)]
        if len(args) != 1:
            return None
        hint = args[0]
    if not isinstance(hint, type):
        return None
    if dataclasses.is_dataclass(hint) or _is_namedtuple_type(hint):
        return hint
    return None


class _Buckets:
    """Mutable accumulator behind a single ``classify`` call."""

    __slots__ = (
        "leftover",
        "lowercase_keys",
        "optional_path_values",
        "path_values",
        "route",
        "seen_keys",
        "segments",
    )

    def __init__(self, route: Route, lowercase_keys: bool) -> None:
        self.route = route
        self.lowercase_keys = lowercase_keys
        self.segments: dict[str, PathSegment] = {
            seg.param_name.lower(): seg for seg in route.params if seg.param_name
        }
        self.path_values: dict[str, str] = {}
        self.optional_path_values: dict[str, str] = {}
        self.leftover: list[tuple[str, str]] = []
        self.seen_keys: set[str] = set()

    def add_root(self, name: str, value: Any) -> bool:
        """Route a root property to a path bucket. False if no segment matches."""
        segment = self.segments.get(name.lower())
        if segment is None or segment.param_name is None:
            return False
        bucket = self.optional_path_values if segment.optional else self.path_values
        if segment.param_name in bucket:
            logger.debug(
                "Route %r: property %r ignored, segment %r already filled",
                self.route.name,
                name,
                segment.param_name,
            )
        else:
            bucket[segment.param_name] = stringify(value)
        return True

    def add_leftover(self, key: str, value: str) -> None:
        if self.lowercase_keys:
            key = key.lower()
        if key in self.seen_keys:
            logger.debug("Route %r: duplicate query key %r ignored", self.route.name, key)
            return
        self.seen_keys.add(key)
        self.leftover.append((key, value))

    def freeze(self) -> ClassifiedParameters:
        return ClassifiedParameters(
            path_values=self.path_values,
            optional_path_values=self.optional_path_values,
            leftover=tuple(self.leftover),
        )


def classify(
    route: Route,
    params: Any | None,
    *,
    lowercase_keys: bool = True,
) -> ClassifiedParameters:
    """Partition *params* against *route*.

    Each non-null root property lands in exactly one place:

    1. its name matches a required segment (case-insensitively) -> ``path_values``
    2. it matches an optional segment -> ``optional_path_values``
    3. it is a nested aggregate -> flattened into ``leftover`` as ``name.child``
    4. otherwise -> ``leftover`` under its own name

    Null values and null nested objects contribute nothing. When two
    properties differ only in case, the first one declared wins.
    """
    if params is None:
        return ClassifiedParameters()

    buckets = _Buckets(route, lowercase_keys)
    for name, value in iter_properties(params):
        if value is None or buckets.add_root(name, value):
            continue
        if is_aggregate(value):
            _flatten(buckets, name, value, {id(params)})
        else:
            buckets.add_leftover(name, stringify(value))
    return buckets.freeze()


def _flatten(buckets: _Buckets, prefix: str, value: Any, ancestors: set[int]) -> None:
    if id(value) in ancestors:
        buckets.add_leftover(prefix, stringify(value))
        return
    ancestors = ancestors | {id(value)}
    for name, child in iter_properties(value):
        if child is None:
            continue
        key = f"{prefix}.{name}"
        if is_aggregate(child):
            _flatten(buckets, key, child, ancestors)
        else:
            buckets.add_leftover(key, stringify(child))


def classify_type(
    route: Route,
    cls: type,
    *,
    lowercase_keys: bool = True,
) -> ClassifiedParameters:
    """Partition the declared fields of *cls* against *route*.

    The type-level counterpart of ``classify`` used for templates: no
    instance is needed, every declared field counts, and nested
    dataclass or ``NamedTuple`` fields are expanded whether or not an
    instance would have them set. Values are empty strings.
    """
    buckets = _Buckets(route, lowercase_keys)
    for name, hint in iter_declared(cls):
        if buckets.add_root(name, ""):
            continue
        nested = nested_type(hint)
        if nested is None:
            buckets.add_leftover(name, "")
        else:
            _flatten_type(buckets, name, nested, {cls})
    return buckets.freeze()


def _flatten_type(buckets: _Buckets, prefix: str, cls: type, ancestors: set[type]) -> None:
    if cls in ancestors:
        buckets.add_leftover(prefix, "")
        return
    ancestors = ancestors | {cls}
    for name, hint in iter_declared(cls):
        key = f"{prefix}.{name}"
        nested = nested_type(hint)
        if nested is None:
            buckets.add_leftover(key, "")
        else:
            _flatten_type(buckets, key, nested, ancestors)
