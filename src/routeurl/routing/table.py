"""Named route table.

Routes are registered during setup and frozen with ``compile()``. After
that the table is read-only, so generators can share it across threads.
"""

import logging
from collections.abc import Iterator, Mapping
from types import MappingProxyType
from typing import Any

from routeurl.errors import ConfigurationError, RouteNotFound
from routeurl.routing.params import CONVERTERS, Constraint
from routeurl.routing.route import OPTIONAL, PathSegment, Route

logger = logging.getLogger("routeurl.routing")


def parse_path(path: str, defaults: Mapping[str, Any] | None = None) -> list[PathSegment]:
    """Parse a route path string into segments.

    Examples::

        "/users"            -> [PathSegment("users")]
        "users/{id}"        -> [PathSegment("users"), PathSegment("{id}", is_param=True, ...)]
        "/users/{id:int}"   -> [..., PathSegment("{id:int}", is_param=True, param_type="int")]
        "/posts/{page?}"    -> [..., PathSegment("{page?}", is_param=True, optional=True)]

    A parameter is also optional when *defaults* maps its name to
    ``OPTIONAL``.
    """
    if "<" in path and ">" in path:
        msg = (
            f"Route path {path!r} uses <param> syntax. "
            "Use {param} placeholders instead, e.g. /users/{id}."
        )
        raise ConfigurationError(msg)

    defaults = defaults or {}
    segments: list[PathSegment] = []
    seen: set[str] = set()
    for part in path.strip("/").split("/"):
        if not part:
            continue
        if not (part.startswith("{") and part.endswith("}")):
            if "{" in part or "}" in part:
                msg = f"Route path {path!r}: placeholders must fill a whole segment, got {part!r}"
                raise ConfigurationError(msg)
            segments.append(PathSegment(value=part))
            continue

        inner = part[1:-1]
        optional = inner.endswith("?")
        inner = inner.removesuffix("?")
        if ":" in inner:
            param_name, param_type = inner.split(":", 1)
        else:
            param_name = inner
            param_type = "str"

        if not param_name:
            msg = f"Route path {path!r}: empty parameter name in {part!r}"
            raise ConfigurationError(msg)
        if param_type not in CONVERTERS:
            msg = (
                f"Route path {path!r}: unknown parameter type {param_type!r}. "
                f"Expected one of {sorted(CONVERTERS)}."
            )
            raise ConfigurationError(msg)
        if param_name.lower() in seen:
            msg = f"Route path {path!r}: duplicate parameter {param_name!r}"
            raise ConfigurationError(msg)
        seen.add(param_name.lower())

        segments.append(
            PathSegment(
                value=part,
                is_param=True,
                param_name=param_name,
                param_type=param_type,
                optional=optional or defaults.get(param_name) is OPTIONAL,
            )
        )
    return segments


class RouteTable:
    """Registry of named routes.

    Usage::

        table = RouteTable()
        table.add("foo.show", "foo/{id}", constraints={"id": r"\\d+"})
        table.add("foo.list", "foo/{page?}")
        table.compile()
        route = table.resolve("foo.show")
    """

    __slots__ = ("_compiled", "_routes")

    def __init__(self) -> None:
        self._routes: dict[str, Route] = {}
        self._compiled = False

    def add(
        self,
        name: str,
        path: str,
        *,
        defaults: Mapping[str, Any] | None = None,
        constraints: Mapping[str, Constraint] | None = None,
    ) -> Route:
        """Register a named route. Must be called before compile()."""
        if self._compiled:
            msg = "Cannot add routes after compilation."
            raise RuntimeError(msg)
        if not name:
            msg = f"Route {path!r} needs a non-empty name."
            raise ConfigurationError(msg)
        if name in self._routes:
            msg = f"Route name {name!r} is already registered for {self._routes[name].path!r}."
            raise ConfigurationError(msg)

        route = Route(
            name=name,
            path=path,
            segments=tuple(parse_path(path, defaults)),
            constraints=MappingProxyType(dict(constraints or {})),
            defaults=MappingProxyType(dict(defaults or {})),
        )
        self._routes[name] = route
        logger.debug("Registered route %r -> %r", name, path)
        return route

    def compile(self) -> None:
        """Freeze the table. No more routes can be added."""
        self._compiled = True

    @property
    def compiled(self) -> bool:
        return self._compiled

    @property
    def routes(self) -> list[Route]:
        """Return all registered routes in registration order."""
        return list(self._routes.values())

    def resolve(self, name: str) -> Route:
        """Look up a route by exact name.

        Raises ``RouteNotFound`` if no route is registered under *name*.
        """
        try:
            return self._routes[name]
        except KeyError:
            raise RouteNotFound(name) from None

    def get(self, name: str) -> Route | None:
        """Return the route registered under *name*, or None."""
        return self._routes.get(name)

    def __contains__(self, name: object) -> bool:
        return name in self._routes

    def __iter__(self) -> Iterator[Route]:
        return iter(self._routes.values())

    def __len__(self) -> int:
        return len(self._routes)
