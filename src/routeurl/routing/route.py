"""Route and PathSegment frozen dataclasses."""

from collections.abc import Mapping
from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Any, Final

from routeurl.routing.params import Constraint


class _Optional:
    """Marker for a route default that makes its segment optional."""

    __slots__ = ()

    def __repr__(self) -> str:
        return "OPTIONAL"

    def __reduce__(self) -> str:
        return "OPTIONAL"


OPTIONAL: Final = _Optional()
"""Route default meaning "this segment may be left out"."""


@dataclass(frozen=True, slots=True)
class PathSegment:
    """A parsed segment of a route path.

    Static:   ``/users``       (is_param=False)
    Param:    ``/{id}``        (is_param=True, param_name="id")
    Typed:    ``/{id:int}``    (is_param=True, param_name="id", param_type="int")
    Optional: ``/{page?}``     (is_param=True, param_name="page", optional=True)
    """

    value: str
    is_param: bool = False
    param_name: str | None = None
    param_type: str = "str"
    optional: bool = False


@dataclass(frozen=True, slots=True)
class Route:
    """A frozen, named route definition.

    Created by ``RouteTable.add()``. Segments are parsed once and the
    optional flag is settled at that point, from either ``{name?}`` or an
    ``OPTIONAL`` entry in *defaults*.
    """

    name: str
    path: str
    segments: tuple[PathSegment, ...]
    constraints: Mapping[str, Constraint] = field(default_factory=lambda: MappingProxyType({}))
    defaults: Mapping[str, Any] = field(default_factory=lambda: MappingProxyType({}))

    @property
    def params(self) -> tuple[PathSegment, ...]:
        """Parameter segments in pattern order."""
        return tuple(seg for seg in self.segments if seg.is_param)

    def default_for(self, name: str) -> Any | None:
        """Return the concrete default for *name*, ignoring ``OPTIONAL``."""
        value = self.defaults.get(name)
        if value is OPTIONAL:
            return None
        return value
