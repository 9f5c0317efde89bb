"""Concrete URL generation.

Fills a route's path from a parameter object and appends everything the
path did not consume as a query string::

    generator.generate("foo.show", {"Id": 1, "Bar": {"Abc": "abc"}})
    # "http://localhost:8000/foo/1?bar.abc=abc"

Generation is all-or-nothing: an unknown route, a missing required value
or a value rejected by a constraint yields ``None``.
"""

from typing import Any
from urllib.parse import quote, urlencode

from routeurl.errors import ConstraintViolation, GenerationError, MissingRequiredValue
from routeurl.generation.base import BaseGenerator, logger
from routeurl.generation.classify import ClassifiedParameters, classify, stringify
from routeurl.routing.params import Constraint, matches_type, satisfies
from routeurl.routing.route import PathSegment, Route

_UNTYPED = frozenset({"str", "path"})


def _constraint_for(route: Route, name: str) -> Constraint | None:
    constraint = route.constraints.get(name)
    if constraint is not None:
        return constraint
    lowered = name.lower()
    for key, value in route.constraints.items():
        if key.lower() == lowered:
            return value
    return None


def check_segment(route: Route, segment: PathSegment, value: str) -> None:
    """Raise ``ConstraintViolation`` unless *value* may fill *segment*.

    Both the inline type (``{id:int}``) and any constraint registered
    for the segment must accept the value. ``str`` and ``path`` segments
    take anything; reserved characters are percent-encoded later.
    """
    name = segment.param_name or ""
    if segment.param_type not in _UNTYPED and not matches_type(value, segment.param_type):
        raise ConstraintViolation(route.name, name, value)
    constraint = _constraint_for(route, name)
    if constraint is not None and not satisfies(value, constraint):
        raise ConstraintViolation(route.name, name, value)


def url_path(route: Route, classified: ClassifiedParameters) -> str:
    """Substitute classified values into the route's path.

    Required segments fall back to a concrete route default. Optional
    segments without a value are dropped along with their slash.
    """
    parts: list[str] = []
    for seg in route.segments:
        if not seg.is_param:
            parts.append(seg.value)
            continue

        name = seg.param_name or ""
        if seg.optional:
            value = classified.optional_path_values.get(name)
            if not value:
                continue
        else:
            value = classified.path_values.get(name)
            if not value:
                default = route.default_for(name)
                if default is None:
                    raise MissingRequiredValue(route.name, name)
                value = stringify(default)

        check_segment(route, seg, value)
        parts.append(quote(value, safe="/" if seg.param_type == "path" else ""))
    return "/".join(parts)


def url_query(leftover: tuple[tuple[str, str], ...]) -> str:
    """Render ``?k=v&...``, or an empty string when there is nothing left."""
    if not leftover:
        return ""
    return "?" + urlencode(leftover, quote_via=quote)


class UrlGenerator(BaseGenerator):
    """Generate concrete URLs for named routes.

    Usage::

        generator = UrlGenerator(table, RequestContext.from_url("http://localhost:8000/"))
        generator.generate("foo.show", {"id": 1})       # ".../foo/1"
        generator.generate("foo.show", {"id": "abc"})   # None when id is constrained to \\d+
    """

    __slots__ = ()

    def generate(self, route_name: str, params: Any | None = None) -> str | None:
        """Return the URL for *route_name*, or None if none can be produced."""
        if isinstance(params, type):
            msg = f"URL generation needs an instance, not the class {params.__name__!r}"
            raise TypeError(msg)
        try:
            route = self.resolve(route_name)
            classified = classify(route, params, lowercase_keys=self.options.lowercase_keys)
            path = url_path(route, classified)
        except GenerationError as exc:
            logger.debug("URL generation failed: %s", exc)
            return None
        return self.join(path, url_query(classified.leftover))
