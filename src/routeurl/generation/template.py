"""URI template generation.

Renders a route's shape as an RFC 6570 template. Concrete values are
never substituted; a parameter object only contributes the names of its
leftover properties::

    generator.generate("foo.show", {"id": 1, "bar": "x"})
    # "http://localhost:8000/foo/{id}{?bar}"
"""

from typing import Any

from routeurl.errors import RouteNotFound
from routeurl.generation.base import BaseGenerator, logger
from routeurl.generation.classify import ClassifiedParameters, classify, classify_type
from routeurl.routing.route import Route


def template_path(route: Route) -> str:
    """Render the path part of a route as a URI template.

    Required parameters become ``{name}``. Each optional parameter becomes
    its own ``{/name}`` group carrying the separating slash, so two
    optional segments render as ``{/one}{/two}``.
    """
    out: list[str] = []
    for seg in route.segments:
        if seg.is_param and seg.optional:
            out.append(f"{{/{seg.param_name}}}")
            continue
        text = f"{{{seg.param_name}}}" if seg.is_param else seg.value
        out.append(f"/{text}" if out else text)
    return "".join(out)


def template_query(keys: tuple[str, ...]) -> str:
    """Render ``{?k1,k2}``, or an empty string when there are no keys."""
    if not keys:
        return ""
    return "{?" + ",".join(keys) + "}"


class TemplateGenerator(BaseGenerator):
    """Generate URI templates for named routes.

    Usage::

        generator = TemplateGenerator(table, RequestContext.from_url("http://localhost:8000/"))
        generator.generate("foo.show")                       # ".../foo/{id}"
        generator.generate("foo.show", {"id": 1, "q": "x"})  # ".../foo/{id}{?q}"
        generator.generate("foo.show", SearchParams)         # declared fields of a class
    """

    __slots__ = ()

    def classify(self, route: Route, params: Any | None) -> ClassifiedParameters:
        if isinstance(params, type):
            return classify_type(route, params, lowercase_keys=self.options.lowercase_keys)
        return classify(route, params, lowercase_keys=self.options.lowercase_keys)

    def generate(self, route_name: str, params: Any | None = None) -> str | None:
        """Return the URI template for *route_name*, or None if it is unknown.

        *params* may be an instance (its non-null leftover properties are
        listed) or a class (all of its declared leftover fields are listed).
        """
        try:
            route = self.resolve(route_name)
        except RouteNotFound as exc:
            logger.debug("Template generation failed: %s", exc)
            return None

        classified = self.classify(route, params)
        return self.join(template_path(route), template_query(classified.leftover_keys))
