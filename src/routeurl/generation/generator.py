"""Combined generation: a URL and its template in one call."""

from dataclasses import dataclass
from typing import Any

from routeurl.config import GenerationOptions
from routeurl.errors import RouteNotFound
from routeurl.generation.base import BaseGenerator, logger
from routeurl.generation.template import TemplateGenerator
from routeurl.generation.url import UrlGenerator
from routeurl.http.request import RequestContext
from routeurl.routing.table import RouteTable


@dataclass(frozen=True, slots=True)
class Link:
    """A generated URL next to the template describing its route.

    ``url`` is None when required values are missing or rejected; the
    template is always available for a known route.
    """

    template: str
    url: str | None = None


class Generator(BaseGenerator):
    """Generate both representations of a route at once.

    Usage::

        generator = Generator(table, request)
        link = generator.generate("foo.show", {"id": 1, "q": "x"})
        link.url       # ".../foo/1?q=x"
        link.template  # ".../foo/{id}{?q}"
    """

    __slots__ = ("templates", "urls")

    def __init__(
        self,
        table: RouteTable,
        request: RequestContext | None = None,
        options: GenerationOptions | None = None,
    ) -> None:
        super().__init__(table, request, options)
        self.templates = TemplateGenerator(table, request, self.options)
        self.urls = UrlGenerator(table, request, self.options)

    def generate(self, route_name: str, params: Any | None = None) -> Link | None:
        """Return a ``Link`` for *route_name*, or None if the route is unknown.

        Passing a class instead of an instance yields a template-only link.
        """
        if route_name not in self.table:
            logger.debug("Link generation failed: %s", RouteNotFound(route_name))
            return None
        template = self.templates.generate(route_name, params)
        if template is None:
            return None
        if isinstance(params, type):
            return Link(template=template)
        return Link(template=template, url=self.urls.generate(route_name, params))

    def url_for(self, route_name: str, params: Any | None = None) -> str | None:
        return self.urls.generate(route_name, params)

    def template_for(self, route_name: str, params: Any | None = None) -> str | None:
        return self.templates.generate(route_name, params)
