"""Shared plumbing for the template and URL generators."""

import logging

from routeurl.config import DEFAULT_OPTIONS, GenerationOptions, UriKind
from routeurl.context import get_request
from routeurl.errors import ConfigurationError
from routeurl.http.request import RequestContext
from routeurl.routing.route import Route
from routeurl.routing.table import RouteTable

logger = logging.getLogger("routeurl.generation")


class BaseGenerator:
    """Holds the route table, request and options a generator reads.

    When *request* is omitted the current request is taken from
    ``routeurl.context.request_var`` at generation time.
    """

    __slots__ = ("_request", "options", "table")

    def __init__(
        self,
        table: RouteTable,
        request: RequestContext | None = None,
        options: GenerationOptions | None = None,
    ) -> None:
        self.table = table
        self._request = request
        self.options = options or DEFAULT_OPTIONS

    @property
    def request(self) -> RequestContext:
        """The request used for absolute output.

        Raises ``ConfigurationError`` when none was given and none is
        bound to the current context.
        """
        if self._request is not None:
            return self._request
        try:
            return get_request()
        except LookupError:
            msg = (
                "Absolute generation needs a request. Pass request=..., bind one "
                "with routeurl.context.bind_request(), or set GenerationOptions.base_uri."
            )
            raise ConfigurationError(msg) from None

    def base_uri(self) -> str:
        """Prefix for generated output: an absolute base or ``/``."""
        if self.options.uri_kind is UriKind.RELATIVE:
            return "/"
        if self.options.base_uri:
            return self.options.base_uri.rstrip("/") + "/"
        return self.request.base_uri

    def resolve(self, route_name: str) -> Route:
        return self.table.resolve(route_name)

    def join(self, path: str, query: str = "") -> str:
        """Prefix *path* with the base URI and append *query*."""
        base = self.base_uri()
        if path.startswith("{/"):
            # the optional group supplies its own slash
            base = base.removesuffix("/")
        return f"{base}{path}{query}"
