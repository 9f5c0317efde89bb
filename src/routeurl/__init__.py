"""routeurl — URLs and URI templates from named routes.

Turns a route name plus a plain data object into either a concrete URL or
an RFC 6570 template describing the route's shape.

Basic usage::

    from routeurl import RequestContext, RouteTable, TemplateGenerator, UrlGenerator

    table = RouteTable()
    table.add("foo.show", "foo/{id}", constraints={"id": r"\\d+"})
    table.compile()

    request = RequestContext.from_url("http://localhost:8000/")
    UrlGenerator(table, request).generate("foo.show", {"id": 1, "q": "x"})
    # "http://localhost:8000/foo/1?q=x"
    TemplateGenerator(table, request).generate("foo.show", {"id": 1, "q": "x"})
    # "http://localhost:8000/foo/{id}{?q}"
"""

from importlib import import_module

__version__ = "0.1.0"
__all__ = [
    "OPTIONAL",
    "ConfigurationError",
    "ConstraintViolation",
    "GenerationError",
    "GenerationOptions",
    "Generator",
    "Link",
    "MissingRequiredValue",
    "RequestContext",
    "Route",
    "RouteNotFound",
    "RouteTable",
    "RouteUrlError",
    "TemplateGenerator",
    "UriKind",
    "UrlGenerator",
    "bind_request",
    "classify",
    "get_request",
]

# public name -> defining module
_LAZY_IMPORTS: dict[str, str] = {
    "OPTIONAL": "routeurl.routing.route",
    "Route": "routeurl.routing.route",
    "RouteTable": "routeurl.routing.table",
    "GenerationOptions": "routeurl.config",
    "UriKind": "routeurl.config",
    "RequestContext": "routeurl.http.request",
    "bind_request": "routeurl.context",
    "get_request": "routeurl.context",
    "classify": "routeurl.generation.classify",
    "TemplateGenerator": "routeurl.generation.template",
    "UrlGenerator": "routeurl.generation.url",
    "Generator": "routeurl.generation.generator",
    "Link": "routeurl.generation.generator",
    "RouteUrlError": "routeurl.errors",
    "ConfigurationError": "routeurl.errors",
    "GenerationError": "routeurl.errors",
    "RouteNotFound": "routeurl.errors",
    "MissingRequiredValue": "routeurl.errors",
    "ConstraintViolation": "routeurl.errors",
}


def __getattr__(name: str) -> object:
    """Lazy imports for public API.

    Keeps ``import routeurl`` fast while providing a clean top-level API.
    """
    module_name = _LAZY_IMPORTS.get(name)
    if module_name is None:
        msg = f"module {__name__!r} has no attribute {name!r}"
        raise AttributeError(msg)
    return getattr(import_module(module_name), name)
