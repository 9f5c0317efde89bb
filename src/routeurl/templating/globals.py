"""Template globals for kida environments.

Exposes route generation to templates::

    <a href="{{ url_for("foo.show", id=item.id) }}">{{ item.name }}</a>
    <link rel="search" href="{{ url_template("foo.search", q="", page=1) }}">
"""

from collections.abc import Callable
from typing import Any

from kida import Environment

from routeurl.generation.generator import Generator


def make_globals(generator: Generator) -> dict[str, Callable[..., str]]:
    """Build the ``url_for`` / ``url_template`` callables for *generator*.

    Keyword arguments become the parameter object. An absent result
    renders as an empty string.
    """

    def url_for(route_name: str, **params: Any) -> str:
        return generator.url_for(route_name, params or None) or ""

    def url_template(route_name: str, **params: Any) -> str:
        return generator.template_for(route_name, params or None) or ""

    return {"url_for": url_for, "url_template": url_template}


def register_globals(env: Environment, generator: Generator) -> Environment:
    """Register the generation globals on *env* and return it."""
    for name, value in make_globals(generator).items():
        env.add_global(name, value)
    return env
