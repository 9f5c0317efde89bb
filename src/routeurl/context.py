"""Request-scoped context via ContextVar.

Provides ``request_var``: the ``RequestContext`` of the request currently
being served. The host framework sets it before dispatch and resets it
afterwards. Generators created without an explicit request read it on
every absolute generation call.

Thread safety:
    ``ContextVar`` is task-local under asyncio and thread-local under
    free-threading. No locks needed.
"""

from collections.abc import Iterator
from contextlib import contextmanager
from contextvars import ContextVar

from routeurl.http.request import RequestContext

request_var: ContextVar[RequestContext] = ContextVar("routeurl_request")
"""The current request. Set by the host framework before dispatch."""


def get_request() -> RequestContext:
    """Return the current request.

    Raises ``LookupError`` if called outside a request context.
    """
    return request_var.get()


@contextmanager
def bind_request(request: RequestContext) -> Iterator[RequestContext]:
    """Make *request* current for the duration of a ``with`` block.

    Usage::

        with bind_request(RequestContext.from_asgi(scope)):
            await app(scope, receive, send)
    """
    token = request_var.set(request)
    try:
        yield request
    finally:
        request_var.reset(token)
