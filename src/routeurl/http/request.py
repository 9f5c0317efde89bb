"""Immutable request context.

The parts of the current request that absolute generation needs: the
scheme, host, port and mount point. Frozen at creation.
"""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass
from typing import Any
from urllib.parse import urlsplit

_DEFAULT_PORTS: dict[str, int] = {"http": 80, "https": 443, "ws": 80, "wss": 443}


@dataclass(frozen=True, slots=True)
class RequestContext:
    """Scheme, host and port of the request being served.

    Build one directly, from a URL, or from an ASGI scope::

        RequestContext("https", "example.com")
        RequestContext.from_url("http://localhost:8000/")
        RequestContext.from_asgi(scope)
    """

    scheme: str
    host: str
    port: int | None = None
    root_path: str = ""

    @property
    def authority(self) -> str:
        """``host`` or ``host:port``, omitting the scheme's default port."""
        if self.port is None or _DEFAULT_PORTS.get(self.scheme) == self.port:
            return self.host
        return f"{self.host}:{self.port}"

    @property
    def base_uri(self) -> str:
        """Absolute base URI, always ending in ``/``."""
        root = self.root_path.strip("/")
        if root:
            return f"{self.scheme}://{self.authority}/{root}/"
        return f"{self.scheme}://{self.authority}/"

    @classmethod
    def from_url(cls, url: str) -> RequestContext:
        """Create a context from an absolute URL.

        The URL path becomes the root path, so ``http://host/api/`` yields
        a base URI of ``http://host/api/``.
        """
        parts = urlsplit(url)
        if not parts.scheme or not parts.hostname:
            msg = f"Expected an absolute URL, got {url!r}"
            raise ValueError(msg)
        return cls(
            scheme=parts.scheme,
            host=parts.hostname,
            port=parts.port,
            root_path=parts.path,
        )

    @classmethod
    def from_asgi(cls, scope: Mapping[str, Any]) -> RequestContext:
        """Create a context from an ASGI HTTP scope.

        The ``Host`` header wins over ``scope["server"]``, matching what
        the client actually addressed.
        """
        scheme = scope.get("scheme", "http")
        root_path = scope.get("root_path", "")
        for raw_name, raw_value in scope.get("headers", ()):
            if raw_name.lower() == b"host":
                return cls._from_host_header(scheme, raw_value.decode("latin-1"), root_path)

        server = scope.get("server")
        if server is None:
            msg = "ASGI scope has neither a Host header nor a server address"
            raise ValueError(msg)
        host, port = server
        return cls(scheme=scheme, host=host, port=port, root_path=root_path)

    @classmethod
    def _from_host_header(cls, scheme: str, value: str, root_path: str) -> RequestContext:
        host, sep, port = value.rpartition(":")
        # bare "[::1]" splits into "[:" and "1]"
        if not sep or not port.isdigit():
            return cls(scheme=scheme, host=value, root_path=root_path)
        return cls(scheme=scheme, host=host, port=int(port), root_path=root_path)
