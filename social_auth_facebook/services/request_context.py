"""Information about the request currently being served."""

from __future__ import annotations

from dataclasses import dataclass
from urllib.parse import urlsplit

from starlette.requests import Request


@dataclass(frozen=True)
class RequestContext:
    """Host and base URL of the current request.

    ``base_url`` never ends with a slash.
    """

    host: str
    base_url: str

    def get_host(self) -> str:
        return self.host

    @classmethod
    def from_base_url(cls, base_url: str) -> RequestContext:
        """Build a context from an absolute base URL."""
        base_url = base_url.rstrip("/")
        return cls(host=urlsplit(base_url).hostname or "", base_url=base_url)

    @classmethod
    def from_request(
        cls, request: Request, base_url: str | None = None
    ) -> RequestContext:
        """Build a context from an incoming request.

        Args:
            request: The request being served.
            base_url: Configured public base URL. Takes precedence over the
                URL the request arrived on, e.g. behind a reverse proxy.
        """
        if base_url:
            return cls.from_base_url(base_url)
        return cls(
            host=request.url.hostname or "",
            base_url=str(request.base_url).rstrip("/"),
        )
