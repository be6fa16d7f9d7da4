"""
Response middleware for the metrics endpoints.
"""
import logging
from typing import Callable, Dict

from fastapi import Request, Response
from starlette.middleware.base import BaseHTTPMiddleware
from starlette.types import ASGIApp

logger = logging.getLogger(__name__)

# Live metrics must never be served from an HTTP cache
NO_STORE_HEADERS: Dict[str, str] = {
    "Cache-Control": "no-store, no-cache, must-revalidate, proxy-revalidate, max-age=0",
    "Pragma": "no-cache",
    "Expires": "0",
    "Surrogate-Control": "no-store",
}

NO_STORE_PREFIXES = ("/metrics",)


class NoStoreMiddleware(BaseHTTPMiddleware):
    """
    Middleware that marks metric responses as uncacheable.
    """
    def __init__(self, app: ASGIApp, prefixes=NO_STORE_PREFIXES):
        super().__init__(app)
        self.prefixes = tuple(prefixes)

    def _matches(self, path: str) -> bool:
        """Whether path is a prefix itself or lies beneath one"""
        return any(path == prefix or path.startswith(prefix + "/") for prefix in self.prefixes)

    async def dispatch(self, request: Request, call_next: Callable) -> Response:
        """
        Process the request and add no-store headers to matching responses.

        Args:
            request: The incoming request
            call_next: The next middleware in the chain

        Returns:
            The response
        """
        response = await call_next(request)

        if self._matches(request.url.path):
            for name, value in NO_STORE_HEADERS.items():
                response.headers[name] = value

        return response
