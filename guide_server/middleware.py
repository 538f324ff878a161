"""Security headers middleware applied to every response."""

from typing import Callable

from fastapi import Request
from starlette.middleware.base import BaseHTTPMiddleware
from starlette.responses import PlainTextResponse, Response


SECURITY_HEADERS = {
    "X-Content-Type-Options": "nosniff",
    "X-Frame-Options": "DENY",
    "X-XSS-Protection": "1; mode=block",
    "Cache-Control": "public, max-age=3600",
    "Referrer-Policy": "strict-origin-when-cross-origin",
}


def add_security_headers(response: Response) -> None:
    for name, value in SECURITY_HEADERS.items():
        response.headers[name] = value


class SecurityHeadersMiddleware(BaseHTTPMiddleware):
    """Rejects paths ending in ``/`` with 404 and adds security headers.

    Directory-style paths never reach a handler, so the static mount cannot
    produce listings or index lookups.
    """

    async def dispatch(self, request: Request, call_next: Callable):
        if request.url.path.endswith("/"):
            response = PlainTextResponse("404 page not found", status_code=404)
        else:
            response = await call_next(request)

        add_security_headers(response)
        return response
