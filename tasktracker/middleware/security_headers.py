"""Security headers middleware.

Adds security-related response headers to API responses. Paths outside the
API prefix (landing page, /docs, /redoc) keep only the headers that do not
block their inline scripts and styles. Raw ASGI.
"""

from typing import Callable

COMMON_HEADERS = {
    "X-Content-Type-Options": "nosniff",
    "X-Frame-Options": "DENY",
    "Referrer-Policy": "strict-origin-when-cross-origin",
}
API_ONLY_HEADERS = {
    "Content-Security-Policy": "default-src 'none'",
    "Cache-Control": "no-store",
}


def _encode(headers: dict[str, str]) -> list[tuple[bytes, bytes]]:
    return [(k.lower().encode(), v.encode()) for k, v in headers.items()]


def SecurityHeadersMiddleware(app: Callable, api_prefix: str = "/api/") -> Callable:
    """Set security headers on all responses, stricter ones under api_prefix."""
    common = _encode(COMMON_HEADERS)
    api_only = _encode(API_ONLY_HEADERS)

    async def asgi_app(scope: dict, receive: Callable, send: Callable) -> None:
        if scope["type"] != "http":
            await app(scope, receive, send)
            return
        wanted = common + api_only if scope.get("path", "").startswith(api_prefix) else common

        async def send_wrapper(message: dict) -> None:
            if message["type"] == "http.response.start":
                headers = list(message.get("headers", []))
                seen = {h[0].lower() for h in headers}
                headers.extend(h for h in wanted if h[0] not in seen)
                message["headers"] = headers
            await send(message)

        await app(scope, receive, send_wrapper)

    return asgi_app
