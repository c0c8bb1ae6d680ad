"""Request and correlation ID middleware.

Generates or forwards X-Request-ID and X-Correlation-ID, stores both on the
ASGI scope state and echoes them on the response. Client values are
sanitized (length + character set) to keep them safe for logs.
Raw ASGI (no BaseHTTPMiddleware).
"""

import re
import uuid
from typing import Callable

REQUEST_ID_MAX_LENGTH = 64
_ALLOWED_ID = re.compile(r"^[a-zA-Z0-9_-]{1," + str(REQUEST_ID_MAX_LENGTH) + r"}$")


def get_header(scope: dict, name: str) -> str | None:
    """Return first header value for name (case-insensitive). Headers are (bytes, bytes)."""
    want = name.lower().encode()
    for k, v in scope.get("headers", []):
        if k.lower() == want:
            return v.decode("utf-8", errors="replace")
    return None


def _sanitize_id(raw: str | None) -> str | None:
    if raw is None:
        return None
    raw = raw.strip()
    return raw if _ALLOWED_ID.match(raw) else None


def RequestIDMiddleware(
    app: Callable,
    header_name: str = "X-Request-ID",
    correlation_header_name: str = "X-Correlation-ID",
) -> Callable:
    """Attach request and correlation IDs to scope state and response headers.

    The correlation ID falls back to the request ID when the client sends none.
    """

    async def asgi_app(scope: dict, receive: Callable, send: Callable) -> None:
        if scope["type"] != "http":
            await app(scope, receive, send)
            return
        request_id = _sanitize_id(get_header(scope, header_name)) or str(uuid.uuid4())
        correlation_id = (
            _sanitize_id(get_header(scope, correlation_header_name)) or request_id
        )
        state = scope.setdefault("state", {})
        state["request_id"] = request_id
        state["correlation_id"] = correlation_id
        extra = [
            (header_name.encode(), request_id.encode()),
            (correlation_header_name.encode(), correlation_id.encode()),
        ]

        async def send_wrapper(message: dict) -> None:
            if message["type"] == "http.response.start":
                message["headers"] = list(message.get("headers", [])) + extra
            await send(message)

        await app(scope, receive, send_wrapper)

    return asgi_app
