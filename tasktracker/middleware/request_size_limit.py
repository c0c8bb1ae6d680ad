"""Request body size limit middleware.

Task payloads are small JSON documents; anything larger than max_bytes is
answered with 413 before it reaches the router. Works for both a declared
Content-Length and bodies streamed without one. Raw ASGI.
"""

import json
from typing import Callable

from tasktracker.middleware.request_id import get_header


def _payload_too_large(max_bytes: int, seen: int) -> bytes:
    return json.dumps(
        {
            "error": "PAYLOAD_TOO_LARGE",
            "message": f"Request body must be at most {max_bytes} bytes",
            "details": {"max_bytes": max_bytes, "content_length": seen},
        }
    ).encode()


async def _reject(send: Callable, max_bytes: int, seen: int) -> None:
    await send({
        "type": "http.response.start",
        "status": 413,
        "headers": [(b"content-type", b"application/json")],
    })
    await send({
        "type": "http.response.body",
        "body": _payload_too_large(max_bytes, seen),
        "more_body": False,
    })


def RequestSizeLimitMiddleware(app: Callable, max_bytes: int) -> Callable:
    """Reject request bodies larger than max_bytes with 413."""

    async def asgi_app(scope: dict, receive: Callable, send: Callable) -> None:
        if scope["type"] != "http":
            await app(scope, receive, send)
            return

        declared = get_header(scope, "content-length")
        if declared is not None:
            if declared.isdigit() and int(declared) > max_bytes:
                await _reject(send, max_bytes, int(declared))
                return
            await app(scope, receive, send)
            return

        # No Content-Length: read the stream up to the limit, then replay it.
        chunks: list[bytes] = []
        total = 0
        more_body = True
        while more_body:
            message = await receive()
            if message["type"] == "http.disconnect":
                return
            body = message.get("body", b"")
            total += len(body)
            if total > max_bytes:
                await _reject(send, max_bytes, total)
                return
            chunks.append(body)
            more_body = message.get("more_body", False)

        pending = iter(
            [{"type": "http.request", "body": b"".join(chunks), "more_body": False}]
        )

        async def replay() -> dict:
            message = next(pending, None)
            return message if message is not None else await receive()

        await app(scope, replay, send)

    return asgi_app
