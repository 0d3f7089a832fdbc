"""Request body size limit middleware.

Rejects requests whose body exceeds the configured maximum (max_upload_size)
with 413 before the upload reaches the blob store. Enforces the limit for
both Content-Length and Transfer-Encoding: chunked.
Uses raw ASGI (no BaseHTTPMiddleware) for production-safe streaming and background tasks.
"""

import json
import logging
from typing import Callable

logger = logging.getLogger(__name__)


def _get_header(scope: dict, name: str) -> str | None:
    """Return first header value for name (case-insensitive)."""
    want = name.lower().encode()
    for k, v in scope.get("headers", []):
        if k.lower() == want:
            return v.decode("utf-8", errors="replace")
    return None


async def _send_413(send: Callable, max_bytes: int) -> None:
    """Send 413 Payload Too Large response."""
    body = json.dumps(
        {
            "error": "PAYLOAD_TOO_LARGE",
            "message": f"Request body must be at most {max_bytes} bytes",
        }
    ).encode()
    await send({
        "type": "http.response.start",
        "status": 413,
        "headers": [
            (b"content-type", b"application/json"),
            (b"content-length", str(len(body)).encode()),
        ],
    })
    await send({
        "type": "http.response.body",
        "body": body,
        "more_body": False,
    })


def RequestSizeLimitMiddleware(app: Callable, max_bytes: int) -> Callable:
    """Reject requests whose body exceeds max_bytes (Content-Length or chunked). Raw ASGI."""

    async def asgi_app(scope: dict, receive: Callable, send: Callable) -> None:
        if scope["type"] != "http":
            await app(scope, receive, send)
            return

        content_length_str = _get_header(scope, "content-length")
        if content_length_str is not None:
            try:
                length = int(content_length_str)
            except ValueError:
                length = None
            if length is not None and length > max_bytes:
                logger.info("Rejected %d-byte body on %s", length, scope.get("path"))
                await _send_413(send, max_bytes)
                return
            await app(scope, receive, send)
            return

        transfer_encoding = (_get_header(scope, "transfer-encoding") or "").lower()
        if transfer_encoding != "chunked":
            await app(scope, receive, send)
            return

        # No declared length: read the body up to the limit, then replay it
        chunks: list[bytes] = []
        total = 0
        while True:
            message = await receive()
            if message["type"] != "http.request":
                await app(scope, receive, send)
                return
            body = message.get("body", b"")
            total += len(body)
            if total > max_bytes:
                logger.info("Rejected chunked body over %d bytes on %s", max_bytes, scope.get("path"))
                await _send_413(send, max_bytes)
                return
            chunks.append(body)
            if not message.get("more_body", False):
                break

        pending = list(chunks)

        async def replay_receive() -> dict:
            if pending:
                chunk = pending.pop(0)
                return {"type": "http.request", "body": chunk, "more_body": bool(pending)}
            return await receive()

        await app(scope, replay_receive, send)

    return asgi_app
