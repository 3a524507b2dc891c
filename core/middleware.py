"""
Request tracing for the Washflow API
"""
import time
import uuid
import logging
from fastapi import Request, Response
from starlette.middleware.base import BaseHTTPMiddleware, RequestResponseEndpoint

logger = logging.getLogger(__name__)


class RequestLoggingMiddleware(BaseHTTPMiddleware):
    """Tag every request with an id and log how it ended and how long it took"""

    async def dispatch(self, request: Request, call_next: RequestResponseEndpoint) -> Response:
        request_id = request.headers.get("X-Request-ID") or uuid.uuid4().hex
        request.state.request_id = request_id
        route = f"{request.method} {request.url.path}"

        started = time.perf_counter()
        try:
            response = await call_next(request)
        except Exception:
            logger.error(f"[{request_id}] {route} raised after {time.perf_counter() - started:.3f}s")
            raise

        elapsed = time.perf_counter() - started
        level = logging.WARNING if response.status_code >= 400 else logging.INFO
        logger.log(level, f"[{request_id}] {route} -> {response.status_code} in {elapsed:.3f}s")

        response.headers["X-Request-ID"] = request_id
        response.headers["X-Process-Time"] = f"{elapsed:.3f}"
        return response
