"""
Core middleware registration for the FastAPI application.

Request tracking, timing and error logging.
"""
from __future__ import annotations

import time
import uuid
from typing import Callable, Optional

from fastapi import FastAPI, Request, Response
from starlette.middleware.base import BaseHTTPMiddleware
from starlette.types import ASGIApp

from hostelcare.core.logging import get_logger, request_id as request_id_ctx, user_id as user_id_ctx

logger = get_logger(__name__)


class RequestIDMiddleware(BaseHTTPMiddleware):
    """
    Adds a unique request ID to each request.

    The ID is stored in ``request.state.request_id``, bound to the logging
    context for the duration of the request, and echoed in the
    X-Request-ID response header.
    """

    def __init__(self, app: ASGIApp, header_name: str = "X-Request-ID"):
        super().__init__(app)
        self.header_name = header_name

    async def dispatch(self, request: Request, call_next: Callable) -> Response:
        request_id = request.headers.get(self.header_name) or str(uuid.uuid4())
        request.state.request_id = request_id

        rid_token = request_id_ctx.set(request_id)
        uid_token = user_id_ctx.set(None)
        try:
            response = await call_next(request)
        finally:
            request_id_ctx.reset(rid_token)
            user_id_ctx.reset(uid_token)

        response.headers[self.header_name] = request_id
        return response


class TimingMiddleware(BaseHTTPMiddleware):
    """
    Logs request processing time and adds the X-Process-Time header.
    """

    async def dispatch(self, request: Request, call_next: Callable) -> Response:
        start_time = time.perf_counter()
        response = await call_next(request)
        process_time = time.perf_counter() - start_time

        response.headers["X-Process-Time"] = f"{process_time:.4f}"
        logger.info(
            "Request completed",
            extra={
                "request_id": get_request_id(request),
                "method": request.method,
                "url": str(request.url.path),
                "status_code": response.status_code,
                "process_time": f"{process_time:.4f}s",
                "client_host": request.client.host if request.client else None,
            }
        )
        return response


class ErrorLoggingMiddleware(BaseHTTPMiddleware):
    """
    Logs error responses and exceptions escaping the route handlers.
    """

    async def dispatch(self, request: Request, call_next: Callable) -> Response:
        try:
            response = await call_next(request)
        except Exception as exc:
            logger.error(
                f"Request processing failed: {exc}",
                extra={
                    "request_id": get_request_id(request),
                    "method": request.method,
                    "url": str(request.url.path),
                    "error_type": type(exc).__name__,
                },
                exc_info=True
            )
            raise

        if response.status_code >= 400:
            logger.warning(
                f"Request returned error status {response.status_code}",
                extra={
                    "request_id": get_request_id(request),
                    "method": request.method,
                    "url": str(request.url.path),
                    "status_code": response.status_code,
                }
            )
        return response


def register_middlewares(app: FastAPI) -> None:
    """
    Register core middlewares. The last one added runs first, so the
    request ID is bound before timing and error logging see the request.
    """
    app.add_middleware(ErrorLoggingMiddleware)
    app.add_middleware(TimingMiddleware)
    app.add_middleware(RequestIDMiddleware)
    logger.debug("Core middlewares registered")


def get_request_id(request: Request) -> Optional[str]:
    return getattr(request.state, "request_id", None)
