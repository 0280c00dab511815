"""HTTP middlewares: domain context and request logging."""

import time
from uuid import uuid4

import structlog
from fastapi import FastAPI, Request

from marketplace.domain import marketplace
from marketplace.utils.logging import add_context, clear_context

logger = structlog.get_logger(__name__)


def install_middlewares(app: FastAPI) -> None:
    @app.middleware("http")
    async def domain_context_middleware(request: Request, call_next):
        """Push the marketplace domain context for the duration of the request."""
        with marketplace.domain_context():
            return await call_next(request)

    # Added last, so it wraps the domain context and sees every response.
    @app.middleware("http")
    async def request_logging_middleware(request: Request, call_next):
        request_id = request.headers.get("X-Request-ID") or uuid4().hex
        add_context(request_id=request_id, method=request.method, path=request.url.path)
        started = time.perf_counter()
        try:
            response = await call_next(request)
        finally:
            clear_context()

        duration_ms = round((time.perf_counter() - started) * 1000, 2)
        logger.info(
            "Request completed",
            request_id=request_id,
            method=request.method,
            path=request.url.path,
            status_code=response.status_code,
            duration_ms=duration_ms,
        )
        response.headers["X-Request-ID"] = request_id
        return response
