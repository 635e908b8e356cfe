# app/middleware.py
import logging
import time
from typing import Optional

from fastapi import FastAPI, Request, status
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from starlette.middleware.base import BaseHTTPMiddleware

from .errors import CORS_ERROR_MESSAGE

access_logger = logging.getLogger("app.access")
logger = logging.getLogger(__name__)


class OriginGuardMiddleware(BaseHTTPMiddleware):
    """
    Reject requests whose ``Origin`` header is not the configured frontend.

    Requests without an ``Origin`` header (same-origin, curl, other services)
    are let through; CORS only concerns browsers.
    """

    def __init__(self, app, allowed_origin: Optional[str]):
        super().__init__(app)
        self.allowed_origin = allowed_origin

    async def dispatch(self, request: Request, call_next):
        origin = request.headers.get("origin")
        if origin is not None and origin != self.allowed_origin:
            logger.warning("Blocked request from origin %s to %s", origin, request.url.path)
            return JSONResponse(status_code=status.HTTP_403_FORBIDDEN, content={"error": CORS_ERROR_MESSAGE})
        return await call_next(request)


class RequestLoggingMiddleware(BaseHTTPMiddleware):
    """One access line per request: ``GET /api/products 200 3.214 ms - 57``."""

    async def dispatch(self, request: Request, call_next):
        started = time.perf_counter()
        response = await call_next(request)
        elapsed_ms = (time.perf_counter() - started) * 1000

        access_logger.info(
            "%s %s %s %.3f ms - %s",
            request.method,
            request.url.path,
            response.status_code,
            elapsed_ms,
            response.headers.get("content-length", "-"),
        )
        return response


def setup_middleware(app: FastAPI, frontend_url: Optional[str]) -> None:
    # Starlette wraps in reverse order: the last one added runs first
    app.add_middleware(
        CORSMiddleware,
        allow_origins=[frontend_url] if frontend_url else [],
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )
    app.add_middleware(OriginGuardMiddleware, allowed_origin=frontend_url)
    app.add_middleware(RequestLoggingMiddleware)
