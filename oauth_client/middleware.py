"""Request logging middleware."""

import logging

from fastapi import Request
from starlette.middleware.base import BaseHTTPMiddleware

logger = logging.getLogger(__name__)


class RequestLoggingMiddleware(BaseHTTPMiddleware):
    """Log every request's method and path (query strings carry codes, so they are left out)."""

    async def dispatch(self, request: Request, call_next):
        logger.info(f"[REQUEST] {request.method} {request.url.path}")
        response = await call_next(request)
        if response.status_code >= 400:
            logger.info(f"[REQUEST] {request.method} {request.url.path} -> {response.status_code}")
        return response
