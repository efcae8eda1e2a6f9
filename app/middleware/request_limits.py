from fastapi import Request, status
from fastapi.responses import JSONResponse
from starlette.middleware.base import BaseHTTPMiddleware
from starlette.responses import Response
from typing import Callable
from app.core.config import settings
import logging

logger = logging.getLogger(__name__)

class RequestSizeLimitMiddleware(BaseHTTPMiddleware):
    """
    Reject request bodies larger than MAX_REQUEST_SIZE based on Content-Length.
    All endpoints take small JSON payloads.
    """

    def __init__(self, app, max_request_size: int = None):
        super().__init__(app)
        self.max_request_size = max_request_size or settings.MAX_REQUEST_SIZE

    async def dispatch(self, request: Request, call_next: Callable) -> Response:
        content_length = request.headers.get("content-length")
        if content_length and content_length.isdigit() and int(content_length) > self.max_request_size:
            logger.warning(
                f"Request size limit exceeded: {content_length} bytes "
                f"from IP {request.client.host if request.client else 'unknown'}"
            )
            # Exceptions raised in BaseHTTPMiddleware bypass the app's handlers
            return JSONResponse(
                status_code=status.HTTP_413_REQUEST_ENTITY_TOO_LARGE,
                content={"detail": f"Request size too large. Maximum allowed: {self.max_request_size} bytes"}
            )

        return await call_next(request)

def create_request_limit_middleware():
    """
    Create the request size limit middleware.
    """
    logger.info(f"Request size limiting enabled with max size: {settings.MAX_REQUEST_SIZE} bytes")
    return RequestSizeLimitMiddleware
