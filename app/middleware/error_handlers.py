from fastapi import Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from sqlalchemy.exc import SQLAlchemyError
from app.core.exceptions import AppError
import logging

logger = logging.getLogger(__name__)

def app_error_handler(request: Request, exc: AppError) -> JSONResponse:
    """Serialize application errors as {"detail": message}"""
    if exc.status_code >= 500:
        logger.error(f"{type(exc).__name__} on {request.method} {request.url.path}: {exc.message}")
    return JSONResponse(status_code=exc.status_code, content={"detail": exc.message})

def request_validation_error_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    """
    Malformed request bodies and parameters are reported as 400 rather than
    FastAPI's default 422.
    """
    errors = exc.errors()
    message = "Invalid request data"
    if errors:
        location = ".".join(str(part) for part in errors[0].get("loc", ()) if part != "body")
        parts = [part for part in (location, errors[0].get("msg")) if part]
        message = f"Invalid request data: {' '.join(parts)}" if parts else message

    return JSONResponse(
        status_code=status.HTTP_400_BAD_REQUEST,
        content={"detail": message}
    )

def database_error_handler(request: Request, exc: SQLAlchemyError) -> JSONResponse:
    # Log but don't expose details
    logger.error(f"Database error on {request.method} {request.url.path}: {str(exc)}")
    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        content={"detail": "Internal server error"}
    )

def register_error_handlers(app):
    app.add_exception_handler(AppError, app_error_handler)
    app.add_exception_handler(RequestValidationError, request_validation_error_handler)
    app.add_exception_handler(SQLAlchemyError, database_error_handler)
