"""
Application error taxonomy.

Services raise these; the handlers in app.middleware.error_handlers turn them
into JSON responses at the request boundary.
"""

from fastapi import status


class AppError(Exception):
    """Base class for errors that map onto an HTTP status"""
    status_code = status.HTTP_500_INTERNAL_SERVER_ERROR
    default_message = "Internal server error"

    def __init__(self, message: str = None):
        self.message = message or self.default_message
        super().__init__(self.message)


class ValidationError(AppError):
    """Input does not match the expected schema"""
    status_code = status.HTTP_400_BAD_REQUEST
    default_message = "Invalid request data"


class AuthError(AppError):
    """Missing, unknown or expired session"""
    status_code = status.HTTP_401_UNAUTHORIZED
    default_message = "Authentication required"


class PermissionDeniedError(AppError):
    """Authenticated user's role is not allowed"""
    status_code = status.HTTP_403_FORBIDDEN
    default_message = "Insufficient permissions"


class NotFoundError(AppError):
    status_code = status.HTTP_404_NOT_FOUND
    default_message = "Resource not found"


class ConflictError(AppError):
    """Duplicate unique key, reported as a bad request"""
    status_code = status.HTTP_400_BAD_REQUEST
    default_message = "Resource already exists"


class UpstreamError(AppError):
    """The AI service failed or returned something unusable"""
    status_code = status.HTTP_500_INTERNAL_SERVER_ERROR
    default_message = "AI service request failed"
