from fastapi import status
from services.exceptions import NotFoundError, ServiceError

from .base import build_response


def bad_request_error(error: str = "Bad request"):
    return build_response(
        status.HTTP_400_BAD_REQUEST,
        "failure",
        error="bad_request",
        message=error,
    )


def not_found_error(error: str = "Resource not found"):
    return build_response(
        status.HTTP_404_NOT_FOUND,
        "failure",
        error="not_found",
        message=error,
    )


def unauthorized_error(error: str = "Invalid credentials"):
    return build_response(
        status.HTTP_401_UNAUTHORIZED,
        "failure",
        error="unauthorized",
        message=error,
    )


def forbidden_error(error: str = "Access denied"):
    return build_response(
        status.HTTP_403_FORBIDDEN,
        "failure",
        error="forbidden",
        message=error,
    )


def internal_server_error(error: str = "Internal server error"):
    return build_response(
        status.HTTP_500_INTERNAL_SERVER_ERROR,
        "failure",
        error="internal_server_error",
        message=error,
    )


_ERROR_BUILDERS = {
    status.HTTP_400_BAD_REQUEST: bad_request_error,
    status.HTTP_401_UNAUTHORIZED: unauthorized_error,
    status.HTTP_403_FORBIDDEN: forbidden_error,
    status.HTTP_404_NOT_FOUND: not_found_error,
}


def error_for_status(status_code: int, message: str):
    """Build the failure envelope matching an HTTP status raised outside a route body."""
    builder = _ERROR_BUILDERS.get(status_code)
    if builder is not None:
        return builder(message)
    return build_response(status_code, "failure", error="error", message=message)


def service_error(exc: ServiceError):
    """Turn a service failure into its envelope: unknown ids are 404, every other rejection is 400."""
    if isinstance(exc, NotFoundError):
        return not_found_error(exc.message)
    return bad_request_error(exc.message)
