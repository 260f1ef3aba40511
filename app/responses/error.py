from fastapi import status

from config import IS_PRODUCTION
from utils.exceptions import MarketplaceError
from .base import build_response


def error_response(exc: MarketplaceError):
    return build_response(
        exc.status_code,
        False,
        error=exc.code,
        message=exc.message,
    )


def bad_request_error(error: str = "Bad request"):
    return build_response(
        status.HTTP_400_BAD_REQUEST,
        False,
        error="bad_request",
        message=error,
    )


def not_found_error(error: str = "Resource not found"):
    return build_response(
        status.HTTP_404_NOT_FOUND,
        False,
        error="not_found",
        message=error,
    )


def internal_server_error(error: str = "Internal server error"):
    # Never leak exception details once deployed
    return build_response(
        status.HTTP_500_INTERNAL_SERVER_ERROR,
        False,
        error="internal_server_error",
        message="Server error" if IS_PRODUCTION else error,
    )
