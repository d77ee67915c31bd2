"""
Error taxonomy and user-facing error messages.

Every failure that reaches a client is rendered as
``{"success": false, "message": ..., "errors": ...}``.
"""
import logging
from typing import Any, Optional

import httpx

logger = logging.getLogger(__name__)


class KeralaHorizonError(Exception):
    """Base error carrying an HTTP status and optional details."""

    status_code: int = 500
    # Response key the details are rendered under
    details_key: str = "errors"

    def __init__(self, message: str, status_code: Optional[int] = None, details: Any = None):
        super().__init__(message)
        self.message = message
        if status_code is not None:
            self.status_code = status_code
        self.details = details


class ValidationError(KeralaHorizonError):
    status_code = 400


class AuthenticationError(KeralaHorizonError):
    status_code = 401


class PermissionDeniedError(KeralaHorizonError):
    status_code = 403


class NotFoundError(KeralaHorizonError):
    status_code = 404


class ConflictError(KeralaHorizonError):
    status_code = 409


class RateLimitError(KeralaHorizonError):
    status_code = 429
    details_key = "limit"


class ExternalServiceError(KeralaHorizonError):
    status_code = 503


AUTH_CODE_MESSAGES = {
    "auth/user-not-found": "Invalid email or password. Please try again.",
    "auth/wrong-password": "Invalid email or password. Please try again.",
    "auth/email-already-in-use": "An account with this email already exists.",
    "auth/weak-password": "Password should be at least 6 characters long.",
    "auth/invalid-email": "Please enter a valid email address.",
    "auth/too-many-requests": "Too many failed attempts. Please try again later.",
}

STATUS_MESSAGES = {
    400: "Invalid request. Please check your input and try again.",
    401: "Please sign in to continue.",
    403: "You don't have permission to perform this action.",
    404: "The requested resource was not found.",
    429: "Too many requests. Please wait a moment and try again.",
    500: "Server error. Please try again later.",
    503: "Service temporarily unavailable. Please try again later.",
}

# Geolocation error codes reported by browsers
LOCATION_MESSAGES = {
    1: "Location access denied. Please enable location services and try again.",
    2: "Location unavailable. Please check your GPS settings.",
    3: "Location request timed out. Please try again.",
}

NETWORK_MESSAGE = "Network connection failed. Please check your internet and try again."
GENERIC_MESSAGE = "Something went wrong. Please try again."


def _is_network_error(error: Any) -> bool:
    if isinstance(error, (httpx.NetworkError, httpx.TimeoutException)):
        return True
    return getattr(error, "code", None) == "NETWORK_ERROR" or type(error).__name__ == "NetworkError"


def _status_of(error: Any) -> Optional[int]:
    if isinstance(error, KeralaHorizonError):
        return error.status_code
    if isinstance(error, httpx.HTTPStatusError):
        return error.response.status_code
    status = getattr(error, "status", None) or getattr(error, "status_code", None)
    return status if isinstance(status, int) else None


def handle_api_error(error: Any, context: str) -> str:
    """
    Convert an error into a message suitable for showing to a traveller.

    Args:
        error: Any exception, or an object exposing ``code``/``status``
        context: Where the error happened, used for the log line

    Returns:
        A user-facing message
    """
    logger.warning(f"{context} error: {error!r}")

    if _is_network_error(error):
        return NETWORK_MESSAGE

    code = getattr(error, "code", None)
    if isinstance(code, str) and code.startswith("auth/"):
        return AUTH_CODE_MESSAGES.get(code, "Authentication failed. Please try again.")

    status = _status_of(error)
    if status is not None:
        return STATUS_MESSAGES.get(status, GENERIC_MESSAGE)

    if isinstance(code, int) and code in LOCATION_MESSAGES:
        return LOCATION_MESSAGES[code]

    message = getattr(error, "message", None) or (str(error) if isinstance(error, Exception) else None)
    return message or GENERIC_MESSAGE
