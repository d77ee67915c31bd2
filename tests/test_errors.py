"""Tests for error mapping."""
import httpx

from kerala_horizon.core.errors import (
    GENERIC_MESSAGE,
    NETWORK_MESSAGE,
    AuthenticationError,
    ConflictError,
    ExternalServiceError,
    KeralaHorizonError,
    NotFoundError,
    PermissionDeniedError,
    RateLimitError,
    ValidationError,
    handle_api_error,
)


class CodedError(Exception):
    def __init__(self, code=None, status=None, message=""):
        super().__init__(message)
        self.code = code
        self.status = status


class TestHandleApiError:
    """Test user-facing messages for failures."""

    def test_network_error(self):
        request = httpx.Request("GET", "https://example.com")
        error = httpx.ConnectError("connection refused", request=request)
        assert handle_api_error(error, "Weather") == NETWORK_MESSAGE

    def test_network_error_code(self):
        assert handle_api_error(CodedError(code="NETWORK_ERROR"), "Sync") == NETWORK_MESSAGE

    def test_auth_codes(self):
        assert handle_api_error(CodedError(code="auth/wrong-password"), "Login") == \
            "Invalid email or password. Please try again."
        assert handle_api_error(CodedError(code="auth/email-already-in-use"), "Signup") == \
            "An account with this email already exists."
        assert handle_api_error(CodedError(code="auth/something-new"), "Login") == \
            "Authentication failed. Please try again."

    def test_status_codes(self):
        assert handle_api_error(CodedError(status=404), "Fetch") == "The requested resource was not found."
        assert handle_api_error(CodedError(status=429), "Fetch") == \
            "Too many requests. Please wait a moment and try again."
        assert handle_api_error(CodedError(status=418), "Fetch") == GENERIC_MESSAGE

    def test_application_errors_use_their_status(self):
        assert handle_api_error(NotFoundError("Trip plan not found"), "Trip") == \
            "The requested resource was not found."
        assert handle_api_error(AuthenticationError("nope"), "Profile") == "Please sign in to continue."

    def test_geolocation_codes(self):
        assert handle_api_error(CodedError(code=1), "Location").startswith("Location access denied")
        assert handle_api_error(CodedError(code=3), "Location") == "Location request timed out. Please try again."

    def test_falls_back_to_message(self):
        assert handle_api_error(ValueError("Bad things"), "Misc") == "Bad things"
        assert handle_api_error(ValueError(""), "Misc") == GENERIC_MESSAGE


class TestErrorHierarchy:
    """Test status codes carried by each error."""

    def test_status_codes(self):
        expected = {
            ValidationError: 400,
            AuthenticationError: 401,
            PermissionDeniedError: 403,
            NotFoundError: 404,
            ConflictError: 409,
            RateLimitError: 429,
            ExternalServiceError: 503,
        }
        for error_class, status in expected.items():
            error = error_class("boom")
            assert isinstance(error, KeralaHorizonError)
            assert error.status_code == status
            assert error.details_key == "errors"

    def test_status_override_and_details(self):
        error = KeralaHorizonError("Teapot", status_code=418, details={"field": "bad"})
        assert error.status_code == 418
        assert error.details == {"field": "bad"}
        assert handle_api_error(RateLimitError("slow down"), "Search") == \
            "Too many requests. Please wait a moment and try again."
