"""
Error types raised by the Google OAuth client.

Every failure of the login flow surfaces as a subclass of GoogleOAuthError,
so callers can tell which stage failed without inspecting httpx or pydantic
exceptions.
"""
from typing import Optional


class GoogleOAuthError(Exception):
    """Base class for all google-login errors."""


class ConfigurationError(GoogleOAuthError):
    """A required client setting is missing, empty or malformed."""


class NetworkError(GoogleOAuthError):
    """Google could not be reached (timeout, DNS, TLS, connection reset)."""

    def __init__(self, message: str, stage: str):
        super().__init__(message)
        self.stage = stage


class UpstreamError(GoogleOAuthError):
    """
    Google answered with a non-success status.

    Attributes:
        stage: "token" or "userinfo"
        status_code: HTTP status returned by Google
        error: OAuth error code from the body (e.g. "invalid_grant"), if any
        error_description: Human readable description from the body, if any
    """

    def __init__(
        self,
        stage: str,
        status_code: int,
        error: Optional[str] = None,
        error_description: Optional[str] = None,
    ):
        message = f"{stage} request failed with HTTP {status_code}"
        if error:
            message = f"{message}: {error}"
        super().__init__(message)
        self.stage = stage
        self.status_code = status_code
        self.error = error
        self.error_description = error_description


class DecodeError(GoogleOAuthError):
    """A response body did not match the expected JSON shape."""

    def __init__(self, message: str, stage: str):
        super().__init__(message)
        self.stage = stage
