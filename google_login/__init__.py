"""
google-login - "login with Google" over OAuth 2.0.
"""
from google_login.client import Google, generate_state
from google_login.errors import (
    ConfigurationError,
    DecodeError,
    GoogleOAuthError,
    NetworkError,
    UpstreamError,
)
from google_login.models import TokenResponse, UserInfo

__all__ = [
    "Google",
    "generate_state",
    "GoogleOAuthError",
    "ConfigurationError",
    "NetworkError",
    "UpstreamError",
    "DecodeError",
    "TokenResponse",
    "UserInfo",
]
