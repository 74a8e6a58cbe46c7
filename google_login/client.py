"""
Google OAuth 2.0 login client.

Builds the consent URL for the authorization code flow and turns the code
Google sends back into the signed-in user's profile.

SECURITY: authorization codes, access tokens and the client secret are never
logged or included in error messages.
"""
import secrets
import urllib.parse
from typing import Optional, Sequence

import httpx
import structlog
from pydantic import ValidationError

from google_login.config import Settings, settings as default_settings
from google_login.errors import (
    ConfigurationError,
    DecodeError,
    NetworkError,
    UpstreamError,
)
from google_login.models import TokenResponse, UserInfo

logger = structlog.get_logger()


AUTHORIZATION_URL = "https://accounts.google.com/o/oauth2/v2/auth"
TOKEN_URL = "https://oauth2.googleapis.com/token"
USERINFO_URL = "https://www.googleapis.com/oauth2/v3/userinfo"

DEFAULT_SCOPES = ("openid", "email", "profile")
DEFAULT_TIMEOUT = 10.0


def generate_state() -> str:
    """Generate a URL-safe random value for the OAuth ``state`` parameter."""
    return secrets.token_urlsafe(32)


def _require(value: Optional[str], name: str) -> str:
    if value is None or not value.strip():
        raise ConfigurationError(f"{name} is required")
    return value


def _check_redirect_uri(redirect_uri: str) -> str:
    parsed = urllib.parse.urlparse(redirect_uri)
    if parsed.scheme not in ("http", "https") or not parsed.netloc:
        raise ConfigurationError(
            "redirect_uri must be an absolute http(s) URL"
        )
    return redirect_uri


class Google:
    """
    Client for "login with Google".

    Holds the OAuth client configuration, which cannot change after
    construction. Instances keep no per-request state and can be shared
    between concurrent tasks.

    Usage:
        google = Google(client_id, client_secret, "https://example.com/callback")
        url = google.get_redirect_url(state=generate_state())
        ...
        profile = await google.get_userinfo(code)
    """

    __slots__ = ("_client_id", "_client_secret", "_redirect_uri", "_scopes",
                 "_timeout", "_transport")

    def __init__(
        self,
        client_id: str,
        client_secret: str,
        redirect_uri: str,
        *,
        scopes: Optional[Sequence[str]] = None,
        timeout: float = DEFAULT_TIMEOUT,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        """
        Args:
            client_id: OAuth client ID issued by Google
            client_secret: OAuth client secret issued by Google
            redirect_uri: Callback URL registered for the client; Google
                sends the user back here with the authorization code
            scopes: Scopes to request (defaults to openid, email, profile)
            timeout: Seconds allowed for each HTTP call
            transport: Optional httpx transport used for every request

        Raises:
            ConfigurationError: if a required value is empty or redirect_uri
                is not an absolute http(s) URL
        """
        self._client_id = _require(client_id, "client_id")
        self._client_secret = _require(client_secret, "client_secret")
        self._redirect_uri = _check_redirect_uri(
            _require(redirect_uri, "redirect_uri")
        )
        self._scopes = tuple(scopes) if scopes is not None else DEFAULT_SCOPES
        if not self._scopes:
            raise ConfigurationError("at least one scope is required")
        self._timeout = timeout
        self._transport = transport

    @classmethod
    def from_settings(
        cls,
        settings: Optional[Settings] = None,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ) -> "Google":
        """Build a client from GOOGLE_* settings (environment or .env)."""
        settings = settings or default_settings
        return cls(
            _require(settings.GOOGLE_CLIENT_ID, "GOOGLE_CLIENT_ID"),
            _require(settings.GOOGLE_CLIENT_SECRET, "GOOGLE_CLIENT_SECRET"),
            _require(settings.GOOGLE_REDIRECT_URI, "GOOGLE_REDIRECT_URI"),
            timeout=settings.GOOGLE_HTTP_TIMEOUT,
            transport=transport,
        )

    @property
    def client_id(self) -> str:
        return self._client_id

    @property
    def redirect_uri(self) -> str:
        return self._redirect_uri

    @property
    def scopes(self) -> tuple:
        return self._scopes

    def __repr__(self) -> str:
        return f"Google(client_id={self._client_id!r}, redirect_uri={self._redirect_uri!r})"

    # ----------------------------------------------------------------------- #
    # Authorization URL
    # ----------------------------------------------------------------------- #

    def get_redirect_url(self, state: Optional[str] = None) -> str:
        """
        Build the URL the user should be sent to in order to grant access.

        Args:
            state: Optional opaque value echoed back on the callback

        Returns:
            Google authorization URL for the code flow
        """
        query = {
            "client_id": self._client_id,
            "redirect_uri": self._redirect_uri,
            "response_type": "code",
            "scope": " ".join(self._scopes),
        }
        if state is not None:
            query["state"] = state
        return f"{AUTHORIZATION_URL}?{urllib.parse.urlencode(query)}"

    # ----------------------------------------------------------------------- #
    # Code exchange
    # ----------------------------------------------------------------------- #

    async def get_userinfo(self, code: str) -> UserInfo:
        """
        Exchange an authorization code for the signed-in user's profile.

        Args:
            code: Authorization code from the OAuth callback

        Returns:
            The user's profile

        Raises:
            NetworkError: Google could not be reached
            UpstreamError: Google rejected the code or the access token
            DecodeError: a response body was not the expected JSON
        """
        async with self._http_client() as client:
            token = await self._exchange_code(client, code)
            return await self._fetch_userinfo(client, token.access_token)

    async def exchange_code(self, code: str) -> TokenResponse:
        """Exchange an authorization code for tokens without fetching the profile."""
        async with self._http_client() as client:
            return await self._exchange_code(client, code)

    async def fetch_userinfo(self, access_token: str) -> UserInfo:
        """Fetch the profile for an access token obtained earlier."""
        async with self._http_client() as client:
            return await self._fetch_userinfo(client, access_token)

    def _http_client(self) -> httpx.AsyncClient:
        return httpx.AsyncClient(timeout=self._timeout, transport=self._transport)

    async def _exchange_code(self, client: httpx.AsyncClient, code: str) -> TokenResponse:
        if not code:
            raise ValueError("authorization code is required")

        data = {
            "code": code,
            "client_id": self._client_id,
            "client_secret": self._client_secret,
            "redirect_uri": self._redirect_uri,
            "grant_type": "authorization_code",
        }
        try:
            response = await client.post(
                TOKEN_URL,
                data=data,
                headers={"Accept": "application/json"},
            )
        except httpx.DecodingError as e:
            logger.warning("google_token_exchange_failed", stage="token", error=type(e).__name__)
            raise DecodeError("token response body could not be decoded", stage="token") from e
        except httpx.RequestError as e:
            logger.warning("google_token_exchange_failed", stage="token", error=type(e).__name__)
            raise NetworkError("token request could not be completed", stage="token") from e

        return _parse(response, TokenResponse, stage="token")

    async def _fetch_userinfo(self, client: httpx.AsyncClient, access_token: str) -> UserInfo:
        try:
            response = await client.get(
                USERINFO_URL,
                headers={"Authorization": f"Bearer {access_token}"},
            )
        except httpx.DecodingError as e:
            logger.warning("google_userinfo_failed", stage="userinfo", error=type(e).__name__)
            raise DecodeError("userinfo response body could not be decoded", stage="userinfo") from e
        except httpx.RequestError as e:
            logger.warning("google_userinfo_failed", stage="userinfo", error=type(e).__name__)
            raise NetworkError("userinfo request could not be completed", stage="userinfo") from e

        userinfo = _parse(response, UserInfo, stage="userinfo")
        logger.info("google_userinfo_fetched", sub=userinfo.sub)
        return userinfo


def _parse(response: httpx.Response, model, stage: str):
    """Validate a Google response into ``model`` or raise the matching error."""
    if not response.is_success:
        error, description = _error_fields(response)
        logger.warning(
            "google_token_exchange_failed" if stage == "token" else "google_userinfo_failed",
            stage=stage,
            status_code=response.status_code,
            error=error,
        )
        raise UpstreamError(stage, response.status_code, error, description)

    try:
        payload = response.json()
    except ValueError as e:
        raise DecodeError(f"{stage} response is not valid JSON", stage=stage) from e

    try:
        return model.model_validate(payload)
    except ValidationError as e:
        raise DecodeError(
            f"{stage} response does not match {model.__name__}", stage=stage
        ) from e


def _error_fields(response: httpx.Response):
    # Token errors look like {"error": "invalid_grant", "error_description": ...};
    # Google API errors nest them as {"error": {"status": ..., "message": ...}}.
    try:
        body = response.json()
    except ValueError:
        return None, None
    if not isinstance(body, dict):
        return None, None

    error = body.get("error")
    description = body.get("error_description")
    if isinstance(error, dict):
        description = description or error.get("message")
        error = error.get("status")
    return (
        str(error) if error is not None else None,
        str(description) if description is not None else None,
    )
