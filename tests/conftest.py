import httpx
import pytest

from google_login import Google

CLIENT_ID = "dummy-client-id.apps.googleusercontent.com"
CLIENT_SECRET = "dummy-client-secret"
REDIRECT_URI = "http://localhost:8000/auth/google/callback"


class GoogleStub:
    """
    Fake Google endpoints for httpx.MockTransport.

    Records every request so tests can assert which endpoints were hit.
    """

    def __init__(self, token_response=None, userinfo_response=None):
        self.token_response = token_response or httpx.Response(
            200, json={"access_token": "abc", "token_type": "Bearer", "expires_in": 3599}
        )
        self.userinfo_response = userinfo_response or httpx.Response(
            200, json={"sub": "123", "email": "a@b.com", "email_verified": True}
        )
        self.requests = []

    def __call__(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        if request.url.host == "oauth2.googleapis.com" and request.url.path == "/token":
            return self.token_response
        if request.url.host == "www.googleapis.com" and request.url.path == "/oauth2/v3/userinfo":
            return self.userinfo_response
        return httpx.Response(404)

    def hits(self, path: str) -> list:
        return [r for r in self.requests if r.url.path == path]


@pytest.fixture
def google_stub():
    return GoogleStub()


@pytest.fixture
def make_google():
    def _make(handler, **kwargs):
        return Google(
            CLIENT_ID,
            CLIENT_SECRET,
            REDIRECT_URI,
            transport=httpx.MockTransport(handler),
            **kwargs,
        )
    return _make
