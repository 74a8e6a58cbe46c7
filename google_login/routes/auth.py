"""
Authentication routes for Google OAuth.

SECURITY: the OAuth state is kept in the signed session cookie and is
single-use. Authorization codes and tokens never appear in responses.
"""
from typing import Optional

from fastapi import APIRouter, Depends, HTTPException, Request, status
from fastapi.responses import RedirectResponse

from google_login.client import Google, generate_state
from google_login.errors import (
    ConfigurationError,
    DecodeError,
    NetworkError,
    UpstreamError,
)
from google_login.logging_config import get_logger
from google_login.models import UserInfo
from google_login.sentry_config import capture_exception

router = APIRouter(prefix="/auth", tags=["Authentication"])

STATE_SESSION_KEY = "google_oauth_state"


def get_google(request: Request) -> Google:
    """
    Dependency that builds the Google client from the app settings.

    Raises 500 if the GOOGLE_* settings are incomplete.
    """
    try:
        return Google.from_settings(request.app.state.settings)
    except ConfigurationError as e:
        get_logger(route=request.url.path).error("google_oauth_not_configured", error=str(e))
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Google login is not configured"
        )


@router.get("/login/google")
async def login_google(request: Request, google: Google = Depends(get_google)):
    """
    Redirect user to Google OAuth login page.
    """
    state = generate_state()
    request.session[STATE_SESSION_KEY] = state
    return RedirectResponse(url=google.get_redirect_url(state=state))


@router.get("/google/callback", response_model=UserInfo)
async def google_callback(
    request: Request,
    code: Optional[str] = None,
    state: Optional[str] = None,
    error: Optional[str] = None,
    google: Google = Depends(get_google),
):
    """
    Handle Google OAuth callback (server-side flow).

    Returns the signed-in user's profile.
    """
    log = get_logger(route=request.url.path)

    # State is consumed whether or not it matches
    expected_state = request.session.pop(STATE_SESSION_KEY, None)

    if error:
        log.info("google_consent_denied", error=error)
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail=f"Google sign-in was not completed: {error}"
        )

    if not state or not expected_state or state != expected_state:
        log.warning("google_oauth_state_mismatch")
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="Invalid OAuth state"
        )

    if not code:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="Missing authorization code"
        )

    try:
        return await google.get_userinfo(code)
    except UpstreamError as e:
        log.warning(
            "google_login_rejected",
            stage=e.stage,
            status_code=e.status_code,
            error=e.error
        )
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Google rejected the sign-in"
        )
    except NetworkError as e:
        capture_exception(e)
        raise HTTPException(
            status_code=status.HTTP_502_BAD_GATEWAY,
            detail="Could not reach Google"
        )
    except DecodeError as e:
        log.error("google_response_invalid", stage=e.stage, error=str(e))
        raise HTTPException(
            status_code=status.HTTP_502_BAD_GATEWAY,
            detail="Unexpected response from Google"
        )
